"""Validation utilities."""
from pathlib import Path


def validate_id(name: str, value: str) -> str:
    """Validate ID string (no path traversal)."""
    if not isinstance(value, str):
        raise ValueError(f"{name} is required")
    cleaned = value.strip()
    if not cleaned:
        raise ValueError(f"{name} is required")
    if Path(cleaned).name != cleaned or "/" in cleaned or "\\" in cleaned:
        raise ValueError(f"Invalid {name}")
    return cleaned
