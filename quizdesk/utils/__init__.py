"""Utility modules."""
from quizdesk.utils.json_utils import json_dump, json_load, ndjson_dump
from quizdesk.utils.time_utils import format_countdown, parse_iso_timestamp
from quizdesk.utils.validation import validate_id

__all__ = [
    "json_dump",
    "json_load",
    "ndjson_dump",
    "format_countdown",
    "parse_iso_timestamp",
    "validate_id",
]
