"""Liveness endpoint."""
from fastapi import APIRouter

from quizdesk import __version__

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "version": __version__}
