"""Health check routes."""

from __future__ import annotations

from flask import Blueprint

from luckydraw.engine import get_engine
from luckydraw.utils.responses import ok

health_bp = Blueprint("health", __name__)


@health_bp.get("/health")
def health_check():
    """Health check endpoint."""

    engine = get_engine()
    return ok(
        {
            "status": "ok",
            "strong_random": engine.randomness.strong_available,
        }
    )
