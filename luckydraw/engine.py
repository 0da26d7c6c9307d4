"""Draw engine lifecycle for the Flask app.

One engine per application instance; state lives in process memory only.
"""

from __future__ import annotations

from flask import Flask, current_app

from luckydraw.services.award_loader import load_awards
from luckydraw.services.draw_engine import DrawEngine
from luckydraw.services.randomness import RandomnessSource
from luckydraw.services.spreadsheet_service import default_identifiers


def create_draw_engine(
    *,
    awards_file: str | None = None,
    pool_start: int = 1,
    pool_end: int = 180,
    pool_width: int = 3,
    use_strong_random: bool = True,
) -> DrawEngine:
    """Build an engine with the configured awards and the default pool."""

    engine = DrawEngine(randomness=RandomnessSource(prefer_strong=use_strong_random))
    engine.load_pool(default_identifiers(pool_start, pool_end, pool_width))
    for award in load_awards(awards_file):
        engine.register_award(award)
    return engine


def init_engine(app: Flask) -> None:
    """Attach a draw engine to ``app``."""

    app.extensions["draw_engine"] = create_draw_engine(
        awards_file=str(app.config.get("AWARDS_FILE") or "") or None,
        pool_start=int(app.config["DEFAULT_POOL_START"]),
        pool_end=int(app.config["DEFAULT_POOL_END"]),
        pool_width=int(app.config["DEFAULT_POOL_WIDTH"]),
        use_strong_random=bool(app.config.get("USE_STRONG_RANDOM", True)),
    )


def get_engine() -> DrawEngine:
    """Get the draw engine of the current app."""

    engine: DrawEngine | None = current_app.extensions.get("draw_engine")
    if engine is None:
        raise RuntimeError("Draw engine not initialized")
    return engine
