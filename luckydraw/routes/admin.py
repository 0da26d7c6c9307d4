"""Administrative routes."""

from __future__ import annotations

from flask import Blueprint

from luckydraw.engine import get_engine
from luckydraw.utils.responses import ok

admin_bp = Blueprint("admin", __name__)


@admin_bp.post("/reset")
def reset_draw_state():
    """Clear every winner. Imported numbers and awards are kept."""

    engine = get_engine()
    engine.reset_all_draw_state()
    return ok({"pool_size": engine.pool.size, "total_drawn": engine.ledger.total_drawn()})
