"""Award and round routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from luckydraw.engine import get_engine
from luckydraw.models import ScheduledAward
from luckydraw.schemas.award import (
    AdHocAwardCreateSchema,
    AwardCreateSchema,
    AwardProgressSchema,
    AwardSchema,
)
from luckydraw.schemas.draw import RoundOpenedSchema, RoundResultSchema
from luckydraw.utils.responses import ok

awards_bp = Blueprint("awards", __name__)

_award_schema = AwardSchema()
_progress_schema = AwardProgressSchema()
_progress_list_schema = AwardProgressSchema(many=True)
_create_schema = AwardCreateSchema()
_ad_hoc_schema = AdHocAwardCreateSchema()
_opened_schema = RoundOpenedSchema()
_result_schema = RoundResultSchema()


@awards_bp.get("/awards")
def list_awards():
    """List every award with its progress counters."""

    engine = get_engine()
    progress = [engine.progress(award.id) for award in engine.awards()]
    return ok(_progress_list_schema.dump(progress))


@awards_bp.post("/awards")
def register_award():
    payload = request.get_json(silent=True) or {}
    data = _create_schema.load(payload)

    award = get_engine().register_award(
        ScheduledAward(
            id=str(data["id"]),
            name=str(data["name"]),
            quota=int(data["quota"]),
            rounds=tuple(int(r) for r in data["rounds"]),
        )
    )
    return ok(_award_schema.dump(award), status_code=201)


@awards_bp.post("/awards/ad-hoc")
def create_ad_hoc_award():
    payload = request.get_json(silent=True) or {}
    data = _ad_hoc_schema.load(payload)

    award = get_engine().create_ad_hoc_award(str(data["name"]), int(data["quota"]))
    return ok(_award_schema.dump(award), status_code=201)


@awards_bp.get("/awards/<award_id>")
def get_award(award_id: str):
    return ok(_progress_schema.dump(get_engine().progress(award_id)))


@awards_bp.post("/awards/<award_id>/rounds")
def begin_round(award_id: str):
    """Open the next round; winners are picked when it is committed."""

    engine = get_engine()
    count = engine.begin_round(award_id)
    award = engine.get_award(award_id)
    return ok(
        _opened_schema.dump(
            {
                "award_id": award_id,
                "round_size": count,
                "drawn_count": engine.drawn_count(award_id),
                "quota": award.quota,
            }
        ),
        status_code=201,
    )


@awards_bp.post("/awards/<award_id>/rounds/commit")
def commit_round(award_id: str):
    result = get_engine().commit_round(award_id)
    return ok(_result_schema.dump(result))


@awards_bp.post("/awards/<award_id>/draw")
def draw(award_id: str):
    """Begin and commit a round in one request."""

    result = get_engine().draw(award_id)
    return ok(_result_schema.dump(result))
