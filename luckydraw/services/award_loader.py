"""Load award definitions from a JSON file or the built-in defaults."""

from __future__ import annotations

import json
import logging
import pathlib
from collections.abc import Mapping

from marshmallow import ValidationError as MarshmallowValidationError

from luckydraw.config import DEFAULT_AWARDS
from luckydraw.errors import InvalidAwardConfigError
from luckydraw.models import ScheduledAward
from luckydraw.schemas.award import AwardsFileSchema

logger = logging.getLogger(__name__)

_schema = AwardsFileSchema()


def awards_from_mapping(mapping: Mapping[str, Mapping]) -> list[ScheduledAward]:
    """Validate ``{award_id: {name, quota, rounds}}`` and build awards in mapping order."""

    try:
        data = _schema.load({"awards": dict(mapping)})
    except MarshmallowValidationError as exc:
        raise InvalidAwardConfigError(details=exc.messages) from exc

    return [
        ScheduledAward(
            id=str(award_id),
            name=str(cfg["name"]),
            quota=int(cfg["quota"]),
            rounds=tuple(int(r) for r in cfg["rounds"]),
        )
        for award_id, cfg in data["awards"].items()
    ]


def load_awards(path: str | None = None) -> list[ScheduledAward]:
    if not path:
        return awards_from_mapping(DEFAULT_AWARDS)

    file_path = pathlib.Path(path)
    try:
        raw = json.loads(file_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise InvalidAwardConfigError(
            message=f"Could not read awards file {file_path}",
            details=str(exc),
        ) from exc

    # Accept both {"awards": {...}} and a bare mapping.
    if isinstance(raw, dict) and isinstance(raw.get("awards"), dict):
        raw = raw["awards"]
    if not isinstance(raw, dict):
        raise InvalidAwardConfigError(message="Awards file must contain a JSON object")

    awards = awards_from_mapping(raw)
    logger.info("Loaded %s awards from %s", len(awards), file_path)
    return awards
