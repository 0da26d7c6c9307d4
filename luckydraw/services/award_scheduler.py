"""Round-size resolution for scheduled and ad-hoc awards."""

from __future__ import annotations

import logging

from luckydraw.errors import InvalidAwardConfigError
from luckydraw.models import Award, AwardKind

logger = logging.getLogger(__name__)


class AwardScheduler:
    """Answers "how many winners must the next round of this award produce"."""

    @staticmethod
    def validate(award: Award) -> None:
        if not str(award.id).strip():
            raise InvalidAwardConfigError(message="Award id must not be empty")
        if not str(award.name).strip():
            raise InvalidAwardConfigError(message=f"Award {award.id!r} needs a name")
        if award.quota < 1:
            raise InvalidAwardConfigError(
                message=f"Award {award.id!r} quota must be >= 1",
                details={"quota": award.quota},
            )
        if award.kind is AwardKind.AD_HOC:
            return

        rounds = list(award.rounds)
        if not rounds:
            raise InvalidAwardConfigError(
                message=f"Award {award.id!r} needs at least one round",
                details={"rounds": rounds},
            )
        if any(int(r) < 1 for r in rounds):
            raise InvalidAwardConfigError(
                message=f"Award {award.id!r} rounds must all be positive",
                details={"rounds": rounds},
            )
        if sum(rounds) != award.quota:
            raise InvalidAwardConfigError(
                message=f"Award {award.id!r} rounds sum to {sum(rounds)}, quota is {award.quota}",
                details={"rounds": rounds, "quota": award.quota},
            )

    def next_round_size(self, award: Award, drawn_count: int) -> int:
        remaining = award.quota - drawn_count
        if remaining <= 0:
            return 0
        if award.kind is AwardKind.AD_HOC:
            return remaining

        accumulated = 0
        for size in award.rounds:
            previous = accumulated
            accumulated += size
            if previous <= drawn_count < accumulated:
                return size - (drawn_count - previous)

        # Only reachable if drawn_count drifted out of step with the rounds.
        logger.error(
            "Round lookup failed for award=%s drawn=%s rounds=%s; clamping first round",
            award.id,
            drawn_count,
            list(award.rounds),
        )
        return min(award.rounds[0], remaining)

    def round_number(self, award: Award, drawn_count: int) -> int | None:
        """1-based index of the round the next draw belongs to, ``None`` once complete."""

        if drawn_count >= award.quota:
            return None
        accumulated = 0
        for index, size in enumerate(award.round_plan(), start=1):
            accumulated += size
            if drawn_count < accumulated:
                return index
        return None
