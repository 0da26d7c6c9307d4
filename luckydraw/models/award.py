"""Award definitions: scheduled awards with fixed rounds and runtime ad-hoc awards."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class AwardKind(str, Enum):
    SCHEDULED = "SCHEDULED"
    AD_HOC = "AD_HOC"


@dataclass(frozen=True)
class ScheduledAward:
    """Award whose quota is split into rounds of fixed size.

    ``rounds[n]`` is the exact number of winners produced by the n-th round.
    """

    id: str
    name: str
    quota: int
    rounds: tuple[int, ...]
    kind: AwardKind = field(default=AwardKind.SCHEDULED, init=False)

    def round_plan(self) -> tuple[int, ...]:
        return self.rounds


@dataclass(frozen=True)
class AdHocAward:
    """Award created at runtime; always drawn as a single round of everything left."""

    id: str
    name: str
    quota: int
    kind: AwardKind = field(default=AwardKind.AD_HOC, init=False)

    def round_plan(self) -> tuple[int, ...]:
        return (self.quota,)


Award = ScheduledAward | AdHocAward
