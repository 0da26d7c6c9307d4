"""Per-award round state machine: IDLE -> ROLLING -> COMMITTED -> IDLE."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from luckydraw.errors import RoundInProgressError, RoundNotStartedError
from luckydraw.models import WinnerRecord


class SessionState(str, Enum):
    IDLE = "IDLE"
    ROLLING = "ROLLING"
    COMMITTED = "COMMITTED"


@dataclass
class DrawState:
    """Progress of one award. Only a committed round or a full reset changes it."""

    award_id: str
    drawn_count: int = 0
    completed: bool = False
    winners: list[WinnerRecord] = field(default_factory=list)

    def clear(self) -> None:
        self.drawn_count = 0
        self.completed = False
        self.winners = []


@dataclass
class DrawSession:
    """One round of one award.

    The target size is fixed when the round begins; winners are only selected
    when the round is committed.
    """

    award_id: str
    state: SessionState = SessionState.IDLE
    target_count: int = 0

    @property
    def rolling(self) -> bool:
        return self.state is SessionState.ROLLING

    def begin(self, count: int) -> None:
        if self.state is SessionState.ROLLING:
            raise RoundInProgressError(self.award_id)
        self.target_count = count
        self.state = SessionState.ROLLING

    def require_rolling(self) -> int:
        if self.state is not SessionState.ROLLING:
            raise RoundNotStartedError(self.award_id)
        return self.target_count

    def mark_committed(self) -> None:
        self.state = SessionState.COMMITTED
        # Committed rounds fall straight back to idle.
        self.close()

    def close(self) -> None:
        self.state = SessionState.IDLE
        self.target_count = 0
