"""Committed draw results."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class WinnerRecord:
    identifier: str
    award_id: str
    award_name: str
    timestamp: datetime


@dataclass(frozen=True)
class RoundResult:
    """What a caller gets back after a committed round."""

    award_id: str
    winners: list[str]
    round_size: int
    drawn_count: int
    quota: int
    completed: bool


@dataclass(frozen=True)
class AwardProgress:
    award_id: str
    name: str
    kind: str
    quota: int
    rounds: tuple[int, ...]
    drawn_count: int
    completed: bool
    rolling: bool
    next_round_size: int
    current_round: int | None
    winners: list[WinnerRecord]
