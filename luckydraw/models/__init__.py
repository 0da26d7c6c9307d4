"""Domain value objects for the draw engine."""

from luckydraw.models.award import AdHocAward, Award, AwardKind, ScheduledAward
from luckydraw.models.winner import AwardProgress, RoundResult, WinnerRecord

__all__ = [
    "AdHocAward",
    "Award",
    "AwardKind",
    "AwardProgress",
    "RoundResult",
    "ScheduledAward",
    "WinnerRecord",
]
