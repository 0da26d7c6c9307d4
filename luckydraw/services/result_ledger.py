"""Append-only record of committed winners."""

from __future__ import annotations

from luckydraw.models import WinnerRecord


class ResultLedger:
    def __init__(self) -> None:
        self._records: list[WinnerRecord] = []

    def append(self, record: WinnerRecord) -> None:
        if record is None or not record.identifier or not record.award_id:
            raise ValueError("WinnerRecord requires identifier and award_id")
        self._records.append(record)

    def by_award(self, award_id: str) -> list[WinnerRecord]:
        return [r for r in self._records if r.award_id == award_id]

    def records(self) -> list[WinnerRecord]:
        return list(self._records)

    def total_drawn(self) -> int:
        return len(self._records)

    def clear(self) -> None:
        self._records.clear()
