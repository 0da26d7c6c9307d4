"""The drawable identifiers and the set already won."""

from __future__ import annotations

import math
import re
from collections import Counter
from collections.abc import Iterable

from luckydraw.errors import AlreadyDrawnError, InvalidPoolError

# Plain decimal or exponent notation; "1_000", "inf" and "nan" are not numbers.
_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number(value: str) -> float | None:
    """Return the numeric value of ``value`` or ``None`` when it is not a finite number."""

    text = value.strip()
    if not _NUMBER_RE.fullmatch(text):
        return None
    number = float(text)
    if not math.isfinite(number):
        return None
    return number


def identifier_sort_key(identifier: str) -> tuple:
    # Numbers compare numerically and come first; everything else is lexicographic.
    number = parse_number(identifier)
    if number is not None:
        return (0, number, identifier)
    return (1, 0.0, identifier)


def sort_identifiers(identifiers: Iterable[str]) -> list[str]:
    return sorted((str(i) for i in identifiers), key=identifier_sort_key)


class NumberPool:
    """Ordered, de-duplicated identifiers plus the drawn subset.

    Every identifier ever drawn is retired until :meth:`reset`, even when a
    reload drops it from the pool, so it can never be drawn a second time.
    Only :class:`~luckydraw.services.draw_engine.DrawEngine` mutates a pool.
    """

    def __init__(self, identifiers: Iterable[str] | None = None) -> None:
        self._identifiers: list[str] = []
        self._members: set[str] = set()
        self._retired: set[str] = set()
        if identifiers is not None:
            self.load(identifiers)

    def load(self, identifiers: Iterable[str]) -> None:
        ordered: list[str] = []
        seen: set[str] = set()
        for raw in identifiers:
            if raw is None:
                continue
            identifier = str(raw)
            if not identifier.strip() or identifier in seen:
                continue
            seen.add(identifier)
            ordered.append(identifier)

        if not ordered:
            raise InvalidPoolError()

        self._identifiers = ordered
        self._members = seen

    def available(self) -> list[str]:
        return [i for i in self._identifiers if i not in self._retired]

    def mark_drawn(self, identifiers: Iterable[str]) -> None:
        batch = list(identifiers)
        counts = Counter(batch)
        bad = [
            i
            for i in counts
            if counts[i] > 1 or i in self._retired or i not in self._members
        ]
        if bad:
            raise AlreadyDrawnError(bad)
        self._retired.update(batch)

    def reset(self) -> None:
        self._retired.clear()

    def identifiers(self) -> list[str]:
        return list(self._identifiers)

    def is_drawn(self, identifier: str) -> bool:
        """Whether ``identifier`` has won, whether or not it is in the current pool."""

        return identifier in self._retired

    @property
    def size(self) -> int:
        return len(self._identifiers)

    @property
    def drawn_count(self) -> int:
        """Drawn identifiers that are members of the current pool."""

        return len(self._retired & self._members)

    @property
    def retired_count(self) -> int:
        return len(self._retired)

    @property
    def available_count(self) -> int:
        return len(self._identifiers) - self.drawn_count
