"""Pick k distinct winners from the undrawn candidates."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from luckydraw.errors import InsufficientCandidatesError
from luckydraw.services.randomness import RandomnessSource

T = TypeVar("T")

# Pools up to this size are fully shuffled; larger pools use a reservoir.
SHUFFLE_THRESHOLD = 1000


class Sampler:
    """Selects winners with Fisher-Yates for small pools and reservoir sampling for large ones."""

    def __init__(self, randomness: RandomnessSource, shuffle_threshold: int = SHUFFLE_THRESHOLD) -> None:
        self._random = randomness
        self._threshold = shuffle_threshold

    def sample(self, candidates: Sequence[T], k: int) -> list[T]:
        if k < 0:
            raise ValueError(f"k must be >= 0, got {k}")
        if k > len(candidates):
            raise InsufficientCandidatesError(k, len(candidates))
        if k == 0:
            return []

        if len(candidates) <= self._threshold:
            return self.shuffle(candidates)[:k]
        return self._reservoir(candidates, k)

    def shuffle(self, candidates: Sequence[T]) -> list[T]:
        """Knuth shuffle of a copy; every permutation equally likely."""

        shuffled = list(candidates)
        for i in range(len(shuffled) - 1, 0, -1):
            j = self._random.next_int(i + 1)
            shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
        return shuffled

    def _reservoir(self, candidates: Sequence[T], k: int) -> list[T]:
        reservoir = list(candidates[:k])
        for i in range(k, len(candidates)):
            j = self._random.next_int(i + 1)
            if j < k:
                reservoir[j] = candidates[i]
        return reservoir
