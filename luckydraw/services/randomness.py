"""Random integers for the draw, mixing the OS CSPRNG with cheap host entropy."""

from __future__ import annotations

import logging
import math
import os
import random
import secrets
import time
from datetime import datetime
from threading import Lock

from luckydraw.errors import InvalidRangeError

logger = logging.getLogger(__name__)

LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = 2**32

ENTROPY_CAPACITY = 100
ENTROPY_KEEP = 50

# Share of ``max`` the entropy sample may shift the strong value by.
PERTURBATION_RATIO = 0.1


def _strong_source_available() -> bool:
    try:
        os.urandom(4)
    except NotImplementedError:
        return False
    return True


class RandomnessSource:
    """Uniform-ish integers in ``[0, max)``.

    The primary path reduces a 32-bit CSPRNG value modulo ``max`` and shifts
    it by a fraction of the latest entropy sample. Without a strong source the
    object falls back to a 32-bit LCG averaged with :func:`random.random`.
    """

    def __init__(self, *, prefer_strong: bool = True, seed: int | None = None) -> None:
        self._lock = Lock()
        self._strong = prefer_strong and _strong_source_available()
        self._seed = (seed if seed is not None else int(time.time() * 1000)) % LCG_MODULUS
        self._entropy: list[float] = []
        if not self._strong:
            logger.warning("Strong random source unavailable or disabled; using LCG fallback")

    @property
    def strong_available(self) -> bool:
        return self._strong

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def entropy_pool(self) -> tuple[float, ...]:
        return tuple(self._entropy)

    def collect_entropy(self) -> None:
        """Append a batch of rapidly-changing host signals to the ring buffer."""

        now = datetime.now()
        samples = [
            (time.perf_counter() * 1000) % 1,
            time.time() % 1,
            random.random(),
            (time.process_time() * 1000) % 1,
            now.microsecond / 1_000_000,
        ]
        with self._lock:
            self._entropy.extend(samples)
            if len(self._entropy) > ENTROPY_CAPACITY:
                self._entropy = self._entropy[-ENTROPY_KEEP:]

    def next_int(self, max_value: int) -> int:
        if max_value <= 0:
            raise InvalidRangeError(f"max must be > 0, got {max_value}")

        if not self._strong:
            return self._lcg_int(max_value)

        value = secrets.randbits(32) % max_value
        self.collect_entropy()
        with self._lock:
            sample = self._entropy[-1] if self._entropy else 0.0
        perturbation = math.floor(sample * max_value * PERTURBATION_RATIO)
        return (value + perturbation) % max_value

    def _lcg_int(self, max_value: int) -> int:
        with self._lock:
            self._seed = (LCG_MULTIPLIER * self._seed + LCG_INCREMENT) % LCG_MODULUS
            lcg = self._seed / LCG_MODULUS
        combined = (lcg + random.random()) / 2
        # combined < 1, but guard float rounding at the top edge.
        return min(math.floor(combined * max_value), max_value - 1)
