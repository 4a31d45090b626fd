from __future__ import annotations

"""Permutation-based selection with a fresh random source per call."""

import random
import time
from typing import Callable, List, Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    def shuffle(self, x: list) -> None: ...


RandomFactory = Callable[[], RandomSource]


def fresh_random() -> random.Random:
    """Return a new generator seeded from the current time in nanoseconds."""
    return random.Random(time.time_ns())


def permutation(n: int, rng: RandomSource) -> List[int]:
    """Return a uniform random permutation of ``range(n)``."""
    if n < 0:
        raise ValueError(f"permutation size must be >= 0, got {n}")
    indexes = list(range(n))
    rng.shuffle(indexes)
    return indexes


def select_permuted(items: Sequence[T], count: int, rng: RandomSource) -> List[T]:
    """Reorder the first ``count`` entries of ``items`` by a random permutation.

    ``count`` is clamped to ``len(items)``. Entries at positions ``>= count``
    are never selected: the permutation covers ``range(count)`` only, not the
    whole sequence.
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    count = min(count, len(items))
    return [items[i] for i in permutation(count, rng)]


def pick_one(options: Sequence[T], rng: RandomSource) -> T:
    """Return the option at the first index of a random permutation."""
    if not options:
        raise ValueError("cannot pick from an empty sequence")
    return options[permutation(len(options), rng)[0]]


__all__ = [
    "RandomFactory",
    "RandomSource",
    "fresh_random",
    "permutation",
    "pick_one",
    "select_permuted",
]
