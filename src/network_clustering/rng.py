from __future__ import annotations

import random
from collections.abc import MutableSequence, Sequence
from typing import TypeVar

T = TypeVar("T")


class SeededRandom:
    """Random source owned by a single clustering call.

    Strategies never touch the module-level ``random`` state, so two runs with
    the same seed draw the same sequence regardless of what else is running.
    """

    def __init__(self, seed: int) -> None:
        self._seed = seed
        self._rng = random.Random(seed)

    def seed(self) -> int:
        return self._seed

    def next(self) -> float:
        return self._rng.random()

    def randrange(self, stop: int) -> int:
        return self._rng.randrange(stop)

    def shuffle(self, items: MutableSequence[T]) -> None:
        self._rng.shuffle(items)

    def shuffled(self, items: Sequence[T]) -> list[T]:
        out = list(items)
        self._rng.shuffle(out)
        return out

    def sample(self, items: Sequence[T], k: int) -> list[T]:
        return self._rng.sample(list(items), k=k)

    def weighted_index(self, weights: Sequence[float]) -> int:
        total = sum(weights)
        if total <= 0:
            return self._rng.randrange(len(weights))
        target = self._rng.random() * total
        acc = 0.0
        for idx, weight in enumerate(weights):
            acc += weight
            if target < acc:
                return idx
        return len(weights) - 1
