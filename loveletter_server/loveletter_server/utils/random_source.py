"""Randomness capability passed to the engine at round start."""

import random
from typing import Callable, Sequence, TypeVar

T = TypeVar("T")

Shuffle = Callable[[list[T]], list[T]]
PickRandom = Callable[[list[T]], T]


class RandomSource:
    """Shuffle and uniform pick backed by a `random.Random` instance.

    Pass a seed for reproducible games.
    """

    def __init__(self, seed: int | None = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Return a shuffled copy of the items."""
        shuffled = list(items)
        self._rng.shuffle(shuffled)
        return shuffled

    def pick(self, items: Sequence[T]) -> T:
        """Pick one item uniformly at random."""
        return self._rng.choice(list(items))
