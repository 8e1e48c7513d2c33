# rotation_scheduler/genetic_algorithm/random_source.py

"""
Single injectable source of randomness for the genetic algorithm.

Every stochastic step (placement, crossover, mutation, tournament, subset
selection) draws from one RandomSource so a seed makes a run reproducible.
"""

import random
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


class RandomSource:
    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._random = random.Random(seed)

    def chance(self, probability: float) -> bool:
        """True with the given probability."""
        return self._random.random() < probability

    def choice(self, items: Sequence[T]) -> T:
        return self._random.choice(items)

    def sample(self, items: Sequence[T], k: int) -> List[T]:
        return self._random.sample(list(items), k)

    def shuffled(self, items: Sequence[T]) -> List[T]:
        copy = list(items)
        self._random.shuffle(copy)
        return copy


def ensure_random_source(rng: Optional[RandomSource]) -> RandomSource:
    return rng if rng is not None else RandomSource()
