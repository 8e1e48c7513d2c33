# rotation_scheduler/genetic_algorithm/population.py
"""
Fixed-size population of chromosomes.

The declared size is an invariant: replace_with tops up with fresh random
chromosomes or truncates, so it never drifts between generations.
"""

import logging
from typing import Callable, Iterable, List, Optional

import numpy as np

from .chromosome import Chromosome
from .random_source import RandomSource, ensure_random_source

logger = logging.getLogger(__name__)

ChromosomeFactory = Callable[[], Chromosome]


class Population:
    def __init__(
        self,
        size: int,
        factory: ChromosomeFactory,
        rng: Optional[RandomSource] = None,
        chromosomes: Optional[Iterable[Chromosome]] = None,
    ):
        if size < 1:
            raise ValueError(f"Population size must be positive, got {size}")
        self.size = size
        self.factory = factory
        self.rng = ensure_random_source(rng)
        self.chromosomes: List[Chromosome] = []
        self.replace_with(list(chromosomes) if chromosomes is not None else [])

    def __len__(self) -> int:
        return len(self.chromosomes)

    def __iter__(self):
        return iter(self.chromosomes)

    def __getitem__(self, index):
        return self.chromosomes[index]

    def sort(self) -> None:
        """Order by cached fitness, best first. Stable for equal fitness."""
        self.chromosomes.sort(key=lambda c: c.fitness, reverse=True)

    def get_fittest(self) -> Chromosome:
        return max(self.chromosomes, key=lambda c: c.fitness)

    def get_top(self, k: int) -> List[Chromosome]:
        ranked = sorted(self.chromosomes, key=lambda c: c.fitness, reverse=True)
        return ranked[: max(0, k)]

    def tournament_select(self, tournament_size: int) -> Chromosome:
        """Fittest of a random sample drawn without replacement."""
        k = max(1, min(tournament_size, len(self.chromosomes)))
        contestants = self.rng.sample(self.chromosomes, k)
        return max(contestants, key=lambda c: c.fitness)

    def replace_with(self, chromosomes: List[Chromosome]) -> None:
        if len(chromosomes) > self.size:
            logger.warning(
                f"Received {len(chromosomes)} chromosomes for a population of "
                f"{self.size}; keeping the first {self.size}"
            )
            chromosomes = chromosomes[: self.size]

        filled = list(chromosomes)
        missing = self.size - len(filled)
        if missing and chromosomes:
            logger.debug(f"Filling {missing} population slots with fresh chromosomes")
        filled.extend(self.factory() for _ in range(missing))
        self.chromosomes = filled

    def fitness_values(self) -> np.ndarray:
        return np.fromiter((c.fitness for c in self.chromosomes), dtype=float)

    def statistics(self) -> dict:
        values = self.fitness_values()
        return {
            "best": float(values.max()),
            "average": float(values.mean()),
            "worst": float(values.min()),
            "std": float(values.std()),
        }

    def diversity(self) -> float:
        """Share of distinct gene layouts in the population."""
        distinct = {c.signature() for c in self.chromosomes}
        return len(distinct) / len(self.chromosomes)
