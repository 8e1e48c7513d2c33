# rotation_scheduler/genetic_algorithm/evolution_manager.py

"""
Evolution loop for the weekly scheduler.

Each generation keeps clones of the fittest chromosomes, then fills the rest
of the next generation from tournament-selected parents through crossover and
mutation. Keeping the elite makes the best fitness non-decreasing from one
generation to the next.

Per-generation statistics are gathered with DEAP's Statistics and Logbook.
"""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Sequence

import numpy as np
from deap import tools

from ..config import GeneticAlgorithmConfig
from ..core.problem_model import Activity
from .chromosome import Chromosome
from .fitness import FitnessEvaluator
from .operators import create_toolbox
from .population import Population
from .random_source import RandomSource, ensure_random_source

logger = logging.getLogger(__name__)


@dataclass
class EvolutionStatistics:
    generation: int = 0
    best_fitness: float = 0.0
    average_fitness: float = 0.0
    worst_fitness: float = 0.0
    population_size: int = 0
    hard_violations: int = 0
    diversity: float = 0.0

    def to_dict(self):
        return {
            "generation": self.generation,
            "best_fitness": self.best_fitness,
            "average_fitness": self.average_fitness,
            "worst_fitness": self.worst_fitness,
            "population_size": self.population_size,
            "hard_violations": self.hard_violations,
            "diversity": self.diversity,
        }


@dataclass
class EvolutionResult:
    best: Chromosome
    statistics: EvolutionStatistics
    history: List[EvolutionStatistics] = field(default_factory=list)
    logbook: Optional[tools.Logbook] = None
    cancelled: bool = False
    elapsed_seconds: float = 0.0


def _fitness_of(chromosome: Chromosome):
    return chromosome.fitness


class GeneticAlgorithm:
    """Generational GA with tournament selection and elitism."""

    def __init__(
        self,
        activities: Sequence[Activity],
        evaluator: FitnessEvaluator,
        config: Optional[GeneticAlgorithmConfig] = None,
        rng: Optional[RandomSource] = None,
    ):
        self.activities = list(activities)
        self.evaluator = evaluator
        self.config = config or GeneticAlgorithmConfig()
        self.rng = ensure_random_source(rng)

        self._cancel_event = threading.Event()

        self.stats = tools.Statistics(_fitness_of)
        self.stats.register("max", np.max)
        self.stats.register("avg", np.mean)
        self.stats.register("min", np.min)
        self.stats.register("std", np.std)

    def cancel(self) -> None:
        """Ask a running evolution to stop after the current generation."""
        self._cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def new_chromosome(self) -> Chromosome:
        return Chromosome(
            self.activities,
            rng=self.rng,
            rotation_start=self.evaluator.rotation_start,
        )

    def create_population(
        self,
        chromosomes: Optional[Iterable[Chromosome]] = None,
        factory: Optional[Callable[[], Chromosome]] = None,
    ) -> Population:
        return Population(
            self.config.population_size,
            factory or self.new_chromosome,
            rng=self.rng,
            chromosomes=chromosomes,
        )

    def evolve(self) -> EvolutionResult:
        """Run from a freshly randomized population."""
        logger.info(
            f"Starting evolution: {len(self.activities)} activities, "
            f"population {self.config.population_size}, "
            f"{self.config.generations} generations"
        )
        return self._run(self.create_population(), frozen_ids=())

    def evolve_with_initial_population(
        self,
        seed: Iterable[Chromosome],
        frozen_ids: Iterable[str] = (),
        factory: Optional[Callable[[], Chromosome]] = None,
    ) -> EvolutionResult:
        """
        Run the same loop with a caller supplied generation 0.

        ``frozen_ids`` name genes the operators must never move. ``factory``
        tops up a short seed and should build chromosomes that keep those
        genes in place.
        """
        frozen_ids = frozenset(frozen_ids)
        population = self.create_population(seed, factory=factory)
        logger.info(
            f"Starting seeded evolution with {len(population)} chromosomes, "
            f"{len(frozen_ids)} frozen genes"
        )
        return self._run(population, frozen_ids=frozen_ids)

    def _run(self, population: Population, frozen_ids: Iterable[str]) -> EvolutionResult:
        self._cancel_event.clear()
        started = time.time()
        config = self.config

        executor = None
        map_fn: Callable = map
        if config.enable_parallel_evaluation:
            executor = ThreadPoolExecutor(max_workers=config.max_workers)
            map_fn = executor.map

        toolbox = create_toolbox(
            self.rng, config.tournament_size, frozen_ids=frozen_ids, map_fn=map_fn
        )
        logbook = tools.Logbook()
        logbook.header = ["gen", "nevals"] + self.stats.fields
        history: List[EvolutionStatistics] = []

        try:
            self.evaluator.evaluate_population(population.chromosomes, toolbox.map)
            history.append(self._record(logbook, population, 0))

            for generation in range(1, config.generations + 1):
                if self.cancelled:
                    logger.info(f"Evolution cancelled before generation {generation}")
                    break

                offspring = self._next_generation(population, toolbox)
                population.replace_with(offspring)
                self.evaluator.evaluate_population(population.chromosomes, toolbox.map)
                history.append(self._record(logbook, population, generation))
        finally:
            if executor is not None:
                executor.shutdown(wait=True)

        best = population.get_fittest()
        elapsed = time.time() - started
        logger.info(
            f"Evolution finished after {history[-1].generation} generations in "
            f"{elapsed:.2f}s: best fitness {best.fitness}, "
            f"{best.hard_violations} hard violations"
        )
        return EvolutionResult(
            best=best,
            statistics=history[-1],
            history=history,
            logbook=logbook,
            cancelled=self.cancelled,
            elapsed_seconds=elapsed,
        )

    def _next_generation(self, population: Population, toolbox) -> List[Chromosome]:
        size = self.config.population_size
        elites = population.get_top(self.config.elitism_count)
        next_generation = [toolbox.clone(elite) for elite in elites]

        while len(next_generation) < size:
            first, second = toolbox.select(population, 2)
            if self.rng.chance(self.config.crossover_rate):
                children = list(toolbox.mate(first, second))
            else:
                children = [toolbox.clone(first), toolbox.clone(second)]

            for child in children:
                if len(next_generation) >= size:
                    break
                if self.rng.chance(self.config.mutation_rate):
                    toolbox.mutate(child)
                next_generation.append(child)

        return next_generation

    def _record(
        self, logbook: tools.Logbook, population: Population, generation: int
    ) -> EvolutionStatistics:
        record = self.stats.compile(population.chromosomes)
        logbook.record(gen=generation, nevals=len(population), **record)

        best = population.get_fittest()
        entry = EvolutionStatistics(
            generation=generation,
            best_fitness=float(record["max"]),
            average_fitness=float(record["avg"]),
            worst_fitness=float(record["min"]),
            population_size=len(population),
            hard_violations=best.hard_violations,
            diversity=population.diversity(),
        )
        logger.debug(
            f"Generation {generation}: best={entry.best_fitness:.1f} "
            f"avg={entry.average_fitness:.1f} worst={entry.worst_fitness:.1f} "
            f"hard={entry.hard_violations} diversity={entry.diversity:.2f}"
        )
        return entry
