# rotation_scheduler/genetic_algorithm/operators.py

"""
Genetic operators for weekly schedules, registered on a DEAP toolbox.

Crossover is uniform per activity: each child takes every gene from one parent
or the other on a coin flip, then gets repaired and has slot collisions
resolved. Mutation either swaps two activities' slots or moves one activity
to a free slot outside its conflicts. Frozen (locked) genes are never moved
by either operator.
"""

import logging
from typing import Callable, Iterable, List, Optional, Tuple

from deap import base

from .chromosome import Chromosome, PlacementTier, choose_slot
from .population import Population
from .random_source import RandomSource, ensure_random_source

logger = logging.getLogger(__name__)


class UniformGeneCrossover:
    """Per-activity coin-flip crossover producing two repaired children."""

    def __init__(
        self, rng: Optional[RandomSource] = None, frozen_ids: Iterable[str] = ()
    ):
        self.rng = ensure_random_source(rng)
        self.frozen_ids = frozenset(frozen_ids)

    def __call__(
        self, first: Chromosome, second: Chromosome
    ) -> Tuple[Chromosome, Chromosome]:
        first_genes = {g.activity_id: g for g in first.genes}
        second_genes = {g.activity_id: g for g in second.genes}

        child_a, child_b = [], []
        for activity in first.activities:
            from_first = first_genes.get(activity.id)
            from_second = second_genes.get(activity.id)
            if self.rng.chance(0.5):
                from_first, from_second = from_second, from_first
            if from_first is not None:
                child_a.append(from_first)
            if from_second is not None:
                child_b.append(from_second)

        offspring = []
        for parent, genes in ((first, child_a), (second, child_b)):
            child = parent.clone()
            child.set_genes(genes)
            moved = child.resolve_collisions(self.frozen_ids)
            if moved:
                logger.debug(f"Crossover resolved {moved} slot collisions")
            offspring.append(child)
        return offspring[0], offspring[1]


class ScheduleMutation:
    """One elementary move: swap two slots or reassign one activity."""

    def __init__(
        self,
        rng: Optional[RandomSource] = None,
        frozen_ids: Iterable[str] = (),
        swap_probability: float = 0.5,
    ):
        self.rng = ensure_random_source(rng)
        self.frozen_ids = frozenset(frozen_ids)
        self.swap_probability = swap_probability

    def __call__(self, chromosome: Chromosome) -> Chromosome:
        movable = [
            g.activity_id
            for g in chromosome.genes
            if g.activity_id not in self.frozen_ids
        ]
        if not movable:
            return chromosome

        if len(movable) >= 2 and self.rng.chance(self.swap_probability):
            self._swap(chromosome, movable)
        elif not self._reassign(chromosome, movable) and len(movable) >= 2:
            self._swap(chromosome, movable)
        return chromosome

    def _swap(self, chromosome: Chromosome, movable: List[str]) -> None:
        first_id, second_id = self.rng.sample(movable, 2)
        chromosome.swap_assignments(first_id, second_id)

    def _reassign(self, chromosome: Chromosome, movable: List[str]) -> bool:
        activity_id = self.rng.choice(movable)
        activity = chromosome.get_activity(activity_id)
        if activity is None:
            return False

        # The activity's current position counts as occupied so the move is real
        occupied = chromosome.occupied_keys()
        placement = choose_slot(
            activity, occupied, self.rng, rotation_start=chromosome.rotation_start
        )
        if placement.tier is not PlacementTier.FREE_AND_LEGAL:
            return False
        return chromosome.update_assignment(activity_id, placement.time_slot)


class TournamentSelection:
    def __init__(self, tournament_size: int):
        self.tournament_size = tournament_size

    def __call__(self, population: Population, count: int = 1) -> List[Chromosome]:
        return [
            population.tournament_select(self.tournament_size) for _ in range(count)
        ]


def create_toolbox(
    rng: RandomSource,
    tournament_size: int,
    frozen_ids: Iterable[str] = (),
    map_fn: Callable = map,
) -> base.Toolbox:
    """Toolbox with the schedule operators registered under DEAP's names."""
    frozen = frozenset(frozen_ids)
    toolbox = base.Toolbox()

    toolbox.register("mate", UniformGeneCrossover(rng, frozen))
    toolbox.register("mutate", ScheduleMutation(rng, frozen))
    toolbox.register("select", TournamentSelection(tournament_size))
    toolbox.register("clone", lambda chromosome: chromosome.clone())
    toolbox.register("map", map_fn)

    return toolbox
