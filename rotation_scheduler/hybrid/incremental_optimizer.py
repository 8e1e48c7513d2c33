# rotation_scheduler/hybrid/incremental_optimizer.py

"""
Incremental Optimizer for re-solving a schedule around manual edits.
Activities the user locked keep their slot; every other activity is placed
again by the genetic algorithm, starting from a population seeded with the
locked genes.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple
from dataclasses import dataclass, field
from datetime import date

from ..config import GeneticAlgorithmConfig
from ..core.calendar import slot_for_rotation
from ..core.exceptions import LockedAssignmentConflictError
from ..core.problem_model import Activity, Assignment
from ..core.solution import Schedule
from ..core.time_grid import Day, format_time_slot
from ..genetic_algorithm.chromosome import Chromosome, choose_slot
from ..genetic_algorithm.evolution_manager import EvolutionResult, GeneticAlgorithm
from ..genetic_algorithm.fitness import FitnessEvaluator
from ..genetic_algorithm.random_source import RandomSource, ensure_random_source

logger = logging.getLogger(__name__)


@dataclass
class LockedSelection:
    """Locked genes taken from a schedule, plus requested ids it did not contain."""

    assignments: List[Assignment] = field(default_factory=list)
    ignored_ids: List[str] = field(default_factory=list)

    @property
    def locked_ids(self) -> Set[str]:
        return {a.activity_id for a in self.assignments}


def select_locked_assignments(
    schedule: Schedule, locked_ids: Iterable[str]
) -> LockedSelection:
    selection = LockedSelection()
    for activity_id in dict.fromkeys(locked_ids):
        assignment = schedule.get_assignment(activity_id)
        if assignment is None:
            selection.ignored_ids.append(activity_id)
            continue
        selection.assignments.append(
            Assignment(assignment.activity_id, assignment.time_slot)
        )

    if selection.ignored_ids:
        logger.warning(
            f"Ignoring locked ids not present in the schedule: {selection.ignored_ids}"
        )
    return selection


def validate_locked_assignments(
    locked: Sequence[Assignment],
    activities: Dict[str, Activity],
    rotation_start: Optional[date] = None,
) -> None:
    """
    Raise LockedAssignmentConflictError if two locked activities share a slot
    or a locked activity sits on one of its own conflicts.

    With a rotation start, each lock is checked on the date its slot falls on
    in that week, which is where the re-optimized schedule will place it.
    """
    by_position: Dict[Tuple[Day, int], List[str]] = {}
    for assignment in locked:
        by_position.setdefault(assignment.time_slot.key, []).append(
            assignment.activity_id
        )

    for (day, period), activity_ids in by_position.items():
        if len(activity_ids) > 1:
            raise LockedAssignmentConflictError(
                f"Conflict detected in locked assignments: Classes "
                f"{', '.join(activity_ids)} are assigned to the same time slot "
                f"({day.value}, period {period}).",
                activity_ids=activity_ids,
                context={"day": day.value, "period": period},
            )

    for assignment in locked:
        activity = activities.get(assignment.activity_id)
        slot = assignment.time_slot
        if rotation_start is not None:
            slot = slot_for_rotation(slot.without_date(), rotation_start)
        if activity is None or not activity.conflicts_with(slot):
            continue
        conflicts = ", ".join(format_time_slot(s) for s in activity.conflicts)
        raise LockedAssignmentConflictError(
            f"Class {activity.name} ({activity.id}) is locked in a time slot that "
            f"conflicts with its constraints ({format_time_slot(slot)}"
            f" is one of: {conflicts}).",
            activity_ids=[activity.id],
            context={
                "day": slot.day.value,
                "period": slot.period,
            },
        )


def build_seed_chromosome(
    activities: Sequence[Activity],
    locked: Sequence[Assignment],
    rng: RandomSource,
    rotation_start: Optional[date] = None,
) -> Chromosome:
    """Locked genes first, every other activity placed in a free legal slot."""
    genes = [Assignment(a.activity_id, a.time_slot.without_date()) for a in locked]
    occupied = {a.time_slot.key for a in locked}
    locked_ids = {a.activity_id for a in locked}

    for activity in rng.shuffled([a for a in activities if a.id not in locked_ids]):
        placement = choose_slot(activity, occupied, rng, rotation_start=rotation_start)
        occupied.add(placement.time_slot.key)
        genes.append(Assignment(activity.id, placement.time_slot))

    return Chromosome(
        activities, initial_genes=genes, rng=rng, rotation_start=rotation_start
    )


class IncrementalOptimizer:
    """
    Re-optimizes a schedule while keeping a set of locked assignments fixed.

    The mutation rate is raised (and capped) relative to the base
    configuration to explore more around the fixed points.
    """

    def __init__(
        self,
        evaluator: FitnessEvaluator,
        config: Optional[GeneticAlgorithmConfig] = None,
        rng: Optional[RandomSource] = None,
    ):
        self.evaluator = evaluator
        self.base_config = config or GeneticAlgorithmConfig()
        self.rng = ensure_random_source(rng)

    def reoptimization_config(self) -> GeneticAlgorithmConfig:
        return self.base_config.updated(
            mutation_rate=self.base_config.reoptimization_mutation_rate()
        )

    def optimize(
        self,
        activities: Sequence[Activity],
        locked: Sequence[Assignment],
    ) -> EvolutionResult:
        rotation_start = self.evaluator.rotation_start
        validate_locked_assignments(
            locked, {a.id: a for a in activities}, rotation_start
        )

        config = self.reoptimization_config()
        seed = [
            build_seed_chromosome(activities, locked, self.rng, rotation_start)
            for _ in range(config.population_size)
        ]
        logger.info(
            f"Re-optimizing {len(activities)} activities with {len(locked)} locked, "
            f"mutation rate {config.mutation_rate:.2f}"
        )

        ga = GeneticAlgorithm(activities, self.evaluator, config, rng=self.rng)
        frozen = [a.activity_id for a in locked]
        return ga.evolve_with_initial_population(
            seed,
            frozen_ids=frozen,
            factory=lambda: build_seed_chromosome(
                activities, locked, self.rng, rotation_start
            ),
        )
