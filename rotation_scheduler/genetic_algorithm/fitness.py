# rotation_scheduler/genetic_algorithm/fitness.py

"""
Fitness evaluation for weekly schedules.

Scoring starts from a base value. Every broken hard constraint costs a fixed
penalty, every satisfied soft constraint earns a fixed reward, and the result
is floored at zero.

Two checks run regardless of configuration: an activity may not sit on a
slot listed in its own conflicts, and no two activities may share a slot.

With a rotation start, recurring genes are dated within that week before
any check runs, so a one-time conflict only blocks its own date.
"""

import logging
import threading
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Union

from ..config import FitnessConstants
from ..constraints.base_constraint import EvaluationContext
from ..constraints.constraint_registry import ConstraintRegistry
from ..core.calendar import slot_for_rotation
from ..core.constraint_types import (
    ConstraintDefinition,
    ConstraintViolation,
    ViolationType,
)
from ..core.problem_model import Activity, Assignment
from ..core.solution import ValidationResult
from ..core.time_grid import format_time_slot
from .chromosome import Chromosome

logger = logging.getLogger(__name__)

TIME_CONFLICT_ID = "time-conflict"
SLOT_COLLISION_ID = "slot-collision"


@dataclass
class FitnessResult:
    fitness_score: float
    hard_constraint_violations: int = 0
    soft_constraints_satisfied: int = 0
    soft_satisfaction: float = 1.0
    violations: List[ConstraintViolation] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.hard_constraint_violations == 0


class FitnessEvaluator:
    """Scores chromosomes against the activities and configured constraints."""

    def __init__(
        self,
        activities: Sequence[Activity],
        constraints: Optional[Sequence[ConstraintDefinition]] = None,
        constants: Optional[FitnessConstants] = None,
        registry: Optional[ConstraintRegistry] = None,
        rotation_start: Optional[date] = None,
    ):
        self.activities: Dict[str, Activity] = {a.id: a for a in activities}
        self.constraints: List[ConstraintDefinition] = list(constraints or [])
        self.constants = constants or FitnessConstants()
        self.registry = registry or ConstraintRegistry()
        self._evaluators = self.registry.build_all(self.constraints)
        self.soft_constraint_count = sum(
            1 for c in self.constraints if not c.is_hard
        )

        self.rotation_start = rotation_start

        self.evaluation_count = 0
        self._count_lock = threading.Lock()

        logger.debug(
            f"Fitness evaluator ready: {len(self.activities)} activities, "
            f"{len(self.constraints)} constraints"
        )

    def evaluate(self, subject: Union[Chromosome, Iterable[Assignment]]) -> FitnessResult:
        """Score a chromosome or a bare assignment list."""
        genes = subject.genes if isinstance(subject, Chromosome) else list(subject)
        if self.rotation_start is not None:
            start = self.rotation_start
            genes = [
                Assignment(g.activity_id, slot_for_rotation(g.time_slot, start))
                for g in genes
            ]
        with self._count_lock:
            self.evaluation_count += 1

        result = FitnessResult(fitness_score=self.constants.base_fitness)
        self._check_intrinsic_violations(genes, result)

        context = EvaluationContext(assignments=genes, activities=self.activities)
        for definition, evaluator in zip(self.constraints, self._evaluators):
            violations = evaluator.find_violations(context) if evaluator else []

            if definition.is_hard:
                if violations:
                    result.hard_constraint_violations += 1
                    result.fitness_score -= self.constants.hard_constraint_penalty
                    result.violations.extend(violations)
            elif not violations:
                result.soft_constraints_satisfied += 1
                result.fitness_score += self.constants.soft_constraint_reward

        if self.soft_constraint_count:
            result.soft_satisfaction = (
                result.soft_constraints_satisfied / self.soft_constraint_count
            )

        result.fitness_score = max(0.0, result.fitness_score)
        return result

    def _record_hard(self, result: FitnessResult, violation: ConstraintViolation) -> None:
        result.hard_constraint_violations += 1
        result.fitness_score -= self.constants.hard_constraint_penalty
        result.violations.append(violation)

    def _check_intrinsic_violations(
        self, genes: Sequence[Assignment], result: FitnessResult
    ) -> None:
        for gene in genes:
            activity = self.activities.get(gene.activity_id)
            if activity is None:
                continue
            if activity.conflicts_with(gene.time_slot):
                self._record_hard(
                    result,
                    ConstraintViolation(
                        type=ViolationType.TIME_CONFLICT,
                        constraint_id=TIME_CONFLICT_ID,
                        activity_id=gene.activity_id,
                        time_slot=gene.time_slot,
                        description=(
                            f"Class {activity.name} is scheduled at a time it "
                            f"conflicts with ({format_time_slot(gene.time_slot)})"
                        ),
                    ),
                )

        # Grid position first, then the dated/recurring equality inside a group
        by_position: Dict[tuple, List[Assignment]] = defaultdict(list)
        for gene in genes:
            occupants = by_position[gene.time_slot.key]
            holder = next((o for o in occupants if o.time_slot == gene.time_slot), None)
            occupants.append(gene)
            if holder is None:
                continue
            self._record_hard(
                result,
                ConstraintViolation(
                    type=ViolationType.ROOM_CONFLICT,
                    constraint_id=SLOT_COLLISION_ID,
                    activity_id=gene.activity_id,
                    time_slot=gene.time_slot,
                    description=(
                        f"Classes {holder.activity_id}, {gene.activity_id} are "
                        f"assigned to the same time slot "
                        f"({format_time_slot(gene.time_slot)})"
                    ),
                ),
            )

    def evaluate_population(
        self,
        chromosomes: Sequence[Chromosome],
        map_fn: Callable = map,
    ) -> List[FitnessResult]:
        """
        Evaluate every chromosome and cache its fitness.

        ``map_fn`` may run evaluations concurrently; results are written back
        in input order afterwards.
        """
        results = list(map_fn(self.evaluate, chromosomes))
        for chromosome, result in zip(chromosomes, results):
            chromosome.fitness = result.fitness_score
            chromosome.hard_violations = result.hard_constraint_violations
        return results

    def get_hard_constraint_violations(self, chromosome: Chromosome) -> int:
        return self.evaluate(chromosome).hard_constraint_violations

    def get_violations(self, chromosome: Chromosome) -> List[ConstraintViolation]:
        return self.evaluate(chromosome).violations

    def evaluate_with_details(
        self, subject: Union[Chromosome, Iterable[Assignment]]
    ) -> ValidationResult:
        result = self.evaluate(subject)
        return ValidationResult(
            is_valid=result.is_valid,
            hard_constraint_violations=result.hard_constraint_violations,
            fitness_score=result.fitness_score,
            violations=result.violations,
        )
