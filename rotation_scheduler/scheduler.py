# rotation_scheduler/scheduler.py

"""
RotationScheduler: the service object front-ends talk to.

It owns the working set of activities, the constraint configuration and the
current schedule. Every change to activities or constraints rebuilds the
fitness evaluator, so runs always score against the latest inputs.
"""

import logging
from dataclasses import replace
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from .config import GeneticAlgorithmConfig, SchedulingEngineConfig
from .constraints.constraint_builder import SchedulingConstraints, build_constraints
from .core.calendar import (
    default_rotation_start,
    enhance_assignments_with_dates,
    organize_into_weeks,
    rotation_end_date,
)
from .core.constraint_types import ConstraintDefinition
from .core.exceptions import NoActivitiesError, NoScheduleError
from .core.problem_model import Activity, Assignment
from .core.solution import Schedule, ValidationResult
from .core.time_grid import TimeSlot
from .genetic_algorithm.evolution_manager import EvolutionResult, GeneticAlgorithm
from .genetic_algorithm.fitness import FitnessEvaluator
from .genetic_algorithm.random_source import RandomSource, ensure_random_source
from .hybrid.incremental_optimizer import IncrementalOptimizer, select_locked_assignments
from .utils.logging import log_operation

logger = logging.getLogger(__name__)

ConstraintsInput = Union[SchedulingConstraints, Dict[str, Any], None]


class RotationScheduler:
    """Generates, re-optimizes and validates weekly rotation schedules."""

    def __init__(
        self,
        activities: Optional[Iterable[Activity]] = None,
        constraints: ConstraintsInput = None,
        config: Optional[SchedulingEngineConfig] = None,
        rng: Optional[RandomSource] = None,
    ):
        self.config = config or SchedulingEngineConfig()
        self.config.genetic_algorithm.validate()
        self.rng = ensure_random_source(rng)

        self._activities: List[Activity] = []
        self._constraints: Optional[SchedulingConstraints] = None
        self._constraint_definitions: List[ConstraintDefinition] = []
        self._current_schedule: Optional[Schedule] = None
        self.last_result: Optional[EvolutionResult] = None
        self.evaluator = FitnessEvaluator([], [], self.config.fitness)

        if constraints is not None:
            self._constraints = self._coerce_constraints(constraints)
        self.set_activities(list(activities or []))

    # Activities

    def set_activities(self, activities: Sequence[Activity]) -> None:
        """Replace the working set."""
        ids = [a.id for a in activities]
        if len(ids) != len(set(ids)):
            duplicates = sorted({i for i in ids if ids.count(i) > 1})
            raise ValueError(f"Duplicate activity ids: {duplicates}")
        self._activities = list(activities)
        self._rebuild_evaluator()

    def add_activity(self, activity: Activity) -> None:
        if self.get_activity(activity.id) is not None:
            raise ValueError(f"Activity {activity.id} already exists")
        self._activities.append(activity)
        self._rebuild_evaluator()

    def update_activity(self, activity: Activity) -> bool:
        for index, existing in enumerate(self._activities):
            if existing.id == activity.id:
                self._activities[index] = activity
                self._rebuild_evaluator()
                return True
        return False

    def add_activity_conflict(self, activity_id: str, slot: TimeSlot) -> bool:
        """
        Mark ``slot`` as unavailable for an activity. A slot already listed
        with the same position and date is not added twice.
        """
        for index, existing in enumerate(self._activities):
            if existing.id != activity_id:
                continue
            if not any(
                (s.key, s.date) == (slot.key, slot.date) for s in existing.conflicts
            ):
                self._activities[index] = replace(
                    existing, conflicts=existing.conflicts + [slot]
                )
                self._rebuild_evaluator()
            return True
        return False

    def remove_activity(self, activity_id: str) -> bool:
        remaining = [a for a in self._activities if a.id != activity_id]
        if len(remaining) == len(self._activities):
            return False
        self._activities = remaining
        self._rebuild_evaluator()
        return True

    def get_activity(self, activity_id: str) -> Optional[Activity]:
        return next((a for a in self._activities if a.id == activity_id), None)

    def get_activities(self) -> List[Activity]:
        return list(self._activities)

    # Configuration

    @staticmethod
    def _coerce_constraints(constraints: ConstraintsInput) -> SchedulingConstraints:
        if isinstance(constraints, SchedulingConstraints):
            return constraints
        return SchedulingConstraints.from_dict(constraints or {})

    def set_constraints(self, constraints: ConstraintsInput) -> None:
        self._constraints = (
            None if constraints is None else self._coerce_constraints(constraints)
        )
        self._rebuild_evaluator()

    def get_constraints(self) -> Optional[SchedulingConstraints]:
        return self._constraints

    @property
    def constraint_definitions(self) -> List[ConstraintDefinition]:
        return list(self._constraint_definitions)

    def update_config(self, **params: Any) -> GeneticAlgorithmConfig:
        """Update GA parameters between runs, e.g. ``update_config(generations=50)``."""
        self.config.genetic_algorithm = self.config.genetic_algorithm.updated(**params)
        logger.info(f"Genetic algorithm configuration updated: {sorted(params)}")
        return self.config.genetic_algorithm

    def _rebuild_evaluator(self) -> None:
        self._constraint_definitions = build_constraints(
            self._constraints, self._activities
        )
        self.evaluator = FitnessEvaluator(
            self._activities,
            self._constraint_definitions,
            self.config.fitness,
            rotation_start=self._rotation_dates()[0],
        )

    # Schedule lifecycle

    @property
    def current_schedule(self) -> Optional[Schedule]:
        return self._current_schedule

    def get_current_schedule(self) -> Optional[Schedule]:
        return self._current_schedule

    def _select_activities_for_run(self) -> List[Activity]:
        weekly_max = (
            self._constraints.hard.weekly_max_classes if self._constraints else None
        )
        if weekly_max is None or weekly_max >= len(self._activities):
            return list(self._activities)

        chosen = self.rng.sample(self._activities, max(0, weekly_max))
        logger.warning(
            f"Weekly maximum of {weekly_max} is below {len(self._activities)} "
            f"activities; scheduling a random subset this run"
        )
        return chosen

    @log_operation("generate_schedule")
    def generate_schedule(self) -> Schedule:
        if not self._activities:
            raise NoActivitiesError()
        self._refresh_rotation_week()

        activities = self._select_activities_for_run()
        ga = GeneticAlgorithm(
            activities, self.evaluator, self.config.genetic_algorithm, rng=self.rng
        )
        result = ga.evolve()
        self._current_schedule = self._build_schedule(result)
        return self._current_schedule

    @log_operation("re_optimize_schedule")
    def re_optimize_schedule(
        self,
        schedule: Optional[Schedule] = None,
        locked_activity_ids: Iterable[str] = (),
    ) -> Schedule:
        """
        Re-solve ``schedule`` (default: the current one) keeping the locked
        activities on their slots.

        Raises NoActivitiesError, NoScheduleError, or
        LockedAssignmentConflictError before any evolution starts.
        """
        if not self._activities:
            raise NoActivitiesError()
        self._refresh_rotation_week()
        schedule = schedule or self._current_schedule
        if schedule is None:
            raise NoScheduleError()

        # Re-solve only what the schedule covers, so weekly-max truncation holds
        in_schedule = set(schedule.activity_ids())
        activities = [a for a in self._activities if a.id in in_schedule]
        if not activities:
            activities = list(self._activities)

        selection = select_locked_assignments(schedule, locked_activity_ids)
        optimizer = IncrementalOptimizer(
            self.evaluator, self.config.genetic_algorithm, rng=self.rng
        )
        result = optimizer.optimize(activities, selection.assignments)
        self._current_schedule = self._build_schedule(result)
        return self._current_schedule

    def validate_schedule(
        self, schedule: Union[Schedule, Iterable[Assignment]]
    ) -> ValidationResult:
        """Score any assignment list against the current activities and constraints."""
        assignments = (
            schedule.assignments if isinstance(schedule, Schedule) else list(schedule)
        )
        result = self.evaluator.evaluate_with_details(assignments)
        if not result.is_valid:
            logger.info(
                f"Schedule has {result.hard_constraint_violations} hard violations"
            )
        return result

    # Helpers

    def _rotation_dates(self):
        hard = self._constraints.hard if self._constraints else None
        start: date = (
            hard.rotation_start_date
            if hard and hard.rotation_start_date
            else default_rotation_start()
        )
        end = rotation_end_date(start, hard.rotation_end_date if hard else None)
        return start, end

    def _refresh_rotation_week(self) -> None:
        # The default start follows the calendar, so a long-lived scheduler can
        # cross into a new week between runs
        if self.evaluator.rotation_start != self._rotation_dates()[0]:
            self._rebuild_evaluator()

    def _build_schedule(self, result: EvolutionResult) -> Schedule:
        self.last_result = result
        best = result.best
        evaluation = self.evaluator.evaluate(best)
        start, end = self._rotation_dates()
        assignments = enhance_assignments_with_dates(best.get_genes(), start)

        return Schedule(
            assignments=assignments,
            fitness=evaluation.fitness_score,
            hard_constraint_violations=evaluation.hard_constraint_violations,
            soft_constraint_satisfaction=evaluation.soft_satisfaction,
            soft_constraints_satisfied=evaluation.soft_constraints_satisfied,
            violations=evaluation.violations,
            start_date=start,
            end_date=end,
            weeks=organize_into_weeks(assignments, start),
        )
