# rotation_scheduler/constraints/base_constraint.py

"""
Base class for constraint evaluators.

Each evaluator is built from one ConstraintDefinition and inspects an
EvaluationContext, a read-only view of a gene list with the per-day tallies
most constraints need computed once.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence
import logging

import numpy as np

from ..core.constraint_types import (
    ConstraintDefinition,
    ConstraintKind,
    ConstraintViolation,
    ViolationType,
)
from ..core.problem_model import Activity, Assignment
from ..core.time_grid import Day, TimeSlot, WEEKDAYS

logger = logging.getLogger(__name__)

_DAY_INDEX = {day: index for index, day in enumerate(WEEKDAYS)}


@dataclass
class EvaluationContext:
    assignments: Sequence[Assignment]
    activities: Dict[str, Activity] = field(default_factory=dict)

    def __post_init__(self):
        self._by_activity: Dict[str, Assignment] = {}
        for assignment in self.assignments:
            self._by_activity.setdefault(assignment.activity_id, assignment)

        day_indices = [
            _DAY_INDEX[a.time_slot.day]
            for a in self.assignments
            if a.time_slot.day in _DAY_INDEX
        ]
        self.daily_counts = np.bincount(
            np.asarray(day_indices, dtype=np.int64), minlength=len(WEEKDAYS)
        )

        self.periods_by_day: Dict[Day, List[int]] = {day: [] for day in WEEKDAYS}
        for assignment in self.assignments:
            slot = assignment.time_slot
            if slot.day in self.periods_by_day:
                self.periods_by_day[slot.day].append(slot.period)

    @property
    def total(self) -> int:
        return len(self.assignments)

    def assignment_for(self, activity_id: str) -> Optional[Assignment]:
        return self._by_activity.get(activity_id)

    def occupants(self, slot: TimeSlot) -> List[Assignment]:
        return [a for a in self.assignments if a.time_slot == slot]

    def activity_name(self, activity_id: str) -> str:
        activity = self.activities.get(activity_id)
        return activity.name if activity else activity_id


class BaseConstraint(ABC):
    """Base class for a configured constraint evaluator."""

    kind: ConstraintKind = ConstraintKind.GENERIC

    def __init__(self, definition: ConstraintDefinition):
        self.definition = definition
        self.constraint_id = definition.id
        self.params = definition.parameters

    @abstractmethod
    def find_violations(self, context: EvaluationContext) -> List[ConstraintViolation]:
        """Return one entry per offending day, slot or activity; empty if satisfied."""

    def is_satisfied(self, context: EvaluationContext) -> bool:
        return not self.find_violations(context)

    def violation(
        self,
        description: str,
        activity_id: Optional[str] = None,
        time_slot: Optional[TimeSlot] = None,
        violation_type: ViolationType = ViolationType.OTHER,
        day: Optional[Day] = None,
    ) -> ConstraintViolation:
        return ConstraintViolation(
            type=violation_type,
            constraint_id=self.constraint_id,
            description=description,
            activity_id=activity_id,
            time_slot=time_slot,
            day=day,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.constraint_id!r})"
