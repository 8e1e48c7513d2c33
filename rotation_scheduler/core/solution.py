# rotation_scheduler/core/solution.py
# Externally visible results of a scheduling run.
# Everything here converts to plain dicts so storage and export layers
# never need to import engine internals.

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional
import logging

from .constraint_types import ConstraintViolation
from .problem_model import Assignment
from .time_grid import Day, TimeSlot, WEEKDAYS

logger = logging.getLogger(__name__)


@dataclass
class RotationWeek:
    week_number: int
    start_date: date
    end_date: date
    assignments: List[Assignment] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "week_number": self.week_number,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "assignments": [a.to_dict() for a in self.assignments],
        }


@dataclass
class ValidationResult:
    """Outcome of checking an assignment list; never an error."""

    is_valid: bool
    hard_constraint_violations: int
    fitness_score: float
    violations: List[ConstraintViolation] = field(default_factory=list)

    @property
    def violation_details(self) -> List[str]:
        return [v.description for v in self.violations]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "hard_constraint_violations": self.hard_constraint_violations,
            "fitness_score": self.fitness_score,
            "violations": [v.to_dict() for v in self.violations],
            "violation_details": self.violation_details,
        }


@dataclass
class Schedule:
    assignments: List[Assignment] = field(default_factory=list)
    fitness: float = 0.0
    hard_constraint_violations: int = 0
    soft_constraint_satisfaction: float = 0.0
    soft_constraints_satisfied: int = 0
    violations: List[ConstraintViolation] = field(default_factory=list)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    weeks: List[RotationWeek] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.hard_constraint_violations == 0

    def get_assignment(self, activity_id: str) -> Optional[Assignment]:
        for assignment in self.assignments:
            if assignment.activity_id == activity_id:
                return assignment
        return None

    def activity_ids(self) -> List[str]:
        return [a.activity_id for a in self.assignments]

    def assignments_on(self, day: Day) -> List[Assignment]:
        return sorted(
            (a for a in self.assignments if a.time_slot.day == day),
            key=lambda a: a.time_slot.period,
        )

    def daily_counts(self) -> Dict[Day, int]:
        counts = {day: 0 for day in WEEKDAYS}
        for assignment in self.assignments:
            if assignment.time_slot.day in counts:
                counts[assignment.time_slot.day] += 1
        return counts

    def slot_of(self, activity_id: str) -> Optional[TimeSlot]:
        assignment = self.get_assignment(activity_id)
        return assignment.time_slot if assignment else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "assignments": [a.to_dict() for a in self.assignments],
            "fitness": self.fitness,
            "hard_constraint_violations": self.hard_constraint_violations,
            "soft_constraint_satisfaction": self.soft_constraint_satisfaction,
            "soft_constraints_satisfied": self.soft_constraints_satisfied,
            "violations": [v.to_dict() for v in self.violations],
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "weeks": [w.to_dict() for w in self.weeks],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Schedule":
        """Rebuild a schedule from stored data; violations are not restored."""
        start = data.get("start_date")
        end = data.get("end_date")
        return cls(
            assignments=[Assignment.from_dict(a) for a in data.get("assignments", [])],
            fitness=float(data.get("fitness", 0.0)),
            hard_constraint_violations=int(data.get("hard_constraint_violations", 0)),
            soft_constraint_satisfaction=float(
                data.get("soft_constraint_satisfaction", 0.0)
            ),
            soft_constraints_satisfied=int(data.get("soft_constraints_satisfied", 0)),
            start_date=date.fromisoformat(start) if start else None,
            end_date=date.fromisoformat(end) if end else None,
        )
