# rotation_scheduler/core/constraint_types.py

"""
Constraint definitions and violation records.

Each constraint kind carries its own parameter dataclass, and the evaluator
dispatches on ConstraintKind rather than on the id string.
"""

from __future__ import annotations
from typing import Any, Dict, Optional, Union
from dataclasses import dataclass, field
from enum import Enum

from .time_grid import Day, TimeSlot, format_time_slot


class ConstraintType(Enum):
    HARD = "hard"
    SOFT = "soft"


class ConstraintKind(Enum):
    FIXED_SLOT = "fixed_slot"
    PERSONAL_CONFLICT = "personal_conflict"
    DAILY_CAPACITY = "daily_capacity"
    WEEKLY_CAPACITY = "weekly_capacity"
    CONSECUTIVE_PERIODS = "consecutive_periods"
    PREFERENCE = "preference"
    WORKLOAD_BALANCE = "workload_balance"
    GENERIC = "generic"


class ViolationType(Enum):
    TIME_CONFLICT = "time_conflict"  # activity on a slot it cannot use
    ROOM_CONFLICT = "room_conflict"  # more than one activity on a slot
    OTHER = "other"


@dataclass(frozen=True)
class FixedSlotParams:
    activity_id: str
    time_slot: TimeSlot

    kind = ConstraintKind.FIXED_SLOT


@dataclass(frozen=True)
class PersonalConflictParams:
    time_slot: TimeSlot

    kind = ConstraintKind.PERSONAL_CONFLICT


@dataclass(frozen=True)
class DailyCapacityParams:
    min_count: Optional[int] = None
    max_count: Optional[int] = None

    kind = ConstraintKind.DAILY_CAPACITY


@dataclass(frozen=True)
class WeeklyCapacityParams:
    min_count: Optional[int] = None
    max_count: Optional[int] = None

    kind = ConstraintKind.WEEKLY_CAPACITY


@dataclass(frozen=True)
class ConsecutivePeriodsParams:
    max_consecutive: int

    kind = ConstraintKind.CONSECUTIVE_PERIODS


@dataclass(frozen=True)
class PreferenceParams:
    activity_id: str
    time_slot: TimeSlot
    preferred: bool = True

    kind = ConstraintKind.PREFERENCE


@dataclass(frozen=True)
class WorkloadBalanceParams:
    max_spread: int = 1

    kind = ConstraintKind.WORKLOAD_BALANCE


@dataclass(frozen=True)
class GenericParams:
    """Parameters of a constraint kind the engine does not know."""

    values: Dict[str, Any] = field(default_factory=dict)

    kind = ConstraintKind.GENERIC

    def __hash__(self):
        return hash(tuple(sorted(self.values)))


ConstraintParams = Union[
    FixedSlotParams,
    PersonalConflictParams,
    DailyCapacityParams,
    WeeklyCapacityParams,
    ConsecutivePeriodsParams,
    PreferenceParams,
    WorkloadBalanceParams,
    GenericParams,
]


@dataclass
class ConstraintDefinition:
    """A configured constraint consumed by the fitness evaluator."""

    id: str
    constraint_type: ConstraintType
    parameters: ConstraintParams
    weight: float = 1.0
    description: str = ""

    @property
    def kind(self) -> ConstraintKind:
        return self.parameters.kind

    @property
    def is_hard(self) -> bool:
        return self.constraint_type is ConstraintType.HARD

    def to_dict(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {}
        for name, value in vars(self.parameters).items():
            params[name] = value.to_dict() if isinstance(value, TimeSlot) else value
        return {
            "id": self.id,
            "type": self.constraint_type.value,
            "kind": self.kind.value,
            "weight": self.weight,
            "description": self.description,
            "parameters": params,
        }


@dataclass
class ConstraintViolation:
    type: ViolationType
    constraint_id: str
    description: str
    activity_id: Optional[str] = None
    time_slot: Optional[TimeSlot] = None
    # Set for day-level violations, which have no single slot
    day: Optional[Day] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "constraint_id": self.constraint_id,
            "activity_id": self.activity_id,
            "time_slot": self.time_slot.to_dict() if self.time_slot else None,
            "day": self.day.value if self.day else None,
            "description": self.description,
        }

    def __str__(self) -> str:
        where = ""
        if self.time_slot:
            where = f" at {format_time_slot(self.time_slot)}"
        elif self.day:
            where = f" on {self.day.value}"
        return f"[{self.constraint_id}]{where}: {self.description}"
