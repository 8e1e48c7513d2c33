# rotation_scheduler/core/__init__.py

"""
Core data structures: the time grid, activities, constraints and schedules
"""

from .time_grid import (
    Day,
    TimeSlot,
    WEEKDAYS,
    PERIODS_PER_DAY,
    generate_all_time_slots,
    format_time_slot,
)
from .problem_model import Activity, Assignment, SlotPreference
from .constraint_types import (
    ConstraintType,
    ConstraintKind,
    ConstraintDefinition,
    ConstraintViolation,
    ViolationType,
)
from .solution import Schedule, RotationWeek, ValidationResult
from .exceptions import (
    SchedulerError,
    InvalidConfigurationError,
    NoActivitiesError,
    NoScheduleError,
    LockedAssignmentConflictError,
)

__all__ = [
    # Time grid
    "Day",
    "TimeSlot",
    "WEEKDAYS",
    "PERIODS_PER_DAY",
    "generate_all_time_slots",
    "format_time_slot",
    # Problem model
    "Activity",
    "Assignment",
    "SlotPreference",
    # Constraint types
    "ConstraintType",
    "ConstraintKind",
    "ConstraintDefinition",
    "ConstraintViolation",
    "ViolationType",
    # Solution model
    "Schedule",
    "RotationWeek",
    "ValidationResult",
    # Errors
    "SchedulerError",
    "InvalidConfigurationError",
    "NoActivitiesError",
    "NoScheduleError",
    "LockedAssignmentConflictError",
]
