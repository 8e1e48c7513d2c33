# rotation_scheduler/constraints/hard_constraints/__init__.py

"""
Hard constraint evaluators. A schedule that breaks any of these is invalid,
whatever its score.
"""

from .fixed_slot import FixedSlotConstraint
from .personal_conflict import PersonalConflictConstraint
from .capacity import DailyCapacityConstraint, WeeklyCapacityConstraint
from .consecutive_periods import ConsecutivePeriodsConstraint

__all__ = [
    "FixedSlotConstraint",
    "PersonalConflictConstraint",
    "DailyCapacityConstraint",
    "WeeklyCapacityConstraint",
    "ConsecutivePeriodsConstraint",
]
