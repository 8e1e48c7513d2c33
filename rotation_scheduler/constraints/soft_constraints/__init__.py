# rotation_scheduler/constraints/soft_constraints/__init__.py

from .preference_slots import PreferenceSlotConstraint
from .daily_workload_balance import DailyWorkloadBalanceConstraint

__all__ = [
    "PreferenceSlotConstraint",
    "DailyWorkloadBalanceConstraint",
]
