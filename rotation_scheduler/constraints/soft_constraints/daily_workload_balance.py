# rotation_scheduler/constraints/soft_constraints/daily_workload_balance.py
"""
DailyWorkloadBalanceConstraint - classes should be spread evenly over the
week. Satisfied when the busiest and quietest weekdays differ by at most
``max_spread`` classes.
"""

from rotation_scheduler.constraints.base_constraint import (
    BaseConstraint,
    EvaluationContext,
)
from rotation_scheduler.core.constraint_types import ConstraintKind


class DailyWorkloadBalanceConstraint(BaseConstraint):
    kind = ConstraintKind.WORKLOAD_BALANCE

    def find_violations(self, context: EvaluationContext):
        counts = context.daily_counts
        spread = int(counts.max() - counts.min())
        if spread <= self.params.max_spread:
            return []
        return [
            self.violation(
                f"Daily class counts range from {int(counts.min())} to "
                f"{int(counts.max())}, a spread above {self.params.max_spread}"
            )
        ]
