# rotation_scheduler/constraints/hard_constraints/consecutive_periods.py
"""
ConsecutivePeriodsConstraint - limits back-to-back teaching without a break.
"""

from rotation_scheduler.constraints.base_constraint import (
    BaseConstraint,
    EvaluationContext,
)
from rotation_scheduler.core.constraint_types import ConstraintKind
from rotation_scheduler.core.time_grid import calculate_consecutive_periods


class ConsecutivePeriodsConstraint(BaseConstraint):
    kind = ConstraintKind.CONSECUTIVE_PERIODS

    def find_violations(self, context: EvaluationContext):
        limit = self.params.max_consecutive
        violations = []
        for day, periods in context.periods_by_day.items():
            run = calculate_consecutive_periods(periods)
            if run > limit:
                violations.append(
                    self.violation(
                        f"{day.value} has {run} consecutive periods, exceeding "
                        f"the maximum of {limit}",
                        day=day,
                    )
                )
        return violations
