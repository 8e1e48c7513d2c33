# rotation_scheduler/constraints/hard_constraints/capacity.py
"""
Capacity constraints - bounds on how many classes run per day and per week.

Daily bounds apply to every weekday, so a minimum also flags empty days.
"""

from rotation_scheduler.constraints.base_constraint import (
    BaseConstraint,
    EvaluationContext,
)
from rotation_scheduler.core.constraint_types import ConstraintKind
from rotation_scheduler.core.time_grid import WEEKDAYS


class DailyCapacityConstraint(BaseConstraint):
    kind = ConstraintKind.DAILY_CAPACITY

    def find_violations(self, context: EvaluationContext):
        low, high = self.params.min_count, self.params.max_count
        violations = []

        for day, count in zip(WEEKDAYS, context.daily_counts.tolist()):
            if high is not None and count > high:
                violations.append(
                    self.violation(
                        f"{day.value} has {count} classes, exceeding the maximum "
                        f"of {high}",
                        day=day,
                    )
                )
            elif low is not None and count < low:
                violations.append(
                    self.violation(
                        f"{day.value} has {count} classes, below the minimum "
                        f"of {low}",
                        day=day,
                    )
                )
        return violations


class WeeklyCapacityConstraint(BaseConstraint):
    kind = ConstraintKind.WEEKLY_CAPACITY

    def find_violations(self, context: EvaluationContext):
        low, high = self.params.min_count, self.params.max_count
        total = context.total

        if high is not None and total > high:
            return [
                self.violation(
                    f"Week has {total} classes, exceeding the maximum of {high}"
                )
            ]
        if low is not None and total < low:
            return [
                self.violation(
                    f"Week has {total} classes, below the minimum of {low}"
                )
            ]
        return []
