# rotation_scheduler/constraints/hard_constraints/fixed_slot.py
"""
FixedSlotConstraint - a given activity must sit on a given slot.
"""

from rotation_scheduler.constraints.base_constraint import (
    BaseConstraint,
    EvaluationContext,
)
from rotation_scheduler.core.constraint_types import ConstraintKind, ViolationType
from rotation_scheduler.core.time_grid import format_time_slot


class FixedSlotConstraint(BaseConstraint):
    kind = ConstraintKind.FIXED_SLOT

    def find_violations(self, context: EvaluationContext):
        target = self.params.time_slot
        assignment = context.assignment_for(self.params.activity_id)
        # An activity left out of this run cannot be held to its fixed slot
        if assignment is None or assignment.time_slot == target:
            return []

        name = context.activity_name(self.params.activity_id)
        return [
            self.violation(
                f"Class {name} must be scheduled at {format_time_slot(target)}",
                activity_id=self.params.activity_id,
                time_slot=target,
                violation_type=ViolationType.TIME_CONFLICT,
            )
        ]
