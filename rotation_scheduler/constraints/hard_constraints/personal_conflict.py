# rotation_scheduler/constraints/hard_constraints/personal_conflict.py
"""
PersonalConflictConstraint - the instructor is unavailable on a slot, so no
activity may be placed there.
"""

from rotation_scheduler.constraints.base_constraint import (
    BaseConstraint,
    EvaluationContext,
)
from rotation_scheduler.core.constraint_types import ConstraintKind, ViolationType
from rotation_scheduler.core.time_grid import format_time_slot


class PersonalConflictConstraint(BaseConstraint):
    kind = ConstraintKind.PERSONAL_CONFLICT

    def find_violations(self, context: EvaluationContext):
        blocked = self.params.time_slot
        return [
            self.violation(
                f"Class {context.activity_name(a.activity_id)} is scheduled during "
                f"a personal conflict at {format_time_slot(blocked)}",
                activity_id=a.activity_id,
                time_slot=a.time_slot,
                violation_type=ViolationType.TIME_CONFLICT,
            )
            for a in context.occupants(blocked)
        ]
