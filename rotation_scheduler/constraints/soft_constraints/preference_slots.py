# rotation_scheduler/constraints/soft_constraints/preference_slots.py
"""
PreferenceSlotConstraint - rewards a class sitting on a preferred slot, or
staying off a slot marked as not preferred.
"""

from rotation_scheduler.constraints.base_constraint import (
    BaseConstraint,
    EvaluationContext,
)
from rotation_scheduler.core.constraint_types import ConstraintKind
from rotation_scheduler.core.time_grid import format_time_slot


class PreferenceSlotConstraint(BaseConstraint):
    kind = ConstraintKind.PREFERENCE

    def find_violations(self, context: EvaluationContext):
        params = self.params
        assignment = context.assignment_for(params.activity_id)
        on_slot = assignment is not None and assignment.time_slot == params.time_slot
        name = context.activity_name(params.activity_id)
        where = format_time_slot(params.time_slot)

        if params.preferred and not on_slot:
            return [
                self.violation(
                    f"Class {name} is not at its preferred slot {where}",
                    activity_id=params.activity_id,
                    time_slot=params.time_slot,
                )
            ]
        if not params.preferred and on_slot:
            return [
                self.violation(
                    f"Class {name} is at a non-preferred slot {where}",
                    activity_id=params.activity_id,
                    time_slot=params.time_slot,
                )
            ]
        return []
