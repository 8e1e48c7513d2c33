# rotation_scheduler/constraints/constraint_builder.py

"""
Translates the declarative constraint configuration a user edits into the
ConstraintDefinition list the fitness evaluator consumes.

Every definition gets an id derived from its kind and parameters, so building
twice from the same configuration yields the same ids.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from ..core.constraint_types import (
    ConstraintDefinition,
    ConstraintType,
    ConsecutivePeriodsParams,
    DailyCapacityParams,
    FixedSlotParams,
    PersonalConflictParams,
    PreferenceParams,
    WeeklyCapacityParams,
    WorkloadBalanceParams,
)
from ..core.problem_model import Activity, Assignment, SlotPreference
from ..core.time_grid import TimeSlot, format_time_slot

logger = logging.getLogger(__name__)

PREFERENCE_WEIGHT = 0.5
WORKLOAD_BALANCE_WEIGHT = 0.3


@dataclass
class HardConstraints:
    personal_conflicts: List[TimeSlot] = field(default_factory=list)
    max_consecutive_periods: Optional[int] = None
    daily_min_classes: Optional[int] = None
    daily_max_classes: Optional[int] = None
    weekly_min_classes: Optional[int] = None
    weekly_max_classes: Optional[int] = None
    fixed_assignments: List[Assignment] = field(default_factory=list)
    rotation_start_date: Optional[date] = None
    rotation_end_date: Optional[date] = None


@dataclass
class SoftConstraints:
    preferred: List[SlotPreference] = field(default_factory=list)
    not_preferred: List[SlotPreference] = field(default_factory=list)
    balance_workload: bool = False


@dataclass
class SchedulingConstraints:
    hard: HardConstraints = field(default_factory=HardConstraints)
    soft: SoftConstraints = field(default_factory=SoftConstraints)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SchedulingConstraints":
        hard_data = data.get("hard") or {}
        soft_data = data.get("soft") or {}

        def optional_int(value):
            return None if value is None else int(value)

        def optional_date(value):
            if value is None or isinstance(value, date):
                return value
            return date.fromisoformat(str(value)[:10])

        hard = HardConstraints(
            personal_conflicts=[
                TimeSlot.from_dict(s) for s in hard_data.get("personal_conflicts", [])
            ],
            max_consecutive_periods=optional_int(
                hard_data.get("max_consecutive_periods")
            ),
            daily_min_classes=optional_int(hard_data.get("daily_min_classes")),
            daily_max_classes=optional_int(hard_data.get("daily_max_classes")),
            weekly_min_classes=optional_int(hard_data.get("weekly_min_classes")),
            weekly_max_classes=optional_int(hard_data.get("weekly_max_classes")),
            fixed_assignments=[
                Assignment.from_dict(a) for a in hard_data.get("fixed_assignments", [])
            ],
            rotation_start_date=optional_date(hard_data.get("rotation_start_date")),
            rotation_end_date=optional_date(hard_data.get("rotation_end_date")),
        )

        preferences = soft_data.get("teacher_preferences") or {}
        soft = SoftConstraints(
            preferred=[
                SlotPreference.from_dict(p) for p in preferences.get("preferred", [])
            ],
            not_preferred=[
                SlotPreference.from_dict(p)
                for p in preferences.get("not_preferred", [])
            ],
            balance_workload=bool(soft_data.get("balance_workload", False)),
        )
        return cls(hard=hard, soft=soft)


def _slot_suffix(slot: TimeSlot) -> str:
    suffix = f"{slot.day.value}-{slot.period}"
    if slot.date is not None:
        suffix += f"-{slot.date.isoformat()}"
    return suffix


def _hard(constraint_id: str, params, description: str) -> ConstraintDefinition:
    return ConstraintDefinition(
        id=constraint_id,
        constraint_type=ConstraintType.HARD,
        parameters=params,
        weight=1.0,
        description=description,
    )


def _preference(
    prefix: str, activity_id: str, slot: TimeSlot, preferred: bool
) -> ConstraintDefinition:
    wording = "should" if preferred else "should not"
    return ConstraintDefinition(
        id=f"{prefix}-{activity_id}-{_slot_suffix(slot)}",
        constraint_type=ConstraintType.SOFT,
        parameters=PreferenceParams(activity_id, slot, preferred=preferred),
        weight=PREFERENCE_WEIGHT,
        description=f"Class {activity_id} {wording} be at {format_time_slot(slot)}",
    )


def build_constraints(
    constraints: Optional[SchedulingConstraints],
    activities: Sequence[Activity] = (),
) -> List[ConstraintDefinition]:
    """Build evaluator inputs from a configuration plus per-activity preferences."""
    result: List[ConstraintDefinition] = []

    if constraints is not None:
        hard = constraints.hard
        for slot in hard.personal_conflicts:
            result.append(
                _hard(
                    f"personal-conflict-{_slot_suffix(slot)}",
                    PersonalConflictParams(slot),
                    f"No class during personal conflict at {format_time_slot(slot)}",
                )
            )

        if hard.max_consecutive_periods is not None:
            result.append(
                _hard(
                    "max-consecutive-periods",
                    ConsecutivePeriodsParams(hard.max_consecutive_periods),
                    f"At most {hard.max_consecutive_periods} consecutive periods",
                )
            )
        if hard.daily_min_classes is not None:
            result.append(
                _hard(
                    "min-classes-per-day",
                    DailyCapacityParams(min_count=hard.daily_min_classes),
                    f"At least {hard.daily_min_classes} classes per day",
                )
            )
        if hard.daily_max_classes is not None:
            result.append(
                _hard(
                    "max-classes-per-day",
                    DailyCapacityParams(max_count=hard.daily_max_classes),
                    f"At most {hard.daily_max_classes} classes per day",
                )
            )
        if hard.weekly_min_classes is not None:
            result.append(
                _hard(
                    "min-classes-per-week",
                    WeeklyCapacityParams(min_count=hard.weekly_min_classes),
                    f"At least {hard.weekly_min_classes} classes per week",
                )
            )
        if hard.weekly_max_classes is not None:
            result.append(
                _hard(
                    "max-classes-per-week",
                    WeeklyCapacityParams(max_count=hard.weekly_max_classes),
                    f"At most {hard.weekly_max_classes} classes per week",
                )
            )

        for fixed in hard.fixed_assignments:
            result.append(
                _hard(
                    f"class-at-time-{fixed.activity_id}-{_slot_suffix(fixed.time_slot)}",
                    FixedSlotParams(fixed.activity_id, fixed.time_slot),
                    f"Class {fixed.activity_id} fixed at "
                    f"{format_time_slot(fixed.time_slot)}",
                )
            )

        soft = constraints.soft
        for pref in soft.preferred:
            result.append(
                _preference("teacher-preferred", pref.activity_id, pref.time_slot, True)
            )
        for pref in soft.not_preferred:
            result.append(
                _preference(
                    "teacher-not-preferred", pref.activity_id, pref.time_slot, False
                )
            )
        if soft.balance_workload:
            result.append(
                ConstraintDefinition(
                    id="balance-workload",
                    constraint_type=ConstraintType.SOFT,
                    parameters=WorkloadBalanceParams(),
                    weight=WORKLOAD_BALANCE_WEIGHT,
                    description="Spread classes evenly across the week",
                )
            )

    for activity in activities:
        for slot in activity.preferred:
            result.append(_preference("activity-preferred", activity.id, slot, True))
        for slot in activity.not_preferred:
            result.append(
                _preference("activity-not-preferred", activity.id, slot, False)
            )

    # Duplicate ids come from repeated entries in the configuration
    unique: Dict[str, ConstraintDefinition] = {}
    for definition in result:
        unique.setdefault(definition.id, definition)
    if len(unique) != len(result):
        logger.debug(f"Dropped {len(result) - len(unique)} duplicate constraints")

    logger.info(
        f"Built {len(unique)} constraints "
        f"({sum(1 for d in unique.values() if d.is_hard)} hard)"
    )
    return list(unique.values())
