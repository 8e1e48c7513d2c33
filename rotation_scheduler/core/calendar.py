# rotation_scheduler/core/calendar.py

"""
Calendar enrichment for weekly schedules.

Maps the recurring (day, period) grid onto concrete dates given a rotation
start date, and groups dated assignments into Monday to Friday weeks.
"""

import logging
from datetime import date, timedelta
from typing import Dict, List, Optional

from .problem_model import Assignment
from .time_grid import Day, TimeSlot, WEEKDAYS
from .solution import RotationWeek

logger = logging.getLogger(__name__)

WORKING_DAYS_PER_WEEK = len(WEEKDAYS)


def week_start(on: date) -> date:
    """Monday of the week containing ``on``."""
    return on - timedelta(days=on.weekday())


def default_rotation_start(today: Optional[date] = None) -> date:
    return week_start(today or date.today())


def get_day_date(start: date, day: Day) -> Optional[date]:
    """Date of ``day`` in the week that begins at ``start``."""
    if day is Day.UNASSIGNED:
        return None
    return week_start(start) + timedelta(days=day.index)


def slot_for_rotation(slot: TimeSlot, start: Optional[date]) -> TimeSlot:
    """
    Date a recurring slot within the rotation week beginning at ``start``.

    Slots that already carry a date, and any slot when ``start`` is None,
    are returned unchanged.
    """
    if start is None or slot.date is not None:
        return slot
    return slot.with_date(get_day_date(start, slot.day))


def enhance_assignments_with_dates(
    assignments: List[Assignment], start: date
) -> List[Assignment]:
    """Return copies of the assignments with calendar dates for the first week."""
    enhanced = []
    for assignment in assignments:
        slot = assignment.time_slot
        enhanced.append(
            Assignment(
                activity_id=assignment.activity_id,
                time_slot=slot.with_date(get_day_date(start, slot.day)),
            )
        )
    return enhanced


def organize_into_weeks(
    assignments: List[Assignment], start: date
) -> List[RotationWeek]:
    """Group dated assignments into numbered Monday to Friday weeks."""
    first_monday = week_start(start)
    weeks: Dict[int, RotationWeek] = {}

    for assignment in assignments:
        slot_date = assignment.time_slot.date
        if slot_date is None:
            slot_date = get_day_date(first_monday, assignment.time_slot.day)
        if slot_date is None:
            logger.debug(f"Skipping unplaced assignment {assignment.activity_id}")
            continue

        week_number = (week_start(slot_date) - first_monday).days // 7 + 1
        if week_number not in weeks:
            monday = first_monday + timedelta(weeks=week_number - 1)
            weeks[week_number] = RotationWeek(
                week_number=week_number,
                start_date=monday,
                end_date=monday + timedelta(days=WORKING_DAYS_PER_WEEK - 1),
            )
        weeks[week_number].assignments.append(assignment)

    def chronological(a: Assignment):
        slot = a.time_slot
        return (slot.date or get_day_date(first_monday, slot.day), slot.period)

    for week in weeks.values():
        week.assignments.sort(key=chronological)
    return [weeks[n] for n in sorted(weeks)]


def rotation_end_date(start: date, end: Optional[date] = None) -> date:
    """Explicit end date if configured, otherwise the Friday of the first week."""
    if end is not None:
        return end
    return week_start(start) + timedelta(days=WORKING_DAYS_PER_WEEK - 1)
