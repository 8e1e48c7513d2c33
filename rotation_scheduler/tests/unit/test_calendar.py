# rotation_scheduler/tests/unit/test_calendar.py

"""
Tests for mapping the weekly grid onto calendar dates.
"""

from datetime import date

from rotation_scheduler.core.calendar import (
    default_rotation_start,
    enhance_assignments_with_dates,
    get_day_date,
    organize_into_weeks,
    rotation_end_date,
    slot_for_rotation,
    week_start,
)
from rotation_scheduler.core.problem_model import Assignment
from rotation_scheduler.core.time_grid import Day, TimeSlot

MONDAY = date(2024, 1, 8)


class TestDates:
    def test_week_start(self):
        assert week_start(date(2024, 1, 11)) == MONDAY
        assert week_start(MONDAY) == MONDAY
        assert week_start(date(2024, 1, 14)) == MONDAY

    def test_default_rotation_start_is_monday(self):
        assert default_rotation_start(date(2024, 1, 10)) == MONDAY
        assert default_rotation_start().weekday() == 0

    def test_get_day_date(self):
        assert get_day_date(MONDAY, Day.FRIDAY) == date(2024, 1, 12)
        assert get_day_date(date(2024, 1, 10), Day.MONDAY) == MONDAY
        assert get_day_date(MONDAY, Day.UNASSIGNED) is None

    def test_rotation_end_date(self):
        assert rotation_end_date(MONDAY) == date(2024, 1, 12)
        assert rotation_end_date(MONDAY, date(2024, 2, 2)) == date(2024, 2, 2)

    def test_slot_for_rotation(self):
        dated = slot_for_rotation(TimeSlot(Day.WEDNESDAY, 3), date(2024, 1, 12))
        assert dated.date == date(2024, 1, 10)
        assert dated.key == (Day.WEDNESDAY, 3)

        fixed = TimeSlot(Day.MONDAY, 1, date(2024, 2, 5))
        assert slot_for_rotation(fixed, MONDAY).date == date(2024, 2, 5)
        assert slot_for_rotation(TimeSlot(Day.MONDAY, 1), None).date is None


class TestEnrichment:
    def test_enhance_assignments(self):
        plain = [Assignment("a", TimeSlot(Day.WEDNESDAY, 2))]
        dated = enhance_assignments_with_dates(plain, MONDAY)

        assert dated[0].time_slot.date == date(2024, 1, 10)
        assert plain[0].time_slot.date is None

    def test_organize_into_weeks(self):
        assignments = [
            Assignment("late", TimeSlot(Day.FRIDAY, 1, date(2024, 1, 19))),
            Assignment("b", TimeSlot(Day.TUESDAY, 5, date(2024, 1, 9))),
            Assignment("a", TimeSlot(Day.TUESDAY, 2, date(2024, 1, 9))),
        ]
        weeks = organize_into_weeks(assignments, MONDAY)

        assert [w.week_number for w in weeks] == [1, 2]
        assert weeks[0].start_date == MONDAY
        assert weeks[0].end_date == date(2024, 1, 12)
        assert [a.activity_id for a in weeks[0].assignments] == ["a", "b"]
        assert [a.activity_id for a in weeks[1].assignments] == ["late"]

    def test_undated_assignments_land_in_first_week(self):
        weeks = organize_into_weeks([Assignment("a", TimeSlot(Day.MONDAY, 1))], MONDAY)
        assert len(weeks) == 1
        assert weeks[0].week_number == 1
