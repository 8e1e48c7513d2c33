# rotation_scheduler/core/time_grid.py

"""
Weekly time grid: days, periods and the slot universe.

A TimeSlot either names a recurring weekly position (day + period) or a
concrete calendar occurrence (date + period). Two slots compare by date when
both carry one and by weekday otherwise, so a one-time unavailability only
blocks the matching week while a recurring one blocks every week.
"""

from dataclasses import dataclass, replace
import datetime as dt
from enum import Enum
from typing import Iterable, List, Optional, Tuple


PERIODS_PER_DAY = 8


class Day(Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    # Sentinel for genes that could not be placed on the grid
    UNASSIGNED = "Unassigned"

    @property
    def index(self) -> int:
        """Zero based weekday offset (Monday is 0)."""
        return WEEKDAYS.index(self)

    @classmethod
    def parse(cls, value) -> "Day":
        if isinstance(value, Day):
            return value
        text = str(value).strip()
        for day in cls:
            if day.value.lower() == text.lower() or day.name == text.upper():
                return day
        raise ValueError(f"Unknown day: {value!r}")


WEEKDAYS: Tuple[Day, ...] = (
    Day.MONDAY,
    Day.TUESDAY,
    Day.WEDNESDAY,
    Day.THURSDAY,
    Day.FRIDAY,
)

PERIODS: Tuple[int, ...] = tuple(range(1, PERIODS_PER_DAY + 1))


@dataclass(frozen=True, eq=False)
class TimeSlot:
    day: Day
    period: int
    date: Optional[dt.date] = None

    def __eq__(self, other):
        if not isinstance(other, TimeSlot):
            return NotImplemented
        if self.date is not None and other.date is not None:
            return self.date == other.date and self.period == other.period
        return self.day == other.day and self.period == other.period

    def __hash__(self):
        # Equal slots always share a period, whichever comparison mode applies
        return hash(self.period)

    @property
    def key(self) -> Tuple[Day, int]:
        """Grid coordinate, ignoring any calendar date."""
        return (self.day, self.period)

    def without_date(self) -> "TimeSlot":
        return replace(self, date=None) if self.date is not None else self

    def with_date(self, on: Optional[dt.date]) -> "TimeSlot":
        return replace(self, date=on)

    def to_dict(self):
        return {
            "day": self.day.value,
            "period": self.period,
            "date": self.date.isoformat() if self.date else None,
        }

    @classmethod
    def from_dict(cls, data) -> "TimeSlot":
        raw_date = data.get("date")
        if isinstance(raw_date, str):
            raw_date = dt.date.fromisoformat(raw_date[:10])
        return cls(
            day=Day.parse(data["day"]),
            period=int(data["period"]),
            date=raw_date,
        )


def generate_all_time_slots() -> List[TimeSlot]:
    """Enumerate every assignable slot, day-major (40 in the default grid)."""
    return [TimeSlot(day, period) for day in WEEKDAYS for period in PERIODS]


ALL_TIME_SLOTS: Tuple[TimeSlot, ...] = tuple(generate_all_time_slots())


def slot_in(slot: TimeSlot, slots: Iterable[TimeSlot]) -> bool:
    """Membership test honouring the dated/recurring equality rules."""
    return any(slot == other for other in slots)


def format_time_slot(slot: TimeSlot) -> str:
    text = f"{slot.day.value}, Period {slot.period}"
    if slot.date is not None:
        text += f" ({slot.date.isoformat()})"
    return text


def calculate_consecutive_periods(periods: Iterable[int]) -> int:
    """Length of the longest run of consecutive period numbers."""
    ordered = sorted(set(periods))
    if not ordered:
        return 0

    longest = current = 1
    for previous, period in zip(ordered, ordered[1:]):
        if period == previous + 1:
            current += 1
            longest = max(longest, current)
        else:
            current = 1
    return longest
