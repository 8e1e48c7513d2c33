# rotation_scheduler/core/problem_model.py

"""
Problem entities: the activities to place and their slot assignments.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .time_grid import TimeSlot, slot_in


@dataclass
class Activity:
    """A recurring class that needs exactly one weekly slot."""

    id: str
    name: str
    conflicts: List[TimeSlot] = field(default_factory=list)
    preferred: List[TimeSlot] = field(default_factory=list)
    not_preferred: List[TimeSlot] = field(default_factory=list)

    def conflicts_with(self, slot: TimeSlot) -> bool:
        return slot_in(slot, self.conflicts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "conflicts": [s.to_dict() for s in self.conflicts],
            "preferences": {
                "preferred": [s.to_dict() for s in self.preferred],
                "not_preferred": [s.to_dict() for s in self.not_preferred],
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Activity":
        preferences = data.get("preferences") or {}
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", data["id"])),
            conflicts=[TimeSlot.from_dict(s) for s in data.get("conflicts", [])],
            preferred=[
                TimeSlot.from_dict(s) for s in preferences.get("preferred", [])
            ],
            not_preferred=[
                TimeSlot.from_dict(s) for s in preferences.get("not_preferred", [])
            ],
        )


@dataclass
class Assignment:
    """One gene: an activity placed on a slot."""

    activity_id: str
    time_slot: TimeSlot

    def to_dict(self) -> Dict[str, Any]:
        return {"activity_id": self.activity_id, "time_slot": self.time_slot.to_dict()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Assignment":
        return cls(
            activity_id=str(data["activity_id"]),
            time_slot=TimeSlot.from_dict(data["time_slot"]),
        )


@dataclass
class SlotPreference:
    """A teacher's wish about where a given activity should (not) go."""

    activity_id: str
    time_slot: TimeSlot

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SlotPreference":
        return cls(
            activity_id=str(data["activity_id"]),
            time_slot=TimeSlot.from_dict(data["time_slot"]),
        )
