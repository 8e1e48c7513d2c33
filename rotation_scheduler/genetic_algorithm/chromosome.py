# rotation_scheduler/genetic_algorithm/chromosome.py

"""
Chromosome representation for the weekly schedule.

A chromosome holds exactly one gene (Assignment) per activity it was built
with. Coverage is repaired on construction and on every set_genes call:
missing activities are placed with choose_slot, duplicate genes and genes for
unknown activities are dropped.

Placement never fails. When the grid is saturated a gene lands on a random
slot, possibly a conflicting one, and the fitness evaluator reports it as a
hard violation.

Genes stay recurring (undated). A chromosome built with a rotation start
judges legality against the date each slot falls on in that week.
"""

import copy
import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from ..core.calendar import slot_for_rotation
from ..core.problem_model import Activity, Assignment
from ..core.time_grid import ALL_TIME_SLOTS, Day, TimeSlot
from .random_source import RandomSource, ensure_random_source

logger = logging.getLogger(__name__)

SlotKey = Tuple[Day, int]


class PlacementTier(Enum):
    FREE_AND_LEGAL = "free_and_legal"  # unused and outside the activity's conflicts
    FREE_ONLY = "free_only"  # unused but conflicting
    SATURATED_RANDOM = "saturated_random"  # every slot used, random pick


@dataclass(frozen=True)
class Placement:
    time_slot: TimeSlot
    tier: PlacementTier


def choose_slot(
    activity: Activity,
    occupied: Set[SlotKey],
    rng: RandomSource,
    universe: Sequence[TimeSlot] = ALL_TIME_SLOTS,
    rotation_start: Optional[date] = None,
) -> Placement:
    """Pick a slot for ``activity`` given the grid positions already in use."""
    free = [slot for slot in universe if slot.key not in occupied]
    legal = [
        slot
        for slot in free
        if not activity.conflicts_with(slot_for_rotation(slot, rotation_start))
    ]

    if legal:
        return Placement(rng.choice(legal), PlacementTier.FREE_AND_LEGAL)
    if free:
        return Placement(rng.choice(free), PlacementTier.FREE_ONLY)

    logger.debug(f"Grid saturated, placing {activity.id} on a random slot")
    return Placement(rng.choice(universe), PlacementTier.SATURATED_RANDOM)


class Chromosome:
    """One candidate schedule: a gene per activity plus cached fitness."""

    def __init__(
        self,
        activities: Sequence[Activity],
        initial_genes: Optional[Iterable[Assignment]] = None,
        rng: Optional[RandomSource] = None,
        rotation_start: Optional[date] = None,
    ):
        self.activities: List[Activity] = list(activities)
        self.rotation_start = rotation_start
        self._activity_index: Dict[str, Activity] = {a.id: a for a in self.activities}
        self.rng = ensure_random_source(rng)
        self.genes: List[Assignment] = []

        # Written by the fitness evaluator only
        self.fitness: float = 0.0
        self.hard_violations: int = 0

        if initial_genes is not None:
            self.set_genes(initial_genes)
        else:
            self._initialize_random()

    def _initialize_random(self) -> None:
        self.genes = []
        occupied: Set[SlotKey] = set()
        for activity in self.rng.shuffled(self.activities):
            placement = self._place(activity, occupied)
            occupied.add(placement.time_slot.key)
            self.genes.append(Assignment(activity.id, placement.time_slot))

    def _repair(self, genes: Iterable[Assignment]) -> None:
        seen: Set[str] = set()
        repaired: List[Assignment] = []
        for gene in genes:
            if gene.activity_id not in self._activity_index:
                continue
            if gene.activity_id in seen:
                continue
            seen.add(gene.activity_id)
            repaired.append(Assignment(gene.activity_id, gene.time_slot))

        occupied = {gene.time_slot.key for gene in repaired}
        missing = [a for a in self.activities if a.id not in seen]
        for activity in self.rng.shuffled(missing):
            placement = self._place(activity, occupied)
            occupied.add(placement.time_slot.key)
            repaired.append(Assignment(activity.id, placement.time_slot))

        self.genes = repaired

    def _place(self, activity: Activity, occupied: Set[SlotKey]) -> Placement:
        return choose_slot(
            activity, occupied, self.rng, rotation_start=self.rotation_start
        )

    def get_genes(self) -> List[Assignment]:
        return [Assignment(g.activity_id, g.time_slot) for g in self.genes]

    def set_genes(self, genes: Iterable[Assignment]) -> None:
        self._repair(genes)

    def get_activity(self, activity_id: str) -> Optional[Activity]:
        return self._activity_index.get(activity_id)

    def get_assignment_for_activity(self, activity_id: str) -> Optional[Assignment]:
        for gene in self.genes:
            if gene.activity_id == activity_id:
                return gene
        return None

    def get_activity_for_slot(self, slot: TimeSlot) -> Optional[str]:
        for gene in self.genes:
            if gene.time_slot == slot:
                return gene.activity_id
        return None

    def is_slot_available(self, slot: TimeSlot) -> bool:
        return self.get_activity_for_slot(slot) is None

    def occupied_keys(self) -> Set[SlotKey]:
        return {g.time_slot.key for g in self.genes}

    def update_assignment(self, activity_id: str, slot: TimeSlot) -> bool:
        """Place ``activity_id`` on ``slot``; False if another activity holds it."""
        holder = self.get_activity_for_slot(slot)
        if holder is not None and holder != activity_id:
            return False

        for index, gene in enumerate(self.genes):
            if gene.activity_id == activity_id:
                self.genes[index] = Assignment(activity_id, slot)
                return True
        self.genes.append(Assignment(activity_id, slot))
        return True

    def swap_assignments(self, first_id: str, second_id: str) -> bool:
        first = second = None
        for index, gene in enumerate(self.genes):
            if gene.activity_id == first_id:
                first = index
            elif gene.activity_id == second_id:
                second = index
        if first is None or second is None:
            return False

        first_slot = self.genes[first].time_slot
        self.genes[first] = Assignment(first_id, self.genes[second].time_slot)
        self.genes[second] = Assignment(second_id, first_slot)
        return True

    def resolve_collisions(self, frozen_ids: Iterable[str] = ()) -> int:
        """
        Move every gene that shares a grid position with another onto a free
        slot, using the same placement order as repair. Frozen genes keep
        their slot. Returns the number of genes moved.
        """
        frozen = set(frozen_ids)
        occupied: Set[SlotKey] = {
            g.time_slot.key for g in self.genes if g.activity_id in frozen
        }
        colliding: List[int] = []
        for index, gene in enumerate(self.genes):
            if gene.activity_id in frozen:
                continue
            if gene.time_slot.key in occupied:
                colliding.append(index)
            else:
                occupied.add(gene.time_slot.key)

        for index in colliding:
            activity = self._activity_index[self.genes[index].activity_id]
            placement = self._place(activity, occupied)
            occupied.add(placement.time_slot.key)
            self.genes[index] = Assignment(activity.id, placement.time_slot)
        return len(colliding)

    def clone(self) -> "Chromosome":
        twin = copy.copy(self)
        twin.genes = [Assignment(g.activity_id, g.time_slot) for g in self.genes]
        return twin

    def signature(self) -> Tuple[Tuple[str, SlotKey], ...]:
        """Hashable view of the gene list, used for diversity statistics."""
        return tuple(sorted((g.activity_id, g.time_slot.key) for g in self.genes))

    def __len__(self) -> int:
        return len(self.genes)

    def __repr__(self) -> str:
        return f"Chromosome(genes={len(self.genes)}, fitness={self.fitness})"
