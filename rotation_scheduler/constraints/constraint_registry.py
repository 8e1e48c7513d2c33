# rotation_scheduler/constraints/constraint_registry.py

"""
Constraint Registry - maps each constraint kind to its evaluator class and
instantiates evaluators for a list of definitions.

Definitions whose kind has no registered evaluator are kept but never
evaluated, which makes them count as satisfied.
"""

import logging
from typing import Dict, List, Optional, Type

from ..core.constraint_types import ConstraintDefinition, ConstraintKind
from .base_constraint import BaseConstraint
from .hard_constraints import (
    FixedSlotConstraint,
    PersonalConflictConstraint,
    DailyCapacityConstraint,
    WeeklyCapacityConstraint,
    ConsecutivePeriodsConstraint,
)
from .soft_constraints import PreferenceSlotConstraint, DailyWorkloadBalanceConstraint

logger = logging.getLogger(__name__)

DEFAULT_EVALUATORS: Dict[ConstraintKind, Type[BaseConstraint]] = {
    ConstraintKind.FIXED_SLOT: FixedSlotConstraint,
    ConstraintKind.PERSONAL_CONFLICT: PersonalConflictConstraint,
    ConstraintKind.DAILY_CAPACITY: DailyCapacityConstraint,
    ConstraintKind.WEEKLY_CAPACITY: WeeklyCapacityConstraint,
    ConstraintKind.CONSECUTIVE_PERIODS: ConsecutivePeriodsConstraint,
    ConstraintKind.PREFERENCE: PreferenceSlotConstraint,
    ConstraintKind.WORKLOAD_BALANCE: DailyWorkloadBalanceConstraint,
}


class ConstraintRegistry:
    """Registry of evaluator classes keyed by constraint kind."""

    def __init__(self, evaluators: Optional[Dict[ConstraintKind, Type[BaseConstraint]]] = None):
        self._evaluators: Dict[ConstraintKind, Type[BaseConstraint]] = dict(
            DEFAULT_EVALUATORS if evaluators is None else evaluators
        )

    def register(self, kind: ConstraintKind, evaluator: Type[BaseConstraint]) -> None:
        self._evaluators[kind] = evaluator
        logger.debug(f"Registered {evaluator.__name__} for {kind.value}")

    def unregister(self, kind: ConstraintKind) -> None:
        self._evaluators.pop(kind, None)

    def get_evaluator_class(self, kind: ConstraintKind) -> Optional[Type[BaseConstraint]]:
        return self._evaluators.get(kind)

    def build(self, definition: ConstraintDefinition) -> Optional[BaseConstraint]:
        """Instantiate the evaluator for one definition, None if the kind is unknown."""
        evaluator_class = self._evaluators.get(definition.kind)
        if evaluator_class is None:
            logger.warning(
                f"No evaluator for constraint '{definition.id}' "
                f"(kind {definition.kind.value}); treating it as satisfied"
            )
            return None
        return evaluator_class(definition)

    def build_all(
        self, definitions: List[ConstraintDefinition]
    ) -> List[Optional[BaseConstraint]]:
        """Evaluators aligned with ``definitions``."""
        return [self.build(definition) for definition in definitions]
