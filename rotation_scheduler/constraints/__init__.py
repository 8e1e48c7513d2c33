# rotation_scheduler/constraints/__init__.py

"""
Constraint evaluators and the configuration-to-constraint translation layer
"""

from .base_constraint import BaseConstraint, EvaluationContext
from .constraint_registry import ConstraintRegistry
from .constraint_builder import (
    HardConstraints,
    SoftConstraints,
    SchedulingConstraints,
    build_constraints,
)

__all__ = [
    "BaseConstraint",
    "EvaluationContext",
    "ConstraintRegistry",
    "HardConstraints",
    "SoftConstraints",
    "SchedulingConstraints",
    "build_constraints",
]
