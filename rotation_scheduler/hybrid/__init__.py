# rotation_scheduler/hybrid/__init__.py

from .incremental_optimizer import (
    IncrementalOptimizer,
    LockedSelection,
    build_seed_chromosome,
    select_locked_assignments,
    validate_locked_assignments,
)

__all__ = [
    "IncrementalOptimizer",
    "LockedSelection",
    "build_seed_chromosome",
    "select_locked_assignments",
    "validate_locked_assignments",
]
