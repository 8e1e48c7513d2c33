# rotation_scheduler/__init__.py

"""
Rotation Scheduler Package Initialization

Genetic-algorithm scheduling of recurring classes onto a weekly grid of
5 days by 8 periods, with constrained re-optimization around locked
assignments.
"""

from .config import (
    SchedulingEngineConfig,
    GeneticAlgorithmConfig,
    FitnessConstants,
    get_logger,
)
from .core import (
    Day,
    TimeSlot,
    Activity,
    Assignment,
    SlotPreference,
    Schedule,
    ValidationResult,
    ConstraintType,
    ConstraintDefinition,
    ConstraintViolation,
    SchedulerError,
    NoActivitiesError,
    NoScheduleError,
    LockedAssignmentConflictError,
    InvalidConfigurationError,
    generate_all_time_slots,
)
from .constraints import HardConstraints, SoftConstraints, SchedulingConstraints
from .genetic_algorithm import (
    Chromosome,
    FitnessEvaluator,
    GeneticAlgorithm,
    Population,
    RandomSource,
)
from .scheduler import RotationScheduler

__version__ = "1.0.0"

# Package-level exports
__all__ = [
    # Configuration
    "SchedulingEngineConfig",
    "GeneticAlgorithmConfig",
    "FitnessConstants",
    "get_logger",
    # Core model
    "Day",
    "TimeSlot",
    "Activity",
    "Assignment",
    "SlotPreference",
    "Schedule",
    "ValidationResult",
    "ConstraintType",
    "ConstraintDefinition",
    "ConstraintViolation",
    "generate_all_time_slots",
    # Errors
    "SchedulerError",
    "NoActivitiesError",
    "NoScheduleError",
    "LockedAssignmentConflictError",
    "InvalidConfigurationError",
    # Constraint configuration
    "HardConstraints",
    "SoftConstraints",
    "SchedulingConstraints",
    # Engine
    "Chromosome",
    "FitnessEvaluator",
    "GeneticAlgorithm",
    "Population",
    "RandomSource",
    "RotationScheduler",
]
