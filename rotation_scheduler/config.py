# rotation_scheduler/config.py

"""
Configuration module for the rotation scheduler.
Holds the genetic algorithm parameters and the fitness scoring constants.
"""

from typing import Dict, Any, Optional
from dataclasses import dataclass, field, fields, asdict
import logging

from .core.exceptions import InvalidConfigurationError


@dataclass
class FitnessConstants:
    """Scoring constants used by the fitness evaluator"""

    base_fitness: float = 1000.0
    hard_constraint_penalty: float = 500.0
    soft_constraint_reward: float = 50.0


@dataclass
class GeneticAlgorithmConfig:
    """Configuration for the genetic algorithm"""

    population_size: int = 100
    generations: int = 100
    tournament_size: int = 5
    crossover_rate: float = 0.8
    mutation_rate: float = 0.2
    elitism_count: int = 1

    # Re-optimization explores harder around the locked assignments
    reoptimize_mutation_multiplier: float = 1.5
    reoptimize_mutation_cap: float = 0.5

    # Performance settings
    enable_parallel_evaluation: bool = False
    max_workers: Optional[int] = None

    def validate(self) -> None:
        """Raise InvalidConfigurationError if any parameter is out of range."""
        problems: Dict[str, Any] = {}
        if self.population_size < 1:
            problems["population_size"] = self.population_size
        if self.generations < 0:
            problems["generations"] = self.generations
        if self.tournament_size < 1:
            problems["tournament_size"] = self.tournament_size
        if not 1 <= self.elitism_count <= max(1, self.population_size):
            problems["elitism_count"] = self.elitism_count
        for name in ("crossover_rate", "mutation_rate", "reoptimize_mutation_cap"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                problems[name] = value
        if self.max_workers is not None and self.max_workers < 1:
            problems["max_workers"] = self.max_workers

        if problems:
            raise InvalidConfigurationError(
                f"Invalid genetic algorithm parameters: {sorted(problems)}",
                details=problems,
            )

    def reoptimization_mutation_rate(self) -> float:
        return min(
            self.mutation_rate * self.reoptimize_mutation_multiplier,
            self.reoptimize_mutation_cap,
        )

    def updated(self, **changes: Any) -> "GeneticAlgorithmConfig":
        """Return a validated copy with the given parameters replaced."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise InvalidConfigurationError(
                f"Unknown genetic algorithm parameters: {unknown}",
                details={"unknown": unknown},
            )
        merged = asdict(self)
        merged.update(changes)
        new_config = GeneticAlgorithmConfig(**merged)
        new_config.validate()
        return new_config


@dataclass
class SchedulingEngineConfig:
    """Main configuration for the rotation scheduler"""

    genetic_algorithm: GeneticAlgorithmConfig = field(
        default_factory=GeneticAlgorithmConfig
    )
    fitness: FitnessConstants = field(default_factory=FitnessConstants)

    # Global settings
    enable_logging: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SchedulingEngineConfig":
        """Build a config from plain data, e.g. a parsed settings file."""
        ga_data = data.get("genetic_algorithm", {})
        fitness_data = data.get("fitness", {})
        try:
            ga_config = GeneticAlgorithmConfig(**ga_data)
            fitness = FitnessConstants(**fitness_data)
        except TypeError as e:
            raise InvalidConfigurationError(
                f"Malformed configuration: {e}", cause=e
            ) from e
        ga_config.validate()

        return cls(
            genetic_algorithm=ga_config,
            fitness=fitness,
            enable_logging=data.get("enable_logging", True),
            log_level=str(data.get("log_level", "INFO")).upper(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# Global default configuration
config = SchedulingEngineConfig()


PACKAGE_LOGGER_NAME = "rotation_scheduler"


def get_logger(name: str) -> logging.Logger:
    """
    Get configured logger for the rotation scheduler.

    Names are placed under the package logger. A console handler is attached
    to the package logger only when nothing up the hierarchy handles records
    yet, and setup_logging replaces it.
    """
    if name != PACKAGE_LOGGER_NAME and not name.startswith(PACKAGE_LOGGER_NAME + "."):
        name = f"{PACKAGE_LOGGER_NAME}.{name}"
    logger = logging.getLogger(name)
    if config.enable_logging and not logger.hasHandlers():
        package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)
        handler._rotation_scheduler = True
        package_logger.addHandler(handler)
        package_logger.setLevel(getattr(logging, config.log_level, logging.INFO))
    return logger
