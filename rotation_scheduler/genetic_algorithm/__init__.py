# rotation_scheduler/genetic_algorithm/__init__.py

"""
Genetic algorithm: chromosome encoding, fitness, population and evolution loop
"""

from .random_source import RandomSource
from .chromosome import Chromosome, Placement, PlacementTier, choose_slot
from .fitness import FitnessEvaluator, FitnessResult
from .population import Population
from .operators import (
    UniformGeneCrossover,
    ScheduleMutation,
    TournamentSelection,
    create_toolbox,
)
from .evolution_manager import GeneticAlgorithm, EvolutionResult, EvolutionStatistics

__all__ = [
    "RandomSource",
    "Chromosome",
    "Placement",
    "PlacementTier",
    "choose_slot",
    "FitnessEvaluator",
    "FitnessResult",
    "Population",
    "UniformGeneCrossover",
    "ScheduleMutation",
    "TournamentSelection",
    "create_toolbox",
    "GeneticAlgorithm",
    "EvolutionResult",
    "EvolutionStatistics",
]
