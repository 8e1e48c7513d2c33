# rotation_scheduler/tests/conftest.py

"""
Pytest configuration and fixtures for rotation scheduler tests.
"""

import logging

import pytest

from rotation_scheduler.config import GeneticAlgorithmConfig, SchedulingEngineConfig
from rotation_scheduler.core.problem_model import Activity
from rotation_scheduler.core.time_grid import Day, TimeSlot
from rotation_scheduler.genetic_algorithm.random_source import RandomSource

# Configure logging for tests
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


def _numbered_activities(count, prefix="class"):
    return [Activity(id=f"{prefix}{i}", name=f"Class {i}") for i in range(1, count + 1)]


@pytest.fixture
def make_activities():
    """Builds ``count`` unconstrained activities with ids class1..classN"""
    return _numbered_activities


@pytest.fixture
def rng():
    """Seeded random source so runs are reproducible"""
    return RandomSource(seed=42)


@pytest.fixture
def activities():
    return _numbered_activities(6)


@pytest.fixture
def monday_one():
    return TimeSlot(Day.MONDAY, 1)


@pytest.fixture
def small_config():
    """Engine config small enough for fast unit tests"""
    return SchedulingEngineConfig(
        genetic_algorithm=GeneticAlgorithmConfig(
            population_size=20, generations=15, tournament_size=3
        )
    )
