# rotation_scheduler/tests/unit/test_config.py

"""
Tests for engine configuration and error payloads.
"""

import pytest

from rotation_scheduler.config import GeneticAlgorithmConfig, SchedulingEngineConfig
from rotation_scheduler.core.exceptions import (
    InvalidConfigurationError,
    LockedAssignmentConflictError,
    NoActivitiesError,
)


class TestGeneticAlgorithmConfig:
    def test_defaults(self):
        ga = GeneticAlgorithmConfig()
        assert ga.population_size == 100
        assert ga.generations == 100
        assert ga.tournament_size == 5
        assert ga.crossover_rate == 0.8
        assert ga.mutation_rate == 0.2

    @pytest.mark.parametrize("rate, expected", [(0.2, 0.3), (0.3, 0.45), (0.4, 0.5)])
    def test_reoptimization_mutation_rate(self, rate, expected):
        ga = GeneticAlgorithmConfig(mutation_rate=rate)
        assert ga.reoptimization_mutation_rate() == pytest.approx(expected)

    def test_updated_returns_copy(self):
        ga = GeneticAlgorithmConfig()
        changed = ga.updated(population_size=30, mutation_rate=0.1)

        assert changed.population_size == 30
        assert changed.mutation_rate == 0.1
        assert ga.population_size == 100

    def test_updated_rejects_unknown_parameter(self):
        with pytest.raises(InvalidConfigurationError) as exc_info:
            GeneticAlgorithmConfig().updated(elitism=3)
        assert exc_info.value.details == {"unknown": ["elitism"]}

    @pytest.mark.parametrize(
        "changes",
        [
            {"population_size": 0},
            {"mutation_rate": 1.5},
            {"tournament_size": 0},
            {"elitism_count": 0},
            {"population_size": 4, "elitism_count": 5},
        ],
    )
    def test_updated_rejects_out_of_range(self, changes):
        with pytest.raises(InvalidConfigurationError):
            GeneticAlgorithmConfig().updated(**changes)


class TestSchedulingEngineConfig:
    def test_from_dict(self):
        config = SchedulingEngineConfig.from_dict(
            {
                "genetic_algorithm": {"population_size": 50, "generations": 10},
                "fitness": {"hard_constraint_penalty": 400},
                "log_level": "debug",
            }
        )
        assert config.genetic_algorithm.population_size == 50
        assert config.fitness.hard_constraint_penalty == 400
        assert config.fitness.base_fitness == 1000
        assert config.log_level == "DEBUG"

    def test_from_dict_rejects_unknown_keys(self):
        with pytest.raises(InvalidConfigurationError):
            SchedulingEngineConfig.from_dict({"genetic_algorithm": {"islands": 4}})

    def test_to_dict(self):
        data = SchedulingEngineConfig().to_dict()
        assert data["genetic_algorithm"]["crossover_rate"] == 0.8
        assert data["fitness"]["soft_constraint_reward"] == 50


class TestErrors:
    def test_error_codes(self):
        assert NoActivitiesError().code == "NO_ACTIVITIES"
        assert InvalidConfigurationError("bad").code == "INVALID_CONFIG"

    def test_locked_conflict_payload(self):
        error = LockedAssignmentConflictError("clash", activity_ids=["a", "b"])
        payload = error.to_dict()["error"]

        assert payload["code"] == "LOCKED_CONFLICT"
        assert payload["message"] == "clash"
        assert error.context["activity_ids"] == ["a", "b"]
