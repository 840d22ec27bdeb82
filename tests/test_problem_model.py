"""
Tests for problem models and effort calculation.
"""

import math

import pytest

from src.problem_model import (
    TOP_PLAYER_RATING,
    ProblemModel,
    calculate_top_player_equivalent_effort,
    parse_problem_models,
    predict_solve_time,
)


class TestProblemModel:
    """Tests for the ProblemModel dataclass."""

    def test_has_time_model(self):
        model = ProblemModel(difficulty=1000, slope=-0.0005, intercept=8.0, variance=0.3)

        assert model.has_time_model is True

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"intercept": 8.0, "variance": 0.3},
            {"slope": -0.0005, "variance": 0.3},
            {"slope": -0.0005, "intercept": 8.0},
            {},
        ],
    )
    def test_incomplete_time_model(self, kwargs):
        assert ProblemModel(difficulty=1000, **kwargs).has_time_model is False


class TestParseProblemModels:
    """Tests for the parse_problem_models function."""

    def test_parses_models(self):
        """Fields outside difficulty and the time model are ignored."""
        raw = {
            "abc138_a": {
                "slope": -0.0006,
                "intercept": 8.5,
                "variance": 0.25,
                "difficulty": -1046,
                "discrimination": 0.004,
                "irt_loglikelihood": -48.1,
                "irt_users": 4929,
                "is_experimental": False,
            },
            "agc001_f": {"difficulty": 3620, "is_experimental": True},
        }

        models = parse_problem_models(raw)

        assert models["abc138_a"] == ProblemModel(
            difficulty=-1046,
            slope=-0.0006,
            intercept=8.5,
            variance=0.25,
        )
        assert models["agc001_f"].difficulty == 3620
        assert models["agc001_f"].has_time_model is False

    def test_ignores_malformed_entries(self):
        models = parse_problem_models({"abc001_a": None, "abc001_b": {"difficulty": 10}})

        assert list(models) == ["abc001_b"]

    def test_empty_payload(self):
        assert parse_problem_models({}) == {}


class TestEffort:
    """Tests for solve time prediction and TEE."""

    def test_predict_solve_time(self):
        model = ProblemModel(slope=-0.001, intercept=10.0, variance=0.1)

        assert predict_solve_time(model, 2000) == pytest.approx(math.exp(8.0))

    def test_top_player_equivalent_effort(self):
        model = ProblemModel(slope=-0.001, intercept=10.0, variance=0.1)

        assert TOP_PLAYER_RATING == 4000
        assert calculate_top_player_equivalent_effort(model) == pytest.approx(math.exp(6.0))

    def test_effort_is_positive(self):
        model = ProblemModel(slope=-0.01, intercept=-5.0, variance=0.1)

        assert calculate_top_player_equivalent_effort(model) > 0
