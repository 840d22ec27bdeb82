"""
Problem difficulty models.

Problem models come from the problem-models.json resource and carry an
estimated difficulty and, for most problems, a solve-time model used to
compute top player equivalent effort (TEE).
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

# Internal rating of a top player, used to evaluate the time model
TOP_PLAYER_RATING = 4000


@dataclass(frozen=True)
class ProblemModel:
    """Difficulty and time model for a single problem."""

    difficulty: Optional[float] = None
    slope: Optional[float] = None
    intercept: Optional[float] = None
    variance: Optional[float] = None

    @property
    def has_time_model(self) -> bool:
        """Whether the model can predict solve times."""
        return (
            self.slope is not None
            and self.intercept is not None
            and self.variance is not None
        )


def parse_problem_models(raw: dict) -> dict[str, ProblemModel]:
    """
    Parse the problem-models.json payload.

    Args:
        raw: Mapping of problem_id -> model dict

    Returns:
        Mapping of problem_id -> ProblemModel
    """
    models = {}
    for problem_id, data in raw.items():
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed model for problem %s", problem_id)
            continue
        models[problem_id] = ProblemModel(
            difficulty=data.get("difficulty"),
            slope=data.get("slope"),
            intercept=data.get("intercept"),
            variance=data.get("variance"),
        )
    return models


def predict_solve_time(model: ProblemModel, internal_rating: float) -> float:
    """Predicted solve time in seconds for a player of the given internal rating."""
    return math.exp(model.slope * internal_rating + model.intercept)


def calculate_top_player_equivalent_effort(model: ProblemModel) -> float:
    """
    Calculate the top player equivalent effort of a problem.

    TEE is the time a top player is predicted to need to solve the problem.
    Only defined for models with a time model.
    """
    return predict_solve_time(model, TOP_PLAYER_RATING)
