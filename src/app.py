"""
FastAPI web application for submission-heatmap.

Provides REST API endpoints that turn submissions into heatmap cells.
"""

import logging
from datetime import date
from typing import Any

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from src import config
from src.heatmap import Mode, calculate_heatmap
from src.problem_model import parse_problem_models
from src.submission import parse_submissions

_log_level = logging.getLevelName(config.LOG_LEVEL.upper())
logging.basicConfig(level=_log_level if isinstance(_log_level, int) else logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="submission-heatmap",
    description="Calendar heatmap of competitive programming submissions",
    version="0.1.0",
)


class HeatmapRequest(BaseModel):
    """Request model for computing a heatmap."""

    submissions: list[dict[str, Any]] = Field(
        default_factory=list, description="Records in the submission API format"
    )
    problem_models: dict[str, Any] = Field(
        default_factory=dict, description="problem-models.json payload"
    )
    mode: Mode | None = Field(None, description="Show mode; defaults to HEATMAP_DEFAULT_MODE")
    today: date | None = Field(None, description="Override for today's date")


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


def _default_mode() -> Mode:
    """
    Get the configured default mode.

    Raises:
        HTTPException: on configuration errors
    """
    try:
        config.validate_config()
    except ValueError as e:
        raise HTTPException(status_code=500, detail=f"Configuration error: {e}")
    return Mode(config.HEATMAP_DEFAULT_MODE)


@app.get("/api/modes")
def get_modes():
    """
    Get the available show modes.

    Returns:
        JSON with each mode's value and button label, plus the default mode
    """
    return {
        "modes": [{"value": mode.value, "label": mode.button_label} for mode in Mode],
        "default": _default_mode().value,
    }


@app.post("/api/heatmap")
def get_heatmap(request: HeatmapRequest):
    """
    Compute heatmap cells for the given submissions.

    Submission records missing required fields, or with values that do not
    convert, are skipped.

    Args:
        request: HeatmapRequest with submissions, problem models and mode

    Returns:
        JSON with 371 cells (date, value, tooltip, color), grid shape and period
    """
    mode = request.mode or _default_mode()

    submissions = parse_submissions(request.submissions)
    problem_models = parse_problem_models(request.problem_models)

    logger.info(
        "Computing %s heatmap for %d of %d submissions",
        mode.value,
        len(submissions),
        len(request.submissions),
    )
    return calculate_heatmap(
        submissions,
        mode=mode,
        problem_models=problem_models,
        today=request.today,
    )
