"""
Submission heatmap calculator.

Turns a list of submissions into a 53-week calendar grid of per-day values
for the selected show mode, and provides the tooltip and color functions a
grid renderer needs for each cell.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Callable, Optional

from src.problem_model import ProblemModel, calculate_top_player_equivalent_effort
from src.rating_color import rating_to_color_code
from src.submission import Submission, is_accepted

logger = logging.getLogger(__name__)

COLORS_COUNT = ["#ebedf0", "#c6e48b", "#7bc96f", "#239a3b", "#196127"]
COLORS_TEE = [
    "#ebedf0",
    "#c6e48b",
    "#7bc96f",
    "#239a3b",
    "#196127",
    "#0f3a17",
]
EMPTY_COLOR = COLORS_COUNT[0]

WEEKDAY = 7
WEEKS = 53
WINDOW_DAYS = WEEKS * WEEKDAY
TEE_DIGIT = 2
TEE_COLOR_RATIO = 180
UNKNOWN_DIFFICULTY = -1

DATE_FORMAT = "%Y-%m-%d"

EffortFunction = Callable[[ProblemModel], float]
RatingColorFunction = Callable[[float], str]


class Mode(str, Enum):
    """What a heatmap cell shows."""

    ALL_SUBMISSIONS = "Submissions"
    ALL_AC = "AC"
    UNIQUE_AC = "Unique AC"
    MAX_DIFFICULTY = "Max Difficulty"
    TEE = "TEE"

    @property
    def button_label(self) -> str:
        """Label for the mode selector."""
        return _BUTTON_LABELS[self]


_BUTTON_LABELS = {
    Mode.ALL_SUBMISSIONS: "All Submissions",
    Mode.ALL_AC: "All AC",
    Mode.UNIQUE_AC: "Unique AC",
    Mode.MAX_DIFFICULTY: "Max Difficulty",
    Mode.TEE: "TEE",
}


@dataclass(frozen=True)
class Cell:
    """One day of the heatmap. value is None when there is no data."""

    date: date
    value: Optional[float] = None

    @property
    def has_value(self) -> bool:
        return self.value is not None


def filter_submissions(submissions: list[Submission], mode: Mode) -> list[Submission]:
    """
    Select the submissions relevant to a mode.

    Unique AC and TEE keep a single accepted submission per problem, the one
    with the highest id.

    Args:
        submissions: Submissions in any order
        mode: Show mode

    Returns:
        New list of submissions
    """
    if mode == Mode.ALL_SUBMISSIONS:
        return list(submissions)

    accepted = [s for s in submissions if is_accepted(s.result)]
    if mode in (Mode.ALL_AC, Mode.MAX_DIFFICULTY):
        return accepted

    latest_by_problem: dict[str, Submission] = {}
    for submission in accepted:
        current = latest_by_problem.get(submission.problem_id)
        if current is None or submission.id > current.id:
            latest_by_problem[submission.problem_id] = submission
    return list(latest_by_problem.values())


def submission_date(submission: Submission) -> date:
    """Local calendar date of a submission."""
    return datetime.fromtimestamp(submission.epoch_second).date()


def bucket_by_date(submissions: list[Submission]) -> dict[date, list[Submission]]:
    """
    Group submissions by local calendar date, keeping input order per day.

    Days without submissions are absent from the mapping.
    """
    submissions_by_date: dict[date, list[Submission]] = {}
    for submission in submissions:
        submissions_by_date.setdefault(submission_date(submission), []).append(submission)
    return submissions_by_date


def get_next_sunday(today: date) -> date:
    """The first Sunday on or after today."""
    # date.weekday(): Monday is 0, Sunday is 6
    return today + timedelta(days=(6 - today.weekday()) % 7)


def build_window(today: Optional[date] = None) -> list[date]:
    """
    Build the dates covered by the heatmap.

    The window holds 53 full weeks and ends on the next Sunday, so the grid's
    last column is always the current week.

    Args:
        today: Override for today's date (for testing). A datetime is
            truncated to its date.

    Returns:
        List of 371 dates from oldest to newest
    """
    if today is None:
        today = date.today()
    elif isinstance(today, datetime):
        today = today.date()

    next_sunday = get_next_sunday(today)
    # Lower boundary is exclusive: the first cell is the day after it
    boundary = next_sunday - timedelta(days=WINDOW_DAYS)
    return [boundary + timedelta(days=i) for i in range(1, WINDOW_DAYS + 1)]


def _count_value(submissions: list[Submission]) -> Optional[int]:
    return len(submissions) or None


def _max_difficulty_value(
    submissions: list[Submission],
    problem_models: dict[str, ProblemModel],
) -> Optional[float]:
    if not submissions:
        return None

    difficulties = []
    for submission in submissions:
        model = problem_models.get(submission.problem_id)
        if model is None or model.difficulty is None:
            difficulties.append(UNKNOWN_DIFFICULTY)
        else:
            difficulties.append(model.difficulty)
    return max(difficulties)


def _tee_value(
    submissions: list[Submission],
    problem_models: dict[str, ProblemModel],
    effort_fn: EffortFunction,
) -> Optional[float]:
    if not submissions:
        return None

    total = 0.0
    for submission in submissions:
        model = problem_models.get(submission.problem_id)
        if model is not None and model.has_time_model:
            total += effort_fn(model)

    # A day with no measurable effort looks the same as a day without submissions
    if total == 0:
        return None
    return total


def reduce_day(
    submissions: Optional[list[Submission]],
    mode: Mode,
    problem_models: Optional[dict[str, ProblemModel]] = None,
    effort_fn: EffortFunction = calculate_top_player_equivalent_effort,
) -> Optional[float]:
    """
    Reduce one day's submissions to the cell value for a mode.

    Args:
        submissions: The day's filtered submissions, or None for an empty day
        mode: Show mode
        problem_models: Mapping of problem_id -> ProblemModel
        effort_fn: Effort of a problem with a time model (TEE mode only)

    Returns:
        Cell value, or None if the day has no value
    """
    submissions = submissions or []
    problem_models = problem_models or {}

    if mode == Mode.MAX_DIFFICULTY:
        return _max_difficulty_value(submissions, problem_models)
    if mode == Mode.TEE:
        return _tee_value(submissions, problem_models, effort_fn)
    return _count_value(submissions)


def _format_number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_count_tooltip(date_str: str, count: int, mode: Mode) -> str:
    """Tooltip text for count based modes."""
    if mode == Mode.ALL_SUBMISSIONS:
        if count == 1:
            return f"{date_str} {count} submission"
        return f"{date_str} {count} submissions"
    return f"{date_str} {count} {mode.value}"


def format_tooltip(mode: Mode) -> Callable[[str, float], str]:
    """Get the tooltip formatter for a mode."""
    if mode == Mode.MAX_DIFFICULTY:
        return lambda date_str, difficulty: (
            f"{date_str} Max Difficulty: "
            f"{_format_number(difficulty) if difficulty >= 0 else '-'}"
        )
    if mode == Mode.TEE:
        return lambda date_str, tee: f"{date_str} TEE: {tee:.{TEE_DIGIT}f}"
    return lambda date_str, count: format_count_tooltip(date_str, int(count), mode)


def _count_color(count: float) -> str:
    return COLORS_COUNT[min(int(count), len(COLORS_COUNT) - 1)]


def _tee_color(tee: float) -> str:
    # Band 0 is reserved for empty days
    band = math.floor(tee / TEE_COLOR_RATIO) + 1
    return COLORS_TEE[min(band, len(COLORS_TEE) - 1)]


def get_color(
    mode: Mode,
    rating_color_fn: RatingColorFunction = rating_to_color_code,
) -> Callable[[str, float], str]:
    """Get the cell color function for a mode."""
    if mode == Mode.MAX_DIFFICULTY:
        return lambda date_str, difficulty: rating_color_fn(difficulty)
    if mode == Mode.TEE:
        return lambda date_str, tee: _tee_color(tee)
    return lambda date_str, count: _count_color(count)


@dataclass(frozen=True)
class ModeStrategy:
    """Everything that depends on the selected mode."""

    mode: Mode
    filter: Callable[[list[Submission]], list[Submission]]
    reduce: Callable[[Optional[list[Submission]], dict[str, ProblemModel]], Optional[float]]
    format_tooltip: Callable[[str, float], str]
    get_color: Callable[[str, float], str]


def get_strategy(
    mode: Mode,
    effort_fn: EffortFunction = calculate_top_player_equivalent_effort,
    rating_color_fn: RatingColorFunction = rating_to_color_code,
) -> ModeStrategy:
    """
    Build the filter, reduce, tooltip and color functions for a mode.

    Args:
        mode: Show mode
        effort_fn: Effort of a problem with a time model
        rating_color_fn: Color code for a difficulty rating

    Returns:
        ModeStrategy bundling the four functions
    """
    mode = Mode(mode)
    return ModeStrategy(
        mode=mode,
        filter=lambda submissions: filter_submissions(submissions, mode),
        reduce=lambda submissions, models: reduce_day(submissions, mode, models, effort_fn),
        format_tooltip=format_tooltip(mode),
        get_color=get_color(mode, rating_color_fn),
    )


def render_cell(cell: Cell, strategy: ModeStrategy) -> dict:
    """
    Convert a cell to what the grid renderer draws.

    Cells without a value show only their date and use the empty color.
    """
    date_str = cell.date.strftime(DATE_FORMAT)
    if not cell.has_value:
        return {"date": date_str, "value": None, "tooltip": date_str, "color": EMPTY_COLOR}

    return {
        "date": date_str,
        "value": cell.value,
        "tooltip": strategy.format_tooltip(date_str, cell.value),
        "color": strategy.get_color(date_str, cell.value),
    }


def create_table_data(
    filtered_submissions: list[Submission],
    strategy: ModeStrategy,
    problem_models: Optional[dict[str, ProblemModel]] = None,
    today: Optional[date] = None,
) -> list[Cell]:
    """
    Build one cell per day of the window from already filtered submissions.

    Args:
        filtered_submissions: Output of strategy.filter
        strategy: ModeStrategy of the show mode
        problem_models: Mapping of problem_id -> ProblemModel
        today: Override for today's date (for testing)

    Returns:
        List of 371 cells from oldest to newest
    """
    problem_models = problem_models or {}
    submissions_by_date = bucket_by_date(filtered_submissions)
    return [
        Cell(date=day, value=strategy.reduce(submissions_by_date.get(day), problem_models))
        for day in build_window(today)
    ]


def calculate_heatmap(
    submissions: list[Submission],
    mode: Mode = Mode.ALL_SUBMISSIONS,
    problem_models: Optional[dict[str, ProblemModel]] = None,
    today: Optional[date] = None,
    effort_fn: EffortFunction = calculate_top_player_equivalent_effort,
    rating_color_fn: RatingColorFunction = rating_to_color_code,
) -> dict:
    """
    Calculate the heatmap for display.

    Args:
        submissions: Submissions in any order
        mode: Show mode
        problem_models: Mapping of problem_id -> ProblemModel
        today: Override for today's date (for testing)
        effort_fn: Effort of a problem with a time model
        rating_color_fn: Color code for a difficulty rating

    Returns:
        Dictionary with:
            - mode: The show mode value
            - cells: List of {date, value, tooltip, color} for each day
            - columns / rows: Grid shape (53 weeks x 7 days)
            - period: Start/end dates and total days
            - max_value: Largest cell value, or None
            - active_days: Number of cells with a value
    """
    if today is None:
        today = date.today()

    strategy = get_strategy(mode, effort_fn=effort_fn, rating_color_fn=rating_color_fn)
    filtered = strategy.filter(submissions)
    cells = create_table_data(filtered, strategy, problem_models, today)
    logger.debug(
        "Heatmap %s: %d of %d submissions kept", strategy.mode.value, len(filtered), len(submissions)
    )

    values = [cell.value for cell in cells if cell.has_value]

    return {
        "mode": strategy.mode.value,
        "cells": [render_cell(cell, strategy) for cell in cells],
        "columns": WEEKS,
        "rows": WEEKDAY,
        "period": {
            "start": cells[0].date.isoformat(),
            "end": cells[-1].date.isoformat(),
            "total_days": len(cells),
        },
        "max_value": max(values) if values else None,
        "active_days": len(values),
    }
