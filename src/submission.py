"""
Parse submissions from AtCoder Problems API responses.
"""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

ACCEPTED = "AC"


@dataclass(frozen=True)
class Submission:
    """A single judged submission."""

    id: int
    epoch_second: int
    problem_id: str
    result: str
    contest_id: str = ""
    user_id: str = ""
    language: str = ""
    point: float = 0.0
    length: int = 0
    execution_time: int | None = None


def is_accepted(result: str) -> bool:
    """Return True if the judge result is an accepted verdict."""
    return result == ACCEPTED


def parse_submissions(records: list[dict]) -> list[Submission]:
    """
    Parse submissions from the submission API.

    Skips records that are missing the fields needed for aggregation or
    whose values do not convert.

    Args:
        records: List of submission dictionaries as returned by the API

    Returns:
        List of Submission objects in input order
    """
    submissions = []

    for record in records:
        # id, epoch_second and problem_id are required to place a submission
        if any(record.get(key) is None for key in ("id", "epoch_second", "problem_id")):
            logger.warning("Skipping submission record with missing fields: %r", record)
            continue

        try:
            submission = Submission(
                id=int(record["id"]),
                epoch_second=int(record["epoch_second"]),
                problem_id=str(record["problem_id"]),
                result=record.get("result") or "",
                contest_id=record.get("contest_id") or "",
                user_id=record.get("user_id") or "",
                language=record.get("language") or "",
                point=float(record.get("point") or 0.0),
                length=int(record.get("length") or 0),
                execution_time=record.get("execution_time"),
            )
        except (TypeError, ValueError):
            logger.warning("Skipping submission record with invalid values: %r", record)
            continue

        submissions.append(submission)

    return submissions
