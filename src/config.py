"""
Configuration management for submission-heatmap.

Loads settings from environment variables.
"""

import logging
import os
from dotenv import load_dotenv

from src.heatmap import Mode

# Load .env file from project root
load_dotenv()

HEATMAP_DEFAULT_MODE = os.getenv("HEATMAP_DEFAULT_MODE", "Submissions")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

VALID_MODES = tuple(mode.value for mode in Mode)


def validate_config():
    """Validate that configured values are usable."""
    invalid = []

    if HEATMAP_DEFAULT_MODE not in VALID_MODES:
        invalid.append("HEATMAP_DEFAULT_MODE")

    if not isinstance(logging.getLevelName(LOG_LEVEL.upper()), int):
        invalid.append("LOG_LEVEL")

    if invalid:
        raise ValueError(
            f"Invalid configuration: {', '.join(invalid)}\n"
            f"HEATMAP_DEFAULT_MODE must be one of: {', '.join(VALID_MODES)}\n"
            "LOG_LEVEL must be a standard logging level such as INFO or DEBUG."
        )
