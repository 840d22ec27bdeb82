"""
Rating colors used to paint difficulty values.
"""

import math

RATING_COLORS = [
    "Black",
    "Grey",
    "Brown",
    "Green",
    "Cyan",
    "Blue",
    "Yellow",
    "Orange",
    "Red",
]

RATING_COLOR_CODES = {
    "Black": "#000000",
    "Grey": "#808080",
    "Brown": "#804000",
    "Green": "#008000",
    "Cyan": "#00C0C0",
    "Blue": "#0000FF",
    "Yellow": "#C0C000",
    "Orange": "#FF8000",
    "Red": "#FF0000",
}

RATING_STEP = 400


def get_rating_color(rating: float) -> str:
    """
    Get the color name for a rating.

    Colors change every 400 points starting at Grey; negative ratings
    (unknown difficulty) map to Black and everything from 2800 up is Red.
    """
    index = min(math.floor(rating / RATING_STEP), len(RATING_COLORS) - 2)
    return RATING_COLORS[max(index + 1, 0)]


def get_rating_color_code(color: str) -> str:
    """Get the hex code for a color name."""
    return RATING_COLOR_CODES[color]


def rating_to_color_code(rating: float) -> str:
    """Hex color code for a rating."""
    return get_rating_color_code(get_rating_color(rating))
