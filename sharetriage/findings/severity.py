# sharetriage/findings/severity.py
# Rating labels and their fixed severity order.

from __future__ import annotations

from enum import Enum
from typing import Any, Dict


class Rating(str, Enum):
    BLACK = "Black"
    RED = "Red"
    YELLOW = "Yellow"
    GREEN = "Green"


# Lower rank = more severe = sorts first.
SEVERITY_RANKS: Dict[Rating, int] = {
    Rating.BLACK: 0,
    Rating.RED: 1,
    Rating.YELLOW: 2,
    Rating.GREEN: 3,
}

# Rank for every label outside the table, including "" and None.
DEFAULT_RANK = 4
DEFAULT_LABEL = "Default"


def classify(rating: Any) -> int:
    """Map a rating label to its severity rank. Never raises."""
    try:
        return SEVERITY_RANKS[Rating(rating)]
    except ValueError:
        return DEFAULT_RANK


def label_for(rating: Any) -> str:
    """Canonical label used for summaries; unknown ratings collapse to "Default"."""
    try:
        return Rating(rating).value
    except ValueError:
        return DEFAULT_LABEL
