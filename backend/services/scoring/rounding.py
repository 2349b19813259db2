"""Integer rounding shared by every score and rate."""

import math


def round_half_up(value: float) -> int:
    """Nearest integer, exact halves going up (12.5 -> 13, 66.5 -> 67)."""
    return int(math.floor(value + 0.5))
