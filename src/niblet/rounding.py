"""Rounding helpers."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer with exact halves going up (36.5 -> 37).

    The builtin ``round`` rounds halves to even.
    """
    return math.floor(value + 0.5)
