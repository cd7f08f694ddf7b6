"""Rounding helpers shared by the scoring formulas."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return math.floor(value + 0.5)


def round_up_1(value: float) -> float:
    """Round ``value`` up to one decimal place.

    Tiny floating point representation errors make a plain
    ``math.ceil(value * 10) / 10`` wrong: ``0.1 * 3`` is
    ``0.30000000000000004``, which would round up to 0.4 instead of 0.3.
    The value is therefore first scaled by 100,000 and rounded to an integer,
    keeping five decimal places, and the ceiling is taken with integer
    arithmetic.  ``0.000001`` rounds to 0.0 while ``0.000009`` rounds to 0.1.
    """
    int_input = round_half_up(value * 100000)
    if int_input % 10000 == 0:
        return int_input / 100000.0
    return (int_input // 10000 + 1) / 10.0


def format_score(score: float) -> str:
    """Render a score with exactly one decimal digit."""
    return f"{score:.1f}"
