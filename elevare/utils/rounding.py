"""Rounding helpers"""
import math


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves going up

    Python's round() uses banker's rounding (round(2.5) == 2); scores and
    thresholds are defined with halves rounded up (2.5 -> 3).
    """
    return int(math.floor(value + 0.5))
