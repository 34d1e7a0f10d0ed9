"""
Number utility functions.
"""
import math


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, with halves rounded up.

    The built-in round() rounds halves to the nearest even number, so
    round(2.5) == 2; round_half_up(2.5) == 3.

    Args:
        value: The number to round

    Returns:
        Nearest integer, halves going towards positive infinity
    """
    return int(math.floor(value + 0.5))
