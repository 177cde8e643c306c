"""Module for miscellaneous multi-use functions"""

__all__ = [
    'is_finite', 'round_half_up',
]

import math
from typing import Any


def is_finite(*values: Any) -> bool:
    """
    Test whether every value is a real, finite number. Strings and other
    non-numeric values are rejected rather than coerced.

    Args:
        *values:
            Any number of values to check

    Returns:
        bool
    """
    for value in values:
        if isinstance(value, bool):
            return False
        try:
            if not math.isfinite(value):
                return False
        except TypeError:
            return False

    return True


def round_half_up(value: float, precision) -> float:
    """
    Rounds numbers to the nearest whole, where a value exactly between the two nearest
    wholes is rounded to the higher whole.

    Args:
        value:
            The float value to be rounded
        precision:
            The precision to round the float value to

    """
    mod = value + 10 ** -(precision + 12)

    return round(mod, precision)
