"""Floating-point cleaning shared by the interval, bounds and tick code."""

import math
import sys
from typing import Optional

EPSILON = 1e-10

# Largest finite double; computed bounds never go past it
MAX_FINITE = sys.float_info.max

# Label formatting never asks for more than this many decimals
MAX_DECIMAL_PLACES = 6


def _significant_decimals(value: float, cap: int) -> int:
    """Count the non-trailing-zero decimal digits of ``value``, up to ``cap``."""
    fraction = f"{abs(value):.12f}".split(".")[1].rstrip("0")
    return min(len(fraction), cap)


def decimal_places(interval: float) -> int:
    """
    Number of decimals needed to print ticks spaced by ``interval``.

    Intervals of 1 or more print as integers. Smaller intervals keep their
    significant decimal digits, capped at six, so labels never show noise
    such as ``0.30000000000004``.

    Args:
        interval: Tick spacing (positive)

    Returns:
        Decimal place count in ``[0, 6]``
    """
    if interval >= 1:
        return 0
    return _significant_decimals(interval, MAX_DECIMAL_PLACES)


def round_to_precision(value: float, reference_interval: Optional[float] = None) -> float:
    """
    Round ``value`` to the precision implied by ``reference_interval``.

    The rounding keeps one digit below the interval's own magnitude and every
    decimal the interval itself carries (0.125 keeps three), so tick values
    come out exact without collapsing sub-millesimal intervals to zero.
    Without a usable reference the value is rounded to ten decimals.

    Args:
        value: Raw computed value
        reference_interval: Tick spacing the value belongs to

    Returns:
        Cleaned value
    """
    if not math.isfinite(value):
        return value

    if reference_interval is None or not reference_interval > 0:
        places = 10
    else:
        magnitude_places = 1 - math.floor(math.log10(reference_interval))
        places = max(0, magnitude_places, _significant_decimals(reference_interval, 12))

    # Adding 0.0 turns -0.0 into 0.0
    return round(value, places) + 0.0


def clamp_finite(value: float) -> float:
    """Pull a bound that overflowed to +/-inf back to the largest finite double."""
    return max(-MAX_FINITE, min(value, MAX_FINITE))
