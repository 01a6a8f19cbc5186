"""Rounding helpers shared by the feature extractor and the skill scorer."""

import math


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round halves toward positive infinity (1.5 -> 2, 2.5 -> 3, -0.5 -> 0),
    unlike the built-in ``round``.
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def round_score(value: float) -> int:
    """Round to the nearest integer, halves rounded up."""
    return int(math.floor(value + 0.5))


def round2(value: float) -> float:
    return round_half_up(value, 2)


def safe_ratio(numerator: float, denominator: float) -> float:
    """Divide, returning 0.0 when the denominator is not positive."""
    if denominator <= 0:
        return 0.0
    return numerator / denominator
