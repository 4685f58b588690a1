"""Numeric primitives shared by the dimension scorers."""

import math
from typing import Iterable


def sigmoid_decay(x: float, midpoint: float, steepness: float, inverted: bool = False) -> float:
    """Logistic falling from 1 to 0 around midpoint; rising when inverted."""
    z = steepness * (x - midpoint)
    # Evaluate on the branch that cannot overflow math.exp.
    if z >= 0:
        e = math.exp(-z)
        sigmoid = e / (1.0 + e)
    else:
        sigmoid = 1.0 / (1.0 + math.exp(z))
    return 1.0 - sigmoid if inverted else sigmoid


def exponential_decay(x: float, half_life: float) -> float:
    """Halves every half_life units of x."""
    return math.pow(0.5, x / half_life)


def hyperbolic_growth(x: float, scale: float, max_value: float) -> float:
    """Grows from 0 towards max_value, reaching half of it at x == scale."""
    return max_value * x / (scale + x)


def gaussian_score(x: float, sigma: float) -> float:
    """Gaussian bump with peak 1.0 at x == 0."""
    return math.exp(-(x * x) / (2 * sigma * sigma))


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def casefold_set(values: Iterable[str]) -> frozenset:
    return frozenset(v.casefold() for v in values if v)


def jaccard(a: Iterable[str], b: Iterable[str]) -> float:
    """Case-insensitive Jaccard index; 0.0 when both sets are empty."""
    left = casefold_set(a)
    right = casefold_set(b)
    union = left | right
    if not union:
        return 0.0
    return len(left & right) / len(union)


def overlaps(a: Iterable[str], b: Iterable[str]) -> bool:
    """True when the two label sets share a value, ignoring case."""
    return bool(casefold_set(a) & casefold_set(b))
