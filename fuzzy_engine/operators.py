"""
Fuzzy operators: T-norms (AND), S-norms (OR) and set operations.

Norms take an ordered sequence of degrees and fold it into one degree. Set
operations compose membership functions lazily: the returned callable
samples its operands each time it is evaluated, nothing is tabulated.
"""

import logging
from typing import Callable, Dict, Sequence

import numpy as np

from fuzzy_engine.sampling import sample, sample_grid
from fuzzy_engine.types import MembershipFunction, Range

operators_log = logging.getLogger("operators")

Norm = Callable[[Sequence[float]], float]


# --- T-norms ---------------------------------------------------------------
def t_norm_min(values: Sequence[float]) -> float:
    """Goedel T-norm, the standard fuzzy AND."""
    return min(values, default=1.0)


def t_norm_product(values: Sequence[float]) -> float:
    """Algebraic product; an empty sequence yields 1."""
    acc = 1.0
    for v in values:
        acc *= v
    return acc


def t_norm_lukasiewicz(values: Sequence[float]) -> float:
    """Bounded difference max(0, sum - (n - 1))."""
    if not values:
        return 1.0
    return max(0.0, sum(values) - (len(values) - 1))


def t_norm_drastic(values: Sequence[float]) -> float:
    """Drastic product: nonzero only when every other operand is exactly 1."""
    if len(values) == 1:
        return values[0]
    if not any(v == 1.0 for v in values):
        return 0.0
    return min((v for v in values if v != 1.0), default=1.0)


# --- S-norms ---------------------------------------------------------------
def s_norm_max(values: Sequence[float]) -> float:
    """Goedel S-norm, the standard fuzzy OR."""
    return max(values, default=0.0)


def s_norm_sum(values: Sequence[float]) -> float:
    """Algebraic (probabilistic) sum a + b - ab, folded left to right."""
    acc = 0.0
    for v in values:
        acc = acc + v - acc * v
    return acc


s_norm_probor = s_norm_sum


def s_norm_lukasiewicz(values: Sequence[float]) -> float:
    """Bounded sum min(1, sum)."""
    return min(1.0, sum(values))


def s_norm_drastic(values: Sequence[float]) -> float:
    """Drastic sum: below 1 only when every other operand is exactly 0."""
    if len(values) == 1:
        return values[0]
    if not any(v == 0.0 for v in values):
        return 1.0
    return max((v for v in values if v != 0.0), default=0.0)


AND_OPERATORS: Dict[str, Norm] = {
    "min": t_norm_min,
    "product": t_norm_product,
}

OR_OPERATORS: Dict[str, Norm] = {
    "max": s_norm_max,
    "sum": s_norm_sum,
    "probor": s_norm_probor,
}


def get_and_operator(method: str) -> Norm:
    """
    Looks up the T-norm for an engine AND method.

    Unrecognized names fall back to min.
    """
    op = AND_OPERATORS.get(method)
    if op is None:
        operators_log.warning("Unknown AND method '%s', falling back to 'min'.", method)
        return t_norm_min
    return op


def get_or_operator(method: str) -> Norm:
    """
    Looks up the S-norm for an engine OR method.

    Unrecognized names fall back to max.
    """
    op = OR_OPERATORS.get(method)
    if op is None:
        operators_log.warning("Unknown OR method '%s', falling back to 'max'.", method)
        return s_norm_max
    return op


# --- Set operations --------------------------------------------------------
def union(a: MembershipFunction, b: MembershipFunction, method: str = "max") -> MembershipFunction:
    op = get_or_operator(method)

    def mf(x: float) -> float:
        return op((a(x), b(x)))

    return mf


def intersection(a: MembershipFunction, b: MembershipFunction, method: str = "min") -> MembershipFunction:
    op = get_and_operator(method)

    def mf(x: float) -> float:
        return op((a(x), b(x)))

    return mf


def complement(a: MembershipFunction) -> MembershipFunction:
    def mf(x: float) -> float:
        return 1.0 - a(x)

    return mf


def difference(a: MembershipFunction, b: MembershipFunction, method: str = "min") -> MembershipFunction:
    """A AND NOT B."""
    return intersection(a, complement(b), method)


def alpha_cut(a: MembershipFunction, alpha: float) -> MembershipFunction:
    """Crisp indicator of {x : a(x) >= alpha}."""

    def mf(x: float) -> float:
        return 1.0 if a(x) >= alpha else 0.0

    return mf


def strong_alpha_cut(a: MembershipFunction, alpha: float) -> MembershipFunction:
    """Crisp indicator of {x : a(x) > alpha}."""

    def mf(x: float) -> float:
        return 1.0 if a(x) > alpha else 0.0

    return mf


def support(a: MembershipFunction) -> MembershipFunction:
    return alpha_cut(a, 0.0)


def core(a: MembershipFunction) -> MembershipFunction:
    return alpha_cut(a, 1.0)


def is_subset(
    a: MembershipFunction,
    b: MembershipFunction,
    bounds: Range,
    resolution: int = 100,
) -> bool:
    """
    Checks a(x) <= b(x) at every sample of `bounds`.

    This is a sampling approximation, not a proof: a violation between two
    grid points goes unnoticed, so the answer depends on `resolution`.
    """
    xs = sample_grid(bounds[0], bounds[1], resolution)
    return bool(np.all(sample(a, xs) <= sample(b, xs) + 1e-10))


def is_equal(
    a: MembershipFunction,
    b: MembershipFunction,
    bounds: Range,
    resolution: int = 100,
    tolerance: float = 1e-6,
) -> bool:
    """
    Checks |a(x) - b(x)| <= tolerance at every sample of `bounds`.

    Same sampling caveat as is_subset.
    """
    xs = sample_grid(bounds[0], bounds[1], resolution)
    return bool(np.all(np.abs(sample(a, xs) - sample(b, xs)) <= tolerance))
