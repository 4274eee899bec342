"""
Computes crisp outputs from aggregated fuzzy output sets.

This module implements the Mamdani defuzzification methods. Each one samples
the aggregated membership function on an evenly spaced grid over the output
variable's range and reduces the samples to a single crisp value:

    centroid  center of gravity, sum(x * mu) / sum(mu)
    bisector  the x that splits the area under mu in half
    mom       mean of the x values where mu is maximal
    som       smallest x where mu is maximal
    lom       largest x where mu is maximal

When the aggregated set has no positive membership anywhere (no rule fired),
every method returns the midpoint of the range.

It also keeps the Sugeno-style weighted average over (strength, peak) pairs.
"""

import logging
from typing import Callable, Dict, Sequence, Tuple

import numpy as np

from fuzzy_engine.sampling import sample, sample_grid
from fuzzy_engine.types import MembershipFunction

defuzzifier_log = logging.getLogger("defuzzifier")

Defuzzify = Callable[[MembershipFunction, float, float, int], float]

DEFAULT_RESOLUTION = 100
MAX_TOLERANCE = 1e-10


def _midpoint(vmin: float, vmax: float) -> float:
    return (vmin + vmax) / 2.0


def centroid(mf: MembershipFunction, vmin: float, vmax: float, resolution: int = DEFAULT_RESOLUTION) -> float:
    """
    Center of gravity of the sampled set.

    Returns:
        float: sum(x * mu(x)) / sum(mu(x)), or the range midpoint if the
            sampled membership sums to zero.
    """
    xs = sample_grid(vmin, vmax, resolution)
    mus = sample(mf, xs)
    total = float(np.sum(mus))
    if total == 0.0:
        return _midpoint(vmin, vmax)
    return float(np.sum(xs * mus)) / total


def bisector(mf: MembershipFunction, vmin: float, vmax: float, resolution: int = DEFAULT_RESOLUTION) -> float:
    """
    The sample that divides the area under the set into two equal halves.

    Area is accumulated as mu(x) * step from the left; the first sample at
    which the running area reaches half the total is returned. Zero total
    area yields the midpoint. If rounding keeps the running area below half
    until the end, vmax is returned.
    """
    xs = sample_grid(vmin, vmax, resolution)
    if len(xs) == 0:
        return _midpoint(vmin, vmax)
    step = (vmax - vmin) / resolution
    areas = sample(mf, xs) * step
    total = float(np.sum(areas))
    if total == 0.0:
        return _midpoint(vmin, vmax)

    half = total / 2.0
    accumulated = 0.0
    for x, area in zip(xs, areas):
        accumulated += area
        if accumulated >= half:
            return float(x)
    return vmax


def mean_of_maximum(mf: MembershipFunction, vmin: float, vmax: float, resolution: int = DEFAULT_RESOLUTION) -> float:
    """Mean of every sample whose membership is within 1e-10 of the maximum."""
    xs = sample_grid(vmin, vmax, resolution)
    if len(xs) == 0:
        return _midpoint(vmin, vmax)
    mus = sample(mf, xs)
    peak = float(np.max(mus))
    if peak <= 0.0:
        return _midpoint(vmin, vmax)
    tops = xs[np.abs(mus - peak) < MAX_TOLERANCE]
    return float(np.mean(tops))


def smallest_of_maximum(mf: MembershipFunction, vmin: float, vmax: float, resolution: int = DEFAULT_RESOLUTION) -> float:
    """First sample, scanning left to right, that attains the maximum membership."""
    xs = sample_grid(vmin, vmax, resolution)
    if len(xs) == 0:
        return _midpoint(vmin, vmax)
    mus = sample(mf, xs)
    if float(np.max(mus)) <= 0.0:
        return _midpoint(vmin, vmax)
    # argmax returns the first occurrence
    return float(xs[int(np.argmax(mus))])


def largest_of_maximum(mf: MembershipFunction, vmin: float, vmax: float, resolution: int = DEFAULT_RESOLUTION) -> float:
    """First sample, scanning right to left, that attains the maximum membership."""
    xs = sample_grid(vmin, vmax, resolution)
    if len(xs) == 0:
        return _midpoint(vmin, vmax)
    mus = sample(mf, xs)
    if float(np.max(mus)) <= 0.0:
        return _midpoint(vmin, vmax)
    last = len(mus) - 1 - int(np.argmax(mus[::-1]))
    return float(xs[last])


def weighted_average(rule_outputs: Sequence[Tuple[float, float]]) -> float:
    """
    Sugeno-style weighted average of rule outputs.

    The output is computed as:
        (sum(Wi * Zi)) / (sum(Wi))
    where Wi is the firing strength and Zi the crisp peak of rule i.

    Args:
        rule_outputs (Sequence[Tuple[float, float]]): (W, Z) pairs.

    Returns:
        float: The weighted average. If every strength is zero, the first
            peak; 0.0 for an empty sequence.
    """
    if not rule_outputs:
        defuzzifier_log.warning("No rule outputs to average. Outputting 0.")
        return 0.0

    numerator = 0.0
    denominator = 0.0
    for w, z in rule_outputs:
        numerator += w * z
        denominator += w

    if denominator == 0.0:
        defuzzifier_log.warning("Sum of firing strengths is zero. Outputting first peak.")
        return float(rule_outputs[0][1])
    return numerator / denominator


DEFUZZIFIERS: Dict[str, Defuzzify] = {
    "centroid": centroid,
    "bisector": bisector,
    "mom": mean_of_maximum,
    "som": smallest_of_maximum,
    "lom": largest_of_maximum,
}


def get_defuzzifier(method: str) -> Defuzzify:
    """
    Looks up a defuzzification function by method name.

    Unrecognized names fall back to centroid. Method names normally come
    from the DefuzzificationMethod literal, so the fallback only catches
    typos and is logged.
    """
    fn = DEFUZZIFIERS.get(method)
    if fn is None:
        defuzzifier_log.warning("Unknown defuzzification method '%s', falling back to 'centroid'.", method)
        return centroid
    return fn


def defuzzify(
    mf: MembershipFunction,
    method: str,
    vmin: float,
    vmax: float,
    resolution: int = DEFAULT_RESOLUTION,
) -> float:
    """Defuzzifies `mf` over [vmin, vmax] with the named method."""
    return get_defuzzifier(method)(mf, vmin, vmax, resolution)


class Defuzzifier:
    """
    Defuzzification stage of the inference pipeline.

    Attributes:
        method (str): The configured method name.
    """

    def __init__(self, method: str = "centroid"):
        """
        Initializes the Defuzzifier.

        Args:
            method (str): One of centroid, bisector, mom, som, lom. Unknown
                names resolve to centroid.
        """
        self.method = method
        self._fn = get_defuzzifier(method)
        defuzzifier_log.debug("Defuzzifier initialized with method '%s'.", method)

    def defuzzify(self, mf: MembershipFunction, vmin: float, vmax: float, resolution: int) -> float:
        """
        Calculates the crisp value of an aggregated output set.

        Args:
            mf (MembershipFunction): The aggregated output membership function.
            vmin (float): Lower end of the output range.
            vmax (float): Upper end of the output range.
            resolution (int): Number of grid subdivisions.

        Returns:
            float: The crisp output.
        """
        value = self._fn(mf, vmin, vmax, resolution)
        defuzzifier_log.debug(
            "Defuzzified output: %.4f (method=%s, range=[%.4g, %.4g])",
            value, self.method, vmin, vmax,
        )
        return value
