"""
Sampling grid shared by the defuzzifiers and the set comparisons.
"""

import numpy as np

from fuzzy_engine.types import MembershipFunction


def sample_grid(vmin: float, vmax: float, resolution: int) -> np.ndarray:
    """
    Returns `resolution + 1` evenly spaced points from vmin to vmax inclusive.

    The spacing is (vmax - vmin) / resolution. A non-positive resolution
    yields an empty grid.
    """
    if resolution <= 0:
        return np.empty(0, dtype=float)
    return np.linspace(float(vmin), float(vmax), int(resolution) + 1)


def sample(mf: MembershipFunction, xs: np.ndarray) -> np.ndarray:
    """Evaluates a scalar membership function at every grid point."""
    return np.fromiter((mf(float(x)) for x in xs), dtype=float, count=len(xs))
