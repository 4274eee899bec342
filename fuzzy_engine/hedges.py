"""
Linguistic hedges.

A hedge reshapes an existing membership function to express modifiers such
as "very", "somewhat" or "not". Every hedge returns a new callable that
evaluates the wrapped function on demand.
"""

from fuzzy_engine.types import MembershipFunction


def power(mf: MembershipFunction, exponent: float) -> MembershipFunction:
    """Raises membership to `exponent`: > 1 concentrates, < 1 dilates."""

    def hedged(x: float) -> float:
        return mf(x) ** exponent

    return hedged


def very(mf: MembershipFunction) -> MembershipFunction:
    """Concentration, membership squared."""
    return power(mf, 2.0)


def very_very(mf: MembershipFunction) -> MembershipFunction:
    return power(mf, 4.0)


def extremely(mf: MembershipFunction) -> MembershipFunction:
    return power(mf, 3.0)


def somewhat(mf: MembershipFunction) -> MembershipFunction:
    """Dilation, square root of membership."""
    return power(mf, 0.5)


fairly = somewhat


def slightly(mf: MembershipFunction) -> MembershipFunction:
    return power(mf, 1.0 / 3.0)


def more_or_less(mf: MembershipFunction) -> MembershipFunction:
    return power(mf, 0.75)


def not_(mf: MembershipFunction) -> MembershipFunction:
    """Negation, 1 - membership."""

    def hedged(x: float) -> float:
        return 1.0 - mf(x)

    return hedged


def intensify(mf: MembershipFunction) -> MembershipFunction:
    """
    Contrast intensification around 0.5.

    Degrees at or below 0.5 map to 2*mu^2, degrees above map to
    1 - 2*(1 - mu)^2, pushing values away from the crossover point.
    """

    def hedged(x: float) -> float:
        mu = mf(x)
        if mu <= 0.5:
            return 2.0 * mu ** 2
        return 1.0 - 2.0 * (1.0 - mu) ** 2

    return hedged


def threshold(mf: MembershipFunction, level: float) -> MembershipFunction:
    """Zeroes every degree below `level`, keeps the rest unchanged."""

    def hedged(x: float) -> float:
        mu = mf(x)
        return mu if mu >= level else 0.0

    return hedged


def scale(mf: MembershipFunction, factor: float) -> MembershipFunction:
    """Multiplies membership by `factor`, capped at 1."""

    def hedged(x: float) -> float:
        return min(1.0, mf(x) * factor)

    return hedged
