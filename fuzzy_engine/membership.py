"""
Factories for the standard membership-function shapes.

Each factory validates its parameters once and returns a plain callable
mapping a crisp value to a membership degree. The engine accepts any
callable with that signature, so these are conveniences rather than
requirements.
"""

import math
from typing import Callable, Mapping, TypeVar

from fuzzy_engine.errors import InvalidShapeParameters
from fuzzy_engine.types import MembershipFunction

P = TypeVar("P", bound=Mapping[str, float])


def _clamp01(x: float) -> float:
    if x <= 0.0:
        return 0.0
    elif x >= 1.0:
        return 1.0
    return x


def _s_curve(x: float, a: float, b: float) -> float:
    """Rising quadratic spline from 0 at a to 1 at b (a < x < b)."""
    mid = (a + b) / 2.0
    if x <= mid:
        return 2.0 * ((x - a) / (b - a)) ** 2
    return 1.0 - 2.0 * ((x - b) / (b - a)) ** 2


def triangular(a: float, b: float, c: float) -> MembershipFunction:
    """
    Creates a triangular membership function.

    Args:
        a (float): Left foot (membership 0).
        b (float): Peak (membership 1).
        c (float): Right foot (membership 0).

    Returns:
        MembershipFunction: The triangle.

    Raises:
        InvalidShapeParameters: If not a <= b <= c.
    """
    if not a <= b <= c:
        raise InvalidShapeParameters(f"Triangular MF requires a <= b <= c, got [{a}, {b}, {c}]")

    def mf(x: float) -> float:
        if x <= a or x >= c:
            return 0.0
        if x == b:
            return 1.0
        if x < b:
            return (x - a) / (b - a)
        return (c - x) / (c - b)

    return mf


def trapezoidal(a: float, b: float, c: float, d: float) -> MembershipFunction:
    """
    Creates a trapezoidal membership function.

    Args:
        a (float): Left foot, membership starts rising from 0.
        b (float): Left shoulder, membership reaches 1.
        c (float): Right shoulder, membership starts falling.
        d (float): Right foot, membership back at 0.

    Returns:
        MembershipFunction: The trapezoid.

    Raises:
        InvalidShapeParameters: If not a <= b <= c <= d.
    """
    if not a <= b <= c <= d:
        raise InvalidShapeParameters(
            f"Trapezoidal MF requires a <= b <= c <= d, got [{a}, {b}, {c}, {d}]"
        )

    def mf(x: float) -> float:
        if x <= a or x >= d:
            return 0.0
        if b <= x <= c:
            return 1.0
        if x < b:
            return (x - a) / (b - a)
        return (d - x) / (d - c)

    return mf


def gaussian(center: float, sigma: float) -> MembershipFunction:
    """
    Creates a Gaussian membership function exp(-0.5 * ((x - center) / sigma)^2).

    Raises:
        InvalidShapeParameters: If sigma <= 0.
    """
    if sigma <= 0:
        raise InvalidShapeParameters(f"Gaussian MF requires sigma > 0, got {sigma}")

    def mf(x: float) -> float:
        z = (x - center) / sigma
        # exp(-0.5 * 40^2) already underflows to 0; squaring further out can overflow
        if abs(z) > 40.0:
            return 0.0
        return math.exp(-0.5 * z ** 2)

    return mf


def sigmoid(center: float, slope: float, direction: str = "right") -> MembershipFunction:
    """
    Creates a sigmoid membership function.

    Args:
        center (float): Inflection point (membership 0.5).
        slope (float): Steepness of the curve.
        direction (str): 'right' ascends with x, 'left' descends.

    Returns:
        MembershipFunction: The sigmoid.
    """
    if direction not in ("left", "right"):
        raise InvalidShapeParameters(f"Sigmoid direction must be 'left' or 'right', got '{direction}'")
    sign = -1.0 if direction == "left" else 1.0

    def mf(x: float) -> float:
        z = -sign * slope * (x - center)
        # exp overflows past ~709
        if z > 700.0:
            return 0.0
        return 1.0 / (1.0 + math.exp(z))

    return mf


def bell(center: float, width: float, slope: float) -> MembershipFunction:
    """
    Creates a generalized bell membership function 1 / (1 + |(x - center) / width|^(2 * slope)).

    Raises:
        InvalidShapeParameters: If width <= 0.
    """
    if width <= 0:
        raise InvalidShapeParameters(f"Bell MF requires width > 0, got {width}")

    exponent = 2.0 * slope

    def mf(x: float) -> float:
        r = abs((x - center) / width)
        # r ** exponent would overflow; the degree is 0 to double precision
        if r > 0.0 and exponent * math.log(r) > 700.0:
            return 0.0
        return 1.0 / (1.0 + r ** exponent)

    return mf


def singleton(value: float, tolerance: float = 1e-10) -> MembershipFunction:
    """Creates a spike: membership 1 within `tolerance` of `value`, else 0."""

    def mf(x: float) -> float:
        return 1.0 if abs(x - value) < tolerance else 0.0

    return mf


def pi_shaped(a: float, b: float, c: float, d: float) -> MembershipFunction:
    """
    Creates a pi-shaped membership function: an S-curve rise over [a, b],
    a plateau over [b, c] and a Z-curve fall over [c, d].

    Raises:
        InvalidShapeParameters: If not a <= b <= c <= d.
    """
    if not a <= b <= c <= d:
        raise InvalidShapeParameters(
            f"Pi-shaped MF requires a <= b <= c <= d, got [{a}, {b}, {c}, {d}]"
        )

    def mf(x: float) -> float:
        if x <= a or x >= d:
            return 0.0
        if b <= x <= c:
            return 1.0
        if x < b:
            return _s_curve(x, a, b)
        return 1.0 - _s_curve(x, c, d)

    return mf


def s_shaped(a: float, b: float) -> MembershipFunction:
    """
    Creates an S-shaped membership function rising smoothly from 0 at a to 1 at b.

    Raises:
        InvalidShapeParameters: If a >= b.
    """
    if a >= b:
        raise InvalidShapeParameters(f"S-shaped MF requires a < b, got [{a}, {b}]")

    def mf(x: float) -> float:
        if x <= a:
            return 0.0
        if x >= b:
            return 1.0
        return _s_curve(x, a, b)

    return mf


def z_shaped(a: float, b: float) -> MembershipFunction:
    """
    Creates a Z-shaped membership function falling smoothly from 1 at a to 0 at b.

    Raises:
        InvalidShapeParameters: If a >= b.
    """
    if a >= b:
        raise InvalidShapeParameters(f"Z-shaped MF requires a < b, got [{a}, {b}]")

    def mf(x: float) -> float:
        if x <= a:
            return 1.0
        if x >= b:
            return 0.0
        return 1.0 - _s_curve(x, a, b)

    return mf


def create_membership_function(
    fn: Callable[[float, P], float],
) -> Callable[[P], MembershipFunction]:
    """
    Wraps a parameterized formula into a membership-function factory.

    The returned factory binds a parameter mapping and yields a membership
    function whose result is clamped to [0, 1].

    Example:
        spike = create_membership_function(
            lambda x, p: 1 - abs(x - p["center"]) / p["width"]
        )
        medium = spike({"center": 50, "width": 25})

    Args:
        fn (Callable[[float, Mapping[str, float]], float]): The raw formula.

    Returns:
        Callable[[Mapping[str, float]], MembershipFunction]: The factory.
    """

    def factory(params: P) -> MembershipFunction:
        def mf(x: float) -> float:
            return _clamp01(fn(x, params))

        return mf

    return factory
