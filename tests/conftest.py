# tests/conftest.py
import pytest

from fuzzy_engine import FuzzyEngine, trapezoidal, triangular


def build_fan_engine(config=None) -> FuzzyEngine:
    """Temperature -> fan speed system with one single-term rule per term."""
    engine = FuzzyEngine(config)
    engine.add_variable(
        "temperature",
        {
            "cold": trapezoidal(0, 0, 20, 40),
            "warm": triangular(30, 50, 70),
            "hot": trapezoidal(60, 80, 100, 100),
        },
    )
    engine.add_output(
        "fanSpeed",
        {
            "low": triangular(0, 25, 50),
            "medium": triangular(30, 50, 70),
            "high": triangular(50, 75, 100),
        },
        (0, 100),
    )
    engine.add_rules(
        [
            {"if": {"temperature": "cold"}, "then": {"fanSpeed": "low"}},
            {"if": {"temperature": "warm"}, "then": {"fanSpeed": "medium"}},
            {"if": {"temperature": "hot"}, "then": {"fanSpeed": "high"}},
        ]
    )
    return engine


@pytest.fixture
def fan_engine():
    return build_fan_engine()


@pytest.fixture
def zero_mf():
    return lambda _x: 0.0


@pytest.fixture
def make_fan_engine():
    return build_fan_engine
