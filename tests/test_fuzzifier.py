import pytest

from fuzzy_engine import Fuzzifier, trapezoidal, triangular
from fuzzy_engine.types import LinguisticVariable


@pytest.fixture
def variables():
    return {
        "temperature": LinguisticVariable(
            name="temperature",
            terms={
                "cold": trapezoidal(-10, -10, 10, 20),
                "warm": triangular(15, 25, 35),
                "hot": trapezoidal(30, 40, 50, 50),
            },
            range=(-10, 50),
        ),
        "fanSpeed": LinguisticVariable(
            name="fanSpeed",
            terms={"low": triangular(0, 25, 50), "high": triangular(50, 75, 100)},
            range=(0, 100),
            is_output=True,
        ),
    }


@pytest.fixture
def fuzzifier(variables):
    return Fuzzifier(variables)


def test_fuzzify_returns_every_term(fuzzifier):
    results = fuzzifier.fuzzify({"temperature": 25})
    assert len(results) == 1
    result = results[0]
    assert result.variable == "temperature"
    assert result.value == 25
    assert result.memberships == {"cold": 0.0, "warm": 1.0, "hot": 0.0}


def test_fuzzify_overlapping_terms(fuzzifier):
    memberships = fuzzifier.fuzzify({"temperature": 17.5})[0].memberships
    assert memberships["cold"] == pytest.approx(0.25)
    assert memberships["warm"] == pytest.approx(0.25)
    assert memberships["hot"] == 0.0


def test_unknown_and_output_names_are_ignored(fuzzifier):
    results = fuzzifier.fuzzify({"humidity": 40, "fanSpeed": 30, "temperature": 32})
    assert [r.variable for r in results] == ["temperature"]


def test_empty_inputs(fuzzifier):
    assert fuzzifier.fuzzify({}) == []


def test_fuzzify_value(fuzzifier, variables):
    memberships = fuzzifier.fuzzify_value(variables["fanSpeed"], 37.5)
    assert memberships == {"low": pytest.approx(0.5), "high": 0.0}


def test_registry_is_shared(fuzzifier, variables):
    variables["humidity"] = LinguisticVariable(
        name="humidity", terms={"dry": trapezoidal(0, 0, 20, 40)}, range=(0, 100)
    )
    results = fuzzifier.fuzzify({"humidity": 10})
    assert results[0].memberships == {"dry": 1.0}
