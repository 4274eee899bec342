"""
fuzzy_engine
============

Mamdani fuzzy inference: linguistic variables, IF-THEN rules, and a
fuzzification -> rule evaluation -> aggregation -> defuzzification pipeline
that turns crisp inputs into crisp outputs.

Typical usage::

    from fuzzy_engine import FuzzyEngine, triangular, trapezoidal

    engine = FuzzyEngine()
    engine.add_variable("temperature", {
        "cold": trapezoidal(0, 0, 10, 20),
        "warm": triangular(15, 25, 35),
        "hot": trapezoidal(30, 40, 50, 50),
    })
    engine.add_output("fanSpeed", {
        "low": triangular(0, 25, 50),
        "high": triangular(50, 75, 100),
    }, (0, 100))
    engine.add_rule({"if": {"temperature": "hot"}, "then": {"fanSpeed": "high"}})
    engine.evaluate({"temperature": 35})
"""

__version__ = "1.0.0"

from fuzzy_engine.config import EngineConfig, load_engine_config
from fuzzy_engine.defuzzifier import (
    Defuzzifier,
    bisector,
    centroid,
    defuzzify,
    get_defuzzifier,
    largest_of_maximum,
    mean_of_maximum,
    smallest_of_maximum,
    weighted_average,
)
from fuzzy_engine.engine import FuzzyEngine, infer_range
from fuzzy_engine.errors import (
    ConfigurationError,
    FuzzyEngineError,
    InvalidRange,
    InvalidRule,
    InvalidShapeParameters,
    NotAnOutput,
    UnknownTerm,
    UnknownVariable,
)
from fuzzy_engine.fuzzifier import Fuzzifier
from fuzzy_engine.hedges import (
    extremely,
    fairly,
    intensify,
    more_or_less,
    not_,
    power,
    scale,
    slightly,
    somewhat,
    threshold,
    very,
    very_very,
)
from fuzzy_engine.logger import get_evaluation_index, set_evaluation_index, setup_logging
from fuzzy_engine.membership import (
    bell,
    create_membership_function,
    gaussian,
    pi_shaped,
    s_shaped,
    sigmoid,
    singleton,
    trapezoidal,
    triangular,
    z_shaped,
)
from fuzzy_engine.operators import (
    alpha_cut,
    complement,
    core,
    difference,
    get_and_operator,
    get_or_operator,
    intersection,
    is_equal,
    is_subset,
    s_norm_drastic,
    s_norm_lukasiewicz,
    s_norm_max,
    s_norm_probor,
    s_norm_sum,
    strong_alpha_cut,
    support,
    t_norm_drastic,
    t_norm_lukasiewicz,
    t_norm_min,
    t_norm_product,
    union,
)
from fuzzy_engine.rule_engine import RuleEngine
from fuzzy_engine.types import (
    AggregationMethod,
    AndMethod,
    DefuzzificationMethod,
    EvaluationResult,
    FuzzificationResult,
    FuzzyRule,
    FuzzySet,
    ImplicationMethod,
    LinguisticVariable,
    MembershipFunction,
    OrMethod,
    OutputContribution,
    RuleEvaluationResult,
    VariableInfo,
)
