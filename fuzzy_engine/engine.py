"""
Orchestrates Mamdani fuzzy inference.

This module integrates the Fuzzifier, Rule Engine, and Defuzzifier behind a
single FuzzyEngine. The engine owns the variable registry, the rule base and
the configuration, validates rules as they are added, and runs the
four-stage pipeline on each evaluate call:

    1) fuzzification      crisp inputs -> term membership degrees
    2) rule evaluation    degrees -> firing strength per rule
    3) aggregation        implication per contribution, combination per output
    4) defuzzification    aggregated set -> crisp output

Evaluation reads the registry and configuration but never changes them, so
an engine can be evaluated any number of times between registrations.

Example:
    engine = FuzzyEngine()
    engine.add_variable("temperature", {
        "cold": trapezoidal(0, 0, 20, 40),
        "warm": triangular(30, 50, 70),
        "hot": trapezoidal(60, 80, 100, 100),
    })
    engine.add_output("fanSpeed", {
        "low": triangular(0, 25, 50),
        "medium": triangular(30, 50, 70),
        "high": triangular(50, 75, 100),
    }, (0, 100))
    engine.add_rules([
        {"if": {"temperature": "cold"}, "then": {"fanSpeed": "low"}},
        {"if": {"temperature": "warm"}, "then": {"fanSpeed": "medium"}},
        {"if": {"temperature": "hot"}, "then": {"fanSpeed": "high"}},
    ])
    engine.evaluate({"temperature": 28})["fanSpeed"]
"""

import logging
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from fuzzy_engine.config import EngineConfig
from fuzzy_engine.defuzzifier import Defuzzifier
from fuzzy_engine.errors import InvalidRange, InvalidRule, NotAnOutput, UnknownTerm, UnknownVariable
from fuzzy_engine.fuzzifier import Fuzzifier
from fuzzy_engine.logger import set_evaluation_index
from fuzzy_engine.rule_engine import RuleEngine
from fuzzy_engine.types import (
    AggregationMethod,
    AndMethod,
    DefuzzificationMethod,
    EvaluationResult,
    FuzzyRule,
    ImplicationMethod,
    LinguisticVariable,
    MembershipFunction,
    OrMethod,
    Range,
    VariableInfo,
)

engine_log = logging.getLogger("engine")

# Range inference heuristic for variables registered without a range.
RANGE_PROBE_POINTS = (-1000.0, -100.0, -10.0, 0.0, 10.0, 100.0, 1000.0)
RANGE_PROBE_THRESHOLD = 0.01
DEFAULT_RANGE = (0.0, 100.0)

RuleLike = Union[FuzzyRule, Mapping[str, Any]]


def infer_range(terms: Mapping[str, MembershipFunction]) -> Range:
    """
    Estimates a variable range from its membership functions.

    Starts from [0, 100] and widens it to every probe point where some term
    has membership above 0.01. This is a coarse heuristic: support that lies
    between probe points, beyond +/-1000, or well inside [0, 100] is not
    reflected. Pass an explicit range whenever the universe is known.
    """
    lo, hi = DEFAULT_RANGE
    for mf in terms.values():
        for x in RANGE_PROBE_POINTS:
            if mf(x) > RANGE_PROBE_THRESHOLD:
                lo = min(lo, x)
                hi = max(hi, x)
    return (lo, hi)


class FuzzyEngine:
    """
    A Mamdani fuzzy inference system.

    Attributes:
        config (EngineConfig): Current method selectors and resolution.
        fuzzifier (Fuzzifier): The fuzzifier stage.
        rule_engine (RuleEngine): The rule evaluation and aggregation stage.
        defuzzifier (Defuzzifier): The defuzzification stage.
    """

    def __init__(self, config: Optional[Union[EngineConfig, Mapping[str, Any]]] = None):
        """
        Initializes the engine with an empty registry and rule base.

        Args:
            config (EngineConfig | Mapping[str, Any], optional): Engine
                settings; a plain mapping is read with EngineConfig.from_dict.
                Defaults to centroid / min / max / min / max / 100.
        """
        if config is None:
            config = EngineConfig()
        elif not isinstance(config, EngineConfig):
            config = EngineConfig.from_dict(config)

        self._variables: Dict[str, LinguisticVariable] = {}
        self._rules: List[FuzzyRule] = []
        self._evaluations = 0
        self.fuzzifier = Fuzzifier(self._variables)
        self._apply_config(config)
        engine_log.info("Fuzzy engine initialized: %s", config.to_dict())

    def _apply_config(self, config: EngineConfig) -> None:
        self.config = config
        self.rule_engine = RuleEngine(
            and_method=config.and_method,
            or_method=config.or_method,
            implication_method=config.implication_method,
            aggregation_method=config.aggregation_method,
        )
        self.defuzzifier = Defuzzifier(config.defuzzification_method)

    def _update_config(self, **changes: Any) -> "FuzzyEngine":
        self._apply_config(replace(self.config, **changes))
        engine_log.debug("Engine configuration updated: %s", changes)
        return self

    # ---------- registration ----------

    def _register(
        self,
        name: str,
        terms: Mapping[str, MembershipFunction],
        range: Optional[Sequence[float]],
        is_output: bool,
    ) -> "FuzzyEngine":
        terms = dict(terms)
        if range is None:
            bounds = infer_range(terms)
            engine_log.info("No range given for '%s', inferred [%g, %g].", name, *bounds)
        else:
            if isinstance(range, str):
                raise InvalidRange(f"Range of variable '{name}' must be (min, max), got {range!r}")
            try:
                lo, hi = range
                bounds = (float(lo), float(hi))
            except (TypeError, ValueError) as exc:
                raise InvalidRange(f"Range of variable '{name}' must be (min, max), got {range!r}") from exc

        if name in self._variables:
            engine_log.debug("Replacing existing variable '%s'.", name)
        self._variables[name] = LinguisticVariable(name=name, terms=terms, range=bounds, is_output=is_output)
        engine_log.debug(
            "Registered %s variable '%s' with terms %s over [%g, %g].",
            "output" if is_output else "input", name, list(terms), *bounds,
        )
        return self

    def add_variable(
        self,
        name: str,
        terms: Mapping[str, MembershipFunction],
        range: Optional[Sequence[float]] = None,
    ) -> "FuzzyEngine":
        """
        Registers an input variable, replacing any variable of the same name.

        Args:
            name (str): Variable name.
            terms (Mapping[str, MembershipFunction]): Term name -> membership function.
            range (Sequence[float], optional): (min, max). Inferred when omitted.

        Raises:
            InvalidRange: If min > max.
        """
        return self._register(name, terms, range, is_output=False)

    def add_output(
        self,
        name: str,
        terms: Mapping[str, MembershipFunction],
        range: Optional[Sequence[float]] = None,
    ) -> "FuzzyEngine":
        """Registers an output variable; same contract as add_variable."""
        return self._register(name, terms, range, is_output=True)

    def _validate_rule(self, rule: FuzzyRule) -> None:
        for var_name in rule.antecedent:
            variable = self._variables.get(var_name)
            if variable is None:
                raise UnknownVariable(var_name, "rule antecedent")
            for term in rule.antecedent_terms(var_name):
                if term not in variable.terms:
                    raise UnknownTerm(var_name, term)

        for var_name, term in rule.consequent.items():
            variable = self._variables.get(var_name)
            if variable is None:
                raise UnknownVariable(var_name, "rule consequent")
            if not variable.is_output:
                raise NotAnOutput(var_name)
            if term not in variable.terms:
                raise UnknownTerm(var_name, term)

    def add_rule(self, rule: RuleLike) -> "FuzzyEngine":
        """
        Validates a rule against the registry and appends it to the rule base.

        Args:
            rule (FuzzyRule | Mapping[str, Any]): A FuzzyRule, or its mapping
                form {"if": ..., "then": ..., "weight": ..., "description": ...}.

        Raises:
            UnknownVariable: A referenced variable is not registered.
            UnknownTerm: A referenced term is not defined for its variable.
            NotAnOutput: A consequent names an input variable.
            InvalidRule: The rule is malformed.
        """
        if isinstance(rule, Mapping):
            rule = FuzzyRule.from_dict(rule)
        elif not isinstance(rule, FuzzyRule):
            raise InvalidRule(f"Expected a FuzzyRule or a mapping, got {type(rule).__name__}")

        self._validate_rule(rule)
        self._rules.append(rule)
        engine_log.debug("Rule #%d added: %s", len(self._rules) - 1, rule.description or rule)
        return self

    def add_rules(self, rules: Iterable[RuleLike]) -> "FuzzyEngine":
        """Adds rules one by one; rules before a failing one stay registered."""
        for rule in rules:
            self.add_rule(rule)
        return self

    def clear_rules(self) -> "FuzzyEngine":
        """Removes every rule; variables are kept."""
        self._rules = []
        engine_log.debug("Rule base cleared.")
        return self

    # ---------- configuration ----------

    def set_defuzzification_method(self, method: DefuzzificationMethod) -> "FuzzyEngine":
        return self._update_config(defuzzification_method=method)

    def set_and_method(self, method: AndMethod) -> "FuzzyEngine":
        return self._update_config(and_method=method)

    def set_or_method(self, method: OrMethod) -> "FuzzyEngine":
        return self._update_config(or_method=method)

    def set_implication_method(self, method: ImplicationMethod) -> "FuzzyEngine":
        return self._update_config(implication_method=method)

    def set_aggregation_method(self, method: AggregationMethod) -> "FuzzyEngine":
        return self._update_config(aggregation_method=method)

    def set_resolution(self, resolution: int) -> "FuzzyEngine":
        """
        Sets the number of grid subdivisions used by defuzzification.

        Raises:
            ConfigurationError: If resolution is not a positive integer.
        """
        return self._update_config(resolution=resolution)

    # ---------- evaluation ----------

    def evaluate(self, inputs: Mapping[str, float]) -> Dict[str, float]:
        """
        Evaluates the system for crisp inputs.

        Args:
            inputs (Mapping[str, float]): Input variable name -> crisp value.
                Names that are not registered input variables are ignored.

        Returns:
            Dict[str, float]: Output variable name -> crisp value.
        """
        return self.evaluate_verbose(inputs).outputs

    def evaluate_verbose(self, inputs: Mapping[str, float]) -> EvaluationResult:
        """
        Evaluates the system and returns every intermediate stage.

        Output variables named by rules that did not fire defuzzify to the
        midpoint of their range. Log records of this call are stamped with
        the engine's running evaluation count.

        Args:
            inputs (Mapping[str, float]): Input variable name -> crisp value.

        Returns:
            EvaluationResult: Outputs plus fuzzification, rule evaluation and
                aggregated membership functions.
        """
        set_evaluation_index(self._evaluations)
        self._evaluations += 1
        engine_log.debug("--- Evaluation start (inputs=%s) ---", dict(inputs))

        # 1) Fuzzification
        fuzzification = self.fuzzifier.fuzzify(inputs)

        # 2) Rule evaluation
        rule_evaluations = self.rule_engine.evaluate(self._rules, fuzzification)

        # 3) Implication and aggregation
        aggregated = self.rule_engine.aggregate(rule_evaluations, self._variables)

        # 4) Defuzzification
        outputs: Dict[str, float] = {}
        for name, mf in aggregated.items():
            variable = self._variables.get(name)
            if variable is None:
                continue
            vmin, vmax = variable.range
            outputs[name] = self.defuzzifier.defuzzify(mf, vmin, vmax, self.config.resolution)

        engine_log.debug("--- Evaluation end (outputs=%s) ---", outputs)
        return EvaluationResult(
            outputs=outputs,
            fuzzification=fuzzification,
            rule_evaluations=rule_evaluations,
            aggregated_outputs=aggregated,
        )

    # ---------- introspection ----------

    def _get_variable(self, name: str) -> LinguisticVariable:
        variable = self._variables.get(name)
        if variable is None:
            raise UnknownVariable(name)
        return variable

    def get_membership(self, variable: str, term: str, value: float) -> float:
        """
        Returns the membership degree of `value` in one term.

        Raises:
            UnknownVariable: If the variable is not registered.
            UnknownTerm: If the term is not defined for the variable.
        """
        v = self._get_variable(variable)
        mf = v.terms.get(term)
        if mf is None:
            raise UnknownTerm(variable, term)
        return mf(value)

    def get_memberships(self, variable: str, value: float) -> Dict[str, float]:
        """Returns the membership degree of `value` in every term of a variable."""
        return self.fuzzifier.fuzzify_value(self._get_variable(variable), value)

    def get_variables(self) -> List[VariableInfo]:
        return [
            VariableInfo(name=v.name, terms=list(v.terms), is_output=v.is_output, range=v.range)
            for v in self._variables.values()
        ]

    def get_rules(self) -> List[FuzzyRule]:
        return list(self._rules)
