"""
Shared type definitions for the fuzzy inference engine.

Holds the membership-function alias, the method-name literals accepted by
the engine setters, the variable and rule models, and the records produced
by one evaluation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Callable, Dict, List, Literal, Mapping, Optional, Sequence, Tuple, Union

from fuzzy_engine.errors import InvalidRange, InvalidRule

MembershipFunction = Callable[[float], float]
FuzzySet = Dict[str, MembershipFunction]
Range = Tuple[float, float]

DefuzzificationMethod = Literal["centroid", "bisector", "mom", "som", "lom"]
AndMethod = Literal["min", "product"]
OrMethod = Literal["max", "sum", "probor"]
ImplicationMethod = Literal["min", "product"]
AggregationMethod = Literal["max", "sum"]

TermRef = Union[str, Sequence[str]]


@dataclass(frozen=True)
class LinguisticVariable:
    """
    A named quantity described by a set of fuzzy terms.

    Attributes:
        name (str): Variable name, unique within the engine registry.
        terms (Dict[str, MembershipFunction]): Term name -> membership function.
        range (Tuple[float, float]): The (min, max) universe used for sampling.
        is_output (bool): True for output variables, False for inputs.
    """

    name: str
    terms: Dict[str, MembershipFunction]
    range: Range
    is_output: bool = False

    def __post_init__(self) -> None:
        lo, hi = self.range
        if lo > hi:
            raise InvalidRange(
                f"Range of variable '{self.name}' must satisfy min <= max, got [{lo}, {hi}]"
            )


@dataclass(frozen=True)
class VariableInfo:
    """Read-only summary of a registered variable, returned by introspection."""

    name: str
    terms: List[str]
    is_output: bool
    range: Range


@dataclass(frozen=True)
class FuzzyRule:
    """
    A fuzzy IF-THEN rule.

    Attributes:
        antecedent (Mapping[str, str | Sequence[str]]): Input variable name ->
            one term name, or a non-empty list of term names OR-ed together.
        consequent (Mapping[str, str]): Output variable name -> term name.
        weight (Optional[float]): Scales the firing strength; None means 1.
        description (str): Free text, no effect on inference.
    """

    antecedent: Mapping[str, TermRef]
    consequent: Mapping[str, str]
    weight: Optional[float] = None
    description: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.antecedent, Mapping) or not isinstance(self.consequent, Mapping):
            raise InvalidRule("Rule antecedent and consequent must be mappings of variable -> term")
        for var_name, terms in self.antecedent.items():
            if isinstance(terms, str):
                continue
            if not isinstance(terms, Sequence) or not all(isinstance(t, str) for t in terms):
                raise InvalidRule(
                    f"Antecedent of '{var_name}' must be a term name or a list of term names, got {terms!r}"
                )
            if len(terms) == 0:
                raise InvalidRule(f"Empty term list for antecedent variable '{var_name}'")
        for var_name, term in self.consequent.items():
            if not isinstance(term, str):
                raise InvalidRule(f"Consequent of '{var_name}' must be a single term name, got {term!r}")
        if self.weight is not None and (
            isinstance(self.weight, bool) or not isinstance(self.weight, Real)
        ):
            raise InvalidRule(f"Rule weight must be a number, got {self.weight!r}")
        if self.weight is not None and not 0.0 <= self.weight <= 1.0:
            raise InvalidRule(f"Rule weight must be within [0, 1], got {self.weight}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FuzzyRule":
        """
        Builds a rule from its mapping form.

        Args:
            data (Mapping[str, Any]): {"if": {...}, "then": {...}} with optional
                "weight" and "description" keys.

        Returns:
            FuzzyRule: The equivalent rule.
        """
        if "if" not in data or "then" not in data:
            raise InvalidRule(f"Rule mapping needs 'if' and 'then' keys, got {sorted(data)}")
        if not isinstance(data["if"], Mapping) or not isinstance(data["then"], Mapping):
            raise InvalidRule("Rule 'if' and 'then' must be mappings of variable -> term")
        weight = data.get("weight")
        if weight is not None:
            try:
                weight = float(weight)
            except (TypeError, ValueError) as exc:
                raise InvalidRule(f"Rule weight must be a number, got {weight!r}") from exc
        return cls(
            antecedent=dict(data["if"]),
            consequent=dict(data["then"]),
            weight=weight,
            description=str(data.get("description", "")),
        )

    def antecedent_terms(self, var_name: str) -> List[str]:
        """Returns the term list of one antecedent clause."""
        terms = self.antecedent[var_name]
        return [terms] if isinstance(terms, str) else list(terms)


@dataclass(frozen=True)
class FuzzificationResult:
    variable: str
    value: float
    memberships: Dict[str, float]


@dataclass(frozen=True)
class OutputContribution:
    term: str
    strength: float


@dataclass(frozen=True)
class RuleEvaluationResult:
    rule: FuzzyRule
    firing_strength: float
    output_contributions: Dict[str, OutputContribution] = field(default_factory=dict)


@dataclass(frozen=True)
class EvaluationResult:
    """
    Full trace of one evaluate call.

    Attributes:
        outputs (Dict[str, float]): Crisp value per output variable.
        fuzzification (List[FuzzificationResult]): One record per fuzzified input.
        rule_evaluations (List[RuleEvaluationResult]): One record per rule,
            in registration order.
        aggregated_outputs (Dict[str, MembershipFunction]): The combined
            membership function that was defuzzified for each output.
    """

    outputs: Dict[str, float]
    fuzzification: List[FuzzificationResult]
    rule_evaluations: List[RuleEvaluationResult]
    aggregated_outputs: Dict[str, MembershipFunction]
