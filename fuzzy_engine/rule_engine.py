"""
Evaluates the fuzzy rule base and aggregates the rule outputs.

This module takes the fuzzified inputs (membership degrees) and applies them
to a set of Mamdani rules. For each rule it calculates the firing strength
from the antecedent, then shapes each consequent term's membership function
by that strength (implication) and combines the shaped functions per output
variable (aggregation).
"""

import logging
from typing import Dict, List, Mapping, Sequence

from fuzzy_engine.operators import get_and_operator, get_or_operator
from fuzzy_engine.types import (
    FuzzificationResult,
    FuzzyRule,
    LinguisticVariable,
    MembershipFunction,
    OutputContribution,
    RuleEvaluationResult,
)

rule_engine_log = logging.getLogger("rule_engine")


def _zero(_x: float) -> float:
    return 0.0


class RuleEngine:
    """
    Evaluates a Mamdani fuzzy rule base.

    Attributes:
        and_method (str): T-norm used to combine antecedent clauses.
        or_method (str): S-norm used to combine terms listed for one variable.
        implication_method (str): 'min' clips, 'product' scales.
        aggregation_method (str): 'max' or 'sum' (capped at 1).
    """

    def __init__(
        self,
        and_method: str = "min",
        or_method: str = "max",
        implication_method: str = "min",
        aggregation_method: str = "max",
    ):
        """
        Initializes the RuleEngine with its operator configuration.

        Unrecognized method names fall back to min (AND, implication) and
        max (OR, aggregation).
        """
        self.and_method = and_method
        self.or_method = or_method
        self.implication_method = implication_method
        self.aggregation_method = aggregation_method

        self._and = get_and_operator(and_method)
        self._or = get_or_operator(or_method)
        if implication_method not in ("min", "product"):
            rule_engine_log.warning(
                "Unknown implication method '%s', falling back to 'min'.", implication_method
            )
            self.implication_method = "min"
        if aggregation_method not in ("max", "sum"):
            rule_engine_log.warning(
                "Unknown aggregation method '%s', falling back to 'max'.", aggregation_method
            )
            self.aggregation_method = "max"

        rule_engine_log.debug(
            "Rule Engine configured: AND=%s, OR=%s, implication=%s, aggregation=%s",
            and_method, or_method, self.implication_method, self.aggregation_method,
        )

    def firing_strength(self, rule: FuzzyRule, fuzzified: Mapping[str, Mapping[str, float]]) -> float:
        """
        Computes how strongly a rule's antecedent holds.

        A clause whose variable was not fuzzified is skipped rather than
        counted as zero. Several terms for one variable are OR-ed; the clause
        strengths are AND-ed. No matched clause at all means the rule does
        not fire. The rule weight, when set, scales the result.

        Args:
            rule (FuzzyRule): The rule to evaluate.
            fuzzified (Mapping[str, Mapping[str, float]]): Variable name ->
                term name -> membership degree.

        Returns:
            float: The firing strength.
        """
        clause_strengths = []
        for var_name in rule.antecedent:
            memberships = fuzzified.get(var_name)
            if memberships is None:
                continue
            degrees = [memberships.get(term, 0.0) for term in rule.antecedent_terms(var_name)]
            clause_strengths.append(self._or(degrees) if len(degrees) > 1 else degrees[0])

        strength = self._and(clause_strengths) if clause_strengths else 0.0
        if rule.weight is not None:
            strength *= rule.weight
        return strength

    def evaluate(
        self,
        rules: Sequence[FuzzyRule],
        fuzzification: Sequence[FuzzificationResult],
    ) -> List[RuleEvaluationResult]:
        """
        Evaluates all rules in the rule base.

        Args:
            rules (Sequence[FuzzyRule]): The registered rules.
            fuzzification (Sequence[FuzzificationResult]): Output of the Fuzzifier.

        Returns:
            List[RuleEvaluationResult]: One record per rule, in rule order,
            each carrying a contribution {term, strength} for every
            consequent output variable.
        """
        fuzzified = {f.variable: f.memberships for f in fuzzification}

        results = []
        for i, rule in enumerate(rules):
            strength = self.firing_strength(rule, fuzzified)
            contributions = {
                out_var: OutputContribution(term=term, strength=strength)
                for out_var, term in rule.consequent.items()
            }
            rule_engine_log.debug("Rule# %d W= %.3f -> %s", i, strength, dict(rule.consequent))
            results.append(
                RuleEvaluationResult(rule=rule, firing_strength=strength, output_contributions=contributions)
            )
        return results

    def implicate(self, mf: MembershipFunction, strength: float) -> MembershipFunction:
        """Shapes a consequent term by the firing strength: clip (min) or scale (product)."""
        if self.implication_method == "product":
            def implied(x: float) -> float:
                return mf(x) * strength
        else:
            def implied(x: float) -> float:
                return min(mf(x), strength)
        return implied

    def combine(self, mfs: Sequence[MembershipFunction]) -> MembershipFunction:
        """
        Aggregates implied functions of one output variable into one.

        No functions gives the constant zero; a single function is returned
        as is.
        """
        if not mfs:
            return _zero
        if len(mfs) == 1:
            return mfs[0]

        mfs = tuple(mfs)
        if self.aggregation_method == "sum":
            def aggregated(x: float) -> float:
                return min(1.0, sum(mf(x) for mf in mfs))
        else:
            def aggregated(x: float) -> float:
                return max(mf(x) for mf in mfs)
        return aggregated

    def aggregate(
        self,
        rule_evaluations: Sequence[RuleEvaluationResult],
        variables: Mapping[str, LinguisticVariable],
    ) -> Dict[str, MembershipFunction]:
        """
        Builds the aggregated membership function of every output variable
        named by at least one rule consequent.

        Args:
            rule_evaluations (Sequence[RuleEvaluationResult]): Output of evaluate().
            variables (Mapping[str, LinguisticVariable]): The variable registry.

        Returns:
            Dict[str, MembershipFunction]: Output variable name -> aggregated function.
        """
        implied: Dict[str, List[MembershipFunction]] = {}
        for result in rule_evaluations:
            for out_var, contribution in result.output_contributions.items():
                shaped = implied.setdefault(out_var, [])
                variable = variables.get(out_var)
                if variable is None or contribution.term not in variable.terms:
                    rule_engine_log.debug(
                        "Skipping contribution %s=%s: no longer registered.", out_var, contribution.term
                    )
                    continue
                shaped.append(self.implicate(variable.terms[contribution.term], contribution.strength))

        return {out_var: self.combine(mfs) for out_var, mfs in implied.items()}
