"""
Fuzzifies crisp input values into membership degrees.

This module takes the caller's crisp inputs and determines, for every
registered input variable they name, the degree of membership of the value
in each of the variable's terms (e.g., 'cold', 'warm', 'hot').
"""

import logging
from typing import Dict, List, Mapping

from fuzzy_engine.types import FuzzificationResult, LinguisticVariable

fuzzifier_log = logging.getLogger("fuzzifier")


class Fuzzifier:
    """
    Calculates membership degrees for crisp inputs.

    Attributes:
        variables (Mapping[str, LinguisticVariable]): The variable registry,
            shared with the engine so later registrations are visible.
    """

    def __init__(self, variables: Mapping[str, LinguisticVariable]) -> None:
        self.variables = variables

    def fuzzify_value(self, variable: LinguisticVariable, crisp_value: float) -> Dict[str, float]:
        """
        Fuzzifies a single crisp value against every term of one variable.

        Args:
            variable (LinguisticVariable): The variable whose terms are used.
            crisp_value (float): The crisp value to fuzzify.

        Returns:
            Dict[str, float]: Term name -> membership degree, for all terms
                (zero degrees included).
        """
        return {term: mf(crisp_value) for term, mf in variable.terms.items()}

    def fuzzify(self, inputs: Mapping[str, float]) -> List[FuzzificationResult]:
        """
        Fuzzifies every input that names a registered input variable.

        Names that are unknown, or that belong to output variables, are
        skipped without error.

        Args:
            inputs (Mapping[str, float]): Variable name -> crisp value.

        Returns:
            List[FuzzificationResult]: One record per matched input, in the
                order the inputs were given.
        """
        results = []
        for name, value in inputs.items():
            variable = self.variables.get(name)
            if variable is None or variable.is_output:
                fuzzifier_log.debug("Ignoring input '%s': not a registered input variable.", name)
                continue

            memberships = self.fuzzify_value(variable, value)
            formatted = {k: f"{v:.3f}" for k, v in memberships.items()}
            fuzzifier_log.debug("Fuzzified %s= %.3f -> %s", name, value, formatted)
            results.append(FuzzificationResult(variable=name, value=value, memberships=memberships))
        return results
