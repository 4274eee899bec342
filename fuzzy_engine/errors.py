"""
Exception hierarchy for the fuzzy inference engine.

Every error is raised synchronously at the call that received the invalid
argument, before any state is changed. Each kind also derives from the
built-in exception that fits it (KeyError for unknown names, ValueError for
bad parameters), so callers may catch either.
"""


class FuzzyEngineError(Exception):
    """Base class for all errors raised by fuzzy_engine."""


class UnknownVariable(FuzzyEngineError, KeyError):
    """A rule or query named a variable that was never registered."""

    def __init__(self, variable: str, context: str = ""):
        self.variable = variable
        where = f" in {context}" if context else ""
        super().__init__(f"Unknown variable{where}: '{variable}'")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class UnknownTerm(FuzzyEngineError, KeyError):
    """A rule or query named a term that is not defined for the variable."""

    def __init__(self, variable: str, term: str):
        self.variable = variable
        self.term = term
        super().__init__(f"Unknown term '{term}' for variable '{variable}'")

    def __str__(self) -> str:
        return str(self.args[0])


class NotAnOutput(FuzzyEngineError, ValueError):
    """A rule consequent named a variable registered as an input."""

    def __init__(self, variable: str):
        self.variable = variable
        super().__init__(f"Variable '{variable}' is not an output variable")


class InvalidShapeParameters(FuzzyEngineError, ValueError):
    """A membership-shape factory received out-of-order or non-positive parameters."""


class InvalidRule(FuzzyEngineError, ValueError):
    """A rule is structurally malformed (empty term list, weight outside [0, 1])."""


class InvalidRange(FuzzyEngineError, ValueError):
    """A variable range does not satisfy min <= max."""


class ConfigurationError(FuzzyEngineError, ValueError):
    """An engine setting or configuration file is invalid."""
