# core/exceptions.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# Error taxonomy for formula construction, evaluation and behaviour checking

"""Domain-specific exceptions for behaviour formulas.

Two families are kept apart on purpose. ``FormulaError`` and its subclasses
signal a malformed specification (a formula that can never be checked
meaningfully) and should fail fast. ``BehaviourViolation`` is the ordinary
outcome of monitoring: the observed object did something its behaviour does
not allow.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .behaviour import CheckResult


class FormulaError(RuntimeError):
    """Base class for errors caused by a malformed behaviour formula."""

    pass


class RoleConflictError(FormulaError):
    """A variable was used both as a time position and as a value."""

    pass


class TypeInferenceError(FormulaError):
    """A quantified variable was never given a time or value role by its body."""

    pass


class CaptureError(FormulaError):
    """Substitution targeted the variable bound by an enclosing quantifier."""

    pass


class IndexLookupError(FormulaError, LookupError):
    """Indexing a constant with a key or position it does not have."""

    pass


class BehaviourViolation(Exception):
    """Raised when a checked call does not decide its behaviour to true.

    Attributes:
        result: The failing check, including the residual formula
        report: Human-readable report with the rendered formula
    """

    def __init__(self, result: CheckResult):
        self.result = result
        self.report = result.describe()
        super().__init__(self.report)
