# core/verdict.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# Verdict enumeration for behaviour checking results

from enum import Enum, auto

from .expr import Const, Expr
from utils.logger import get_logger


class Verdict(Enum):
    """Three-valued result of checking a behaviour against a call log.

    A behaviour formula evaluated against a log either collapses to a
    constant or leaves a residual formula that the log cannot decide yet.
    Only ``TRUE`` counts as a passing check; ``FALSE`` and ``UNKNOWN`` are
    both reported as violations.

    Values:
        TRUE: The formula decided to ``Const(True)``
        FALSE: The formula decided to any other constant
        UNKNOWN: The formula is still undecided for the observed calls
    """

    TRUE = auto()
    FALSE = auto()
    UNKNOWN = auto()

    def __str__(self) -> str:
        """Generate string representation of the verdict.

        Returns:
            Human-readable verdict name (TRUE, FALSE, or UNKNOWN)
        """
        return self.name

    @classmethod
    def of(cls, expr: Expr) -> "Verdict":
        """Classify the result of an evaluation.

        Args:
            expr: Formula returned by the evaluator

        Returns:
            TRUE for ``Const(True)``, FALSE for any other constant and
            UNKNOWN for a residual formula
        """
        if isinstance(expr, Const):
            return cls.TRUE if expr.value is True else cls.FALSE
        return cls.UNKNOWN

    def is_conclusive(self) -> bool:
        """Determine if this verdict represents a definitive result.

        Returns:
            True if verdict is definitive (TRUE or FALSE), False if undecided
        """
        logger = get_logger()
        is_conclusive = self in (Verdict.TRUE, Verdict.FALSE)

        logger.debug(
            f"Verdict {self.name} is {'conclusive' if is_conclusive else 'inconclusive'}"
        )

        return is_conclusive

    def combine_conjunctive(self, other: "Verdict") -> "Verdict":
        """Combine this verdict with another using conjunctive (AND) semantics.

        Used to fold the verdicts of many checks into the verdict of a run:
        one failed check fails the run, and a run is only TRUE when every
        check is.

        Combination rules:
        - FALSE AND anything = FALSE
        - TRUE AND TRUE = TRUE
        - TRUE AND UNKNOWN = UNKNOWN
        - UNKNOWN AND UNKNOWN = UNKNOWN

        Args:
            other: Verdict to combine with this verdict

        Returns:
            Combined verdict following conjunctive semantics
        """
        if self == Verdict.FALSE or other == Verdict.FALSE:
            return Verdict.FALSE
        if self == Verdict.TRUE and other == Verdict.TRUE:
            return Verdict.TRUE
        return Verdict.UNKNOWN
