# core/behaviour.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# Behaviour templates and the per-call verification protocol

"""Behaviour templates and the protocol for checking calls against them.

A behaviour is a formula with two reserved free variables, one standing for
the arguments of a call and one for its result. Checking call ``i`` plugs the
actual result and arguments into a copy of the template and evaluates it
against the calls ``0 .. i-1`` recorded before it. The check passes only if
the formula decides to ``Const(True)``.

A ``Specification`` is the immutable table of behaviours for one kind of
object, keyed by method name. It is built once and shared by every monitor
that checks objects of that kind.
"""

from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from collections.abc import Mapping
from typing import Any, Iterable, Iterator, Optional, Sequence, Tuple

from .evaluator import evaluate
from .exceptions import BehaviourViolation, FormulaError
from .expr import Expr, Variable, lift
from .printer import render
from .substitution import free_variables, substitute
from .verdict import Verdict
from utils.logger import get_logger


@dataclass(frozen=True)
class CheckResult:
    """Outcome of checking one call against its behaviour.

    Attributes:
        method: Name of the checked method
        index: Time index the call takes in the log
        args: Actual arguments of the call
        result: Actual result of the call
        formula: Formula left after evaluation
        verdict: Classification of ``formula``
    """

    method: str
    index: int
    args: Tuple[Any, ...]
    result: Any
    formula: Expr
    verdict: Verdict

    @property
    def passed(self) -> bool:
        return self.verdict is Verdict.TRUE

    def describe(self) -> str:
        """Return a report of this check with the residual formula rendered."""
        call = f"{self.method}({', '.join(repr(arg) for arg in self.args)}) -> {self.result!r}"
        return (
            f"Behaviour of {self.method} {self.verdict} for call #{self.index}: {call}\n"
            f"{render(self.formula)}"
        )


@dataclass(frozen=True)
class Behaviour:
    """Formula template describing every acceptable call to one method.

    Attributes:
        method: Name of the method the behaviour applies to
        args_var: Reserved variable standing for the argument tuple
        output_var: Reserved variable standing for the result
        formula: Template formula over ``args_var`` and ``output_var``
    """

    method: str
    args_var: Variable
    output_var: Variable
    formula: Expr

    def __post_init__(self):
        if self.args_var == self.output_var:
            raise FormulaError(f"Behaviour {self.method} reuses one variable for args and output")

        unexpected = free_variables(self.formula) - {self.args_var, self.output_var}
        if unexpected:
            names = ", ".join(sorted(str(v) for v in unexpected))
            raise FormulaError(f"Behaviour {self.method} has unbound variables: {names}")

    def instantiate(self, args: Sequence, result: Any) -> Expr:
        """Plug an actual call into a fresh copy of the template.

        The result is substituted first and the argument tuple second. The
        template itself is never modified.
        """
        expr = substitute(self.formula, self.output_var, lift(result))
        return substitute(expr, self.args_var, lift(tuple(args)))

    def check(self, args: Sequence, result: Any, log: Sequence) -> CheckResult:
        """Check a call against this behaviour.

        Args:
            args: Actual arguments of the call
            result: Actual result of the call
            log: Calls recorded before this one

        Returns:
            CheckResult holding the residual formula and its verdict
        """
        logger = get_logger()
        logger.check_start(self.method, len(log))

        residual = evaluate(self.instantiate(args, result), log)
        outcome = CheckResult(
            method=self.method,
            index=len(log),
            args=tuple(args),
            result=result,
            formula=residual,
            verdict=Verdict.of(residual),
        )

        logger.check_result(self.method, len(log), str(outcome.verdict))
        return outcome


class Specification(Mapping):
    """Immutable table of behaviours keyed by method name.

    Methods without a behaviour are not checked at all; their calls are
    still recorded so that other behaviours can refer to them.
    """

    def __init__(self, behaviours: Iterable[Behaviour] = ()):
        table = {}
        for behaviour in behaviours:
            if behaviour.method in table:
                raise FormulaError(f"Duplicate behaviour for method {behaviour.method}")
            table[behaviour.method] = behaviour
        self._behaviours = MappingProxyType(table)

    def __getitem__(self, method: str) -> Behaviour:
        return self._behaviours[method]

    def __iter__(self) -> Iterator[str]:
        return iter(self._behaviours)

    def __len__(self) -> int:
        return len(self._behaviours)

    def __repr__(self) -> str:
        return f"Specification({sorted(self._behaviours)})"

    def check(
        self, method: str, args: Sequence, result: Any, log: Sequence
    ) -> Optional[CheckResult]:
        """Check a call, or return None when ``method`` has no behaviour."""
        behaviour = self._behaviours.get(method)
        if behaviour is None:
            get_logger().debug(f"No behaviour for {method}; call not checked")
            return None
        return behaviour.check(args, result, log)

    def verify(self, method: str, args: Sequence, result: Any, log: Sequence) -> Optional[CheckResult]:
        """Check a call and raise unless its behaviour decided to true.

        Raises:
            BehaviourViolation: The formula decided to false or stayed undecided
        """
        outcome = self.check(method, args, result, log)
        if outcome is not None and not outcome.passed:
            get_logger().violation(outcome.describe())
            raise BehaviourViolation(outcome)
        return outcome
