# core/evaluator.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# Three-valued evaluation of behaviour formulas over a call log

"""Evaluation of behaviour formulas against a recorded call log.

Evaluation reduces a formula to the most specific form that the log can
decide. A result of ``Const(True)`` or ``Const(False)`` is a verdict; any
other expression means the formula is still undecided for this log.

Time quantifiers are decided by searching the finite domain
``0 .. len(log) - 1``. A witness found in that domain stays a witness however
the log grows, but a ``false`` only holds for the snapshot it was computed
on, so nothing here is cached between calls.

Value quantifiers are never searched. They are decided only when their body
folds to a constant on its own, or when the body pins the variable to a
closed term with an equality, in which case that term is substituted
(the one-point rule).
"""

from __future__ import annotations
from typing import Optional, Sequence

from . import constructors as c
from .exceptions import TypeInferenceError
from .expr import (
    FALSE,
    TRUE,
    And,
    Const,
    Equals,
    Exists,
    Expr,
    Index,
    LessThan,
    Not,
    Received,
    TimeIndex,
    Variable,
    Visitor,
)
from .substitution import free_variables, substitute
from utils.logger import get_logger


class Evaluator(Visitor):
    """Reduces formulas against a fixed snapshot of the call log.

    Attributes:
        log: Sequence of ``(method, args, result)`` triples, indexed by time
    """

    def __init__(self, log: Sequence):
        self.log = log

    def evaluate(self, expr: Expr) -> Expr:
        return expr.accept(self)

    def visit_const(self, n: Const) -> Expr:
        return n

    def visit_time(self, n: TimeIndex) -> Expr:
        return n

    def visit_variable(self, n: Variable) -> Expr:
        return n

    def visit_less_than(self, n: LessThan) -> Expr:
        return c.lt(self.evaluate(n.left), self.evaluate(n.right))

    def visit_equals(self, n: Equals) -> Expr:
        return c.eq(self.evaluate(n.left), self.evaluate(n.right))

    def visit_index(self, n: Index) -> Expr:
        return c.index(self.evaluate(n.target), self.evaluate(n.key))

    def visit_not(self, n: Not) -> Expr:
        return c.not_(self.evaluate(n.operand))

    def visit_and(self, n: And) -> Expr:
        # All conjuncts are evaluated, even after one decides false
        return c.and_(*(self.evaluate(arg) for arg in n.args))

    def visit_received(self, n: Received) -> Expr:
        if n.time is None:
            return n

        time = self.evaluate(n.time)
        if not isinstance(time, TimeIndex):
            return n

        if time.n >= len(self.log):
            return FALSE

        method, args, _ = self.log[time.n]
        if method != n.method:
            return FALSE

        if n.args is None:
            return TRUE
        if len(args) != len(n.args):
            return FALSE

        return c.and_(
            *(c.eq(actual, self.evaluate(expected)) for actual, expected in zip(args, n.args))
        )

    def visit_exists(self, n: Exists) -> Expr:
        variable = n.variable

        if variable.is_time():
            return self._search_time(n)
        if variable.is_value():
            return self._resolve_value(n)

        raise TypeInferenceError(f"Cannot infer the type of {variable} in {n}")

    def _search_time(self, n: Exists) -> Expr:
        logger = get_logger()
        undecided = False

        for t in range(len(self.log)):
            instance = self.evaluate(substitute(n.body, n.variable, TimeIndex(t)))
            if _is_true(instance):
                logger.debug(f"Witness t{t} found for {n.variable}")
                return TRUE
            if not _is_false(instance):
                undecided = True

        if undecided:
            logger.debug(f"Quantifier over {n.variable} undecided for {len(self.log)} calls")
            return n

        logger.debug(f"No witness for {n.variable} among {len(self.log)} calls")
        return FALSE

    def _resolve_value(self, n: Exists) -> Expr:
        body = self.evaluate(n.body)
        if isinstance(body, Const):
            return body

        witness = _pinned_value(body, n.variable)
        if witness is None:
            return n

        resolved = self.evaluate(substitute(body, n.variable, witness))
        if isinstance(resolved, Const):
            get_logger().debug(f"{n.variable} pinned to {witness}")
            return resolved
        return n


def _is_true(expr: Expr) -> bool:
    return isinstance(expr, Const) and expr.value is True


def _is_false(expr: Expr) -> bool:
    return isinstance(expr, Const) and expr.value is False


def _pinned_value(body: Expr, variable: Variable) -> Optional[Expr]:
    """Find a closed term that ``body`` forces ``variable`` to equal.

    Looks at ``body`` itself and, for a conjunction, at each conjunct.
    """
    candidates = body.args if isinstance(body, And) else (body,)
    for candidate in candidates:
        if not isinstance(candidate, Equals):
            continue
        if candidate.left == variable and not free_variables(candidate.right):
            return candidate.right
        if candidate.right == variable and not free_variables(candidate.left):
            return candidate.left
    return None


def evaluate(expr: Expr, log: Sequence) -> Expr:
    """Reduce ``expr`` to the most specific form decidable from ``log``.

    Args:
        expr: Formula to evaluate
        log: Recorded calls as ``(method, args, result)`` triples

    Returns:
        ``Const(True)``/``Const(False)`` when decided, otherwise the residual
        formula

    Raises:
        TypeInferenceError: A quantified variable has no role
        IndexLookupError: A constant was indexed with a missing key
    """
    return Evaluator(log).evaluate(expr)
