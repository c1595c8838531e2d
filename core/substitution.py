# core/substitution.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# Capture-checked variable substitution and free-variable analysis

"""Structural substitution of variables in behaviour formulas.

Substitution replaces every free occurrence of a variable with an expression
and rebuilds each composite node through its smart constructor, so that
plugging a concrete value into a formula immediately folds whatever became
decidable.

Substituting into a quantifier that binds the very variable being replaced is
rejected instead of silently shadowed: a well-formed formula allocates a fresh
variable for every binder, so hitting that case means the formula was built
incorrectly.
"""

from __future__ import annotations
from typing import FrozenSet

from . import constructors as c
from .exceptions import CaptureError
from .expr import (
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
    lift,
)


class Substitution(Visitor):
    """Replaces one variable with an expression throughout a formula.

    Attributes:
        variable: The variable to replace
        replacement: The expression put in its place
    """

    def __init__(self, variable: Variable, replacement: Expr):
        self.variable = variable
        self.replacement = replacement

    def apply(self, expr: Expr) -> Expr:
        return expr.accept(self)

    def visit_const(self, n: Const) -> Expr:
        return n

    def visit_time(self, n: TimeIndex) -> Expr:
        return n

    def visit_variable(self, n: Variable) -> Expr:
        return self.replacement if n == self.variable else n

    def visit_less_than(self, n: LessThan) -> Expr:
        return c.lt(self.apply(n.left), self.apply(n.right))

    def visit_equals(self, n: Equals) -> Expr:
        return c.eq(self.apply(n.left), self.apply(n.right))

    def visit_index(self, n: Index) -> Expr:
        return c.index(self.apply(n.target), self.apply(n.key))

    def visit_not(self, n: Not) -> Expr:
        return c.not_(self.apply(n.operand))

    def visit_and(self, n: And) -> Expr:
        return c.and_(*(self.apply(arg) for arg in n.args))

    def visit_exists(self, n: Exists) -> Expr:
        if n.variable == self.variable:
            raise CaptureError(
                f"Cannot substitute {self.variable} inside its own quantifier {n}"
            )
        return c.exists(n.variable, self.apply(n.body))

    def visit_received(self, n: Received) -> Expr:
        time = None if n.time is None else self.apply(n.time)
        args = None if n.args is None else tuple(self.apply(arg) for arg in n.args)
        return Received(n.method, time, args)


class FreeVariables(Visitor):
    """Collects the variables that occur free in a formula."""

    def collect(self, expr: Expr) -> FrozenSet[Variable]:
        return expr.accept(self)

    def visit_const(self, n: Const) -> FrozenSet[Variable]:
        return frozenset()

    def visit_time(self, n: TimeIndex) -> FrozenSet[Variable]:
        return frozenset()

    def visit_variable(self, n: Variable) -> FrozenSet[Variable]:
        return frozenset((n,))

    def visit_less_than(self, n: LessThan) -> FrozenSet[Variable]:
        return self.collect(n.left) | self.collect(n.right)

    def visit_equals(self, n: Equals) -> FrozenSet[Variable]:
        return self.collect(n.left) | self.collect(n.right)

    def visit_index(self, n: Index) -> FrozenSet[Variable]:
        return self.collect(n.target) | self.collect(n.key)

    def visit_not(self, n: Not) -> FrozenSet[Variable]:
        return self.collect(n.operand)

    def visit_and(self, n: And) -> FrozenSet[Variable]:
        return frozenset().union(*(self.collect(arg) for arg in n.args))

    def visit_exists(self, n: Exists) -> FrozenSet[Variable]:
        return self.collect(n.body) - {n.variable}

    def visit_received(self, n: Received) -> FrozenSet[Variable]:
        found = frozenset() if n.time is None else self.collect(n.time)
        for arg in n.args or ():
            found |= self.collect(arg)
        return found


def substitute(expr: Expr, variable: Variable, replacement) -> Expr:
    """Replace every free occurrence of ``variable`` in ``expr``.

    Args:
        expr: Formula to rewrite
        variable: Variable to replace
        replacement: Expression or host value to put in its place

    Returns:
        The rewritten, re-folded formula

    Raises:
        CaptureError: ``variable`` is bound by a quantifier inside ``expr``
    """
    return Substitution(variable, lift(replacement)).apply(expr)


def free_variables(expr: Expr) -> FrozenSet[Variable]:
    """Return the set of variables occurring free in ``expr``."""
    return FreeVariables().collect(expr)


def is_closed(expr: Expr) -> bool:
    return not free_variables(expr)
