# core/printer.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# Indented rendering of formulas for violation reports

"""Deterministic multi-line rendering of behaviour formulas.

``str(expr)`` gives a compact one-line form that is fine for log lines. When a
behaviour is violated the residual formula can be large, so reports use the
indented s-expression layout produced here instead::

    (and
      (received 'set'
        t1
        (with
          'foo'
          5))
      (not
        (exists later_4:time
          ...)))
"""

from __future__ import annotations
from typing import Iterable, List

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
)


class PrettyPrinter(Visitor):
    """Renders a formula as indented s-expressions.

    Attributes:
        indent_width: Spaces added per nesting level
    """

    def __init__(self, indent_width: int = 2):
        self.indent_width = indent_width
        self._depth = 0

    def render(self, expr: Expr) -> str:
        self._depth = 0
        return self._visit(expr)

    def _visit(self, node: Expr) -> str:
        return node.accept(self)

    def _pad(self) -> str:
        return " " * (self._depth * self.indent_width)

    def _leaf(self, text: str) -> str:
        return f"{self._pad()}{text}"

    def _nested(self, head: str, children: Iterable[Expr]) -> str:
        lines: List[str] = [f"{self._pad()}({head}"]
        self._depth += 1
        lines.extend(self._visit(child) for child in children)
        self._depth -= 1
        return "\n".join(lines) + ")"

    def visit_const(self, n: Const) -> str:
        return self._leaf(repr(n.value))

    def visit_time(self, n: TimeIndex) -> str:
        return self._leaf(str(n))

    def visit_variable(self, n: Variable) -> str:
        return self._leaf(str(n))

    def visit_less_than(self, n: LessThan) -> str:
        return self._nested("<", (n.left, n.right))

    def visit_equals(self, n: Equals) -> str:
        return self._nested("==", (n.left, n.right))

    def visit_index(self, n: Index) -> str:
        return self._nested("index", (n.target, n.key))

    def visit_not(self, n: Not) -> str:
        return self._nested("not", (n.operand,))

    def visit_and(self, n: And) -> str:
        return self._nested("and", n.args)

    def visit_exists(self, n: Exists) -> str:
        return self._nested(f"exists {n.variable}:{n.variable.role}", (n.body,))

    def visit_received(self, n: Received) -> str:
        lines = [f"{self._pad()}(received {n.method!r}"]
        self._depth += 1
        lines.append(self._leaf("nil") if n.time is None else self._visit(n.time))
        if n.args is None:
            lines.append(self._leaf("(with any)"))
        else:
            lines.append(self._nested("with", n.args))
        self._depth -= 1
        return "\n".join(lines) + ")"


def render(expr: Expr, indent_width: int = 2) -> str:
    """Render ``expr`` as an indented, human-readable block of text."""
    return PrettyPrinter(indent_width).render(expr)
