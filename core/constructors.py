# core/constructors.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# Simplifying smart constructors for formula nodes

"""Smart constructors for behaviour formulas.

Every operator has a constructing function instead of a raw node allocator.
Whenever the operands are concrete enough to decide the result, the
constructor returns the folded constant instead of a node, so a tree never
holds an operator over operands that are already known. Substitution and
evaluation rebuild trees through these functions, which is what lets a
formula collapse to ``true`` or ``false`` as information arrives.

Derived combinators (``either``, ``if_then_else``, ``implies``, ``for_all``)
are expressed with the primitive constructors and add no node kinds.
"""

from __future__ import annotations
from typing import Any

from .exceptions import FormulaError, IndexLookupError
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
    TimeIndex,
    Variable,
    lift,
)


def lt(a: Any, b: Any) -> Expr:
    """Build ``a < b``, folding two constants or two time indices."""
    a = lift(a)
    b = lift(b)

    if isinstance(a, Const) and isinstance(b, Const):
        try:
            return Const(a.value < b.value)
        except TypeError as exc:
            raise FormulaError(f"Cannot order {a} and {b}: {exc}") from exc
    if isinstance(a, TimeIndex) and isinstance(b, TimeIndex):
        return Const(a.n < b.n)
    return LessThan(a, b)


def gt(a: Any, b: Any) -> Expr:
    """Build ``a > b`` as ``b < a``."""
    return lt(b, a)


def eq(a: Any, b: Any) -> Expr:
    """Build ``a == b``.

    Two constants fold to the host equality of their values and two time
    indices to the comparison of their positions.
    """
    a = lift(a)
    b = lift(b)

    if isinstance(a, Const) and isinstance(b, Const):
        return Const(a.value == b.value)
    if isinstance(a, TimeIndex) and isinstance(b, TimeIndex):
        return Const(a.n == b.n)
    return Equals(a, b)


def index(target: Any, key: Any) -> Expr:
    """Build ``target[key]``, performing the lookup on two constants.

    Raises:
        IndexLookupError: The constant has no such key or position
    """
    target = lift(target)
    key = lift(key)

    if isinstance(target, Const) and isinstance(key, Const):
        try:
            return lift(target.value[key.value])
        except (KeyError, IndexError, TypeError) as exc:
            raise IndexLookupError(f"Cannot index {target} with {key}") from exc
    return Index(target, key)


def not_(operand: Any) -> Expr:
    """Build ``!operand`` with constant folding and double-negation elimination."""
    operand = lift(operand)

    if isinstance(operand, Const):
        return Const(not operand.value)
    if isinstance(operand, Not):
        return operand.operand
    return Not(operand)


def and_(*args: Any) -> Expr:
    """Build the conjunction of ``args``.

    A ``false`` operand decides the whole conjunction, ``true`` operands are
    dropped, nested conjunctions are flattened, no remaining operand gives
    ``true`` and a single remaining operand is returned as-is. Only the
    boolean constants take part in folding; ``Const(0)`` is kept as an
    operand.
    """
    kept = []
    for arg in args:
        arg = lift(arg)
        if isinstance(arg, Const):
            if arg.value is False:
                return FALSE
            if arg.value is True:
                continue
        if isinstance(arg, And):
            kept.extend(arg.args)
        else:
            kept.append(arg)

    if not kept:
        return TRUE
    if len(kept) == 1:
        return kept[0]
    return And(tuple(kept))


def either(a: Any, b: Any) -> Expr:
    """Disjunction, as ``!(!a & !b)``."""
    return not_(and_(not_(a), not_(b)))


def if_then_else(condition: Any, then: Any, otherwise: Any) -> Expr:
    """``then`` when ``condition`` holds, ``otherwise`` when it does not."""
    condition = lift(condition)
    return either(and_(condition, then), and_(not_(condition), otherwise))


def implies(a: Any, b: Any) -> Expr:
    return either(not_(a), b)


def exists(variable: Variable, body: Any) -> Expr:
    """Quantify ``variable`` over ``body``.

    Quantifiers are never folded here: over an empty log even
    ``exists t: true`` is false, so only evaluation can decide them.
    """
    return Exists(variable, lift(body))


def for_all(variable: Variable, body: Any) -> Expr:
    """Universal quantifier, as ``!(exists variable: !body)``."""
    return not_(exists(variable, not_(body)))
