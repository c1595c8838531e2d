# core/expr.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# Expression tree node classes for behaviour formulas

"""Expression node classes for representing behaviour formulas.

This module defines the closed set of immutable node classes used to build
formulas over a call log. Formulas talk about points in the log (time
indices), the values received and returned by calls, and the existence of
calls with given arguments at given times.

Node Types:
    Const: Wrapped host value (booleans included)
    TimeIndex: Position in the call log
    Variable: Placeholder bound by substitution or by a quantifier
    LessThan, Equals, Index: Comparisons and component access
    Not, And: Boolean connectives
    Exists: Existential quantifier over time or value
    Received: "A call to method occurred (at time, with args)"

Nodes are built through the smart constructors in ``core.constructors``
rather than directly, so that constant subtrees are folded as soon as they
appear. All nodes support the visitor design pattern.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from itertools import count
from typing import Any, Optional, Protocol, Tuple

from .exceptions import FormulaError, RoleConflictError


class Role(Enum):
    """Role a variable plays in a formula, fixed by its first use."""

    UNTYPED = auto()
    TIME = auto()
    VALUE = auto()

    def __str__(self) -> str:
        return self.name.lower()


class Visitor(Protocol):
    """Interface for expression visitors implementing the visitor design pattern.

    Concrete visitors must implement a visit method for each node type.
    """

    def visit_const(self, n: Const): ...

    def visit_time(self, n: TimeIndex): ...

    def visit_variable(self, n: Variable): ...

    def visit_less_than(self, n: LessThan): ...

    def visit_equals(self, n: Equals): ...

    def visit_index(self, n: Index): ...

    def visit_not(self, n: Not): ...

    def visit_and(self, n: And): ...

    def visit_exists(self, n: Exists): ...

    def visit_received(self, n: Received): ...


@dataclass(frozen=True, slots=True)
class Expr:
    """Base class for all formula nodes.

    Besides visitor dispatch, expressions overload a few Python operators as
    tree builders for authoring convenience: ``<``, ``>``, ``[]``, ``~``,
    ``&`` and ``|``. Equality is deliberately left structural; use
    ``core.constructors.eq`` to build an equality node.
    """

    # __getitem__ builds Index nodes, so opt out of the legacy iteration protocol
    __iter__ = None

    def accept(self, v: Visitor):
        """Dispatch to the appropriate visitor method.

        Args:
            v: Visitor instance to process this node

        Raises:
            NotImplementedError: Must be implemented by subclasses
        """
        raise NotImplementedError

    def __str__(self) -> str:
        raise NotImplementedError

    def assert_time(self) -> None:
        """Record that this expression is used as a time position."""

    def assert_value(self) -> None:
        """Record that this expression is used as a value."""

    def __lt__(self, other):
        from .constructors import lt

        return lt(self, other)

    def __gt__(self, other):
        from .constructors import lt

        return lt(other, self)

    def __getitem__(self, key):
        from .constructors import index

        return index(self, key)

    def __invert__(self):
        from .constructors import not_

        return not_(self)

    def __and__(self, other):
        from .constructors import and_

        return and_(self, other)

    def __rand__(self, other):
        from .constructors import and_

        return and_(other, self)

    def __or__(self, other):
        from .constructors import either

        return either(self, other)

    def __ror__(self, other):
        from .constructors import either

        return either(other, self)


@dataclass(frozen=True, slots=True)
class Const(Expr):
    """Literal host value.

    Attributes:
        value: The wrapped value; lists are stored as tuples
    """

    value: Any

    def accept(self, v: Visitor):
        return v.visit_const(self)

    def __str__(self) -> str:
        return repr(self.value)


TRUE = Const(True)
FALSE = Const(False)


@dataclass(frozen=True, slots=True)
class TimeIndex(Expr):
    """Position in the call log.

    Attributes:
        n: Zero-based index of a recorded call
    """

    n: int

    def __post_init__(self):
        if self.n < 0:
            raise ValueError(f"Time index must be non-negative, got {self.n}")

    def accept(self, v: Visitor):
        return v.visit_time(self)

    def __str__(self) -> str:
        return f"t{self.n}"


_variable_ids = count()


@dataclass(frozen=True, slots=True)
class Variable(Expr):
    """Placeholder bound by substitution or by a quantifier.

    Variables are identified by an integer allocated at creation, so two
    variables are equal exactly when they share the id. The display name and
    the role do not take part in comparison.

    The role starts as ``Role.UNTYPED`` and is fixed the first time the
    variable is used as a time position or as a value. It is the only piece
    of state in a formula that changes after construction, and it only ever
    changes while the formula is being authored.

    Attributes:
        vid: Unique identifier
        name: Optional name used when rendering
        role: Current role of the variable
    """

    vid: int = field(default_factory=lambda: next(_variable_ids))
    name: Optional[str] = field(default=None, compare=False)
    role: Role = field(default=Role.UNTYPED, compare=False)

    def accept(self, v: Visitor):
        return v.visit_variable(self)

    def __str__(self) -> str:
        return f"{self.name or 'v'}_{self.vid}"

    def is_time(self) -> bool:
        return self.role is Role.TIME

    def is_value(self) -> bool:
        return self.role is Role.VALUE

    def assert_time(self) -> None:
        if self.role is Role.VALUE:
            raise RoleConflictError(f"Variable {self} used as both value and time")
        object.__setattr__(self, "role", Role.TIME)

    def assert_value(self) -> None:
        if self.role is Role.TIME:
            raise RoleConflictError(f"Variable {self} used as both value and time")
        object.__setattr__(self, "role", Role.VALUE)


@dataclass(frozen=True, slots=True)
class LessThan(Expr):
    """Ordering between two time indices or two constants."""

    left: Expr
    right: Expr

    def accept(self, v: Visitor):
        return v.visit_less_than(self)

    def __str__(self) -> str:
        return f"({self.left} < {self.right})"


@dataclass(frozen=True, slots=True)
class Equals(Expr):
    """Structural equality between two expressions."""

    left: Expr
    right: Expr

    def accept(self, v: Visitor):
        return v.visit_equals(self)

    def __str__(self) -> str:
        return f"({self.left} == {self.right})"


@dataclass(frozen=True, slots=True)
class Index(Expr):
    """Component ``key`` of a structured value."""

    target: Expr
    key: Expr

    def accept(self, v: Visitor):
        return v.visit_index(self)

    def __str__(self) -> str:
        return f"{self.target}[{self.key}]"


@dataclass(frozen=True, slots=True)
class Not(Expr):
    """Logical negation."""

    operand: Expr

    def accept(self, v: Visitor):
        return v.visit_not(self)

    def __str__(self) -> str:
        return f"!{self.operand}"


@dataclass(frozen=True, slots=True)
class And(Expr):
    """Conjunction over two or more operands.

    Attributes:
        args: The conjuncts, in authoring order
    """

    args: Tuple[Expr, ...]

    def accept(self, v: Visitor):
        return v.visit_and(self)

    def __str__(self) -> str:
        return "(" + " & ".join(str(arg) for arg in self.args) + ")"


@dataclass(frozen=True, slots=True)
class Exists(Expr):
    """Existential quantifier over a time index or a value.

    Attributes:
        variable: The bound variable
        body: Formula in which ``variable`` is bound
    """

    variable: Variable
    body: Expr

    def __post_init__(self):
        if not isinstance(self.variable, Variable):
            raise FormulaError(
                f"Expected a variable to quantify over, got {type(self.variable).__name__}"
            )

    def accept(self, v: Visitor):
        return v.visit_exists(self)

    def __str__(self) -> str:
        return f"(exists {self.variable}: {self.body})"


@dataclass(frozen=True, slots=True)
class Received(Expr):
    """Predicate "a call to ``method`` occurred (at ``time``, with ``args``)".

    Built incrementally: ``received("set").at(t).with_(key, value)``. An unset
    time leaves the predicate undecided; an unset argument list matches any
    arguments.

    Attributes:
        method: Name of the method
        time: Time position of the call, if pinned
        args: Expected argument expressions, if given
    """

    method: str
    time: Optional[Expr] = None
    args: Optional[Tuple[Expr, ...]] = None

    def __post_init__(self):
        if not isinstance(self.method, str):
            raise FormulaError(f"Expected method name, got {self.method!r}")

    def at(self, time) -> Received:
        """Pin the time of the call, marking ``time`` as a time position."""
        time = lift(time)
        time.assert_time()
        return replace(self, time=time)

    def with_(self, *args) -> Received:
        """Fix the expected arguments, marking each one as a value."""
        lifted = tuple(lift(arg) for arg in args)
        for arg in lifted:
            arg.assert_value()
        return replace(self, args=lifted)

    def accept(self, v: Visitor):
        return v.visit_received(self)

    def __str__(self) -> str:
        text = f"received({self.method})"
        if self.time is not None:
            text += f".at({self.time})"
        if self.args is not None:
            text += ".with(" + ", ".join(str(arg) for arg in self.args) + ")"
        return text


def freeze(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def lift(value: Any) -> Expr:
    """Lift a host value to an expression.

    Expressions are returned unchanged. Lists and tuples become a tuple
    constant so that argument lists are hashable and indexable; every other
    value is wrapped as-is.
    """
    if isinstance(value, Expr):
        return value
    return Const(freeze(value))
