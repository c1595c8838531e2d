# parser/ast_nodes.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# Abstract Syntax Tree node classes for behaviour specification files

"""AST node classes for representing parsed behaviour specifications.

This module defines immutable and hashable node classes for the surface
syntax of behaviour files. The surface tree keeps variables as plain names
and derived operators (``|``, ``=>``, ``forall``, ``if``) as their own
nodes; ``parser.compiler`` resolves names and lowers everything onto the
core formula constructors.

Node Types:
    SpecFile, BehaviourDef: A file and its behaviour definitions
    Name, Literal: Identifiers and constant values
    Not, And, Or, Implies: Boolean connectives
    Compare: < > <= >= == !=
    Subscript: Component access x[k]
    Quantifier: exists / forall
    Conditional: if-then-else
    Received: received(m).at(t).with(args...)

Every expression node renders back to source text that parses to an equal
tree, which the parser tests rely on.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, Tuple


class Visitor(Protocol):
    """Interface for AST visitors implementing the visitor design pattern.

    Concrete visitors must implement visit methods for each expression node
    type to enable traversal and transformation operations.
    """

    def visit_name(self, n: Name): ...

    def visit_literal(self, n: Literal): ...

    def visit_not(self, n: Not): ...

    def visit_and(self, n: And): ...

    def visit_or(self, n: Or): ...

    def visit_implies(self, n: Implies): ...

    def visit_compare(self, n: Compare): ...

    def visit_subscript(self, n: Subscript): ...

    def visit_quantifier(self, n: Quantifier): ...

    def visit_conditional(self, n: Conditional): ...

    def visit_received(self, n: Received): ...


@dataclass(frozen=True, slots=True)
class Expr:
    """Base class for all surface expression nodes."""

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


def format_literal(value: Any) -> str:
    """Render a literal value in specification syntax."""
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return "nil"
    if isinstance(value, str):
        return f'"{value}"' if "'" in value else f"'{value}'"
    return str(value)


@dataclass(frozen=True, slots=True)
class Name(Expr):
    """Reference to a behaviour parameter or a quantified variable.

    Attributes:
        name: The identifier
    """

    name: str

    def accept(self, v: Visitor):
        return v.visit_name(self)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class Literal(Expr):
    """Integer, string, boolean or nil constant.

    Attributes:
        value: The Python value of the literal
    """

    value: Any

    def accept(self, v: Visitor):
        return v.visit_literal(self)

    def __str__(self) -> str:
        return format_literal(self.value)


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
    """Logical conjunction."""

    left: Expr
    right: Expr

    def accept(self, v: Visitor):
        return v.visit_and(self)

    def __str__(self) -> str:
        return f"({self.left} & {self.right})"


@dataclass(frozen=True, slots=True)
class Or(Expr):
    """Logical disjunction."""

    left: Expr
    right: Expr

    def accept(self, v: Visitor):
        return v.visit_or(self)

    def __str__(self) -> str:
        return f"({self.left} | {self.right})"


@dataclass(frozen=True, slots=True)
class Implies(Expr):
    """Logical implication ``left => right``."""

    left: Expr
    right: Expr

    def accept(self, v: Visitor):
        return v.visit_implies(self)

    def __str__(self) -> str:
        return f"({self.left} => {self.right})"


@dataclass(frozen=True, slots=True)
class Compare(Expr):
    """Binary comparison.

    Attributes:
        op: One of ``<``, ``>``, ``<=``, ``>=``, ``==``, ``!=``
        left: Left operand
        right: Right operand
    """

    op: str
    left: Expr
    right: Expr

    def accept(self, v: Visitor):
        return v.visit_compare(self)

    def __str__(self) -> str:
        return f"({self.left} {self.op} {self.right})"


@dataclass(frozen=True, slots=True)
class Subscript(Expr):
    """Component access ``target[key]``."""

    target: Expr
    key: Expr

    def accept(self, v: Visitor):
        return v.visit_subscript(self)

    def __str__(self) -> str:
        return f"{self.target}[{self.key}]"


@dataclass(frozen=True, slots=True)
class Quantifier(Expr):
    """Existential or universal quantifier binding one name.

    Attributes:
        kind: ``"exists"`` or ``"forall"``
        name: The bound identifier
        body: Formula in which ``name`` is bound
    """

    kind: str
    name: str
    body: Expr

    def accept(self, v: Visitor):
        return v.visit_quantifier(self)

    def __str__(self) -> str:
        return f"({self.kind} {self.name}: {self.body})"


@dataclass(frozen=True, slots=True)
class Conditional(Expr):
    """``if condition then then else otherwise``."""

    condition: Expr
    then: Expr
    otherwise: Expr

    def accept(self, v: Visitor):
        return v.visit_conditional(self)

    def __str__(self) -> str:
        return f"(if {self.condition} then {self.then} else {self.otherwise})"


@dataclass(frozen=True, slots=True)
class Received(Expr):
    """``received(method)`` with optional ``.at(time)`` and ``.with(args)``.

    Attributes:
        method: Method name
        time: Time expression, if given
        args: Argument expressions, if given
    """

    method: str
    time: Optional[Expr] = None
    args: Optional[Tuple[Expr, ...]] = None

    def accept(self, v: Visitor):
        return v.visit_received(self)

    def __str__(self) -> str:
        text = f"received({self.method})"
        if self.time is not None:
            text += f".at({self.time})"
        if self.args is not None:
            text += ".with(" + ", ".join(str(arg) for arg in self.args) + ")"
        return text


@dataclass(frozen=True, slots=True)
class BehaviourDef:
    """One ``behaviour method(args, output) = body;`` definition.

    Attributes:
        method: Name of the method the behaviour applies to
        args_name: Name bound to the argument tuple
        output_name: Name bound to the result
        body: The behaviour formula
        lineno: Line the definition starts on
    """

    method: str
    args_name: str
    output_name: str
    body: Expr
    lineno: int = field(default=0, compare=False)

    def __str__(self) -> str:
        return f"behaviour {self.method}({self.args_name}, {self.output_name}) = {self.body};"


@dataclass(frozen=True, slots=True)
class SpecFile:
    """A parsed specification: behaviour definitions in file order."""

    behaviours: Tuple[BehaviourDef, ...]

    def __str__(self) -> str:
        return "\n".join(str(b) for b in self.behaviours)
