# parser/compiler.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# Lowering of parsed behaviour definitions onto core formulas

"""Compiles surface syntax trees into core behaviour formulas.

Names are resolved against a lexical scope: each behaviour opens a scope
holding its two parameters, and each quantifier extends it with a fresh
variable, so shadowing and reuse of the same name in sibling quantifiers
never produce the same variable. Derived operators are expanded here:

    a => b      becomes  either(not_(a), b)
    a <= b      becomes  not_(lt(b, a))
    a != b      becomes  not_(eq(a, b))
    forall x: e becomes  not_(exists x: not_(e))
"""

from __future__ import annotations
from typing import Dict, List

from core import constructors as c
from core.behaviour import Behaviour, Specification
from core.expr import Expr, Received, TimeIndex, Variable, lift
from . import ast_nodes as ast
from .exceptions import ParseError
from utils.logger import get_logger


class BehaviourCompiler(ast.Visitor):
    """Lowers one behaviour definition at a time onto the core constructors.

    Attributes:
        _scope: Mapping from names in scope to their variables
        _method: Behaviour being compiled, for error messages
    """

    def __init__(self):
        self._scope: Dict[str, Variable] = {}
        self._method = ""

    def compile_behaviour(self, definition: ast.BehaviourDef) -> Behaviour:
        """Build a Behaviour from one parsed definition.

        Raises:
            ParseError: Unbound name or repeated parameter name
            FormulaError: The lowered formula is malformed
        """
        if definition.args_name == definition.output_name:
            raise ParseError(
                f"Behaviour '{definition.method}' at line {definition.lineno} "
                f"uses '{definition.args_name}' for both parameters"
            )

        args_var = Variable(name=definition.args_name)
        output_var = Variable(name=definition.output_name)

        self._method = definition.method
        self._scope = {definition.args_name: args_var, definition.output_name: output_var}
        formula = self._visit(definition.body)

        return Behaviour(definition.method, args_var, output_var, formula)

    def _visit(self, node: ast.Expr) -> Expr:
        return node.accept(self)

    def visit_name(self, n: ast.Name) -> Expr:
        try:
            return self._scope[n.name]
        except KeyError:
            raise ParseError(f"Unbound identifier '{n.name}' in behaviour '{self._method}'") from None

    def visit_literal(self, n: ast.Literal) -> Expr:
        return lift(n.value)

    def visit_not(self, n: ast.Not) -> Expr:
        return c.not_(self._visit(n.operand))

    def visit_and(self, n: ast.And) -> Expr:
        return c.and_(self._visit(n.left), self._visit(n.right))

    def visit_or(self, n: ast.Or) -> Expr:
        return c.either(self._visit(n.left), self._visit(n.right))

    def visit_implies(self, n: ast.Implies) -> Expr:
        return c.implies(self._visit(n.left), self._visit(n.right))

    def visit_compare(self, n: ast.Compare) -> Expr:
        left = self._visit(n.left)
        right = self._visit(n.right)

        if n.op == "<":
            return c.lt(left, right)
        if n.op == ">":
            return c.gt(left, right)
        if n.op == "<=":
            return c.not_(c.lt(right, left))
        if n.op == ">=":
            return c.not_(c.lt(left, right))
        if n.op == "==":
            return c.eq(left, right)
        if n.op == "!=":
            return c.not_(c.eq(left, right))
        raise ParseError(f"Unknown comparison operator '{n.op}'")

    def visit_subscript(self, n: ast.Subscript) -> Expr:
        return c.index(self._visit(n.target), self._visit(n.key))

    def visit_quantifier(self, n: ast.Quantifier) -> Expr:
        variable = Variable(name=n.name)

        outer = self._scope
        self._scope = {**outer, n.name: variable}
        try:
            body = self._visit(n.body)
        finally:
            self._scope = outer

        if n.kind == "forall":
            return c.for_all(variable, body)
        return c.exists(variable, body)

    def visit_conditional(self, n: ast.Conditional) -> Expr:
        return c.if_then_else(
            self._visit(n.condition), self._visit(n.then), self._visit(n.otherwise)
        )

    def visit_received(self, n: ast.Received) -> Expr:
        pattern = Received(n.method)
        if n.time is not None:
            pattern = pattern.at(self._time(n.time))
        if n.args is not None:
            pattern = pattern.with_(*[self._visit(arg) for arg in n.args])
        return pattern

    def _time(self, node: ast.Expr) -> Expr:
        # A literal position such as .at(0) names a fixed call in the log
        if isinstance(node, ast.Literal) and type(node.value) is int:
            if node.value < 0:
                raise ParseError(f"Negative time index {node.value} in behaviour '{self._method}'")
            return TimeIndex(node.value)
        return self._visit(node)


def compile_spec_file(spec_file: ast.SpecFile) -> Specification:
    """Compile every definition of a parsed file into a Specification.

    Raises:
        ParseError: A name is unbound or a method has two behaviours
    """
    logger = get_logger()
    compiler = BehaviourCompiler()
    behaviours: List[Behaviour] = []
    seen: Dict[str, int] = {}

    for definition in spec_file.behaviours:
        if definition.method in seen:
            raise ParseError(
                f"Duplicate behaviour '{definition.method}' at line {definition.lineno} "
                f"(first defined at line {seen[definition.method]})"
            )
        seen[definition.method] = definition.lineno

        behaviour = compiler.compile_behaviour(definition)
        logger.debug(f"Compiled behaviour {behaviour.method}: {behaviour.formula}")
        behaviours.append(behaviour)

    return Specification(behaviours)
