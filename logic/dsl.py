# logic/dsl.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# Python authoring surface for behaviour specifications

"""Building specifications directly in Python.

The textual language in ``parser`` is one way to write behaviours; this
module is the other. Behaviours are plain functions that receive the
argument and output variables and return a formula:

    >>> spec = SpecificationBuilder()
    >>> @spec.behaviour("get")
    ... def get(args, output):
    ...     return exist(lambda t: received("set").at(t).with_(args[0], output))
    >>> specification = spec.build()

Quantifier helpers take a function of the bound variable, so a fresh
variable is created for every use and named after the function's parameter.
"""

from typing import Any, Callable, List

from core import constructors as c
from core.behaviour import Behaviour, Specification
from core.expr import Expr, Received, Variable, lift
from utils.logger import get_logger


def _bound_variable(fn: Callable) -> Variable:
    code = getattr(fn, "__code__", None)
    name = code.co_varnames[0] if code is not None and code.co_argcount else None
    return Variable(name=name)


def exist(fn: Callable[[Variable], Any]) -> Expr:
    """``exists v: fn(v)`` for a fresh variable ``v``."""
    variable = _bound_variable(fn)
    return c.exists(variable, fn(variable))


def for_all(fn: Callable[[Variable], Any]) -> Expr:
    """``forall v: fn(v)`` for a fresh variable ``v``."""
    variable = _bound_variable(fn)
    return c.for_all(variable, fn(variable))


def received(method: str) -> Received:
    """Start a call pattern; refine it with ``.at(t)`` and ``.with_(...)``."""
    return Received(method)


def both(a: Any, b: Any) -> Expr:
    return c.and_(a, b)


def all_(*args: Any) -> Expr:
    return c.and_(*args)


def either(a: Any, b: Any) -> Expr:
    return c.either(a, b)


def ite(condition: Any, then: Any, otherwise: Any) -> Expr:
    return c.if_then_else(condition, then, otherwise)


class SpecificationBuilder:
    """Collects behaviours registered with the ``behaviour`` decorator.

    The builder is the only mutable piece; ``build`` returns an immutable
    Specification that can be handed to any number of proxies or runners.
    """

    def __init__(self):
        self._behaviours: List[Behaviour] = []

    def behaviour(self, method: str):
        """Register the decorated function as the behaviour of ``method``.

        The function is called once, immediately, with fresh ``args`` and
        ``output`` variables. It is returned unchanged.

        Raises:
            FormulaError: The returned formula refers to variables it does
                not bind
        """

        def decorator(fn: Callable[[Variable, Variable], Any]):
            args_var = Variable(name="args")
            output_var = Variable(name="output")
            formula = lift(fn(args_var, output_var))
            self._behaviours.append(Behaviour(method, args_var, output_var, formula))
            get_logger().debug(f"Registered behaviour {method}: {formula}")
            return fn

        return decorator

    def build(self) -> Specification:
        """Freeze the registered behaviours into a Specification.

        Raises:
            FormulaError: Two behaviours were registered for one method
        """
        return Specification(self._behaviours)
