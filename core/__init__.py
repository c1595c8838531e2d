# core/__init__.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# Core module public API for behaviour formulas and their evaluation

"""Core components for checking object behaviour against a call history.

This module provides the reasoning engine of SpecObject: an immutable,
closed expression language for talking about past method calls, the
simplifying constructors and substitution that keep formulas folded, the
three-valued evaluator that decides a formula against a call log, and the
protocol that checks each new call against its method's behaviour.

Primary Components:
    Const, TimeIndex, Variable, Received, ...: Formula node types
    lt, eq, index, not_, and_, either, if_then_else: Smart constructors
    substitute, free_variables: Capture-checked substitution
    evaluate: Reduction of a formula against a call log
    CallLog, CallRecord: Append-only record of observed calls
    Behaviour, Specification: Behaviour templates and per-call checking
    Verdict: TRUE / FALSE / UNKNOWN classification of a check

Example:
    >>> from core import CallLog, Received, TimeIndex, evaluate
    >>> log = CallLog([("set", ("foo", 5), None)])
    >>> evaluate(Received("set").at(TimeIndex(0)).with_("foo", 5), log)
    Const(value=True)
"""

from .behaviour import Behaviour, CheckResult, Specification
from .call_log import CallLog, CallRecord
from .constructors import (
    and_,
    either,
    eq,
    exists,
    for_all,
    gt,
    if_then_else,
    implies,
    index,
    lt,
    not_,
)
from .evaluator import evaluate
from .exceptions import (
    BehaviourViolation,
    CaptureError,
    FormulaError,
    IndexLookupError,
    RoleConflictError,
    TypeInferenceError,
)
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
    Role,
    TimeIndex,
    Variable,
    lift,
)
from .printer import render
from .substitution import free_variables, substitute
from .verdict import Verdict

__all__ = [
    "Expr",
    "Const",
    "TimeIndex",
    "Variable",
    "Role",
    "LessThan",
    "Equals",
    "Index",
    "Not",
    "And",
    "Exists",
    "Received",
    "TRUE",
    "FALSE",
    "lift",
    "lt",
    "gt",
    "eq",
    "index",
    "not_",
    "and_",
    "either",
    "if_then_else",
    "implies",
    "exists",
    "for_all",
    "substitute",
    "free_variables",
    "evaluate",
    "render",
    "CallLog",
    "CallRecord",
    "Behaviour",
    "CheckResult",
    "Specification",
    "Verdict",
    "FormulaError",
    "RoleConflictError",
    "TypeInferenceError",
    "CaptureError",
    "IndexLookupError",
    "BehaviourViolation",
]

__version__ = "1.0.0"
__description__ = "Core components for behaviour formulas and call-log checking"
