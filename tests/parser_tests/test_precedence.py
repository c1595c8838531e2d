# tests/parser_tests/test_precedence.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# Test suite for specification parser operator precedence and associativity

"""Test suite for operator precedence and associativity.

Operator precedence (highest to lowest):
1. () - parentheses for grouping
2. [...] - component access
3. < > <= >= == != - comparisons (non-associative)
4. ! - negation (right-associative)
5. & - conjunction (left-associative)
6. | - disjunction (left-associative)
7. => - implication (right-associative)
8. exists / forall / if-then-else - extend as far right as possible
"""

import pytest
from parser import parse, ParseError
from parser.ast_nodes import (
    And,
    Compare,
    Conditional,
    Implies,
    Literal,
    Name,
    Not,
    Or,
    Quantifier,
    Received,
    Subscript,
)
from utils.logger import get_logger

a, b, c, d = Name("a"), Name("b"), Name("c"), Name("d")


def parse_body(expr_text: str):
    """Parse ``expr_text`` as the body of a one-behaviour file."""
    return parse(f"behaviour m(args, output) = {expr_text};").behaviours[0].body


class TestSpecPrecedence:
    """Test cases for operator precedence and associativity."""

    def setup_method(self):
        self.logger = get_logger()

    PRECEDENCE_TEST_CASES = [
        # Boolean connectives
        ("a | b & c", Or(a, And(b, c))),
        ("a & b | c", Or(And(a, b), c)),
        ("a & b & c", And(And(a, b), c)),
        ("a | b | c", Or(Or(a, b), c)),
        ("!a & b", And(Not(a), b)),
        ("!!a", Not(Not(a))),
        # Implication is lowest among the binary operators and right-associative
        ("a => b => c", Implies(a, Implies(b, c))),
        ("a | b => c & d", Implies(Or(a, b), And(c, d))),
        # Comparisons bind tighter than negation
        ("!a == b", Not(Compare("==", a, b))),
        ("a < b & c >= d", And(Compare("<", a, b), Compare(">=", c, d))),
        ("a != nil", Compare("!=", a, Literal(None))),
        # Component access binds tightest
        ("a[0] <= b", Compare("<=", Subscript(a, Literal(0)), b)),
        ("a[0][1]", Subscript(Subscript(a, Literal(0)), Literal(1))),
        ("a['key']", Subscript(a, Literal("key"))),
        # Parentheses override precedence
        ("a & (b | c)", And(a, Or(b, c))),
        ("!(a | b)", Not(Or(a, b))),
        # Binders extend to the right
        ("exists t: a & b", Quantifier("exists", "t", And(a, b))),
        ("a & exists t: b | c", And(a, Quantifier("exists", "t", Or(b, c)))),
        ("(exists t: a) & b", And(Quantifier("exists", "t", a), b)),
        ("forall x: x > 0", Quantifier("forall", "x", Compare(">", Name("x"), Literal(0)))),
        ("exists t: exists v: a", Quantifier("exists", "t", Quantifier("exists", "v", a))),
        ("if a then b else c & d", Conditional(a, b, And(c, d))),
        ("if a then b | c else d", Conditional(a, Or(b, c), d)),
        ("if a then if b then c else d else a", Conditional(a, Conditional(b, c, d), a)),
    ]

    @pytest.mark.parametrize("formula, expected_ast", PRECEDENCE_TEST_CASES)
    def test_precedence_and_associativity(self, formula, expected_ast):
        actual_ast = parse_body(formula)
        self.logger.debug(f"Parsed {formula!r} as {actual_ast}")

        assert actual_ast == expected_ast, (
            f"Precedence error for '{formula}':\n"
            f"Expected: {expected_ast}\n"
            f"Actual: {actual_ast}"
        )

    RECEIVED_CASES = [
        ("received(del)", Received("del")),
        ("received(set).at(t)", Received("set", Name("t"))),
        ("received(get).with()", Received("get", None, ())),
        (
            "received(set).at(t).with(args[0], 5)",
            Received("set", Name("t"), (Subscript(Name("args"), Literal(0)), Literal(5))),
        ),
        (
            "received(set).with('k').at(t)",
            Received("set", Name("t"), (Literal("k"),)),
        ),
        ("!received(m).at(t)", Not(Received("m", Name("t")))),
        ("received(m)[0]", Subscript(Received("m"), Literal(0))),
    ]

    @pytest.mark.parametrize("formula, expected_ast", RECEIVED_CASES)
    def test_received_chains(self, formula, expected_ast):
        assert parse_body(formula) == expected_ast

    @pytest.mark.parametrize("formula", ["a < b < c", "a == b != c", "a <= b >= c"])
    def test_comparisons_do_not_chain(self, formula):
        with pytest.raises(ParseError):
            parse_body(formula)
