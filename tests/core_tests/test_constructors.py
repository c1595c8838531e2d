# tests/core_tests/test_constructors.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# Test suite for the simplifying formula constructors

"""Test suite for smart constructors and formula node invariants.

Covers constant folding, double negation, conjunction identity and
absorption, the derived combinators and the role bookkeeping of variables.
"""

import pytest
from core import (
    FALSE,
    TRUE,
    And,
    Const,
    Equals,
    Exists,
    Index,
    LessThan,
    Not,
    Received,
    Role,
    TimeIndex,
    Variable,
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
from core.exceptions import FormulaError, IndexLookupError, RoleConflictError


class TestFolding:
    """Constructors over known operands return the folded constant."""

    @pytest.mark.parametrize("a, b", [(1, 2), (2, 1), (3, 3), ("a", "b"), ("b", "a")])
    def test_lt_folds_constants(self, a, b):
        assert lt(a, b) == Const(a < b)

    @pytest.mark.parametrize("a, b", [(0, 1), (1, 0), (4, 4)])
    def test_lt_folds_time_indices(self, a, b):
        assert lt(TimeIndex(a), TimeIndex(b)) == Const(a < b)

    def test_gt_swaps_operands(self):
        v = Variable()
        assert gt(v, 3) == LessThan(Const(3), v)
        assert gt(TimeIndex(2), TimeIndex(1)) == TRUE

    def test_lt_of_incomparable_constants_is_malformed(self):
        with pytest.raises(FormulaError):
            lt(1, "a")

    @pytest.mark.parametrize("a, b", [(1, 1), (1, 2), ("foo", "foo"), (None, None), (None, 0)])
    def test_eq_folds_constants(self, a, b):
        assert eq(a, b) == Const(a == b)

    def test_eq_of_identical_operands_is_kept(self):
        v = Variable()
        assert eq(v, v) == Equals(v, v)
        assert eq(index(v, 0), index(v, 0)) == Equals(Index(v, Const(0)), Index(v, Const(0)))

    def test_eq_keeps_unknown_operands(self):
        v = Variable()
        assert eq(v, 5) == Equals(v, Const(5))

    def test_index_folds_tuple_position(self):
        assert index(("foo", 5), 1) == Const(5)

    def test_index_folds_mapping_key(self):
        assert index({"k": [1, 2]}, "k") == Const((1, 2))

    @pytest.mark.parametrize("target, key", [(("foo",), 3), ({"k": 1}, "missing"), (5, 0)])
    def test_index_lookup_failure(self, target, key):
        with pytest.raises(IndexLookupError) as excinfo:
            index(target, key)
        assert isinstance(excinfo.value, LookupError)
        assert isinstance(excinfo.value, FormulaError)

    def test_index_keeps_unknown_target(self):
        v = Variable()
        assert index(v, 0) == Index(v, Const(0))

    @pytest.mark.parametrize("value", [True, False])
    def test_not_folds_constants(self, value):
        assert not_(value) == Const(not value)


class TestBooleanLaws:
    """Double negation, identity and absorption hold structurally."""

    OPERANDS = [TRUE, FALSE, Received("m"), Equals(Variable(), Const(1))]

    @pytest.mark.parametrize("operand", OPERANDS)
    def test_double_negation(self, operand):
        assert not_(not_(operand)) == operand

    def test_negation_wraps_unknown_operand(self):
        r = Received("m")
        assert not_(r) == Not(r)

    def test_empty_conjunction_is_true(self):
        assert and_() == TRUE

    def test_singleton_conjunction_is_operand(self):
        r = Received("m")
        assert and_(r) is r

    def test_true_is_identity(self):
        r = Received("m")
        assert and_(TRUE, r, TRUE) == r

    def test_false_absorbs(self):
        assert and_(Received("m"), FALSE, Received("n")) == FALSE

    def test_nested_conjunctions_flatten(self):
        x, y, z = Received("x"), Received("y"), Received("z")
        assert and_(x, and_(y, z)) == And((x, y, z))

    def test_non_boolean_constant_is_kept(self):
        r = Received("m")
        assert and_(Const(0), r) == And((Const(0), r))


class TestDerivedCombinators:
    """Derived forms reduce through the primitive constructors."""

    def test_either_with_false_is_other_operand(self):
        r = Received("m")
        assert either(FALSE, r) == r

    def test_either_with_true_is_true(self):
        assert either(Received("m"), TRUE) == TRUE

    def test_if_then_else_selects_branch(self):
        a, b = Received("a"), Received("b")
        assert if_then_else(TRUE, a, b) == a
        assert if_then_else(FALSE, a, b) == b

    def test_implies_with_false_premise(self):
        assert implies(FALSE, Received("m")) == TRUE

    def test_exists_is_never_folded(self):
        t = Variable(role=Role.TIME)
        assert exists(t, TRUE) == Exists(t, TRUE)

    def test_for_all_is_negated_exists(self):
        t = Variable()
        body = Received("m").at(t)
        assert for_all(t, body) == Not(Exists(t, Not(body)))


class TestNodeInvariants:
    """Construction-time checks on the node types."""

    def test_negative_time_index_rejected(self):
        with pytest.raises(ValueError):
            TimeIndex(-1)

    def test_quantifier_binder_must_be_variable(self):
        with pytest.raises(FormulaError):
            Exists(Const(1), TRUE)

    def test_received_method_must_be_name(self):
        with pytest.raises(FormulaError):
            Received(5)

    def test_variables_compare_by_identity(self):
        assert Variable(name="x") != Variable(name="x")

    def test_at_marks_time_role(self):
        t = Variable()
        Received("m").at(t)
        assert t.is_time()
        assert not t.is_value()

    def test_with_marks_value_role(self):
        v = Variable()
        Received("m").with_(v)
        assert v.is_value()

    def test_role_conflict(self):
        v = Variable()
        Received("m").at(v)
        with pytest.raises(RoleConflictError):
            Received("m").with_(v)

    def test_with_lifts_host_values(self):
        assert Received("m").with_("foo", [1, 2]).args == (Const("foo"), Const((1, 2)))


class TestOperatorSugar:
    """Python operators build trees; == stays structural equality."""

    def test_less_than(self):
        v = Variable()
        assert (v < 3) == LessThan(v, Const(3))

    def test_greater_than(self):
        v = Variable()
        assert (v > 3) == LessThan(Const(3), v)

    def test_subscript(self):
        v = Variable()
        assert v[0] == Index(v, Const(0))

    def test_invert(self):
        r = Received("m")
        assert ~r == Not(r)

    def test_and_or(self):
        x, y = Received("x"), Received("y")
        assert (x & y) == And((x, y))
        assert (x | FALSE) == x
