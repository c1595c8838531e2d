# tests/core_tests/test_substitution.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# Test suite for capture-checked substitution and free variables

import pytest
from core import (
    FALSE,
    TRUE,
    Const,
    Received,
    Role,
    TimeIndex,
    Variable,
    and_,
    eq,
    exists,
    free_variables,
    index,
    lt,
    not_,
    substitute,
)
from core.exceptions import CaptureError, IndexLookupError
from core.substitution import is_closed


class TestSubstitution:
    """Substituting a value refolds everything that became decidable."""

    def test_equality_decides(self):
        v = Variable()
        assert substitute(eq(v, 5), v, 5) == TRUE
        assert substitute(eq(v, 5), v, 6) == FALSE

    def test_ordering_decides(self):
        v = Variable()
        assert substitute(lt(v, 3), v, 7) == FALSE

    def test_index_folds_after_substitution(self):
        args = Variable()
        assert substitute(index(args, 0), args, ("foo", 5)) == Const("foo")

    def test_missing_position_raises_inside_equality(self):
        args = Variable()
        with pytest.raises(IndexLookupError):
            substitute(eq(index(args, 3), index(args, 3)), args, ("foo",))

    def test_other_variables_untouched(self):
        v, w = Variable(), Variable()
        assert substitute(eq(w, 1), v, 1) == eq(w, 1)

    def test_substitutes_under_quantifier(self):
        key = Variable()
        t = Variable()
        formula = exists(t, Received("set").at(t).with_(key))

        result = substitute(formula, key, "foo")

        assert result == exists(t, Received("set").at(t).with_("foo"))

    def test_received_without_time_keeps_shape(self):
        v = Variable()
        result = substitute(Received("m").with_(v), v, 1)
        assert result == Received("m", None, (Const(1),))

    def test_original_formula_unchanged(self):
        v = Variable()
        formula = and_(eq(v, 1), Received("m"))
        substitute(formula, v, 1)
        assert formula == and_(eq(v, 1), Received("m"))

    def test_capture_rejected(self):
        t = Variable(role=Role.TIME)
        formula = exists(t, lt(t, TimeIndex(3)))
        with pytest.raises(CaptureError):
            substitute(formula, t, TimeIndex(1))


class TestFreeVariables:
    """Free-variable analysis respects binders."""

    def test_bound_variable_excluded(self):
        t, v = Variable(), Variable()
        formula = exists(t, and_(Received("m").at(t), eq(v, 1)))
        assert free_variables(formula) == {v}

    def test_received_parts_collected(self):
        t, a = Variable(), Variable()
        assert free_variables(Received("m").at(t).with_(a)) == {t, a}

    def test_closed_formula(self):
        t = Variable()
        formula = not_(exists(t, Received("m").at(t)))
        assert is_closed(formula)
        assert not is_closed(eq(Variable(), 1))
