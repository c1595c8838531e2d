# tests/logic_tests/test_proxy.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# Test suite for the call-checking proxy

import pytest
from core import Verdict, eq
from core.exceptions import BehaviourViolation, IndexLookupError
from logic.dsl import SpecificationBuilder, exist, received
from logic.proxy import SpecProxy


class Counter:
    """Small object whose ``bump`` returns the number of earlier bumps."""

    label = "counter"

    def __init__(self, broken=False):
        self.count = 0
        self.broken = broken

    def bump(self, amount):
        previous = self.count
        self.count += amount
        return previous + 1 if self.broken else previous

    def reset(self):
        self.count = 0


def counter_spec():
    spec = SpecificationBuilder()

    @spec.behaviour("bump")
    def bump(args, output):
        # The first bump returns 0; later bumps return something
        return eq(output, 0) | exist(lambda t: received("bump").at(t))

    @spec.behaviour("reset")
    def reset(args, output):
        return eq(output, None)

    return spec.build()


class TestSpecProxy:
    """Calls go through to the wrapped object and are checked first."""

    def test_forwards_and_records(self):
        proxy = SpecProxy(Counter(), counter_spec())

        assert proxy.invoke("bump", 2) == 0
        assert proxy.bump(3) == 2

        assert [r.method for r in proxy.log] == ["bump", "bump"]
        assert proxy.log[1].args == (3,)
        assert proxy.violations == []

    def test_fail_fast_raises_before_recording(self):
        proxy = SpecProxy(Counter(broken=True), counter_spec())

        with pytest.raises(BehaviourViolation) as excinfo:
            proxy.bump(1)

        assert excinfo.value.result.verdict is Verdict.FALSE
        assert excinfo.value.result.index == 0
        assert len(proxy.log) == 0

    def test_collect_mode_records_and_continues(self):
        proxy = SpecProxy(Counter(broken=True), counter_spec(), fail_fast=False)

        assert proxy.bump(1) == 1
        assert proxy.bump(1) == 2

        assert len(proxy.violations) == 1
        assert proxy.violations[0].method == "bump"
        assert len(proxy.log) == 2

    def test_unspecified_methods_still_recorded(self):
        spec = SpecificationBuilder()

        @spec.behaviour("bump")
        def bump(args, output):
            return exist(lambda t: received("reset").at(t))

        proxy = SpecProxy(Counter(), spec.build())
        proxy.reset()
        proxy.bump(1)

        assert [r.method for r in proxy.log] == ["reset", "bump"]

    def test_check_sees_log_before_call(self):
        spec = SpecificationBuilder()

        @spec.behaviour("bump")
        def bump(args, output):
            return exist(lambda t: received("bump").at(t))

        proxy = SpecProxy(Counter(), spec.build())
        with pytest.raises(BehaviourViolation):
            proxy.bump(1)

    def test_non_callable_attributes_pass_through(self):
        proxy = SpecProxy(Counter(), counter_spec())
        assert proxy.label == "counter"
        assert proxy.count == 0

    def test_missing_attribute(self):
        proxy = SpecProxy(Counter(), counter_spec())
        with pytest.raises(AttributeError):
            proxy.missing_method

    @pytest.mark.parametrize("fail_fast", [True, False])
    def test_lookup_failure_is_not_a_violation(self, fail_fast):
        spec = SpecificationBuilder()

        @spec.behaviour("bump")
        def bump(args, output):
            # bump takes one argument, so args[1] cannot be looked up
            return eq(args[1], output)

        proxy = SpecProxy(Counter(), spec.build(), fail_fast=fail_fast)
        with pytest.raises(IndexLookupError):
            proxy.bump(1)

        assert proxy.violations == []
        assert len(proxy.log) == 0
