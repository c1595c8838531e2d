# tests/core_tests/test_call_log.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# Test suite for the append-only call log

import pytest
from core import CallLog, CallRecord


class TestCallLog:
    """Records are frozen on entry and never reordered."""

    def test_append_returns_record(self):
        log = CallLog()
        record = log.append("set", ["foo", [1, 2]], None)

        assert record == CallRecord("set", ("foo", (1, 2)), None)
        assert len(log) == 1
        assert log[0] is record

    def test_built_from_triples(self):
        log = CallLog([("set", ("k", 1), None), ("get", ("k",), 1)])

        assert [r.method for r in log] == ["set", "get"]
        assert log[1].result == 1

    def test_records_unpack_as_triples(self):
        method, args, result = CallLog([("get", ("k",), 3)])[0]
        assert (method, args, result) == ("get", ("k",), 3)

    def test_snapshot_is_stable(self):
        log = CallLog([("set", ("k", 1), None)])
        snapshot = log.snapshot()

        log.append("get", ("k",), 1)

        assert isinstance(snapshot, tuple)
        assert len(snapshot) == 1
        assert len(log) == 2

    def test_no_item_assignment(self):
        log = CallLog([("set", ("k", 1), None)])
        with pytest.raises(TypeError):
            log[0] = ("del", ("k",), None)

    def test_record_str(self):
        assert str(CallRecord("set", ("foo", 5), None)) == "set('foo', 5) -> None"
