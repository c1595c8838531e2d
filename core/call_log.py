# core/call_log.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# Append-only record of observed method calls

from __future__ import annotations
from collections.abc import Sequence
from typing import Any, Iterator, List, NamedTuple, Tuple

from .expr import freeze


class CallRecord(NamedTuple):
    """One completed invocation of a monitored object.

    Being a named tuple, a record unpacks as ``method, args, result`` just
    like the plain triples the evaluator accepts.

    Attributes:
        method: Name of the invoked method
        args: Positional arguments, as a tuple
        result: Value the call returned
    """

    method: str
    args: Tuple[Any, ...]
    result: Any

    def __str__(self) -> str:
        args = ", ".join(repr(arg) for arg in self.args)
        return f"{self.method}({args}) -> {self.result!r}"


class CallLog(Sequence):
    """Append-only, totally ordered log of calls.

    The position of a record is its time index. Records are never removed or
    reordered, so the length of the log is always the exact upper bound of
    the time domain a formula may quantify over.
    """

    def __init__(self, records: Sequence = ()):
        self._records: List[CallRecord] = []
        for record in records:
            self.append(*record)

    def append(self, method: str, args: Sequence, result: Any) -> CallRecord:
        """Record a completed call and return the stored record."""
        record = CallRecord(method, freeze(tuple(args)), freeze(result))
        self._records.append(record)
        return record

    def snapshot(self) -> Tuple[CallRecord, ...]:
        """Return an immutable view of the calls recorded so far."""
        return tuple(self._records)

    def __getitem__(self, index):
        return self._records[index]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[CallRecord]:
        return iter(self._records)

    def __repr__(self) -> str:
        return f"CallLog({self._records!r})"
