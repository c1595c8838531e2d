# utils/__init__.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# Utility module exports

from .trace_reader import (
    read_call_log,
    validate_call_log_file,
    TraceFormatError,
    _parse_args,
    _parse_value,
)
from .trace_utils import write_call_log

__all__ = [
    "read_call_log",
    "validate_call_log_file",
    "write_call_log",
    "TraceFormatError",
    "_parse_args",
    "_parse_value",
]
