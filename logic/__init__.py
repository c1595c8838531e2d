# logic/__init__.py
# This file is part of SpecObject - A Behavioural Runtime Verification

"""Checking behaviours at run time and after the fact.

This package provides:
  • SpecProxy: interceptor checking every call on a live object
  • SpecificationBuilder and helpers: behaviours written in Python
  • SpecAndTraceMonitor: replay of a recorded CSV call log
  • ReplayReport: outcome of a replay
"""

from .dsl import SpecificationBuilder, all_, both, either, exist, for_all, ite, received
from .proxy import SpecProxy
from .runner import ReplayReport, SpecAndTraceMonitor
from utils.trace_reader import TraceFormatError

__all__ = [
    "SpecProxy",
    "SpecificationBuilder",
    "exist",
    "for_all",
    "received",
    "both",
    "all_",
    "either",
    "ite",
    "SpecAndTraceMonitor",
    "ReplayReport",
    "TraceFormatError",
]
