# utils/logger.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# Logging utility for behaviour monitoring with configurable levels

import logging
import sys
from enum import Enum
from typing import Optional


class LogLevel(Enum):
    """Log levels for behaviour monitoring."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR


class MonitorLogger:
    """Centralized logger for behaviour monitoring with structured output."""

    def __init__(self, name: str = "spec_monitor", level: LogLevel = LogLevel.INFO):
        """Initialize the monitor logger.

        Args:
            name: Logger name (typically module name)
            level: Default logging level
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level.value)

        # Remove existing handlers to avoid duplicates
        self.logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level.value)
        console_handler.setFormatter(MonitorFormatter())

        self.logger.addHandler(console_handler)

        # Prevent propagation to root logger
        self.logger.propagate = False

    def set_level(self, level: LogLevel):
        """Change the logging level."""
        self.logger.setLevel(level.value)
        for handler in self.logger.handlers:
            handler.setLevel(level.value)

    # Core logging methods
    def debug(self, message: str, **kwargs):
        """Log debug message (detailed internal state)."""
        self.logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs):
        """Log info message (general progress)."""
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message (unexpected but recoverable)."""
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error message (serious problems)."""
        self.logger.error(message, **kwargs)

    # Specialized methods for behaviour checking events
    def monitor_start(self, spec_path: str, behaviours: str, trace_path: Optional[str] = None):
        """Log replay initialization."""
        self.info("=== Starting Evaluation ===")
        self.info(f"Specification: {spec_path}")
        self.info(f"Behaviours: {behaviours}")
        if trace_path:
            self.info(f"Call log: {trace_path}")

    def check_start(self, method: str, index: int):
        """Log the start of a behaviour check."""
        self.debug(f"    🔍 Checking {method} as call #{index} against {index} earlier calls")

    def check_result(self, method: str, index: int, verdict: str):
        """Log the verdict of a behaviour check."""
        marker = "🟢" if verdict == "TRUE" else "🔴"
        self.debug(f"    {marker} {method} call #{index}: {verdict}")

    def call_recorded(self, index: int, call: str):
        """Log a call appended to the log."""
        self.debug(f"  📝 t{index}: {call}")

    def call_processed(self, call_str: str, verdict_str: str):
        """Log the outcome of replaying one recorded call."""
        self.info(f"{call_str} → verdict={verdict_str}")

    def violation(self, report: str):
        """Log a behaviour violation with its residual formula."""
        self.warning(f"💥 {report}")

    def final_verdict(self, verdict: str):
        """Log final monitoring verdict."""
        self.info(f"\n>>> FINAL VERDICT: {verdict} <<<")

    def validation_result(self, success: bool, message: str = ""):
        """Log validation results."""
        if success:
            self.debug(f"✅ {message}" if message else "✅ Validation successful")
        else:
            self.error(f"❌ {message}" if message else "❌ Validation failed")


class MonitorFormatter(logging.Formatter):
    """Custom formatter for monitor logging with clean output."""

    def format(self, record):
        # For INFO level and above, show message only (clean output)
        if record.levelno >= logging.INFO:
            return record.getMessage()

        if record.levelno == logging.DEBUG:
            return f"[DEBUG] {record.getMessage()}"

        return f"[{record.levelname}] {record.getMessage()}"


# Global logger instance
_global_logger: Optional[MonitorLogger] = None


def get_logger(name: str = "spec_monitor") -> MonitorLogger:
    """Get or create the global monitor logger instance.

    Args:
        name: Logger name (default: "spec_monitor")

    Returns:
        MonitorLogger instance
    """
    global _global_logger
    if _global_logger is None:
        _global_logger = MonitorLogger(name)
    return _global_logger


def set_log_level(level: LogLevel):
    """Set the global log level.

    Args:
        level: New log level
    """
    logger = get_logger()
    logger.set_level(level)


def configure_logging(verbose: bool = False, debug: bool = False):
    """Configure logging based on command line flags.

    Args:
        verbose: Enable verbose (INFO) output
        debug: Enable debug output (overrides verbose)
    """
    if debug:
        set_log_level(LogLevel.DEBUG)
    elif verbose:
        set_log_level(LogLevel.INFO)
    else:
        set_log_level(LogLevel.WARNING)
