# logic/runner.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# Offline replay of a recorded call log against a specification file

"""
SpecAndTraceMonitor: glue code that ties together a behaviour specification
file and a CSV call log, replaying each recorded call through the behaviour
of its method against the calls before it and producing a final Verdict.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from core.behaviour import CheckResult, Specification
from core.call_log import CallLog
from core.verdict import Verdict
from parser import compile_specification
from utils.logger import get_logger
from utils.trace_reader import TraceFormatError, read_call_log


def _read_file_or_error(path: Path, kind: str) -> str:
    """
    Read a text file into a string, raising TraceFormatError on failure.
    'kind' is used to customize the error message.
    """
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise TraceFormatError(f"{kind} file not found: {path}")
    except OSError as e:
        raise TraceFormatError(f"Could not read {kind} file {path}: {e}")


@dataclass
class ReplayReport:
    """Outcome of replaying one call log.

    Attributes:
        calls_processed: Calls read from the log and replayed
        checks_performed: Calls whose method has a behaviour
        violations: Checks that did not decide to true, in log order
        verdict: TRUE when every check passed, FALSE when some check
            decided false, UNKNOWN when the rest only stayed undecided
    """

    calls_processed: int = 0
    checks_performed: int = 0
    violations: List[CheckResult] = field(default_factory=list)
    verdict: Verdict = Verdict.TRUE

    @property
    def passed(self) -> bool:
        return self.verdict is Verdict.TRUE

    @property
    def conclusive(self) -> bool:
        """False when no check failed outright but some stayed undecided."""
        return self.verdict.is_conclusive()

    def summary(self) -> str:
        return (
            f"{self.calls_processed} calls replayed, {self.checks_performed} checked, "
            f"{len(self.violations)} violation(s)"
        )


class SpecAndTraceMonitor:
    """
    Given a behaviour specification file and a CSV call log, replays every
    call through Specification.check. The specification is compiled when the
    monitor is created so that syntax errors surface before any replay.
    """

    def __init__(self, spec_path_str: str, trace_path_str: str):
        self.spec_path = Path(spec_path_str)
        self.trace_path = Path(trace_path_str)

        spec_text = _read_file_or_error(self.spec_path, "Specification")
        self.specification: Specification = compile_specification(spec_text)

    def run(self, stop_on_violation: bool = False) -> ReplayReport:
        """
        Replay each recorded call in order. Every call is checked against the
        log of the calls before it and then appended. If stop_on_violation is
        True, halt after the first failed check.

        Raises:
            TraceFormatError: The call log cannot be read or parsed
            FormulaError: A behaviour is malformed
        """
        logger = get_logger()
        logger.monitor_start(
            str(self.spec_path), ", ".join(sorted(self.specification)) or "none", str(self.trace_path)
        )

        report = ReplayReport()
        log = CallLog()

        for record in read_call_log(str(self.trace_path)):
            outcome = self.specification.check(record.method, record.args, record.result, log.snapshot())
            report.calls_processed += 1

            if outcome is None:
                logger.call_processed(str(record), "unchecked")
            else:
                report.checks_performed += 1
                report.verdict = report.verdict.combine_conjunctive(outcome.verdict)
                logger.call_processed(str(record), str(outcome.verdict))
                if not outcome.passed:
                    report.violations.append(outcome)
                    logger.violation(outcome.describe())

            log.append(record.method, record.args, record.result)

            if stop_on_violation and report.violations:
                logger.info("Stopping at first violation")
                break

        if report.calls_processed == 0:
            logger.info("No calls found in call log")

        logger.info(report.summary())
        logger.final_verdict(str(report.verdict))
        logger.info("=== Evaluation Complete ===")
        return report
