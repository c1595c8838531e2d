# logic/proxy.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# Interceptor that checks every call on a wrapped object

"""Runtime checking of a live object.

SpecProxy sits in front of an object, forwards each call to it, checks the
call against the behaviour of its method using the calls recorded so far,
and then records the call. The log a behaviour sees never contains the call
being checked.
"""

from typing import Any, List

from core.behaviour import CheckResult, Specification
from core.call_log import CallLog
from core.exceptions import BehaviourViolation
from utils.logger import get_logger


class SpecProxy:
    """Checks calls on ``wrapped`` against ``specification``.

    Attributes:
        wrapped: The real object receiving the calls
        specification: Behaviours keyed by method name
        fail_fast: Raise on the first failed check instead of collecting it
        log: Calls recorded so far
        violations: Failed checks collected when ``fail_fast`` is off
    """

    def __init__(self, wrapped: Any, specification: Specification, fail_fast: bool = True):
        self.wrapped = wrapped
        self.specification = specification
        self.fail_fast = fail_fast
        self.log = CallLog()
        self.violations: List[CheckResult] = []

    def invoke(self, method: str, *args: Any) -> Any:
        """Call ``method`` on the wrapped object and check the outcome.

        The wrapped method runs first; its result is then checked against
        the log as it stood before the call. With ``fail_fast`` a failed
        check raises before the call is recorded; otherwise the failure is
        kept in ``violations`` and the call is recorded anyway.

        Returns:
            Whatever the wrapped method returned

        Raises:
            BehaviourViolation: A check failed and ``fail_fast`` is on
            FormulaError: The behaviour of ``method`` is malformed
        """
        logger = get_logger()
        result = getattr(self.wrapped, method)(*args)

        outcome = self.specification.check(method, args, result, self.log.snapshot())
        if outcome is not None and not outcome.passed:
            logger.violation(outcome.describe())
            if self.fail_fast:
                raise BehaviourViolation(outcome)
            self.violations.append(outcome)

        record = self.log.append(method, args, result)
        logger.call_recorded(len(self.log) - 1, str(record))
        return result

    def __getattr__(self, name: str):
        # Only reached for names not found on the proxy itself
        if name.startswith("_") or "wrapped" not in self.__dict__:
            raise AttributeError(name)
        if not callable(getattr(self.wrapped, name)):
            return getattr(self.wrapped, name)

        def call(*args: Any) -> Any:
            return self.invoke(name, *args)

        return call

    def __repr__(self) -> str:
        return f"SpecProxy({self.wrapped!r}, calls={len(self.log)}, violations={len(self.violations)})"
