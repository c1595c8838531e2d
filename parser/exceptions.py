# parser/exceptions.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# Custom exceptions for specification parsing and compilation

"""Domain-specific exceptions for behaviour specification processing.

Errors in the formulas themselves (role conflicts, capture, lookups) are
raised from ``core.exceptions``; this module only covers problems with the
specification text.
"""


class ParseError(RuntimeError):
    """Exception raised when a specification cannot be parsed or compiled.

    Indicates that the input does not conform to the behaviour grammar, or
    that it refers to names it never binds, or that it defines the same
    behaviour twice.
    """

    pass
