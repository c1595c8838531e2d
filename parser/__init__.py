# parser/__init__.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# Parsing and compilation of textual behaviour specifications

"""Behaviour specification parsing for runtime verification.

This module turns the textual behaviour language into the core formulas the
checker works with. Parsing produces a surface syntax tree that still
contains names and derived operators; compilation resolves names to fresh
variables and lowers every construct onto the simplifying constructors of
``core``.

Core Functions:
    parse: Converts specification text into a SpecFile syntax tree
    compile_specification: Parses and compiles text into a Specification

Example:
    >>> from parser import compile_specification
    >>> spec = compile_specification(
    ...     "behaviour get(args, output) = "
    ...     "exists t: received(set).at(t).with(args[0], output);"
    ... )
    >>> sorted(spec)
    ['get']
"""

from .exceptions import ParseError
from .grammar import SpecParser
from .compiler import BehaviourCompiler, compile_spec_file
from utils.logger import get_logger


def parse(source: str):
    """Parse specification text into its surface syntax tree.

    Uses a fresh parser instance for each invocation.

    Args:
        source: Behaviour specification text

    Returns:
        SpecFile holding the behaviour definitions in source order

    Raises:
        ParseError: The text is empty or malformed
    """
    logger = get_logger()
    parser = SpecParser()

    try:
        result = parser.parse(source)
        logger.debug(f"Specification parsed into {len(result.behaviours)} definition(s)")
        return result

    except ParseError:
        logger.debug("ParseError encountered during specification parsing")
        raise

    except Exception as exc:
        logger.debug(f"Unexpected parsing error: {type(exc).__name__}: {exc}")
        raise ParseError(str(exc)) from exc


def compile_specification(source: str):
    """Parse and compile specification text into an immutable Specification.

    Args:
        source: Behaviour specification text

    Returns:
        Specification mapping method names to their behaviours

    Raises:
        ParseError: Malformed text, unbound identifiers or duplicate behaviours
        FormulaError: A compiled formula is malformed, e.g. a variable used
            both as a time and as a value
    """
    return compile_spec_file(parse(source))


__all__ = [
    "parse",
    "compile_specification",
    "compile_spec_file",
    "BehaviourCompiler",
    "SpecParser",
    "ParseError",
]

__version__ = "1.0.0"
__description__ = "Behaviour specification parsing and compilation"
