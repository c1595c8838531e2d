# utils/trace_reader.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# CSV reader for recorded call logs

import csv
import json
from pathlib import Path
from typing import Any, Iterator, Tuple
from core.call_log import CallRecord
from core.expr import freeze
from utils.logger import get_logger

REQUIRED_HEADERS = ("method", "args", "result")


class TraceFormatError(Exception):
    """Exception raised when call log files contain invalid format or data."""

    pass


def read_call_log(filepath: str) -> Iterator[CallRecord]:
    """Read recorded calls from a CSV call log file.

    Each row is one completed call, in the order the calls happened. The
    arguments column holds a JSON array and the result column a JSON value;
    an empty result cell stands for ``null``. Lines starting with ``#`` are
    comments.

    Expected CSV format:
        method,args,result
        set,"[""foo"", ""bar""]",null
        get,"[""foo""]",5

    Args:
        filepath: Path to the CSV call log

    Yields:
        CallRecord: Parsed calls in file order

    Raises:
        TraceFormatError: If file format is invalid or rows cannot be parsed
    """
    logger = get_logger()
    path = Path(filepath)

    if not path.exists():
        raise TraceFormatError(f"Call log file not found: {filepath}")

    logger.debug(f"Reading call log: {filepath}")

    try:
        with open(path, "r", newline="", encoding="utf-8") as file:
            # Keep file line numbers so comment lines still count in errors
            numbered = [
                (line_num, line)
                for line_num, line in enumerate(file, start=1)
                if not line.lstrip().startswith("#")
            ]
            reader = csv.DictReader(line for _, line in numbered)

            # Validate required headers
            missing = set(REQUIRED_HEADERS) - set(reader.fieldnames or [])
            if missing:
                raise TraceFormatError(f"Missing required headers: {sorted(missing)}")

            for row in reader:
                # A record spanning several lines reports its last line
                row_num = numbered[reader.line_num - 1][0]
                try:
                    record = _parse_call_row(row)
                except (TraceFormatError, ValueError) as e:
                    raise TraceFormatError(f"Error parsing row {row_num}: {e}")
                logger.debug(f"Parsed call {record} from row {row_num}")
                yield record

    except TraceFormatError:
        raise
    except OSError as e:
        raise TraceFormatError(f"Cannot open call log file: {filepath}: {e}")
    except csv.Error as e:
        raise TraceFormatError(f"Error reading call log file: {e}")


def validate_call_log_file(filepath: str) -> int:
    """Validate call log format by parsing every row.

    Args:
        filepath: Path to the call log to validate

    Returns:
        Number of calls in the file

    Raises:
        TraceFormatError: If validation fails
    """
    logger = get_logger()
    logger.debug(f"Validating call log: {filepath}")

    try:
        calls = list(read_call_log(filepath))
    except TraceFormatError as e:
        logger.validation_result(False, f"Call log validation failed: {e}")
        raise

    logger.validation_result(True, f"Call log validation successful: {len(calls)} calls")
    return len(calls)


def _parse_call_row(row: dict) -> CallRecord:
    """Parse a single CSV row into a CallRecord.

    Args:
        row: Dictionary containing CSV row data

    Returns:
        CallRecord: Parsed call

    Raises:
        TraceFormatError: If row data is invalid
    """
    method = (row.get("method") or "").strip()
    if not method:
        raise TraceFormatError("Empty method field")

    return CallRecord(
        method=method,
        args=_parse_args(row.get("args") or ""),
        result=_parse_value(row.get("result") or ""),
    )


def _parse_args(args_str: str) -> Tuple[Any, ...]:
    """Parse a JSON array of arguments.

    Args:
        args_str: String like '["foo", 5]'; empty means no arguments

    Returns:
        Tuple of argument values, nested arrays as tuples

    Raises:
        TraceFormatError: If the field is not a JSON array
    """
    if not args_str.strip():
        return ()

    args = _parse_value(args_str)
    if not isinstance(args, tuple):
        raise TraceFormatError(f"Arguments must be a JSON array: {args_str}")
    return args


def _parse_value(value_str: str) -> Any:
    """Parse a JSON value, turning arrays into tuples.

    Args:
        value_str: JSON text; empty means null

    Returns:
        The decoded value
    """
    if not value_str.strip():
        return None

    try:
        return freeze(json.loads(value_str))
    except json.JSONDecodeError as e:
        raise TraceFormatError(f"Invalid JSON value {value_str!r}: {e}")
