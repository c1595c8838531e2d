# utils/trace_utils.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# Writer for call log CSV files

import csv
import json
from typing import Any, Iterable, Optional

from utils.logger import get_logger


def _to_json(value: Any) -> str:
    # Tuples are written as JSON arrays and read back as tuples
    return json.dumps(value)


def write_call_log(
    filename: str,
    records: Iterable,
    header_comment: Optional[str] = None,
) -> int:
    """
    Writes recorded calls to a CSV call log readable by read_call_log.

    Args:
        filename: The name of the output CSV file.
        records: (method, args, result) triples, e.g. CallRecord objects.
        header_comment: Optional text written as a leading '#' comment line.

    Returns:
        The number of calls written.
    """
    logger = get_logger()
    count = 0

    with open(filename, "w", newline="", encoding="utf-8") as f:
        if header_comment:
            f.write(f"# {header_comment}\n")
        writer = csv.writer(f)
        writer.writerow(["method", "args", "result"])
        for method, args, result in records:
            writer.writerow([method, _to_json(list(args)), _to_json(result)])
            count += 1

    logger.debug(f"Wrote call log with {count} calls: {filename}")
    return count
