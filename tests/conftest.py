# tests/conftest.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# Test configuration and shared fixtures for pytest

"""Test configuration and shared fixtures for SpecObject tests.

This module ensures the repository root is importable and provides the
call logs and specifications that several test modules share.
"""

import sys
import pytest
from pathlib import Path

# Ensure project modules can be imported
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

KV_STORE_DIR = project_root / "experiments" / "key_value_store"
if str(KV_STORE_DIR) not in sys.path:
    sys.path.insert(0, str(KV_STORE_DIR))


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Verify module availability before any test runs.

    Yields:
        None: Control to test execution
    """
    try:
        import core
        import parser
        import logic
        import utils
    except ImportError as e:
        pytest.skip(f"Cannot import required modules: {e}")

    yield


@pytest.fixture
def two_sets_log():
    """Log of ``set("foo", "bar")`` followed by ``set("foo", 5)``.

    Returns:
        CallLog: Two recorded calls
    """
    from core import CallLog

    return CallLog([("set", ("foo", "bar"), None), ("set", ("foo", 5), None)])


@pytest.fixture
def kv_spec_path():
    """Path of the key-value store behaviour file.

    Returns:
        Path: experiments/key_value_store/kv_store.spec
    """
    return KV_STORE_DIR / "kv_store.spec"


@pytest.fixture
def kv_specification(kv_spec_path):
    """Compiled key-value store behaviours.

    Returns:
        Specification: Behaviours for set, del and get
    """
    from parser import compile_specification

    return compile_specification(kv_spec_path.read_text(encoding="utf-8"))


@pytest.fixture(autouse=True)
def restore_log_level():
    """Undo log level changes made by CLI tests.

    Yields:
        None: Control to the test
    """
    yield

    from utils.logger import LogLevel, set_log_level

    set_log_level(LogLevel.INFO)
