# experiments/key_value_store/kv_store.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# Key-value store used as the example workload

from pathlib import Path

SPEC_PATH = Path(__file__).with_name("kv_store.spec")


class KeyValueStore:
    """Dictionary-backed store with ``set``, ``del`` and ``get``.

    ``del`` is a keyword, so the method is defined as ``delete`` and also
    published under the name ``del`` for callers that look it up by name.
    """

    def __init__(self):
        self._variables = {}

    def get(self, key):
        return self._variables.get(key)

    def delete(self, key):
        self._variables.pop(key, None)
        return None

    def set(self, key, value):
        self._variables[key] = value
        return None


class StaleKeyValueStore(KeyValueStore):
    """Faulty store whose ``set`` never overwrites an existing key."""

    def set(self, key, value):
        self._variables.setdefault(key, value)
        return None


setattr(KeyValueStore, "del", KeyValueStore.delete)
