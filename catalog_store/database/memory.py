"""
Lightweight in-memory KeyedStore for local development and tests.

Payloads are kept as serialized strings, exactly as the persistent backends
keep them, so a record that survives this store survives the others too.
Nothing is written to disk; the data lives as long as the instance.
"""

from __future__ import annotations

from typing import Dict, Optional

from catalog_store.database.keyed_store import KeyedStore


class MemoryStore(KeyedStore):
    def __init__(self) -> None:
        # key -> serialized payload
        self._data: Dict[str, str] = {}

    async def get_raw(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def put_raw(self, key: str, payload: str) -> None:
        self._data[key] = payload

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)
