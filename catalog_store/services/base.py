"""
Shared plumbing for the collection services: load / save a named collection
through the store handle, upsert and remove by id.
"""

from __future__ import annotations

import uuid
from typing import Any, List, Optional

from catalog_store.database.collections import collection_key, record_model
from catalog_store.database.keyed_store import KeyedStore
from catalog_store.error_handler import ErrorHandler


def new_id() -> str:
    return str(uuid.uuid4())


class CollectionService:
    def __init__(self, store: KeyedStore, error_handler: Optional[ErrorHandler] = None):
        self.store = store
        self.error_handler = error_handler or ErrorHandler()

    async def _load(self, name: str, user_id: Optional[str] = None) -> List[Any]:
        return await self.store.get_collection(collection_key(name, user_id), record_model(name))

    async def _save(self, name: str, items: List[Any], user_id: Optional[str] = None) -> None:
        await self.store.put_collection(collection_key(name, user_id), record_model(name), items)

    async def _clear(self, name: str, user_id: Optional[str] = None) -> None:
        await self.store.delete(collection_key(name, user_id))

    async def _find(self, name: str, record_id: str, user_id: Optional[str] = None) -> Optional[Any]:
        records = await self._load(name, user_id)
        return next((r for r in records if r.id == record_id), None)

    async def _upsert(self, name: str, record: Any, user_id: Optional[str] = None) -> Any:
        """Replace the record with the same id in place, or append it."""
        records = await self._load(name, user_id)
        for i, existing in enumerate(records):
            if existing.id == record.id:
                records[i] = record
                break
        else:
            records.append(record)
        await self._save(name, records, user_id)
        return record

    async def _remove(self, name: str, record_id: str, user_id: Optional[str] = None) -> bool:
        """Drop the record with ``record_id``. Missing ids are a no-op."""
        records = await self._load(name, user_id)
        remaining = [r for r in records if r.id != record_id]
        if len(remaining) == len(records):
            return False
        await self._save(name, remaining, user_id)
        return True
