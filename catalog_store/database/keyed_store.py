"""
KeyedStore: whole-collection persistence under string keys.

Backends implement the raw string primitives (``get_raw`` / ``put_raw`` /
``delete``); the typed collection helpers here handle JSON encoding through
pydantic so every backend round-trips records identically.

There is no locking. A read-modify-write on one key racing another on the
same key loses one of the updates: the last ``put_collection`` wins for the
whole collection.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any, List, Optional, Type, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from catalog_store.errors import StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@lru_cache(maxsize=None)
def _list_adapter(model: Type[Any]) -> TypeAdapter:
    return TypeAdapter(List[model])


class KeyedStore(ABC):
    """Async get/put of serialized collections by key."""

    # --- Backend primitives ---------------------------------------------------

    @abstractmethod
    async def get_raw(self, key: str) -> Optional[str]:
        """Return the stored payload, or None when the key was never written."""

    @abstractmethod
    async def put_raw(self, key: str, payload: str) -> None:
        """Replace the payload stored under ``key``."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Drop ``key``. Deleting a missing key is a no-op."""

    async def exists(self, key: str) -> bool:
        return await self.get_raw(key) is not None

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        """Release backend resources. Backends without any keep this no-op."""

    # --- Typed collections ----------------------------------------------------

    async def get_collection(self, key: str, model: Type[T]) -> List[T]:
        """
        Load the collection stored under ``key``.

        A key that was never written reads as an empty list; callers cannot
        tell "never initialized" from "empty".

        Raises:
            StoreError: the backend failed or the payload no longer matches
                ``model``.
        """
        raw = await self.get_raw(key)
        if raw is None:
            return []
        try:
            return _list_adapter(model).validate_json(raw)
        except ValidationError as e:
            logger.error("Stored payload for key %s failed validation: %s", key, e)
            raise StoreError(f"Stored payload for '{key}' is not a valid {model.__name__} list", key=key) from e

    async def put_collection(self, key: str, model: Type[T], items: List[T]) -> None:
        """
        Serialize ``items`` and replace the collection under ``key``.

        Raises:
            StoreError: serialization or the backend write failed.
        """
        try:
            payload = _list_adapter(model).dump_json(list(items), by_alias=True).decode("utf-8")
        except (PydanticSerializationError, ValidationError) as e:
            raise StoreError(f"Could not serialize collection '{key}': {e}", key=key) from e
        await self.put_raw(key, payload)
        logger.debug("Stored %d records under %s", len(items), key)
