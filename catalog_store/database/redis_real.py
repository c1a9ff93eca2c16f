"""
Real Redis-backed KeyedStore for deployments where REDIS_URL is set.
Implements the same interface as catalog_store.database.memory (in-memory
stub). Collections never expire: values are written without a TTL.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import redis
import redis.asyncio as aioredis

from catalog_store.database.keyed_store import KeyedStore
from catalog_store.errors import StoreError

logger = logging.getLogger(__name__)


class RedisStore(KeyedStore):
    """
    Redis-backed collection store. Every collection is one string value under
    ``<key_prefix><key>``.
    """

    def __init__(self, url: Optional[str] = None, key_prefix: str = "catalog:", client: Any = None) -> None:
        if client is None:
            if not url:
                raise ValueError("RedisStore needs either a url or a client")
            client = aioredis.from_url(url, decode_responses=True)
        self._client = client
        self._prefix = key_prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def get_raw(self, key: str) -> Optional[str]:
        try:
            raw = await self._client.get(self._key(key))
        except redis.RedisError as e:
            raise StoreError(f"Redis read failed for '{key}': {e}", key=key) from e
        if raw is None:
            return None
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        return raw

    async def put_raw(self, key: str, payload: str) -> None:
        try:
            await self._client.set(self._key(key), payload)
        except redis.RedisError as e:
            raise StoreError(f"Redis write failed for '{key}': {e}", key=key) from e

    async def delete(self, key: str) -> None:
        try:
            await self._client.delete(self._key(key))
        except redis.RedisError as e:
            raise StoreError(f"Redis delete failed for '{key}': {e}", key=key) from e

    async def ping(self) -> bool:
        try:
            return bool(await self._client.ping())
        except redis.RedisError as e:
            logger.warning("Redis ping failed: %s", e)
            return False

    async def close(self) -> None:
        await self._client.aclose()
