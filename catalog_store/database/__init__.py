"""
Persistence layer.

Every collection is read and written whole through a KeyedStore. Pick the
backend in ONE place (``create_store``): Redis when the configured URL env
var is set, JSON files for on-device persistence, in-memory otherwise.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from catalog_store.utils.config_loader import StoreConfig

from .collections import collection_key, initialize_store, record_model
from .file_store import JsonFileStore
from .keyed_store import KeyedStore
from .memory import MemoryStore

logger = logging.getLogger(__name__)


def create_store(config: Optional[StoreConfig] = None) -> KeyedStore:
    config = config or StoreConfig()
    load_dotenv()

    backend = config.backend
    redis_url = os.getenv(config.redis_url_env)
    if backend == "auto":
        backend = "redis" if redis_url else "memory"

    if backend == "redis":
        if not redis_url:
            raise ValueError(f"Redis backend selected but ${config.redis_url_env} is not set")
        from .redis_real import RedisStore

        logger.info("Using Redis catalog store (prefix=%s)", config.key_prefix)
        return RedisStore(url=redis_url, key_prefix=config.key_prefix)

    if backend == "file":
        logger.info("Using JSON file catalog store at %s", config.data_dir)
        return JsonFileStore(Path(config.data_dir))

    logger.info("Using in-memory catalog store")
    return MemoryStore()


__all__ = [
    "JsonFileStore",
    "KeyedStore",
    "MemoryStore",
    "collection_key",
    "create_store",
    "initialize_store",
    "record_model",
]
