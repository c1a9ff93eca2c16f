"""
JSON-file KeyedStore: one ``<key>.json`` file per collection under a data
directory. This is the on-device persistence used when no Redis is around.

Writes go to a temporary sibling first and are moved into place, so a
collection file is either the old payload or the new one, never a prefix.
"""

from __future__ import annotations

import asyncio
import logging
import os
import re
from pathlib import Path
from typing import Optional, Union

from catalog_store.database.keyed_store import KeyedStore
from catalog_store.errors import InvalidArgument, StoreError

logger = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.:-]+$")


class JsonFileStore(KeyedStore):
    def __init__(self, root: Union[str, Path]) -> None:
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key) or key.startswith("."):
            raise InvalidArgument(f"Invalid store key: {key!r}")
        return self.root / f"{key}.json"

    async def get_raw(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return await asyncio.to_thread(self._read, path)
        except OSError as e:
            raise StoreError(f"Could not read '{key}' from {path}: {e}", key=key) from e

    async def put_raw(self, key: str, payload: str) -> None:
        path = self._path(key)
        try:
            await asyncio.to_thread(self._write, path, payload)
        except OSError as e:
            raise StoreError(f"Could not write '{key}' to {path}: {e}", key=key) from e
        logger.debug("Wrote %s (%d bytes)", path, len(payload))

    async def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            await asyncio.to_thread(path.unlink, True)
        except OSError as e:
            raise StoreError(f"Could not delete '{key}' at {path}: {e}", key=key) from e

    async def ping(self) -> bool:
        """True when the data directory, or the nearest parent that exists, is a writable directory."""
        candidate = self.root
        while not candidate.exists() and candidate != candidate.parent:
            candidate = candidate.parent
        return candidate.is_dir() and os.access(candidate, os.W_OK)

    @staticmethod
    def _read(path: Path) -> Optional[str]:
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    @staticmethod
    def _write(path: Path, payload: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_name(path.name + ".tmp")
        tmp.write_text(payload, encoding="utf-8")
        os.replace(tmp, path)
