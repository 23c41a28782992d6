"""Key-value stores the map can be persisted to.

The map only relies on two async operations: ``put(key, data)`` and
``get(key)``. Missing keys raise :class:`KeyNotFoundError`, other failures
raise :class:`StoreError`. Durability is whatever the concrete store offers.
"""
from __future__ import annotations

import asyncio
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from ..errors import KeyNotFoundError, StoreError
from .paths import default_store_root, ensure_dir

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Async byte store addressed by string keys."""

    @abstractmethod
    async def put(self, key: str, data: bytes) -> None:
        """Store ``data`` under ``key``, replacing any previous value.

        Raises:
            StoreError: If the write fails
        """

    @abstractmethod
    async def get(self, key: str) -> bytes:
        """Return the bytes stored under ``key``.

        Raises:
            KeyNotFoundError: If nothing is stored under ``key``
            StoreError: If the read fails
        """


class InMemoryStore(KeyValueStore):
    """Dict-backed store; contents are lost on exit."""

    def __init__(self) -> None:
        self.items: Dict[str, bytes] = {}

    async def put(self, key: str, data: bytes) -> None:
        self.items[key] = bytes(data)

    async def get(self, key: str) -> bytes:
        try:
            return self.items[key]
        except KeyError:
            raise KeyNotFoundError(f"No value stored under {key!r}") from None


class FileStore(KeyValueStore):
    """One ``<key>.bin`` file per key under a root directory.

    Each write goes to its own temporary file which is flushed, fsynced and swapped
    into place, so a crash mid-write leaves the previous value intact. File
    I/O runs in a worker thread (asyncio.to_thread).
    """

    SUFFIX = ".bin"

    def __init__(self, root: Optional[Path] = None) -> None:
        self.root = Path(root) if root is not None else default_store_root()

    def path_for(self, key: str) -> Path:
        if not key or any(sep in key for sep in ("/", "\\")) or key in (".", ".."):
            raise StoreError(f"Invalid store key: {key!r}")
        return self.root / f"{key}{self.SUFFIX}"

    async def put(self, key: str, data: bytes) -> None:
        path = self.path_for(key)
        try:
            await asyncio.to_thread(self._atomic_write, path, bytes(data))
        except OSError as exc:
            raise StoreError(f"Failed to write {path}: {exc}") from exc
        logger.debug("Wrote %d bytes to %s", len(data), path)

    async def get(self, key: str) -> bytes:
        path = self.path_for(key)
        try:
            data = await asyncio.to_thread(path.read_bytes)
        except FileNotFoundError:
            raise KeyNotFoundError(f"No value stored under {key!r} ({path})") from None
        except OSError as exc:
            raise StoreError(f"Failed to read {path}: {exc}") from exc
        logger.debug("Read %d bytes from %s", len(data), path)
        return data

    @staticmethod
    def _atomic_write(path: Path, data: bytes) -> None:
        # A fresh temp file per write, so overlapping saves never share one
        ensure_dir(path.parent)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        finally:
            if os.path.exists(tmp_name):
                try:
                    os.remove(tmp_name)
                except OSError:
                    logger.debug("Could not remove temp file %s", tmp_name, exc_info=True)
