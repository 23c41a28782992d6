from __future__ import annotations

import logging

from ..core import LayeredMap
from ..errors import PersistenceError
from .store import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_KEY = "tr_map"


class PersistenceAdapter:
    """Saves and loads a LayeredMap's raw buffer to a key-value store.

    The buffer is written as opaque bytes, floor then the current horizontal
    and vertical wall ranges, with no header. A rotated map is stored in its
    rotated layout. Failures are logged and reported through the boolean
    result; they are never raised to the caller and never retried.

    save/load are not serialized against each other or against in-memory
    edits. Mutating the map while a load is in flight is unsupported: the
    loaded bytes simply overwrite whatever is there when the read completes.
    """

    def __init__(self, layered_map: LayeredMap, store: KeyValueStore, key: str = DEFAULT_KEY) -> None:
        self.map = layered_map
        self.store = store
        self.key = key

    async def save(self) -> bool:
        data = self.map.snapshot()
        try:
            await self.store.put(self.key, data)
        except PersistenceError as exc:
            logger.error("Error saving map under %r: %s", self.key, exc)
            return False
        logger.info("Map saved under %r (%d bytes)", self.key, len(data))
        return True

    async def load(self) -> bool:
        try:
            data = await self.store.get(self.key)
            expected = len(self.map.buffer)
            if len(data) != expected:
                raise PersistenceError(f"Stored map has {len(data)} bytes, expected {expected}")
        except PersistenceError as exc:
            logger.error("Error loading map from %r: %s", self.key, exc)
            return False
        self.map.load_bytes(data)
        logger.info("Map loaded from %r (%d bytes)", self.key, len(data))
        return True
