"""Text encoding of a map buffer for string-only stores and copy/paste."""
from __future__ import annotations

import base64
import binascii
import logging

from ..core import LayeredMap
from ..errors import PersistenceError

logger = logging.getLogger(__name__)


def encode_buffer(data: bytes) -> str:
    return base64.b64encode(bytes(data)).decode("ascii")


def decode_buffer(text: str) -> bytes:
    try:
        return base64.b64decode(text.strip().encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError, ValueError) as exc:
        raise PersistenceError(f"Invalid map text: {exc}") from exc


def export_text(layered_map: LayeredMap) -> str:
    """Return the whole buffer, in its current byte layout, as base64 text."""
    return encode_buffer(layered_map.snapshot())


def import_text(layered_map: LayeredMap, text: str) -> None:
    """Overwrite the map from :func:`export_text` output; raises one Updated signal."""
    data = decode_buffer(text)
    if len(data) != len(layered_map.buffer):
        raise PersistenceError(
            f"Map text holds {len(data)} bytes, map buffer is {len(layered_map.buffer)} bytes"
        )
    layered_map.load_bytes(data)
    logger.info("Map imported from text (%d bytes)", len(data))
