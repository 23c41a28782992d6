"""Persistence for trmap maps.

This package provides:
- An async key-value store contract with in-memory and file-backed stores
- A PersistenceAdapter that saves/loads a map's raw buffer under a fixed key
- A base64 text codec for string-only storage and copy/paste
"""

from .adapter import DEFAULT_KEY, PersistenceAdapter
from .codec import decode_buffer, encode_buffer, export_text, import_text
from .paths import default_store_root
from .store import FileStore, InMemoryStore, KeyValueStore

__all__ = [
    "DEFAULT_KEY",
    "FileStore",
    "InMemoryStore",
    "KeyValueStore",
    "PersistenceAdapter",
    "decode_buffer",
    "default_store_root",
    "encode_buffer",
    "export_text",
    "import_text",
]
