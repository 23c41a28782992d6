"""
trmap: a packed, multi-layer tile map model.

This package provides:
- GridView, bounds-checked 2D views over one shared byte buffer
- LayeredMap, floor cells plus horizontal/vertical walls shared between tiles
- Quarter-turn rotation that keeps walls attached to the tiles they separate
- A coarse change signal for renderers
- Async byte-level persistence against a key-value store

Renderers and input handlers (ASCII, CLI, GUI) should import and compose these.
"""
from .core import ChangeNotifier, Direction, GridView, LayeredMap, RotationEngine, Tile
from .editing import Zone, apply_zone, classify_zone
from .errors import (
    InvalidCellValue,
    InvalidDimensions,
    KeyNotFoundError,
    OutOfBounds,
    PersistenceError,
    ReentrantMutationError,
    StoreError,
    TRMapError,
)
from .persistence import FileStore, InMemoryStore, KeyValueStore, PersistenceAdapter
from .render import AsciiRenderer, render_lines

__version__ = "0.1.0"

__all__ = [
    "AsciiRenderer",
    "ChangeNotifier",
    "Direction",
    "FileStore",
    "GridView",
    "InMemoryStore",
    "InvalidCellValue",
    "InvalidDimensions",
    "KeyNotFoundError",
    "KeyValueStore",
    "LayeredMap",
    "OutOfBounds",
    "PersistenceAdapter",
    "PersistenceError",
    "ReentrantMutationError",
    "RotationEngine",
    "StoreError",
    "TRMapError",
    "Tile",
    "Zone",
    "apply_zone",
    "classify_zone",
    "render_lines",
]
