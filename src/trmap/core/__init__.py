"""In-memory map model: layered grid views, tiles, rotation and change signal."""

from .direction import Direction
from .grid_view import CELL_MAX, GridView
from .layered_map import LayeredMap, Tile, grid_lines, layer_sizes
from .notifier import ChangeNotifier
from .rotation import RotationEngine

__all__ = [
    "CELL_MAX",
    "ChangeNotifier",
    "Direction",
    "GridView",
    "LayeredMap",
    "RotationEngine",
    "Tile",
    "grid_lines",
    "layer_sizes",
]
