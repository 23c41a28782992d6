from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Tuple

from ..errors import InvalidDimensions, OutOfBounds
from .direction import Direction
from .grid_view import GridView, check_value
from .notifier import ChangeNotifier
from .rotation import RotationEngine

logger = logging.getLogger(__name__)


def layer_sizes(width: int, height: int) -> Tuple[int, int, int]:
    """Byte sizes of the floor, horizontal-wall and vertical-wall layers."""
    return width * height, width * (height + 1), (width + 1) * height


class LayeredMap:
    """Floor cells plus horizontal and vertical wall segments in one buffer.

    For a W x H map the buffer holds, in order:

    - ``floor``: W x H, one cell per tile
    - ``wall_h``: W x (H + 1), the wall along the top edge of each tile row
    - ``wall_v``: (W + 1) x H, the wall along the left edge of each tile column

    Tile ``(x, y)`` is bounded by ``wall_h(x, y)`` to the north,
    ``wall_h(x, y + 1)`` to the south, ``wall_v(x, y)`` to the west and
    ``wall_v(x + 1, y)`` to the east. Neighbouring tiles therefore read and
    write the very same wall cell.

    The buffer is allocated once. Rotation rewrites layer contents in place and
    swaps which view plays the horizontal/vertical wall role; it never
    reallocates, so the byte order of the buffer follows the current roles'
    original offsets rather than a canonical orientation.
    """

    def __init__(self, width: int, height: int, floor_value: int = 0, wall_value: int = 0) -> None:
        if isinstance(width, bool) or isinstance(height, bool):
            raise InvalidDimensions("Map dimensions must be integers")
        try:
            w, h = int(width), int(height)
        except (TypeError, ValueError):
            raise InvalidDimensions(f"Map dimensions must be integers, got {width!r}x{height!r}") from None
        if w != width or h != height or w <= 0 or h <= 0:
            raise InvalidDimensions(f"Map dimensions must be positive integers, got {width!r}x{height!r}")
        floor_value = check_value(floor_value)
        wall_value = check_value(wall_value)

        self._w = w
        self._h = h
        self._heading = Direction.N
        self._notifier = ChangeNotifier()

        floor_bytes, wall_h_bytes, wall_v_bytes = layer_sizes(w, h)
        self._buf = bytearray(floor_bytes + wall_h_bytes + wall_v_bytes)
        self._floor = GridView(self._buf, 0, w, h, self._notifier)
        self._wall_h = GridView(self._buf, floor_bytes, w, h + 1, self._notifier)
        self._wall_v = GridView(self._buf, floor_bytes + wall_h_bytes, w + 1, h, self._notifier)
        self._check_partition()

        if floor_value:
            self._buf[0:floor_bytes] = bytes([floor_value]) * floor_bytes
        if wall_value:
            self._buf[floor_bytes:] = bytes([wall_value]) * (wall_h_bytes + wall_v_bytes)

        self._rotation = RotationEngine(self)
        logger.debug("Initialized LayeredMap %dx%d (%d bytes)", w, h, len(self._buf))

    def _check_partition(self) -> None:
        spans = sorted(view.span for view in self.layers())
        cursor = 0
        for start, end in spans:
            if start != cursor:
                raise AssertionError(f"Layer ranges overlap or leave a gap at byte {cursor}")
            cursor = end
        if cursor != len(self._buf):
            raise AssertionError(f"Layers cover {cursor} of {len(self._buf)} buffer bytes")

    # Geometry

    @property
    def width(self) -> int:
        return self._w

    @property
    def height(self) -> int:
        return self._h

    @property
    def heading(self) -> Direction:
        """Cumulative rotation, starting at north and advanced per quarter turn."""
        return self._heading

    @property
    def floor(self) -> GridView:
        return self._floor

    @property
    def wall_h(self) -> GridView:
        return self._wall_h

    @property
    def wall_v(self) -> GridView:
        return self._wall_v

    def layers(self) -> Tuple[GridView, GridView, GridView]:
        return self._floor, self._wall_h, self._wall_v

    @property
    def notifier(self) -> ChangeNotifier:
        return self._notifier

    @property
    def buffer(self) -> bytearray:
        """The backing buffer. Writing to it directly bypasses notification."""
        return self._buf

    def snapshot(self) -> bytes:
        return bytes(self._buf)

    def is_within(self, x: int, y: int) -> bool:
        return 0 <= x < self._w and 0 <= y < self._h

    # Walls

    def _wall_cell(self, x: int, y: int, direction: Direction) -> Tuple[GridView, int, int]:
        if not self.is_within(x, y):
            raise OutOfBounds(f"Tile out of bounds: ({x}, {y}) for map {self._w}x{self._h}")
        direction = Direction(direction)
        if direction is Direction.N:
            return self._wall_h, x, y
        if direction is Direction.S:
            return self._wall_h, x, y + 1
        if direction is Direction.W:
            return self._wall_v, x, y
        return self._wall_v, x + 1, y

    def wall_at(self, x: int, y: int, direction: Direction) -> int:
        layer, wx, wy = self._wall_cell(x, y, direction)
        return layer.get(wx, wy)

    def set_wall_at(self, x: int, y: int, direction: Direction, value: int) -> None:
        layer, wx, wy = self._wall_cell(x, y, direction)
        layer.set(wx, wy, value)

    def toggle_wall_at(self, x: int, y: int, direction: Direction) -> int:
        """Flip a wall between open (0) and solid (1); returns the new value."""
        layer, wx, wy = self._wall_cell(x, y, direction)
        value = 0 if layer.get(wx, wy) else 1
        layer.set(wx, wy, value)
        return value

    # Floor

    def type_at(self, x: int, y: int) -> int:
        return self._floor.get(x, y)

    def set_type_at(self, x: int, y: int, value: int) -> None:
        self._floor.set(x, y, value)

    def toggle_type_at(self, x: int, y: int) -> int:
        value = 0 if self._floor.get(x, y) else 1
        self._floor.set(x, y, value)
        return value

    # Tiles

    def tile(self, x: int, y: int) -> "Tile":
        if not self.is_within(x, y):
            raise OutOfBounds(f"Tile out of bounds: ({x}, {y}) for map {self._w}x{self._h}")
        return Tile(self, x, y)

    def tiles(self) -> Iterator["Tile"]:
        for y in range(self._h):
            for x in range(self._w):
                yield Tile(self, x, y)

    # Rotation

    def rotate(self, clockwise: bool = True, times: int = 1) -> None:
        """Rotate the whole map by ``times`` quarter turns.

        Each quarter turn raises one Updated signal.
        """
        for _ in range(int(times) % 4):
            self._rotation.quarter_turn(clockwise)

    def rotate_cw(self) -> None:
        self._rotation.quarter_turn(True)

    def rotate_ccw(self) -> None:
        self._rotation.quarter_turn(False)

    def _apply_turn(
        self,
        floor: bytes,
        wall_h: Tuple[GridView, bytes],
        wall_v: Tuple[GridView, bytes],
        heading: Direction,
    ) -> None:
        """Install the result of a quarter turn. Called by the rotation engine."""
        new_w, new_h = self._h, self._w
        self._floor._replace(floor, new_w, new_h)
        wall_h[0]._replace(wall_h[1], new_w, new_h + 1)
        wall_v[0]._replace(wall_v[1], new_w + 1, new_h)
        self._wall_h, self._wall_v = wall_h[0], wall_v[0]
        self._w, self._h = new_w, new_h
        self._heading = heading
        self._check_partition()

    # Whole-buffer replacement

    def load_bytes(self, data: bytes) -> None:
        """Overwrite the buffer byte for byte and raise one Updated signal."""
        if len(data) != len(self._buf):
            raise ValueError(f"Expected {len(self._buf)} bytes, got {len(data)}")
        self._notifier.ensure_mutable()
        self._buf[:] = data
        self._notifier.notify()

    def __repr__(self) -> str:
        return f"LayeredMap(width={self._w}, height={self._h}, heading={self._heading.name})"


class Tile:
    """Position handle into a LayeredMap; holds no data of its own."""

    __slots__ = ("map", "x", "y")

    def __init__(self, layered_map: LayeredMap, x: int, y: int) -> None:
        self.map = layered_map
        self.x = x
        self.y = y

    @property
    def type(self) -> int:
        return self.map.type_at(self.x, self.y)

    @type.setter
    def type(self, value: int) -> None:
        self.map.set_type_at(self.x, self.y, value)

    def toggle_type(self) -> int:
        return self.map.toggle_type_at(self.x, self.y)

    def wall(self, direction: Direction) -> int:
        return self.map.wall_at(self.x, self.y, direction)

    def set_wall(self, direction: Direction, value: int) -> None:
        self.map.set_wall_at(self.x, self.y, direction, value)

    def toggle_wall(self, direction: Direction) -> int:
        return self.map.toggle_wall_at(self.x, self.y, direction)

    def walls(self) -> Dict[Direction, int]:
        return {d: self.wall(d) for d in Direction}

    def fill_walls(self, value: int) -> None:
        # One write (and one signal) per wall
        for d in Direction:
            self.set_wall(d, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tile):
            return NotImplemented
        return self.map is other.map and (self.x, self.y) == (other.x, other.y)

    def __hash__(self) -> int:
        return hash((id(self.map), self.x, self.y))

    def __repr__(self) -> str:
        return f"Tile(x={self.x}, y={self.y})"


def grid_lines(view: GridView) -> List[List[int]]:
    """Return a layer's contents as rows, for debugging and tests."""
    return [[view.get(x, y) for x in range(view.width)] for y in range(view.height)]
