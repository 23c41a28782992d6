from __future__ import annotations

import logging
from typing import Iterator, Optional, Tuple

from ..errors import InvalidCellValue, InvalidDimensions, OutOfBounds
from .notifier import ChangeNotifier

logger = logging.getLogger(__name__)

CELL_MAX = 0xFF


def check_value(value: int) -> int:
    """Return ``value`` as a plain int if it fits in one cell.

    Only ints (and bools) are accepted; floats, strings and None are rejected
    rather than coerced, so a stored value always reads back unchanged.
    """
    if not isinstance(value, int):
        raise InvalidCellValue(f"Cell value must be an integer, got {value!r}")
    value = int(value)
    if not 0 <= value <= CELL_MAX:
        raise InvalidCellValue(f"Cell value {value} outside [0, {CELL_MAX}]")
    return value


class GridView:
    """A bounds-checked 2D accessor over a slice of a shared byte buffer.

    The view covers ``width * height`` bytes starting at ``offset``; rows are
    ``stride`` bytes apart (the stride always equals the width). Several views
    can share one backing ``bytearray`` as long as their ranges don't overlap.
    Every mutating call raises the Updated signal on ``notifier`` exactly once.
    """

    __slots__ = ("_backing", "_offset", "_w", "_h", "_notifier")

    def __init__(
        self,
        backing: bytearray,
        offset: int,
        width: int,
        height: int,
        notifier: Optional[ChangeNotifier] = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise InvalidDimensions(f"GridView dimensions must be positive, got {width}x{height}")
        if offset < 0 or offset + width * height > len(backing):
            raise InvalidDimensions(
                f"GridView range [{offset}, {offset + width * height}) exceeds buffer of {len(backing)} bytes"
            )
        self._backing = backing
        self._offset = int(offset)
        self._w = int(width)
        self._h = int(height)
        self._notifier = notifier if notifier is not None else ChangeNotifier()

    @property
    def width(self) -> int:
        return self._w

    @property
    def height(self) -> int:
        return self._h

    @property
    def stride(self) -> int:
        return self._w

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def notifier(self) -> ChangeNotifier:
        return self._notifier

    def __len__(self) -> int:
        return self._w * self._h

    @property
    def span(self) -> Tuple[int, int]:
        """Byte range ``[start, end)`` of this view inside the backing buffer."""
        return self._offset, self._offset + len(self)

    def is_within(self, x: int, y: int) -> bool:
        return 0 <= x < self._w and 0 <= y < self._h

    def _index(self, x: int, y: int) -> int:
        if not self.is_within(x, y):
            raise OutOfBounds(f"Coordinates out of bounds: ({x}, {y}) for layer {self._w}x{self._h}")
        return self._offset + y * self.stride + x

    def get(self, x: int, y: int) -> int:
        return self._backing[self._index(x, y)]

    def set(self, x: int, y: int, value: int) -> None:
        index = self._index(x, y)
        value = check_value(value)
        self._notifier.ensure_mutable()
        self._backing[index] = value
        self._notifier.notify()

    def fill(self, value: int) -> None:
        value = check_value(value)
        self._notifier.ensure_mutable()
        start, end = self.span
        self._backing[start:end] = bytes([value]) * (end - start)
        self._notifier.notify()

    def cells(self) -> Iterator[Tuple[int, int, int]]:
        """Yield ``(x, y, value)`` for every cell in row-major order."""
        for y in range(self._h):
            row = self._offset + y * self.stride
            for x in range(self._w):
                yield x, y, self._backing[row + x]

    def to_bytes(self) -> bytes:
        start, end = self.span
        return bytes(self._backing[start:end])

    def _replace(self, data: bytes, width: int, height: int) -> None:
        """Overwrite the whole range with ``data`` laid out as ``width x height``.

        Used by rotation; the byte count must not change and no signal is raised.
        """
        if width * height != len(self) or len(data) != len(self):
            raise InvalidDimensions(
                f"Cannot reshape {self._w}x{self._h} layer to {width}x{height} with {len(data)} bytes"
            )
        start, end = self.span
        self._backing[start:end] = data
        self._w = int(width)
        self._h = int(height)

    def __repr__(self) -> str:
        return f"GridView(offset={self._offset}, width={self._w}, height={self._h})"
