"""Quarter-turn rotation of a LayeredMap.

Every layer is remapped about the *floor* frame of the map being turned
(W x H before the turn):

    clockwise          (x, y) -> (H - 1 - y, x)
    counter-clockwise  (x, y) -> (y, W - 1 - x)

and written into a fresh temporary, never in place. A turn exchanges the
horizontal and vertical wall roles, so the view that held ``wall_h`` now
serves as ``wall_v`` and the other way round. Wall layers are one cell longer
than the floor along one axis, so pivoting them about the floor frame lands
one of them a cell short:

    clockwise          the new ``wall_v`` shifts +1 along x
    counter-clockwise  the new ``wall_h`` shifts +1 along y

With that correction the wall between two tiles before the turn is still the
wall between the same two tiles after it, and four turns in one direction
give back the original bytes.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Tuple

from .grid_view import GridView

if TYPE_CHECKING:  # pragma: no cover
    from .layered_map import LayeredMap

logger = logging.getLogger(__name__)

# clockwise -> (dx, dy) applied to the layer that becomes wall_v / wall_h
WALL_V_SHIFT = {True: (1, 0), False: (0, 0)}
WALL_H_SHIFT = {True: (0, 0), False: (0, 1)}


def remap_layer(
    view: GridView,
    frame_w: int,
    frame_h: int,
    clockwise: bool,
    shift: Tuple[int, int] = (0, 0),
) -> bytes:
    """Return the layer's cells rotated a quarter turn, laid out ``height x width``."""
    new_w, new_h = view.height, view.width
    dx, dy = shift
    out = bytearray(len(view))
    for x, y, value in view.cells():
        if clockwise:
            nx, ny = frame_h - 1 - y + dx, x + dy
        else:
            nx, ny = y + dx, frame_w - 1 - x + dy
        if not (0 <= nx < new_w and 0 <= ny < new_h):
            raise AssertionError(f"Rotated cell ({nx}, {ny}) outside {new_w}x{new_h} layer")
        out[ny * new_w + nx] = value
    return bytes(out)


class RotationEngine:
    """Turns a LayeredMap in place, one quarter turn at a time."""

    def __init__(self, layered_map: "LayeredMap") -> None:
        self._map = layered_map

    def quarter_turn(self, clockwise: bool = True) -> None:
        m = self._map
        m.notifier.ensure_mutable()
        frame_w, frame_h = m.width, m.height
        old_h, old_v = m.wall_h, m.wall_v

        floor = remap_layer(m.floor, frame_w, frame_h, clockwise)
        new_v = remap_layer(old_h, frame_w, frame_h, clockwise, WALL_V_SHIFT[clockwise])
        new_h = remap_layer(old_v, frame_w, frame_h, clockwise, WALL_H_SHIFT[clockwise])

        heading = m.heading.turned(1 if clockwise else -1)
        m._apply_turn(floor, (old_v, new_h), (old_h, new_v), heading)
        logger.debug(
            "Rotated map %s: %dx%d -> %dx%d, heading %s",
            "clockwise" if clockwise else "counter-clockwise",
            frame_w, frame_h, m.width, m.height, heading.name,
        )
        m.notifier.notify()
