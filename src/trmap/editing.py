"""Helpers for turning a click inside a tile into a map edit."""
from __future__ import annotations

import logging
from enum import Enum

from .core import Direction, LayeredMap

logger = logging.getLogger(__name__)

DEFAULT_EDGE_BAND = 0.2


class Zone(Enum):
    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"
    INTERIOR = "interior"

    @property
    def direction(self) -> Direction | None:
        return _ZONE_DIRECTIONS.get(self)


_ZONE_DIRECTIONS = {
    Zone.NORTH: Direction.N,
    Zone.EAST: Direction.E,
    Zone.SOUTH: Direction.S,
    Zone.WEST: Direction.W,
}


def classify_zone(offset_x: float, offset_y: float, size: float, edge_band: float = DEFAULT_EDGE_BAND) -> Zone:
    """Classify a point inside a tile of ``size`` pixels.

    Offsets are measured from the tile's top-left corner. The outer
    ``edge_band`` fraction on each side selects that side's wall; north and
    south win over west and east in the corners.
    """
    if size <= 0:
        raise ValueError("size must be positive")
    if not 0 < edge_band < 0.5:
        raise ValueError("edge_band must be in (0, 0.5)")
    near, far = size * edge_band, size * (1 - edge_band)
    if offset_y < near:
        return Zone.NORTH
    if offset_y > far:
        return Zone.SOUTH
    if offset_x < near:
        return Zone.WEST
    if offset_x > far:
        return Zone.EAST
    return Zone.INTERIOR


def apply_zone(layered_map: LayeredMap, x: int, y: int, zone: Zone) -> int:
    """Toggle the wall named by ``zone``, or the floor cell for the interior.

    Returns the new cell value.
    """
    direction = zone.direction
    if direction is None:
        value = layered_map.toggle_type_at(x, y)
    else:
        value = layered_map.toggle_wall_at(x, y, direction)
    logger.debug("Toggled %s of tile (%d, %d) to %d", zone.value, x, y, value)
    return value
