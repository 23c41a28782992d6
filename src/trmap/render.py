from __future__ import annotations

import logging
from typing import List

from .core import Direction, LayeredMap

logger = logging.getLogger(__name__)

CORNER = "+"
WALL_H = "-"
WALL_V = "|"


def render_lines(layered_map: LayeredMap, solid: str = "#", open: str = " ") -> List[str]:
    """Draw the map as ASCII text.

    Each tile is a 2x2 character block: corner and north wall on the first
    line, west wall and floor on the second; the last column and row close the
    east and south edges, for (2W + 1) x (2H + 1) characters in total.
    """
    w, h = layered_map.width, layered_map.height
    rows: List[List[str]] = [[" "] * (2 * w + 1) for _ in range(2 * h + 1)]
    for y in range(2 * h + 1):
        for x in range(2 * w + 1):
            if x % 2 == 0 and y % 2 == 0:
                rows[y][x] = CORNER
    for tile in layered_map.tiles():
        cx, cy = 2 * tile.x + 1, 2 * tile.y + 1
        walls = tile.walls()
        if walls[Direction.N]:
            rows[cy - 1][cx] = WALL_H
        if walls[Direction.S]:
            rows[cy + 1][cx] = WALL_H
        if walls[Direction.W]:
            rows[cy][cx - 1] = WALL_V
        if walls[Direction.E]:
            rows[cy][cx + 1] = WALL_V
        rows[cy][cx] = solid if tile.type else open
    return ["".join(row) for row in rows]


class AsciiRenderer:
    """Keeps an ASCII drawing of a map current.

    Subscribes to the map's change signal and redraws everything on each
    notification; there is no incremental update.
    """

    def __init__(self, layered_map: LayeredMap, solid: str = "#", open: str = " ") -> None:
        self.map = layered_map
        self.solid = solid
        self.open = open
        self.redraws = 0
        self.lines: List[str] = []
        self.redraw()
        layered_map.notifier.subscribe(self.redraw)

    def redraw(self) -> None:
        self.lines = render_lines(self.map, self.solid, self.open)
        self.redraws += 1

    def close(self) -> None:
        self.map.notifier.unsubscribe(self.redraw)

    def __str__(self) -> str:
        return "\n".join(self.lines)
