from __future__ import annotations

from enum import IntEnum


class Direction(IntEnum):
    """Cardinal directions, clockwise from north.

    Used both to pick one of a tile's four walls and as the map's rotation
    direction indicator.
    """

    N = 0
    E = 1
    S = 2
    W = 3

    def turned(self, steps: int) -> "Direction":
        """Return the direction ``steps`` quarter turns clockwise (negative for CCW)."""
        return Direction((self.value + steps) % 4)

    @property
    def opposite(self) -> "Direction":
        return self.turned(2)

    @classmethod
    def parse(cls, text: str) -> "Direction":
        """Parse ``"n"``, ``"North"``, ``"E"`` etc. into a Direction."""
        key = str(text).strip()[:1].upper()
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown direction: {text!r}") from None
