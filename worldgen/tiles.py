from __future__ import annotations
from enum import IntEnum
from typing import Any


class TileType(IntEnum):
    # Codes are shared with the host; never renumber.
    GRASS = 0
    BUILDING = 1
    ROAD = 2
    FOREST = 3
    WATER = 4

    @classmethod
    def from_code(cls, code: Any) -> "TileType":
        """Return the tile type for an external integer code.

        Raises ``ValueError`` for unknown codes. Booleans and non-integers are
        refused rather than coerced.
        """
        if isinstance(code, TileType):
            return code
        if isinstance(code, bool) or not isinstance(code, int):
            raise ValueError(f"tile type code must be an int, got {code!r}")
        try:
            return cls(code)
        except ValueError:
            raise ValueError(f"unknown tile type code {code!r}") from None

    @classmethod
    def is_valid_code(cls, code: Any) -> bool:
        try:
            cls.from_code(code)
        except ValueError:
            return False
        return True


# Backwards compatibility constants
GRASS, BUILDING, ROAD, FOREST, WATER = (
    TileType.GRASS, TileType.BUILDING, TileType.ROAD, TileType.FOREST, TileType.WATER
)
