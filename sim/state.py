from __future__ import annotations

"""Grid state store: sparse tile layout plus a persistent constraint overlay."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple
import logging
import threading

from worldgen.tiles import TileType

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


@dataclass
class TileStats:
    grass: int = 0
    building: int = 0
    road: int = 0
    forest: int = 0
    water: int = 0

    @property
    def total(self) -> int:
        return self.grass + self.building + self.road + self.forest + self.water

    def to_dict(self) -> Dict[str, int]:
        return {
            "grass": self.grass,
            "building": self.building,
            "road": self.road,
            "forest": self.forest,
            "water": self.water,
            "total": self.total,
        }


@dataclass
class GridState:
    """Container for the generated layout and the constraints that seed it.

    ``grid`` is rebuilt by :meth:`generate_layout`; ``constraints`` survive
    every layout clear and only change through the constraint methods. Every
    public method holds ``lock`` for its whole duration. The lock is not
    re-entrant, so no method calls another public method while holding it.
    """

    grid: Dict[Coord, TileType] = field(default_factory=dict)
    constraints: Dict[Coord, TileType] = field(default_factory=dict)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def clear(self) -> None:
        """Empty the layout. Constraints are kept."""
        with self.lock:
            self.grid.clear()

    def set_constraint(self, q: int, r: int, tile_type: Any) -> bool:
        """Pin ``(q, r)`` to ``tile_type``; ``False`` for an unknown type code."""
        try:
            tile = TileType.from_code(tile_type)
        except ValueError:
            logger.warning("set_constraint: rejecting tile type %r at (%d, %d)", tile_type, q, r)
            return False
        with self.lock:
            self.constraints[(q, r)] = tile
        return True

    def set_constraints(self, records: Iterable[Tuple[Coord, Any]]) -> int:
        """Apply several constraints; returns how many were accepted."""
        accepted = 0
        for (q, r), tile_type in records:
            if self.set_constraint(q, r, tile_type):
                accepted += 1
        return accepted

    def clear_constraints(self) -> None:
        with self.lock:
            self.constraints.clear()

    def get_tile(self, q: int, r: int) -> Optional[TileType]:
        with self.lock:
            return self.grid.get((q, r))

    def generate_layout(self) -> None:
        """Rebuild the layout from the constraints; unconstrained cells stay empty."""
        with self.lock:
            self.grid.clear()
            self.grid.update(self.constraints)
            logger.debug("generate_layout: %d tiles", len(self.grid))

    def get_stats(self) -> TileStats:
        stats = TileStats()
        with self.lock:
            for tile in self.grid.values():
                name = tile.name.lower()
                setattr(stats, name, getattr(stats, name) + 1)
        return stats

    def batch_get_tiles(self, coords: Iterable[Coord]) -> List[Tuple[Coord, TileType]]:
        """Tiles for ``coords`` in input order; empty cells are left out."""
        with self.lock:
            out = []
            for coord in coords:
                tile = self.grid.get(coord)
                if tile is not None:
                    out.append((coord, tile))
            return out
