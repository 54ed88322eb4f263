"""Chunk topology for an unbounded hex plane.

The world is tiled by hexagonal chunks of a shared ring count. Neighbouring
chunk centres sit ``2*rings + 1`` steps apart so that chunk boundaries touch
without gaps or overlap. This module computes neighbours, containment and
distance-based visibility, and provides a small registry (:class:`WorldMap`)
for hosts that want the core to track which chunks exist.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple

from worldgen.hexgrid import axial_to_world, hex_distance, hex_grid, rotate_cw
from worldgen.tiles import TileType

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]

# Clockwise steps applied to the base offset before emitting neighbours
ALIGNMENT_STEPS = 4


# ---------------------------------------------------------------------------
# Results


@dataclass(frozen=True)
class NeighborChunk:
    neighbor: Coord
    distance: int
    is_instantiated: bool


@dataclass(frozen=True)
class ChunkState:
    q: int
    r: int
    enabled: bool

    @property
    def coord(self) -> Coord:
        return self.q, self.r


@dataclass
class ChunkVisibility:
    to_disable: List[Coord] = field(default_factory=list)
    to_enable: List[Coord] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Topology


def chunk_radius(rings: int) -> int:
    return rings


def chunk_neighbors(center: Coord, rings: int) -> List[Coord]:
    """Centres of the 6 chunks around ``center``, clockwise.

    A negative ring count has no neighbours.
    """
    if rings < 0:
        return []
    oq, orr = (1, 0) if rings == 0 else (rings, rings + 1)
    for _ in range(ALIGNMENT_STEPS):
        oq, orr = rotate_cw(oq, orr)
    neighbors = []
    for _ in range(6):
        neighbors.append((center[0] + oq, center[1] + orr))
        oq, orr = rotate_cw(oq, orr)
    return neighbors


def nearest_neighbor_chunk(current_chunk: Coord, current_tile: Coord, rings: int,
                           existing_chunks: Iterable[Coord] = ()) -> Optional[NeighborChunk]:
    """The neighbour of ``current_chunk`` closest to ``current_tile``."""
    best: Optional[Coord] = None
    best_d = 0
    for n in chunk_neighbors(current_chunk, rings):
        d = hex_distance(current_tile, n)
        if best is None or d < best_d:
            best, best_d = n, d
    if best is None:
        return None
    return NeighborChunk(best, best_d, best in set(existing_chunks))


def chunk_for_tile(tile: Coord, rings: int, chunk_centers: Iterable[Coord]) -> Optional[Coord]:
    """The chunk whose centre is nearest ``tile`` among those within ``rings``."""
    best: Optional[Coord] = None
    best_d = 0
    for center in chunk_centers:
        d = hex_distance(tile, center)
        if d == 0:
            return center
        if d <= rings and (best is None or d < best_d):
            best, best_d = center, d
    return best


def distant_chunks(current_chunk: Coord, chunks: Iterable[ChunkState],
                   max_distance: int) -> ChunkVisibility:
    """Chunks whose enabled flag disagrees with the distance threshold."""
    result = ChunkVisibility()
    for chunk in chunks:
        far = hex_distance(current_chunk, chunk.coord) > max_distance
        if far and chunk.enabled:
            result.to_disable.append(chunk.coord)
        elif not far and not chunk.enabled:
            result.to_enable.append(chunk.coord)
    return result


# ---------------------------------------------------------------------------
# Registry


@dataclass
class Chunk:
    """A fixed-radius group of tiles around ``center``."""

    center: Coord
    rings: int
    hex_size: float
    world_scale: float = 1.34
    enabled: bool = True
    tiles: Dict[Coord, Optional[TileType]] = field(init=False)
    neighbors: List[Coord] = field(init=False)
    position: Tuple[float, float] = field(init=False)

    def __post_init__(self) -> None:
        self.tiles = {
            c: None for c in hex_grid(self.rings, self.center)
            if hex_distance(c, self.center) <= self.rings
        }
        self.neighbors = chunk_neighbors(self.center, self.rings)
        self.position = axial_to_world(*self.center, self.hex_size, self.world_scale)

    def contains(self, coord: Coord) -> bool:
        return coord in self.tiles

    def set_tile_type(self, coord: Coord, tile_type: Optional[TileType]) -> None:
        # coordinates outside the chunk are ignored
        if coord in self.tiles:
            self.tiles[coord] = tile_type

    def get_tile_type(self, coord: Coord) -> Optional[TileType]:
        return self.tiles.get(coord)


class WorldMap:
    """Registry of instantiated chunks keyed by centre."""

    def __init__(self, rings: int, hex_size: float, world_scale: float = 1.34):
        self.rings = rings
        self.hex_size = hex_size
        self.world_scale = world_scale
        self.chunks: Dict[Coord, Chunk] = {}

    def create_chunk(self, center: Coord) -> Chunk:
        chunk = self.chunks.get(center)
        if chunk is None:
            chunk = Chunk(center, self.rings, self.hex_size, self.world_scale)
            self.chunks[center] = chunk
            logger.debug("created chunk at %s (%d tiles)", center, len(chunk.tiles))
        return chunk

    def get_chunk(self, center: Coord) -> Optional[Chunk]:
        return self.chunks.get(center)

    def has_chunk(self, center: Coord) -> bool:
        return center in self.chunks

    def all_chunks(self) -> List[Chunk]:
        return list(self.chunks.values())

    def enabled_chunks(self) -> List[Chunk]:
        return [c for c in self.chunks.values() if c.enabled]

    def chunk_count(self) -> int:
        return len(self.chunks)

    def centers(self) -> Set[Coord]:
        return set(self.chunks)

    def chunk_for_tile(self, tile: Coord) -> Optional[Chunk]:
        center = chunk_for_tile(tile, self.rings, self.chunks)
        return None if center is None else self.chunks[center]

    def apply_visibility(self, current: Coord, max_distance: int) -> ChunkVisibility:
        """Flip enabled flags by distance from ``current`` and return what changed."""
        states = [ChunkState(q, r, c.enabled) for (q, r), c in self.chunks.items()]
        visibility = distant_chunks(current, states, max_distance)
        for coord in visibility.to_disable:
            self.chunks[coord].enabled = False
        for coord in visibility.to_enable:
            self.chunks[coord].enabled = True
        return visibility
