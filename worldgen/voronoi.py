# voronoi.py - Nearest-seed region assignment over a filled hexagon
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from .hexgrid import Coord, hex_grid
from .tiles import TileType

logger = logging.getLogger(__name__)

# Seed index hash: (counter * SEED_PRIME + i * SEED_STRIDE) % tile_count
SEED_PRIME = 7919
SEED_STRIDE = 997

# Pairwise cube differences stay inside int64 while |coord| is below this
INT64_SAFE = 2 ** 60

# Order in which typed seeds are placed
SEED_ORDER = (TileType.FOREST, TileType.WATER, TileType.GRASS)

DEFAULT_REGION: List[Tuple[Coord, TileType]] = [((0, 0), TileType.GRASS)]


@dataclass(frozen=True)
class VoronoiSeed:
    q: int
    r: int
    tile_type: TileType


def place_seeds(tiles: List[Coord], forest: int, water: int, grass: int) -> List[VoronoiSeed]:
    """Pick seed tiles deterministically from ``tiles``.

    Non-positive counts place nothing for that type. If nothing gets placed at
    all, a single grass seed goes on the first tile.
    """
    if not tiles:
        return []
    count = len(tiles)
    seeds: List[VoronoiSeed] = []
    counter = 0
    for tile_type, wanted in zip(SEED_ORDER, (forest, water, grass)):
        for i in range(max(0, wanted)):
            counter += 1
            q, r = tiles[(counter * SEED_PRIME + i * SEED_STRIDE) % count]
            seeds.append(VoronoiSeed(q, r, tile_type))
    if not seeds:
        q, r = tiles[0]
        seeds.append(VoronoiSeed(q, r, TileType.GRASS))
    return seeds


def nearest_seed_index(tiles: List[Coord], seeds: List[VoronoiSeed]) -> np.ndarray:
    """Index of the nearest seed for every tile.

    Equidistant seeds resolve to the earliest placed one (``argmin`` returns
    the first minimum). Coordinates too large for int64 arithmetic fall back
    to Python integers in an object array.
    """
    seed_coords = [(sd.q, sd.r) for sd in seeds]
    small = all(abs(v) < INT64_SAFE for c in (*tiles, *seed_coords) for v in c)
    dtype = np.int64 if small else object
    t = np.asarray(tiles, dtype=dtype).reshape(-1, 2)
    s = np.asarray(seed_coords, dtype=dtype).reshape(-1, 2)
    dq = t[:, None, 0] - s[None, :, 0]
    dr = t[:, None, 1] - s[None, :, 1]
    dist = (np.abs(dq) + np.abs(dr) + np.abs(dq + dr)) // 2
    return np.argmin(dist, axis=1)


def assign_regions(max_layer: int, center: Coord = (0, 0), forest: int = 0,
                   water: int = 0, grass: int = 0) -> List[Tuple[Coord, TileType]]:
    """Label every tile of ``hex_grid(max_layer, center)`` with its nearest seed's type.

    Never returns an empty list: an empty hexagon (negative ``max_layer``)
    degenerates to a single grass tile at the origin.
    """
    tiles = hex_grid(max_layer, center)
    if not tiles:
        return list(DEFAULT_REGION)
    seeds = place_seeds(tiles, forest, water, grass)
    nearest = nearest_seed_index(tiles, seeds)
    logger.debug("assign_regions: %d tiles, %d seeds", len(tiles), len(seeds))
    return [(tile, seeds[int(k)].tile_type) for tile, k in zip(tiles, nearest)]
