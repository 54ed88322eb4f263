"""Content-seeded shuffles and road-side building placement.

Everything here is reproducible: the shuffle seed is derived from the list
being shuffled, so the same input always yields the same permutation. The
arithmetic wraps at 64 bits to match the sequences hosts already have cached.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Set

from .hexgrid import Coord, neighbors_axial

logger = logging.getLogger(__name__)

MASK64 = (1 << 64) - 1

LCG_MULTIPLIER = 1103515245
LCG_INCREMENT = 12345


def content_seed(coords: Iterable[Coord]) -> int:
    """Fold coordinates into a 64-bit seed: ``seed = seed*31 + q*17 + r``."""
    seed = 0
    for q, r in coords:
        seed = (seed * 31 + ((q * 17 + r) & MASK64)) & MASK64
    return seed


def lcg(seed: int) -> Iterator[int]:
    """Endless stream from ``state = state*1103515245 + 12345`` (mod 2**64)."""
    state = seed & MASK64
    while True:
        state = (state * LCG_MULTIPLIER + LCG_INCREMENT) & MASK64
        yield state


def shuffle(coords: Iterable[Coord]) -> List[Coord]:
    """Fisher-Yates shuffle driven by :func:`lcg` seeded from the content."""
    items = list(coords)
    rng = lcg(content_seed(items))
    for i in range(len(items) - 1, 0, -1):
        j = next(rng) % (i + 1)
        items[i], items[j] = items[j], items[i]
    return items


def count_adjacent(coord: Coord, tiles: Set[Coord]) -> int:
    """Number of the 6 neighbours of ``coord`` that are in ``tiles``."""
    return sum(1 for n in neighbors_axial(*coord) if n in tiles)


def adjacent_valid_terrain(roads: Iterable[Coord], valid_terrain: Iterable[Coord],
                           occupied: Iterable[Coord] = ()) -> List[Coord]:
    """Valid, unoccupied, non-road tiles touching at least one road (sorted)."""
    road_set = set(roads)
    valid = set(valid_terrain)
    blocked = road_set | set(occupied)
    found = set()
    for road in road_set:
        for n in neighbors_axial(*road):
            if n in valid and n not in blocked:
                found.add(n)
    return sorted(found)


def building_candidates(valid_terrain: Iterable[Coord], roads: Iterable[Coord],
                        occupied: Iterable[Coord], min_adjacent_roads: int) -> List[Coord]:
    road_set = set(roads)
    occupied_set = set(occupied)
    return [
        tile for tile in valid_terrain
        if tile not in occupied_set and count_adjacent(tile, road_set) >= min_adjacent_roads
    ]


def place_buildings(valid_terrain: Iterable[Coord], roads: Iterable[Coord],
                    occupied: Iterable[Coord] = (), min_adjacent_roads: int = 1,
                    target_count: int = 0) -> List[Coord]:
    """Pick up to ``target_count`` building sites next to roads.

    Candidates keep the order of ``valid_terrain`` before the deterministic
    shuffle, so callers that want order-independent output should pass a
    sorted list.
    """
    candidates = building_candidates(valid_terrain, roads, occupied, min_adjacent_roads)
    if len(candidates) > 1:
        candidates = shuffle(candidates)
    chosen = candidates[:max(0, min(target_count, len(candidates)))]
    logger.debug("place_buildings: %d candidates, %d chosen", len(candidates), len(chosen))
    return chosen
