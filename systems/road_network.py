"""Growing-tree road network construction.

The builder keeps two disjoint working sets over the buildable terrain:
``connected`` (tiles already in the network) and ``unconnected`` (tiles that
could still join). Seeds are stitched together first, in input order, then the
network grows by repeatedly attaching whichever unconnected tile sits closest
to it until the target size is reached or nothing reachable is left.

Every tile enters ``connected`` only as part of an A* path that starts on a
tile already in the network, so the result is always a single connected
component of the buildable terrain.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple

from pathfinding import astar, nearest_in

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


# ---------------------------------------------------------------------------
# Working state


@dataclass
class RoadNetworkBuilder:
    """Incrementally grows one connected road network over ``terrain``."""

    terrain: Set[Coord]
    # dicts used as insertion-ordered sets so scans and ties are reproducible
    connected: Dict[Coord, None] = field(default_factory=dict)
    unconnected: Dict[Coord, None] = field(default_factory=dict)

    @classmethod
    def for_terrain(cls, valid_terrain: Iterable[Coord],
                    occupied: Iterable[Coord] = ()) -> "RoadNetworkBuilder":
        blocked = set(occupied)
        terrain = {c for c in valid_terrain if c not in blocked}
        return cls(terrain=terrain, unconnected=dict.fromkeys(sorted(terrain)))

    # -- Set maintenance ------------------------------------------------------
    def _attach(self, coords: Iterable[Coord]) -> None:
        for c in coords:
            self.connected[c] = None
            self.unconnected.pop(c, None)

    def nearest_connected(self, point: Coord) -> Optional[Tuple[Coord, int]]:
        return nearest_in(point, self.connected)

    # -- Phase 1 --------------------------------------------------------------
    def connect_seeds(self, seeds: Iterable[Coord]) -> None:
        """Stitch ``seeds`` into the network in order.

        Seeds off the buildable terrain are skipped. A seed that A* cannot
        reach from the network stays unconnected; nothing is retried.
        """
        for seed in dict.fromkeys(seeds):
            if seed not in self.terrain or seed in self.connected:
                continue
            if not self.connected:
                self._attach([seed])
                continue
            nearest, _ = self.nearest_connected(seed)
            path = astar(nearest, seed, self.terrain)
            if path is None:
                logger.debug("seed %s unreachable from network, skipped", seed)
                continue
            self._attach(path)

    # -- Phase 2 --------------------------------------------------------------
    def closest_pair(self) -> Optional[Tuple[Coord, Coord]]:
        """The (unconnected, connected) pair with the smallest hex distance."""
        best: Optional[Tuple[Coord, Coord]] = None
        best_d = 0
        for point in self.unconnected:
            found = self.nearest_connected(point)
            if found is None:
                continue
            road, d = found
            if best is None or d < best_d:
                best, best_d = (point, road), d
        return best

    def grow(self, target_count: int) -> None:
        """Attach nearest reachable tiles until ``target_count`` roads exist.

        Stops early, without error, when no unconnected tile can be reached.
        """
        while len(self.connected) < target_count and self.unconnected:
            pair = self.closest_pair()
            if pair is None:
                break
            point, road = pair
            path = astar(road, point, self.terrain)
            if path is None:
                # unreachable for the rest of this pass
                self.unconnected.pop(point, None)
                logger.debug("dropping unreachable candidate %s", point)
                continue
            self._attach(path)

    def roads(self) -> List[Coord]:
        return sorted(self.connected)


def build_road_network(seeds: Iterable[Coord], valid_terrain: Iterable[Coord],
                       occupied: Iterable[Coord] = (), target_count: int = 0) -> List[Coord]:
    """Grow a connected road network from ``seeds`` over ``valid_terrain - occupied``.

    Returns the road tiles sorted by coordinate. The target may be
    under-reached when the terrain runs out of reachable tiles.
    """
    builder = RoadNetworkBuilder.for_terrain(valid_terrain, occupied)
    builder.connect_seeds(seeds)
    seeded = len(builder.connected)
    builder.grow(target_count)
    roads = builder.roads()
    logger.debug("build_road_network: %d from seeds, %d total (target %d)",
                 seeded, len(roads), target_count)
    return roads
