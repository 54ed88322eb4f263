import heapq
import logging
from dataclasses import dataclass, field
from typing import Collection, Dict, Iterable, List, Optional, Tuple

from worldgen.hexgrid import axial_to_cube, cube_distance, hex_distance, neighbors_axial

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]

UNREACHABLE = -1


@dataclass(order=True)
class AStarNode:
    """Open-set entry. Orders by ``f`` then ``h``; ``seq`` keeps pops FIFO on full ties."""

    f: int
    h: int
    seq: int
    coord: Coord = field(compare=False)
    g: int = field(compare=False)


def reconstruct(came_from: Dict[Coord, Coord], current: Coord) -> List[Coord]:
    path = [current]
    while current in came_from:
        current = came_from[current]
        path.append(current)
    path.reverse()
    return path


def _search(start: Coord, goal: Coord, traversable: Collection[Coord],
            want_path: bool) -> Tuple[int, Optional[List[Coord]]]:
    goal_cube = axial_to_cube(*goal)

    def heuristic(c: Coord) -> int:
        return cube_distance(axial_to_cube(*c), goal_cube)

    seq = 0
    h0 = heuristic(start)
    open_heap: List[AStarNode] = [AStarNode(h0, h0, seq, start, 0)]
    g_score: Dict[Coord, int] = {start: 0}
    came_from: Dict[Coord, Coord] = {}
    closed: set = set()

    while open_heap:
        current = heapq.heappop(open_heap)
        # stale duplicate of a coordinate already finalized
        if current.coord in closed:
            continue
        closed.add(current.coord)
        if current.coord == goal:
            logger.debug("astar %s->%s: g=%d, closed=%d", start, goal, current.g, len(closed))
            if not want_path:
                return current.g, None
            return current.g, reconstruct(came_from, goal)
        tentative = current.g + 1
        for neighbor in neighbors_axial(*current.coord):
            if neighbor not in traversable or neighbor in closed:
                continue
            if tentative < g_score.get(neighbor, float("inf")):
                g_score[neighbor] = tentative
                if want_path:
                    came_from[neighbor] = current.coord
                h = heuristic(neighbor)
                seq += 1
                heapq.heappush(open_heap, AStarNode(tentative + h, h, seq, neighbor, tentative))
    return UNREACHABLE, None


def astar(start: Coord, goal: Coord, traversable: Collection[Coord]) -> Optional[List[Coord]]:
    """Shortest hex-step path from ``start`` to ``goal`` through ``traversable``.

    Returns the full path including both endpoints, ``[start]`` when they are
    equal, or ``None`` when either endpoint is not traversable or no path
    exists.
    """
    if start not in traversable or goal not in traversable:
        return None
    if start == goal:
        return [start]
    _, path = _search(start, goal, traversable, want_path=True)
    return path


def path_length(start: Coord, goal: Coord, traversable: Collection[Coord]) -> int:
    """Number of steps on the shortest path, or ``-1`` when unreachable."""
    if start not in traversable or goal not in traversable:
        return UNREACHABLE
    if start == goal:
        return 0
    g, _ = _search(start, goal, traversable, want_path=False)
    return g


def path_excluding_start(start: Coord, goal: Coord,
                         traversable: Collection[Coord]) -> Optional[List[Coord]]:
    """Path from ``start`` to ``goal`` minus its first node.

    Used to extend an existing network: ``start`` is already part of it.
    ``None`` when no path exists or the path has fewer than two nodes.
    """
    path = astar(start, goal, traversable)
    if path is None or len(path) < 2:
        return None
    return path[1:]


def is_set_connected(coords: Iterable[Coord]) -> bool:
    """True when every coordinate is reachable from every other inside the set.

    Hex adjacency is symmetric, so checking reachability from one source is
    enough. Empty and single-member sets count as connected.
    """
    members = list(dict.fromkeys(coords))
    if len(members) < 2:
        return True
    tiles = set(members)
    source = members[0]
    for target in members[1:]:
        if path_length(source, target, tiles) == UNREACHABLE:
            logger.debug("is_set_connected: %s unreachable from %s", target, source)
            return False
    return True


def nearest_in(point: Coord, candidates: Iterable[Coord]) -> Optional[Tuple[Coord, int]]:
    """Closest candidate to ``point`` by hex distance; first one wins ties."""
    best: Optional[Coord] = None
    best_d = 0
    for c in candidates:
        d = hex_distance(point, c)
        if best is None or d < best_d:
            best, best_d = c, d
    if best is None:
        return None
    return best, best_d
