# hexgrid.py - Axial/cube hex math, rings and filled hexagons (Python 3.10+)
from __future__ import annotations
import math
from typing import Iterable, Iterator, List, NamedTuple, Tuple

import numpy as np

SQRT3 = math.sqrt(3.0)

Coord = Tuple[int, int]


class CubeCoord(NamedTuple):
    q: int
    r: int
    s: int


# Axial neighbour offsets. Order matters to anything that consumes neighbours
# deterministically (A* expansion, adjacency scans).
AXIAL_NEIGHBORS: Tuple[Coord, ...] = ((+1, 0), (-1, 0), (0, +1), (0, -1), (+1, -1), (-1, +1))

# Cube directions used for ring walking
CUBE_DIRECTIONS: Tuple[CubeCoord, ...] = (
    CubeCoord(1, 0, -1),
    CubeCoord(1, -1, 0),
    CubeCoord(0, -1, 1),
    CubeCoord(-1, 0, 1),
    CubeCoord(-1, 1, 0),
    CubeCoord(0, 1, -1),
)


def axial_to_cube(q: int, r: int) -> CubeCoord:
    return CubeCoord(q, r, -q - r)


def cube_to_axial(cube: CubeCoord) -> Coord:
    return cube.q, cube.r


def distance(q1: int, r1: int, q2: int, r2: int) -> int:
    """Calculate hexagonal distance between two axial coordinates."""
    s1 = -q1 - r1
    s2 = -q2 - r2
    return (abs(q1 - q2) + abs(r1 - r2) + abs(s1 - s2)) // 2


def hex_distance(a: Coord, b: Coord) -> int:
    """Tuple form of :func:`distance`."""
    return distance(a[0], a[1], b[0], b[1])


def cube_distance(a: CubeCoord, b: CubeCoord) -> int:
    """Max-component cube distance; agrees with :func:`hex_distance`."""
    return max(abs(a.q - b.q), abs(a.r - b.r), abs(a.s - b.s))


def neighbors_axial(q: int, r: int) -> Iterator[Coord]:
    for dq, dr in AXIAL_NEIGHBORS:
        yield q + dq, r + dr


def neighbors6(coord: Coord) -> List[Coord]:
    """Return the 6 axial neighbours of ``coord`` as a list."""
    return list(neighbors_axial(coord[0], coord[1]))


def cube_add(a: CubeCoord, b: CubeCoord) -> CubeCoord:
    return CubeCoord(a.q + b.q, a.r + b.r, a.s + b.s)


def cube_scale(c: CubeCoord, factor: int) -> CubeCoord:
    return CubeCoord(c.q * factor, c.r * factor, c.s * factor)


def cube_ring(center: CubeCoord, radius: int) -> List[CubeCoord]:
    if radius == 0:
        return [center]
    results: List[CubeCoord] = []
    # start radius steps out along direction 4, then walk the six sides
    current = cube_add(center, cube_scale(CUBE_DIRECTIONS[4], radius))
    for side in range(6):
        for _ in range(radius):
            results.append(current)
            current = cube_add(current, CUBE_DIRECTIONS[side])
    return results


def ring(center: Coord, radius: int) -> List[Coord]:
    """Coordinates at exactly ``radius`` steps from ``center``, in boundary order.

    A negative radius yields no coordinates.
    """
    if radius < 0:
        return []
    return [cube_to_axial(c) for c in cube_ring(axial_to_cube(*center), radius)]


def hex_grid(max_layer: int, center: Coord = (0, 0)) -> List[Coord]:
    """Filled hexagon of rings ``0..max_layer`` around ``center``.

    Order is centre first, then each ring in boundary order, so callers that
    index into the list get the same tile for the same arguments every time.
    """
    seen = set()
    grid: List[Coord] = []
    for layer in range(max_layer + 1):
        for coord in ring(center, layer):
            if coord not in seen:
                seen.add(coord)
                grid.append(coord)
    return grid


def rotate_cw(q: int, r: int) -> Coord:
    """Rotate an axial offset 60 degrees clockwise: (q, r) -> (q + r, -q)."""
    return q + r, -q


def axial_to_world(q: int, r: int, hex_size: float, scale: float = 1.34) -> Tuple[float, float]:
    """Pointy-top axial -> world (x, z) with the renderer's size divisor applied."""
    size = hex_size / scale
    x = size * (SQRT3 * 2.0 * q + SQRT3 * r)
    z = size * (3.0 * r)
    return x, z


def batch_axial_to_world(coords: Iterable[Coord], hex_size: float,
                         scale: float = 1.34) -> List[Tuple[Coord, float, float]]:
    """Vectorised :func:`axial_to_world` over a list of coordinates."""
    coords = list(coords)
    if not coords:
        return []
    qr = np.asarray(coords, dtype=np.float64)
    size = hex_size / scale
    xs = size * (SQRT3 * 2.0 * qr[:, 0] + SQRT3 * qr[:, 1])
    zs = size * (3.0 * qr[:, 1])
    return [((q, r), float(x), float(z)) for (q, r), x, z in zip(coords, xs, zs)]
