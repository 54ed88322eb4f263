# worldgen/__init__.py
# Package init for hex geometry and procedural generation modules

from .hexgrid import (
    Coord, CubeCoord, AXIAL_NEIGHBORS, CUBE_DIRECTIONS, SQRT3,
    axial_to_cube, cube_to_axial, distance, hex_distance, cube_distance,
    neighbors_axial, neighbors6, ring, hex_grid, rotate_cw,
    axial_to_world, batch_axial_to_world,
)
from .tiles import TileType, GRASS, BUILDING, ROAD, FOREST, WATER
from .voronoi import VoronoiSeed, place_seeds, assign_regions
from .placement import (
    content_seed, shuffle, count_adjacent, adjacent_valid_terrain, place_buildings,
)

__all__ = [
    "Coord", "CubeCoord", "AXIAL_NEIGHBORS", "CUBE_DIRECTIONS", "SQRT3",
    "axial_to_cube", "cube_to_axial", "distance", "hex_distance", "cube_distance",
    "neighbors_axial", "neighbors6", "ring", "hex_grid", "rotate_cw",
    "axial_to_world", "batch_axial_to_world",
    "TileType", "GRASS", "BUILDING", "ROAD", "FOREST", "WATER",
    "VoronoiSeed", "place_seeds", "assign_regions",
    "content_seed", "shuffle", "count_adjacent", "adjacent_valid_terrain", "place_buildings",
]
