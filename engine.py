from __future__ import annotations
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple
import logging

from modifiers import MODIFIERS, GenerationModifiers
from pathfinding import astar, is_set_connected, path_excluding_start, path_length
from sim.records import (
    RecordError,
    decode_chunk_states,
    decode_coord,
    decode_coords,
    decode_tile_records,
    encode_coord,
    encode_coords,
    encode_optional_coord,
    encode_tile_records,
    encode_world_positions,
)
from sim.params import float_param, int_param
from sim.state import GridState
from systems.chunks import (
    ChunkState,
    WorldMap,
    chunk_for_tile,
    chunk_neighbors,
    chunk_radius,
    distant_chunks,
    nearest_neighbor_chunk,
)
from systems.road_network import build_road_network
from worldgen.hexgrid import batch_axial_to_world, hex_distance, hex_grid, neighbors6, ring
from worldgen.placement import adjacent_valid_terrain, count_adjacent, place_buildings, shuffle
from worldgen.tiles import TileType
from worldgen.voronoi import assign_regions

__version__ = "1.1.0"

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]
Request = Mapping[str, Any]


def _coord(req: Request, key: str) -> Coord:
    if key not in req:
        raise RecordError(f"missing {key!r}")
    return decode_coord(req[key], key)


# =============================== ENGINE =======================================

class HexWorldEngine:
    """Request/response API over the hex world core, usable by CLI, hosts and tests.

    The engine owns one :class:`GridState`; every other operation is a pure
    function of its request. Requests and responses are the JSON-compatible
    records described in :mod:`sim.records`.
    """

    def __init__(self, modifiers: Optional[GenerationModifiers] = None,
                 state: Optional[GridState] = None):
        self.modifiers = modifiers or MODIFIERS
        self.state = state if state is not None else GridState()
        self.operations: Dict[str, Callable[[Request], Any]] = {
            "version": self.version,
            # geometry
            "distance": self.distance,
            "neighbors": self.neighbors,
            "ring": self.ring,
            "hexGrid": self.hex_grid,
            "hexToWorld": self.hex_to_world,
            # pathfinding
            "shortestPath": self.shortest_path,
            "pathLength": self.path_length,
            "buildPathBetweenRoads": self.build_path_between_roads,
            "isSetConnected": self.is_set_connected,
            # generation
            "assignRegions": self.assign_regions,
            "buildRoadNetwork": self.build_road_network,
            "shuffle": self.shuffle,
            "countAdjacent": self.count_adjacent,
            "adjacentValidTerrain": self.adjacent_valid_terrain,
            "placeBuildings": self.place_buildings,
            "generateTown": self.generate_town,
            # chunks
            "chunkRadius": self.chunk_radius,
            "chunkNeighbors": self.chunk_neighbors,
            "nearestNeighborChunk": self.nearest_neighbor_chunk,
            "chunkForTile": self.chunk_for_tile,
            "distantChunks": self.distant_chunks,
            # store
            "setConstraint": self.set_constraint,
            "setConstraints": self.set_constraints,
            "clearConstraints": self.clear_constraints,
            "generateLayout": self.generate_layout,
            "getTile": self.get_tile,
            "batchGetTiles": self.batch_get_tiles,
            "getStats": self.get_stats,
            "clearLayout": self.clear_layout,
        }

    def handle(self, request: Request) -> Any:
        """Dispatch ``{"op": name, ...fields}`` to the matching operation."""
        if not isinstance(request, Mapping):
            raise RecordError(f"request must be an object, got {type(request).__name__}")
        op = request.get("op")
        handler = self.operations.get(op) if isinstance(op, str) else None
        if handler is None:
            raise RecordError(f"unknown operation {op!r}")
        logger.debug("handling %s", op)
        return handler(request)

    def version(self, req: Request = None) -> str:
        return __version__

    # -- Geometry --------------------------------------------------------------
    def distance(self, req: Request) -> int:
        return hex_distance(_coord(req, "a"), _coord(req, "b"))

    def neighbors(self, req: Request) -> List[Dict[str, int]]:
        return encode_coords(neighbors6(_coord(req, "coord")))

    def ring(self, req: Request) -> List[Dict[str, int]]:
        return encode_coords(ring(_coord(req, "center"), int_param(req, "radius", 0)))

    def hex_grid(self, req: Request) -> List[Dict[str, int]]:
        center = _coord(req, "center") if "center" in req else (0, 0)
        return encode_coords(hex_grid(int_param(req, "maxLayer", 0), center))

    def hex_to_world(self, req: Request) -> List[Dict[str, Any]]:
        coords = decode_coords(req.get("coords"), "coords")
        hex_size = float_param(req, "hexSize", self.modifiers.hex_size)
        rows = batch_axial_to_world(coords, hex_size, self.modifiers.world_scale)
        return encode_world_positions(rows)

    # -- Pathfinding -----------------------------------------------------------
    def shortest_path(self, req: Request) -> Optional[List[Dict[str, int]]]:
        traversable = set(decode_coords(req.get("traversable"), "traversable"))
        return encode_coords(astar(_coord(req, "start"), _coord(req, "goal"), traversable))

    def path_length(self, req: Request) -> int:
        traversable = set(decode_coords(req.get("traversable"), "traversable"))
        return path_length(_coord(req, "start"), _coord(req, "goal"), traversable)

    def build_path_between_roads(self, req: Request) -> Optional[List[Dict[str, int]]]:
        traversable = set(decode_coords(req.get("traversable"), "traversable"))
        return encode_coords(path_excluding_start(_coord(req, "start"), _coord(req, "goal"),
                                                  traversable))

    def is_set_connected(self, req: Request) -> bool:
        return is_set_connected(decode_coords(req.get("coords"), "coords"))

    # -- Generation ------------------------------------------------------------
    def assign_regions(self, req: Request) -> List[Dict[str, int]]:
        m = self.modifiers
        center = _coord(req, "center") if "center" in req else (0, 0)
        regions = assign_regions(
            int_param(req, "maxLayer", 0),
            center,
            forest=int_param(req, "forestCount", m.forest_seeds),
            water=int_param(req, "waterCount", m.water_seeds),
            grass=int_param(req, "grassCount", m.grass_seeds),
        )
        return encode_tile_records(regions)

    def build_road_network(self, req: Request) -> List[Dict[str, int]]:
        roads = build_road_network(
            decode_coords(req.get("seeds"), "seeds"),
            decode_coords(req.get("validTerrain"), "validTerrain"),
            decode_coords(req.get("occupied"), "occupied"),
            int_param(req, "targetCount", self.modifiers.road_target_count),
        )
        return encode_coords(roads)

    def shuffle(self, req: Request) -> List[Dict[str, int]]:
        return encode_coords(shuffle(decode_coords(req.get("coords"), "coords")))

    def count_adjacent(self, req: Request) -> int:
        return count_adjacent(_coord(req, "coord"), set(decode_coords(req.get("tiles"), "tiles")))

    def adjacent_valid_terrain(self, req: Request) -> List[Dict[str, int]]:
        return encode_coords(adjacent_valid_terrain(
            decode_coords(req.get("roads"), "roads"),
            decode_coords(req.get("validTerrain"), "validTerrain"),
            decode_coords(req.get("occupied"), "occupied"),
        ))

    def place_buildings(self, req: Request) -> List[Dict[str, int]]:
        m = self.modifiers
        return encode_coords(place_buildings(
            decode_coords(req.get("validTerrain"), "validTerrain"),
            decode_coords(req.get("roads"), "roads"),
            decode_coords(req.get("occupied"), "occupied"),
            min_adjacent_roads=int_param(req, "minAdjacentRoads", m.min_adjacent_roads),
            target_count=int_param(req, "targetCount", m.building_target_count),
        ))

    def generate_town(self, req: Request) -> Dict[str, Any]:
        """Regions, roads and buildings for one hexagon, written through the store.

        Grass tiles are the buildable terrain. Constraints are replaced with
        the region types, then roads, then buildings on top, and the layout is
        regenerated from them.
        """
        m = self.modifiers
        max_layer = int_param(req, "maxLayer", m.chunk_rings)
        center = _coord(req, "center") if "center" in req else (0, 0)
        regions = assign_regions(
            max_layer, center,
            forest=int_param(req, "forestCount", m.forest_seeds),
            water=int_param(req, "waterCount", m.water_seeds),
            grass=int_param(req, "grassCount", m.grass_seeds),
        )
        buildable = sorted(c for c, t in regions if t == TileType.GRASS)
        seeds = decode_coords(req["seeds"], "seeds") if "seeds" in req else [center]
        roads = build_road_network(seeds, buildable, (),
                                   int_param(req, "roadCount", m.road_target_count))
        buildings = place_buildings(
            buildable, roads, roads,
            min_adjacent_roads=int_param(req, "minAdjacentRoads", m.min_adjacent_roads),
            target_count=int_param(req, "buildingCount", m.building_target_count),
        )
        layout = dict(regions)
        layout.update((c, TileType.ROAD) for c in roads)
        layout.update((c, TileType.BUILDING) for c in buildings)

        self.state.clear_constraints()
        self.state.set_constraints(layout.items())
        self.state.generate_layout()
        return {
            "roads": encode_coords(roads),
            "buildings": encode_coords(buildings),
            "stats": self.state.get_stats().to_dict(),
        }

    # -- Chunks ----------------------------------------------------------------
    def chunk_radius(self, req: Request) -> int:
        return chunk_radius(int_param(req, "rings", self.modifiers.chunk_rings))

    def chunk_neighbors(self, req: Request) -> List[Dict[str, int]]:
        rings = int_param(req, "rings", self.modifiers.chunk_rings)
        return encode_coords(chunk_neighbors(_coord(req, "center"), rings))

    def nearest_neighbor_chunk(self, req: Request) -> Optional[Dict[str, Any]]:
        found = nearest_neighbor_chunk(
            _coord(req, "currentChunk"),
            _coord(req, "currentTile"),
            int_param(req, "rings", self.modifiers.chunk_rings),
            decode_coords(req.get("existingChunks"), "existingChunks"),
        )
        if found is None:
            return None
        return {
            "neighbor": encode_coord(found.neighbor),
            "distance": found.distance,
            "isInstantiated": found.is_instantiated,
        }

    def chunk_for_tile(self, req: Request) -> Optional[Dict[str, int]]:
        return encode_optional_coord(chunk_for_tile(
            _coord(req, "tile"),
            int_param(req, "rings", self.modifiers.chunk_rings),
            decode_coords(req.get("chunkCenters"), "chunkCenters"),
        ))

    def distant_chunks(self, req: Request) -> Dict[str, List[Dict[str, int]]]:
        states = [ChunkState(q, r, enabled)
                  for (q, r), enabled in decode_chunk_states(req.get("chunks"), "chunks")]
        result = distant_chunks(
            _coord(req, "currentChunk"), states,
            int_param(req, "maxDistance", self.modifiers.visibility_distance),
        )
        return {"toDisable": encode_coords(result.to_disable),
                "toEnable": encode_coords(result.to_enable)}

    def world_map(self, rings: Optional[int] = None) -> WorldMap:
        """A fresh chunk registry using this engine's size settings."""
        m = self.modifiers
        return WorldMap(m.chunk_rings if rings is None else rings, m.hex_size, m.world_scale)

    # -- Store -----------------------------------------------------------------
    def set_constraint(self, req: Request) -> bool:
        q, r = _coord(req, "coord")
        return self.state.set_constraint(q, r, req.get("tileType"))

    def set_constraints(self, req: Request) -> int:
        return self.state.set_constraints(decode_tile_records(req.get("tiles"), "tiles"))

    def clear_constraints(self, req: Request = None) -> None:
        self.state.clear_constraints()

    def generate_layout(self, req: Request = None) -> None:
        self.state.generate_layout()

    def get_tile(self, req: Request) -> Optional[int]:
        q, r = _coord(req, "coord")
        tile = self.state.get_tile(q, r)
        return None if tile is None else int(tile)

    def batch_get_tiles(self, req: Request) -> List[Dict[str, int]]:
        return encode_tile_records(self.state.batch_get_tiles(
            decode_coords(req.get("coords"), "coords")))

    def get_stats(self, req: Request = None) -> Dict[str, int]:
        return self.state.get_stats().to_dict()

    def clear_layout(self, req: Request = None) -> None:
        self.state.clear()
