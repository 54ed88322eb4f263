"""
Systems package: road network construction and chunk topology.
"""

from .road_network import RoadNetworkBuilder, build_road_network
from .chunks import (
    Chunk,
    ChunkState,
    ChunkVisibility,
    NeighborChunk,
    WorldMap,
    chunk_radius,
    chunk_neighbors,
    nearest_neighbor_chunk,
    chunk_for_tile,
    distant_chunks,
)

__all__ = [
    "RoadNetworkBuilder",
    "build_road_network",
    "Chunk",
    "ChunkState",
    "ChunkVisibility",
    "NeighborChunk",
    "WorldMap",
    "chunk_radius",
    "chunk_neighbors",
    "nearest_neighbor_chunk",
    "chunk_for_tile",
    "distant_chunks",
]
