import pytest

from systems.chunks import (
    ChunkState,
    WorldMap,
    chunk_for_tile,
    chunk_neighbors,
    chunk_radius,
    distant_chunks,
    nearest_neighbor_chunk,
)
from worldgen.hexgrid import axial_to_world, hex_distance, hex_grid, ring
from worldgen.tiles import TileType


def test_chunk_radius_is_ring_count():
    assert chunk_radius(0) == 0
    assert chunk_radius(7) == 7


def test_chunk_neighbors_canonical_sets():
    assert chunk_neighbors((0, 0), 1) == [(-3, 1), (-2, 3), (1, 2), (3, -1), (2, -3), (-1, -2)]
    assert chunk_neighbors((0, 0), 0) == [(-1, 1), (0, 1), (1, 0), (1, -1), (0, -1), (-1, 0)]
    assert chunk_neighbors((5, -2), 1)[0] == (2, -1)


@pytest.mark.parametrize("rings", [0, 1, 2, 3, 4])
def test_chunk_neighbors_distance(rings):
    center = (2, 3)
    neighbors = chunk_neighbors(center, rings)
    assert len(neighbors) == 6
    assert len(set(neighbors)) == 6
    assert all(hex_distance(center, n) == 2 * rings + 1 for n in neighbors)


@pytest.mark.parametrize("rings", [1, 2, 3])
def test_neighbor_chunks_tile_without_gaps(rings):
    center = (0, 0)
    own = set(hex_grid(rings, center))
    around = [set(hex_grid(rings, n)) for n in chunk_neighbors(center, rings)]
    for tiles in around:
        assert not own & tiles
    covered = set().union(*around)
    assert set(ring(center, rings + 1)) <= covered


def test_negative_rings_have_no_neighbors():
    assert chunk_neighbors((0, 0), -1) == []
    assert nearest_neighbor_chunk((0, 0), (1, 0), -1, []) is None


def test_nearest_neighbor_chunk():
    found = nearest_neighbor_chunk((0, 0), (2, 0), 1, [(3, -1)])
    assert found.neighbor == (3, -1)
    assert found.distance == 1
    assert found.is_instantiated
    assert not nearest_neighbor_chunk((0, 0), (2, 0), 1, []).is_instantiated


def test_chunk_for_tile():
    assert chunk_for_tile((1, 0), 1, [(0, 0), (3, -1)]) == (0, 0)
    assert chunk_for_tile((3, -1), 1, [(0, 0), (3, -1)]) == (3, -1)
    assert chunk_for_tile((9, 9), 1, [(0, 0)]) is None
    assert chunk_for_tile((1, 0), 1, []) is None
    # equal distance: first listed wins
    assert chunk_for_tile((1, 0), 2, [(2, 0), (0, 0)]) == (2, 0)


def test_distant_chunks_partition():
    result = distant_chunks((0, 0), [ChunkState(0, 0, True), ChunkState(10, 10, True)], 2)
    assert result.to_disable == [(10, 10)]
    assert result.to_enable == []

    result = distant_chunks((0, 0), [ChunkState(1, 0, False), ChunkState(10, 10, False)], 2)
    assert result.to_disable == []
    assert result.to_enable == [(1, 0)]
    assert distant_chunks((0, 0), [], 2).to_enable == []


def test_world_map_registry():
    wm = WorldMap(rings=2, hex_size=10.0)
    chunk = wm.create_chunk((0, 0))
    assert wm.create_chunk((0, 0)) is chunk
    assert wm.has_chunk((0, 0)) and not wm.has_chunk((5, 0))
    assert len(chunk.tiles) == 19
    assert chunk.neighbors == chunk_neighbors((0, 0), 2)
    assert chunk.position == pytest.approx(axial_to_world(0, 0, 10.0))

    chunk.set_tile_type((1, 0), TileType.ROAD)
    chunk.set_tile_type((9, 9), TileType.ROAD)
    assert chunk.get_tile_type((1, 0)) == TileType.ROAD
    assert chunk.get_tile_type((0, 0)) is None
    assert not chunk.contains((9, 9))

    far = wm.create_chunk((20, 0))
    assert wm.chunk_count() == 2
    assert wm.chunk_for_tile((1, 1)) is chunk
    assert wm.chunk_for_tile((10, 0)) is None

    changed = wm.apply_visibility((0, 0), 5)
    assert changed.to_disable == [(20, 0)]
    assert not far.enabled
    assert wm.enabled_chunks() == [chunk]

    changed = wm.apply_visibility((20, 0), 5)
    assert changed.to_enable == [(20, 0)]
    assert changed.to_disable == [(0, 0)]
