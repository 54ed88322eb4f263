import numpy as np

from worldgen.hexgrid import hex_grid
from worldgen.tiles import TileType
from worldgen.voronoi import VoronoiSeed, assign_regions, nearest_seed_index, place_seeds


def test_empty_hexagon_falls_back_to_default():
    assert assign_regions(-1, (0, 0), 3, 3, 3) == [((0, 0), TileType.GRASS)]


def test_no_seeds_means_all_grass():
    regions = assign_regions(2, (0, 0), 0, -4, 0)
    assert len(regions) == 19
    assert {t for _, t in regions} == {TileType.GRASS}


def test_single_forest_seed_placement():
    tiles = hex_grid(1, (0, 0))
    # (1 * 7919 + 0) % 7 == 2
    assert place_seeds(tiles, 1, 0, 0) == [VoronoiSeed(0, 1, TileType.FOREST)]
    assert {t for _, t in assign_regions(1, (0, 0), 1, 0, 0)} == {TileType.FOREST}


def test_seed_order_is_forest_water_grass():
    seeds = place_seeds(hex_grid(4, (0, 0)), 2, 1, 3)
    assert [s.tile_type for s in seeds] == [
        TileType.FOREST, TileType.FOREST, TileType.WATER,
        TileType.GRASS, TileType.GRASS, TileType.GRASS,
    ]


def test_every_tile_labelled_once():
    regions = assign_regions(4, (2, -1), 3, 2, 4)
    coords = [c for c, _ in regions]
    assert coords == hex_grid(4, (2, -1))
    types = {t for _, t in regions}
    assert types <= {TileType.FOREST, TileType.WATER, TileType.GRASS}


def test_seed_tiles_take_first_seed_type():
    tiles = hex_grid(3, (0, 0))
    seeds = place_seeds(tiles, 3, 3, 3)
    labels = dict(assign_regions(3, (0, 0), 3, 3, 3))
    for seed in seeds:
        first = next(s for s in seeds if (s.q, s.r) == (seed.q, seed.r))
        assert labels[(seed.q, seed.r)] == first.tile_type


def test_equidistant_tie_goes_to_earliest_seed():
    seeds = [VoronoiSeed(1, 0, TileType.WATER), VoronoiSeed(-1, 0, TileType.FOREST)]
    assert nearest_seed_index([(0, 0)], seeds).tolist() == [0]
    seeds.reverse()
    assert nearest_seed_index([(0, 0)], seeds).tolist() == [0]


def test_assignment_is_deterministic():
    a = assign_regions(5, (0, 0), 4, 3, 6)
    b = assign_regions(5, (0, 0), 4, 3, 6)
    assert a == b


def test_nearest_seed_index_matches_brute_force():
    tiles = hex_grid(3, (0, 0))
    seeds = place_seeds(tiles, 2, 2, 2)
    idx = nearest_seed_index(tiles, seeds)
    assert isinstance(idx, np.ndarray)
    for tile, k in zip(tiles, idx):
        dists = [max(abs(tile[0] - s.q), abs(tile[1] - s.r), abs(tile[0] + tile[1] - s.q - s.r))
                 for s in seeds]
        assert dists[int(k)] == min(dists)
        assert int(k) == dists.index(min(dists))


def test_coordinates_beyond_int64():
    far = 2 ** 63
    regions = assign_regions(1, (far, 0), 1, 1, 1)
    near = assign_regions(1, (0, 0), 1, 1, 1)
    assert [((q - far, r), t) for (q, r), t in regions] == near
