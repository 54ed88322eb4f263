from pathfinding import is_set_connected
from systems.road_network import RoadNetworkBuilder, build_road_network
from worldgen.hexgrid import hex_grid


def test_empty_terrain_builds_nothing():
    assert build_road_network([(0, 0)], [], [], 10) == []


def test_seeds_are_stitched_with_paths():
    terrain = [(0, 0), (1, 0), (2, 0), (3, 0)]
    assert build_road_network([(0, 0), (3, 0)], terrain, [], 0) == terrain


def test_seed_off_terrain_is_ignored():
    assert build_road_network([(9, 9)], [(0, 0), (1, 0)], [], 5) == []


def test_grows_exactly_to_target_on_open_terrain():
    terrain = hex_grid(3, (0, 0))
    roads = build_road_network([(0, 0)], terrain, [], 10)
    assert len(roads) == 10
    assert roads == sorted(roads)
    assert is_set_connected(roads)


def test_unreachable_islands_leave_target_short():
    terrain = [(0, 0), (1, 0), (5, 0), (6, 0)]
    assert build_road_network([(0, 0)], terrain, [], 10) == [(0, 0), (1, 0)]


def test_occupied_tiles_block_roads():
    terrain = [(q, 0) for q in range(5)]
    roads = build_road_network([(0, 0), (4, 0)], terrain, [(2, 0)], 0)
    assert roads == [(0, 0)]


def test_output_is_connected_across_scenarios():
    grid = hex_grid(4, (0, 0))
    blocked = {(1, 0), (1, -1), (0, 1), (-2, 2), (2, 2), (3, -3)}
    cases = [
        ([(0, 0), (4, 0), (-4, 4)], grid, blocked, 30),
        ([(-3, 0), (3, 0)], grid, set(), 5),
        ([(0, 0), (9, 9)], grid, blocked, 61),
    ]
    for seeds, terrain, occupied, target in cases:
        roads = build_road_network(seeds, terrain, occupied, target)
        assert roads
        assert not set(roads) & set(occupied)
        assert is_set_connected(roads)


def test_network_is_deterministic():
    grid = hex_grid(4, (0, 0))
    args = ([(0, 0), (3, -3), (-4, 1)], grid, [(1, 1)], 25)
    assert build_road_network(*args) == build_road_network(*args)


def test_working_sets_stay_disjoint():
    builder = RoadNetworkBuilder.for_terrain(hex_grid(2, (0, 0)), [(1, 0)])
    assert (1, 0) not in builder.terrain
    builder.connect_seeds([(0, 0), (2, -2)])
    assert not set(builder.connected) & set(builder.unconnected)
    builder.grow(12)
    assert not set(builder.connected) & set(builder.unconnected)
    assert len(builder.connected) >= 12
