import threading

from sim.state import GridState
from worldgen.tiles import TileType


def test_constraints_survive_layout_clear():
    gs = GridState()
    assert gs.set_constraint(0, 0, 2)
    gs.generate_layout()
    assert gs.get_tile(0, 0) == TileType.ROAD
    gs.clear()
    assert gs.get_tile(0, 0) is None
    assert gs.constraints == {(0, 0): TileType.ROAD}
    gs.generate_layout()
    assert gs.get_tile(0, 0) == TileType.ROAD


def test_generate_layout_is_idempotent():
    gs = GridState()
    gs.set_constraint(1, -1, TileType.WATER)
    gs.set_constraint(2, 0, 3)
    gs.generate_layout()
    first = dict(gs.grid)
    gs.generate_layout()
    assert gs.grid == first


def test_generate_layout_drops_stale_tiles():
    gs = GridState()
    gs.set_constraint(0, 0, 0)
    gs.generate_layout()
    gs.clear_constraints()
    gs.generate_layout()
    assert gs.grid == {}


def test_invalid_tile_codes_are_rejected():
    gs = GridState()
    assert not gs.set_constraint(0, 0, 5)
    assert not gs.set_constraint(0, 0, -1)
    assert not gs.set_constraint(0, 0, True)
    assert not gs.set_constraint(0, 0, "2")
    assert not gs.set_constraint(0, 0, None)
    assert gs.constraints == {}


def test_set_constraint_overwrites():
    gs = GridState()
    gs.set_constraint(0, 0, TileType.GRASS)
    gs.set_constraint(0, 0, TileType.BUILDING)
    assert gs.constraints[(0, 0)] == TileType.BUILDING
    assert gs.set_constraints([((1, 0), 4), ((2, 0), 9), ((3, 0), 1)]) == 2


def test_stats_count_each_type():
    gs = GridState()
    gs.set_constraints([((0, 0), 0), ((1, 0), 0), ((2, 0), 2), ((3, 0), 4)])
    assert gs.get_stats().total == 0
    gs.generate_layout()
    assert gs.get_stats().to_dict() == {
        "grass": 2, "building": 0, "road": 1, "forest": 0, "water": 1, "total": 4,
    }


def test_batch_get_tiles_omits_empty_cells():
    gs = GridState()
    gs.set_constraints([((0, 0), 1), ((2, 2), 3)])
    gs.generate_layout()
    got = gs.batch_get_tiles([(2, 2), (5, 5), (0, 0)])
    assert got == [((2, 2), TileType.FOREST), ((0, 0), TileType.BUILDING)]
    assert gs.batch_get_tiles([]) == []


def test_lock_released_after_each_operation():
    gs = GridState()
    gs.set_constraint(0, 0, 0)
    gs.generate_layout()
    gs.get_tile(0, 0)
    gs.get_stats()
    gs.batch_get_tiles([(0, 0)])
    gs.clear()
    assert not gs.lock.locked()


def test_lock_blocks_a_second_caller():
    gs = GridState()
    gs.set_constraint(0, 0, 3)
    gs.generate_layout()
    results = []
    reader = threading.Thread(target=lambda: results.append(gs.get_tile(0, 0)))
    with gs.lock:
        reader.start()
        reader.join(timeout=0.2)
        assert reader.is_alive()
        assert results == []
    reader.join(timeout=5)
    assert not reader.is_alive()
    assert results == [TileType.FOREST]
