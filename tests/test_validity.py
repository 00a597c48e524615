import penrose_tiler.engine.placement as placement
from penrose_tiler import EngineConfig, PenroseTiler, PlacementRecord, PrototileType, check_tiling
from penrose_tiler.engine import DEFAULT_VALIDITY_RADIUS, find_dead_ends, retract_if_dead_end
from penrose_tiler.prototiles import MAX_CIRCUMRADIUS

FAT = PrototileType.FAT
SKINNY = PrototileType.SKINNY


def _open_everywhere(tiler):
    return lambda handle, sides=None: [(side, FAT) for side in tiler.tile(handle).get_free_sides()]


def test_lone_root_has_no_dead_ends():
    tiler = PenroseTiler()
    tiler.place_root(SKINNY)

    assert find_dead_ends(tiler) == []


def test_dead_ends_are_free_sides_without_candidates(monkeypatch):
    tiler = PenroseTiler()
    tiler.place_root(FAT)
    monkeypatch.setattr(tiler, "legal_placements", lambda handle, sides=None: [(0, FAT), (0, SKINNY)])

    assert find_dead_ends(tiler) == [(0, 1), (0, 2), (0, 3)]


def test_local_scope_skips_distant_tiles(monkeypatch):
    tiler = PenroseTiler(EngineConfig(validity_radius=1.0))
    tiler.place_root(FAT)
    tiler.place(0, 0, FAT)
    monkeypatch.setattr(tiler, "legal_placements", lambda handle, sides=None: [])

    assert find_dead_ends(tiler, near=1) == [(1, side) for side in (0, 1, 2)]
    assert len(find_dead_ends(tiler)) == 6


def test_default_radius_covers_two_contact_steps():
    assert DEFAULT_VALIDITY_RADIUS > 4.0 * MAX_CIRCUMRADIUS


def test_retract_removes_newest_tile(monkeypatch):
    tiler = PenroseTiler()
    tiler.place_root(FAT)
    tiler.place(0, 0, SKINNY)
    monkeypatch.setattr(tiler, "legal_placements", lambda handle, sides=None: [])

    assert retract_if_dead_end(tiler, 1)

    assert len(tiler) == 1
    assert not tiler.get_side_used(0, 0)
    assert tiler.export_history() == (PlacementRecord.root(FAT),)


def test_retract_keeps_tile_without_dead_ends(monkeypatch):
    tiler = PenroseTiler()
    tiler.place_root(FAT)
    tiler.place(0, 0, SKINNY)
    monkeypatch.setattr(tiler, "legal_placements", _open_everywhere(tiler))

    assert not retract_if_dead_end(tiler, 1)
    assert len(tiler) == 2


def test_random_placement_reports_retraction(monkeypatch):
    tiler = PenroseTiler(EngineConfig(random_seed=2))
    tiler.place_root(FAT)

    def _always_retract(engine, handle):
        engine.undo_last()
        return True

    monkeypatch.setattr(placement, "retract_if_dead_end", _always_retract)

    assert tiler.place_random_legal() is None
    assert len(tiler) == 1
    assert tiler.grow(5) == 0


def test_validity_check_can_be_disabled(monkeypatch):
    tiler = PenroseTiler(EngineConfig(random_seed=2, check_validity=False))
    tiler.place_root(FAT)
    monkeypatch.setattr(placement, "retract_if_dead_end", lambda engine, handle: True)

    handle, transform, tile_type = tiler.place_random_legal()

    assert handle == 1
    assert tiler.tile(1).tile_type == tile_type


def test_exhausted_frontier_returns_none(monkeypatch):
    tiler = PenroseTiler(EngineConfig(random_seed=0))
    tiler.place_root(SKINNY)
    monkeypatch.setattr(tiler, "legal_placements", lambda handle, sides=None: [])

    assert tiler.place_random_legal() is None
    assert tiler.grow(3) == 0
    assert len(tiler) == 1


def _grow_recording_retractions(monkeypatch, seeds, steps):
    retractions = []

    def _checked_retract(engine, handle):
        dead = find_dead_ends(engine, near=handle)
        if not dead:
            assert not retract_if_dead_end(engine, handle)
            return False
        tile = engine.tile(handle)
        records = engine.export_history()
        for dead_handle, side in dead:
            assert engine.legal_placements(dead_handle, sides=[side]) == []

        assert retract_if_dead_end(engine, handle)

        assert len(engine) == handle
        assert engine.export_history() == records[:-1]
        assert not engine.get_side_used(tile.parent, tile.attach_side)
        retractions.append((records, dead))
        return True

    monkeypatch.setattr(placement, "retract_if_dead_end", _checked_retract)
    tilers = []
    for seed in seeds:
        tiler = PenroseTiler(EngineConfig(random_seed=seed))
        tiler.place_root(FAT)
        tiler.grow(steps)
        tilers.append(tiler)
    return tilers, retractions


def test_growth_retracts_geometric_dead_ends(monkeypatch):
    tilers, retractions = _grow_recording_retractions(monkeypatch, range(3), 60)

    assert retractions
    for tiler in tilers:
        assert check_tiling(tiler) == []
        assert find_dead_ends(tiler) == []


def test_dead_end_patch_built_by_hand(monkeypatch):
    _, retractions = _grow_recording_retractions(monkeypatch, range(3), 60)
    records, dead = retractions[0]

    rebuilt = PenroseTiler()
    rebuilt.place_root(records[0].tile_type)
    for record in records[1:]:
        rebuilt.place(record.anchor, record.side, record.tile_type)

    found = find_dead_ends(rebuilt)
    assert set(dead) <= set(found)
    for handle, side in dead:
        assert not rebuilt.get_side_used(handle, side)
        assert rebuilt.legal_placements(handle, sides=[side]) == []

    rebuilt.undo_last()
    assert find_dead_ends(rebuilt) == []
