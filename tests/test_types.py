import math

import pytest

from mallsave.types import (
    CURRENT_SAVE_VERSION,
    FloorPlacementSave,
    ObjectSave,
    SaveGame,
    StoreBoundarySide,
    StoreChunkCoord,
    StoreChunkKind,
    StoreChunkSave,
    StoreSave,
    WallMountedPlacementSave,
    WallSegmentKeySave,
    WorldPosSave,
    placement_from_dict,
)


def _sample_save():
    key = WallSegmentKeySave(StoreChunkCoord(-1, -1), StoreBoundarySide.TOP)
    return SaveGame(
        version=CURRENT_SAVE_VERSION,
        next_object_id=2000,
        store=StoreSave([StoreChunkSave(StoreChunkCoord(0, 0), StoreChunkKind.DEFAULT)]),
        objects=[
            ObjectSave(1001, "fixture.shelf.basic", FloorPlacementSave(WorldPosSave(0.0, 0.0))),
            ObjectSave(
                3001,
                "wall.decor.placeholder",
                WallMountedPlacementSave(key, 64.0, 48.0),
            ),
        ],
    )


def test_current_version_is_one():
    assert SaveGame.from_dict(_sample_save().to_dict()).version == 1


def test_save_game_round_trip():
    save = _sample_save()
    assert SaveGame.from_dict(save.to_dict()) == save


def test_floor_placement_is_externally_tagged():
    placement = FloorPlacementSave(WorldPosSave(1.5, -2.0), rotation_index=3)
    assert placement.to_dict() == {
        "Floor": {"world_pos": {"x": 1.5, "y": -2.0}, "rotation_index": 3}
    }


def test_wall_placement_is_externally_tagged():
    key = WallSegmentKeySave(StoreChunkCoord(0, 0), StoreBoundarySide.TOP)
    placement = WallMountedPlacementSave(key, 96.0, 128.0)
    assert placement.to_dict() == {
        "WallMounted": {
            "segment_key": {"chunk": {"x": 0, "y": 0}, "side": "Top"},
            "offset_along_segment": 96.0,
            "height_on_wall": 128.0,
        }
    }
    assert placement_from_dict(placement.to_dict()) == placement


def test_chunk_kind_serializes_as_variant_name():
    chunk = StoreChunkSave(StoreChunkCoord(2, 3))
    assert chunk.to_dict() == {"coord": {"x": 2, "y": 3}, "kind": "Default"}


def test_missing_rotation_index_reads_as_none():
    placement = placement_from_dict({"Floor": {"world_pos": {"x": 1, "y": 2}}})
    assert placement.rotation_index is None
    assert placement.world_pos == WorldPosSave(1.0, 2.0)


def test_non_finite_floats_are_written_as_null():
    placement = FloorPlacementSave(WorldPosSave(math.nan, math.inf))
    data = placement.to_dict()
    assert data["Floor"]["world_pos"] == {"x": None, "y": None}
    with pytest.raises(ValueError):
        placement_from_dict(data)


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"Floor": {}, "WallMounted": {}},
        {"Ceiling": {}},
        {"Floor": {"world_pos": {"x": "a", "y": 0}}},
        {"Floor": {"world_pos": {"x": 0, "y": 0}, "rotation_index": -1}},
        "Floor",
    ],
)
def test_bad_placement_is_rejected(data):
    with pytest.raises(ValueError):
        placement_from_dict(data)


def test_unknown_side_is_rejected():
    with pytest.raises(ValueError):
        WallSegmentKeySave.from_dict({"chunk": {"x": 0, "y": 0}, "side": "Middle"})


def test_coord_out_of_i32_range_is_rejected():
    with pytest.raises(ValueError):
        StoreChunkCoord.from_dict({"x": 2**31, "y": 0})


def test_bool_is_not_an_integer():
    with pytest.raises(ValueError):
        StoreChunkCoord.from_dict({"x": True, "y": 0})


def test_negative_version_is_rejected():
    data = _sample_save().to_dict()
    data["version"] = -1
    with pytest.raises(ValueError):
        SaveGame.from_dict(data)


def test_missing_field_is_rejected():
    data = _sample_save().to_dict()
    del data["next_object_id"]
    with pytest.raises(ValueError, match="next_object_id"):
        SaveGame.from_dict(data)


def test_prototype_id_must_be_string():
    data = _sample_save().to_dict()
    data["objects"][0]["prototype_id"] = 7
    with pytest.raises(ValueError):
        SaveGame.from_dict(data)


def test_unknown_fields_are_ignored():
    data = _sample_save().to_dict()
    data["extra"] = {"anything": 1}
    assert SaveGame.from_dict(data) == _sample_save()