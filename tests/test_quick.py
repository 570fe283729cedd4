import json

import pytest

from mallsave.io import ParseSaveFileError, ReadSaveFileError
from mallsave.load import SpawnPlan
from mallsave.quick import QUICKSAVE_PATH, quick_load, quick_save
from mallsave.types import (
    CURRENT_SAVE_VERSION,
    FloorPlacementSave,
    ObjectSave,
    SaveGame,
    StoreChunkCoord,
    StoreChunkSave,
    StoreSave,
    WorldPosSave,
)
from mallsave.validation import SaveLoadLimits, UnsupportedVersionError


def sample_save():
    return SaveGame(
        version=CURRENT_SAVE_VERSION,
        next_object_id=2000,
        store=StoreSave(owned_chunks=[StoreChunkSave(StoreChunkCoord(0, 0))]),
        objects=[
            ObjectSave(
                id=1001,
                prototype_id="fixture.shelf.basic",
                placement=FloorPlacementSave(world_pos=WorldPosSave(0.0, 0.0)),
            )
        ],
    )


def test_round_trip(tmp_path):
    path = tmp_path / "slot.json"
    save = sample_save()
    quick_save(save, path)
    plan = quick_load(path)
    assert plan.save == save
    assert [p.obj.id for p in plan.object_plans if isinstance(p, SpawnPlan)] == [1001]
    assert plan.valid_chunks == save.store.owned_chunks


def test_default_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    quick_save(sample_save())
    assert (tmp_path / QUICKSAVE_PATH).exists()
    assert not (tmp_path / "quicksave.tmp").exists()
    assert quick_load().normalized_next_object_id == 2000


def test_missing_file(tmp_path):
    with pytest.raises(ReadSaveFileError):
        quick_load(tmp_path / "absent.json")


def test_malformed_file(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ParseSaveFileError):
        quick_load(path)


def test_wrong_version(tmp_path):
    path = tmp_path / "old.json"
    data = sample_save().to_dict()
    data["version"] = CURRENT_SAVE_VERSION + 1
    path.write_text(json.dumps(data), encoding="utf-8")
    with pytest.raises(UnsupportedVersionError):
        quick_load(path)


def test_limits_are_applied(tmp_path):
    path = tmp_path / "slot.json"
    quick_save(sample_save(), path)
    from mallsave.validation import FatalValidationError

    with pytest.raises(FatalValidationError):
        quick_load(path, SaveLoadLimits(max_objects=0, max_chunks=10))