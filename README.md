# mallsave

This is the save-game layer of a store-building simulation. It defines a
versioned JSON save format and writes it to disk atomically. It also checks
what is read back and builds a load plan that decides which objects get spawned.

## Modules

### `mallsave.types`

This module defines the save format.

- `SaveGame` holds four things:
  - `version`, which is `CURRENT_SAVE_VERSION`, equal to 1;
  - `next_object_id`;
  - `store`, a `StoreSave` that lists `StoreChunkSave` entries, each with a `StoreChunkCoord` and a `StoreChunkKind`;
  - `objects`, a list of `ObjectSave` entries.
- Each `ObjectSave` has an `id`, a `prototype_id` and a placement. The placement is one of two kinds:
  - `FloorPlacementSave`, which holds a `WorldPosSave` and an optional `rotation_index`;
  - `WallMountedPlacementSave`, which holds a `WallSegmentKeySave` made of a chunk and a `StoreBoundarySide`, plus `offset_along_segment` and `height_on_wall`.
- Every type has a `to_dict()` method. The types that can be read back have a `from_dict()` class method.
- Placements are externally tagged: `{"Floor": {...}}` or `{"WallMounted": {...}}`. You read one back with `placement_from_dict()`.
- `from_dict()` raises `ValueError` for any of these:
  - a missing field;
  - a value of the wrong type;
  - an integer out of range;
  - an unknown enum variant.
- Numbers that are not finite are written as `null`.

### `mallsave.io`

- `write_save_file_atomic(path, save)` writes pretty-printed JSON to a file with the same name and a `.tmp` suffix. It then renames that file over `path`.
- `read_save_file(path)` reads a save and parses it. It rejects these:
  - duplicate JSON keys;
  - `NaN` and `Infinity`.
- Both functions report failures as subclasses of `SaveIoError`:
  - `SerializeError`
  - `CreateTempFileError`
  - `WriteTempFileError`
  - `FlushTempFileError`
  - `RenameTempFileError`
  - `ReadSaveFileError`
  - `ParseSaveFileError`

### `mallsave.validation`

This module defines the load issues:

- `UnknownPrototype`
- `InvalidRotationIndex`
- `DuplicateStableObjectId`
- `InvalidChunk`
- `ObjectOutsideStoreArea`
- `ObjectPlacementInvalid`
- `AllocatorNextIdTooSmall`
- `NonFiniteWorldPos`

It also defines:

- `LoadReport`.
- The errors `SaveLoadError`, `UnsupportedVersionError` and `FatalValidationError`.
- `SaveLoadLimits`. The defaults are 1000 objects and 400 chunks.
- `validate_loaded_store_area()`. It drops duplicate chunks. A chunk whose `x` or `y` coordinate has an absolute value above 100 is reported as an `InvalidChunk`.

### `mallsave.load`

`build_load_plan(save, limits, world_bounds)` checks a save and returns a `LoadPlan`.

- It raises `UnsupportedVersionError` when the version is not the current one.
- It raises `FatalValidationError` in two cases:
  - the object count or the chunk count goes over the limits;
  - an object id appears twice.
- An object whose position is not finite gets a `SkipPlan`. Every other object gets a `SpawnPlan`.
- `normalized_next_object_id` is always greater than every loaded id. If the saved value had to be raised, the plan records an `AllocatorNextIdTooSmall` issue.

The `world_bounds` argument is accepted but not used.

### `mallsave.extract`

`extract_save_game(owned_chunks, next_object_id, objects)` builds a `SaveGame` from the live state. It takes two inputs:

- a mapping from `StoreChunkCoord` to `StoreChunkKind`;
- an iterable of `PlacedObject` values.

Objects are sorted by id and chunks by `(y, x)`, so the output does not depend on input order.

### `mallsave.quick`

- `quick_save(save, path)` writes to the quick-save slot, which is `quicksave.json` by default.
- `quick_load(path, limits, world_bounds)` reads the quick-save file and returns its load plan.

## Example

```python
from mallsave.types import (
    FloorPlacementSave, StoreChunkCoord, StoreChunkKind, WorldPosSave,
)
from mallsave.extract import PlacedObject, extract_save_game
from mallsave.load import SpawnPlan
from mallsave.quick import quick_load, quick_save
from mallsave.validation import SaveLoadLimits

save = extract_save_game(
    owned_chunks={StoreChunkCoord(0, 0): StoreChunkKind.DEFAULT},
    next_object_id=2000,
    objects=[
        PlacedObject(
            stable_id=1001,
            prototype_id="fixture.shelf.basic",
            placement=FloorPlacementSave(WorldPosSave(0.0, 0.0), None),
        )
    ],
)
quick_save(save, "quicksave.json")
plan = quick_load("quicksave.json", SaveLoadLimits(), None)
print(plan.normalized_next_object_id)                        # 2000
print([isinstance(p, SpawnPlan) for p in plan.object_plans])  # [True]
```

## What it does not do

The package stops at the `LoadPlan`. It does not do any of the following:

- apply the plan to a running game;
- spawn objects or look up their prototypes;
- rebuild walls or doorways;
- reset tools or interface state;
- bind quick-save or quick-load keys.

Those steps belong to the game that uses the plan.

## Tests

```
pip install -e .[test]
pytest
```