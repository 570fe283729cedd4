"""Building a save game from the live store and its objects."""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from mallsave.types import (
    CURRENT_SAVE_VERSION,
    ObjectSave,
    PlacementSave,
    SaveGame,
    StoreChunkCoord,
    StoreChunkKind,
    StoreChunkSave,
    StoreSave,
)


@dataclass
class PlacedObject:
    """A store object as it stands in the running game."""

    stable_id: int
    prototype_id: str
    placement: PlacementSave


def extract_save_game(
    owned_chunks: Mapping[StoreChunkCoord, StoreChunkKind],
    next_object_id: int,
    objects: Iterable[PlacedObject],
) -> SaveGame:
    """Snapshot the store into a save game with a deterministic ordering.

    Objects are sorted by id and chunks by (y, x).
    """
    saved_objects = sorted(
        (
            ObjectSave(
                id=obj.stable_id,
                prototype_id=obj.prototype_id,
                placement=copy.deepcopy(obj.placement),
            )
            for obj in objects
        ),
        key=lambda o: o.id,
    )
    saved_chunks = sorted(
        (StoreChunkSave(coord=coord, kind=kind) for coord, kind in owned_chunks.items()),
        key=lambda c: (c.coord.y, c.coord.x),
    )
    return SaveGame(
        version=CURRENT_SAVE_VERSION,
        next_object_id=next_object_id,
        store=StoreSave(owned_chunks=saved_chunks),
        objects=saved_objects,
    )