"""Turning a read save game into a validated plan for loading."""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass, field
from typing import Any, Union

from mallsave.types import (
    CURRENT_SAVE_VERSION,
    FloorPlacementSave,
    ObjectSave,
    SaveGame,
    StoreChunkSave,
    WallMountedPlacementSave,
)
from mallsave.validation import (
    AllocatorNextIdTooSmall,
    DuplicateStableObjectId,
    FatalValidationError,
    LoadIssue,
    LoadReport,
    NonFiniteWorldPos,
    ObjectPlacementInvalid,
    SaveLoadLimits,
    UnsupportedVersionError,
    validate_loaded_store_area,
)


@dataclass
class SpawnPlan:
    """An object that is to be spawned from the save."""

    obj: ObjectSave


@dataclass
class SkipPlan:
    """An object that is left out of the load, and why."""

    id: int
    reason: LoadIssue


ObjectLoadPlan = Union[SpawnPlan, SkipPlan]


@dataclass
class LoadPlan:
    """Everything needed to rebuild the store and its objects from a save."""

    save: SaveGame
    normalized_next_object_id: int
    valid_chunks: list[StoreChunkSave] = field(default_factory=list)
    object_plans: list[ObjectLoadPlan] = field(default_factory=list)
    report: LoadReport = field(default_factory=LoadReport)


def _placement_issue(obj: ObjectSave) -> LoadIssue | None:
    placement = obj.placement
    if isinstance(placement, FloorPlacementSave):
        pos = placement.world_pos
        if not (math.isfinite(pos.x) and math.isfinite(pos.y)):
            return NonFiniteWorldPos(object_id=obj.id)
    elif isinstance(placement, WallMountedPlacementSave):
        if not (
            math.isfinite(placement.offset_along_segment)
            and math.isfinite(placement.height_on_wall)
        ):
            return ObjectPlacementInvalid(object_id=obj.id)
    return None


def build_load_plan(
    save: SaveGame,
    limits: SaveLoadLimits | None = None,
    world_bounds: Any = None,
) -> LoadPlan:
    """Validate a save and decide which chunks and objects to load.

    Raises UnsupportedVersionError for a foreign version and
    FatalValidationError when limits are exceeded or object ids repeat.
    """
    if limits is None:
        limits = SaveLoadLimits()

    if save.version != CURRENT_SAVE_VERSION:
        raise UnsupportedVersionError(save.version)

    if (
        len(save.objects) > limits.max_objects
        or len(save.store.owned_chunks) > limits.max_chunks
    ):
        raise FatalValidationError([])

    store_report = validate_loaded_store_area(save.store, world_bounds)
    if store_report.fatal:
        raise FatalValidationError(store_report.issues)

    issues: list[LoadIssue] = list(store_report.issues)
    seen_ids: set[int] = set()
    max_loaded_id = 0
    object_plans: list[ObjectLoadPlan] = []

    for obj in save.objects:
        if obj.id in seen_ids:
            raise FatalValidationError([DuplicateStableObjectId(object_id=obj.id)])
        seen_ids.add(obj.id)
        max_loaded_id = max(max_loaded_id, obj.id)

        issue = _placement_issue(obj)
        if issue is not None:
            issues.append(issue)
            object_plans.append(SkipPlan(id=obj.id, reason=issue))
            continue

        object_plans.append(SpawnPlan(copy.deepcopy(obj)))

    normalized_next = max(save.next_object_id, max_loaded_id + 1)
    if normalized_next > save.next_object_id:
        issues.append(
            AllocatorNextIdTooSmall(
                save_next=save.next_object_id, normalized_next=normalized_next
            )
        )

    return LoadPlan(
        save=copy.deepcopy(save),
        normalized_next_object_id=normalized_next,
        valid_chunks=list(store_report.valid_chunks),
        object_plans=object_plans,
        report=LoadReport(
            loaded_objects=0,
            skipped_objects=len(issues),
            loaded_chunks=len(save.store.owned_chunks),
            issues=issues,
        ),
    )