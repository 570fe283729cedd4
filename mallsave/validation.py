"""Load issues, load errors, limits and store-area validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from mallsave.types import StoreChunkCoord, StoreChunkSave, StoreSave

_MAX_CHUNK_COORD = 100


@dataclass(frozen=True)
class UnknownPrototype:
    prototype_id: str


@dataclass(frozen=True)
class InvalidRotationIndex:
    object_id: int
    rotation_index: int


@dataclass(frozen=True)
class DuplicateStableObjectId:
    object_id: int


@dataclass(frozen=True)
class InvalidChunk:
    coord: StoreChunkCoord


@dataclass(frozen=True)
class ObjectOutsideStoreArea:
    object_id: int


@dataclass(frozen=True)
class ObjectPlacementInvalid:
    object_id: int


@dataclass(frozen=True)
class AllocatorNextIdTooSmall:
    save_next: int
    normalized_next: int


@dataclass(frozen=True)
class NonFiniteWorldPos:
    object_id: int


LoadIssue = Union[
    UnknownPrototype,
    InvalidRotationIndex,
    DuplicateStableObjectId,
    InvalidChunk,
    ObjectOutsideStoreArea,
    ObjectPlacementInvalid,
    AllocatorNextIdTooSmall,
    NonFiniteWorldPos,
]


@dataclass
class LoadReport:
    """Summary of what a load did and what it found."""

    loaded_objects: int = 0
    skipped_objects: int = 0
    loaded_chunks: int = 0
    issues: list[LoadIssue] = field(default_factory=list)


class SaveLoadError(Exception):
    """A save cannot be loaded."""


class UnsupportedVersionError(SaveLoadError):
    def __init__(self, version: int) -> None:
        super().__init__(f"unsupported save version {version}")
        self.version = version


class FatalValidationError(SaveLoadError):
    def __init__(self, issues: list[LoadIssue] | None = None) -> None:
        self.issues = list(issues or [])
        super().__init__(f"fatal validation error: {self.issues!r}")


@dataclass(frozen=True)
class SaveLoadLimits:
    """Upper bounds on what a save may contain."""

    max_objects: int = 1000
    max_chunks: int = 400


@dataclass
class StoreAreaValidationReport:
    valid_chunks: list[StoreChunkSave] = field(default_factory=list)
    issues: list[LoadIssue] = field(default_factory=list)
    fatal: bool = False


def validate_loaded_store_area(
    store_save: StoreSave, world_bounds: Any = None
) -> StoreAreaValidationReport:
    """Drop duplicate chunks and report chunks outside the allowed coordinate range."""
    report = StoreAreaValidationReport()
    seen: set[StoreChunkCoord] = set()
    for chunk in store_save.owned_chunks:
        if chunk.coord in seen:
            continue
        seen.add(chunk.coord)
        if abs(chunk.coord.x) > _MAX_CHUNK_COORD or abs(chunk.coord.y) > _MAX_CHUNK_COORD:
            report.issues.append(InvalidChunk(chunk.coord))
            continue
        report.valid_chunks.append(chunk)
    return report