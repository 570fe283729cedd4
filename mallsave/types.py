"""Save-game records and their mapping to and from JSON-ready data."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

CURRENT_SAVE_VERSION = 1

_U32_MAX = 2**32 - 1
_U64_MAX = 2**64 - 1
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"expected an object for {what}, got {type(data).__name__}")
    return data


def _field(data: Mapping[str, Any], name: str, what: str) -> Any:
    try:
        return data[name]
    except KeyError:
        raise ValueError(f"missing field `{name}` in {what}") from None


def _int(value: Any, low: int, high: int, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"expected an integer for {what}, got {value!r}")
    if not low <= value <= high:
        raise ValueError(f"{what} out of range: {value}")
    return value


def _float(value: Any, what: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected a number for {what}, got {value!r}")
    return float(value)


def _float_out(value: float) -> float | None:
    # Non-finite numbers have no JSON form and are written as null.
    return value if math.isfinite(value) else None


def _list(value: Any, what: str) -> list[Any]:
    if not isinstance(value, list):
        raise ValueError(f"expected an array for {what}, got {type(value).__name__}")
    return value


def _enum(cls: type[Enum], value: Any, what: str) -> Any:
    if not isinstance(value, str):
        raise ValueError(f"expected a variant name for {what}, got {value!r}")
    try:
        return cls(value)
    except ValueError:
        raise ValueError(f"unknown variant `{value}` for {what}") from None


@dataclass(frozen=True)
class StoreChunkCoord:
    """Grid coordinate of a store chunk."""

    x: int
    y: int

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: Any) -> StoreChunkCoord:
        data = _mapping(data, "chunk coordinate")
        return cls(
            x=_int(_field(data, "x", "chunk coordinate"), _I32_MIN, _I32_MAX, "x"),
            y=_int(_field(data, "y", "chunk coordinate"), _I32_MIN, _I32_MAX, "y"),
        )


class StoreBoundarySide(Enum):
    """Side of a chunk on which a boundary wall segment lies."""

    TOP = "Top"
    BOTTOM = "Bottom"
    LEFT = "Left"
    RIGHT = "Right"


class StoreChunkKind(Enum):
    """Kind of an owned store chunk."""

    DEFAULT = "Default"


@dataclass
class WorldPosSave:
    """World position of a floor object."""

    x: float
    y: float

    def to_dict(self) -> dict[str, Any]:
        return {"x": _float_out(self.x), "y": _float_out(self.y)}

    @classmethod
    def from_dict(cls, data: Any) -> WorldPosSave:
        data = _mapping(data, "world position")
        return cls(
            x=_float(_field(data, "x", "world position"), "x"),
            y=_float(_field(data, "y", "world position"), "y"),
        )


@dataclass(frozen=True)
class WallSegmentKeySave:
    """Identifies one wall segment by chunk and side."""

    chunk: StoreChunkCoord
    side: StoreBoundarySide

    def to_dict(self) -> dict[str, Any]:
        return {"chunk": self.chunk.to_dict(), "side": self.side.value}

    @classmethod
    def from_dict(cls, data: Any) -> WallSegmentKeySave:
        data = _mapping(data, "wall segment key")
        return cls(
            chunk=StoreChunkCoord.from_dict(_field(data, "chunk", "wall segment key")),
            side=_enum(StoreBoundarySide, _field(data, "side", "wall segment key"), "side"),
        )


@dataclass
class FloorPlacementSave:
    """Placement of an object standing on the floor."""

    world_pos: WorldPosSave
    rotation_index: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "Floor": {
                "world_pos": self.world_pos.to_dict(),
                "rotation_index": self.rotation_index,
            }
        }


@dataclass
class WallMountedPlacementSave:
    """Placement of an object attached to a wall segment."""

    segment_key: WallSegmentKeySave
    offset_along_segment: float
    height_on_wall: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "WallMounted": {
                "segment_key": self.segment_key.to_dict(),
                "offset_along_segment": _float_out(self.offset_along_segment),
                "height_on_wall": _float_out(self.height_on_wall),
            }
        }


PlacementSave = Union[FloorPlacementSave, WallMountedPlacementSave]


def placement_from_dict(data: Any) -> PlacementSave:
    """Read an externally tagged placement: {"Floor": {...}} or {"WallMounted": {...}}."""
    data = _mapping(data, "placement")
    if len(data) != 1:
        raise ValueError("placement must hold exactly one variant")
    ((tag, body),) = data.items()
    if tag == "Floor":
        body = _mapping(body, "Floor placement")
        rotation = body.get("rotation_index")
        return FloorPlacementSave(
            world_pos=WorldPosSave.from_dict(_field(body, "world_pos", "Floor placement")),
            rotation_index=None
            if rotation is None
            else _int(rotation, 0, _U64_MAX, "rotation_index"),
        )
    if tag == "WallMounted":
        body = _mapping(body, "WallMounted placement")
        what = "WallMounted placement"
        return WallMountedPlacementSave(
            segment_key=WallSegmentKeySave.from_dict(_field(body, "segment_key", what)),
            offset_along_segment=_float(
                _field(body, "offset_along_segment", what), "offset_along_segment"
            ),
            height_on_wall=_float(_field(body, "height_on_wall", what), "height_on_wall"),
        )
    raise ValueError(f"unknown variant `{tag}` for placement")


@dataclass
class StoreChunkSave:
    """One owned chunk of the store."""

    coord: StoreChunkCoord
    kind: StoreChunkKind = StoreChunkKind.DEFAULT

    def to_dict(self) -> dict[str, Any]:
        return {"coord": self.coord.to_dict(), "kind": self.kind.value}

    @classmethod
    def from_dict(cls, data: Any) -> StoreChunkSave:
        data = _mapping(data, "store chunk")
        return cls(
            coord=StoreChunkCoord.from_dict(_field(data, "coord", "store chunk")),
            kind=_enum(StoreChunkKind, _field(data, "kind", "store chunk"), "kind"),
        )


@dataclass
class StoreSave:
    """The saved store area."""

    owned_chunks: list[StoreChunkSave] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"owned_chunks": [chunk.to_dict() for chunk in self.owned_chunks]}

    @classmethod
    def from_dict(cls, data: Any) -> StoreSave:
        data = _mapping(data, "store")
        chunks = _list(_field(data, "owned_chunks", "store"), "owned_chunks")
        return cls(owned_chunks=[StoreChunkSave.from_dict(chunk) for chunk in chunks])


@dataclass
class ObjectSave:
    """One placed store object."""

    id: int
    prototype_id: str
    placement: PlacementSave

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "prototype_id": self.prototype_id,
            "placement": self.placement.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Any) -> ObjectSave:
        data = _mapping(data, "object")
        prototype_id = _field(data, "prototype_id", "object")
        if not isinstance(prototype_id, str):
            raise ValueError(f"expected a string for prototype_id, got {prototype_id!r}")
        return cls(
            id=_int(_field(data, "id", "object"), 0, _U64_MAX, "id"),
            prototype_id=prototype_id,
            placement=placement_from_dict(_field(data, "placement", "object")),
        )


@dataclass
class SaveGame:
    """A complete saved game."""

    version: int
    next_object_id: int
    store: StoreSave = field(default_factory=StoreSave)
    objects: list[ObjectSave] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "next_object_id": self.next_object_id,
            "store": self.store.to_dict(),
            "objects": [obj.to_dict() for obj in self.objects],
        }

    @classmethod
    def from_dict(cls, data: Any) -> SaveGame:
        data = _mapping(data, "save game")
        objects = _list(_field(data, "objects", "save game"), "objects")
        return cls(
            version=_int(_field(data, "version", "save game"), 0, _U32_MAX, "version"),
            next_object_id=_int(
                _field(data, "next_object_id", "save game"), 0, _U64_MAX, "next_object_id"
            ),
            store=StoreSave.from_dict(_field(data, "store", "save game")),
            objects=[ObjectSave.from_dict(obj) for obj in objects],
        )