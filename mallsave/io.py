"""Reading and atomically writing save files."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from mallsave.types import SaveGame


class SaveIoError(Exception):
    """A save file could not be written or read."""

    prefix = "Save file error"

    def __init__(self, source: BaseException) -> None:
        super().__init__(f"{self.prefix}: {source}")
        self.source = source


class SerializeError(SaveIoError):
    prefix = "Failed to serialize save file"


class CreateTempFileError(SaveIoError):
    prefix = "Failed to create temp file"


class WriteTempFileError(SaveIoError):
    prefix = "Failed to write to temp file"


class FlushTempFileError(SaveIoError):
    prefix = "Failed to flush temp file"


class RenameTempFileError(SaveIoError):
    prefix = "Failed to rename temp file to save file"


class ReadSaveFileError(SaveIoError):
    prefix = "Failed to read save file"


class ParseSaveFileError(SaveIoError):
    prefix = "Failed to parse save file"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid number `{name}`")


def _unique_object(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            raise ValueError(f"duplicate field `{key}`")
        result[key] = value
    return result


def write_save_file_atomic(path: str | os.PathLike[str], save: SaveGame) -> None:
    """Write the save as pretty JSON to a temp file beside path, then rename it over path."""
    path = Path(path)
    try:
        text = json.dumps(save.to_dict(), indent=2, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise SerializeError(exc) from exc

    tmp_path = path.with_suffix(".tmp")
    try:
        handle = open(tmp_path, "w", encoding="utf-8", newline="")
    except OSError as exc:
        raise CreateTempFileError(exc) from exc
    with handle:
        try:
            handle.write(text)
        except OSError as exc:
            raise WriteTempFileError(exc) from exc
        try:
            handle.flush()
        except OSError as exc:
            raise FlushTempFileError(exc) from exc

    try:
        os.replace(tmp_path, path)
    except OSError as exc:
        raise RenameTempFileError(exc) from exc


def read_save_file(path: str | os.PathLike[str]) -> SaveGame:
    """Read and parse a save file."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ReadSaveFileError(exc) from exc
    try:
        data = json.loads(
            text, parse_constant=_reject_constant, object_pairs_hook=_unique_object
        )
        return SaveGame.from_dict(data)
    except ValueError as exc:
        raise ParseSaveFileError(exc) from exc