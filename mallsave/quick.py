"""Quick save and quick load to a fixed save file."""

from __future__ import annotations

import logging
import os
from typing import Any

from mallsave.io import read_save_file, write_save_file_atomic
from mallsave.load import LoadPlan, build_load_plan
from mallsave.types import SaveGame
from mallsave.validation import SaveLoadLimits

QUICKSAVE_PATH = "quicksave.json"

_log = logging.getLogger(__name__)


def quick_save(save: SaveGame, path: str | os.PathLike[str] = QUICKSAVE_PATH) -> None:
    """Write the save atomically to the quick-save file."""
    write_save_file_atomic(path, save)
    _log.info("QuickSave successful")


def quick_load(
    path: str | os.PathLike[str] = QUICKSAVE_PATH,
    limits: SaveLoadLimits | None = None,
    world_bounds: Any = None,
) -> LoadPlan:
    """Read the quick-save file and return a validated load plan."""
    save = read_save_file(path)
    plan = build_load_plan(save, limits, world_bounds)
    _log.info(
        "Applying load plan: %d chunks, %d objects",
        len(plan.valid_chunks),
        len(plan.object_plans),
    )
    return plan