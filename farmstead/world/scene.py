from typing import Any, Dict, Optional
from farmstead.components.data_components import PlantType, CROP_NAMES, MIN_LEVEL, MAX_LEVEL
from farmstead.core.game_state import FarmState
from farmstead.utils.logger import Logger, LogCategory

def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)

def apply_scene(state: FarmState, document: Optional[Dict[str, Any]]) -> int:
    """
    Apply a scene document to a freshly initialised state:

        {"initial": {"dayCount", "inventory": {crop: n}, "actionsRemaining", "achievements"},
         "gridOverrides": [{"row", "col", "sunlight"?, "water"?, "plantType"?, "plantLevel"?}]}

    Invalid entries are logged and skipped. Returns the number of tiles overridden.
    """
    if not document:
        return 0

    initial = document.get("initial") or {}
    if isinstance(initial, dict):
        _apply_initial(state, initial)
    else:
        Logger.warning("Scene 'initial' section must be an object")

    overrides = document.get("gridOverrides") or []
    if not isinstance(overrides, list):
        Logger.warning("Scene 'gridOverrides' must be a list")
        return 0

    applied = 0
    for cell in overrides:
        if _apply_override(state, cell):
            applied += 1
    Logger.log(LogCategory.CONFIG, f"Scene applied with {applied} tile override(s)")
    return applied

def _apply_initial(state: FarmState, initial: Dict[str, Any]):
    if _is_int(initial.get("dayCount")):
        state.time_manager.day = initial["dayCount"]
    if _is_int(initial.get("actionsRemaining")):
        state.time_manager.actions_remaining = initial["actionsRemaining"]

    inventory = initial.get("inventory")
    if isinstance(inventory, dict):
        for name in CROP_NAMES:
            count = inventory.get(name)
            if _is_int(count) and count >= 0:
                state.inventory.items[name] = count

    achievements = initial.get("achievements")
    if isinstance(achievements, list):
        state.achievements = list(dict.fromkeys(a for a in achievements if isinstance(a, str)))

def _apply_override(state: FarmState, cell: Any) -> bool:
    grid = state.grid
    if not isinstance(cell, dict) or not _is_int(cell.get("row")) or not _is_int(cell.get("col")):
        Logger.warning(f"Skipping grid override without row/col: {cell!r}")
        return False
    row, col = cell["row"], cell["col"]
    if not grid.in_bounds(row, col):
        Logger.warning(f"Skipping grid override outside the grid: ({row}, {col})")
        return False

    plant_type = None
    if cell.get("plantType") is not None:
        try:
            plant_type = PlantType.from_name(cell["plantType"])
        except ValueError:
            Logger.warning(f"Skipping grid override with unknown plant {cell['plantType']!r}")
            return False

    if _is_int(cell.get("sunlight")):
        grid.set_sunlight(row, col, min(max(cell["sunlight"], 0), 100))
    if _is_int(cell.get("water")):
        grid.set_water(row, col, min(max(cell["water"], 0), 100))

    if plant_type is not None:
        grid.set_plant_type(row, col, plant_type)
        level = cell.get("plantLevel")
        level = level if _is_int(level) else MIN_LEVEL
        grid.set_plant_level(row, col, min(max(level, MIN_LEVEL), MAX_LEVEL))
    return True
