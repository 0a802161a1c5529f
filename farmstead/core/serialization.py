"""
Save format shared by the autosave and the manual slots.

    {"currentState": STATE, "undoStack": [STATE, ...], "redoStack": [STATE, ...]}

where STATE is

    {"dayCount": int, "inventory": {"potato": int, "carrot": int, "cabbage": int},
     "achievements": [str], "gridData": [int, ...], "playerX": int, "playerY": int,
     "actionsRemaining": int}

The grid is written as a plain list of byte values rather than a binary blob.
"""
import json
from dataclasses import dataclass
from typing import Any, Dict, List
from farmstead.components.data_components import GameState, PlantType, CROP_NAMES, MIN_LEVEL, MAX_LEVEL
from farmstead.core.exceptions import CorruptSaveError
from farmstead.world.grid import Grid, FIELDS_PER_CELL, MAX_SUNLIGHT, MAX_WATER

_INT_FIELDS = {
    "dayCount": "day_count",
    "playerX": "player_x",
    "playerY": "player_y",
    "actionsRemaining": "actions_remaining",
}

@dataclass
class SaveData:
    current_state: GameState
    undo_stack: List[GameState]
    redo_stack: List[GameState]

def state_to_dict(state: GameState) -> Dict[str, Any]:
    return {
        "dayCount": state.day_count,
        "inventory": {name: state.inventory.get(name, 0) for name in CROP_NAMES},
        "achievements": list(state.achievements),
        "gridData": list(state.grid_data),
        "playerX": state.player_x,
        "playerY": state.player_y,
        "actionsRemaining": state.actions_remaining,
    }

def _require_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise CorruptSaveError(f"{name} must be an integer, got {value!r}")
    return value

_PLANT_VALUES = {int(p) for p in PlantType}

def _check_cells(packed: bytes):
    """Every cell must be one the engine could have produced itself."""
    for start in range(0, len(packed), FIELDS_PER_CELL):
        sunlight, water, plant_type, level = packed[start:start + FIELDS_PER_CELL]
        cell = start // FIELDS_PER_CELL
        if sunlight > MAX_SUNLIGHT or water > MAX_WATER:
            raise CorruptSaveError(f"Cell {cell} has sunlight {sunlight} / water {water} above {MAX_SUNLIGHT}")
        if plant_type not in _PLANT_VALUES:
            raise CorruptSaveError(f"Cell {cell} has unknown plant type {plant_type}")
        if plant_type == PlantType.NONE:
            if level != 0:
                raise CorruptSaveError(f"Cell {cell} has level {level} but no plant")
        elif not MIN_LEVEL <= level <= MAX_LEVEL:
            raise CorruptSaveError(f"Cell {cell} has plant level {level} outside [{MIN_LEVEL}, {MAX_LEVEL}]")

def state_from_dict(data: Any, grid_size: int) -> GameState:
    if not isinstance(data, dict):
        raise CorruptSaveError("State entry is not an object")
    try:
        fields = {attr: _require_int(data[key], key) for key, attr in _INT_FIELDS.items()}

        inventory = data["inventory"]
        if not isinstance(inventory, dict):
            raise CorruptSaveError("inventory must be an object")
        counts = {}
        for name in CROP_NAMES:
            count = _require_int(inventory.get(name, 0), f"inventory.{name}")
            if count < 0:
                raise CorruptSaveError(f"inventory.{name} is negative")
            counts[name] = count

        achievements = data["achievements"]
        if not isinstance(achievements, list) or not all(isinstance(a, str) for a in achievements):
            raise CorruptSaveError("achievements must be a list of strings")

        grid_data = data["gridData"]
        if not isinstance(grid_data, list) or len(grid_data) != grid_size:
            raise CorruptSaveError(f"gridData must be a list of {grid_size} integers")
        try:
            packed = Grid.bytes_from_list(grid_data)
        except ValueError as e:
            raise CorruptSaveError(str(e)) from e
        _check_cells(packed)
    except KeyError as e:
        raise CorruptSaveError(f"Missing field {e.args[0]}") from e

    return GameState(inventory=counts, achievements=list(achievements), grid_data=packed, **fields)

def dumps(save: SaveData) -> str:
    return json.dumps({
        "currentState": state_to_dict(save.current_state),
        "undoStack": [state_to_dict(s) for s in save.undo_stack],
        "redoStack": [state_to_dict(s) for s in save.redo_stack],
    })

def loads(text: str, grid_size: int) -> SaveData:
    """Parse and fully validate a save payload. Raises CorruptSaveError."""
    try:
        raw = json.loads(text)
    except ValueError as e:
        raise CorruptSaveError(f"Save payload is not valid JSON: {e}") from e
    if not isinstance(raw, dict):
        raise CorruptSaveError("Save payload is not an object")

    try:
        current, undo_stack, redo_stack = raw["currentState"], raw["undoStack"], raw["redoStack"]
    except KeyError as e:
        raise CorruptSaveError(f"Missing field {e.args[0]}") from e
    if not isinstance(undo_stack, list) or not isinstance(redo_stack, list):
        raise CorruptSaveError("undoStack and redoStack must be lists")

    return SaveData(
        current_state=state_from_dict(current, grid_size),
        undo_stack=[state_from_dict(s, grid_size) for s in undo_stack],
        redo_stack=[state_from_dict(s, grid_size) for s in redo_stack],
    )
