from typing import Any, Dict, Optional
from farmstead.core.config_manager import load_document

DEFAULT_MESSAGES: Dict[str, str] = {
    "noActiveTile": "No active tile under the player.",
    "tileOccupied": "Tile ({row}, {col}) already holds a plant.",
    "conditionsNotMet": "Not enough water to plant {type} at ({row}, {col}).",
    "carrotNeedsNeighbor": "Cannot plant carrot here! Need an adjacent tile with Potato or Cabbage.",
    "insufficientNeighbors": "Planting {type} needs {count} neighboring {plant}.",
    "noInventory": "No {type} left in inventory.",
    "planted": "Planted {type} at ({row}, {col}).",
    "noPlantToHarvest": "No plant to harvest at ({row}, {col}).",
    "invalidPlantLevel": "Plant at ({row}, {col}) has an invalid level {level}.",
    "harvested": "Harvested {amount} {type} at ({row}, {col}).",
    "plantCannotGrow": "Plant at ({row}, {col}) cannot reach level {level}: not enough neighboring {plant}.",
    "plantGrew": "{type} at ({row}, {col}) grew to level {level}.",
    "achievementUnlocked": "Achievement Unlocked! {title}",
    "newDay": "Day {day} begins.",
    "noActionsRemaining": "No actions remaining today.",
    "undoUnavailable": "Nothing to undo.",
    "redoUnavailable": "Nothing to redo.",
    "gameSaved": "Game saved to slot {slot}.",
    "gameLoaded": "Game loaded from slot {slot}.",
    "noSaveFound": "No save found in slot {slot}.",
    "corruptSave": "Save in slot {slot} is unreadable: {reason}",
    "gameLoadedWithUndoRedo": "Game loaded with undo/redo history.",
}

class Localization:
    """Message templates for player-facing text, passed to whoever needs them."""
    def __init__(self, messages: Optional[Dict[str, str]] = None):
        self.messages = dict(DEFAULT_MESSAGES)
        if messages:
            self.messages.update(messages)

    @classmethod
    def from_file(cls, path: Optional[str]) -> "Localization":
        document = load_document(path)
        messages = {k: v for k, v in (document or {}).items() if isinstance(v, str)}
        return cls(messages)

    def translate(self, key: str, **variables: Any) -> str:
        text = self.messages.get(key, key)
        for name, value in variables.items():
            text = text.replace("{" + name + "}", str(value))
        return text
