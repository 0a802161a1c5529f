from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional

class PlantType(IntEnum):
    NONE = 0
    POTATO = 1
    CARROT = 2
    CABBAGE = 3

    @property
    def crop_name(self) -> str:
        return self.name.lower()

    @classmethod
    def from_name(cls, name: str) -> "PlantType":
        """Parse a crop name ("potato", "Carrot", ...). NONE is not a crop."""
        key = str(name).strip().upper()
        if key in cls.__members__ and key != "NONE":
            return cls[key]
        raise ValueError(f"Unknown crop: {name!r}")

CROPS: List[PlantType] = [PlantType.POTATO, PlantType.CARROT, PlantType.CABBAGE]
CROP_NAMES: List[str] = [p.crop_name for p in CROPS]

MIN_LEVEL = 1
MAX_LEVEL = 3

@dataclass(slots=True, frozen=True)
class Tile:
    sunlight: int
    water: int
    plant_type: PlantType = PlantType.NONE
    plant_level: int = 0

@dataclass(slots=True, frozen=True)
class GrowthCondition:
    sunlight: int
    water: int
    neighbors: Optional[Dict[PlantType, int]] = None  # {PlantType.POTATO: 2}

@dataclass(slots=True)
class Inventory:
    items: Dict[str, int] = field(default_factory=lambda: {name: 1 for name in CROP_NAMES})

    def count(self, crop: str) -> int:
        return self.items.get(crop, 0)

    def add(self, crop: str, amount: int = 1):
        self.items[crop] = self.count(crop) + amount

    def remove(self, crop: str, amount: int = 1):
        current = self.count(crop)
        if amount > current:
            raise ValueError(f"Cannot remove {amount} {crop}, only {current} held")
        self.items[crop] = current - amount

    def to_dict(self) -> Dict[str, int]:
        return {name: self.count(name) for name in CROP_NAMES}

@dataclass(slots=True)
class GameState:
    """Full snapshot of the live game. grid_data is an immutable byte copy."""
    day_count: int
    inventory: Dict[str, int]
    achievements: List[str]
    grid_data: bytes
    player_x: int
    player_y: int
    actions_remaining: int
