from typing import Any, Callable, Dict, Optional
from farmstead.components.data_components import GrowthCondition, PlantType, CROPS, MIN_LEVEL, MAX_LEVEL
from farmstead.utils.logger import Logger, LogCategory

GrowthMap = Dict[int, GrowthCondition]

# Mirrors config/plants.json; used when that document is missing.
DEFAULT_PLANT_DOCUMENT: Dict[str, Any] = {
    "plants": {
        "potato": [
            {"level": 2, "sunlight": 30, "water": 10},
            {"level": 3, "sunlight": 50, "water": 20},
        ],
        "carrot": [
            {"level": 1, "sunlight": 0, "water": 0,
             "neighbors": {"requiredNeighbors": {"potato": 1}}},
            {"level": 2, "sunlight": 40, "water": 15},
            {"level": 3, "sunlight": 60, "water": 25},
        ],
        "cabbage": [
            {"level": 2, "sunlight": 50, "water": 30},
            {"level": 3, "sunlight": 70, "water": 40,
             "neighbors": {"requiredNeighbors": {"cabbage": 1}}},
        ],
    }
}

class PlantBuilder:
    """Accumulates growth stages for one plant type."""
    def __init__(self):
        self._stages: Dict[int, Dict[str, Any]] = {}

    def growth_stage(self, level: int, sunlight: int, water: int) -> "PlantBuilder":
        stage = self._stages.setdefault(level, {"sunlight": 0, "water": 0, "neighbors": None})
        stage["sunlight"] = sunlight
        stage["water"] = water
        return self

    def neighbors_condition(self, level: int, required: Dict[PlantType, int]) -> "PlantBuilder":
        stage = self._stages.setdefault(level, {"sunlight": 0, "water": 0, "neighbors": None})
        stage["neighbors"] = dict(required)
        return self

    def build(self) -> GrowthMap:
        return {level: GrowthCondition(**stage) for level, stage in self._stages.items()}

class PlantRuleSet:
    """Read-only lookup of growth conditions per (plant type, target level)."""
    def __init__(self):
        self._definitions: Dict[PlantType, GrowthMap] = {crop: {} for crop in CROPS}

    def define(self, plant_type: PlantType, definition: Callable[[PlantBuilder], None]) -> "PlantRuleSet":
        builder = PlantBuilder()
        definition(builder)
        self._definitions[plant_type] = builder.build()
        return self

    def lookup(self, plant_type: PlantType, level: int) -> Optional[GrowthCondition]:
        return self._definitions.get(plant_type, {}).get(level)

    @classmethod
    def defaults(cls) -> "PlantRuleSet":
        return cls.from_document(DEFAULT_PLANT_DOCUMENT)

    @classmethod
    def from_document(cls, document: Optional[Dict[str, Any]]) -> "PlantRuleSet":
        """
        Build from {"plants": {crop: [{level, sunlight, water, neighbors?}]}}.
        Bad entries are logged and skipped; a missing document yields defaults.
        """
        if document is None:
            Logger.warning("No plant rules document, using built-in plant rules")
            return cls.from_document(DEFAULT_PLANT_DOCUMENT)

        plants = document.get("plants")
        if not isinstance(plants, dict):
            Logger.warning("Plant rules document has no 'plants' mapping, using built-in plant rules")
            return cls.from_document(DEFAULT_PLANT_DOCUMENT)

        rules = cls()
        for crop_name, entries in plants.items():
            try:
                plant_type = PlantType.from_name(crop_name)
            except ValueError:
                Logger.warning(f"Unknown plant type in plant rules: {crop_name}")
                continue
            if not isinstance(entries, list):
                Logger.warning(f"Plant rules for {crop_name} must be a list")
                continue
            rules.define(plant_type, lambda b, entries=entries, crop=crop_name: _apply_entries(b, crop, entries))
        return rules

def _apply_entries(builder: PlantBuilder, crop_name: str, entries: list):
    for entry in entries:
        try:
            level = int(entry["level"])
            sunlight = int(entry["sunlight"])
            water = int(entry["water"])
        except (KeyError, TypeError, ValueError):
            Logger.warning(f"Skipping malformed {crop_name} stage: {entry!r}")
            continue
        if not MIN_LEVEL <= level <= MAX_LEVEL:
            Logger.warning(f"Skipping {crop_name} stage with level {level}")
            continue
        builder.growth_stage(level, sunlight, water)

        neighbors = entry.get("neighbors")
        if not isinstance(neighbors, dict) or not neighbors.get("requiredNeighbors"):
            continue
        required_neighbors = neighbors["requiredNeighbors"]
        if not isinstance(required_neighbors, dict):
            Logger.warning(f"Ignoring {crop_name} level {level} requiredNeighbors, expected an object: {required_neighbors!r}")
            continue
        required: Dict[PlantType, int] = {}
        for neighbor_name, count in required_neighbors.items():
            try:
                required[PlantType.from_name(neighbor_name)] = int(count)
            except (TypeError, ValueError):
                Logger.log(LogCategory.CONFIG, f"WARNING: Unknown plant type in neighbors: {neighbor_name}")
        builder.neighbors_condition(level, required)
