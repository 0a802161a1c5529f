import numpy as np
from typing import Dict, Optional
from farmstead.core.system import System
from farmstead.core.localization import Localization
from farmstead.components.data_components import PlantType, MIN_LEVEL, MAX_LEVEL
from farmstead.world.grid import Grid, FIELD_PLANT_TYPE, FIELD_PLANT_LEVEL
from farmstead.world.plant_rules import PlantRuleSet
from farmstead.utils.logger import Logger, LogCategory

def unmet_neighbor(grid: Grid, row: int, col: int, required: Optional[Dict[PlantType, int]]) -> Optional[PlantType]:
    """First plant type whose required count among the 8 neighbors is not reached."""
    if not required:
        return None
    for plant_type, count in required.items():
        if grid.count_neighbors(row, col, plant_type) < count:
            return plant_type
    return None

class GrowthSystem(System):
    def __init__(self, grid: Grid, plant_rules: PlantRuleSet, localization: Optional[Localization] = None):
        self.grid = grid
        self.plant_rules = plant_rules
        self.localization = localization or Localization()

    def update(self) -> int:
        """Advance every occupied tile by at most one level. Returns how many grew."""
        grown = 0
        # argwhere walks in row-major order
        occupied = np.argwhere(self.grid.layer(FIELD_PLANT_TYPE) != PlantType.NONE)
        for row, col in occupied.tolist():
            if self._grow_tile(row, col):
                grown += 1
        if grown:
            Logger.log(LogCategory.GROWTH, f"{grown} plant(s) grew overnight")
        return grown

    def _grow_tile(self, row: int, col: int) -> bool:
        plant_type = self.grid.get_plant_type(row, col)
        level = self.grid.get(FIELD_PLANT_LEVEL, row, col)
        if level < MIN_LEVEL or level > MAX_LEVEL:
            return False

        next_level = level + 1
        condition = self.plant_rules.lookup(plant_type, next_level)
        if condition is None:
            return False

        missing = unmet_neighbor(self.grid, row, col, condition.neighbors)
        if missing is not None:
            Logger.debug(self.localization.translate(
                "plantCannotGrow", row=row, col=col, level=next_level, plant=missing.crop_name))
            return False

        water = self.grid.get_water(row, col)
        if self.grid.get_sunlight(row, col) >= condition.sunlight and water >= condition.water:
            self.grid.set_water(row, col, water - condition.water)
            self.grid.set_plant_level(row, col, next_level)
            Logger.debug(self.localization.translate(
                "plantGrew", type=plant_type.crop_name, row=row, col=col, level=next_level))
            return True
        return False
