from typing import Optional, Union
from farmstead.core.config_manager import ConfigManager
from farmstead.core.game_state import FarmState
from farmstead.core.localization import Localization
from farmstead.core.time_manager import DEFAULT_ACTIONS_PER_DAY
from farmstead.components.data_components import PlantType, MIN_LEVEL, MAX_LEVEL
from farmstead.systems.achievement_system import AchievementSystem
from farmstead.systems.growth_system import GrowthSystem, unmet_neighbor
from farmstead.systems.weather_system import WeatherSystem
from farmstead.world.plant_rules import PlantRuleSet
from farmstead.utils.logger import Logger

DEFAULT_WATER_COST = {"potato": 20, "carrot": 20, "cabbage": 70}
DEFAULT_HARVEST_YIELD = {1: 1, 2: 2, 3: 4}

class ActionSystem:
    """
    Player actions against the live FarmState. Every method returns True on
    success and False, with the state untouched, when a precondition fails.
    Action budgeting is applied by the HistoryManager around these calls.
    """
    def __init__(self, state: FarmState, plant_rules: PlantRuleSet, config_manager: ConfigManager,
                 growth_system: GrowthSystem, weather_system: WeatherSystem,
                 achievement_system: AchievementSystem, localization: Optional[Localization] = None):
        self.state = state
        self.plant_rules = plant_rules
        self.config_manager = config_manager
        self.growth_system = growth_system
        self.weather_system = weather_system
        self.achievement_system = achievement_system
        self.localization = localization or Localization()

    def _t(self, key: str, **variables) -> str:
        return self.localization.translate(key, **variables)

    def water_cost(self, crop: str) -> int:
        return self.config_manager.get(f"crops.{crop}.water_cost", DEFAULT_WATER_COST[crop])

    def harvest_yield(self, level: int) -> int:
        return self.config_manager.get(f"harvest.yield.{level}", DEFAULT_HARVEST_YIELD[level])

    def plant(self, row: int, col: int, crop: Union[str, PlantType]) -> bool:
        plant_type = crop if isinstance(crop, PlantType) else PlantType.from_name(crop)
        if plant_type == PlantType.NONE:
            raise ValueError("Cannot plant PlantType.NONE")
        name = plant_type.crop_name
        grid = self.state.grid

        if grid.get_plant_type(row, col) != PlantType.NONE:
            Logger.gameplay(self._t("tileOccupied", row=row, col=col))
            return False

        water = grid.get_water(row, col)
        cost = self.water_cost(name)
        if water < cost:
            Logger.gameplay(self._t("conditionsNotMet", type=name, row=row, col=col))
            return False

        if plant_type == PlantType.CARROT and self.config_manager.get("rules.carrot_adjacency", False):
            if not (grid.count_neighbors(row, col, PlantType.POTATO, diagonal=False)
                    or grid.count_neighbors(row, col, PlantType.CABBAGE, diagonal=False)):
                Logger.gameplay(self._t("carrotNeedsNeighbor"))
                return False

        condition = self.plant_rules.lookup(plant_type, MIN_LEVEL)
        if condition is not None:
            missing = unmet_neighbor(grid, row, col, condition.neighbors)
            if missing is not None:
                Logger.gameplay(self._t("insufficientNeighbors", type=name,
                                        count=condition.neighbors[missing], plant=missing.crop_name))
                return False

        if self.state.inventory.count(name) <= 0:
            Logger.gameplay(self._t("noInventory", type=name))
            return False

        grid.set_water(row, col, water - cost)
        self.state.inventory.remove(name)
        grid.set_plant_type(row, col, plant_type)
        grid.set_plant_level(row, col, MIN_LEVEL)
        Logger.gameplay(self._t("planted", type=name, row=row, col=col))
        return True

    def harvest(self, row: int, col: int) -> bool:
        grid = self.state.grid
        plant_type = grid.get_plant_type(row, col)
        level = grid.get_plant_level(row, col)
        if plant_type == PlantType.NONE:
            Logger.gameplay(self._t("noPlantToHarvest", row=row, col=col))
            return False
        if level < MIN_LEVEL or level > MAX_LEVEL:
            Logger.gameplay(self._t("invalidPlantLevel", row=row, col=col, level=level))
            return False

        name = plant_type.crop_name
        amount = self.harvest_yield(level)
        self.state.inventory.add(name, amount)
        grid.clear_plant(row, col)
        Logger.gameplay(self._t("harvested", amount=amount, type=name, row=row, col=col))
        self.achievement_system.evaluate(name, self.state.inventory, self.state.achievements)
        return True

    def plant_here(self, crop: Union[str, PlantType]) -> bool:
        tile = self.state.active_tile()
        if tile is None:
            Logger.gameplay(self._t("noActiveTile"))
            return False
        return self.plant(tile[0], tile[1], crop)

    def harvest_here(self) -> bool:
        tile = self.state.active_tile()
        if tile is None:
            Logger.gameplay(self._t("noActiveTile"))
            return False
        return self.harvest(tile[0], tile[1])

    def advance_day(self) -> bool:
        time_manager = self.state.time_manager
        time_manager.actions_per_day = self.config_manager.get("actions.per_day", DEFAULT_ACTIONS_PER_DAY)
        time_manager.next_day()
        Logger.gameplay(self._t("newDay", day=time_manager.day))
        self.growth_system.update()
        self.weather_system.update()
        return True

    def move_player(self, dx: int, dy: int) -> bool:
        """Step the player, clamped to the grid. Returns False if it did not move."""
        grid = self.state.grid
        new_x = min(max(self.state.player_x + dx, 0), grid.cols - 1)
        new_y = min(max(self.state.player_y + dy, 0), grid.rows - 1)
        if (new_x, new_y) == (self.state.player_x, self.state.player_y):
            return False
        self.state.player_x, self.state.player_y = new_x, new_y
        return True
