import os
import numpy as np
from typing import Dict, List, Optional, Tuple, Union
from farmstead.components.data_components import GameState, Inventory, PlantType, Tile, CROP_NAMES
from farmstead.core.config_manager import ConfigManager, load_document
from farmstead.core.game_state import FarmState
from farmstead.core.history_manager import HistoryManager
from farmstead.core.localization import Localization
from farmstead.core.save_store import SaveStore, JsonFileStore
from farmstead.core.time_manager import TimeManager, DEFAULT_ACTIONS_PER_DAY
from farmstead.systems.achievement_system import AchievementSystem
from farmstead.systems.action_system import ActionSystem
from farmstead.systems.growth_system import GrowthSystem
from farmstead.systems.weather_system import WeatherSystem
from farmstead.world.grid import Grid
from farmstead.world.plant_rules import PlantRuleSet
from farmstead.world.scene import apply_scene
from farmstead.utils.logger import Logger

DEFAULT_GRID_SIZE = 10

class FarmGame:
    """
    Headless farm: the one object a UI talks to.

    Mutating calls return True/False; reads go through the accessors and
    never hand out the live grid buffer.
    """
    def __init__(self, config_manager: Optional[ConfigManager] = None,
                 plant_rules: Optional[PlantRuleSet] = None,
                 store: Optional[SaveStore] = None,
                 rng=None,
                 localization: Optional[Localization] = None,
                 scene: Optional[dict] = None):
        self.config_manager = config_manager or ConfigManager()
        self.plant_rules = plant_rules or PlantRuleSet.defaults()
        self.localization = localization or Localization()
        self.rng = rng if rng is not None else np.random.default_rng()

        rows = self.config_manager.get("grid.rows", DEFAULT_GRID_SIZE)
        cols = self.config_manager.get("grid.cols", DEFAULT_GRID_SIZE)
        actions_per_day = self.config_manager.get("actions.per_day", DEFAULT_ACTIONS_PER_DAY)

        self.time_manager = TimeManager(start_day=1, actions_per_day=actions_per_day)
        Logger.set_time_manager(self.time_manager)

        initial_inventory = {name: self.config_manager.get(f"inventory.initial.{name}", 1) for name in CROP_NAMES}
        self.state = FarmState(Grid(rows, cols), self.time_manager, Inventory(items=initial_inventory))
        self.state.grid.randomize(self.rng)
        apply_scene(self.state, scene)

        self.growth_system = GrowthSystem(self.state.grid, self.plant_rules, self.localization)
        self.weather_system = WeatherSystem(self.state.grid, self.rng, self.config_manager)
        self.achievement_system = AchievementSystem(self.config_manager, self.localization)
        self.actions = ActionSystem(self.state, self.plant_rules, self.config_manager,
                                    self.growth_system, self.weather_system,
                                    self.achievement_system, self.localization)
        self.history = HistoryManager(self.state, store, self.localization)
        Logger.info(f"New farm: {rows}x{cols} tiles, day {self.time_manager.day}")

    @classmethod
    def from_config_dir(cls, config_dir: str, save_dir: Optional[str] = None, seed: Optional[int] = None,
                        watch: bool = False) -> "FarmGame":
        """Build a game from balance.json, plants.json and scene.json in config_dir."""
        config_manager = ConfigManager(os.path.join(config_dir, "balance.json"), watch=watch)
        plant_rules = PlantRuleSet.from_document(load_document(os.path.join(config_dir, "plants.json")))
        scene = load_document(os.path.join(config_dir, "scene.json"))

        messages_path = os.path.join(config_dir, "messages.json")
        localization = Localization.from_file(messages_path) if os.path.exists(messages_path) else Localization()

        store = JsonFileStore(save_dir) if save_dir else None
        return cls(config_manager=config_manager, plant_rules=plant_rules, store=store,
                   rng=np.random.default_rng(seed), localization=localization, scene=scene)

    # --- Player operations ---

    def plant(self, row: int, col: int, crop: Union[str, PlantType]) -> bool:
        return self.history.perform_action(lambda: self.actions.plant(row, col, crop))

    def harvest(self, row: int, col: int) -> bool:
        return self.history.perform_action(lambda: self.actions.harvest(row, col))

    def plant_here(self, crop: Union[str, PlantType]) -> bool:
        return self.history.perform_action(lambda: self.actions.plant_here(crop))

    def harvest_here(self) -> bool:
        return self.history.perform_action(self.actions.harvest_here)

    def advance_day(self) -> bool:
        return self.history.perform_action(self.actions.advance_day, count_as_action=False)

    def move_player(self, dx: int, dy: int) -> bool:
        return self.actions.move_player(dx, dy)

    def undo(self) -> bool:
        return self.history.undo()

    def redo(self) -> bool:
        return self.history.redo()

    def save_to_slot(self, slot) -> bool:
        return self.history.save_to_slot(slot)

    def load_from_slot(self, slot) -> bool:
        return self.history.load_from_slot(slot)

    def load_autosave(self) -> bool:
        return self.history.load_autosave()

    def has_autosave(self) -> bool:
        return self.history.has_autosave()

    # --- Read accessors ---

    @property
    def rows(self) -> int:
        return self.state.grid.rows

    @property
    def cols(self) -> int:
        return self.state.grid.cols

    def get_sunlight(self, row: int, col: int) -> int:
        return self.state.grid.get_sunlight(row, col)

    def get_water(self, row: int, col: int) -> int:
        return self.state.grid.get_water(row, col)

    def get_plant_type(self, row: int, col: int) -> PlantType:
        return self.state.grid.get_plant_type(row, col)

    def get_plant_level(self, row: int, col: int) -> int:
        return self.state.grid.get_plant_level(row, col)

    def tile(self, row: int, col: int) -> Tile:
        return self.state.grid.tile(row, col)

    @property
    def inventory(self) -> Dict[str, int]:
        return self.state.inventory.to_dict()

    @property
    def day_count(self) -> int:
        return self.time_manager.day

    @property
    def achievements(self) -> List[str]:
        return list(self.state.achievements)

    @property
    def actions_remaining(self) -> int:
        return self.time_manager.actions_remaining

    @property
    def player_pos(self) -> Tuple[int, int]:
        return self.state.player_x, self.state.player_y

    def active_tile(self) -> Optional[Tuple[int, int]]:
        return self.state.active_tile()

    def snapshot(self) -> GameState:
        return self.state.snapshot()

    def shutdown(self):
        self.config_manager.stop()
