import numpy as np
from farmstead.core.system import System
from farmstead.core.config_manager import ConfigManager
from farmstead.world.grid import Grid, FIELD_SUNLIGHT, FIELD_WATER, MAX_SUNLIGHT, MAX_WATER

class WeatherSystem(System):
    """Daily weather: fresh sunlight everywhere, rain adds water up to the cap."""
    def __init__(self, grid: Grid, rng, config_manager: ConfigManager):
        self.grid = grid
        self.rng = rng
        self.config_manager = config_manager

    def update(self):
        shape = (self.grid.rows, self.grid.cols)
        sunlight_max = self.config_manager.get("weather.sunlight_max", MAX_SUNLIGHT)
        water_gain_max = self.config_manager.get("weather.water_gain_max", 30)
        water_cap = self.config_manager.get("water.max", MAX_WATER)

        sunlight = self.rng.integers(0, sunlight_max + 1, size=shape)
        rain = self.rng.integers(0, water_gain_max + 1, size=shape)

        water_layer = self.grid.layer(FIELD_WATER)
        new_water = np.minimum(water_layer.astype(np.int32) + rain, water_cap)
        self.grid.layer(FIELD_SUNLIGHT)[:, :] = sunlight
        water_layer[:, :] = new_water
