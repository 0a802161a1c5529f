import numpy as np
import pytest

from farmstead.core.config_manager import ConfigManager
from farmstead.core.game import FarmGame
from farmstead.core.save_store import MemoryStore
from farmstead.world.plant_rules import PlantRuleSet


class FixedRng:
    """
    Stand-in for numpy's Generator. Sunlight and water/rain are drawn in
    pairs, sunlight first, so calls alternate between the two constants.
    """

    def __init__(self, sunlight=50, rain=0):
        self.sunlight = sunlight
        self.rain = rain
        self.calls = []

    def integers(self, low, high, size=None):
        value = self.rain if len(self.calls) % 2 else self.sunlight
        self.calls.append((low, high, size))
        return np.full(size, min(max(value, low), high - 1), dtype=np.int64)


@pytest.fixture()
def make_game():
    def _make(rows=10, cols=10, sunlight=50, water=25, rng=None, overrides=None,
              plant_rules=None, store=None, scene=None):
        config = ConfigManager(overrides={"grid.rows": rows, "grid.cols": cols, **(overrides or {})})
        game = FarmGame(
            config_manager=config,
            plant_rules=plant_rules or PlantRuleSet.defaults(),
            store=store if store is not None else MemoryStore(),
            rng=rng or FixedRng(),
            scene=scene,
        )
        game.state.grid.fill(sunlight, water)
        return game
    return _make


@pytest.fixture()
def game(make_game):
    return make_game()
