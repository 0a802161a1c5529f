import numpy as np

from farmstead.components.data_components import PlantType
from farmstead.core.config_manager import ConfigManager
from farmstead.systems.growth_system import GrowthSystem
from farmstead.systems.weather_system import WeatherSystem
from farmstead.world.grid import Grid, FIELD_SUNLIGHT, FIELD_WATER
from farmstead.world.plant_rules import PlantRuleSet

from conftest import FixedRng


def _rules():
    return (PlantRuleSet()
            .define(PlantType.POTATO, lambda b: b.growth_stage(2, 30, 10).growth_stage(3, 50, 20))
            .define(PlantType.CABBAGE, lambda b: b.growth_stage(2, 0, 0)
                    .neighbors_condition(2, {PlantType.CABBAGE: 2})))


def _grid(sunlight=60, water=50):
    grid = Grid(4, 4)
    grid.fill(sunlight, water)
    return grid


def _put(grid, row, col, plant_type, level=1):
    grid.set_plant_type(row, col, plant_type)
    grid.set_plant_level(row, col, level)


def test_plant_grows_one_level_and_consumes_water():
    grid = _grid()
    _put(grid, 1, 1, PlantType.POTATO)
    assert GrowthSystem(grid, _rules()).update() == 1
    assert grid.get_plant_level(1, 1) == 2
    assert grid.get_water(1, 1) == 40
    assert grid.get_sunlight(1, 1) == 60


def test_only_one_level_per_update():
    grid = _grid(sunlight=100, water=100)
    _put(grid, 0, 0, PlantType.POTATO)
    system = GrowthSystem(grid, _rules())
    system.update()
    assert grid.get_plant_level(0, 0) == 2
    system.update()
    assert grid.get_plant_level(0, 0) == 3
    system.update()
    assert grid.get_plant_level(0, 0) == 3
    assert grid.get_water(0, 0) == 70


def test_insufficient_sunlight_or_water_leaves_tile_unchanged():
    grid = _grid(sunlight=29, water=50)
    _put(grid, 0, 0, PlantType.POTATO)
    grid.set_sunlight(3, 3, 90)
    grid.set_water(3, 3, 9)
    _put(grid, 3, 3, PlantType.POTATO)
    before = grid.clone_all()
    assert GrowthSystem(grid, _rules()).update() == 0
    assert grid.clone_all() == before


def test_missing_rule_means_terminal_level():
    grid = _grid()
    _put(grid, 2, 2, PlantType.CARROT)
    before = grid.clone_all()
    GrowthSystem(grid, _rules()).update()
    assert grid.clone_all() == before


def test_neighbor_requirement_blocks_growth_without_consuming_water():
    grid = _grid()
    _put(grid, 1, 1, PlantType.CABBAGE)
    _put(grid, 1, 2, PlantType.CABBAGE)
    GrowthSystem(grid, _rules()).update()
    assert grid.get_plant_level(1, 1) == 1
    assert grid.get_water(1, 1) == 50


def test_neighbor_requirement_counts_diagonals_and_ignores_levels():
    grid = _grid()
    _put(grid, 1, 1, PlantType.CABBAGE)
    _put(grid, 0, 0, PlantType.CABBAGE, level=3)
    _put(grid, 2, 2, PlantType.CABBAGE, level=3)
    GrowthSystem(grid, _rules()).update()
    assert grid.get_plant_level(1, 1) == 2


def test_invalid_level_is_skipped():
    grid = _grid()
    _put(grid, 0, 0, PlantType.POTATO, level=0)
    assert GrowthSystem(grid, _rules()).update() == 0
    assert grid.get_plant_level(0, 0) == 0


def test_weather_sets_sunlight_and_adds_capped_rain():
    grid = _grid(sunlight=10, water=90)
    grid.set_water(0, 0, 20)
    WeatherSystem(grid, FixedRng(sunlight=77, rain=30), ConfigManager()).update()
    assert (grid.layer(FIELD_SUNLIGHT) == 77).all()
    assert grid.get_water(0, 0) == 50
    assert grid.get_water(3, 3) == 100


def test_weather_applies_to_empty_and_planted_tiles_alike():
    grid = _grid(water=0)
    _put(grid, 1, 1, PlantType.POTATO)
    WeatherSystem(grid, FixedRng(sunlight=5, rain=7), ConfigManager()).update()
    assert (grid.layer(FIELD_WATER) == 7).all()


def test_weather_respects_configured_maxima():
    grid = _grid(water=10)
    rng = FixedRng(sunlight=80, rain=25)
    config = ConfigManager(overrides={"weather.sunlight_max": 20, "weather.water_gain_max": 40})
    WeatherSystem(grid, rng, config).update()
    assert (grid.layer(FIELD_SUNLIGHT) == 20).all()
    assert (grid.layer(FIELD_WATER) == 35).all()
    assert [high for _, high, _ in rng.calls] == [21, 41]


def test_weather_with_real_generator_stays_in_range():
    grid = _grid(water=95)
    WeatherSystem(grid, np.random.default_rng(3), ConfigManager()).update()
    assert grid.layer(FIELD_SUNLIGHT).max() <= 100
    assert grid.layer(FIELD_WATER).min() >= 95
    assert grid.layer(FIELD_WATER).max() <= 100
