import json

import pytest

from farmstead.components.data_components import PlantType
from farmstead.core.config_manager import ConfigManager
from farmstead.core.game import FarmGame
from farmstead.core.save_store import MemoryStore, JsonFileStore, AUTOSAVE_KEY, slot_key

from conftest import FixedRng


def test_undo_then_redo_restores_exact_state(game):
    game.state.inventory.items["potato"] = 3
    game.plant(1, 1, "potato")
    after_plant = game.snapshot()

    assert game.undo()
    assert game.get_plant_type(1, 1) == PlantType.NONE
    assert game.inventory["potato"] == 3
    assert game.actions_remaining == 10

    assert game.redo()
    assert game.snapshot() == after_plant


def test_undo_redo_on_empty_stacks_are_noops(game):
    before = game.snapshot()
    assert not game.undo()
    assert not game.redo()
    assert game.snapshot() == before


def test_undo_reverts_a_day(make_game):
    game = make_game(rng=FixedRng(sunlight=90, rain=10))
    before = game.snapshot()
    game.advance_day()
    assert game.day_count == 2
    game.undo()
    assert game.snapshot() == before


def test_new_action_clears_redo_stack(game):
    game.state.inventory.items["potato"] = 3
    game.plant(0, 0, "potato")
    game.undo()
    assert game.history.can_redo
    game.plant(0, 1, "potato")
    assert not game.history.can_redo
    assert not game.redo()


def test_failed_action_restores_and_keeps_budget(game):
    before = game.snapshot()
    undo_depth = len(game.history.undo_stack)
    assert not game.history.perform_action(lambda: False)
    assert game.snapshot() == before
    assert len(game.history.undo_stack) == undo_depth
    assert game.actions_remaining == 10


def test_failed_action_rolls_back_partial_mutation(game):
    def half_done():
        game.state.grid.set_water(0, 0, 99)
        game.state.inventory.add("potato", 7)
        return False

    before = game.snapshot()
    assert not game.history.perform_action(half_done)
    assert game.snapshot() == before


def test_action_that_raises_is_rolled_back(game):
    def explode():
        game.state.grid.set_water(0, 0, 1)
        raise RuntimeError("boom")

    before = game.snapshot()
    with pytest.raises(RuntimeError):
        game.history.perform_action(explode)
    assert game.snapshot() == before
    assert not game.history.can_undo


def test_autosave_written_after_each_history_operation():
    store = MemoryStore()
    game = FarmGame(config_manager=ConfigManager(), store=store, rng=FixedRng())
    assert store.read(AUTOSAVE_KEY) is None
    game.advance_day()
    day_two = json.loads(store.read(AUTOSAVE_KEY))
    assert day_two["currentState"]["dayCount"] == 2
    assert len(day_two["undoStack"]) == 1

    game.undo()
    after_undo = json.loads(store.read(AUTOSAVE_KEY))
    assert after_undo["currentState"]["dayCount"] == 1
    assert len(after_undo["redoStack"]) == 1


def test_save_format_uses_plain_integer_grid(game):
    game.state.grid.set_water(0, 0, 42)
    assert game.save_to_slot(1)
    payload = json.loads(game.history.store.read(slot_key(1)))
    assert set(payload) == {"currentState", "undoStack", "redoStack"}
    state = payload["currentState"]
    assert set(state) == {"dayCount", "inventory", "achievements", "gridData",
                          "playerX", "playerY", "actionsRemaining"}
    assert state["inventory"] == {"potato": 1, "carrot": 1, "cabbage": 1}
    assert len(state["gridData"]) == 10 * 10 * 4
    assert state["gridData"][1] == 42
    assert all(isinstance(v, int) for v in state["gridData"])


def test_save_and_load_replace_state_and_stacks(game):
    game.state.inventory.items["potato"] = 4
    game.plant(0, 0, "potato")
    game.plant(0, 1, "potato")
    game.undo()
    saved = game.snapshot()
    undo_stack = list(game.history.undo_stack)
    redo_stack = list(game.history.redo_stack)
    assert game.save_to_slot("a")

    game.advance_day()
    game.harvest(0, 0)
    assert game.load_from_slot("a")
    assert game.snapshot() == saved
    assert game.history.undo_stack == undo_stack
    assert game.history.redo_stack == redo_stack

    assert game.redo()
    assert game.get_plant_type(0, 1) == PlantType.POTATO


def test_save_and_load_do_not_touch_budget_or_history(game):
    game.state.inventory.items["potato"] = 2
    game.plant(0, 0, "potato")
    game.undo()
    assert game.save_to_slot(3)
    assert game.actions_remaining == 10
    assert game.history.can_redo
    assert game.load_from_slot(3)
    assert game.actions_remaining == 10
    assert game.history.can_redo
    assert len(game.history.undo_stack) == 0


def test_load_from_missing_slot_leaves_state(game):
    before = game.snapshot()
    assert not game.load_from_slot(9)
    assert game.snapshot() == before


@pytest.mark.parametrize("payload", [
    "not json",
    "[]",
    json.dumps({"currentState": {}, "undoStack": [], "redoStack": []}),
])
def test_load_corrupt_slot_leaves_state(game, payload):
    game.history.store.write(slot_key(2), payload)
    game.state.inventory.items["potato"] = 2
    game.plant(0, 0, "potato")
    before = game.snapshot()
    undo_stack = list(game.history.undo_stack)
    assert not game.load_from_slot(2)
    assert game.snapshot() == before
    assert game.history.undo_stack == undo_stack


@pytest.mark.parametrize("index,value", [
    (2, 9),    # plant type outside the enum
    (7, 2),    # level on an empty tile
    (0, 150),  # sunlight above 100
    (1, 101),  # water above 100
])
def test_load_rejects_impossible_tile_values(game, index, value):
    assert game.save_to_slot(1)
    payload = json.loads(game.history.store.read(slot_key(1)))
    payload["currentState"]["gridData"][index] = value
    game.history.store.write(slot_key(1), json.dumps(payload))

    before = game.snapshot()
    assert not game.load_from_slot(1)
    assert game.snapshot() == before
    assert game.advance_day()


def test_load_rejects_grid_of_wrong_size(game, make_game):
    other = make_game(rows=4, cols=4, store=game.history.store)
    assert other.save_to_slot(1)
    before = game.snapshot()
    assert not game.load_from_slot(1)
    assert game.snapshot() == before


def test_resume_from_autosave_on_disk(tmp_path, make_game):
    store = JsonFileStore(str(tmp_path))
    game = make_game(store=store)
    game.plant(0, 0, "potato")
    game.advance_day()
    expected = game.snapshot()

    resumed = make_game(store=JsonFileStore(str(tmp_path)))
    assert resumed.has_autosave()
    assert resumed.load_autosave()
    assert resumed.snapshot() == expected
    assert len(resumed.history.undo_stack) == 2
    assert resumed.undo()
    assert resumed.day_count == 1
