import json
import os

import pytest

from farmstead.components.data_components import GameState
from farmstead.core import serialization
from farmstead.core.exceptions import CorruptSaveError, PersistenceError
from farmstead.core.save_store import JsonFileStore, MemoryStore, slot_key


def _state(**changes):
    fields = dict(day_count=3, inventory={"potato": 2, "carrot": 0, "cabbage": 5},
                  achievements=["cabbage master"], grid_data=bytes([40, 20, 1, 2, 100, 0, 0, 0]),
                  player_x=1, player_y=0, actions_remaining=7)
    fields.update(changes)
    return GameState(**fields)


def _payload(**state_changes):
    return json.loads(serialization.dumps(serialization.SaveData(_state(), [], [])))["currentState"] | state_changes


def test_dumps_and_loads_preserve_every_field():
    save = serialization.SaveData(_state(), [_state(day_count=1)], [_state(day_count=4, achievements=[])])
    loaded = serialization.loads(serialization.dumps(save), grid_size=8)
    assert loaded == save


def test_state_dict_uses_camel_case_keys():
    data = serialization.state_to_dict(_state())
    assert data["dayCount"] == 3
    assert data["gridData"] == [40, 20, 1, 2, 100, 0, 0, 0]
    assert data["playerX"] == 1
    assert data["actionsRemaining"] == 7


@pytest.mark.parametrize("changes", [
    {"dayCount": "3"},
    {"playerY": True},
    {"inventory": []},
    {"inventory": {"potato": -1}},
    {"achievements": "none"},
    {"achievements": [1]},
    {"gridData": [0] * 7},
    {"gridData": [0] * 7 + [256]},
    {"gridData": "AAAA"},
    {"gridData": [101, 0, 0, 0, 0, 0, 0, 0]},
    {"gridData": [0, 101, 0, 0, 0, 0, 0, 0]},
    {"gridData": [0, 0, 9, 1, 0, 0, 0, 0]},
    {"gridData": [0, 0, 0, 0, 0, 0, 0, 2]},
    {"gridData": [0, 0, 2, 0, 0, 0, 0, 0]},
    {"gridData": [0, 0, 3, 4, 0, 0, 0, 0]},
])
def test_invalid_state_fields_are_rejected(changes):
    with pytest.raises(CorruptSaveError):
        serialization.state_from_dict(_payload(**changes), grid_size=8)


def test_missing_field_is_rejected():
    data = _payload()
    del data["achievements"]
    with pytest.raises(CorruptSaveError):
        serialization.state_from_dict(data, grid_size=8)


def test_missing_inventory_crop_defaults_to_zero():
    state = serialization.state_from_dict(_payload(inventory={"potato": 4}), grid_size=8)
    assert state.inventory == {"potato": 4, "carrot": 0, "cabbage": 0}


@pytest.mark.parametrize("text", [
    "{",
    "42",
    json.dumps({"currentState": {}}),
    json.dumps({"currentState": {}, "undoStack": {}, "redoStack": []}),
])
def test_malformed_payloads_are_rejected(text):
    with pytest.raises(CorruptSaveError):
        serialization.loads(text, grid_size=8)


def test_memory_store_round_trip():
    store = MemoryStore()
    assert not store.exists("autoSave")
    store.write("autoSave", "{}")
    assert store.read("autoSave") == "{}"
    store.delete("autoSave")
    assert store.read("autoSave") is None


def test_json_file_store_writes_one_file_per_key(tmp_path):
    store = JsonFileStore(str(tmp_path / "saves"))
    assert store.read(slot_key(1)) is None
    store.write(slot_key(1), '{"a": 1}')
    assert os.path.exists(tmp_path / "saves" / "saveSlot1.json")
    assert not os.path.exists(tmp_path / "saves" / "saveSlot1.json.tmp")
    assert store.read(slot_key(1)) == '{"a": 1}'
    store.write(slot_key(1), '{"a": 2}')
    assert store.read(slot_key(1)) == '{"a": 2}'
    store.delete(slot_key(1))
    assert not store.exists(slot_key(1))


def test_json_file_store_rejects_path_like_keys(tmp_path):
    store = JsonFileStore(str(tmp_path))
    with pytest.raises(PersistenceError):
        store.write("../escape", "{}")
    with pytest.raises(PersistenceError):
        store.read("")


def test_json_file_store_exists_does_not_read_the_file(tmp_path):
    store = JsonFileStore(str(tmp_path))
    (tmp_path / "autoSave.json").write_bytes(b"\xff\xfe\x00garbage")
    assert store.exists("autoSave")
    with pytest.raises(PersistenceError):
        store.read("autoSave")
