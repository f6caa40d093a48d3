from __future__ import annotations

import json
from pathlib import Path

import pytest

from intfic.domain.state import GameState
from intfic.presentation.cli.save_store import SaveStore
from intfic.services.errors import SaveLoadError
from intfic.services.save_service import SaveService


def _sample_state() -> GameState:
    state = GameState(name="Interactive Fiction Title")
    state.set_progress("example_1.txt", "crossroads")
    state.set_flag("hid", True)
    state.set_flag("saved", False)
    state.add_score(50)
    state.update_counter("gold", -3)
    return state


def test_save_round_trip_through_json() -> None:
    service = SaveService()
    state = _sample_state()

    payload = json.loads(json.dumps(service.serialize(state)))
    restored = service.deserialize(payload)

    assert restored == state
    assert payload["save_version"] == SaveService.SAVE_VERSION
    assert payload["metadata"]["block"] == "crossroads"
    assert payload["metadata"]["saved_at"]


def test_unsupported_version_rejected() -> None:
    payload = SaveService().serialize(_sample_state())
    payload["save_version"] = 99
    with pytest.raises(SaveLoadError, match="Unsupported save version"):
        SaveService().deserialize(payload)


@pytest.mark.parametrize(
    ("key", "value", "message"),
    [
        ("flags", {"hid": "yes"}, "state.flags.hid must be a boolean"),
        ("counters", {"score": True}, "state.counters.score must be an integer"),
        ("counters", {"score": 1.5}, "state.counters.score must be an integer"),
        ("counters", [], "state.counters must be an object"),
        ("block", None, "state.block must be a string"),
    ],
)
def test_invalid_state_fields_rejected(key: str, value: object, message: str) -> None:
    payload = SaveService().serialize(_sample_state())
    payload["state"][key] = value
    with pytest.raises(SaveLoadError, match=message):
        SaveService().deserialize(payload)


def test_missing_state_section_rejected() -> None:
    with pytest.raises(SaveLoadError, match="missing required sections"):
        SaveService().deserialize({"save_version": SaveService.SAVE_VERSION})


def test_save_store_keeps_one_file_per_name(tmp_path: Path) -> None:
    store = SaveStore(tmp_path / "saves")
    payload = SaveService().serialize(_sample_state())

    assert not store.exists("Interactive Fiction Title")
    store.write("Interactive Fiction Title", payload)
    store.write("Interactive Fiction Title", payload)

    assert store.exists("Interactive Fiction Title")
    assert store.read("Interactive Fiction Title") == payload
    assert [path.name for path in (tmp_path / "saves").iterdir()] == ["Interactive Fiction Title.json"]

    store.delete("Interactive Fiction Title")
    store.delete("Interactive Fiction Title")
    assert not store.exists("Interactive Fiction Title")


def test_save_store_sanitizes_names(tmp_path: Path) -> None:
    store = SaveStore(tmp_path)
    store.write("../escape/attempt", {"save_version": 1})

    saved = list(tmp_path.iterdir())
    assert len(saved) == 1
    assert saved[0].parent == tmp_path
    assert store.exists("../escape/attempt")
