from __future__ import annotations

from intfic.domain.state import SCORE_COUNTER, GameState


def test_new_state_defaults() -> None:
    state = GameState(name="Tester")
    assert state.position == ("", "")
    assert state.flags == {}
    assert state.counters == {SCORE_COUNTER: 0}
    assert state.get_flag("anything") is False
    assert state.get_counter("anything") == 0


def test_flags_last_write_wins() -> None:
    state = GameState(name="Tester")
    state.set_flag("door_open", True)
    state.set_flag("door_open", False)
    assert state.get_flag("door_open") is False


def test_counter_updates_are_additive() -> None:
    state = GameState(name="Tester")
    state.update_counter("gold", 7)
    state.update_counter("gold", -7)
    assert state.get_counter("gold") == 0
    state.add_score(15)
    state.add_score(-5)
    assert state.get_counter(SCORE_COUNTER) == 10


def test_set_progress_and_describe() -> None:
    state = GameState(name="Tester")
    state.set_progress("example_1.txt", "crossroads")
    state.set_flag("hid", True)
    assert state.position == ("example_1.txt", "crossroads")
    summary = state.describe()
    assert "Name: Tester" in summary
    assert "Story: example_1.txt, Block: crossroads" in summary
    assert "'hid': True" in summary
