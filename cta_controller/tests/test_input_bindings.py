import json
from pathlib import Path

import pytest

from cta_controller.input_bindings import (
    ACTION_EDIT_CANCEL,
    ACTION_EDIT_CONFIRM,
    POINTER_MOVE,
    POINTER_UP,
    EditKeyBindings,
    PointerEvent,
    PointerEventHub,
)


def test_dispatch_reaches_listeners_in_order():
    hub = PointerEventHub()
    seen = []
    hub.add_listener(POINTER_MOVE, lambda event: seen.append(("first", event.x)))
    hub.add_listener(POINTER_MOVE, lambda event: seen.append(("second", event.x)))

    delivered = hub.dispatch(POINTER_MOVE, PointerEvent(5, 6))

    assert delivered == 2
    assert seen == [("first", 5), ("second", 5)]
    assert hub.dispatch(POINTER_UP, PointerEvent(0, 0)) == 0


def test_capture_registers_and_releases_both_listeners():
    hub = PointerEventHub()
    capture = hub.capture(lambda event: None, lambda event: None)

    assert capture.active
    assert hub.listener_count(POINTER_MOVE) == 1
    assert hub.listener_count(POINTER_UP) == 1

    capture.release()
    capture.release()

    assert not capture.active
    assert hub.listener_count() == 0


def test_capture_context_manager_releases_on_error():
    hub = PointerEventHub()

    with pytest.raises(RuntimeError):
        with hub.capture(lambda event: None, lambda event: None):
            raise RuntimeError("boom")

    assert hub.listener_count() == 0


def test_listener_may_release_itself_during_dispatch():
    hub = PointerEventHub()
    calls = []

    def on_up(event):
        calls.append(event)
        capture.release()

    capture = hub.capture(lambda event: None, on_up)
    hub.dispatch(POINTER_UP, PointerEvent(1, 1))
    hub.dispatch(POINTER_UP, PointerEvent(2, 2))

    assert len(calls) == 1


def test_remove_unknown_listener_reports_false():
    assert PointerEventHub().remove_listener(POINTER_MOVE, lambda event: None) is False


@pytest.mark.parametrize(
    "keysym, action",
    [
        ("Return", ACTION_EDIT_CONFIRM),
        ("<Return>", ACTION_EDIT_CONFIRM),
        ("kp_enter", ACTION_EDIT_CONFIRM),
        ("Escape", ACTION_EDIT_CANCEL),
        ("a", None),
        ("", None),
    ],
)
def test_default_edit_keys(keysym, action):
    assert EditKeyBindings().action_for(keysym) == action


def test_load_missing_file_returns_defaults(tmp_path: Path):
    bindings = EditKeyBindings.load(tmp_path / "absent.json")

    assert bindings.action_for("Escape") == ACTION_EDIT_CANCEL
    assert bindings.source_path is None


def test_load_overrides_individual_actions(tmp_path: Path):
    path = tmp_path / "edit_keys.json"
    path.write_text(json.dumps({"edit_keys": {ACTION_EDIT_CONFIRM: ["<Tab>"]}}), encoding="utf-8")

    bindings = EditKeyBindings.load(path)

    assert bindings.action_for("Tab") == ACTION_EDIT_CONFIRM
    assert bindings.action_for("Return") is None
    assert bindings.action_for("Escape") == ACTION_EDIT_CANCEL
    assert bindings.source_path == path


def test_load_rejects_unknown_actions(tmp_path: Path):
    path = tmp_path / "edit_keys.json"
    path.write_text(json.dumps({"edit_keys": {"launch_rocket": ["r"]}}), encoding="utf-8")

    with pytest.raises(ValueError):
        EditKeyBindings.load(path)
