"""Page-level pointer listeners and the key bindings used while editing CTA text."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional

from cta_payload.logging_utils import get_logger

LOGGER = get_logger("Editor")

POINTER_MOVE = "pointermove"
POINTER_UP = "pointerup"

ACTION_EDIT_CONFIRM = "edit_confirm"
ACTION_EDIT_CANCEL = "edit_cancel"

DEFAULT_EDIT_KEYS: Dict[str, List[str]] = {
    ACTION_EDIT_CONFIRM: ["<Return>", "<KP_Enter>"],
    ACTION_EDIT_CANCEL: ["<Escape>"],
}

PointerCallback = Callable[["PointerEvent"], None]


@dataclass(frozen=True)
class PointerEvent:
    x: float
    y: float
    target: Optional[str] = None


class PointerEventHub:
    """Document-level dispatcher: listeners see pointer events from anywhere on the page.

    Element-scoped handlers only see events over their element; a drag that is
    released elsewhere would never hear its pointer-up. Listeners registered
    here always do.
    """

    def __init__(self) -> None:
        self._listeners: Dict[str, List[PointerCallback]] = {}

    def add_listener(self, kind: str, callback: PointerCallback) -> None:
        self._listeners.setdefault(kind, []).append(callback)

    def remove_listener(self, kind: str, callback: PointerCallback) -> bool:
        callbacks = self._listeners.get(kind)
        if not callbacks or callback not in callbacks:
            return False
        callbacks.remove(callback)
        if not callbacks:
            del self._listeners[kind]
        return True

    def listener_count(self, kind: Optional[str] = None) -> int:
        if kind is not None:
            return len(self._listeners.get(kind, ()))
        return sum(len(callbacks) for callbacks in self._listeners.values())

    def dispatch(self, kind: str, event: PointerEvent) -> int:
        """Deliver ``event`` to every listener of ``kind`` in registration order."""

        callbacks = list(self._listeners.get(kind, ()))
        for callback in callbacks:
            callback(event)
        return len(callbacks)

    def capture(self, on_move: PointerCallback, on_up: PointerCallback) -> "PointerCapture":
        return PointerCapture(self, on_move, on_up)


class PointerCapture:
    """Move/up listeners held on the hub until :meth:`release`; also a context manager."""

    def __init__(self, hub: PointerEventHub, on_move: PointerCallback, on_up: PointerCallback) -> None:
        self._hub = hub
        self._on_move = on_move
        self._on_up = on_up
        hub.add_listener(POINTER_MOVE, on_move)
        hub.add_listener(POINTER_UP, on_up)
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def release(self) -> None:
        if not self._active:
            return
        self._active = False
        self._hub.remove_listener(POINTER_MOVE, self._on_move)
        self._hub.remove_listener(POINTER_UP, self._on_up)

    def __enter__(self) -> "PointerCapture":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


def _normalize_key(sequence: str) -> str:
    key = sequence.strip()
    if key.startswith("<") and key.endswith(">"):
        key = key[1:-1]
    if not key:
        raise ValueError("Key binding cannot be empty")
    return key.casefold()


@dataclass
class EditKeyBindings:
    """Keys that end an inline text edit, grouped by action."""

    actions: Dict[str, List[str]] = field(default_factory=lambda: {k: list(v) for k, v in DEFAULT_EDIT_KEYS.items()})
    source_path: Optional[Path] = None

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "EditKeyBindings":
        """Load bindings from JSON; a missing file yields the defaults."""

        if path is None or not path.exists():
            return cls()
        payload = json.loads(path.read_text(encoding="utf-8"))
        actions = {
            action: list(keys or [])
            for action, keys in (payload.get("edit_keys") or {}).items()
        }
        unknown = set(actions) - set(DEFAULT_EDIT_KEYS)
        if unknown:
            raise ValueError(f"Unknown edit key actions in {path}: {', '.join(sorted(unknown))}")
        merged = {k: list(v) for k, v in DEFAULT_EDIT_KEYS.items()}
        merged.update(actions)
        return cls(actions=merged, source_path=path)

    def action_for(self, keysym: str) -> Optional[str]:
        try:
            wanted = _normalize_key(keysym)
        except ValueError:
            return None
        for action, sequences in self.actions.items():
            for sequence in sequences:
                try:
                    if _normalize_key(sequence) == wanted:
                        return action
                except ValueError:
                    LOGGER.warning("Skipping invalid key binding for action '%s': '%s'", action, sequence)
        return None
