"""Drag and inline-text editing over the CTA preview.

Dragging and text editing share one visual element and exclude each other:
a drag cannot start while a field is being edited and a field cannot enter
edit mode while a drag is in progress. At most one field edits at a time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from cta_controller.controller.placement import PlacementEngine
from cta_controller.input_bindings import (
    ACTION_EDIT_CANCEL,
    ACTION_EDIT_CONFIRM,
    EditKeyBindings,
    PointerCapture,
    PointerEvent,
    PointerEventHub,
)
from cta_controller.services.cta_state import CtaStateService
from cta_payload.cta_model import EDITABLE_TEXT_FIELDS
from cta_payload.logging_utils import get_logger

_LOGGER = get_logger("Editor")

DRAG_IDLE = "idle"
DRAG_DRAGGING = "dragging"

Vector = Tuple[float, float]


@dataclass
class DragState:
    start_pointer: Vector
    initial_offset: Vector
    capture: PointerCapture


class EditSession:
    """State machine for drag-to-position and inline text edits on one CTA."""

    def __init__(
        self,
        state: CtaStateService,
        *,
        hub: PointerEventHub,
        placement: Optional[PlacementEngine] = None,
        key_bindings: Optional[EditKeyBindings] = None,
        container_size: Vector = (0.0, 0.0),
    ) -> None:
        self._state = state
        self._hub = hub
        self._placement = placement or PlacementEngine()
        self._keys = key_bindings or EditKeyBindings()
        self._container = container_size
        self._drag: Optional[DragState] = None
        self._editing: Optional[str] = None

    @property
    def state(self) -> CtaStateService:
        return self._state

    @property
    def editing_element(self) -> Optional[str]:
        return self._editing

    @property
    def drag_state(self) -> str:
        return DRAG_DRAGGING if self._drag is not None else DRAG_IDLE

    @property
    def is_dragging(self) -> bool:
        return self._drag is not None

    @property
    def container_size(self) -> Vector:
        return self._container

    def set_container_size(self, width: float, height: float) -> None:
        self._container = (float(width), float(height))

    def retarget(self, state: CtaStateService) -> None:
        """Point the session at another CTA, ending any drag or edit on the old one."""

        self.close()
        self._state = state

    def close(self) -> None:
        self._end_drag()
        self.finish_edit()

    # Drag ----------------------------------------------------------------
    def pointer_down(self, x: float, y: float, element_offset: Optional[Vector] = None) -> bool:
        """Start dragging from pointer ``(x, y)``. Returns False when the press is ignored."""

        if self._editing is not None or self._drag is not None:
            return False
        if element_offset is None:
            element_offset = self._current_offset()
        initial = (float(element_offset[0]), float(element_offset[1]))
        self._state.begin_custom_position(initial)
        capture = self._hub.capture(self._on_pointer_move, self._on_pointer_up)
        self._drag = DragState(start_pointer=(float(x), float(y)), initial_offset=initial, capture=capture)
        _LOGGER.debug("Drag started at (%.1f, %.1f) from offset (%.1f, %.1f)", x, y, initial[0], initial[1])
        return True

    def _current_offset(self) -> Vector:
        data = self._state.data
        if data.uses_custom_position:
            return data.custom_position.x, data.custom_position.y
        # A stale custom_position is ignored while the CTA sits on an anchor.
        point = self._placement.anchored_offset(data.position, self._container, data.scale)
        return point.x, point.y

    def _on_pointer_move(self, event: PointerEvent) -> None:
        drag = self._drag
        if drag is None:
            return
        try:
            element = self._placement.estimate_extent(self._state.data.scale)
            point = self._placement.resolve(
                drag.initial_offset,
                drag.start_pointer,
                (event.x, event.y),
                self._container,
                element,
            )
            self._state.set_custom_position(point.x, point.y)
        except Exception:
            self._end_drag()
            raise

    def _on_pointer_up(self, event: PointerEvent) -> None:
        self._end_drag()

    def cancel_drag(self) -> bool:
        return self._end_drag()

    def _end_drag(self) -> bool:
        drag = self._drag
        if drag is None:
            return False
        self._drag = None
        drag.capture.release()
        position = self._state.data.custom_position
        if position is not None:
            _LOGGER.debug("Drag ended at (%.1f, %.1f)", position.x, position.y)
        return True

    # Inline text ---------------------------------------------------------
    def start_edit(self, field: str) -> bool:
        if field not in EDITABLE_TEXT_FIELDS:
            raise ValueError(f"{field!r} is not an inline-editable field")
        if self._drag is not None:
            return False
        if self._editing == field:
            return True
        if self._editing is not None:
            self.finish_edit()
        self._editing = field
        return True

    def update_text(self, field: str, text: str) -> bool:
        """Commit one keystroke's worth of text straight into the model."""

        if self._editing is None or field != self._editing:
            return False
        self._state.set_text(field, text)
        return True

    def finish_edit(self) -> Optional[str]:
        field, self._editing = self._editing, None
        return field

    def blur(self) -> Optional[str]:
        return self.finish_edit()

    def handle_key(self, keysym: str) -> bool:
        """Confirm and cancel keys both end the edit; typed text is already committed."""

        if self._editing is None:
            return False
        action = self._keys.action_for(keysym)
        if action not in (ACTION_EDIT_CONFIRM, ACTION_EDIT_CANCEL):
            return False
        field = self.finish_edit()
        _LOGGER.debug("Inline edit of %s ended by %s", field, action)
        return True
