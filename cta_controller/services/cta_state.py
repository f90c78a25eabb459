"""Live CTA state owned by one editing context."""

from __future__ import annotations

import math
from typing import Any, Callable, Optional, Tuple

from cta_payload.cta_model import (
    EDITABLE_TEXT_FIELDS,
    POSITION_CHOICES,
    POSITION_CUSTOM,
    THEME_CHOICES,
    CtaData,
    CtaFieldError,
    CustomPosition,
)
from cta_payload.logging_utils import get_logger

_LOGGER = get_logger("Editor")

ChangeCallback = Callable[[str, CtaData], None]

_TEXT_FIELDS = ("message", "button_text", "button_url", "bg_color", "btn_color", "font_family")
_NUMERIC_FIELDS = ("font_size", "scale", "corner_radius")
FORM_FIELDS: Tuple[str, ...] = _TEXT_FIELDS + _NUMERIC_FIELDS + ("position", "theme", "profile_image_url")


class CtaStateService:
    """Holds the mutable CtaData and the named operations allowed to change it.

    Form bindings, the edit session and the placement engine all receive this
    object by reference; none of them reach into module-level state.
    """

    def __init__(self, data: Optional[CtaData] = None, *, on_change: Optional[ChangeCallback] = None) -> None:
        self._data = data if data is not None else CtaData()
        self._on_change = on_change
        self._revision = 0

    @property
    def data(self) -> CtaData:
        return self._data

    @property
    def revision(self) -> int:
        """Number of committed mutations; every drag move or keystroke adds one."""

        return self._revision

    def snapshot(self) -> CtaData:
        return self._data.copy()

    def _commit(self, reason: str) -> None:
        self._revision += 1
        if self._on_change is not None:
            self._on_change(reason, self._data)

    # Form bindings -------------------------------------------------------
    def update_field(self, name: str, value: Any) -> None:
        """Two-way binding entry point for the form widgets."""

        if name not in FORM_FIELDS:
            raise CtaFieldError(f"{name} is not an editable form field")
        if name in _TEXT_FIELDS:
            if not isinstance(value, str):
                raise CtaFieldError(f"{name} must be a string")
        elif name in _NUMERIC_FIELDS:
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise CtaFieldError(f"{name} must be a finite number")
        elif name == "position":
            if value not in POSITION_CHOICES:
                raise CtaFieldError("position must be one of: " + ", ".join(POSITION_CHOICES))
        elif name == "theme":
            if value not in THEME_CHOICES:
                raise CtaFieldError("theme must be one of: " + ", ".join(THEME_CHOICES))
        elif name == "profile_image_url":
            if value is not None and not isinstance(value, str):
                raise CtaFieldError("profile_image_url must be a string")
        setattr(self._data, name, value)
        self._commit(f"field:{name}")

    # Direct manipulation -------------------------------------------------
    def set_text(self, field: str, text: str) -> None:
        if field not in EDITABLE_TEXT_FIELDS:
            raise CtaFieldError(f"{field} is not an inline-editable field")
        setattr(self._data, field, text)
        self._commit(f"text:{field}")

    def begin_custom_position(self, offset: Tuple[float, float]) -> None:
        """Switch to free positioning at ``offset`` in one step."""

        self._data.position = POSITION_CUSTOM
        self._data.custom_position = CustomPosition(x=float(offset[0]), y=float(offset[1]))
        self._commit("position:custom")
        _LOGGER.debug("CTA switched to custom position at (%.1f, %.1f)", offset[0], offset[1])

    def set_custom_position(self, x: float, y: float) -> None:
        self._data.custom_position = CustomPosition(x=x, y=y)
        self._commit("position:move")

    def apply_suggestion(self, message: str, button_text: str) -> None:
        self._data.message = message
        self._data.button_text = button_text
        self._commit("suggestion")
