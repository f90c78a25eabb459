"""CTA configuration model and the single place its defaults are applied."""
from __future__ import annotations

import copy
import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

POSITION_BOTTOM_LEFT = "bottom-left"
POSITION_BOTTOM_RIGHT = "bottom-right"
POSITION_BOTTOM_BANNER = "bottom-banner"
POSITION_CUSTOM = "custom"
POSITION_CHOICES: Tuple[str, ...] = (
    POSITION_BOTTOM_LEFT,
    POSITION_BOTTOM_RIGHT,
    POSITION_BOTTOM_BANNER,
    POSITION_CUSTOM,
)
NAMED_POSITIONS: Tuple[str, ...] = POSITION_CHOICES[:3]

THEME_LIGHT = "light"
THEME_DARK = "dark"
THEME_CHOICES: Tuple[str, ...] = (THEME_LIGHT, THEME_DARK)

# (label, CSS font stack); the first entry is the default.
FONT_FAMILIES: Tuple[Tuple[str, str], ...] = (
    ("Inter", "'Inter', sans-serif"),
    ("Poppins", "'Poppins', sans-serif"),
    ("Roboto", "'Roboto', sans-serif"),
    ("Lora", "'Lora', serif"),
    ("Playfair Display", "'Playfair Display', serif"),
)

# Slider ranges used by the editing UI. The codec does not enforce them.
FONT_SIZE_RANGE = (10, 24)
SCALE_RANGE = (0.8, 1.5)
CORNER_RADIUS_RANGE = (0, 30)

DEFAULT_POSITION = POSITION_BOTTOM_LEFT
DEFAULT_THEME = THEME_LIGHT
DEFAULT_FONT_FAMILY = FONT_FAMILIES[0][1]
DEFAULT_FONT_SIZE = 14
DEFAULT_SCALE = 1
DEFAULT_CORNER_RADIUS = 8
DEFAULT_BG_COLOR = "#ffffff"
DEFAULT_BTN_COLOR = "#1877f2"

FIELD_MESSAGE = "message"
FIELD_BUTTON_TEXT = "button_text"
EDITABLE_TEXT_FIELDS: Tuple[str, ...] = (FIELD_MESSAGE, FIELD_BUTTON_TEXT)


class CtaFieldError(ValueError):
    """Raised when a serialised CTA entry does not match the declared shape."""


@dataclass
class CustomPosition:
    """Pixel offset of the CTA origin inside its container."""

    x: float
    y: float

    def to_payload(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass
class CtaData:
    """One CTA's content and visual configuration."""

    message: str = ""
    button_text: str = ""
    button_url: str = ""
    position: str = DEFAULT_POSITION
    theme: str = DEFAULT_THEME
    bg_color: str = DEFAULT_BG_COLOR
    btn_color: str = DEFAULT_BTN_COLOR
    profile_image_url: Optional[str] = None
    font_family: str = DEFAULT_FONT_FAMILY
    font_size: float = DEFAULT_FONT_SIZE
    scale: float = DEFAULT_SCALE
    corner_radius: float = DEFAULT_CORNER_RADIUS
    custom_position: Optional[CustomPosition] = None

    @property
    def uses_custom_position(self) -> bool:
        return self.position == POSITION_CUSTOM and self.custom_position is not None

    def copy(self) -> "CtaData":
        return copy.deepcopy(self)

    def to_payload(self) -> Dict[str, Any]:
        """Return the camelCase mapping used on the wire; absent optionals are omitted."""

        payload: Dict[str, Any] = {
            "message": self.message,
            "buttonText": self.button_text,
            "buttonUrl": self.button_url,
            "position": self.position,
            "theme": self.theme,
            "bgColor": self.bg_color,
            "btnColor": self.btn_color,
            "fontFamily": self.font_family,
            "fontSize": self.font_size,
            "scale": self.scale,
            "cornerRadius": self.corner_radius,
        }
        if self.profile_image_url is not None:
            payload["profileImageUrl"] = self.profile_image_url
        if self.custom_position is not None:
            payload["customPosition"] = self.custom_position.to_payload()
        return payload

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "CtaData":
        return complete_cta(payload)


def _require_text(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str):
        raise CtaFieldError(f"{key} must be a string")
    return value


def _optional_text(payload: Mapping[str, Any], key: str, default: Optional[str]) -> Optional[str]:
    value = payload.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise CtaFieldError(f"{key} must be a string")
    return value


def _choice(payload: Mapping[str, Any], key: str, choices: Tuple[str, ...], default: str) -> str:
    value = payload.get(key)
    if value is None:
        return default
    if not isinstance(value, str) or value not in choices:
        raise CtaFieldError(f"{key} must be one of: " + ", ".join(choices))
    return value


def _finite_number(value: Any, key: str) -> float:
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise CtaFieldError(f"{key} must be a number")
    if not math.isfinite(value):
        raise CtaFieldError(f"{key} must be a finite number")
    return value


def _number(payload: Mapping[str, Any], key: str, default: float) -> float:
    value = payload.get(key)
    if value is None:
        return default
    return _finite_number(value, key)


def _custom_position(value: Any) -> Optional[CustomPosition]:
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise CtaFieldError("customPosition must be an object with x and y")
    return CustomPosition(
        x=_finite_number(value.get("x"), "customPosition.x"),
        y=_finite_number(value.get("y"), "customPosition.y"),
    )


def complete_cta(payload: Mapping[str, Any]) -> CtaData:
    """Validate a wire mapping and fill every absent optional field with its default.

    Runs once when a link is loaded so downstream code can rely on a fully
    populated model. Unknown keys are ignored.
    """

    if not isinstance(payload, Mapping):
        raise CtaFieldError("CTA entry must be an object")
    return CtaData(
        message=_require_text(payload, "message"),
        button_text=_require_text(payload, "buttonText"),
        button_url=_require_text(payload, "buttonUrl"),
        position=_choice(payload, "position", POSITION_CHOICES, DEFAULT_POSITION),
        theme=_choice(payload, "theme", THEME_CHOICES, DEFAULT_THEME),
        bg_color=_optional_text(payload, "bgColor", DEFAULT_BG_COLOR),
        btn_color=_optional_text(payload, "btnColor", DEFAULT_BTN_COLOR),
        profile_image_url=_optional_text(payload, "profileImageUrl", None),
        font_family=_optional_text(payload, "fontFamily", DEFAULT_FONT_FAMILY),
        font_size=_number(payload, "fontSize", DEFAULT_FONT_SIZE),
        scale=_number(payload, "scale", DEFAULT_SCALE),
        corner_radius=_number(payload, "cornerRadius", DEFAULT_CORNER_RADIUS),
        custom_position=_custom_position(payload.get("customPosition")),
    )


def default_cta() -> CtaData:
    """Starting configuration of a new creation session."""

    return CtaData(
        message="Promote your brand with every link!",
        button_text="Learn more",
        button_url="",
        profile_image_url="",
    )


def default_variants() -> Tuple[CtaData, CtaData]:
    base = default_cta()
    variant_a = base.copy()
    variant_a.message = "Variant A: Attract new customers!"
    variant_b = base.copy()
    variant_b.message = "Variant B: Grow your sales!"
    variant_b.btn_color = "#f2184f"
    variant_b.position = POSITION_BOTTOM_RIGHT
    return variant_a, variant_b
