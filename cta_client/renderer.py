"""Pure mapping from a CTA configuration to the attributes used to draw it."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from PyQt6.QtGui import QColor

from cta_client.color_utils import css_color, css_from_qcolor, with_alpha_percent
from cta_payload.cta_model import (
    DEFAULT_BG_COLOR,
    DEFAULT_BTN_COLOR,
    DEFAULT_FONT_FAMILY,
    FIELD_BUTTON_TEXT,
    FIELD_MESSAGE,
    FONT_FAMILIES,
    POSITION_BOTTOM_BANNER,
    POSITION_BOTTOM_LEFT,
    POSITION_BOTTOM_RIGHT,
    POSITION_CUSTOM,
    THEME_DARK,
    CtaData,
)

MESSAGE_PLACEHOLDER = "Your message here..."
BUTTON_PLACEHOLDER = "Button"
EMPTY_BUTTON_HREF = "#"
LOGO_GLYPH_COLOR = "#1877f2"
SCALE_TRANSFORM_ORIGIN = "bottom"


@dataclass(frozen=True)
class AnchorRule:
    """Static CSS offsets (px) for a named position; ``None`` means ``auto``."""

    left: Optional[float] = None
    right: Optional[float] = None
    bottom: Optional[float] = None
    full_width: bool = False


ANCHOR_RULES: Dict[str, AnchorRule] = {
    POSITION_BOTTOM_LEFT: AnchorRule(left=20.0, bottom=20.0),
    POSITION_BOTTOM_RIGHT: AnchorRule(right=20.0, bottom=20.0),
    POSITION_BOTTOM_BANNER: AnchorRule(left=0.0, right=0.0, bottom=0.0, full_width=True),
}


@dataclass(frozen=True)
class ThemeStyle:
    text_color: str
    logo_filter: str
    border_color: str
    css_class: str


_THEME_LIGHT_STYLE = ThemeStyle(
    text_color="#1c1e21",
    logo_filter="",
    border_color=css_color("#dddfe2", "#dddfe2"),
    css_class="cta-light",
)
_THEME_DARK_STYLE = ThemeStyle(
    text_color="#ffffff",
    logo_filter="brightness(0) invert(1)",
    border_color=css_from_qcolor(with_alpha_percent(QColor(255, 255, 255), 20)),
    css_class="cta-dark",
)


def theme_style(theme: str) -> ThemeStyle:
    return _THEME_DARK_STYLE if theme == THEME_DARK else _THEME_LIGHT_STYLE


def anchor_rule(position: str) -> AnchorRule:
    """Anchor for a named position; anything else uses the bottom-left rule."""

    return ANCHOR_RULES.get(position, ANCHOR_RULES[POSITION_BOTTOM_LEFT])


def resolve_font_stack(font_family: str) -> str:
    """Accept either a family label ("Inter") or a full stack; blank means default."""

    token = (font_family or "").strip()
    if not token:
        return DEFAULT_FONT_FAMILY
    for label, stack in FONT_FAMILIES:
        if token == stack or token.lower() == label.lower():
            return stack
    return token


@dataclass(frozen=True)
class Placement:
    """Where the container sits: an anchor rule, or absolute ``left``/``top`` px."""

    css_class: str
    absolute: bool
    left: Optional[float] = None
    top: Optional[float] = None
    right: Optional[float] = None
    bottom: Optional[float] = None
    full_width: bool = False


@dataclass(frozen=True)
class CtaVisual:
    container_class: str
    placement: Placement
    background_color: str
    border_color: str
    font_family: str
    corner_radius: float
    scale: float
    transform_origin: str
    text_color: str
    avatar_src: Optional[str]
    logo_filter: str
    logo_color: str
    message: str
    message_font_size: float
    message_editing: bool
    button_text: str
    button_href: str
    button_color: str
    button_corner_radius: float
    button_font_size: float
    button_editing: bool
    editable: bool

    @property
    def shows_logo(self) -> bool:
        return self.avatar_src is None


def _placement(data: CtaData) -> Placement:
    css_class = f"cta-position-{data.position or POSITION_BOTTOM_LEFT}"
    if data.uses_custom_position:
        point = data.custom_position
        return Placement(css_class=css_class, absolute=True, left=point.x, top=point.y)
    rule = anchor_rule(data.position)
    if data.position == POSITION_CUSTOM:
        # Switched to custom but never moved: stay on the default anchor.
        css_class = f"cta-position-{POSITION_BOTTOM_LEFT}"
    return Placement(
        css_class=css_class,
        absolute=False,
        left=rule.left,
        right=rule.right,
        bottom=rule.bottom,
        full_width=rule.full_width,
    )


def render(data: CtaData, is_editable: bool = False, editing_element: Optional[str] = None) -> CtaVisual:
    """Describe how ``data`` is drawn. ``data`` is only read, never modified."""

    style = theme_style(data.theme)
    placement = _placement(data)
    avatar = data.profile_image_url.strip() if data.profile_image_url else ""
    editing = editing_element if is_editable else None
    return CtaVisual(
        container_class=f"cta-container {placement.css_class} {style.css_class}",
        placement=placement,
        background_color=css_color(data.bg_color, DEFAULT_BG_COLOR),
        border_color=style.border_color,
        font_family=resolve_font_stack(data.font_family),
        corner_radius=data.corner_radius,
        scale=data.scale,
        transform_origin=SCALE_TRANSFORM_ORIGIN,
        text_color=style.text_color,
        avatar_src=avatar or None,
        logo_filter=style.logo_filter,
        logo_color=LOGO_GLYPH_COLOR,
        message=data.message or MESSAGE_PLACEHOLDER,
        message_font_size=data.font_size,
        message_editing=editing == FIELD_MESSAGE,
        button_text=data.button_text or BUTTON_PLACEHOLDER,
        button_href=data.button_url or EMPTY_BUTTON_HREF,
        button_color=css_color(data.btn_color, DEFAULT_BTN_COLOR),
        button_corner_radius=data.corner_radius,
        button_font_size=data.font_size,
        button_editing=editing == FIELD_BUTTON_TEXT,
        editable=bool(is_editable),
    )
