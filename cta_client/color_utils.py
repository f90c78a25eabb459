"""Helpers for turning free-form CTA colors into CSS values."""
from __future__ import annotations

from typing import Any

from PyQt6.QtGui import QColor


def parse_color(value: Any, fallback: str) -> QColor:
    """Return ``value`` as a QColor, or ``fallback`` when it is blank or not a color."""

    color = QColor()
    if isinstance(value, str) and value.strip():
        color = QColor(value.strip())
    if not color.isValid():
        color = QColor(fallback)
    return color


def css_from_qcolor(color: QColor) -> str:
    alpha = max(0, min(int(color.alpha()), 255))
    if alpha >= 255:
        return color.name()
    return f"rgba({color.red()}, {color.green()}, {color.blue()}, {round(alpha / 255.0, 2):g})"


def css_color(value: Any, fallback: str) -> str:
    return css_from_qcolor(parse_color(value, fallback))


def with_alpha_percent(color: QColor, percent: Any) -> QColor:
    """Copy ``color`` with its alpha replaced by ``percent`` (0-100, clamped)."""

    try:
        numeric = int(round(float(percent)))
    except (TypeError, ValueError):
        return QColor(color)
    numeric = max(0, min(numeric, 100))
    return QColor(color.red(), color.green(), color.blue(), int(round(255 * (numeric / 100.0))))
