"""Settings for link generation and drag placement."""
from __future__ import annotations

import json
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from cta_payload.logging_utils import LEVEL_NAME_MAP

DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parents[1] / "brandyler_settings.json"
SETTINGS_PATH_ENV_VAR = "LINK_BRANDYLER_SETTINGS"


@dataclass
class LinkSettings:
    """Values used when a settings file is missing or only partially valid."""

    base_url: str = "http://localhost:8000/"
    link_length_warning: int = 2000
    nominal_width: float = 300.0
    nominal_height: float = 60.0
    log_level: str = "INFO"


def _dimension(value: Any, fallback: float) -> float:
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(numeric) or numeric <= 0.0:
        return fallback
    return max(1.0, min(numeric, 4096.0))


def resolve_settings_path(settings_path: Optional[Path] = None) -> Path:
    if settings_path is not None:
        return Path(settings_path)
    override = os.environ.get(SETTINGS_PATH_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return DEFAULT_SETTINGS_PATH


def load_settings(settings_path: Optional[Path] = None) -> LinkSettings:
    """Read ``brandyler_settings.json``; every unreadable value keeps its default."""

    defaults = LinkSettings()
    path = resolve_settings_path(settings_path)
    try:
        raw = path.read_text(encoding="utf-8")
    except (FileNotFoundError, OSError):
        return defaults

    try:
        data: Dict[str, Any] = json.loads(raw)
    except json.JSONDecodeError:
        return defaults
    if not isinstance(data, dict):
        return defaults

    base_url = data.get("base_url", defaults.base_url)
    if not isinstance(base_url, str) or not base_url.strip():
        base_url = defaults.base_url
    # A base URL never carries its own fragment.
    base_url = base_url.strip().split("#", 1)[0] or defaults.base_url

    try:
        warning = int(data.get("link_length_warning", defaults.link_length_warning))
    except (TypeError, ValueError):
        warning = defaults.link_length_warning
    warning = max(0, warning)

    width = _dimension(data.get("nominal_width", defaults.nominal_width), defaults.nominal_width)
    height = _dimension(data.get("nominal_height", defaults.nominal_height), defaults.nominal_height)

    level = str(data.get("log_level", defaults.log_level) or defaults.log_level).strip().upper()
    if level not in LEVEL_NAME_MAP:
        level = defaults.log_level

    return LinkSettings(
        base_url=base_url,
        link_length_warning=warning,
        nominal_width=width,
        nominal_height=height,
        log_level=level,
    )
