"""Logger tree shared by the payload, viewer and editor packages."""
from __future__ import annotations

import logging
import os
from typing import Optional, Union

LOGGER_NAME = "LinkBrandyler"
LOG_TAG = LOGGER_NAME
DEV_MODE_ENV_VAR = "LINK_BRANDYLER_DEV_MODE"

LEVEL_NAME_MAP = {
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "TRACE": logging.DEBUG,
}


def _env_flag(name: str) -> Optional[bool]:
    raw = os.getenv(name)
    if raw is None:
        return None
    token = raw.strip().lower()
    if token in {"1", "true", "yes", "on"}:
        return True
    if token in {"0", "false", "no", "off"}:
        return False
    return None


def dev_mode_active(version: Optional[str] = None) -> bool:
    """Return True for dev builds; the environment variable wins over the version marker."""

    override = _env_flag(DEV_MODE_ENV_VAR)
    if override is not None:
        return override
    if version is None:
        from cta_payload import __version__ as version
    identifier = (version or "").strip().lower()
    if not identifier:
        return False
    if identifier.endswith("-dev") or ".dev" in identifier:
        return True
    return any(part == "dev" for part in identifier.replace(".", "-").split("-"))


def resolve_level(value: Union[int, str, None], default: int = logging.INFO) -> int:
    """Map a level name or number to a logging level, falling back to ``default``."""

    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value if value in LEVEL_NAME_MAP.values() else default
    if isinstance(value, str):
        return LEVEL_NAME_MAP.get(value.strip().upper(), default)
    return default


def get_logger(component: Optional[str] = None) -> logging.Logger:
    if not component:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{component}")


def configure_logger(level: Union[int, str, None] = None) -> logging.Logger:
    """Attach the tagged console handler once and set the effective level.

    Dev builds always log at DEBUG regardless of the requested level.
    """

    logger = logging.getLogger(LOGGER_NAME)
    effective = resolve_level(level)
    if dev_mode_active() and effective > logging.DEBUG:
        effective = logging.DEBUG
    logger.setLevel(effective)
    if not any(getattr(handler, "_brandyler_handler", False) for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler._brandyler_handler = True  # type: ignore[attr-defined]
        formatter = logging.Formatter(f"[%(asctime)s] [{LOG_TAG}] %(message)s", "%H:%M:%S")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.propagate = False
    return logger
