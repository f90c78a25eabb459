from __future__ import annotations

import logging

import pytest

from cta_payload import logging_utils


@pytest.fixture
def clean_logger():
    logger = logging.getLogger(logging_utils.LOGGER_NAME)
    saved = (list(logger.handlers), logger.level, logger.propagate)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handlers, level, propagate = saved
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate


def test_component_loggers_hang_off_the_package_logger():
    assert logging_utils.get_logger().name == "LinkBrandyler"
    assert logging_utils.get_logger("Codec").name == "LinkBrandyler.Codec"
    assert logging_utils.get_logger("Codec").parent is logging.getLogger("LinkBrandyler")


@pytest.mark.parametrize(
    "version, expected",
    [
        ("0.3.0", False),
        ("0.3.0-dev", True),
        ("1.0.dev2", True),
        ("dev", True),
        ("", False),
        ("developer-1.0", False),
    ],
)
def test_dev_mode_follows_version_marker(monkeypatch, version, expected):
    monkeypatch.delenv(logging_utils.DEV_MODE_ENV_VAR, raising=False)
    assert logging_utils.dev_mode_active(version) is expected


@pytest.mark.parametrize("flag, expected", [("1", True), ("yes", True), ("off", False), ("0", False)])
def test_dev_mode_environment_override_wins(monkeypatch, flag, expected):
    monkeypatch.setenv(logging_utils.DEV_MODE_ENV_VAR, flag)
    assert logging_utils.dev_mode_active("0.3.0-dev") is expected
    assert logging_utils.dev_mode_active("0.3.0") is expected


@pytest.mark.parametrize(
    "value, expected",
    [("debug", logging.DEBUG), ("WARN", logging.WARNING), (logging.ERROR, logging.ERROR), ("loud", logging.INFO), (True, logging.INFO), (None, logging.INFO)],
)
def test_resolve_level(value, expected):
    assert logging_utils.resolve_level(value) == expected


def test_configure_logger_attaches_one_tagged_handler(clean_logger, monkeypatch):
    monkeypatch.setenv(logging_utils.DEV_MODE_ENV_VAR, "0")

    logging_utils.configure_logger("WARNING")
    logging_utils.configure_logger("WARNING")

    tagged = [h for h in clean_logger.handlers if getattr(h, "_brandyler_handler", False)]
    assert len(tagged) == 1
    assert clean_logger.level == logging.WARNING
    assert clean_logger.propagate is False
    assert "[LinkBrandyler]" in tagged[0].formatter._fmt


def test_configure_logger_forces_debug_in_dev_mode(clean_logger, monkeypatch):
    monkeypatch.setenv(logging_utils.DEV_MODE_ENV_VAR, "1")

    logging_utils.configure_logger("ERROR")

    assert clean_logger.level == logging.DEBUG


def test_level_name_map_covers_every_resolvable_name():
    for name, level in logging_utils.LEVEL_NAME_MAP.items():
        assert logging_utils.resolve_level(name.lower()) == level
