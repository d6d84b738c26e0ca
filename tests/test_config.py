"""
Testing settings parsing (no real environment needed: load_settings takes a mapping).
"""

import logging
from dataclasses import fields

import pytest

from numbrainer.config import Settings, configure_logging, load_settings


def test_defaults():
    assert load_settings({}) == Settings()


def test_only_settings_the_app_reads():
    # timing -> GameEngine, history_limit -> /game/history, log_level -> configure_logging
    assert {f.name for f in fields(Settings)} == {"timing_enabled", "history_limit", "log_level"}


def test_values_from_env():
    settings = load_settings({
        "NUMBRAINER_TIMING": "off",
        "NUMBRAINER_HISTORY_LIMIT": "5",
        "LOG_LEVEL": "debug",
    })
    assert settings.timing_enabled is False
    assert settings.history_limit == 5
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("env", [
    {"NUMBRAINER_TIMING": "maybe"},
    {"NUMBRAINER_HISTORY_LIMIT": "ten"},
    {"NUMBRAINER_HISTORY_LIMIT": "0"},
    {"LOG_LEVEL": "LOUD"},
])
def test_bad_values_fail_fast(env):
    with pytest.raises(RuntimeError):
        load_settings(env)


@pytest.fixture
def restore_package_logger():
    """Put the numbrainer logger back the way the app configured it."""
    logger = logging.getLogger("numbrainer")
    level, handlers = logger.level, list(logger.handlers)
    yield
    logger.setLevel(level)
    logger.handlers[:] = handlers


def test_configure_logging_does_not_stack_handlers(restore_package_logger):
    configure_logging("INFO")
    logger = configure_logging("WARNING")
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING
