"""Mini README: Tests for the shared logging helpers."""

from __future__ import annotations

import logging

import pytest

from uavplanner.logging_utils import configure_root_logger, get_logger


@pytest.fixture()
def restore_root_level():
    root_logger = logging.getLogger()
    level = root_logger.level
    yield root_logger
    root_logger.setLevel(level)


def test_handler_is_installed_once(restore_root_level) -> None:
    handler = configure_root_logger()
    get_logger("uavplanner.tests")
    assert configure_root_logger() is handler
    assert restore_root_level.handlers.count(handler) == 1


def test_level_names_and_numbers_are_accepted(restore_root_level) -> None:
    configure_root_logger("debug")
    assert restore_root_level.level == logging.DEBUG
    configure_root_logger(logging.WARNING)
    assert restore_root_level.level == logging.WARNING
    configure_root_logger()
    assert restore_root_level.level == logging.WARNING


def test_unknown_level_is_rejected(restore_root_level) -> None:
    with pytest.raises(ValueError):
        configure_root_logger("chatty")
