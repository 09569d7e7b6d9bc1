"""Mini README: Tests for the shared logging helpers.

Structure:
    * test_environment_labels_map_to_levels - development, test, production
      and unknown labels.
    * test_reconfiguring_adjusts_level_without_new_handler - repeated setup
      keeps a single handler.
"""

from __future__ import annotations

import logging

import pytest

from salondesk.logging_utils import configure_root_logger, get_logger, level_for_environment


@pytest.mark.parametrize(
    ("environment", "level"),
    [
        ("development", logging.DEBUG),
        ("test", logging.WARNING),
        (" Production ", logging.INFO),
        ("staging", logging.INFO),
    ],
)
def test_environment_labels_map_to_levels(environment: str, level: int) -> None:
    assert level_for_environment(environment) == level


def test_reconfiguring_adjusts_level_without_new_handler() -> None:
    get_logger(__name__)
    root_logger = logging.getLogger()
    original_level = root_logger.level
    handler_count = len(root_logger.handlers)
    try:
        configure_root_logger(logging.DEBUG)
        assert root_logger.level == logging.DEBUG
        configure_root_logger(logging.WARNING)
        assert root_logger.level == logging.WARNING
        assert len(root_logger.handlers) == handler_count
    finally:
        root_logger.setLevel(original_level)
