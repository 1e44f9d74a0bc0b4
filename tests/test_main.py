"""Tests for startup configuration in main."""

import logging

import pytest

from main import log_level


@pytest.mark.parametrize(
    "name, expected",
    [
        (None, logging.INFO),
        ("debug", logging.DEBUG),
        ("WARNING", logging.WARNING),
        ("verbose", logging.INFO),
        ("basic_format", logging.INFO),
    ],
)
def test_log_level(name, expected):
    assert log_level(name) == expected
