"""Shared fixtures for settlement tests."""

import logging

import pytest

from sidegames.config import clear_config_cache
from sidegames.models import Player


@pytest.fixture
def make_card():
    """Build an 18-hole card: every hole at `default`, with per-hole overrides."""

    def _make(default=4, overrides=None):
        card = [default] * 18
        for hole, score in (overrides or {}).items():
            card[hole] = score
        return card

    return _make


@pytest.fixture
def two_players():
    return [Player('a', 'Alice', 90), Player('b', 'Bob', 90)]


@pytest.fixture
def three_players():
    return [Player('a', 'Alice', 90), Player('b', 'Bob', 90), Player('c', 'Cara', 85)]


@pytest.fixture
def four_players():
    return [
        Player('a', 'Alice', 90),
        Player('b', 'Bob', 90),
        Player('c', 'Cara', 85),
        Player('d', 'Dan', 80),
    ]


@pytest.fixture
def even_scores(make_card):
    """Every player in the four-ball shoots par on every hole."""
    return {pid: make_card() for pid in 'abcd'}


@pytest.fixture(autouse=True)
def fresh_config():
    """Make sure no test sees another test's cached settings."""
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers the CLI installs so later tests don't write to stale streams."""
    yield
    logger = logging.getLogger('sidegames')
    for handler in logger.handlers:
        handler.close()
    logger.handlers = []
    logger.setLevel(logging.NOTSET)
