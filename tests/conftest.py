"""Pytest configuration and fixtures."""

import numpy as np
import pytest

from pokerodds.game.cards import parse_cards
from pokerodds.simulation.odds import OddsCalculator, OddsConfig


@pytest.fixture
def cards():
    """Parse card notation, e.g. cards('AsKh')."""
    return parse_cards


@pytest.fixture
def rng():
    """Seeded generator so sampled tests are repeatable."""
    return np.random.default_rng(20240601)


@pytest.fixture
def inline_calculator():
    """Calculator that runs every batch in the calling thread."""
    return OddsCalculator(OddsConfig(max_workers=1))


@pytest.fixture
def thread_calculator():
    """Calculator backed by a small thread pool."""
    return OddsCalculator(OddsConfig(max_workers=4, executor="thread"))
