"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pytost.equivalence import SampleSummary


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def erotic_hits():
    """Hit rate on erotic trials, 100 participants (one-sample reanalysis)."""
    return SampleSummary(mean=53.1, sd=15.6, n=100)


@pytest.fixture
def course_groups():
    """Outcome in the two course conditions (n = 57 and n = 60)."""
    return (
        SampleSummary(mean=75.2, sd=12.0, n=57),
        SampleSummary(mean=73.9, sd=13.0, n=60),
    )
