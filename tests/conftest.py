"""
Pytest Configuration - Shared Fixtures

This file contains shared fixtures used across all test modules.
"""

import os
import sys

import numpy as np
import pytest

# Add the project root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))


@pytest.fixture
def fir_spec():
    """31-tap Hamming lowpass at 1 kHz / 48 kHz."""
    from filterlab.pipeline.config import FilterSpecification
    return FilterSpecification(
        domain='digital_fir',
        response_type='lowpass',
        window='hamming',
        cutoff_hz=1000.0,
        sample_rate_hz=48000.0,
        tap_count=31,
    )


@pytest.fixture
def analog_spec():
    """4th-order analog Butterworth lowpass at 1 kHz."""
    from filterlab.pipeline.config import FilterSpecification
    return FilterSpecification(
        domain='analog',
        response_type='lowpass',
        topology='butterworth',
        cutoff_hz=1000.0,
        order=4,
    )


@pytest.fixture
def rng():
    """Seeded noise generator."""
    return np.random.default_rng(1234)
