"""Pytest configuration and shared fixtures."""

from datetime import date, timedelta

import pytest


def pytest_configure(config):
    """Configure pytest."""
    # Add custom markers
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "cp_sat: marks tests that run the OR-Tools CP-SAT engine"
    )


@pytest.fixture
def dates():
    """Five consecutive dates D0..D4 starting on Monday 2025-09-01."""
    start = date(2025, 9, 1)
    return [start + timedelta(days=i) for i in range(5)]
