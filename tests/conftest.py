"""Shared pytest fixtures and markers for all tests."""

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def default_matrix():
    """Provide the published 3x3 penalty success-rate matrix."""
    from football_game_theory.football.penalty import DEFAULT_SUCCESS_RATES, GK_LABELS, KICK_LABELS
    from football_game_theory.models.matrices import PayoffMatrix
    return PayoffMatrix.from_rows(DEFAULT_SUCCESS_RATES, KICK_LABELS, GK_LABELS)


@pytest.fixture
def solver_config():
    """Provide a default solver configuration."""
    from football_game_theory.config import SolverConfig
    return SolverConfig()
