"""Shared pytest fixtures."""

import pytest


@pytest.fixture
def quiet_config(tmp_path):
    """Service configuration with reduced log noise and output under tmp_path."""
    return {
        'log_level': 'WARNING',
        'generation': {'radius': 2.0, 'n_points': 15, 'generations': 3},
        'graph': {'cutoff': 2.0},
        'output': {'path': str(tmp_path / 'structure'), 'format': 'jsonl'},
    }
