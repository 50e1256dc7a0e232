"""
Pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)


@pytest.fixture
def open_geometry():
    """Default box with an open diode gate of height 0.2 (aperture y in [0.4, 0.6])."""
    from maxwellsim.core import BoxStructure, DiodeFilter, Gate
    return BoxStructure.with_wall(Gate.from_height(DiodeFilter(), 0.2), wall_width=0.04)


@pytest.fixture
def closed_geometry():
    """Default box with the gate closed."""
    from maxwellsim.core import BoxStructure
    return BoxStructure()
