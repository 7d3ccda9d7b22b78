"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from simulation import Simulation  # noqa: E402


def place_particles(sim, points, velocities=None, radius=1.5):
    """Replaces the simulation's particles with the given positions."""
    positions = np.array(points, dtype=np.float64).reshape(-1, 2)
    sim.field.positions = positions
    if velocities is None:
        sim.field.velocities = np.zeros_like(positions)
    else:
        sim.field.velocities = np.array(velocities, dtype=np.float64).reshape(-1, 2)
    sim.field.radii = np.full(positions.shape[0], radius)
    return sim


@pytest.fixture
def sim():
    """A seeded 800x600 simulation."""
    return Simulation(800, 600, seed=1234)


@pytest.fixture
def sample_config():
    """A themes section as it appears in config.json."""
    return {
        "default_theme": "dark",
        "modes": {
            "dark": {"--bg": "rgb(10, 10, 10)", "--net-node": "rgba(255,255,255,0.5)"},
            "light": {"--bg": "rgb(250, 250, 250)", "--net-node": "rgba(0,0,0,0.5)"},
        },
        "accents": {
            "purple": {"--net-link": "rgba(170,140,255,0.3)"},
            "teal": {"--net-link": "rgba(90,210,200,0.3)"},
        },
    }
