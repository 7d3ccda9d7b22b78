# impulse.py
"""
One-shot ripples injected into the particle field from outside the loop.

A ripple pushes every particle within `radius` of the origin outward,
strongest at the centre and fading to nothing at the edge. Unlike pointer
attraction it is applied once, at the moment it is triggered.
"""
import logging
import numpy as np

from constants import RIPPLE_RADIUS, RIPPLE_STRENGTH, MIN_DISTANCE
from particle import ParticleField


def apply_ripple(
    field: ParticleField,
    x: float,
    y: float,
    radius: float = RIPPLE_RADIUS,
    strength: float = RIPPLE_STRENGTH
) -> int:
    """
    Pushes nearby particles away from (x, y).

    For each particle closer than `radius`, with d = origin - position:
        pull = (1 - dist / radius) * strength
        velocity -= (d / max(dist, 1)) * pull

    Args:
        field (ParticleField): The field to perturb. An uninitialized field
            is left alone.
        x (float): Ripple origin, surface-local x.
        y (float): Ripple origin, surface-local y.
        radius (float): Reach of the ripple.
        strength (float): Velocity change at the origin.

    Returns:
        int: Number of particles affected.
    """
    if not field.initialized or len(field) == 0 or radius <= 0:
        return 0

    delta = np.array([x, y], dtype=np.float64) - field.positions
    dist = np.hypot(delta[:, 0], delta[:, 1])
    affected = dist < radius
    count = int(np.count_nonzero(affected))
    if count == 0:
        return 0

    pull = (1.0 - dist[affected] / radius) * strength
    direction = delta[affected] / np.maximum(dist[affected], MIN_DISTANCE)[:, np.newaxis]
    # Single vectorized write: every affected particle is fully updated at once.
    field.velocities[affected] -= direction * pull[:, np.newaxis]

    logging.debug(f"Ripple at ({x:.1f}, {y:.1f}) affected {count} particles.")
    return count
