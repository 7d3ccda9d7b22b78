# particle.py
"""
Manages the state of all particles in the network.

This module defines the ParticleField class, which owns particle data
(position, velocity, radius) in NumPy arrays. The whole collection is
replaced on every resize; particles are never created or removed one by
one.
"""
import logging
import numpy as np
from typing import Iterator, Optional

from constants import INITIAL_SPEED_MAX, PARTICLE_RADIUS_MIN, PARTICLE_RADIUS_MAX

# --- Data Contracts ---
#
# class ParticleField:
#   - __init__(self, seed: Optional[int] = None):
#     - Side Effects: Creates a dedicated RNG. The field starts empty and
#       uninitialized; positions/velocities/radii are None.
#
#   - initialize(self, count: int, width: float, height: float) -> None:
#     - Side Effects: Replaces all particle arrays.
#     - Invariants:
#       - self.positions is a NumPy array of shape (count, 2), float64,
#         uniform in [0, width) x [0, height).
#       - self.velocities is a NumPy array of shape (count, 2), float64,
#         uniform in [-0.2, 0.2] per axis.
#       - self.radii is a NumPy array of shape (count,), float64,
#         uniform in [1.15, 2.25].
#
#   - __iter__(self) -> Iterator[Particle]:
#     - Outputs: One mutable Particle reference per particle. Writes go
#       straight through to the field's arrays.


class Particle:
    """
    A reference to one particle of a ParticleField.

    Reads and writes go to the field's arrays, so a Particle stays valid
    only until the field is reinitialized.
    """
    __slots__ = ('_field', 'index')

    def __init__(self, field: "ParticleField", index: int):
        self._field = field
        self.index = index

    @property
    def x(self) -> float:
        return float(self._field.positions[self.index, 0])

    @x.setter
    def x(self, value: float):
        self._field.positions[self.index, 0] = value

    @property
    def y(self) -> float:
        return float(self._field.positions[self.index, 1])

    @y.setter
    def y(self, value: float):
        self._field.positions[self.index, 1] = value

    @property
    def vx(self) -> float:
        return float(self._field.velocities[self.index, 0])

    @vx.setter
    def vx(self, value: float):
        self._field.velocities[self.index, 0] = value

    @property
    def vy(self) -> float:
        return float(self._field.velocities[self.index, 1])

    @vy.setter
    def vy(self, value: float):
        self._field.velocities[self.index, 1] = value

    @property
    def r(self) -> float:
        return float(self._field.radii[self.index])

    def __repr__(self):
        return (
            f"Particle(x={self.x:.2f}, y={self.y:.2f}, "
            f"vx={self.vx:.3f}, vy={self.vy:.3f}, r={self.r:.2f})"
        )


class ParticleField:
    """
    A container for all particles, managing their state via NumPy arrays.
    """
    def __init__(self, seed: Optional[int] = None):
        """
        Creates an empty field.

        Args:
            seed (Optional[int]): Seed for the field's RNG. None draws fresh
                entropy from the OS.
        """
        # All randomness in the field comes from this one generator.
        self.rng = np.random.default_rng(seed)
        self.positions: Optional[np.ndarray] = None
        self.velocities: Optional[np.ndarray] = None
        self.radii: Optional[np.ndarray] = None

    @property
    def initialized(self) -> bool:
        return self.positions is not None

    def __len__(self) -> int:
        return 0 if self.positions is None else self.positions.shape[0]

    def __iter__(self) -> Iterator[Particle]:
        for i in range(len(self)):
            yield Particle(self, i)

    def __getitem__(self, index: int) -> Particle:
        if not -len(self) <= index < len(self):
            raise IndexError(f"Particle index {index} out of range.")
        return Particle(self, index % len(self))

    def initialize(self, count: int, width: float, height: float) -> None:
        """
        Replaces the particle collection with `count` fresh particles.

        Args:
            count (int): Number of particles to create.
            width (float): The width of the drawable surface.
            height (float): The height of the drawable surface.
        """
        count = max(0, int(count))
        self.positions = self.rng.uniform(
            low=[0, 0],
            high=[width, height],
            size=(count, 2)
        )
        self.velocities = self.rng.uniform(
            low=-INITIAL_SPEED_MAX,
            high=INITIAL_SPEED_MAX,
            size=(count, 2)
        )
        self.radii = self.rng.uniform(
            low=PARTICLE_RADIUS_MIN,
            high=PARTICLE_RADIUS_MAX,
            size=count
        )

        logging.info(f"ParticleField initialized with {count} particles for {width}x{height}.")
        logging.debug(
            f"Particle data arrays created. "
            f"Positions shape: {self.positions.shape}, "
            f"Velocities shape: {self.velocities.shape}, "
            f"Radii shape: {self.radii.shape}"
        )
