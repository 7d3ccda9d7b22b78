"""Tests for the particle field."""

import numpy as np
import pytest

from particle import Particle, ParticleField


class TestInitialize:
    def test_starts_uninitialized(self):
        field = ParticleField(seed=1)
        assert not field.initialized
        assert len(field) == 0
        assert list(field) == []

    def test_count_and_shapes(self):
        field = ParticleField(seed=1)
        field.initialize(200, 800, 600)
        assert field.initialized
        assert len(field) == 200
        assert field.positions.shape == (200, 2)
        assert field.velocities.shape == (200, 2)
        assert field.radii.shape == (200,)

    def test_value_ranges(self):
        field = ParticleField(seed=7)
        field.initialize(2000, 300, 100)
        x, y = field.positions[:, 0], field.positions[:, 1]
        assert np.all((x >= 0) & (x < 300))
        assert np.all((y >= 0) & (y < 100))
        assert np.all(np.abs(field.velocities) <= 0.2)
        assert np.all((field.radii >= 1.15) & (field.radii <= 2.25))

    def test_reinitialize_replaces_collection(self):
        field = ParticleField(seed=3)
        field.initialize(10, 100, 100)
        old_positions = field.positions
        field.initialize(4, 50, 50)
        assert len(field) == 4
        assert field.positions is not old_positions

    def test_same_seed_same_particles(self):
        a, b = ParticleField(seed=42), ParticleField(seed=42)
        a.initialize(30, 640, 480)
        b.initialize(30, 640, 480)
        np.testing.assert_array_equal(a.positions, b.positions)
        np.testing.assert_array_equal(a.velocities, b.velocities)

    def test_zero_count(self):
        field = ParticleField(seed=1)
        field.initialize(0, 10, 10)
        assert field.initialized
        assert len(field) == 0


class TestParticleReferences:
    def test_iteration_yields_every_particle(self):
        field = ParticleField(seed=1)
        field.initialize(5, 100, 100)
        particles = list(field)
        assert [p.index for p in particles] == [0, 1, 2, 3, 4]
        assert all(isinstance(p, Particle) for p in particles)

    def test_iteration_is_restartable(self):
        field = ParticleField(seed=1)
        field.initialize(3, 100, 100)
        assert len(list(field)) == len(list(field)) == 3

    def test_writes_go_through_to_the_field(self):
        field = ParticleField(seed=1)
        field.initialize(3, 100, 100)
        for p in field:
            p.vx = 1.0
            p.y = 5.0
        assert np.all(field.velocities[:, 0] == 1.0)
        assert np.all(field.positions[:, 1] == 5.0)

    def test_particles_are_independent(self):
        field = ParticleField(seed=1)
        field.initialize(2, 100, 100)
        field[1].x = 50.0
        field[0].x = 12.5
        assert field[0].x == 12.5
        assert field[1].x == 50.0

    def test_index_out_of_range(self):
        field = ParticleField(seed=1)
        field.initialize(2, 100, 100)
        with pytest.raises(IndexError):
            field[2]
        assert field[-1].index == 1
