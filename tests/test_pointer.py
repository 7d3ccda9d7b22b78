"""Tests for pointer tracking."""

from pointer import PointerTracker


def test_starts_inactive():
    pointer = PointerTracker()
    assert not pointer.active
    assert pointer.position is None


def test_move_subtracts_surface_origin():
    pointer = PointerTracker()
    pointer.on_move(150, 90, origin=(50, 40))
    assert pointer.active
    assert pointer.position == (100, 50)


def test_leave_keeps_position_but_deactivates():
    pointer = PointerTracker()
    pointer.on_move(10, 20)
    pointer.on_leave()
    assert not pointer.active
    assert (pointer.x, pointer.y) == (10, 20)
    assert pointer.position is None


def test_coordinates_are_not_clamped():
    pointer = PointerTracker()
    pointer.on_move(-30, 5000)
    assert pointer.position == (-30, 5000)
