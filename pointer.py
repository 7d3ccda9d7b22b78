# pointer.py
"""
Tracks the single pointer that attracts particles and draws cursor links.
"""
import logging
from typing import Optional, Tuple


class PointerTracker:
    """
    Latest pointer position in surface-local coordinates, plus whether the
    pointer is currently over the surface.

    Positions are not clamped: an active pointer may sit outside the
    surface, and the distance-based forces fade out on their own.
    """
    def __init__(self):
        self.x: Optional[float] = None
        self.y: Optional[float] = None
        self.active = False

    @property
    def position(self) -> Optional[Tuple[float, float]]:
        """The pointer position while active, else None."""
        if not self.active or self.x is None or self.y is None:
            return None
        return self.x, self.y

    def on_move(self, client_x: float, client_y: float, origin: Tuple[float, float] = (0.0, 0.0)) -> None:
        """Records a move given in client coordinates and the surface's origin."""
        if not self.active:
            logging.debug("Pointer entered the surface.")
        self.x = client_x - origin[0]
        self.y = client_y - origin[1]
        self.active = True

    def on_leave(self) -> None:
        # Position is kept but ignored until the next move.
        if self.active:
            logging.debug("Pointer left the surface.")
        self.active = False
