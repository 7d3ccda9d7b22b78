# simulation.py
"""
Handles the per-frame simulation logic of the particle network.

This module defines the Simulation class, the explicit context that owns
the particle field, the pointer, the viewport parameters and the theme
colors. External code talks to it only through its methods (resize,
step, trigger_ripple, set_theme_colors and the pointer notifications);
each call to step() advances the particles by one frame and returns the
draw commands for that frame.
"""
import logging
import numpy as np
from typing import List, Optional, Tuple
from numba import jit

from colors import ThemeColors, with_alpha
from constants import (
    ATTRACT_RADIUS, ATTRACT_STRENGTH, ATTRACT_GAIN, WRAP_MARGIN, MIN_DISTANCE,
    LINK_ALPHA, CURSOR_LINK_ALPHA, ALPHA_DECIMALS, LINK_WIDTH, CURSOR_LINK_WIDTH,
    RIPPLE_RADIUS, RIPPLE_STRENGTH
)
from drawing import ClearCommand, CircleCommand, LineCommand, DrawCommand
from impulse import apply_ripple
from particle import ParticleField
from pointer import PointerTracker
from viewport import ViewportParameters, compute_viewport

# --- Data Contracts ---
#
# class Simulation:
#   - __init__(self, width: float, height: float, pixel_ratio: float = 1.0,
#              colors: Optional[ThemeColors] = None, seed: Optional[int] = None):
#     - Side Effects: Computes the viewport and populates the particle field.
#
#   - step(self) -> List[DrawCommand]:
#     - Outputs: ClearCommand, then one CircleCommand per particle, then one
#       LineCommand per linked pair (i < j), then one per cursor link.
#     - Side Effects: Applies pointer attraction, integrates positions and
#       wraps them around the surface.
#     - Invariants: Particle count is unchanged. Immediately after a step,
#       every x is in [-10, width + 10] and every y in [-10, height + 10].
#       Links and circles are computed from the same post-integration
#       positions.


@jit(nopython=True)
def _find_links_numba(positions, max_distance):
    """
    Numba-jitted exhaustive search for particle pairs closer than
    max_distance.

    Every unordered pair (i < j) is checked. Returns the index arrays of
    the linked pairs and their distances, in (i, j) order.
    """
    particle_count = positions.shape[0]
    max_pairs = particle_count * (particle_count - 1) // 2
    first = np.empty(max_pairs, dtype=np.int64)
    second = np.empty(max_pairs, dtype=np.int64)
    distances = np.empty(max_pairs, dtype=np.float64)

    link_count = 0
    for i in range(particle_count):
        for j in range(i + 1, particle_count):
            dx = positions[i, 0] - positions[j, 0]
            dy = positions[i, 1] - positions[j, 1]
            distance = np.sqrt(dx * dx + dy * dy)
            # Strict comparison: a pair exactly at max_distance is not linked.
            if distance < max_distance:
                first[link_count] = i
                second[link_count] = j
                distances[link_count] = distance
                link_count += 1

    return first[:link_count], second[:link_count], distances[:link_count]


def find_links(positions: np.ndarray, max_distance: float) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Returns (first, second, distances) for all pairs closer than max_distance."""
    positions = np.ascontiguousarray(positions, dtype=np.float64).reshape(-1, 2)
    return _find_links_numba(positions, float(max_distance))


class Simulation:
    """
    The simulation context: particle state plus everything step() reads.
    """
    def __init__(
        self,
        width: float,
        height: float,
        pixel_ratio: float = 1.0,
        colors: Optional[ThemeColors] = None,
        seed: Optional[int] = None
    ):
        """
        Initializes the simulation for a surface of the given logical size.

        Args:
            width (float): Surface width in CSS pixels.
            height (float): Surface height in CSS pixels.
            pixel_ratio (float): Device pixel ratio of the surface.
            colors (Optional[ThemeColors]): Initial theme colors. Defaults
                are used when omitted.
            seed (Optional[int]): Seed for particle placement.
        """
        self.field = ParticleField(seed)
        self.pointer = PointerTracker()
        self.colors = colors if colors is not None else ThemeColors()
        self.viewport: Optional[ViewportParameters] = None
        self.resize(width, height, pixel_ratio)
        logging.info("Simulation context initialized.")

    # --- Notifications from the environment ---

    def resize(self, width: float, height: float, pixel_ratio: Optional[float] = None) -> ViewportParameters:
        """
        Recomputes the viewport and replaces every particle.

        Existing particles are discarded, not migrated. If pixel_ratio is
        None the current ratio is kept.
        """
        if pixel_ratio is None:
            pixel_ratio = self.viewport.pixel_ratio if self.viewport is not None else 1.0
        self.viewport = compute_viewport(width, height, pixel_ratio)
        self.field.initialize(self.viewport.particle_count, width, height)
        logging.info(
            f"Viewport resized to {width}x{height}: {self.viewport.particle_count} particles, "
            f"link distance {self.viewport.link_distance:.1f}px, "
            f"cursor link distance {self.viewport.cursor_link_distance:.1f}px."
        )
        return self.viewport

    def set_theme_colors(self, colors: ThemeColors) -> None:
        self.colors = colors
        logging.debug(f"Theme colors updated: {colors}")

    def pointer_moved(self, client_x: float, client_y: float, origin: Tuple[float, float] = (0.0, 0.0)) -> None:
        self.pointer.on_move(client_x, client_y, origin)

    def pointer_left(self) -> None:
        self.pointer.on_leave()

    def trigger_ripple(
        self,
        x: float,
        y: float,
        radius: float = RIPPLE_RADIUS,
        strength: float = RIPPLE_STRENGTH
    ) -> int:
        """
        Pushes particles near (x, y) outward. Safe to call between steps.

        Returns:
            int: Number of particles affected.
        """
        return apply_ripple(self.field, x, y, radius, strength)

    # --- Frame ---

    def _apply_attraction(self, pointer: Tuple[float, float]) -> None:
        """Nudges particles within ATTRACT_RADIUS toward the pointer."""
        delta = np.array(pointer, dtype=np.float64) - self.field.positions
        dist = np.hypot(delta[:, 0], delta[:, 1])
        near = dist < ATTRACT_RADIUS
        if not np.any(near):
            return
        pull = (1.0 - dist[near] / ATTRACT_RADIUS) * ATTRACT_STRENGTH
        direction = delta[near] / np.maximum(dist[near], MIN_DISTANCE)[:, np.newaxis]
        self.field.velocities[near] += direction * (pull * ATTRACT_GAIN)[:, np.newaxis]

    def _wrap(self) -> None:
        """Toroidal wrap with a WRAP_MARGIN buffer outside the surface."""
        pos = self.field.positions
        for axis, extent in ((0, self.viewport.width), (1, self.viewport.height)):
            coords = pos[:, axis]
            below = coords < -WRAP_MARGIN
            above = coords > extent + WRAP_MARGIN
            coords[below] = extent + WRAP_MARGIN
            coords[above] = -WRAP_MARGIN

    def step(self) -> List[DrawCommand]:
        """
        Executes one frame and returns its draw commands.
        """
        viewport = self.viewport
        commands: List[DrawCommand] = [ClearCommand(viewport.width, viewport.height)]
        if len(self.field) == 0:
            return commands

        pointer = self.pointer.position

        # 1. Pointer attraction (continuous, only while the pointer is active)
        if pointer is not None:
            self._apply_attraction(pointer)

        # 2. Integrate and wrap
        self.field.positions += self.field.velocities
        self._wrap()

        positions = self.field.positions
        points = positions.tolist()

        # 3. Nodes
        node_color = self.colors.node
        for (x, y), radius in zip(points, self.field.radii.tolist()):
            commands.append(CircleCommand(x, y, radius, node_color))

        # 4. Particle links, exhaustive over all i < j
        link_distance = viewport.link_distance
        first, second, distances = find_links(positions, link_distance)
        alphas = np.round(LINK_ALPHA * (1.0 - distances / link_distance), ALPHA_DECIMALS)
        for i, j, alpha in zip(first.tolist(), second.tolist(), alphas.tolist()):
            a, b = points[i], points[j]
            commands.append(LineCommand(
                a[0], a[1], b[0], b[1], with_alpha(self.colors.link, alpha), LINK_WIDTH
            ))

        # 5. Cursor links
        if pointer is not None:
            cursor_distance = viewport.cursor_link_distance
            px, py = pointer
            dist = np.hypot(positions[:, 0] - px, positions[:, 1] - py)
            for index in np.flatnonzero(dist < cursor_distance).tolist():
                alpha = round(CURSOR_LINK_ALPHA * (1.0 - float(dist[index]) / cursor_distance), ALPHA_DECIMALS)
                commands.append(LineCommand(
                    px, py, points[index][0], points[index][1],
                    with_alpha(self.colors.cursor, alpha), CURSOR_LINK_WIDTH
                ))

        return commands


def create_simulation(
    width: float,
    height: float,
    pixel_ratio: float = 1.0,
    colors: Optional[ThemeColors] = None,
    seed: Optional[int] = None
) -> Simulation:
    """Creates a simulation context for an initial viewport."""
    return Simulation(width, height, pixel_ratio=pixel_ratio, colors=colors, seed=seed)
