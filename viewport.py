# viewport.py
"""
Derives the sizing parameters of the network from the drawable surface.

Everything that depends on the surface size (particle count and the two
link distances) is recomputed together on every resize, so the stepper
never sees a mix of old and new values.
"""
import logging
import math
from typing import NamedTuple, Optional

from constants import (
    PARTICLE_DENSITY, LINK_DISTANCE_FACTOR, LINK_DISTANCE_MIN,
    LINK_DISTANCE_MAX, CURSOR_LINK_RATIO, PIXEL_RATIO_MIN, PIXEL_RATIO_MAX
)

# --- Data Contracts ---
#
# compute_viewport(width: float, height: float, pixel_ratio: float) -> ViewportParameters:
#   - Inputs: logical (CSS pixel) size of the drawable surface and the
#     device pixel ratio reported by the environment.
#   - Outputs: ViewportParameters.
#   - Invariants:
#     - particle_count == floor(width * height * PARTICLE_DENSITY)
#     - LINK_DISTANCE_MIN <= link_distance <= LINK_DISTANCE_MAX
#     - cursor_link_distance == CURSOR_LINK_RATIO * link_distance
#     - PIXEL_RATIO_MIN <= pixel_ratio <= PIXEL_RATIO_MAX


class ViewportParameters(NamedTuple):
    width: float
    height: float
    link_distance: float
    cursor_link_distance: float
    particle_count: int
    pixel_ratio: float = 1.0

    @property
    def backing_size(self):
        """Size of the backing buffer in physical pixels."""
        return (
            int(math.floor(self.width * self.pixel_ratio)),
            int(math.floor(self.height * self.pixel_ratio))
        )


def clamp_pixel_ratio(pixel_ratio: Optional[float]) -> float:
    """Clamps a device pixel ratio to [1, 2]; a missing ratio counts as 1."""
    if not pixel_ratio:
        return PIXEL_RATIO_MIN
    return max(PIXEL_RATIO_MIN, min(PIXEL_RATIO_MAX, float(pixel_ratio)))


def compute_viewport(width: float, height: float, pixel_ratio: Optional[float] = 1.0) -> ViewportParameters:
    """
    Computes the viewport parameters for a surface of the given logical size.

    Args:
        width (float): Surface width in CSS pixels.
        height (float): Surface height in CSS pixels.
        pixel_ratio (float): Device pixel ratio, clamped to [1, 2].

    Raises:
        ValueError: If either dimension is negative.
    """
    if width < 0 or height < 0:
        msg = f"Viewport dimensions must be non-negative, got {width}x{height}."
        logging.critical(msg)
        raise ValueError(msg)

    particle_count = int(math.floor(width * height * PARTICLE_DENSITY))
    link_distance = max(
        LINK_DISTANCE_MIN,
        min(LINK_DISTANCE_MAX, math.hypot(width, height) * LINK_DISTANCE_FACTOR)
    )
    params = ViewportParameters(
        width=width,
        height=height,
        link_distance=float(link_distance),
        cursor_link_distance=link_distance * CURSOR_LINK_RATIO,
        particle_count=particle_count,
        pixel_ratio=clamp_pixel_ratio(pixel_ratio),
    )
    logging.debug(
        f"Viewport {width}x{height} @ {params.pixel_ratio}x: "
        f"{particle_count} particles, link distance {params.link_distance:.1f}px."
    )
    return params
