# constants.py
"""
Application-level constants.

These values are static and do not change between runs. They define the
look and feel of the network background: particle density, link distance
limits, and the strength of the pointer and ripple forces. Anything meant
to be tweaked per deployment belongs in config.json instead.
"""

# --- Particle Field ---
# Particles per square (CSS) pixel of drawable surface.
PARTICLE_DENSITY = 0.00012
# Initial velocity components are drawn from [-MAX, MAX] on each axis.
INITIAL_SPEED_MAX = 0.2
PARTICLE_RADIUS_MIN = 1.15
PARTICLE_RADIUS_MAX = 2.25

# --- Links ---
# Link distance scales with the surface diagonal and is clamped to a range.
LINK_DISTANCE_FACTOR = 0.06
LINK_DISTANCE_MIN = 80
LINK_DISTANCE_MAX = 140
CURSOR_LINK_RATIO = 0.9
LINK_ALPHA = 0.28
CURSOR_LINK_ALPHA = 0.35
# Link alphas are rounded so that repeated colors can be cached.
ALPHA_DECIMALS = 3
LINK_WIDTH = 1.0
CURSOR_LINK_WIDTH = 1.2

# --- Pointer Attraction ---
ATTRACT_RADIUS = 120
ATTRACT_STRENGTH = 0.6
ATTRACT_GAIN = 0.03

# --- Ripple ---
RIPPLE_RADIUS = 100
RIPPLE_STRENGTH = 1.5

# --- Boundaries ---
# Particles wrap to the opposite edge once they are this far outside.
WRAP_MARGIN = 10

# Distances are floored at this value when used as a divisor.
MIN_DISTANCE = 1.0

# --- Device Pixel Ratio ---
PIXEL_RATIO_MIN = 1.0
PIXEL_RATIO_MAX = 2.0

# --- Theme Colors ---
# Custom properties read from the active theme style.
NODE_COLOR_PROPERTY = "--net-node"
LINK_COLOR_PROPERTY = "--net-link"
CURSOR_COLOR_PROPERTY = "--net-cursor"
BACKGROUND_COLOR_PROPERTY = "--bg"

DEFAULT_NODE_COLOR = "rgba(255,255,255,0.55)"
DEFAULT_LINK_COLOR = "rgba(180,200,255,0.28)"
DEFAULT_CURSOR_COLOR = "rgba(130,200,255,0.40)"
DEFAULT_BACKGROUND_COLOR = (24, 24, 24) # Dark Gray

# --- Window ---
DEFAULT_WINDOW_SIZE = (1280, 720)
FPS = 60
WINDOW_TITLE = "Particle Network"
