# visualization.py
"""
Renders the network's draw commands using Pygame and feeds window events
back to the simulation.

Drawing happens on a backing surface that is `pixel_ratio` times larger
than the window; commands arrive in logical pixels and are scaled on the
way in, then the backing surface is scaled down onto the window. Window
events are translated into the simulation's notifications through the
handlers passed to the Visualizer.
"""
import logging
import pygame
from typing import Callable, Dict, Iterable, Mapping, Optional, Tuple

from colors import parse_rgba
from constants import (
    BACKGROUND_COLOR_PROPERTY, DEFAULT_BACKGROUND_COLOR, DEFAULT_NODE_COLOR,
    DEFAULT_WINDOW_SIZE, FPS, WINDOW_TITLE
)
from drawing import ClearCommand, CircleCommand, LineCommand, DrawCommand
from viewport import clamp_pixel_ratio

# --- Data Contracts ---
#
# class Visualizer:
#   - __init__(self, fullscreen: bool, window_size: Tuple[int, int],
#              pixel_ratio: float, fps: int, **handlers):
#     - Handlers (all optional):
#       - on_resize(width, height): window resized (logical pixels).
#       - on_pointer_move(x, y): pointer moved, window-local coordinates.
#       - on_pointer_leave(): pointer left the window.
#       - on_click(x, y): primary button pressed.
#       - on_toggle_theme(), on_cycle_accent(): theme keys (T / A).
#     - Side Effects: Initializes Pygame and creates the display surface.
#
#   - draw(self, commands: Iterable[DrawCommand]) -> bool:
#     - Outputs: False if the user has quit, True otherwise.
#     - Side Effects: Dispatches pending window events to the handlers,
#       then renders one frame and waits for the next tick.
#
#   - render(self, commands: Iterable[DrawCommand]) -> None:
#     - Side Effects: Executes the commands on the backing surface only.
#     - Invariants: Each run of consecutive commands of the same kind
#       (circles, or lines of one width) is drawn with its real alpha onto
#       a transparent layer, and the layer is alpha-blended over what is
#       already on the backing surface. Later primitives never replace
#       earlier ones.

Handler = Optional[Callable[..., None]]

# Bounds the cache of parsed RGBA colors.
_COLOR_CACHE_LIMIT = 4096


def _layer_key(command: DrawCommand):
    if isinstance(command, LineCommand):
        return LineCommand, command.width
    return type(command), None


class Visualizer:
    """
    Pygame window that executes draw commands on a DPR-scaled backing buffer.
    """
    def __init__(
        self,
        fullscreen: bool = False,
        window_size: Tuple[int, int] = DEFAULT_WINDOW_SIZE,
        pixel_ratio: float = 1.0,
        fps: int = FPS,
        on_resize: Handler = None,
        on_pointer_move: Handler = None,
        on_pointer_leave: Handler = None,
        on_click: Handler = None,
        on_toggle_theme: Handler = None,
        on_cycle_accent: Handler = None
    ):
        pygame.init()

        if fullscreen:
            display_info = pygame.display.Info()
            window_size = (display_info.current_w, display_info.current_h)
            self.screen = pygame.display.set_mode(window_size, pygame.FULLSCREEN)
        else:
            self.screen = pygame.display.set_mode(window_size, pygame.RESIZABLE)
        pygame.display.set_caption(WINDOW_TITLE)

        self.clock = pygame.time.Clock()
        self.fps = fps
        self.pixel_ratio = clamp_pixel_ratio(pixel_ratio)
        self.width, self.height = self.screen.get_size()
        self._create_surfaces()

        self.background = pygame.Color(*DEFAULT_BACKGROUND_COLOR)
        self._colors: Dict[str, pygame.Color] = {}
        self._bad_colors = set()

        self.on_resize = on_resize
        self.on_pointer_move = on_pointer_move
        self.on_pointer_leave = on_pointer_leave
        self.on_click = on_click
        self.on_toggle_theme = on_toggle_theme
        self.on_cycle_accent = on_cycle_accent

        logging.info(
            f"Visualizer initialized with Pygame display ({self.width}x{self.height}, "
            f"pixel ratio {self.pixel_ratio})."
        )

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def _create_surfaces(self) -> None:
        """(Re)creates the backing buffer and its transparent drawing layer."""
        backing_size = (
            max(1, int(self.width * self.pixel_ratio)),
            max(1, int(self.height * self.pixel_ratio))
        )
        self.backing = pygame.Surface(backing_size, 0, 32)
        # Translucent primitives are drawn here first, then blended onto
        # the backing surface.
        self.layer = pygame.Surface(backing_size, pygame.SRCALPHA)
        logging.debug(f"Backing buffer {backing_size[0]}x{backing_size[1]}.")

    # --- Colors ---

    def set_style(self, style: Mapping[str, str]) -> None:
        """Picks up the background color of a newly applied theme."""
        value = (style.get(BACKGROUND_COLOR_PROPERTY) or "").strip()
        background = pygame.Color(*DEFAULT_BACKGROUND_COLOR)
        if value:
            parsed = parse_rgba(value)
            if parsed is not None:
                background = pygame.Color(*parsed[:3])
            else:
                try:
                    background = pygame.Color(value)
                except ValueError:
                    logging.warning(f"Unrecognized background color '{value}'. Using default.")
        self.background = background

    def _resolve(self, color: str) -> pygame.Color:
        """Turns a color string into an RGBA pygame.Color with 8-bit alpha."""
        resolved = self._colors.get(color)
        if resolved is not None:
            return resolved

        parsed = parse_rgba(color)
        if parsed is None:
            if color not in self._bad_colors:
                self._bad_colors.add(color)
                logging.warning(f"Could not parse color '{color}'. Falling back to default.")
            parsed = parse_rgba(DEFAULT_NODE_COLOR)
        r, g, b, alpha = parsed
        resolved = pygame.Color(r, g, b, int(round(alpha * 255)))

        if len(self._colors) >= _COLOR_CACHE_LIMIT:
            self._colors.clear()
        self._colors[color] = resolved
        return resolved

    # --- Events ---

    def _handle_events(self) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received. Shutting down visualizer.")
                return False

            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    logging.info("ESC key pressed. Shutting down visualizer.")
                    return False
                if event.key == pygame.K_t and self.on_toggle_theme:
                    self.on_toggle_theme()
                elif event.key == pygame.K_a and self.on_cycle_accent:
                    self.on_cycle_accent()

            elif event.type == pygame.VIDEORESIZE:
                self.width, self.height = event.w, event.h
                self._create_surfaces()
                if self.on_resize:
                    self.on_resize(event.w, event.h)

            elif event.type == pygame.MOUSEMOTION:
                if self.on_pointer_move:
                    self.on_pointer_move(*event.pos)

            elif event.type == pygame.WINDOWLEAVE:
                if self.on_pointer_leave:
                    self.on_pointer_leave()

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if self.on_click:
                    self.on_click(*event.pos)
        return True

    # --- Drawing ---

    def _flush_layer(self, dirty: bool) -> None:
        if dirty:
            self.backing.blit(self.layer, (0, 0))
            self.layer.fill((0, 0, 0, 0))

    def render(self, commands: Iterable[DrawCommand]) -> None:
        """Executes one frame of draw commands on the backing surface."""
        scale = self.pixel_ratio
        layer = self.layer
        layer.fill((0, 0, 0, 0))
        current_key = None
        dirty = False

        for command in commands:
            if isinstance(command, ClearCommand):
                self._flush_layer(dirty)
                dirty = False
                self.backing.fill(self.background)
                current_key = None
                continue

            key = _layer_key(command)
            if key != current_key:
                self._flush_layer(dirty)
                dirty = False
                current_key = key

            if isinstance(command, CircleCommand):
                pygame.draw.circle(
                    layer,
                    self._resolve(command.color),
                    (command.x * scale, command.y * scale),
                    max(1.0, command.radius * scale)
                )
                dirty = True
            elif isinstance(command, LineCommand):
                pygame.draw.line(
                    layer,
                    self._resolve(command.color),
                    (command.x1 * scale, command.y1 * scale),
                    (command.x2 * scale, command.y2 * scale),
                    max(1, round(command.width * scale))
                )
                dirty = True

        self._flush_layer(dirty)

    def draw(self, commands: Iterable[DrawCommand]) -> bool:
        """
        Handles pending events, then renders one frame of draw commands.

        Returns:
            bool: False if the simulation should exit, True otherwise.
        """
        if not self._handle_events():
            return False

        self.render(commands)

        if self.backing.get_size() == self.screen.get_size():
            self.screen.blit(self.backing, (0, 0))
        else:
            self.screen.blit(pygame.transform.smoothscale(self.backing, self.screen.get_size()), (0, 0))

        pygame.display.flip()
        self.clock.tick(self.fps)
        return True

    def close(self):
        """Shuts down Pygame."""
        pygame.quit()
