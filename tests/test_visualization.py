"""Tests for the Pygame renderer, using SDL's dummy drivers."""

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame  # noqa: E402
import pytest  # noqa: E402

from constants import DEFAULT_BACKGROUND_COLOR, DEFAULT_LINK_COLOR, DEFAULT_NODE_COLOR  # noqa: E402
from colors import with_alpha  # noqa: E402
from drawing import CircleCommand, ClearCommand, LineCommand  # noqa: E402
from visualization import Visualizer  # noqa: E402


@pytest.fixture
def visualizer():
    vis = Visualizer(window_size=(200, 200))
    yield vis
    vis.close()


def rgb(color):
    return tuple(color)[:3]


def assert_close(actual, expected, tolerance=3):
    assert all(abs(a - e) <= tolerance for a, e in zip(actual, expected)), (actual, expected)


def linked_pair_frame(with_link=True):
    commands = [
        ClearCommand(200, 200),
        CircleCommand(50, 100, 2.0, DEFAULT_NODE_COLOR),
        CircleCommand(110, 100, 2.0, DEFAULT_NODE_COLOR),
    ]
    if with_link:
        commands.append(LineCommand(50, 100, 110, 100, with_alpha(DEFAULT_LINK_COLOR, 0.07), 1.0))
    return commands


class TestCompositing:
    def test_node_is_blended_over_background(self, visualizer):
        visualizer.render(linked_pair_frame(with_link=False))
        # 24 + (255 - 24) * 140/255
        assert_close(rgb(visualizer.backing.get_at((50, 100))), (151, 151, 151))

    def test_link_does_not_paint_over_linked_node(self, visualizer):
        visualizer.render(linked_pair_frame(with_link=False))
        node_only = rgb(visualizer.backing.get_at((50, 100)))
        visualizer.render(linked_pair_frame())
        node_with_link = rgb(visualizer.backing.get_at((50, 100)))
        assert all(channel >= 140 for channel in node_with_link)
        assert_close(node_with_link, node_only, tolerance=10)

    def test_link_tints_the_background(self, visualizer):
        visualizer.render(linked_pair_frame())
        pixel = rgb(visualizer.backing.get_at((80, 100)))
        assert pixel != DEFAULT_BACKGROUND_COLOR
        assert all(channel < 60 for channel in pixel)

    def test_clear_resets_the_frame(self, visualizer):
        visualizer.render(linked_pair_frame())
        visualizer.render([ClearCommand(200, 200)])
        assert rgb(visualizer.backing.get_at((50, 100))) == DEFAULT_BACKGROUND_COLOR

    def test_pixel_ratio_scales_the_backing_buffer(self):
        vis = Visualizer(window_size=(100, 50), pixel_ratio=2.0)
        try:
            assert vis.backing.get_size() == (200, 100)
            assert vis.layer.get_size() == (200, 100)
            vis.render([ClearCommand(100, 50), CircleCommand(20, 20, 2.0, "rgb(255, 0, 0)")])
            assert rgb(vis.backing.get_at((40, 40))) == (255, 0, 0)
        finally:
            vis.close()


class TestColors:
    def test_resolve_keeps_alpha(self, visualizer):
        assert visualizer._resolve("rgba(10,20,30,0.5)") == pygame.Color(10, 20, 30, 128)

    def test_resolve_falls_back_for_bad_colors(self, visualizer):
        assert visualizer._resolve("not-a-color") == pygame.Color(255, 255, 255, 140)

    def test_style_with_rgb_background(self, visualizer):
        visualizer.set_style({"--bg": "rgb(1, 2, 3)"})
        assert rgb(visualizer.background) == (1, 2, 3)
        visualizer.render([ClearCommand(200, 200)])
        assert rgb(visualizer.backing.get_at((0, 0))) == (1, 2, 3)

    def test_style_with_hex_background(self, visualizer):
        visualizer.set_style({"--bg": "#102030"})
        assert rgb(visualizer.background) == (16, 32, 48)

    @pytest.mark.parametrize("style", [{"--bg": "rgb(x)"}, {"--bg": "  "}, {}])
    def test_malformed_or_missing_background_uses_default(self, visualizer, style):
        visualizer.set_style({"--bg": "rgb(1, 2, 3)"})
        visualizer.set_style(style)
        assert rgb(visualizer.background) == DEFAULT_BACKGROUND_COLOR


class TestEvents:
    def test_quit_stops_the_loop(self, visualizer):
        assert visualizer.draw([ClearCommand(200, 200)]) is True
        pygame.event.post(pygame.event.Event(pygame.QUIT))
        assert visualizer.draw([ClearCommand(200, 200)]) is False

    def test_click_triggers_handler(self, visualizer):
        clicks = []
        visualizer.on_click = lambda x, y: clicks.append((x, y))
        pygame.event.post(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(30, 40)))
        visualizer.draw([ClearCommand(200, 200)])
        assert clicks == [(30, 40)]
