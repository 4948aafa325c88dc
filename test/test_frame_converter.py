import math

import pytest

from diffdrive_fake.render.frame_converter import FrameConverter


@pytest.fixture
def fc():
    # area render 800×600 px, sidebar 300 px, sisi terpendek = 3 m
    return FrameConverter(1100, 600, view_size=3.0, render_width=800)


def test_scale_uses_shortest_render_side(fc):
    assert fc.scale == pytest.approx(200.0)


def test_origin_at_render_center(fc):
    assert fc.world_to_screen(0.0, 0.0) == (400, 300)


def test_y_axis_is_flipped(fc):
    assert fc.world_to_screen(0.5, 0.0) == (500, 300)
    assert fc.world_to_screen(0.0, 0.5) == (400, 200)


def test_screen_to_world_roundtrip(fc):
    wx, wy = fc.screen_to_world(*fc.world_to_screen(1.25, -0.75))
    assert wx == pytest.approx(1.25)
    assert wy == pytest.approx(-0.75)


def test_heading_negated_for_screen(fc):
    assert fc.theta_world_to_screen(math.pi / 2) == -math.pi / 2


def test_follow_keeps_center_while_robot_near_middle(fc):
    fc.follow(0.3, 0.2)
    assert (fc.center_x, fc.center_y) == (0.0, 0.0)


def test_follow_shifts_view_when_robot_leaves_inner_area(fc):
    # half width = 2 m, inner limit = 1 m
    fc.follow(3.0, 0.0)
    assert fc.center_x == pytest.approx(2.0)
    px, _ = fc.world_to_screen(3.0, 0.0)
    assert px == 600


def test_visible_bounds(fc):
    fc.set_center(1.0, -1.0)
    x_min, x_max, y_min, y_max = fc.visible_bounds()
    assert (x_min, x_max) == (pytest.approx(-1.0), pytest.approx(3.0))
    assert (y_min, y_max) == (pytest.approx(-2.5), pytest.approx(0.5))
