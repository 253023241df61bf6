"""Tests for the zoom/pan view transform."""

import pytest

from mindpad.view import MAX_ZOOM, MIN_ZOOM, ViewState


@pytest.fixture
def view():
    return ViewState()


class TestTransform:

    def test_round_trip(self, view):
        view.zoom, view.pan_x, view.pan_y = 2.0, 30.0, -10.0
        wx, wy = view.to_world(130.0, 90.0)
        assert (wx, wy) == (50.0, 50.0)
        assert view.to_screen(wx, wy) == (130.0, 90.0)

    def test_reset(self, view):
        view.zoom = view.target_zoom = 3.0
        view.pan_x = view.target_pan_x = 12.0
        view.reset()
        assert (view.zoom, view.pan_x, view.pan_y) == (1.0, 0.0, 0.0)
        assert not view.is_animating


class TestMotion:
    """Targets and easing."""

    def test_pan_by_is_immediate(self, view):
        view.pan_by(10.0, -5.0)
        assert (view.pan_x, view.pan_y) == (10.0, -5.0)
        assert not view.is_animating

    def test_zoom_at_keeps_point_fixed(self, view):
        view.zoom_at(200.0, 100.0, 1)
        assert view.target_zoom == pytest.approx(1.1)

        view.zoom = view.target_zoom
        view.pan_x, view.pan_y = view.target_pan_x, view.target_pan_y
        assert view.to_world(200.0, 100.0) == pytest.approx((200.0, 100.0))

    def test_zoom_is_clamped(self, view):
        view.zoom = MAX_ZOOM
        view.zoom_at(0, 0, 1)
        assert view.target_zoom == MAX_ZOOM

        view.zoom = MIN_ZOOM
        view.zoom_at(0, 0, -1)
        assert view.target_zoom == MIN_ZOOM

    def test_center_on_immediate(self, view):
        view.center_on(100.0, 50.0, 800, 600, animate=False)
        assert view.to_screen(100.0, 50.0) == (400.0, 300.0)
        assert not view.is_animating

    def test_center_on_animates(self, view):
        view.center_on(100.0, 50.0, 800, 600)
        assert view.is_animating
        assert (view.pan_x, view.pan_y) == (0.0, 0.0)

    def test_step_converges(self, view):
        view.center_on(100.0, 50.0, 800, 600)
        view.target_zoom = 2.0
        for _ in range(500):
            if not view.step():
                break
        assert not view.is_animating
        assert view.zoom == pytest.approx(2.0, abs=0.01)
        assert view.pan_x == pytest.approx(300.0, abs=1.0)

    def test_step_when_idle(self, view):
        assert view.step() is False

    def test_focus_caps_zoom(self, view):
        view.zoom = 1.8
        view.focus(0, 0, 100, 100)
        assert view.target_zoom == 2.0

    def test_fit_never_zooms_past_100(self, view):
        view.fit((0.0, 0.0, 10.0, 10.0), 800, 600)
        assert view.target_zoom == 1.0

    def test_fit_zooms_out_for_large_map(self, view):
        view.fit((0.0, 0.0, 1900.0, 100.0), 800, 600)
        assert view.target_zoom == pytest.approx(0.4)
        assert view.target_pan_x == pytest.approx(400 - 950 * 0.4)

    def test_fit_zero_canvas(self, view):
        view.fit((0.0, 0.0, 10.0, 10.0), 0, 0)
        assert view.target_zoom == 1.0
