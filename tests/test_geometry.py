import math

import numpy as np
import pytest

from core.geometry import (
    angle_difference,
    clamp_magnitude,
    inflate_rect,
    nearest_point_on_rect,
    point_in_any_rect,
    points_in_rects,
    polyline_length,
    sample_segment,
    segment_is_clear,
    unit_vector,
    wrap_angle,
)


def test_wrap_angle_stays_in_range():
    for angle in np.linspace(-10.0, 10.0, 41):
        wrapped = wrap_angle(angle)
        assert -math.pi <= wrapped <= math.pi
        assert math.cos(wrapped) == pytest.approx(math.cos(angle))
        assert math.sin(wrapped) == pytest.approx(math.sin(angle))


def test_angle_difference_takes_short_way_round():
    assert angle_difference(3.1, -3.1) == pytest.approx(2 * math.pi - 6.2)
    assert angle_difference(0.0, math.pi / 2) == pytest.approx(math.pi / 2)
    assert angle_difference(math.pi / 2, 0.0) == pytest.approx(-math.pi / 2)


def test_unit_and_clamp_magnitude():
    assert unit_vector(0.0, 0.0) == (0.0, 0.0)
    assert unit_vector(3.0, 4.0) == pytest.approx((0.6, 0.8))
    assert clamp_magnitude(3.0, 4.0, 1.0) == pytest.approx((0.6, 0.8))
    assert clamp_magnitude(0.3, 0.4, 1.0) == (0.3, 0.4)


def test_polyline_length():
    assert polyline_length([]) == 0.0
    assert polyline_length([(0.0, 0.0), (3.0, 4.0), (3.0, 10.0)]) == pytest.approx(11.0)


def test_rect_helpers():
    assert inflate_rect((10, 10, 20, 20), 5) == (5, 5, 25, 25)
    assert nearest_point_on_rect(0, 15, (10, 10, 20, 20)) == (10, 15)
    assert nearest_point_on_rect(15, 15, (10, 10, 20, 20)) == (15, 15)


def test_point_tests_against_many_rects():
    rects = np.array([[0, 0, 10, 10], [50, 50, 60, 60]], dtype=float)
    assert point_in_any_rect(5, 5, rects)
    assert point_in_any_rect(60, 60, rects)  # border counts
    assert not point_in_any_rect(30, 30, rects)
    assert not point_in_any_rect(5, 5, np.zeros((0, 4)))

    xs = np.array([[5, 30], [55, 70]])
    ys = np.array([[5, 30], [55, 70]])
    assert points_in_rects(xs, ys, rects).tolist() == [[True, False], [True, False]]


def test_sample_segment_includes_endpoints():
    xs, ys = sample_segment(0.0, 0.0, 10.0, 0.0, 4.0)
    assert xs[0] == 0.0 and xs[-1] == 10.0
    assert np.all(np.diff(xs) <= 4.0 + 1e-9)
    assert np.all(ys == 0.0)


def test_segment_is_clear():
    rects = np.array([[40, 40, 60, 60]], dtype=float)
    assert not segment_is_clear(0, 50, 100, 50, rects, 4.0)
    assert segment_is_clear(0, 10, 100, 10, rects, 4.0)
    assert segment_is_clear(0, 50, 100, 50, np.zeros((0, 4)), 4.0)
