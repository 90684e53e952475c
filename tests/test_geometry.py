"""Test coordinate helpers."""

import pytest

from genpinout.render.geometry import (
    format_number,
    normalize,
    page_resolution,
    ramp,
    rotate_transform,
    sine_wave_points,
    square_wave_points,
    triangle_points,
)


def test_normalize_fraction_and_absolute():
    assert normalize(0.5, 1000) == pytest.approx(500.05, abs=0.01)
    assert normalize(0.9999, 1000) == pytest.approx(1000)
    assert normalize(1.0, 1000) == 1.0
    assert normalize(250, 1000) == 250


def test_normalize_missing_value():
    assert normalize(None, 1000) == 1000
    assert normalize(None, 1000, 0) == 0


def test_page_resolution_rounds_down():
    assert page_resolution((297.0, 210.0), 300) == (3507, 2480)
    assert page_resolution((210.0, 297.0), 300) == (2480, 3507)


def test_rotation():
    assert rotate_transform(0, 5, 5) == ""
    assert rotate_transform(45, 10, 20.5) == "rotate(45 10 20.5)"


def test_triangle_points_direction():
    right = triangle_points(0, 0, 10, 1)
    left = triangle_points(0, 0, 10, -1)
    assert right[0] == (10, 0)
    assert left[0] == (-10, 0)
    assert right[1][0] == pytest.approx(-5)


def test_square_wave():
    points = square_wave_points(0, 20, 5, 3)
    assert points == [(0, 5), (0, 2), (10, 2), (10, 5), (20, 5)]


def test_sine_wave_ends_on_baseline():
    points = sine_wave_points(0, 100, 50, 4, periods=2, samples_per_period=8)
    assert len(points) == 17
    assert points[0] == (0, 50)
    assert points[-1][0] == pytest.approx(100)
    assert points[-1][1] == pytest.approx(50)
    assert min(y for _, y in points) == pytest.approx(46)


def test_ramp_shears_to_end():
    points = ramp([(0, 10), (5, 10), (10, 10)], 10, 20)
    assert points == [(0, 10), (5, 15.0), (10, 20.0)]
    flat = [(0, 1), (1, 1)]
    assert ramp(flat, 1, 1) is flat


def test_format_number():
    assert format_number(10.0) == "10"
    assert format_number(2.125) == "2.125"
    assert format_number(1 / 3) == "0.3333"
    assert format_number(-0.00001) == "0"
