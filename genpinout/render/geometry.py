"""Coordinate helpers: size normalisation, page resolution, rotation and leader shapes."""

from __future__ import annotations

import math
from typing import Optional

from genpinout.render.style import FULL_SCALE, MM_PER_INCH, SINE_SAMPLES_PER_PERIOD

Point = tuple[float, float]


def normalize(size: Optional[float], max_size: float, default: Optional[float] = None) -> float:
    """Resolve a size that may be absolute or a fraction of ``max_size``.

    ``None`` yields ``default`` (or ``max_size`` when no default is given).
    Values of 1 or more are absolute; smaller values are fractions where
    ``FULL_SCALE`` (0.9999) stands for 100%.
    """
    if size is None:
        return max_size if default is None else default
    if size >= 1:
        return size
    return (size / FULL_SCALE) * max_size


def page_resolution(size_mm: tuple[float, float], dpi: int) -> tuple[int, int]:
    """Page size in device pixels, rounded down."""
    width, height = size_mm
    return (
        math.floor(width * dpi / MM_PER_INCH),
        math.floor(height * dpi / MM_PER_INCH),
    )


def rotate_transform(degrees: float, cx: float, cy: float) -> str:
    """SVG ``transform`` value rotating about (cx, cy); empty for no rotation."""
    if not degrees:
        return ""
    return f"rotate({format_number(degrees)} {format_number(cx)} {format_number(cy)})"


def triangle_points(cx: float, cy: float, radius: float, pointing: int) -> list[Point]:
    """Equilateral triangle inscribed in a circle, apex pointing along x.

    ``pointing`` is +1 for an apex on the right and -1 for the left.
    """
    apex = (cx + pointing * radius, cy)
    back_x = cx - pointing * radius / 2
    half_side = radius * math.sqrt(3) / 2
    return [apex, (back_x, cy - half_side), (back_x, cy + half_side)]


def square_wave_points(x0: float, x1: float, y: float, amplitude: float) -> list[Point]:
    """One square pulse between x0 and x1: four segments on the baseline ``y``."""
    xm = (x0 + x1) / 2
    top = y - amplitude
    return [(x0, y), (x0, top), (xm, top), (xm, y), (x1, y)]


def sine_wave_points(
    x0: float,
    x1: float,
    y: float,
    amplitude: float,
    periods: int,
    samples_per_period: int = SINE_SAMPLES_PER_PERIOD,
) -> list[Point]:
    """Sample ``periods`` full sine periods between x0 and x1, both ends on ``y``."""
    samples = max(1, periods * samples_per_period)
    points = []
    for i in range(samples + 1):
        t = i / samples
        points.append((x0 + (x1 - x0) * t, y - amplitude * math.sin(2 * math.pi * periods * t)))
    return points


def ramp(points: list[Point], y_start: float, y_end: float) -> list[Point]:
    """Shear a leader drawn on ``y_start`` so that it finishes on ``y_end``."""
    if not points or y_start == y_end:
        return points
    x0, x1 = points[0][0], points[-1][0]
    span = x1 - x0
    out = []
    for x, y in points:
        t = 0.0 if span == 0 else (x - x0) / span
        out.append((x, y + (y_end - y_start) * t))
    return out


def format_number(value: float) -> str:
    """Render a number for SVG attributes without trailing zeros."""
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text
