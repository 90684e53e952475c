"""Pin symbol library.

Each function returns document primitives positioned in page pixels: pin
markers, group indicators, leader lines and themed text boxes. Styling is
resolved from the theme store into small style records first so the drawing
functions stay free of lookups.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from genpinout.render import style
from genpinout.render.document import Circle, Element, Group, Line, Polygon, Polyline, Rect, Text, TextSpan
from genpinout.render.geometry import (
    Point,
    format_number,
    ramp,
    sine_wave_points,
    square_wave_points,
    triangle_points,
)
from genpinout.render.theme import ThemeKey, ThemeStore
from genpinout.types import JustifyX, JustifyY, PinType, WireType

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Resolved styles
# ---------------------------------------------------------------------------

@dataclass
class FontStyle:
    family: str = style.FONT_FAMILY
    size: float = style.FONT_SIZE
    color: str = style.FONT_COLOR
    slant: str = style.FONT_SLANT
    weight: str = style.FONT_WEIGHT
    stretch: str = style.FONT_STRETCH
    outline_color: str = style.COLOR_NONE
    outline_thickness: float = style.OUTLINE_THICKNESS

    @classmethod
    def resolve(cls, themes: ThemeStore, key: ThemeKey) -> FontStyle:
        return cls(
            family=themes.resolve_text(key, "FONT", style.FONT_FAMILY),
            size=themes.resolve_float(key, "FONT SIZE", style.FONT_SIZE),
            color=themes.resolve_text(key, "FONT COLOR", style.FONT_COLOR),
            slant=themes.resolve_text(key, "FONT SLANT", style.FONT_SLANT),
            weight=themes.resolve_text(key, "FONT BOLD", style.FONT_WEIGHT),
            stretch=themes.resolve_text(key, "FONT STRETCH", style.FONT_STRETCH),
            outline_color=themes.resolve_text(key, "FONT OUTLINE", style.COLOR_NONE),
            outline_thickness=themes.resolve_float(
                key, "FONT OUTLINE THICKNESS", style.OUTLINE_THICKNESS
            ),
        )

    def text(self, x: float, y: float, content: str, anchor: str) -> Text:
        outlined = self.outline_thickness > 0
        return Text(
            x=x,
            y=y,
            spans=[TextSpan(content)],
            font_family=self.family,
            font_size=self.size,
            fill=self.color,
            stroke=self.outline_color if outlined else "",
            stroke_width=self.outline_thickness if outlined else 0.0,
            font_style=self.slant,
            font_weight=self.weight,
            font_stretch=self.stretch,
            text_anchor=anchor,
        )


@dataclass
class BoxStyle:
    width: float
    height: float
    corner_rx: float = 0.0
    corner_ry: float = 0.0
    skew: float = 0.0
    skew_offset: float = 0.0
    border_color: str = style.BORDER_COLOR
    border_width: float = style.BORDER_WIDTH
    border_opacity: float = style.BORDER_OPACITY
    fill_color: str = style.FILL_COLOR
    fill_opacity: float = style.FILL_OPACITY
    font: Optional[FontStyle] = None

    @classmethod
    def resolve(
        cls,
        themes: ThemeStore,
        style_key: ThemeKey,
        box_key: ThemeKey,
        width: Optional[float] = None,
        height: Optional[float] = None,
    ) -> BoxStyle:
        """Colours and fonts come from ``style_key``, geometry from ``box_key``."""
        return cls(
            width=themes.resolve_float(box_key, "WIDTH", style.BOX_WIDTH) if width is None else width,
            height=themes.resolve_float(box_key, "HEIGHT", style.BOX_HEIGHT) if height is None else height,
            corner_rx=themes.resolve_float(box_key, "CORNER RX", 0.0),
            corner_ry=themes.resolve_float(box_key, "CORNER RY", 0.0),
            skew=themes.resolve_float(box_key, "SKEW", 0.0),
            skew_offset=themes.resolve_float(box_key, "SKEW OFFSET", 0.0),
            border_color=themes.resolve_text(style_key, "BORDER COLOR", style.BORDER_COLOR),
            border_width=themes.resolve_float(style_key, "BORDER WIDTH", style.BORDER_WIDTH),
            border_opacity=themes.resolve_float(style_key, "BORDER OPACITY", style.BORDER_OPACITY),
            fill_color=themes.resolve_text(style_key, "FILL COLOR", style.FILL_COLOR),
            fill_opacity=themes.resolve_float(style_key, "OPACITY", style.FILL_OPACITY),
            font=FontStyle.resolve(themes, style_key),
        )


@dataclass
class StrokeStyle:
    color: str
    opacity: float = 1.0
    width: float = 1.0


# ---------------------------------------------------------------------------
# Pins
# ---------------------------------------------------------------------------

def pin_marker(
    pin_type: PinType,
    cx: float,
    cy: float,
    diameter: float,
    direction: int,
    fill: StrokeStyle,
) -> Element:
    """Circle for IO; triangle pointing at the device for INPUT, away from it for OUTPUT."""
    radius = diameter / 2
    if pin_type is PinType.IO:
        return Circle(cx=cx, cy=cy, r=radius, fill=fill.color, fill_opacity=fill.opacity)
    pointing = -direction if pin_type is PinType.INPUT else direction
    return Polygon(
        points=triangle_points(cx, cy, radius, pointing),
        fill=fill.color,
        fill_opacity=fill.opacity,
    )


def group_indicator(cx: float, cy: float, diameter: float, fill: StrokeStyle) -> Circle:
    return Circle(cx=cx, cy=cy, r=diameter / 2, fill=fill.color, fill_opacity=fill.opacity)


# ---------------------------------------------------------------------------
# Leaders
# ---------------------------------------------------------------------------

def _straight(start: Point, end: Point, amplitude: float, stroke: StrokeStyle, samples: int) -> Element:
    return Line(
        x1=start[0], y1=start[1], x2=end[0], y2=end[1],
        stroke=stroke.color, stroke_width=stroke.width, stroke_opacity=stroke.opacity,
    )


def _square(start: Point, end: Point, amplitude: float, stroke: StrokeStyle, samples: int) -> Element:
    points = square_wave_points(start[0], end[0], start[1], amplitude)
    return Polyline(
        points=ramp(points, start[1], end[1]),
        stroke=stroke.color, stroke_width=stroke.width, stroke_opacity=stroke.opacity,
    )


def _sine(periods: int) -> Callable[..., Element]:
    def draw(start: Point, end: Point, amplitude: float, stroke: StrokeStyle, samples: int) -> Element:
        points = sine_wave_points(start[0], end[0], start[1], amplitude, periods, samples)
        return Polyline(
            points=ramp(points, start[1], end[1]),
            stroke=stroke.color, stroke_width=stroke.width, stroke_opacity=stroke.opacity,
        )
    return draw


LEADER_REGISTRY: dict[WireType, Callable[..., Element]] = {
    WireType.DIGITAL: _straight,
    WireType.POWER: _straight,
    WireType.PWM: _square,
    WireType.ANALOG: _sine(style.WAVE_PERIODS["ANALOG"]),
    WireType.HS_ANALOG: _sine(style.WAVE_PERIODS["HS-ANALOG"]),
}


def leader(
    wire: WireType,
    start: Point,
    end: Point,
    amplitude: float,
    stroke: StrokeStyle,
    samples_per_period: int = style.SINE_SAMPLES_PER_PERIOD,
) -> Element:
    """Leader line from the pin to the first box, shaped by wire type."""
    return LEADER_REGISTRY[wire](start, end, amplitude, stroke, samples_per_period)


# ---------------------------------------------------------------------------
# Text boxes
# ---------------------------------------------------------------------------

_ANCHORS = {
    JustifyX.LEFT: "start",
    JustifyX.CENTER: "middle",
    JustifyX.RIGHT: "end",
}


def text_box(
    x: float,
    y: float,
    box: BoxStyle,
    content: Optional[str],
    justify_x: JustifyX = JustifyX.CENTER,
    justify_y: JustifyY = JustifyY.CENTER,
    theme: str = "",
) -> Group:
    """Themed box with its top-left corner at (x, y), holding up to two lines of text."""
    w, h = box.width, box.height
    font = box.font or FontStyle()
    fs = font.size

    if justify_x is JustifyX.LEFT:
        xalign = -w / 2
    elif justify_x is JustifyX.RIGHT:
        xalign = w / 2
    else:
        xalign = 0.0

    if justify_y is JustifyY.TOP:
        yalign = -h / 2 + fs
    elif justify_y is JustifyY.BOTTOM:
        yalign = h / 2 - fs / 2
    else:
        yalign = fs / 3

    transform = ""
    if box.skew:
        transform = f"skewX({format_number(box.skew)})"
        if box.skew_offset:
            transform = f"translate({format_number(box.skew_offset)} 0) " + transform

    children: list[Element] = [
        Rect(
            x=-w / 2, y=-h / 2, width=w, height=h,
            rx=box.corner_rx, ry=box.corner_ry,
            fill=box.fill_color, fill_opacity=box.fill_opacity,
            stroke=box.border_color, stroke_width=box.border_width,
            stroke_opacity=box.border_opacity, transform=transform,
        )
    ]

    if content:
        lines = content.split(style.LINE_BREAK)
        if len(lines) > 2:
            log.warning("Box text %r has more than two lines; extra lines dropped", content)
            lines = lines[:2]
        anchor = _ANCHORS[justify_x]
        if len(lines) == 1:
            children.append(font.text(xalign, yalign, lines[0], anchor))
        else:
            children.append(font.text(xalign, yalign - fs / 2, lines[0], anchor))
            children.append(font.text(xalign, yalign + fs / 2, lines[1], anchor))

    return Group(
        children=children,
        transform=f"translate({format_number(x + w / 2)} {format_number(y + h / 2)})",
        role="textbox",
        theme=theme,
    )
