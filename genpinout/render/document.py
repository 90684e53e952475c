"""SVG document model.

Primitives are plain dataclasses that know how to serialise themselves; the
``Document`` keeps them in drawing order together with the page metadata.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, Optional, TypeVar, Union

from genpinout.errors import InvalidDpi, InvalidPageSize
from genpinout.render.geometry import Point, format_number, page_resolution
from genpinout.render.style import (
    COLOR_NONE,
    DEFAULT_DPI,
    DEFAULT_PAGE,
    DPI_MAX,
    DPI_MIN,
    PAGE_SIZES,
)

log = logging.getLogger(__name__)

T = TypeVar("T")


def _escape_xml(text: str) -> str:
    """Escape special XML characters."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def _attrs(**values: object) -> str:
    """Format keyword arguments as SVG attributes, skipping unset ones."""
    parts = []
    for name, value in values.items():
        if value is None or value == "":
            continue
        if isinstance(value, float):
            value = format_number(value)
        parts.append(f'{name.rstrip("_").replace("_", "-")}="{_escape_xml(str(value))}"')
    return " ".join(parts)


def _points(points: list[Point]) -> str:
    return " ".join(f"{format_number(x)},{format_number(y)}" for x, y in points)


@dataclass
class Rect:
    x: float
    y: float
    width: float
    height: float
    rx: float = 0.0
    ry: float = 0.0
    fill: str = COLOR_NONE
    fill_opacity: float = 1.0
    stroke: str = COLOR_NONE
    stroke_width: float = 0.0
    stroke_opacity: float = 1.0
    transform: str = ""

    def to_svg(self) -> str:
        return "<rect " + _attrs(
            x=self.x, y=self.y, width=self.width, height=self.height,
            rx=self.rx or None, ry=self.ry or None,
            fill=self.fill, fill_opacity=self.fill_opacity,
            stroke=self.stroke, stroke_width=self.stroke_width,
            stroke_opacity=self.stroke_opacity, transform=self.transform,
        ) + "/>"


@dataclass
class Circle:
    cx: float
    cy: float
    r: float
    fill: str = COLOR_NONE
    fill_opacity: float = 1.0
    stroke: str = COLOR_NONE
    stroke_width: float = 0.0

    def to_svg(self) -> str:
        return "<circle " + _attrs(
            cx=self.cx, cy=self.cy, r=self.r,
            fill=self.fill, fill_opacity=self.fill_opacity,
            stroke=self.stroke, stroke_width=self.stroke_width or None,
        ) + "/>"


@dataclass
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str = "black"
    stroke_width: float = 1.0
    stroke_opacity: float = 1.0

    def to_svg(self) -> str:
        return "<line " + _attrs(
            x1=self.x1, y1=self.y1, x2=self.x2, y2=self.y2,
            stroke=self.stroke, stroke_width=self.stroke_width,
            stroke_opacity=self.stroke_opacity,
        ) + "/>"


@dataclass
class Polygon:
    points: list[Point]
    fill: str = COLOR_NONE
    fill_opacity: float = 1.0
    stroke: str = COLOR_NONE

    def to_svg(self) -> str:
        return "<polygon " + _attrs(
            points=_points(self.points), fill=self.fill,
            fill_opacity=self.fill_opacity, stroke=self.stroke,
        ) + "/>"


@dataclass
class Polyline:
    points: list[Point]
    stroke: str = "black"
    stroke_width: float = 1.0
    stroke_opacity: float = 1.0

    def to_svg(self) -> str:
        return "<polyline " + _attrs(
            points=_points(self.points), fill=COLOR_NONE,
            stroke=self.stroke, stroke_width=self.stroke_width,
            stroke_opacity=self.stroke_opacity,
        ) + "/>"


@dataclass
class TextSpan:
    text: str
    x: Optional[float] = None
    y: Optional[float] = None
    fill: Optional[str] = None
    stroke: Optional[str] = None

    def to_svg(self) -> str:
        attrs = _attrs(x=self.x, y=self.y, fill=self.fill, stroke=self.stroke)
        return f"<tspan {attrs}>{_escape_xml(self.text)}</tspan>"


@dataclass
class Text:
    x: float
    y: float
    spans: list[TextSpan] = field(default_factory=list)
    font_family: str = "sans-serif"
    font_size: float = 10.0
    fill: str = "black"
    stroke: str = ""
    stroke_width: float = 0.0
    font_style: str = "normal"
    font_weight: str = "normal"
    font_stretch: str = "normal"
    text_anchor: str = "middle"

    @property
    def content(self) -> str:
        return "".join(span.text for span in self.spans)

    def to_svg(self) -> str:
        attrs = _attrs(
            x=self.x, y=self.y,
            font_family=self.font_family, font_size=self.font_size,
            fill=self.fill, stroke=self.stroke,
            stroke_width=self.stroke_width or None,
            font_style=self.font_style, font_weight=self.font_weight,
            font_stretch=self.font_stretch, text_anchor=self.text_anchor,
        )
        if len(self.spans) == 1 and self.spans[0].x is None and self.spans[0].y is None \
                and self.spans[0].fill is None and self.spans[0].stroke is None:
            return f"<text {attrs}>{_escape_xml(self.spans[0].text)}</text>"
        body = "".join(span.to_svg() for span in self.spans)
        return f"<text {attrs}>{body}</text>"


@dataclass
class Image:
    x: float
    y: float
    width: float
    height: float
    href: str
    transform: str = ""

    def to_svg(self) -> str:
        return "<image " + _attrs(
            x=self.x, y=self.y, width=self.width, height=self.height,
            href=self.href, transform=self.transform,
        ) + "/>"


@dataclass
class Group:
    children: list["Element"] = field(default_factory=list)
    transform: str = ""
    role: str = ""
    theme: str = ""

    def to_svg(self) -> str:
        attrs = _attrs(class_=self.role, data_theme=self.theme, transform=self.transform)
        inner = "\n".join(child.to_svg() for child in self.children)
        opening = f"<g {attrs}>" if attrs else "<g>"
        return f"{opening}\n{inner}\n</g>"


Element = Union[Rect, Circle, Line, Polygon, Polyline, Text, Image, Group]


class Document:
    """Ordered primitives plus page size and resolution."""

    def __init__(self, page: str = DEFAULT_PAGE, dpi: int = DEFAULT_DPI):
        self.page = DEFAULT_PAGE
        self.dpi = DEFAULT_DPI
        self.styles: list[str] = []
        self.elements: list[Element] = []
        self.set_page(page)
        self.set_dpi(dpi)

    def set_page(self, page: str) -> None:
        if page not in PAGE_SIZES:
            raise InvalidPageSize(
                f"unknown page type {page!r}, valid pages are {', '.join(PAGE_SIZES)}"
            )
        self.page = page

    def set_dpi(self, dpi: int) -> None:
        if not DPI_MIN <= dpi <= DPI_MAX:
            raise InvalidDpi(f"DPI {dpi} out of range, must be between {DPI_MIN} and {DPI_MAX}")
        self.dpi = dpi

    @property
    def size_mm(self) -> tuple[float, float]:
        return PAGE_SIZES[self.page]

    @property
    def resolution(self) -> tuple[int, int]:
        return page_resolution(self.size_mm, self.dpi)

    def add(self, element: T) -> T:
        self.elements.append(element)
        return element

    def add_style(self, css: str) -> None:
        self.styles.append(css)

    def walk(self) -> Iterator[Element]:
        """Every primitive in drawing order, descending into groups."""
        stack = list(reversed(self.elements))
        while stack:
            element = stack.pop()
            yield element
            if isinstance(element, Group):
                stack.extend(reversed(element.children))

    def find(self, kind: type[T]) -> list[T]:
        return [element for element in self.walk() if isinstance(element, kind)]

    def count(self) -> int:
        return sum(1 for _ in self.walk())

    def to_svg(self) -> str:
        width_mm, height_mm = self.size_mm
        width_px, height_px = self.resolution
        lines = [
            '<?xml version="1.0" encoding="utf-8" ?>',
            f'<svg xmlns="http://www.w3.org/2000/svg" version="1.1" '
            f'width="{format_number(width_mm)}mm" height="{format_number(height_mm)}mm" '
            f'viewBox="0 0 {width_px} {height_px}">',
        ]
        if self.styles:
            lines.append("<defs>")
            for css in self.styles:
                lines.append(f'<style type="text/css"><![CDATA[\n{css}\n]]></style>')
            lines.append("</defs>")
        lines.extend(element.to_svg() for element in self.elements)
        lines.append("</svg>")
        return "\n".join(lines)
