"""PinoutRenderer: commands → SVG → PNG pipeline.

Takes the command records parsed from a pinout script and interprets them in
order: setup commands populate the theme store and page settings, draw
commands position pins, boxes, images and messages into the document.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, Optional

import httpx

from genpinout.commands.models import (
    AppendText,
    BeginDraw,
    BeginMessage,
    BeginPinSet,
    Command,
    DeclareLabels,
    DefineBox,
    DefineFont,
    DefineGroup,
    DefinePinType,
    DefineWire,
    DrawBox,
    DrawIcon,
    DrawImage,
    DrawPin,
    DrawPinText,
    EmbedGoogleFont,
    EndMessage,
    MoveAnchor,
    SetDpi,
    SetPage,
    SetThemeAttribute,
)
from genpinout.commands.parser import parse_csv_file
from genpinout.config import GenPinoutConfig
from genpinout.errors import (
    RenderError,
    UndefinedBoxReference,
    UndefinedGroup,
    UndefinedWireTheme,
)
from genpinout.observability.metrics import RenderMetrics
from genpinout.render import style
from genpinout.render.assets import AssetLoader
from genpinout.render.document import Document, Element, Group, Text
from genpinout.render.geometry import normalize
from genpinout.render.layout import LayoutCursor, RowConfig
from genpinout.render.message import MessageWriter
from genpinout.render.phase import PhaseController
from genpinout.render.symbols import (
    BoxStyle,
    FontStyle,
    StrokeStyle,
    group_indicator,
    leader,
    pin_marker,
    text_box,
)
from genpinout.render.theme import DEFAULT, ThemeKey, ThemeKind, ThemeStore
from genpinout.types import JustifyX, JustifyY, PinType, WireType

log = logging.getLogger(__name__)


class PinoutRenderer:
    """Renders a sequence of pinout commands into an SVG document."""

    def __init__(
        self,
        config: Optional[GenPinoutConfig] = None,
        base_dir: Path | str = ".",
        http_client: httpx.Client | None = None,
    ):
        self.config = config or GenPinoutConfig()
        self.themes = ThemeStore()
        self.cursor = LayoutCursor()
        self.document = Document(self.config.default_page, self.config.default_dpi)
        self.messages = MessageWriter(self.themes, self.document)
        self.assets = AssetLoader(base_dir, http_client, timeout=self.config.font_fetch_timeout)
        self.phases = PhaseController(on_draw=self._before_draw)
        self.metrics = RenderMetrics()

        self._handlers: dict[str, Callable] = {
            # setup
            "labels": self._declare_labels,
            "theme_attribute": self._set_theme_attribute,
            "pin_type": self._define_pin_type,
            "wire": self._define_wire,
            "group": self._define_group,
            "box_theme": self._define_box,
            "text_font": self._define_font,
            "page": self._set_page,
            "dpi": self._set_dpi,
            "draw": self._begin_draw,
            # draw
            "google_font": self._embed_google_font,
            "image": self._draw_image,
            "icon": self._draw_icon,
            "anchor": self._move_anchor,
            "pinset": self._begin_pinset,
            "pin": self._draw_pin_row,
            "pintext": self._draw_pin_text,
            "box": self._draw_box,
            "message": self._begin_message,
            "text": self._append_text,
            "end_message": self._end_message,
        }

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def process(self, commands: Iterable[Command]) -> Document:
        """Run every command in order. Any error aborts the pass."""
        self.metrics.start()
        try:
            for index, command in enumerate(commands):
                try:
                    self.execute(command)
                except RenderError as e:
                    e.at(index, command.kind)
                    raise
            self._flush(self.messages.end())
        finally:
            self.metrics.stop()
            self.assets.close()

        log.info(
            "Rendered %d command(s) into %d primitive(s) in %s ms",
            self.metrics.command_count,
            self.metrics.primitives,
            self.metrics.summary()["elapsed_ms"],
        )
        return self.document

    def execute(self, command: Command) -> None:
        begins_draw = isinstance(command, BeginDraw)
        if not self.phases.admit(command.kind, command.phase, begins_draw=begins_draw):
            return
        self.metrics.record_command(command.kind, command.phase.value)
        self._handlers[command.kind](command)

    def render_svg(self, commands: Iterable[Command]) -> str:
        """Generate complete SVG string from the commands."""
        return self.process(commands).to_svg()

    def render_png(self, scale: Optional[float] = None) -> bytes:
        """Rasterise the processed document via CairoSVG."""
        try:
            import cairosvg
        except ImportError:
            raise RuntimeError(
                "cairosvg required for PNG output: pip install cairosvg"
            )

        scale = scale or self.config.png_scale
        width, height = self.document.resolution
        return cairosvg.svg2png(
            bytestring=self.document.to_svg().encode("utf-8"),
            output_width=round(width * scale),
            output_height=round(height * scale),
        )

    # ------------------------------------------------------------------
    # Setup phase
    # ------------------------------------------------------------------

    def _before_draw(self) -> None:
        self.themes.validate_box_references()

    def _declare_labels(self, cmd: DeclareLabels) -> None:
        self.themes.declare_labels(cmd.default, cmd.pin_type, cmd.group, cmd.labels)

    def _set_theme_attribute(self, cmd: SetThemeAttribute) -> None:
        self.themes.set_default(cmd.attribute, cmd.default, cmd.pin_type, cmd.group, cmd.overrides)

    def _define_pin_type(self, cmd: DefinePinType) -> None:
        self.themes.define(
            ThemeKey.pin_type(cmd.pin_type),
            {"FILL COLOR": cmd.color, "OPACITY": cmd.opacity},
        )

    def _define_wire(self, cmd: DefineWire) -> None:
        self.themes.define(
            ThemeKey.wire(cmd.wire),
            {"FILL COLOR": cmd.color, "OPACITY": cmd.opacity, "THICKNESS": cmd.thickness},
        )

    def _define_group(self, cmd: DefineGroup) -> None:
        self.themes.define(
            ThemeKey.group(cmd.name),
            {"FILL COLOR": cmd.color, "OPACITY": cmd.opacity},
        )

    def _define_box(self, cmd: DefineBox) -> None:
        self.themes.define(
            ThemeKey.box(cmd.name),
            {
                "BORDER COLOR": cmd.border_color,
                "BORDER OPACITY": cmd.border_opacity,
                "FILL COLOR": cmd.fill_color,
                "OPACITY": cmd.fill_opacity,
                "BORDER WIDTH": cmd.border_width,
                "WIDTH": cmd.width,
                "HEIGHT": cmd.height,
                "CORNER RX": cmd.corner_rx,
                "CORNER RY": cmd.corner_ry,
                "SKEW": cmd.skew,
                "SKEW OFFSET": cmd.skew_offset,
            },
        )

    def _define_font(self, cmd: DefineFont) -> None:
        self.themes.define(
            ThemeKey.font(cmd.name),
            {
                "FONT": cmd.family,
                "FONT SIZE": cmd.size,
                "FONT OUTLINE": cmd.outline_color,
                "FONT COLOR": cmd.color,
                "FONT SLANT": cmd.slant,
                "FONT BOLD": cmd.weight,
                "FONT STRETCH": cmd.stretch,
                "FONT OUTLINE THICKNESS": cmd.outline_thickness,
            },
        )

    def _set_page(self, cmd: SetPage) -> None:
        self.document.set_page(cmd.page)
        log.debug("Page %s, resolution %s", cmd.page, self.document.resolution)

    def _set_dpi(self, cmd: SetDpi) -> None:
        self.document.set_dpi(cmd.dpi)
        log.debug("DPI %d, resolution %s", cmd.dpi, self.document.resolution)

    def _begin_draw(self, cmd: BeginDraw) -> None:
        width, height = self.document.resolution
        log.info("Drawing %s page at %d DPI (%dx%d px)", self.document.page, self.document.dpi, width, height)

    # ------------------------------------------------------------------
    # Draw phase
    # ------------------------------------------------------------------

    def _embed_google_font(self, cmd: EmbedGoogleFont) -> None:
        self.document.add_style(self.assets.fetch_font_css(cmd.link))

    def _draw_image(self, cmd: DrawImage) -> None:
        self._emit(self.assets.embed_image(
            cmd.name, cmd.x, cmd.y, cmd.width, cmd.height,
            crop=(cmd.crop_x, cmd.crop_y, cmd.crop_width, cmd.crop_height),
            rotation=cmd.rotation,
            page=self.document.resolution,
        ))

    def _draw_icon(self, cmd: DrawIcon) -> None:
        self._emit(self.assets.embed_icon(
            cmd.name, cmd.x, cmd.y, cmd.width, cmd.height,
            rotation=cmd.rotation,
            page=self.document.resolution,
        ))

    def _move_anchor(self, cmd: MoveAnchor) -> None:
        width, height = self.document.resolution
        self.cursor.move_anchor(normalize(cmd.x, width, 0), normalize(cmd.y, height, 0))

    def _begin_pinset(self, cmd: BeginPinSet) -> None:
        self.cursor.begin_row(RowConfig(**cmd.model_dump(exclude={"kind"})))

    def _draw_pin_row(self, cmd: DrawPin) -> None:
        self._draw_pin(cmd.wire, cmd.pin_type, cmd.group)
        slots, _ = self.cursor.place_columns(self.themes.labels, cmd.columns, self._box_width)
        for slot in slots:
            self._label_box(slot.label, slot.text, slot.offset)
        self.cursor.advance_row()

    def _draw_pin_text(self, cmd: DrawPinText) -> None:
        self._draw_pin(cmd.wire, cmd.pin_type, cmd.group)
        row = self.cursor.require_row()
        offset = self.cursor.first_box_offset()

        if cmd.label:
            if self.themes.labels:
                first = self.themes.labels[0]
                self._label_box(first, cmd.label, offset)
                offset = self.cursor.advance_box(offset, self._box_width(first))
            else:
                log.warning("PINTEXT label %r dropped: no pin function labels declared", cmd.label)

        if cmd.text:
            key = self.themes.font_key(cmd.theme) if cmd.theme else DEFAULT
            font = FontStyle.resolve(self.themes, key)
            x = self.cursor.anchor_x + self.cursor.offset_x + offset + row.direction * row.column_gap
            y = self.cursor.row_center_y() + font.size / 3
            anchor = "end" if row.direction < 0 else "start"
            self._emit(font.text(x, y, cmd.text, anchor))

        self.cursor.advance_row()

    def _draw_box(self, cmd: DrawBox) -> None:
        key = ThemeKey.parse(cmd.theme)
        if key.kind is not ThemeKind.BOX:
            key = ThemeKey.box(cmd.theme)
        if key not in self.themes:
            raise UndefinedBoxReference(f"box theme {key} not defined")

        page_w, page_h = self.document.resolution
        width = None if cmd.width is None else normalize(cmd.width, page_w)
        height = None if cmd.height is None else normalize(cmd.height, page_h)
        box = BoxStyle.resolve(self.themes, key, key, width, height)
        self._emit(text_box(
            normalize(cmd.x, page_w, 0),
            normalize(cmd.y, page_h, 0),
            box,
            cmd.text,
            cmd.justify_x or JustifyX.CENTER,
            cmd.justify_y or JustifyY.CENTER,
            theme=str(key),
        ))

    def _begin_message(self, cmd: BeginMessage) -> None:
        self._flush(self.messages.begin(
            x=cmd.x,
            y=cmd.y,
            line_step=cmd.line_step,
            font=cmd.font,
            font_size=cmd.font_size,
            justify_x=cmd.justify_x,
            justify_y=cmd.justify_y,
        ))

    def _append_text(self, cmd: AppendText) -> None:
        self.messages.append(cmd.edge_color, cmd.color, cmd.text, cmd.new_line)

    def _end_message(self, cmd: EndMessage) -> None:
        self._flush(self.messages.end())

    # ------------------------------------------------------------------
    # Pin helpers
    # ------------------------------------------------------------------

    def _draw_pin(
        self,
        wire: Optional[WireType],
        pin_type: Optional[PinType],
        group: Optional[str],
    ) -> None:
        """Group indicator, leader and marker for the pin on the current row."""
        row = self.cursor.require_row()
        cx, cy = self.cursor.pin_center()

        if group:
            key = ThemeKey.group(group)
            if key not in self.themes:
                raise UndefinedGroup(f"pin group {group} not defined")
            self._emit(group_indicator(cx, cy, row.group_diameter, self._fill(key)))

        if wire is not None:
            key = ThemeKey.wire(wire)
            if key not in self.themes and self.config.strict_references:
                raise UndefinedWireTheme(f"wire type {wire.value} not defined")
            stroke = StrokeStyle(
                color=self.themes.resolve_text(key, "FILL COLOR", style.WIRE_COLOR),
                opacity=self.themes.resolve_float(key, "OPACITY", 1.0),
                width=self.themes.resolve_float(key, "THICKNESS", style.WIRE_THICKNESS),
            )
            self._emit(leader(
                wire,
                (cx, cy),
                self.cursor.leader_end(),
                row.group_diameter / 2,
                stroke,
                self.config.sine_samples_per_period,
            ))

        if pin_type is not None:
            key = ThemeKey.pin_type(pin_type)
            self._emit(pin_marker(pin_type, cx, cy, row.pin_diameter, row.direction, self._fill(key)))

    def _fill(self, key: ThemeKey) -> StrokeStyle:
        return StrokeStyle(
            color=self.themes.resolve_text(key, "FILL COLOR", style.MARKER_COLOR),
            opacity=self.themes.resolve_float(key, "OPACITY", 1.0),
        )

    def _box_key(self, style_key: ThemeKey) -> ThemeKey:
        key = ThemeKey.box(self.themes.resolve_text(style_key, "BOXES", style.DEFAULT_BOX))
        if key not in self.themes and self.config.strict_references:
            raise UndefinedBoxReference(f"box {key.name} used for {style_key} theme, but not defined")
        return key

    def _box_width(self, label: str) -> float:
        return self.themes.resolve_float(self._box_key(ThemeKey.label(label)), "WIDTH", style.BOX_WIDTH)

    def _label_box(self, label: str, content: str, offset: float) -> None:
        row = self.cursor.require_row()
        style_key = ThemeKey.label(label)
        box = BoxStyle.resolve(self.themes, style_key, self._box_key(style_key))
        x, y = self.cursor.box_origin(offset, box.width, box.height)
        self._emit(text_box(x, y, box, content, row.justify_x, row.justify_y, theme=label))

    # ------------------------------------------------------------------
    # Document helpers
    # ------------------------------------------------------------------

    def _emit(self, element: Element) -> None:
        self.document.add(element)
        self.metrics.record_primitives(_count(element))

    def _flush(self, flushed: Optional[Text]) -> None:
        if flushed is not None:
            self.metrics.messages_flushed += 1
            self.metrics.record_primitives(1)


def _count(element: Element) -> int:
    if isinstance(element, Group):
        return 1 + sum(_count(child) for child in element.children)
    return 1


def render_file(
    path: str | Path,
    config: Optional[GenPinoutConfig] = None,
    http_client: httpx.Client | None = None,
) -> PinoutRenderer:
    """Convenience: parse a script from disk and render it; assets resolve next to it."""
    script = Path(path)
    renderer = PinoutRenderer(config, base_dir=script.parent, http_client=http_client)
    renderer.process(parse_csv_file(script))
    return renderer
