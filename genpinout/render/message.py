"""Multi-line text messages.

A message is one SVG ``<text>`` element built up from coloured spans. A segment
asking for a new line only takes effect when the next segment arrives, so a
trailing newline never produces an empty line.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from genpinout.errors import NoOpenMessage
from genpinout.render import style
from genpinout.render.document import Document, Text, TextSpan
from genpinout.render.symbols import FontStyle
from genpinout.render.theme import ThemeKey, ThemeStore
from genpinout.types import JustifyX, JustifyY

log = logging.getLogger(__name__)

_ANCHORS = {
    JustifyX.LEFT: "start",
    JustifyX.CENTER: "middle",
    JustifyX.RIGHT: "end",
}


@dataclass
class MessageSettings:
    """Values that carry over from one message to the next."""

    line_step: float = style.MESSAGE_LINE_STEP
    font: str = style.MESSAGE_FONT
    font_size: Optional[float] = None


@dataclass
class OpenMessage:
    x: float
    y: float
    y_shift: float
    line_step: float
    font_key: ThemeKey
    font: FontStyle
    element: Text
    offset_y: float = 0.0
    pending_newline: bool = False
    segments: list[TextSpan] = field(default_factory=list)


class MessageWriter:
    """Owns the single open message session and flushes it into the document."""

    def __init__(self, themes: ThemeStore, document: Document):
        self.themes = themes
        self.document = document
        self.settings = MessageSettings()
        self.current: Optional[OpenMessage] = None

    @property
    def is_open(self) -> bool:
        return self.current is not None

    def begin(
        self,
        x: Optional[float] = None,
        y: Optional[float] = None,
        line_step: Optional[float] = None,
        font: Optional[str] = None,
        font_size: Optional[float] = None,
        justify_x: Optional[JustifyX] = None,
        justify_y: Optional[JustifyY] = None,
    ) -> Optional[Text]:
        """Open a new message, flushing any open one first. Returns the flushed element."""
        flushed = self.end()

        if line_step is not None:
            self.settings.line_step = line_step
        if font:
            self.settings.font = font
        if font_size is not None:
            self.settings.font_size = font_size

        key = self.themes.font_key(self.settings.font)
        font_style = FontStyle.resolve(self.themes, key)
        if self.settings.font_size is not None:
            font_style.size = self.settings.font_size
        else:
            font_style.size = self.themes.resolve_float(key, "FONT SIZE", style.MESSAGE_FONT_SIZE)
        if self.themes.lookup(key, "FONT") is None:
            font_style.family = style.MESSAGE_FONT

        justify_x = justify_x or JustifyX.CENTER
        justify_y = justify_y or JustifyY.CENTER
        if justify_y is JustifyY.TOP:
            y_shift = font_style.size / 2
        elif justify_y is JustifyY.BOTTOM:
            y_shift = -font_style.size / 2
        else:
            y_shift = 0.0

        origin_x = x or 0.0
        origin_y = y or 0.0
        element = Text(
            x=origin_x,
            y=origin_y + y_shift,
            font_family=font_style.family,
            font_size=font_style.size,
            fill=font_style.color,
            stroke=font_style.outline_color,
            font_style=font_style.slant,
            font_weight=font_style.weight,
            font_stretch=font_style.stretch,
            text_anchor=_ANCHORS[justify_x],
        )
        self.current = OpenMessage(
            x=origin_x,
            y=origin_y,
            y_shift=y_shift,
            line_step=self.settings.line_step,
            font_key=key,
            font=font_style,
            element=element,
        )
        log.debug("Message opened at (%s, %s) with font %s", origin_x, origin_y, key)
        return flushed

    def append(self, edge_color: str, color: str, text: str, new_line: bool = False) -> TextSpan:
        session = self.current
        if session is None:
            raise NoOpenMessage("no multiline text message started")

        span = TextSpan(
            text=text,
            fill=color or session.font.color,
            stroke=edge_color or session.font.outline_color,
        )
        if session.pending_newline:
            session.pending_newline = False
            session.offset_y += session.line_step
            span.x = session.x
            span.y = session.y + session.offset_y + session.y_shift

        session.segments.append(span)
        session.element.spans.append(span)
        session.pending_newline = new_line
        return span

    def end(self) -> Optional[Text]:
        """Flush the open message into the document; a no-op when none is open."""
        session = self.current
        if session is None:
            return None
        self.current = None
        self.document.add(session.element)
        log.debug("Message flushed with %d segment(s)", len(session.segments))
        return session.element
