"""Test multi-line message sessions."""

import pytest

from genpinout.errors import NoOpenMessage
from genpinout.render.document import Document, Text
from genpinout.render.message import MessageWriter
from genpinout.render.theme import ThemeKey, ThemeStore
from genpinout.types import JustifyX, JustifyY


def _writer(themes: ThemeStore | None = None) -> MessageWriter:
    return MessageWriter(themes or ThemeStore(), Document())


def test_append_without_message_fails():
    with pytest.raises(NoOpenMessage):
        _writer().append("", "red", "hello")


def test_new_line_applies_to_next_segment():
    writer = _writer()
    writer.begin(x=10, y=20)
    first = writer.append("", "red", "Hello", new_line=True)
    second = writer.append("", "", "World")

    assert first.x is None and first.fill == "red"
    assert (second.x, second.y) == (10, 35)
    assert second.fill == "black"

    element = writer.end()
    assert isinstance(element, Text)
    assert element.content == "HelloWorld"
    assert writer.document.elements == [element]


def test_trailing_new_line_adds_nothing():
    writer = _writer()
    writer.begin(x=0, y=0)
    writer.append("", "", "only", new_line=True)
    element = writer.end()
    assert len(element.spans) == 1
    assert element.spans[0].y is None


def test_reopen_flushes_previous_message():
    writer = _writer()
    writer.begin(x=0, y=0)
    writer.append("", "", "first")
    flushed = writer.begin(x=0, y=50)
    writer.append("", "", "second")
    writer.end()

    assert flushed is not None and flushed.content == "first"
    assert [e.content for e in writer.document.elements] == ["first", "second"]
    assert writer.end() is None
    assert not writer.is_open


def test_settings_persist_between_messages():
    writer = _writer()
    writer.begin(x=0, y=0, line_step=30, font_size=20)
    writer.end()
    writer.begin(x=0, y=0)
    writer.append("", "", "a", new_line=True)
    span = writer.append("", "", "b")
    element = writer.end()
    assert element.font_size == 20
    assert span.y == 30


def test_font_theme_and_justification():
    themes = ThemeStore()
    themes.define(ThemeKey.font("TITLE"), {"FONT": "Serif", "FONT SIZE": 16.0, "FONT COLOR": "blue"})
    writer = _writer(themes)
    writer.begin(x=5, y=100, font="TITLE", justify_x=JustifyX.LEFT, justify_y=JustifyY.TOP)
    span = writer.append("", "", "x")
    element = writer.end()

    assert element.font_family == "Serif"
    assert element.font_size == 16
    assert element.text_anchor == "start"
    assert element.y == 108
    assert span.fill == "blue"
