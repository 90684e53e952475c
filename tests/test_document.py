"""Test SVG primitives and text boxes."""

from genpinout.render.document import Circle, Document, Group, Rect, Text, TextSpan
from genpinout.render.symbols import BoxStyle, FontStyle, text_box
from genpinout.types import JustifyX, JustifyY


def test_text_is_escaped():
    text = Text(x=0, y=0, spans=[TextSpan("A<B & C")])
    assert "A&lt;B &amp; C" in text.to_svg()


def test_attributes_skip_unset_values():
    svg = Rect(x=1.5, y=2, width=10, height=5).to_svg()
    assert 'x="1.5"' in svg
    assert "rx=" not in svg
    assert "transform=" not in svg


def test_document_walk_descends_into_groups():
    doc = Document()
    inner = Circle(cx=0, cy=0, r=1)
    doc.add(Group(children=[Rect(0, 0, 1, 1), inner]))
    doc.add(Circle(cx=5, cy=5, r=1))
    assert doc.count() == 4
    assert doc.find(Circle)[0] is inner


def test_text_box_two_lines():
    box = BoxStyle(width=80, height=30, font=FontStyle(size=10))
    group = text_box(0, 0, box, "GPIO\\n4", JustifyX.LEFT, JustifyY.CENTER, theme="NAME")
    rect, first, second = group.children
    assert group.transform == "translate(40 15)"
    assert (rect.x, rect.y) == (-40, -15)
    assert first.content == "GPIO" and second.content == "4"
    assert first.x == -40 and first.text_anchor == "start"
    assert second.y - first.y == 10


def test_text_box_drops_third_line():
    box = BoxStyle(width=80, height=30)
    group = text_box(0, 0, box, "a\\nb\\nc")
    assert [c.content for c in group.children[1:]] == ["a", "b"]


def test_text_box_skew():
    box = BoxStyle(width=80, height=20, skew=-20, skew_offset=5)
    (rect,) = text_box(0, 0, box, None).children
    assert rect.transform == "translate(5 0) skewX(-20)"
