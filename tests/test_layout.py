"""Test the pin row layout cursor."""

import pytest

from genpinout.errors import RowNotConfigured
from genpinout.render.layout import LayoutCursor, RowConfig
from genpinout.types import JustifyY, Side


def _cursor(**row) -> LayoutCursor:
    cursor = LayoutCursor()
    cursor.move_anchor(100, 200)
    cursor.begin_row(RowConfig(**row))
    return cursor


def _width(label: str) -> float:
    return 50.0


def test_requires_pinset():
    cursor = LayoutCursor()
    with pytest.raises(RowNotConfigured):
        cursor.pin_center()


def test_pin_center_and_leader():
    cursor = _cursor(side=Side.RIGHT, line_step=20, leader_length=30)
    assert cursor.pin_center() == (100, 210)
    assert cursor.leader_end() == (130, 210)

    cursor.advance_row()
    assert cursor.pin_center() == (100, 230)


def test_leader_vertical_step():
    cursor = _cursor(side=Side.LEFT, line_step=20, leader_length=30, leader_v_step=5)
    assert cursor.pin_center() == (100, 215)
    assert cursor.leader_end() == (70, 210)


def test_unpacked_row_keeps_empty_slots():
    cursor = _cursor(side=Side.RIGHT, leader_length=10, column_gap=5)
    slots, offset = cursor.place_columns(["A", "B", "C"], ["1", "", "3"], _width)
    assert [s.label for s in slots] == ["A", "C"]
    assert [s.offset for s in slots] == [10, 120]
    assert offset == 175


def test_packed_row_closes_gaps():
    cursor = _cursor(side=Side.RIGHT, packed=True, leader_length=10, column_gap=5)
    slots, _ = cursor.place_columns(["A", "B", "C"], ["1", "", "3"], _width)
    assert [s.offset for s in slots] == [10, 65]


def test_left_side_grows_leftwards():
    cursor = _cursor(side=Side.LEFT, leader_length=10, column_gap=5, line_step=20)
    slots, _ = cursor.place_columns(["A", "B"], ["1", "2"], _width)
    assert [s.offset for s in slots] == [-10, -65]
    # left boxes end at their offset
    assert cursor.box_origin(-10, 50, 20) == (40, 200)


def test_extra_values_discarded():
    cursor = _cursor()
    slots, _ = cursor.place_columns(["A"], ["1", "2", "3"], _width)
    assert len(slots) == 1


def test_box_vertical_justification():
    assert _cursor(side=Side.RIGHT, line_step=30).box_origin(0, 50, 20) == (100, 205)
    assert _cursor(side=Side.RIGHT, line_step=30, justify_y=JustifyY.TOP).box_origin(0, 50, 20) == (100, 200)
    assert _cursor(side=Side.RIGHT, line_step=30, justify_y=JustifyY.BOTTOM).box_origin(0, 50, 20) == (100, 210)


def test_move_anchor_resets_offset():
    cursor = _cursor(line_step=10)
    cursor.advance_row()
    cursor.move_anchor(0, 0)
    assert cursor.offset_y == 0
    assert cursor.row_center_y() == 5
