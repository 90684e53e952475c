"""Layout cursor for pin rows.

The cursor tracks an anchor point and a running offset from it. Each PINSET
replaces the row configuration; each pin advances the offset by one line step.
Boxes within a row are placed along x, growing away from the device body.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from genpinout.errors import RowNotConfigured
from genpinout.render.geometry import Point
from genpinout.types import JustifyX, JustifyY, Side

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RowConfig:
    """Settings shared by every pin until the next PINSET."""

    side: Side = Side.LEFT
    packed: bool = False
    justify_x: JustifyX = JustifyX.CENTER
    justify_y: JustifyY = JustifyY.CENTER
    line_step: float = 10.0
    pin_diameter: float = 0.0
    group_diameter: float = 0.0
    leader_length: float = 10.0
    column_gap: float = 10.0
    leader_v_step: float = 0.0

    @property
    def direction(self) -> int:
        return self.side.direction


@dataclass
class ColumnSlot:
    """A box to draw for one pin-function column."""

    label: str
    text: str
    offset: float  # x offset from the pin, before side correction


@dataclass
class LayoutCursor:
    anchor_x: float = 0.0
    anchor_y: float = 0.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    row: Optional[RowConfig] = field(default=None)

    def move_anchor(self, x: float, y: float) -> None:
        self.anchor_x = x
        self.anchor_y = y
        self.offset_x = 0.0
        self.offset_y = 0.0

    def begin_row(self, row: RowConfig) -> None:
        self.row = row

    def require_row(self) -> RowConfig:
        if self.row is None:
            raise RowNotConfigured("line not set up with a prior PINSET")
        return self.row

    # ------------------------------------------------------------------
    # Pin geometry
    # ------------------------------------------------------------------

    def row_center_y(self) -> float:
        row = self.require_row()
        return self.anchor_y + self.offset_y + row.line_step / 2

    def pin_center(self) -> Point:
        row = self.require_row()
        return (self.anchor_x + self.offset_x, self.row_center_y() + row.leader_v_step)

    def leader_end(self) -> Point:
        row = self.require_row()
        x, _ = self.pin_center()
        return (x + row.direction * row.leader_length, self.row_center_y())

    def first_box_offset(self) -> float:
        row = self.require_row()
        return row.direction * row.leader_length

    # ------------------------------------------------------------------
    # Boxes
    # ------------------------------------------------------------------

    def box_origin(self, box_offset: float, width: float, height: float) -> Point:
        """Top-left corner of a box at ``box_offset`` within the current row."""
        row = self.require_row()
        x = self.anchor_x + self.offset_x + box_offset
        if row.direction < 0:
            x -= width

        y = self.anchor_y + self.offset_y
        if row.justify_y is JustifyY.CENTER:
            y += (row.line_step - height) / 2
        elif row.justify_y is JustifyY.BOTTOM:
            y += row.line_step - height
        return (x, y)

    def advance_box(self, box_offset: float, width: float) -> float:
        row = self.require_row()
        return box_offset + row.direction * (row.column_gap + width)

    def place_columns(
        self,
        labels: Sequence[str],
        values: Sequence[Optional[str]],
        box_width: Callable[[str], float],
    ) -> tuple[list[ColumnSlot], float]:
        """Assign an x offset to each non-empty column value.

        Empty values still consume a slot in unpacked rows. Returns the slots
        and the offset following the last one.
        """
        row = self.require_row()
        if len(values) > len(labels):
            log.warning(
                "Too many entries on pin line, %d extra discarded",
                len(values) - len(labels),
            )

        offset = self.first_box_offset()
        slots: list[ColumnSlot] = []
        for label, value in zip(labels, values):
            if value:
                slots.append(ColumnSlot(label=label, text=value, offset=offset))
                offset = self.advance_box(offset, box_width(label))
            elif not row.packed:
                offset = self.advance_box(offset, box_width(label))
        return slots, offset

    def advance_row(self) -> None:
        row = self.require_row()
        self.offset_y += row.line_step
