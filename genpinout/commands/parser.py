"""CSV script parser.

Each row is ``KEYWORD, arg, arg, ...``. Blank rows and rows whose first cell
starts with ``#`` are skipped. ``BOX`` defines a box theme before ``DRAW`` and
draws a box after it. Sizes may be written as percentages (``50%``), which are
stored as fractions where 0.9999 means 100%.
"""

from __future__ import annotations

import csv
import io
import logging
from enum import Enum
from pathlib import Path
from typing import Callable, NoReturn, Optional, Sequence, TypeVar

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
from genpinout.errors import CommandParseError
from genpinout.render.style import FULL_SCALE
from genpinout.render.theme import ThemeValue
from genpinout.types import (
    FontSlant,
    FontStretch,
    FontWeight,
    JustifyX,
    JustifyY,
    PinType,
    Side,
    WireType,
)

log = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


class _Row:
    """Cell accessor for one CSV row; index 0 is the keyword."""

    def __init__(self, cells: Sequence[str], line: int) -> None:
        self.cells = [cell.strip() for cell in cells]
        self.line = line

    @property
    def keyword(self) -> str:
        return " ".join(self.cells[0].upper().split())

    def __len__(self) -> int:
        return len(self.cells)

    def error(self, message: str) -> CommandParseError:
        return CommandParseError(self.line, f"{self.keyword}: {message}")

    def text(self, index: int, default: Optional[str] = None) -> Optional[str]:
        if index < len(self.cells) and self.cells[index]:
            return self.cells[index]
        return default

    def required(self, index: int, what: str) -> str:
        value = self.text(index)
        if value is None:
            raise self.error(f"missing {what}")
        return value

    def number(self, index: int, default: Optional[float] = None) -> Optional[float]:
        value = self.text(index)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError:
            raise self.error(f"expected a number in column {index + 1}, got {value!r}")

    def integer(self, index: int, default: Optional[int] = None) -> Optional[int]:
        number = self.number(index)
        if number is None:
            return default
        if number != int(number):
            raise self.error(f"expected a whole number in column {index + 1}, got {number}")
        return int(number)

    def size(self, index: int, default: Optional[float] = None) -> Optional[float]:
        value = self.text(index)
        if value is None:
            return default
        if value.endswith("%"):
            try:
                percent = float(value[:-1])
            except ValueError:
                raise self.error(f"bad percentage {value!r}")
            return FULL_SCALE * min(percent, 100.0) / 100
        return self.number(index)

    def enum(self, index: int, enum_cls: type[E], default: Optional[E] = None, lower: bool = False) -> Optional[E]:
        value = self.text(index)
        if value is None:
            return default
        value = " ".join(value.split())
        try:
            return enum_cls(value.lower() if lower else value.upper())
        except ValueError:
            choices = ", ".join(member.value for member in enum_cls)
            raise self.error(f"{value!r} must be one of {choices}")

    def flag(self, index: int, true: Sequence[str], false: Sequence[str], default: bool) -> bool:
        value = self.text(index)
        if value is None:
            return default
        if value.upper() in true:
            return True
        if value.upper() in false:
            return False
        raise self.error(f"{value!r} must be one of {', '.join([*true, *false])}")


# ---------------------------------------------------------------------------
# Cascading theme attributes
# ---------------------------------------------------------------------------

def _text_value(row: _Row, index: int) -> Optional[ThemeValue]:
    value = row.text(index)
    return None if value is None else ThemeValue.text(value)


def _float_value(row: _Row, index: int) -> Optional[ThemeValue]:
    value = row.number(index)
    return None if value is None else ThemeValue.number(value)


def _enum_value(enum_cls: type[Enum]) -> Callable[[_Row, int], Optional[ThemeValue]]:
    def convert(row: _Row, index: int) -> Optional[ThemeValue]:
        member = row.enum(index, enum_cls, lower=True)
        return None if member is None else ThemeValue.of(member)
    return convert


THEME_ATTRIBUTES: dict[str, Callable[[_Row, int], Optional[ThemeValue]]] = {
    "BORDER COLOR": _text_value,
    "BORDER WIDTH": _float_value,
    "BORDER OPACITY": _float_value,
    "FILL COLOR": _text_value,
    "OPACITY": _float_value,
    "FONT": _text_value,
    "FONT SIZE": _float_value,
    "FONT COLOR": _text_value,
    "FONT SLANT": _enum_value(FontSlant),
    "FONT BOLD": _enum_value(FontWeight),
    "FONT STRETCH": _enum_value(FontStretch),
    "FONT OUTLINE": _text_value,
    "FONT OUTLINE THICKNESS": _float_value,
    "BOXES": _text_value,
}


def _theme_attribute(row: _Row) -> SetThemeAttribute:
    convert = THEME_ATTRIBUTES[row.keyword]
    default = convert(row, 1)
    if default is None:
        raise row.error("DEFAULT entry can not be blank")
    return SetThemeAttribute(
        attribute=row.keyword,
        default=default,
        pin_type=convert(row, 2),
        group=convert(row, 3),
        overrides=[convert(row, i) for i in range(4, len(row))],
    )


# ---------------------------------------------------------------------------
# Setup phase
# ---------------------------------------------------------------------------

def _labels(row: _Row) -> DeclareLabels:
    if len(row) < 2:
        raise row.error("needs at least DEFAULT, TYPE, GROUP and one label")
    labels = list(row.cells[4:])
    while labels and not labels[-1]:
        labels.pop()
    for column, cell in enumerate(labels, start=5):
        if not cell:
            raise row.error(f"label in column {column} is blank")
    return DeclareLabels(
        default=row.cells[1],
        pin_type=row.text(2),
        group=row.text(3),
        labels=labels,
    )


def _pin_type(row: _Row) -> DefinePinType:
    return DefinePinType(
        pin_type=row.enum(1, PinType) or _missing(row, "pin type"),
        color=row.text(2),
        opacity=row.number(3),
    )


def _wire(row: _Row) -> DefineWire:
    return DefineWire(
        wire=row.enum(1, WireType) or _missing(row, "wire type"),
        color=row.text(2),
        opacity=row.number(3),
        thickness=row.number(4),
    )


def _group(row: _Row) -> DefineGroup:
    return DefineGroup(name=row.required(1, "group name"), color=row.text(2), opacity=row.number(3))


def _box_theme(row: _Row) -> DefineBox:
    return DefineBox(
        name=row.required(1, "box name"),
        border_color=row.text(2),
        border_opacity=row.number(3),
        fill_color=row.text(4),
        fill_opacity=row.number(5),
        border_width=row.number(6),
        width=row.number(7),
        height=row.number(8),
        corner_rx=row.number(9),
        corner_ry=row.number(10),
        skew=row.number(11),
        skew_offset=row.number(12),
    )


def _text_font(row: _Row) -> DefineFont:
    return DefineFont(
        name=row.required(1, "font name"),
        family=row.text(2),
        size=row.number(3),
        outline_color=row.text(4),
        color=row.text(5),
        slant=row.enum(6, FontSlant, lower=True),
        weight=row.enum(7, FontWeight, lower=True),
        stretch=row.enum(8, FontStretch, lower=True),
        outline_thickness=row.number(9),
    )


def _page(row: _Row) -> SetPage:
    return SetPage(page=row.required(1, "page name").upper())


def _dpi(row: _Row) -> SetDpi:
    dpi = row.integer(1)
    if dpi is None:
        raise row.error("missing DPI value")
    return SetDpi(dpi=dpi)


# ---------------------------------------------------------------------------
# Draw phase
# ---------------------------------------------------------------------------

def _google_font(row: _Row) -> EmbedGoogleFont:
    return EmbedGoogleFont(link=row.required(1, "<link>"))


def _image(row: _Row) -> DrawImage:
    return DrawImage(
        name=row.required(1, "image name"),
        x=row.size(2),
        y=row.size(3),
        width=row.size(4),
        height=row.size(5),
        crop_x=row.number(6),
        crop_y=row.number(7),
        crop_width=row.number(8),
        crop_height=row.number(9),
        rotation=row.number(10, 0.0),
    )


def _icon(row: _Row) -> DrawIcon:
    return DrawIcon(
        name=row.required(1, "icon name"),
        x=row.size(2),
        y=row.size(3),
        width=row.size(4),
        height=row.size(5),
        rotation=row.number(6, 0.0),
    )


def _anchor(row: _Row) -> MoveAnchor:
    x, y = row.size(1), row.size(2)
    if x is None or y is None:
        raise row.error("both X and Y must be given")
    return MoveAnchor(x=x, y=y)


def _pinset(row: _Row) -> BeginPinSet:
    defaults = BeginPinSet()
    return BeginPinSet(
        side=row.enum(1, Side, defaults.side),
        packed=row.flag(2, ("PACKED", "TRUE", "YES", "1"), ("UNPACKED", "FALSE", "NO", "0"), defaults.packed),
        justify_x=row.enum(3, JustifyX, defaults.justify_x),
        justify_y=row.enum(4, JustifyY, defaults.justify_y),
        line_step=row.number(5, defaults.line_step),
        pin_diameter=row.number(6, defaults.pin_diameter),
        group_diameter=row.number(7, defaults.group_diameter),
        leader_length=row.number(8, defaults.leader_length),
        column_gap=row.number(9, defaults.column_gap),
        leader_v_step=row.number(10, defaults.leader_v_step),
    )


def _pin(row: _Row) -> DrawPin:
    return DrawPin(
        wire=row.enum(1, WireType),
        pin_type=row.enum(2, PinType),
        group=row.text(3),
        columns=row.cells[4:],
    )


def _pintext(row: _Row) -> DrawPinText:
    return DrawPinText(
        wire=row.enum(1, WireType),
        pin_type=row.enum(2, PinType),
        group=row.text(3),
        theme=row.text(4, ""),
        label=row.text(5),
        text=row.text(6, ""),
    )


def _box(row: _Row) -> DrawBox:
    x, y = row.size(2), row.size(3)
    if x is None or y is None:
        raise row.error("box X and Y location are required")
    return DrawBox(
        theme=row.required(1, "box theme name"),
        x=x,
        y=y,
        width=row.size(4),
        height=row.size(5),
        justify_x=row.enum(6, JustifyX),
        justify_y=row.enum(7, JustifyY),
        text=row.text(8),
    )


def _message(row: _Row) -> BeginMessage:
    return BeginMessage(
        x=row.number(1),
        y=row.number(2),
        line_step=row.number(3),
        font=row.text(4),
        font_size=row.number(5),
        justify_x=row.enum(6, JustifyX),
        justify_y=row.enum(7, JustifyY),
    )


def _text(row: _Row) -> AppendText:
    marker = (row.text(4) or "").upper()
    return AppendText(
        edge_color=row.text(1, ""),
        color=row.text(2, ""),
        text=row.cells[3] if len(row) > 3 else "",
        new_line=marker in ("NL", "TRUE", "YES", "1"),
    )


def _missing(row: _Row, what: str) -> NoReturn:
    raise row.error(f"missing {what}")


SETUP_KEYWORDS: dict[str, Callable[[_Row], Command]] = {
    "LABELS": _labels,
    "TYPE": _pin_type,
    "WIRE": _wire,
    "GROUP": _group,
    "BOX": _box_theme,
    "TEXT FONT": _text_font,
    "PAGE": _page,
    "DPI": _dpi,
    **{name: _theme_attribute for name in THEME_ATTRIBUTES},
}

DRAW_KEYWORDS: dict[str, Callable[[_Row], Command]] = {
    "GOOGLEFONT": _google_font,
    "IMAGE": _image,
    "ICON": _icon,
    "ANCHOR": _anchor,
    "PINSET": _pinset,
    "PIN": _pin,
    "PINTEXT": _pintext,
    "BOX": _box,
    "MESSAGE": _message,
    "TEXT": _text,
    "END MESSAGE": lambda row: EndMessage(),
}


csv.register_dialect(
    "pinout",
    quoting=csv.QUOTE_MINIMAL,
    lineterminator="\n",
    skipinitialspace=True,
)


def parse_csv(text: str) -> list[Command]:
    """Parse a pinout script into command records."""
    commands: list[Command] = []
    drawing = False
    reader = csv.reader(io.StringIO(text), dialect="pinout")

    for cells in reader:
        line = reader.line_num
        if not cells or not any(cell.strip() for cell in cells):
            continue
        row = _Row(cells, line)
        if not row.cells[0] or row.cells[0].startswith("#"):
            continue

        keyword = row.keyword
        if keyword == "DRAW":
            drawing = True
            commands.append(BeginDraw())
            continue

        table = DRAW_KEYWORDS if drawing else SETUP_KEYWORDS
        handler = table.get(keyword)
        if handler is None:
            other = SETUP_KEYWORDS if drawing else DRAW_KEYWORDS
            if keyword in other:
                where = "before" if not drawing else "after"
                raise row.error(f"command not allowed {where} DRAW")
            raise row.error("unknown command")

        commands.append(handler(row))

    log.debug("Parsed %d command(s)", len(commands))
    return commands


def parse_csv_file(path: str | Path) -> list[Command]:
    """Parse a pinout script from disk."""
    with Path(path).open("r", encoding="utf-8", newline="") as f:
        return parse_csv(f.read())
