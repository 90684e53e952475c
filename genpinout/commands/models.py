"""Typed command records.

One record per script keyword. Every record carries a ``kind`` discriminator
and the phase it belongs to; ``Command`` is the discriminated union the
renderer consumes.
"""

from __future__ import annotations

from typing import Annotated, ClassVar, Literal, Optional, Union

from pydantic import BaseModel, Field

from genpinout.render.theme import ThemeValue
from genpinout.types import (
    FontSlant,
    FontStretch,
    FontWeight,
    JustifyX,
    JustifyY,
    Phase,
    PinType,
    Side,
    WireType,
)


class SetupCommand(BaseModel):
    phase: ClassVar[Phase] = Phase.SETUP


class DrawCommand(BaseModel):
    phase: ClassVar[Phase] = Phase.DRAW


# ---------------------------------------------------------------------------
# Setup phase
# ---------------------------------------------------------------------------

class DeclareLabels(SetupCommand):
    kind: Literal["labels"] = "labels"
    default: str = "DEFAULT"
    pin_type: Optional[str] = "TYPE"
    group: Optional[str] = "GROUP"
    labels: list[str] = Field(default_factory=list)


class SetThemeAttribute(SetupCommand):
    """A cascading attribute row: DEFAULT, TYPE, GROUP, then one value per label."""

    kind: Literal["theme_attribute"] = "theme_attribute"
    attribute: str
    default: ThemeValue
    pin_type: Optional[ThemeValue] = None
    group: Optional[ThemeValue] = None
    overrides: list[Optional[ThemeValue]] = Field(default_factory=list)


class DefinePinType(SetupCommand):
    kind: Literal["pin_type"] = "pin_type"
    pin_type: PinType
    color: Optional[str] = None
    opacity: Optional[float] = None


class DefineWire(SetupCommand):
    kind: Literal["wire"] = "wire"
    wire: WireType
    color: Optional[str] = None
    opacity: Optional[float] = None
    thickness: Optional[float] = None


class DefineGroup(SetupCommand):
    kind: Literal["group"] = "group"
    name: str
    color: Optional[str] = None
    opacity: Optional[float] = None


class DefineBox(SetupCommand):
    kind: Literal["box_theme"] = "box_theme"
    name: str
    border_color: Optional[str] = None
    border_opacity: Optional[float] = None
    fill_color: Optional[str] = None
    fill_opacity: Optional[float] = None
    border_width: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    corner_rx: Optional[float] = None
    corner_ry: Optional[float] = None
    skew: Optional[float] = None
    skew_offset: Optional[float] = None


class DefineFont(SetupCommand):
    kind: Literal["text_font"] = "text_font"
    name: str
    family: Optional[str] = None
    size: Optional[float] = None
    outline_color: Optional[str] = None
    color: Optional[str] = None
    slant: Optional[FontSlant] = None
    weight: Optional[FontWeight] = None
    stretch: Optional[FontStretch] = None
    outline_thickness: Optional[float] = None


class SetPage(SetupCommand):
    kind: Literal["page"] = "page"
    page: str


class SetDpi(SetupCommand):
    kind: Literal["dpi"] = "dpi"
    dpi: int


class BeginDraw(SetupCommand):
    kind: Literal["draw"] = "draw"


# ---------------------------------------------------------------------------
# Draw phase
# ---------------------------------------------------------------------------

class EmbedGoogleFont(DrawCommand):
    kind: Literal["google_font"] = "google_font"
    link: str


class DrawImage(DrawCommand):
    kind: Literal["image"] = "image"
    name: str
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    crop_x: Optional[float] = None
    crop_y: Optional[float] = None
    crop_width: Optional[float] = None
    crop_height: Optional[float] = None
    rotation: float = 0.0


class DrawIcon(DrawCommand):
    kind: Literal["icon"] = "icon"
    name: str
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    rotation: float = 0.0


class MoveAnchor(DrawCommand):
    kind: Literal["anchor"] = "anchor"
    x: float
    y: float


class BeginPinSet(DrawCommand):
    kind: Literal["pinset"] = "pinset"
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


class DrawPin(DrawCommand):
    kind: Literal["pin"] = "pin"
    wire: Optional[WireType] = None
    pin_type: Optional[PinType] = None
    group: Optional[str] = None
    columns: list[str] = Field(default_factory=list)


class DrawPinText(DrawCommand):
    kind: Literal["pintext"] = "pintext"
    wire: Optional[WireType] = None
    pin_type: Optional[PinType] = None
    group: Optional[str] = None
    theme: str = ""
    label: Optional[str] = None
    text: str = ""


class DrawBox(DrawCommand):
    kind: Literal["box"] = "box"
    theme: str
    x: float
    y: float
    width: Optional[float] = None
    height: Optional[float] = None
    justify_x: Optional[JustifyX] = None
    justify_y: Optional[JustifyY] = None
    text: Optional[str] = None


class BeginMessage(DrawCommand):
    kind: Literal["message"] = "message"
    x: Optional[float] = None
    y: Optional[float] = None
    line_step: Optional[float] = None
    font: Optional[str] = None
    font_size: Optional[float] = None
    justify_x: Optional[JustifyX] = None
    justify_y: Optional[JustifyY] = None


class AppendText(DrawCommand):
    kind: Literal["text"] = "text"
    edge_color: str = ""
    color: str = ""
    text: str = ""
    new_line: bool = False


class EndMessage(DrawCommand):
    kind: Literal["end_message"] = "end_message"


Command = Annotated[
    Union[
        DeclareLabels,
        SetThemeAttribute,
        DefinePinType,
        DefineWire,
        DefineGroup,
        DefineBox,
        DefineFont,
        SetPage,
        SetDpi,
        BeginDraw,
        EmbedGoogleFont,
        DrawImage,
        DrawIcon,
        MoveAnchor,
        BeginPinSet,
        DrawPin,
        DrawPinText,
        DrawBox,
        BeginMessage,
        AppendText,
        EndMessage,
    ],
    Field(discriminator="kind"),
]
