"""Shared enums used by command records and the renderer."""

from enum import Enum


class Phase(str, Enum):
    SETUP = "setup"
    DRAW = "draw"


class PinType(str, Enum):
    IO = "IO"
    INPUT = "INPUT"
    OUTPUT = "OUTPUT"


class WireType(str, Enum):
    DIGITAL = "DIGITAL"
    PWM = "PWM"
    ANALOG = "ANALOG"
    HS_ANALOG = "HS-ANALOG"
    POWER = "POWER"


class Side(str, Enum):
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    TOP_LEFT = "TOP LEFT"
    TOP_RIGHT = "TOP RIGHT"
    BOTTOM_LEFT = "BOTTOM LEFT"
    BOTTOM_RIGHT = "BOTTOM RIGHT"

    @property
    def direction(self) -> int:
        """-1 when labels grow to the left of the pin, +1 otherwise."""
        return -1 if "LEFT" in self.value else 1


class JustifyX(str, Enum):
    LEFT = "LEFT"
    CENTER = "CENTER"
    RIGHT = "RIGHT"


class JustifyY(str, Enum):
    TOP = "TOP"
    CENTER = "CENTER"
    BOTTOM = "BOTTOM"


class FontSlant(str, Enum):
    NORMAL = "normal"
    ITALIC = "italic"
    OBLIQUE = "oblique"


class FontWeight(str, Enum):
    NORMAL = "normal"
    BOLD = "bold"
    BOLDER = "bolder"
    LIGHTER = "lighter"
    W100 = "100"
    W200 = "200"
    W300 = "300"
    W400 = "400"
    W500 = "500"
    W600 = "600"
    W700 = "700"
    W800 = "800"
    W900 = "900"


class FontStretch(str, Enum):
    NORMAL = "normal"
    WIDER = "wider"
    NARROWER = "narrower"
    ULTRA_CONDENSED = "ultra-condensed"
    EXTRA_CONDENSED = "extra-condensed"
    CONDENSED = "condensed"
    SEMI_CONDENSED = "semi-condensed"
    SEMI_EXPANDED = "semi-expanded"
    EXPANDED = "expanded"
    EXTRA_EXPANDED = "extra-expanded"
    ULTRA_EXPANDED = "ultra-expanded"
