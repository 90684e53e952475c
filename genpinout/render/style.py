"""Page presets and the last-resort style values used when no theme supplies one."""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------
PAGE_SIZES = {
    "A4-P": (210.0, 297.0),  # mm (portrait)
    "A4-L": (297.0, 210.0),  # mm (landscape)
    "A3-P": (297.0, 420.0),  # mm (portrait)
    "A3-L": (420.0, 297.0),  # mm (landscape)
}
DEFAULT_PAGE = "A4-L"
DEFAULT_DPI = 300
DPI_MIN = 50
DPI_MAX = 1200
MM_PER_INCH = 25.4

# A size below 1.0 is a fraction of its reference; this value means 100%.
FULL_SCALE = 0.9999

# ---------------------------------------------------------------------------
# Fallback colors and strokes
# ---------------------------------------------------------------------------
COLOR_BLACK = "black"
COLOR_WHITE = "white"
COLOR_NONE = "none"

BORDER_COLOR = COLOR_BLACK
BORDER_WIDTH = 1.0
BORDER_OPACITY = 1.0
FILL_COLOR = COLOR_WHITE
FILL_OPACITY = 1.0
WIRE_COLOR = COLOR_BLACK
WIRE_THICKNESS = 1.0
MARKER_COLOR = COLOR_BLACK

# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------
FONT_FAMILY = "sans-serif"
FONT_SIZE = 10.0
FONT_COLOR = COLOR_BLACK
FONT_SLANT = "normal"
FONT_WEIGHT = "normal"
FONT_STRETCH = "normal"
OUTLINE_THICKNESS = 0.0

# Literal two-character marker splitting box text into lines.
LINE_BREAK = "\\n"

# ---------------------------------------------------------------------------
# Boxes
# ---------------------------------------------------------------------------
DEFAULT_BOX = "STD"
BOX_WIDTH = 100.0
BOX_HEIGHT = 20.0

# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------
MESSAGE_LINE_STEP = 15.0
MESSAGE_FONT = "sans-serif"
MESSAGE_FONT_SIZE = 12.0

# ---------------------------------------------------------------------------
# Leaders
# ---------------------------------------------------------------------------
SINE_SAMPLES_PER_PERIOD = 32
WAVE_PERIODS = {
    "ANALOG": 1,
    "HS-ANALOG": 2,
}

# Natural size assumed for icons that declare none.
ICON_SIZE = 100.0
