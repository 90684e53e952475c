"""Error taxonomy for parsing and rendering pinout scripts.

Every error aborts the current render pass. ``RenderError`` carries a stable
``code`` for the CLI and, once it has passed through the command loop, the index
and kind of the command that raised it.
"""

from __future__ import annotations

from typing import Optional


class GenPinoutError(Exception):
    """Base class for all genpinout failures."""

    code = "E_GENPINOUT"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class CommandParseError(GenPinoutError):
    """A CSV row could not be turned into a command record."""

    code = "E_PARSE"

    def __init__(self, line: int, message: str) -> None:
        super().__init__(message)
        self.line = line

    def __str__(self) -> str:
        return f"line {self.line}: {self.message}"


class RenderError(GenPinoutError):
    code = "E_RENDER"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.index: Optional[int] = None
        self.kind: Optional[str] = None

    def at(self, index: int, kind: str) -> RenderError:
        """Record the failing command; the first caller wins."""
        if self.index is None:
            self.index = index
            self.kind = kind
        return self

    def __str__(self) -> str:
        if self.index is None:
            return self.message
        return f"command #{self.index} ({self.kind}): {self.message}"


class PhaseError(RenderError):
    code = "E_PHASE"


class DuplicateLabelDeclaration(RenderError):
    code = "E_LABELS_TWICE"


class InvalidLabelDeclaration(RenderError):
    code = "E_LABELS"


class UndefinedGroup(RenderError):
    code = "E_UNDEFINED_GROUP"


class UndefinedBoxReference(RenderError):
    code = "E_UNDEFINED_BOX"


class UndefinedWireTheme(RenderError):
    code = "E_UNDEFINED_WIRE"


class InvalidPageSize(RenderError):
    code = "E_PAGE"


class InvalidDpi(RenderError):
    code = "E_DPI"


class MissingAsset(RenderError):
    code = "E_MISSING_ASSET"


class InvalidAsset(RenderError):
    code = "E_INVALID_ASSET"


class InvalidCropBounds(RenderError):
    code = "E_CROP_BOUNDS"


class PartialCropSpecification(RenderError):
    code = "E_CROP_PARTIAL"


class RowNotConfigured(RenderError):
    code = "E_NO_PINSET"


class NoOpenMessage(RenderError):
    code = "E_NO_MESSAGE"


class FontFetchError(RenderError):
    code = "E_FONT_FETCH"


class OutputExistsError(GenPinoutError):
    code = "E_OUTPUT_EXISTS"
