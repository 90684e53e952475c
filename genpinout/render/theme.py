"""Cascading theme registry.

Themes are flat attribute maps addressed by a typed ``ThemeKey``. Lookups cascade
from the requested theme to ``DEFAULT`` and finally to a caller-supplied fallback,
so drawing code never fails on a missing attribute. Only missing theme *names*
used as structural references (boxes, groups) are errors.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Iterator, Mapping, NamedTuple, Optional, Sequence, TypeVar, Union

from pydantic import BaseModel, ConfigDict

from genpinout.errors import (
    DuplicateLabelDeclaration,
    InvalidLabelDeclaration,
    UndefinedBoxReference,
)
from genpinout.render.geometry import format_number
from genpinout.types import FontSlant, FontStretch, FontWeight, PinType, WireType

log = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

FIXED_LABELS = ("DEFAULT", "TYPE", "GROUP")
BOXES = "BOXES"


class ValueKind(str, Enum):
    TEXT = "text"
    FLOAT = "float"
    INTEGER = "integer"
    SLANT = "slant"
    WEIGHT = "weight"
    STRETCH = "stretch"


_ENUM_KINDS = {
    FontSlant: ValueKind.SLANT,
    FontWeight: ValueKind.WEIGHT,
    FontStretch: ValueKind.STRETCH,
}


class ThemeValue(BaseModel):
    """A single typed theme attribute value."""

    model_config = ConfigDict(frozen=True)

    kind: ValueKind
    value: Union[str, float, int]

    @classmethod
    def text(cls, value: str) -> ThemeValue:
        return cls(kind=ValueKind.TEXT, value=value)

    @classmethod
    def number(cls, value: float) -> ThemeValue:
        return cls(kind=ValueKind.FLOAT, value=float(value))

    @classmethod
    def integer(cls, value: int) -> ThemeValue:
        return cls(kind=ValueKind.INTEGER, value=int(value))

    @classmethod
    def of(cls, value: Any) -> ThemeValue:
        """Wrap a plain Python value, inferring its kind."""
        if isinstance(value, ThemeValue):
            return value
        for enum_cls, kind in _ENUM_KINDS.items():
            if isinstance(value, enum_cls):
                return cls(kind=kind, value=value.value)
        if isinstance(value, bool):
            return cls.integer(int(value))
        if isinstance(value, int):
            return cls.integer(value)
        if isinstance(value, float):
            return cls.number(value)
        return cls.text(str(value))

    def is_blank(self) -> bool:
        return self.kind is ValueKind.TEXT and not str(self.value).strip()

    def as_text(self) -> str:
        if self.kind is ValueKind.FLOAT:
            return format_number(float(self.value))
        return str(self.value)

    def as_float(self) -> Optional[float]:
        try:
            return float(self.value)
        except (TypeError, ValueError):
            return None

    def as_int(self) -> Optional[int]:
        number = self.as_float()
        return None if number is None else int(number)

    def as_enum(self, enum_cls: type[E]) -> Optional[E]:
        try:
            return enum_cls(self.value)
        except ValueError:
            return None


class ThemeKind(str, Enum):
    DEFAULT = "DEFAULT"
    TYPE = "TYPE"
    GROUP = "GROUP"
    LABEL = "LABEL"
    PINTYPE = "PINTYPE"
    PINWIRE = "PINWIRE"
    PIN_GROUP = "PIN_GROUP"
    BOX = "BOX"
    FONT = "FONT"


_PREFIXES = {
    ThemeKind.PINTYPE: "PINTYPE_",
    ThemeKind.PINWIRE: "PINWIRE_",
    ThemeKind.PIN_GROUP: "GROUP_",
    ThemeKind.BOX: "BOX_",
    ThemeKind.FONT: "FONT_",
}


class ThemeKey(NamedTuple):
    kind: ThemeKind
    name: str

    def __str__(self) -> str:
        return _PREFIXES.get(self.kind, "") + self.name

    @classmethod
    def parse(cls, name: str) -> ThemeKey:
        """Turn the ``PREFIX_<name>`` spelling used in scripts into a key."""
        if name in FIXED_LABELS:
            return cls(ThemeKind(name), name)
        for kind, prefix in _PREFIXES.items():
            if name.startswith(prefix) and len(name) > len(prefix):
                return cls(kind, name[len(prefix):])
        return cls(ThemeKind.LABEL, name)

    @classmethod
    def label(cls, name: str) -> ThemeKey:
        return cls(ThemeKind.LABEL, name)

    @classmethod
    def box(cls, name: str) -> ThemeKey:
        return cls(ThemeKind.BOX, name)

    @classmethod
    def font(cls, name: str) -> ThemeKey:
        return cls(ThemeKind.FONT, name)

    @classmethod
    def group(cls, name: str) -> ThemeKey:
        return cls(ThemeKind.PIN_GROUP, name)

    @classmethod
    def pin_type(cls, pin_type: PinType) -> ThemeKey:
        return cls(ThemeKind.PINTYPE, pin_type.value)

    @classmethod
    def wire(cls, wire: WireType) -> ThemeKey:
        return cls(ThemeKind.PINWIRE, wire.value)


DEFAULT = ThemeKey(ThemeKind.DEFAULT, "DEFAULT")
TYPE = ThemeKey(ThemeKind.TYPE, "TYPE")
GROUP = ThemeKey(ThemeKind.GROUP, "GROUP")


class ThemeStore:
    """All themes for one render pass."""

    def __init__(self) -> None:
        self._themes: dict[ThemeKey, dict[str, ThemeValue]] = {}
        self._labels: Optional[tuple[str, ...]] = None

    # ------------------------------------------------------------------
    # Labels
    # ------------------------------------------------------------------

    @property
    def labels(self) -> tuple[str, ...]:
        return self._labels or ()

    def declare_labels(
        self,
        default: str,
        pin_type: Optional[str],
        group: Optional[str],
        labels: Sequence[str],
    ) -> None:
        """Set the pin function labels. Allowed once per render pass."""
        if self._labels is not None:
            raise DuplicateLabelDeclaration("pin function labels can only be set once")

        leading = (default, pin_type or "", group or "")
        if leading != FIXED_LABELS:
            raise InvalidLabelDeclaration(
                f"first labels must be {', '.join(FIXED_LABELS)}, got {', '.join(leading)}"
            )
        if not labels:
            raise InvalidLabelDeclaration("LABELS needs at least one pin function label")

        self._labels = tuple(labels)
        for key in (DEFAULT, TYPE, GROUP):
            self._themes.setdefault(key, {})
        for label in self._labels:
            self._themes.setdefault(ThemeKey.label(label), {})
        log.debug("Pin function labels: %s", ", ".join(self._labels))

    # ------------------------------------------------------------------
    # Writers
    # ------------------------------------------------------------------

    def set_value(self, key: ThemeKey, attribute: str, value: ThemeValue) -> None:
        self._themes.setdefault(key, {})[attribute.upper()] = value

    def set_default(
        self,
        attribute: str,
        default: ThemeValue,
        pin_type: Optional[ThemeValue] = None,
        group: Optional[ThemeValue] = None,
        overrides: Sequence[Optional[ThemeValue]] = (),
    ) -> None:
        """Write an attribute to DEFAULT, TYPE, GROUP and the label columns.

        Overrides map positionally onto the declared labels; surplus values are
        dropped and blank ones leave the label inheriting from DEFAULT.
        """
        self.set_value(DEFAULT, attribute, default)
        if pin_type is not None and not pin_type.is_blank():
            self.set_value(TYPE, attribute, pin_type)
        if group is not None and not group.is_blank():
            self.set_value(GROUP, attribute, group)

        if len(overrides) > len(self.labels):
            log.debug(
                "%s: %d override(s) beyond the declared labels ignored",
                attribute, len(overrides) - len(self.labels),
            )
        for label, value in zip(self.labels, overrides):
            if value is None or value.is_blank():
                continue
            self.set_value(ThemeKey.label(label), attribute, value)

    def define(self, key: ThemeKey, attributes: Mapping[str, Any]) -> None:
        """Create or replace a namespaced theme (pin type, wire, group, box, font)."""
        self._themes[key] = {
            name.upper(): ThemeValue.of(value)
            for name, value in attributes.items()
            if value is not None
        }

    # ------------------------------------------------------------------
    # Readers
    # ------------------------------------------------------------------

    def __contains__(self, key: object) -> bool:
        return key in self._themes

    def get(self, key: ThemeKey) -> Mapping[str, ThemeValue]:
        return dict(self._themes.get(key, {}))

    def keys(self) -> list[ThemeKey]:
        return list(self._themes)

    def font_key(self, name: str) -> ThemeKey:
        """A theme used as a font: the named theme if it exists, else ``FONT_<name>``."""
        key = ThemeKey.parse(name)
        if key in self._themes:
            return key
        return ThemeKey.font(name)

    def lookup(self, key: ThemeKey, attribute: str) -> Optional[ThemeValue]:
        """Find an attribute on ``key`` or, failing that, on DEFAULT."""
        attribute = attribute.upper()
        value = self._own(key, attribute)
        if value is None and key != DEFAULT:
            value = self._own(DEFAULT, attribute)
        return value

    def resolve(self, key: ThemeKey, attribute: str, fallback: Any = None) -> Any:
        value = self.lookup(key, attribute)
        return fallback if value is None else value.value

    def resolve_text(self, key: ThemeKey, attribute: str, fallback: str) -> str:
        value = self.lookup(key, attribute)
        return fallback if value is None else value.as_text()

    def resolve_float(self, key: ThemeKey, attribute: str, fallback: float) -> float:
        value = self.lookup(key, attribute)
        number = None if value is None else value.as_float()
        return fallback if number is None else number

    def resolve_int(self, key: ThemeKey, attribute: str, fallback: int) -> int:
        value = self.lookup(key, attribute)
        number = None if value is None else value.as_int()
        return fallback if number is None else number

    def resolve_enum(self, key: ThemeKey, attribute: str, enum_cls: type[E], fallback: E) -> E:
        value = self.lookup(key, attribute)
        member = None if value is None else value.as_enum(enum_cls)
        return fallback if member is None else member

    def _own(self, key: ThemeKey, attribute: str) -> Optional[ThemeValue]:
        value = self._themes.get(key, {}).get(attribute)
        if value is None or value.is_blank():
            return None
        return value

    # ------------------------------------------------------------------
    # Cross references
    # ------------------------------------------------------------------

    def box_references(self) -> Iterator[tuple[ThemeKey, str]]:
        """Yield (theme, box name) for every theme declaring BOXES."""
        for key, attributes in self._themes.items():
            value = attributes.get(BOXES)
            if value is not None and not value.is_blank():
                yield key, value.as_text()

    def validate_box_references(self) -> None:
        for key, box_name in self.box_references():
            if ThemeKey.box(box_name) not in self._themes:
                raise UndefinedBoxReference(
                    f"box {box_name} used for {key} theme, but not defined"
                )

    def dump(self) -> dict[str, dict[str, str]]:
        """Plain-text snapshot of every theme, for debugging output."""
        return {
            str(key): {name: value.as_text() for name, value in attributes.items()}
            for key, attributes in self._themes.items()
        }
