"""Test the cascading theme store."""

import pytest

from genpinout.errors import DuplicateLabelDeclaration, InvalidLabelDeclaration, UndefinedBoxReference
from genpinout.render.theme import DEFAULT, GROUP, TYPE, ThemeKey, ThemeKind, ThemeStore, ThemeValue
from genpinout.types import FontWeight, PinType, WireType


def _store(*labels: str) -> ThemeStore:
    themes = ThemeStore()
    themes.declare_labels("DEFAULT", "TYPE", "GROUP", list(labels or ("NAME", "GPIO")))
    return themes


def test_declare_labels_creates_themes():
    themes = _store("NAME", "GPIO")
    assert themes.labels == ("NAME", "GPIO")
    for key in (DEFAULT, TYPE, GROUP, ThemeKey.label("NAME"), ThemeKey.label("GPIO")):
        assert key in themes


def test_declare_labels_twice_fails():
    themes = _store()
    with pytest.raises(DuplicateLabelDeclaration):
        themes.declare_labels("DEFAULT", "TYPE", "GROUP", ["OTHER"])


def test_declare_labels_checks_leading_names():
    with pytest.raises(InvalidLabelDeclaration):
        ThemeStore().declare_labels("DEFAULT", "KIND", "GROUP", ["NAME"])
    with pytest.raises(InvalidLabelDeclaration):
        ThemeStore().declare_labels("DEFAULT", "TYPE", "GROUP", [])
    with pytest.raises(InvalidLabelDeclaration):
        ThemeStore().declare_labels("DEFAULT", None, None, ["VCC"])


def test_set_default_cascades_to_labels():
    themes = _store("NAME", "GPIO")
    themes.set_default(
        "FILL COLOR",
        ThemeValue.text("white"),
        ThemeValue.text("grey"),
        None,
        [ThemeValue.text("red"), ThemeValue.text("")],
    )
    assert themes.resolve_text(DEFAULT, "FILL COLOR", "x") == "white"
    assert themes.resolve_text(TYPE, "FILL COLOR", "x") == "grey"
    assert themes.resolve_text(GROUP, "FILL COLOR", "x") == "white"
    assert themes.resolve_text(ThemeKey.label("NAME"), "FILL COLOR", "x") == "red"
    # blank override inherits
    assert themes.resolve_text(ThemeKey.label("GPIO"), "fill color", "x") == "white"


def test_surplus_overrides_are_dropped():
    themes = _store("NAME")
    themes.set_default(
        "FONT SIZE",
        ThemeValue.number(10),
        overrides=[ThemeValue.number(12), ThemeValue.number(14)],
    )
    assert themes.resolve_float(ThemeKey.label("NAME"), "FONT SIZE", 0) == 12
    assert len(themes.keys()) == 4


def test_missing_attribute_falls_back():
    themes = ThemeStore()
    key = ThemeKey.box("STD")
    themes.define(key, {"WIDTH": 80.0})
    assert themes.resolve_float(key, "WIDTH", 100) == 80
    assert themes.resolve_float(key, "HEIGHT", 20) == 20
    assert themes.resolve_text(ThemeKey.label("NOPE"), "FONT", "sans-serif") == "sans-serif"


def test_define_wraps_values():
    themes = ThemeStore()
    key = ThemeKey.font("TITLE")
    themes.define(key, {"FONT SIZE": 24.0, "FONT BOLD": FontWeight.BOLD, "FONT": None})
    attributes = themes.get(key)
    assert "FONT" not in attributes
    assert attributes["FONT BOLD"] == ThemeValue.of(FontWeight.BOLD)
    assert themes.resolve_enum(key, "FONT BOLD", FontWeight, FontWeight.NORMAL) is FontWeight.BOLD
    assert themes.resolve_int(key, "FONT SIZE", 0) == 24


def test_theme_key_parse_and_str():
    assert ThemeKey.parse("BOX_STD") == ThemeKey(ThemeKind.BOX, "STD")
    assert ThemeKey.parse("FONT_TITLE") == ThemeKey(ThemeKind.FONT, "TITLE")
    assert ThemeKey.parse("GROUP_I2C") == ThemeKey(ThemeKind.PIN_GROUP, "I2C")
    assert ThemeKey.parse("DEFAULT") == DEFAULT
    assert ThemeKey.parse("GPIO") == ThemeKey.label("GPIO")
    assert str(ThemeKey.pin_type(PinType.INPUT)) == "PINTYPE_INPUT"
    assert str(ThemeKey.wire(WireType.HS_ANALOG)) == "PINWIRE_HS-ANALOG"


def test_font_key_prefers_existing_theme():
    themes = _store("NAME")
    assert themes.font_key("NAME") == ThemeKey.label("NAME")
    assert themes.font_key("TITLE") == ThemeKey.font("TITLE")


def test_box_reference_validation():
    themes = _store("NAME")
    themes.set_default("BOXES", ThemeValue.text("STD"), overrides=[ThemeValue.text("WIDE")])
    themes.define(ThemeKey.box("STD"), {"WIDTH": 100.0})
    with pytest.raises(UndefinedBoxReference, match="WIDE"):
        themes.validate_box_references()

    themes.define(ThemeKey.box("WIDE"), {"WIDTH": 200.0})
    themes.validate_box_references()


def test_theme_value_conversions():
    assert ThemeValue.number(2.50).as_text() == "2.5"
    assert ThemeValue.text("abc").as_float() is None
    assert ThemeValue.text("  ").is_blank()
    assert ThemeValue.of(3).kind.value == "integer"


def test_dump():
    themes = ThemeStore()
    themes.define(ThemeKey.box("STD"), {"WIDTH": 80.0, "BORDER COLOR": "black"})
    assert themes.dump() == {"BOX_STD": {"WIDTH": "80", "BORDER COLOR": "black"}}
