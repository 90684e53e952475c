"""Pinout diagram rendering engine."""

from genpinout.render.document import Document
from genpinout.render.theme import ThemeKey, ThemeStore, ThemeValue

__all__ = ["Document", "ThemeKey", "ThemeStore", "ThemeValue"]
