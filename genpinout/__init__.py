"""Pinout diagram generator: CSV command scripts rendered to SVG."""

from genpinout.render.renderer import PinoutRenderer, render_file

__version__ = "0.3.0"

__all__ = ["PinoutRenderer", "render_file"]
