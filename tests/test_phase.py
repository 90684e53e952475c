"""Test the setup/draw phase gate."""

import pytest

from genpinout.errors import PhaseError
from genpinout.render.phase import PhaseController
from genpinout.types import Phase


def test_setup_then_draw():
    calls = []
    phases = PhaseController(on_draw=lambda: calls.append("draw"))
    assert phases.admit("labels", Phase.SETUP)
    assert not phases.drawing

    assert phases.admit("draw", Phase.SETUP, begins_draw=True)
    assert phases.drawing
    assert calls == ["draw"]
    assert phases.admit("pin", Phase.DRAW)


def test_draw_command_in_setup_fails():
    with pytest.raises(PhaseError):
        PhaseController().admit("pin", Phase.DRAW)


def test_setup_command_after_draw_fails():
    phases = PhaseController()
    phases.admit("draw", Phase.SETUP, begins_draw=True)
    with pytest.raises(PhaseError):
        phases.admit("labels", Phase.SETUP)


def test_second_draw_is_skipped():
    calls = []
    phases = PhaseController(on_draw=lambda: calls.append("draw"))
    phases.admit("draw", Phase.SETUP, begins_draw=True)
    assert phases.admit("draw", Phase.SETUP, begins_draw=True) is False
    assert calls == ["draw"]
