"""Setup/draw phase gate for the command stream."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from genpinout.errors import PhaseError
from genpinout.types import Phase

log = logging.getLogger(__name__)


class PhaseController:
    """Admits commands in their own phase and runs ``on_draw`` once at the switch."""

    def __init__(self, on_draw: Optional[Callable[[], None]] = None) -> None:
        self.phase = Phase.SETUP
        self._on_draw = on_draw

    @property
    def drawing(self) -> bool:
        return self.phase is Phase.DRAW

    def admit(self, kind: str, phase: Phase, begins_draw: bool = False) -> bool:
        """Check a command against the current phase.

        Returns False when the command should be skipped (a repeated DRAW).
        """
        if begins_draw:
            if self.drawing:
                log.info("DRAW while already drawing ignored")
                return False
            if self._on_draw is not None:
                self._on_draw()
            self.phase = Phase.DRAW
            log.debug("Entered draw phase")
            return True

        if phase is not self.phase:
            raise PhaseError(f"{kind} is a {phase.value} command, but the script is in {self.phase.value}")
        return True
