"""In-process render metrics, no external deps."""

from __future__ import annotations

import time
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class RenderMetrics:
    command_count: int = 0
    command_counts: dict[str, int] = field(default_factory=lambda: defaultdict(int))
    phase_counts: dict[str, int] = field(default_factory=lambda: defaultdict(int))
    primitives: int = 0
    messages_flushed: int = 0
    _start_time: Optional[float] = None
    _elapsed: float = 0.0

    def start(self) -> None:
        self._start_time = time.perf_counter()

    def stop(self) -> None:
        if self._start_time is not None:
            self._elapsed += time.perf_counter() - self._start_time
            self._start_time = None

    def record_command(self, kind: str, phase: str) -> None:
        self.command_count += 1
        self.command_counts[kind] += 1
        self.phase_counts[phase] += 1

    def record_primitives(self, count: int = 1) -> None:
        self.primitives += count

    def summary(self) -> dict:
        return {
            "total_commands": self.command_count,
            "commands": dict(self.command_counts),
            "phases": dict(self.phase_counts),
            "primitives": self.primitives,
            "messages": self.messages_flushed,
            "elapsed_ms": int(self._elapsed * 1000),
        }
