"""
Settable clock for hosts that drive time explicitly (simulations, tests).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ManualClock:
    timestamp: int = 0
    slot: int = 0

    def now(self) -> int:
        return self.timestamp

    def current_ordering_counter(self) -> int:
        return self.slot

    def advance(self, seconds: int = 0, slots: int = 0) -> None:
        if seconds < 0 or slots < 0:
            raise ValueError("clock cannot move backwards")
        self.timestamp += seconds
        self.slot += slots
