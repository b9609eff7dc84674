"""
Palette component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from .models import PaletteFault


class FaultReporterPort(Protocol):
    """Side channel for degradations the engine recovers from."""

    def report(self, fault: PaletteFault) -> None:
        """Record a fault. Must not raise."""
        ...
