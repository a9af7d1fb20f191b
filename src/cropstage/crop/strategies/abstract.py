"""
Abstract base class for crop interaction strategies.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ...core.geometry import Point


class InteractionStrategy(ABC):
    """Base class for crop interaction strategies (resize, move, pan)."""

    @abstractmethod
    def on_drag(self, delta: Point) -> None:
        """Handle drag movement in stage coordinates.

        Parameters
        ----------
        delta:
            Total pointer movement since the drag started.  Strategies always
            work from the state captured at drag start, never from the
            previous move.
        """

    @abstractmethod
    def on_end(self) -> None:
        """Handle end of interaction (pointer release)."""
