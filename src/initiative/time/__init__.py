"""The in-game clock."""

from .clock import Interval, Time

__all__ = ["Interval", "Time"]
