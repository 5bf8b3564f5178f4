"""Command dispatch and the session context."""

from .alias import CommandAlias
from .runnable import CommandError, Runnable, Suggestion

__all__ = ["CommandAlias", "CommandError", "Runnable", "Suggestion"]
