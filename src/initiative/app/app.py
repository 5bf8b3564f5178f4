"""
The application facade used by every interface.
"""

import logging

from ..storage.store import DataStore
from .command import autocomplete, run_input
from .meta import AppMeta
from .runnable import CommandError, Suggestion

logger = logging.getLogger(__name__)

WELCOME = """\
# Welcome to initiative.sh!

Generate characters and places on the fly, keep the good ones in your \
journal, and look up the rules without leaving the table.

New here? Type ~tutorial~ for a guided tour, or ~help~ for a list of commands."""

STORE_UNAVAILABLE = (
    "\n\n! Your journal could not be loaded. Anything you save during this "
    "session will be lost when it ends."
)


class App:
    """
    One user session.

    Wraps AppMeta and turns command outcomes into display text: errors come
    back prefixed with "! " rather than raised.
    """

    def __init__(self, data_store: DataStore, seed: int | None = None):
        self.meta = AppMeta.new(data_store, seed)

    @property
    def repository(self):
        return self.meta.repository

    def init(self) -> str:
        self.repository.init()
        if not self.repository.data_store_enabled:
            return WELCOME + STORE_UNAVAILABLE
        return WELCOME

    def command(self, input: str) -> str:
        input = input.strip()
        try:
            return run_input(input, self.meta)
        except CommandError as e:
            logger.debug(f"Command failed: {input!r}")
            return f"! {e.message}"

    def autocomplete(self, input: str) -> list[Suggestion]:
        return autocomplete(input, self.meta)
