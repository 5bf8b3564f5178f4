"""
Per-session context threaded through every command.
"""

import random
from dataclasses import dataclass, field

from ..storage.repository import Repository
from ..storage.store import DataStore
from ..world.generate import Demographics
from .alias import CommandAlias


@dataclass
class AppMeta:
    repository: Repository
    command_aliases: set[CommandAlias] = field(default_factory=set)
    rng: random.Random = field(default_factory=random.Random)
    demographics: Demographics = field(default_factory=Demographics)

    @classmethod
    def new(cls, data_store: DataStore, seed: int | None = None) -> "AppMeta":
        return cls(repository=Repository(data_store), rng=random.Random(seed))
