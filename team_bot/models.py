from __future__ import annotations

import threading
from collections.abc import Hashable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import ClassVar

DEFAULT_RATING = 5.0
TEAM_SIZE = 5
PLAYERS_PER_GAME = TEAM_SIZE * 2

Roster = tuple[str, ...]


class TeamPolicy(str, Enum):
    OPTIMAL = "optimal"
    RANKED = "ranked"
    RANDOM = "random"


class SelectionMode(str, Enum):
    EXACT = "exact"
    APPROXIMATE = "approximate"
    RANDOM = "random"


@dataclass(frozen=True, slots=True)
class RatingTable:
    """Static name -> rating lookup with a fallback for unknown names."""

    ratings: Mapping[str, float] = field(default_factory=dict)
    default: float = DEFAULT_RATING

    def __post_init__(self) -> None:
        frozen = MappingProxyType({str(k): float(v) for k, v in self.ratings.items()})
        object.__setattr__(self, "ratings", frozen)

    def rating_of(self, name: str) -> float:
        return self.ratings.get(name, self.default)

    def total(self, names: Iterable[str]) -> float:
        return sum(self.rating_of(name) for name in names)


@dataclass(slots=True)
class AttendanceSession:
    """One in-progress attendance poll over a roster snapshot.

    ``lock`` serialises answers for this poll only.
    """

    owner_id: Hashable
    channel_id: Hashable
    roster: Roster
    cursor: int = 0
    confirmed: list[str] = field(default_factory=list)
    declined: list[str] = field(default_factory=list)
    message_id: Hashable | None = None
    lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    KEY_TEMPLATE: ClassVar[str] = "%s:%s"

    @staticmethod
    def make_key(owner_id: Hashable, channel_id: Hashable) -> tuple[Hashable, Hashable]:
        return (owner_id, channel_id)

    @property
    def key(self) -> tuple[Hashable, Hashable]:
        return self.make_key(self.owner_id, self.channel_id)

    def label(self) -> str:
        return self.KEY_TEMPLATE % self.key

    def current_player(self) -> str | None:
        if 0 <= self.cursor < len(self.roster):
            return self.roster[self.cursor]
        return None

    def is_finished(self) -> bool:
        return self.cursor >= len(self.roster)


@dataclass(frozen=True, slots=True)
class AdvanceOutcome:
    finished: bool
    next_player: str | None
    confirmed: tuple[str, ...]
    declined: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class TeamSplit:
    team_a: tuple[str, ...]
    team_b: tuple[str, ...]
    sum_a: float
    sum_b: float

    @property
    def score(self) -> float:
        """Absolute rating-sum difference; 0 is a perfectly fair split."""
        return abs(self.sum_a - self.sum_b)

    @property
    def players(self) -> tuple[str, ...]:
        return self.team_a + self.team_b


@dataclass(frozen=True, slots=True)
class SelectionResult:
    """The ten players picked to play, in confirmed order, and their split."""

    chosen: tuple[str, ...]
    split: TeamSplit
    substitutes: tuple[str, ...]
    score: float
    mode: SelectionMode
    rank: int | None = None

    @property
    def is_exact(self) -> bool:
        return self.mode is SelectionMode.EXACT


__all__ = [
    "DEFAULT_RATING",
    "TEAM_SIZE",
    "PLAYERS_PER_GAME",
    "Roster",
    "TeamPolicy",
    "SelectionMode",
    "RatingTable",
    "AttendanceSession",
    "AdvanceOutcome",
    "TeamSplit",
    "SelectionResult",
]
