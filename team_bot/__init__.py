"""Attendance polling and 5v5 team balancing helpers."""

from .attendance import AttendanceSequencer
from .balancer import (
    ranked_partitions,
    ranked_splits,
    rating_of,
    select_and_split_optimal,
    select_random,
    split_optimal,
)
from .errors import (
    AlreadyActiveError,
    AlreadyFinishedError,
    AttendanceError,
    BalancerError,
    FutebolError,
    InsufficientPlayersError,
    InvalidCountError,
    NoConfirmedRosterError,
    RankOutOfRangeError,
    StalePanelError,
    UnauthorizedError,
)
from .models import (
    DEFAULT_RATING,
    AdvanceOutcome,
    AttendanceSession,
    RatingTable,
    SelectionMode,
    SelectionResult,
    TeamPolicy,
    TeamSplit,
)
from .storage import ConfirmedRosterStore, SessionRegistry
from .teams import generate_teams

__all__ = [
    "AttendanceSequencer",
    "ranked_partitions",
    "ranked_splits",
    "rating_of",
    "select_and_split_optimal",
    "select_random",
    "split_optimal",
    "AlreadyActiveError",
    "AlreadyFinishedError",
    "AttendanceError",
    "BalancerError",
    "FutebolError",
    "InsufficientPlayersError",
    "InvalidCountError",
    "NoConfirmedRosterError",
    "RankOutOfRangeError",
    "StalePanelError",
    "UnauthorizedError",
    "DEFAULT_RATING",
    "AdvanceOutcome",
    "AttendanceSession",
    "RatingTable",
    "SelectionMode",
    "SelectionResult",
    "TeamPolicy",
    "TeamSplit",
    "ConfirmedRosterStore",
    "SessionRegistry",
    "generate_teams",
]
