from __future__ import annotations


class FutebolError(Exception):
    """Base exception for attendance and team-generation failures."""


class AttendanceError(FutebolError):
    """Base exception for attendance poll failures."""


class AlreadyActiveError(AttendanceError):
    """Raised when a poll is already running for the same user and channel."""


class UnauthorizedError(AttendanceError):
    """Raised when someone other than the poll owner answers."""


class StalePanelError(AttendanceError):
    """Raised when an answer targets a panel that is not the active one."""


class AlreadyFinishedError(AttendanceError):
    """Raised when an answer arrives after the poll walked the whole roster."""


class BalancerError(FutebolError, ValueError):
    """Base exception for team-generation precondition failures."""


class NoConfirmedRosterError(BalancerError):
    """Raised when a channel has no completed poll to build teams from."""


class InsufficientPlayersError(BalancerError):
    def __init__(self, count: int, required: int) -> None:
        super().__init__(
            f"{count} confirmed players, {required} required "
            f"({required - count} missing)"
        )
        self.count = count
        self.required = required

    @property
    def shortfall(self) -> int:
        return self.required - self.count


class InvalidCountError(BalancerError):
    """Raised when a split is requested for anything but exactly ten players."""


class RankOutOfRangeError(BalancerError):
    def __init__(self, rank: int, available: int) -> None:
        super().__init__(f"Rank {rank} is outside 0..{available - 1}")
        self.rank = rank
        self.available = available


__all__ = [
    "FutebolError",
    "AttendanceError",
    "AlreadyActiveError",
    "UnauthorizedError",
    "StalePanelError",
    "AlreadyFinishedError",
    "BalancerError",
    "NoConfirmedRosterError",
    "InsufficientPlayersError",
    "InvalidCountError",
    "RankOutOfRangeError",
]
