from __future__ import annotations

import threading
from collections.abc import Hashable, Sequence

from .errors import AlreadyActiveError
from .models import AttendanceSession

SessionKey = tuple[Hashable, Hashable]


class SessionRegistry:
    """Active attendance sessions keyed by (owner, channel).

    State lives in memory only and is lost on restart.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sessions: dict[SessionKey, AttendanceSession] = {}

    def add(self, session: AttendanceSession) -> None:
        with self._lock:
            if session.key in self._sessions:
                raise AlreadyActiveError(
                    f"Attendance check already running for {session.label()}"
                )
            self._sessions[session.key] = session

    def get(self, owner_id: Hashable, channel_id: Hashable) -> AttendanceSession | None:
        with self._lock:
            return self._sessions.get(AttendanceSession.make_key(owner_id, channel_id))

    def remove(self, session: AttendanceSession) -> bool:
        with self._lock:
            if self._sessions.get(session.key) is not session:
                return False
            del self._sessions[session.key]
            return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


class ConfirmedRosterStore:
    """Latest committed confirmed list per channel."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._rosters: dict[Hashable, tuple[str, ...]] = {}

    def get(self, channel_id: Hashable) -> tuple[str, ...] | None:
        with self._lock:
            return self._rosters.get(channel_id)

    def save(self, channel_id: Hashable, confirmed: Sequence[str]) -> None:
        snapshot = tuple(confirmed)
        with self._lock:
            self._rosters[channel_id] = snapshot


__all__ = ["SessionKey", "SessionRegistry", "ConfirmedRosterStore"]
