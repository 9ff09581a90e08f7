from __future__ import annotations

import logging
from collections.abc import Hashable, Sequence

from .errors import (
    AlreadyFinishedError,
    StalePanelError,
    UnauthorizedError,
)
from .models import AdvanceOutcome, AttendanceSession, Roster
from .storage import ConfirmedRosterStore, SessionRegistry

log = logging.getLogger(__name__)


class AttendanceSequencer:
    """Walks the roster one name at a time for each running poll.

    A finished poll is dropped from the active registry and its confirmed
    names replace whatever the channel had before.
    """

    def __init__(
        self,
        roster: Sequence[str],
        *,
        sessions: SessionRegistry | None = None,
        confirmed: ConfirmedRosterStore | None = None,
    ) -> None:
        self.roster: Roster = tuple(roster)
        if not self.roster:
            raise ValueError("Roster must contain at least one player")
        self.sessions = sessions if sessions is not None else SessionRegistry()
        self.confirmed = confirmed if confirmed is not None else ConfirmedRosterStore()

    def start(
        self, owner_id: Hashable, channel_id: Hashable
    ) -> tuple[AttendanceSession, str | None]:
        session = AttendanceSession(
            owner_id=owner_id, channel_id=channel_id, roster=self.roster
        )
        self.sessions.add(session)
        log.info(
            "Attendance check started by %s in %s (%d players)",
            owner_id,
            channel_id,
            len(self.roster),
        )
        return session, session.current_player()

    def active_session(
        self, owner_id: Hashable, channel_id: Hashable
    ) -> AttendanceSession | None:
        return self.sessions.get(owner_id, channel_id)

    def bind_message(self, session: AttendanceSession, message_id: Hashable) -> None:
        with session.lock:
            if session.message_id is None:
                session.message_id = message_id
            elif session.message_id != message_id:
                raise StalePanelError("Attendance panel is already bound")

    def answer(
        self,
        session: AttendanceSession,
        acting_id: Hashable,
        message_id: Hashable,
        yes: bool,
    ) -> AdvanceOutcome:
        with session.lock:
            if acting_id != session.owner_id:
                raise UnauthorizedError(
                    "Only the person who started the attendance check can answer"
                )
            if session.message_id is None or message_id != session.message_id:
                raise StalePanelError("This panel is not the active one")
            current = session.current_player()
            if current is None:
                raise AlreadyFinishedError("This attendance check is already finished")

            if yes:
                session.confirmed.append(current)
            else:
                session.declined.append(current)
            session.cursor += 1

            outcome = AdvanceOutcome(
                finished=session.is_finished(),
                next_player=session.current_player(),
                confirmed=tuple(session.confirmed),
                declined=tuple(session.declined),
            )
            if outcome.finished:
                self._finalize(session)
            return outcome

    def _finalize(self, session: AttendanceSession) -> None:
        self.sessions.remove(session)
        self.confirmed.save(session.channel_id, session.confirmed)
        log.info(
            "Attendance check finished in %s: %d confirmed, %d not going",
            session.channel_id,
            len(session.confirmed),
            len(session.declined),
        )

    def confirmed_for(self, channel_id: Hashable) -> tuple[str, ...] | None:
        return self.confirmed.get(channel_id)


__all__ = ["AttendanceSequencer"]
