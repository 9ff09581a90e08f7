from concurrent.futures import ThreadPoolExecutor

import pytest

from team_bot import (
    AlreadyActiveError,
    AlreadyFinishedError,
    AttendanceSequencer,
    StalePanelError,
    UnauthorizedError,
)

ROSTER = ("Caria", "Tiago", "Filipe", "Francisco", "Gui")


@pytest.fixture
def sequencer():
    return AttendanceSequencer(ROSTER)


def started(sequencer, owner=1, channel=10, message=500):
    session, _ = sequencer.start(owner, channel)
    sequencer.bind_message(session, message)
    return session


class TestStart:
    def test_returns_first_player(self, sequencer):
        session, first = sequencer.start(1, 10)
        assert first == "Caria"
        assert session.cursor == 0
        assert session.roster == ROSTER
        assert session.message_id is None
        assert sequencer.active_session(1, 10) is session

    def test_duplicate_start_always_fails(self, sequencer):
        sequencer.start(1, 10)
        for _ in range(5):
            with pytest.raises(AlreadyActiveError):
                sequencer.start(1, 10)
        assert len(sequencer.sessions) == 1

    def test_other_keys_are_independent(self, sequencer):
        sequencer.start(1, 10)
        sequencer.start(1, 11)
        sequencer.start(2, 10)
        assert len(sequencer.sessions) == 3

    def test_concurrent_start_only_one_wins(self, sequencer):
        def attempt(_):
            try:
                sequencer.start(7, 70)
            except AlreadyActiveError:
                return False
            return True

        with ThreadPoolExecutor(max_workers=16) as pool:
            results = list(pool.map(attempt, range(64)))
        assert results.count(True) == 1

    def test_restart_allowed_after_finish(self, sequencer):
        session = started(sequencer)
        for _ in ROSTER:
            sequencer.answer(session, 1, 500, True)
        new_session, first = sequencer.start(1, 10)
        assert new_session is not session
        assert first == "Caria"

    def test_empty_roster_rejected(self):
        with pytest.raises(ValueError):
            AttendanceSequencer([])


class TestBindMessage:
    def test_rebinding_same_token_is_noop(self, sequencer):
        session = started(sequencer, message=500)
        sequencer.bind_message(session, 500)
        assert session.message_id == 500

    def test_rebinding_other_token_fails(self, sequencer):
        session = started(sequencer, message=500)
        with pytest.raises(StalePanelError):
            sequencer.bind_message(session, 501)
        assert session.message_id == 500


class TestAnswer:
    def test_walks_roster_until_finished(self, sequencer):
        session = started(sequencer)
        answers = [True, False, True, True, False]
        outcomes = [sequencer.answer(session, 1, 500, yes) for yes in answers]

        assert [o.finished for o in outcomes] == [False, False, False, False, True]
        assert [o.next_player for o in outcomes[:-1]] == list(ROSTER[1:])
        assert outcomes[-1].next_player is None
        assert outcomes[-1].confirmed == ("Caria", "Filipe", "Francisco")
        assert outcomes[-1].declined == ("Tiago", "Gui")

    def test_confirmed_plus_declined_equals_roster(self, sequencer):
        session = started(sequencer)
        for index, _ in enumerate(ROSTER):
            outcome = sequencer.answer(session, 1, 500, index % 2 == 0)
            assert len(outcome.confirmed) + len(outcome.declined) == index + 1
        assert outcome.finished
        assert len(outcome.confirmed) + len(outcome.declined) == len(ROSTER)

    def test_finish_commits_confirmed_and_removes_session(self, sequencer):
        session = started(sequencer)
        for name in ROSTER:
            sequencer.answer(session, 1, 500, name != "Gui")
        assert sequencer.active_session(1, 10) is None
        assert sequencer.confirmed_for(10) == ("Caria", "Tiago", "Filipe", "Francisco")

    def test_new_poll_overwrites_channel_list(self, sequencer):
        first = started(sequencer, owner=1)
        for _ in ROSTER:
            sequencer.answer(first, 1, 500, True)
        second = started(sequencer, owner=2, message=600)
        for _ in ROSTER:
            sequencer.answer(second, 2, 600, False)
        assert sequencer.confirmed_for(10) == ()

    def test_unauthorized_leaves_session_untouched(self, sequencer):
        session = started(sequencer)
        with pytest.raises(UnauthorizedError):
            sequencer.answer(session, 2, 500, True)
        assert session.cursor == 0
        assert session.confirmed == []

    def test_unbound_panel_is_stale(self, sequencer):
        session, _ = sequencer.start(1, 10)
        with pytest.raises(StalePanelError):
            sequencer.answer(session, 1, 500, True)
        assert session.cursor == 0

    def test_foreign_panel_is_stale(self, sequencer):
        session = started(sequencer)
        with pytest.raises(StalePanelError):
            sequencer.answer(session, 1, 999, True)
        assert session.cursor == 0
        assert session.declined == []

    def test_answer_after_finish(self, sequencer):
        session = started(sequencer)
        for _ in ROSTER:
            sequencer.answer(session, 1, 500, True)
        with pytest.raises(AlreadyFinishedError):
            sequencer.answer(session, 1, 500, True)
        assert sequencer.confirmed_for(10) == ROSTER

    def test_unauthorized_checked_before_panel(self, sequencer):
        session = started(sequencer)
        with pytest.raises(UnauthorizedError):
            sequencer.answer(session, 2, 999, True)

    def test_other_channel_has_no_list(self, sequencer):
        session = started(sequencer, channel=10)
        for _ in ROSTER:
            sequencer.answer(session, 1, 500, True)
        assert sequencer.confirmed_for(11) is None

    def test_busy_session_does_not_block_other_keys(self, sequencer):
        busy = started(sequencer, owner=1, channel=10, message=500)
        other = started(sequencer, owner=2, channel=20, message=600)

        with ThreadPoolExecutor(max_workers=2) as pool:
            with busy.lock:
                waiting = pool.submit(sequencer.answer, busy, 1, 500, True)
                outcome = pool.submit(sequencer.answer, other, 2, 600, True).result(
                    timeout=5
                )
                assert outcome.next_player == "Tiago"
                assert not waiting.done()
            assert waiting.result(timeout=5).next_player == "Tiago"

        assert busy.cursor == other.cursor == 1
