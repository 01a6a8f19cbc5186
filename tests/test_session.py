"""Tests for session-scoped tracking state."""

import pytest

from devskill.services.behavior_engine.session import (
    OutOfOrderEditError,
    SessionNotFoundError,
    SessionRegistry,
)


class TestRecordEdit:
    def test_empty_delta_is_ignored(self, session, make_delta):
        assert session.record_edit("/a.py", make_delta(chars=0, ts=100)) is None
        assert session.files == {}

    def test_first_edit_gap_measured_from_zero(self, session, make_delta):
        outcome = session.record_edit("/a.py", make_delta(chars=5, ts=1500))
        assert outcome.gap_ms == 1500
        assert outcome.classification.is_paste is False

    def test_gap_is_per_file(self, session, make_delta):
        session.record_edit("/a.py", make_delta(chars=5, ts=1000))
        session.record_edit("/b.py", make_delta(chars=5, ts=1008))
        outcome = session.record_edit("/a.py", make_delta(chars=120, ts=1012))

        assert outcome.gap_ms == 12
        assert outcome.classification.is_paste is False

    def test_counters_created_with_language(self, session, make_delta):
        session.record_edit("/src/main.go", make_delta(chars=3, ts=10))
        counters = session.files["/src/main.go"]
        assert counters.language == "Go"
        assert counters.first_seen == 10
        assert session.totals.files_edited == ["/src/main.go"]
        assert session.totals.languages_used == ["Go"]

    def test_ratio_reported(self, session, make_delta):
        session.record_edit("/a.py", make_delta(chars=40, ts=1000))
        outcome = session.record_edit("/a.py", make_delta(chars=400, ts=2000))
        assert outcome.classification.is_paste is True
        assert outcome.typing_to_total_ratio == pytest.approx(40 / 41)

    def test_older_delta_rejected(self, session, make_delta):
        session.record_edit("/a.py", make_delta(chars=5, ts=10_000))
        with pytest.raises(OutOfOrderEditError):
            session.record_edit("/a.py", make_delta(chars=60, ts=9_000))

        counters = session.files["/a.py"]
        assert counters.edit_count == 1
        assert counters.paste_count == 0
        assert counters.keystroke_count == 5

        outcome = session.record_edit("/a.py", make_delta(chars=60, ts=10_500))
        assert outcome.gap_ms == 500
        assert outcome.classification.is_paste is False

    def test_same_timestamp_accepted(self, session, make_delta):
        session.record_edit("/a.py", make_delta(chars=5, ts=10_000))
        outcome = session.record_edit("/a.py", make_delta(chars=5, ts=10_000))
        assert outcome.gap_ms == 0

    def test_ordering_is_per_file(self, session, make_delta):
        session.record_edit("/a.py", make_delta(chars=5, ts=10_000))
        outcome = session.record_edit("/b.py", make_delta(chars=5, ts=9_000))
        assert outcome.gap_ms == 9_000

class TestTimeAccounting:
    def test_active_and_idle_totals(self, session, make_delta):
        session.record_edit("/a.py", make_delta(chars=1, ts=1000))
        session.record_edit("/a.py", make_delta(chars=1, ts=100_000))

        assert session.totals.active_time_ms == 1000
        assert session.totals.idle_time_ms == 99_000

    def test_file_time(self, session, make_delta):
        session.record_edit("/a.py", make_delta(chars=1, ts=1000))
        session.record_edit("/a.py", make_delta(chars=1, ts=3000))
        session.record_edit("/a.py", make_delta(chars=1, ts=100_000))

        counters = session.files["/a.py"]
        assert counters.active_time_ms == 2000
        assert counters.idle_time_ms == 97_000
        assert counters.total_time_ms == 99_000

    def test_is_idle(self, session):
        session.mark_activity(1000)
        assert session.is_idle(61_000) is False
        assert session.is_idle(61_001) is True


class TestFileEvents:
    def test_switch(self, session):
        assert session.record_switch("/a.py", 500) == 0
        assert session.record_switch("/b.py", 2500) == 2000

        assert session.files["/a.py"].switch_to_count == 1
        assert session.files["/a.py"].switch_from_count == 1
        assert session.files["/b.py"].switch_to_count == 1
        assert session.current_file == "/b.py"

    def test_switch_to_nothing(self, session):
        session.record_switch("/a.py", 100)
        session.record_switch(None, 300)
        assert session.current_file is None
        assert session.files["/a.py"].switch_from_count == 1

    def test_open_and_close(self, session):
        session.record_open("/a.rs", 100)
        session.record_open("/a.rs", 200)
        assert session.files["/a.rs"].open_count == 2
        assert session.record_close("/a.rs", 300) == 0
        assert session.record_close("/unknown.rs", 400) == 0

    def test_record_analysis(self, session, make_delta):
        session.record_edit("/a.py", make_delta(chars=1, ts=10))
        session.record_analysis("/a.py", 20)
        assert session.files["/a.py"].code_analysis_count == 1
        assert session.files["/a.py"].last_analysis_timestamp == 20
        assert session.totals.code_analyses == 1

    def test_snapshot_is_a_copy(self, session, make_delta):
        session.record_edit("/a.py", make_delta(chars=7, ts=10))
        snapshot = session.snapshot()
        snapshot[0].keystroke_count = 999
        assert session.files["/a.py"].keystroke_count == 7


class TestSessionRegistry:
    def test_lifecycle(self):
        registry = SessionRegistry(idle_threshold_ms=5000)
        created = registry.create(started_at_ms=10)
        assert registry.get(created.id) is created
        assert created.idle_threshold_ms == 5000
        assert len(registry) == 1

        registry.remove(created.id)
        assert len(registry) == 0

    def test_unknown_session(self):
        registry = SessionRegistry()
        with pytest.raises(SessionNotFoundError):
            registry.get("missing")
        with pytest.raises(KeyError):
            registry.remove("missing")

    def test_oldest_sessions_evicted_over_limit(self):
        registry = SessionRegistry(max_sessions=2)
        first = registry.create(session_id="first")
        registry.create(session_id="second")
        registry.create(session_id="third")

        assert len(registry) == 2
        with pytest.raises(SessionNotFoundError):
            registry.get(first.id)
        assert registry.get("third").id == "third"
