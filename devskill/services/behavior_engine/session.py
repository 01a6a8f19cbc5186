"""
Session-scoped tracking state.

A TrackingSession owns the FileCounters map for one editor session and feeds
edit deltas through the PasteClassifier. There is no internal locking: the
event stream is assumed sequential per file, and callers must not mutate a
session while it is being aggregated.
"""

import logging
import uuid
from dataclasses import dataclass, replace
from typing import Dict, List, Optional

from devskill.core.config import DEFAULT_IDLE_THRESHOLD_MS, DEFAULT_MAX_SESSIONS
from devskill.services.behavior_engine.metrics import EditDelta, FileCounters, SessionTotals
from devskill.services.behavior_engine.paste_classifier import PasteClassification, PasteClassifier
from devskill.services.code_features.languages import detect_language

logger = logging.getLogger(__name__)


class SessionNotFoundError(KeyError):
    """Raised when a session id is not registered."""


class OutOfOrderEditError(ValueError):
    """Raised when a delta is older than the last recorded change to its file."""


@dataclass(frozen=True)
class EditOutcome:
    classification: PasteClassification
    gap_ms: int
    typing_to_total_ratio: float


class TrackingSession:
    """
    Mutable tracking state for one editor session.

    All timestamps are supplied by the caller (milliseconds), so replaying the
    same event stream always yields the same counters.
    """

    def __init__(
        self,
        session_id: Optional[str] = None,
        started_at_ms: int = 0,
        idle_threshold_ms: int = DEFAULT_IDLE_THRESHOLD_MS,
        classifier: Optional[PasteClassifier] = None,
    ):
        self.id = session_id or str(uuid.uuid4())
        self.started_at_ms = started_at_ms
        self.idle_threshold_ms = idle_threshold_ms
        self.classifier = classifier or PasteClassifier()

        self.files: Dict[str, FileCounters] = {}
        self.totals = SessionTotals()
        self.current_file: Optional[str] = None
        self.last_activity_ms = started_at_ms
        self._last_change_ms: Dict[str, int] = {}

    # --- COUNTERS ---

    def ensure_counters(self, path: str, now_ms: int) -> FileCounters:
        counters = self.files.get(path)
        if counters is None:
            language = detect_language(path)
            counters = FileCounters(
                path=path,
                language=language,
                first_seen=now_ms,
                last_active_timestamp=now_ms,
            )
            self.files[path] = counters
            if path not in self.totals.files_edited:
                self.totals.files_edited.append(path)
            if language not in self.totals.languages_used:
                self.totals.languages_used.append(language)
        return counters

    def snapshot(self) -> List[FileCounters]:
        """Copies of the current counters, safe to aggregate."""
        return [replace(c) for c in list(self.files.values())]

    # --- EVENTS ---

    def record_edit(self, path: str, delta: EditDelta) -> Optional[EditOutcome]:
        """
        Classify one delta and update counters.

        Returns None for no-op deltas (nothing inserted or deleted). Raises
        OutOfOrderEditError, leaving all counters untouched, when the delta is
        older than the previous change to the same file.
        """
        if delta.is_empty:
            return None

        now = delta.timestamp_ms
        last_change = self._last_change_ms.get(path)
        if last_change is not None and now < last_change:
            raise OutOfOrderEditError(
                f"Edit at {now}ms is older than the last change to {path} at {last_change}ms"
            )

        # Gap is per file: interleaved edits in other files must not shorten it.
        gap_ms = now - (last_change or 0)

        counters = self.ensure_counters(path, now)
        classification = self.classifier.classify_and_apply(counters, delta, gap_ms, self.totals)

        if classification.is_paste:
            logger.debug(
                f"Paste detected in {path}: {delta.characters_added} chars, "
                f"{delta.lines_added} lines, source={classification.estimated_source.value}"
            )

        self._update_file_time(counters, now)
        self._last_change_ms[path] = now
        self.mark_activity(now)

        return EditOutcome(
            classification=classification,
            gap_ms=gap_ms,
            typing_to_total_ratio=counters.typing_to_total_ratio,
        )

    def record_switch(self, path: Optional[str], now_ms: int) -> int:
        """
        Active editor changed to ``path`` (None when no editor is active).

        Returns the dwell time in the previous file.
        """
        dwell_ms = now_ms - self.last_activity_ms if self.current_file else 0

        if self.current_file and self.current_file in self.files:
            self.files[self.current_file].switch_from_count += 1

        if path:
            self.ensure_counters(path, now_ms).switch_to_count += 1

        self.current_file = path
        self.mark_activity(now_ms)
        return max(0, dwell_ms)

    def record_open(self, path: str, now_ms: int) -> None:
        self.ensure_counters(path, now_ms).open_count += 1
        self.mark_activity(now_ms)

    def record_close(self, path: str, now_ms: int) -> int:
        """Returns the total time tracked for the closed file."""
        counters = self.files.get(path)
        self.mark_activity(now_ms)
        return counters.total_time_ms if counters else 0

    def record_analysis(self, path: str, now_ms: int) -> None:
        counters = self.files.get(path)
        if counters is not None:
            counters.code_analysis_count += 1
            counters.last_analysis_timestamp = now_ms
        self.totals.code_analyses += 1

    def mark_activity(self, now_ms: int) -> None:
        """
        Credit the time since the last activity to the session's active or
        idle total, depending on the idle threshold.
        """
        elapsed = max(0, now_ms - self.last_activity_ms)
        if elapsed > self.idle_threshold_ms:
            self.totals.idle_time_ms += elapsed
            logger.debug(f"Session {self.id} resumed after {elapsed}ms idle")
        else:
            self.totals.active_time_ms += elapsed
        self.last_activity_ms = max(self.last_activity_ms, now_ms)

    def is_idle(self, now_ms: int) -> bool:
        return now_ms - self.last_activity_ms > self.idle_threshold_ms

    def _update_file_time(self, counters: FileCounters, now_ms: int) -> None:
        elapsed = max(0, now_ms - counters.last_active_timestamp)
        if elapsed > self.idle_threshold_ms:
            counters.idle_time_ms += elapsed
        else:
            counters.active_time_ms += elapsed
        counters.total_time_ms += elapsed
        counters.last_active_timestamp = now_ms


class SessionRegistry:
    """
    In-process map of session id -> TrackingSession.

    Sessions are removed by an explicit stop. Abandoned sessions are evicted
    oldest-first once more than ``max_sessions`` are registered.
    """

    def __init__(
        self,
        idle_threshold_ms: int = DEFAULT_IDLE_THRESHOLD_MS,
        max_sessions: int = DEFAULT_MAX_SESSIONS,
    ):
        self.idle_threshold_ms = idle_threshold_ms
        self.max_sessions = max(1, max_sessions)
        self._sessions: Dict[str, TrackingSession] = {}

    def create(self, started_at_ms: int = 0, session_id: Optional[str] = None) -> TrackingSession:
        session = TrackingSession(
            session_id=session_id,
            started_at_ms=started_at_ms,
            idle_threshold_ms=self.idle_threshold_ms,
        )
        self._sessions[session.id] = session
        logger.info(f"Tracking session {session.id} started")

        while len(self._sessions) > self.max_sessions:
            oldest = next(iter(self._sessions))
            del self._sessions[oldest]
            logger.warning(f"Session limit {self.max_sessions} reached, evicted session {oldest}")
        return session

    def get(self, session_id: str) -> TrackingSession:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(session_id)

    def remove(self, session_id: str) -> None:
        self.get(session_id)
        del self._sessions[session_id]
        logger.info(f"Tracking session {session_id} closed")

    def __len__(self) -> int:
        return len(self._sessions)
