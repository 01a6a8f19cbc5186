import pytest

from devskill.services.behavior_engine.metrics import EditDelta
from devskill.services.behavior_engine.session import TrackingSession


PYTHON_SAMPLE = '''import os

# Load settings
def load_config(path):
    """Read the config file."""
    if os.path.exists(path):
        return open(path).read()
    return None'''


@pytest.fixture
def python_sample():
    return PYTHON_SAMPLE


@pytest.fixture
def session():
    return TrackingSession(session_id="test-session", started_at_ms=0, idle_threshold_ms=60_000)


@pytest.fixture
def make_delta():
    """Factory for EditDelta with typing-friendly defaults."""
    def _make(chars=1, ts=0, lines=0, deleted=0, lines_deleted=0):
        return EditDelta(
            characters_added=chars,
            characters_deleted=deleted,
            lines_added=lines,
            lines_deleted=lines_deleted,
            timestamp_ms=ts,
        )
    return _make
