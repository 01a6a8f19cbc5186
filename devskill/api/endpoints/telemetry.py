"""
FastAPI endpoints for editor telemetry.

The editor streams raw edit deltas and file-interaction events here; the
backend classifies typing vs. paste and keeps the per-file counters for the
session. No source text is ever accepted by these endpoints.
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
from typing import Dict, List, Optional
import logging
import time

from ...core.config import get_settings
from ...services.behavior_engine.metrics import EditDelta
from ...services.behavior_engine.session import (
    OutOfOrderEditError,
    SessionNotFoundError,
    SessionRegistry,
    TrackingSession,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/telemetry", tags=["telemetry"])

# Sessions live in process memory only; persistence is handled elsewhere.
session_registry = SessionRegistry(
    idle_threshold_ms=get_settings().idle_threshold_ms,
    max_sessions=get_settings().max_sessions,
)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _resolve_ts(timestamp_ms: Optional[int]) -> int:
    return timestamp_ms if timestamp_ms is not None else _now_ms()


def get_session_or_404(session_id: str) -> TrackingSession:
    try:
        return session_registry.get(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")


# --- REQUEST/RESPONSE MODELS ---

class SessionStartRequest(BaseModel):
    started_at_ms: Optional[int] = Field(None, ge=0, description="Session start (epoch ms); defaults to now")


class SessionStartResponse(BaseModel):
    session_id: str
    started_at_ms: int


class EditDeltaRequest(BaseModel):
    """One text-change event for a single file."""
    file: str = Field(..., min_length=1, description="Absolute file path")
    characters_added: int = Field(..., ge=0)
    characters_deleted: int = Field(0, ge=0)
    lines_added: int = Field(0, ge=0)
    lines_deleted: int = Field(0, ge=0)
    timestamp_ms: Optional[int] = Field(None, ge=0, description="Event time (epoch ms); defaults to now")


class EditClassificationResponse(BaseModel):
    recorded: bool = Field(..., description="False when the delta was a no-op")
    is_paste: bool = False
    estimated_source: Optional[str] = None
    gap_ms: Optional[int] = Field(None, description="Time since the previous edit on this file")
    typing_to_total_ratio: Optional[float] = None


class FileEventRequest(BaseModel):
    file: Optional[str] = Field(None, description="Target file; null for 'no active editor'")
    timestamp_ms: Optional[int] = Field(None, ge=0)


class FileEventResponse(BaseModel):
    file: Optional[str]
    dwell_time_ms: int = 0
    total_time_ms: int = 0


class FileCountersResponse(BaseModel):
    path: str
    language: str
    keystroke_count: int
    paste_count: int
    typing_to_total_ratio: float
    edit_count: int
    lines_added: int
    lines_deleted: int
    average_edit_size: float
    active_time_ms: int
    idle_time_ms: int
    total_time_ms: int
    switch_to_count: int
    switch_from_count: int
    open_count: int
    code_analysis_count: int
    first_seen: int
    last_active_timestamp: int
    last_analysis_timestamp: Optional[int] = None


class SessionSummaryResponse(BaseModel):
    session_id: str
    total_keystrokes: int
    total_pastes: int
    total_edits: int
    active_time_ms: int
    idle_time_ms: int
    code_analyses: int
    files_edited: List[str]
    languages_used: List[str]
    files: Dict[str, FileCountersResponse]


# --- ENDPOINTS ---

@router.post("/sessions", response_model=SessionStartResponse)
async def start_session(request: Optional[SessionStartRequest] = None):
    started_at = _resolve_ts(request.started_at_ms if request else None)
    session = session_registry.create(started_at_ms=started_at)
    return SessionStartResponse(session_id=session.id, started_at_ms=session.started_at_ms)


@router.delete("/sessions/{session_id}")
async def stop_session(session_id: str):
    try:
        session_registry.remove(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
    return {"session_id": session_id, "status": "stopped"}


@router.post("/sessions/{session_id}/edits", response_model=EditClassificationResponse)
async def record_edit(session_id: str, request: EditDeltaRequest):
    """
    Classifies one edit delta as typing or paste and updates the file's
    counters. The gap is measured against the previous edit on the same file;
    a delta older than that edit is rejected with 422.
    """
    session = get_session_or_404(session_id)

    delta = EditDelta(
        characters_added=request.characters_added,
        characters_deleted=request.characters_deleted,
        lines_added=request.lines_added,
        lines_deleted=request.lines_deleted,
        timestamp_ms=_resolve_ts(request.timestamp_ms),
    )

    try:
        outcome = session.record_edit(request.file, delta)
    except OutOfOrderEditError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error(f"Edit classification failed for session {session_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Edit classification failed")

    if outcome is None:
        return EditClassificationResponse(recorded=False)

    source = outcome.classification.estimated_source
    return EditClassificationResponse(
        recorded=True,
        is_paste=outcome.classification.is_paste,
        estimated_source=source.value if source else None,
        gap_ms=outcome.gap_ms,
        typing_to_total_ratio=outcome.typing_to_total_ratio,
    )


@router.post("/sessions/{session_id}/switch", response_model=FileEventResponse)
async def record_switch(session_id: str, request: FileEventRequest):
    session = get_session_or_404(session_id)
    dwell = session.record_switch(request.file, _resolve_ts(request.timestamp_ms))
    return FileEventResponse(file=request.file, dwell_time_ms=dwell)


@router.post("/sessions/{session_id}/open", response_model=FileEventResponse)
async def record_open(session_id: str, request: FileEventRequest):
    if not request.file:
        raise HTTPException(status_code=422, detail="file is required")
    session = get_session_or_404(session_id)
    session.record_open(request.file, _resolve_ts(request.timestamp_ms))
    return FileEventResponse(file=request.file)


@router.post("/sessions/{session_id}/close", response_model=FileEventResponse)
async def record_close(session_id: str, request: FileEventRequest):
    if not request.file:
        raise HTTPException(status_code=422, detail="file is required")
    session = get_session_or_404(session_id)
    total = session.record_close(request.file, _resolve_ts(request.timestamp_ms))
    return FileEventResponse(file=request.file, total_time_ms=total)


@router.post("/sessions/{session_id}/activity")
async def record_activity(session_id: str, request: FileEventRequest):
    """Window focus or other non-edit activity."""
    session = get_session_or_404(session_id)
    now = _resolve_ts(request.timestamp_ms)
    was_idle = session.is_idle(now)
    session.mark_activity(now)
    return {"session_id": session_id, "resumed_from_idle": was_idle}


@router.get("/sessions/{session_id}", response_model=SessionSummaryResponse)
async def get_session_summary(session_id: str):
    session = get_session_or_404(session_id)
    totals = session.totals
    return SessionSummaryResponse(
        session_id=session.id,
        total_keystrokes=totals.keystrokes,
        total_pastes=totals.pastes,
        total_edits=totals.edits,
        active_time_ms=totals.active_time_ms,
        idle_time_ms=totals.idle_time_ms,
        code_analyses=totals.code_analyses,
        files_edited=list(totals.files_edited),
        languages_used=list(totals.languages_used),
        files={c.path: FileCountersResponse(**vars(c)) for c in session.snapshot()},
    )


@router.get("/health")
async def health_check():
    """Check if telemetry processing services are available"""
    return {
        "status": "healthy",
        "active_sessions": len(session_registry),
        "services": {
            "paste_classifier": "available",
        },
    }
