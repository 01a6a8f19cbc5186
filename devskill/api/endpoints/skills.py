"""
FastAPI endpoints for skill scoring and recommendations.
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
from typing import Any, Dict, List
import logging

from ...services.behavior_engine.session import SessionNotFoundError
from ...services.skill_engine import BehavioralMetrics, SkillScorer
from .telemetry import session_registry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/skills", tags=["skills"])

skill_scorer = SkillScorer()


# --- REQUEST/RESPONSE MODELS ---

class SessionAnalysisRequest(BaseModel):
    session_id: str = Field(..., min_length=1)


class BehavioralMetricsRequest(BaseModel):
    """Pre-aggregated session behavior, for scoring data collected elsewhere."""
    typing_to_total_ratio: float = Field(0.0, ge=0, le=1)
    average_typing_speed: float = Field(0.0, ge=0)
    keystroke_count: int = Field(0, ge=0)
    paste_count: int = Field(0, ge=0)
    edit_count: int = Field(0, ge=0)
    lines_added: int = Field(0, ge=0)
    lines_deleted: int = Field(0, ge=0)
    backspace_ratio: float = Field(0.0, ge=0)
    active_time_ms: int = Field(0, ge=0)
    idle_time_ms: int = Field(0, ge=0)
    focus_ratio: float = Field(0.0, ge=0, le=1)
    languages: List[str] = Field(default_factory=list)
    primary_language: str = "unknown"
    language_distribution: Dict[str, float] = Field(default_factory=dict)
    file_count: int = Field(0, ge=0)
    average_file_active_time: float = Field(0.0, ge=0)
    file_switch_count: int = Field(0, ge=0)


class SkillAnalysisResponse(BaseModel):
    session_id: str
    profile: Dict[str, Any]
    recommendations: List[Dict[str, Any]]
    total_active_time_ms: int
    total_keystrokes: int
    total_pastes: int


class SkillScoreResponse(BaseModel):
    profile: Dict[str, Any]
    recommendations: List[Dict[str, Any]]


# --- ENDPOINTS ---

@router.post("/analyze", response_model=SkillAnalysisResponse)
async def analyze_session(request: SessionAnalysisRequest):
    """
    Scores a live tracking session.

    The session's counters are snapshotted first so edits arriving during
    the analysis do not affect it.
    """
    try:
        session = session_registry.get(request.session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail=f"Unknown session: {request.session_id}")

    try:
        result = skill_scorer.analyze(
            session.snapshot(),
            session.id,
            session.totals.active_time_ms,
            session.totals.idle_time_ms,
        )
    except Exception as e:
        logger.error(f"Skill analysis failed for session {request.session_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Skill analysis failed")

    return SkillAnalysisResponse(**result.to_dict())


@router.post("/score", response_model=SkillScoreResponse)
async def score_metrics(request: BehavioralMetricsRequest):
    metrics = BehavioralMetrics(**request.dict())
    profile = skill_scorer.score_skills(metrics)
    recommendations = skill_scorer.recommend(profile.category_scores, metrics)

    logger.info(
        f"Scored metrics: overall={profile.overall_score}, "
        f"recommendations={len(recommendations)}"
    )

    return SkillScoreResponse(
        profile=profile.to_dict(),
        recommendations=[r.to_dict() for r in recommendations],
    )
