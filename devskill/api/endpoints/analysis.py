"""
FastAPI endpoints for privacy-safe code feature extraction.

Code submitted here is processed in memory for the duration of the request
and discarded; only the numeric feature record is returned. Neither the code
nor any excerpt of it is logged.
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
from typing import Any, Dict, Optional
import logging
import time

from ...core.config import get_settings
from ...services.behavior_engine.session import SessionNotFoundError
from ...services.code_features import EXTRACTION_VERSION, FeatureExtractor
from .telemetry import session_registry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/analysis", tags=["analysis"])


# --- REQUEST/RESPONSE MODELS ---

class EligibilityRequest(BaseModel):
    file: str = Field(..., min_length=1)
    content_length: int = Field(..., ge=0, description="Document length in characters")


class EligibilityResponse(BaseModel):
    file: str
    eligible: bool


class ExtractionRequest(BaseModel):
    file: str = Field(..., min_length=1, description="File path, used for language detection")
    code: str = Field(..., description="Document text; processed in memory, never stored")
    session_id: Optional[str] = Field(
        None,
        description="When given, the session's counters for this file feed the temporal features",
    )


class ExtractionResponse(BaseModel):
    file: str
    extraction_version: str
    features: Dict[str, Any]


# --- ENDPOINTS ---

@router.post("/eligibility", response_model=EligibilityResponse)
async def check_eligibility(request: EligibilityRequest):
    settings = get_settings()
    eligible = FeatureExtractor.should_analyze(
        request.file,
        request.content_length,
        min_length=settings.min_analysis_chars,
        max_length=settings.max_analysis_bytes,
    )
    return EligibilityResponse(file=request.file, eligible=eligible)


@router.post("/extract", response_model=ExtractionResponse)
async def extract_features(request: ExtractionRequest):
    """
    Extracts CodeFeatures from the submitted document.

    Returns 422 when the file is not eligible (non-code type, too small or
    too large) and 404 for an unknown session id.
    """
    settings = get_settings()
    if not FeatureExtractor.should_analyze(
        request.file,
        len(request.code),
        min_length=settings.min_analysis_chars,
        max_length=settings.max_analysis_bytes,
    ):
        logger.debug(f"Skipping analysis for {request.file} (not eligible)")
        raise HTTPException(status_code=422, detail=f"File not eligible for analysis: {request.file}")

    session = None
    counters = None
    if request.session_id:
        try:
            session = session_registry.get(request.session_id)
        except SessionNotFoundError:
            raise HTTPException(status_code=404, detail=f"Unknown session: {request.session_id}")
        counters = session.files.get(request.file)

    logger.info(f"Analyzing file: {request.file}")

    try:
        features = FeatureExtractor.extract(request.code, request.file, counters)
    except Exception as e:
        logger.error(f"Feature extraction failed for {request.file}: {type(e).__name__}", exc_info=True)
        raise HTTPException(status_code=500, detail="Feature extraction failed")

    if session is not None:
        session.record_analysis(request.file, int(time.time() * 1000))

    logger.info(
        f"Analysis complete for {request.file}: code_lines={features.code_lines}, "
        f"complexity={features.cyclomatic_complexity}, paste_ratio={features.paste_ratio}"
    )

    return ExtractionResponse(
        file=request.file,
        extraction_version=EXTRACTION_VERSION,
        features=features.to_dict(),
    )
