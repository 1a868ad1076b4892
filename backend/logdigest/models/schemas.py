from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Any
from datetime import datetime, timezone


# ============================================================================
# Digest Models
# ============================================================================

class DigestEntryOut(BaseModel):
    """One cluster of the digest as returned by the API."""
    component: str
    level: str
    frequency: int
    sample_content: str
    fingerprint: str


class StatsOut(BaseModel):
    """Headline counters over the whole upload."""
    total_logs: int
    unique_patterns: int
    error_count: int = 0
    warning_count: int = 0


# ============================================================================
# Interpretation Models
# ============================================================================

SEVERITY_MIN = 1
SEVERITY_MAX = 10
DEFAULT_SEVERITY = 5
PENDING_MEANING = "Analysis pending..."


def clamp_severity(value: Any) -> int:
    """Force a model-supplied score into [1, 10]; junk becomes the midpoint."""
    try:
        score = int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_SEVERITY
    return max(SEVERITY_MIN, min(SEVERITY_MAX, score))


class AISummary(BaseModel):
    """What the interpretation step says about one digest entry."""
    human_meaning: str = PENDING_MEANING
    severity_score: int = DEFAULT_SEVERITY

    @field_validator("severity_score", mode="before")
    @classmethod
    def _clamp(cls, v: Any) -> int:
        return clamp_severity(v)

    @field_validator("human_meaning", mode="before")
    @classmethod
    def _meaning(cls, v: Any) -> str:
        text = "" if v is None else str(v).strip()
        return text or PENDING_MEANING


class AnalyzedLogPattern(DigestEntryOut):
    """A digest entry with its interpretation merged in."""
    human_meaning: str
    severity_score: int
    total_occurrences: int


# ============================================================================
# API Response Models
# ============================================================================

class DigestResponse(BaseModel):
    """Response from POST /api/digest (no model call)."""
    filename: str
    detected_format: str
    stats: StatsOut
    digest: List[DigestEntryOut]


class AnalyzeResponse(BaseModel):
    """Response from POST /api/analyze."""
    run_id: str
    created_at: str
    filename: str
    detected_format: str
    stats: StatsOut
    patterns: List[AnalyzedLogPattern]
    used_llm: bool = False
    interpretation_errors: List[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "ok"
    llm_configured: bool = False
    remote_configured: bool = False
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


class ErrorResponse(BaseModel):
    """Standard error response."""
    detail: str
    error_code: Optional[str] = None
    request_id: Optional[str] = None
