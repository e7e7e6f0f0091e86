"""
Shared Pydantic request/response models for API endpoints.

These models give FastAPI the type information it needs to validate
bodies (422 on malformed input) and to generate OpenAPI schemas.

Usage:
    from api.response_models import DayRequest, EvaluationResponse

    @router.post("/evaluate", response_model=EvaluationResponse)
    def evaluate(body: DayRequest): ...
"""

import datetime as dt
from typing import Any

from pydantic import BaseModel, Field

from align.calendar.busy_blocks import BusyBlockRecord
from align.types import Chronotype, ChronotypeProfile, ConfidenceLevel

# ==== Requests ====


class ProfileIn(BaseModel):
    """Chronotype profile as produced by quiz scoring."""

    chronotype: Chronotype
    confidence: ConfidenceLevel
    computed_at: str = Field(default="", description="ISO timestamp of scoring")

    def to_profile(self) -> ChronotypeProfile:
        return ChronotypeProfile(
            chronotype=self.chronotype,
            confidence=self.confidence,
            computed_at=self.computed_at,
        )


class DayRequest(BaseModel):
    """Profile + day (+ busy blocks) for one evaluation."""

    profile: ProfileIn | None = Field(default=None, description="Omit for silence-first output")
    date: dt.date
    busy_blocks: list[BusyBlockRecord] = Field(default_factory=list)
    timezone: str | None = Field(default=None, description="IANA zone for window timestamps")


# ==== Responses ====


class HealthResponse(BaseModel):
    """Health check result."""

    status: str = Field(description="healthy or error")
    canon_version: str = Field(description="Canon template version")
    timestamp: str = Field(description="ISO timestamp")


class CanonTemplateResponse(BaseModel):
    """Full canon template for one chronotype."""

    canon_version: str
    chronotype: str
    typical_wake: str
    sleep_inertia_ends: str
    post_lunch_dip: dict[str, str]
    modes: dict[str, list[dict[str, str]]]


class BaselineResponse(BaseModel):
    date: str
    windows: list[dict[str, Any]] = Field(default_factory=list)


class EvaluationResponse(BaseModel):
    date: str
    windows: list[dict[str, Any]] = Field(default_factory=list)
    decisions: list[dict[str, Any]] = Field(description="Exactly one decision per mode")
