"""
Governance API Router.

REST endpoints over the governance engine:
- Canon template lookup
- Baseline windows for a day
- Per-mode verdicts for a day
- ICS export of a day's verdicts
"""

import logging
from zoneinfo import ZoneInfoNotFoundError

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from align.baseline.windows import generate_baseline_windows
from align.canon import CANON_VERSION, templates_for
from align.export.ics import generate_ics
from align.governor.thresholds import load_thresholds
from align.pipeline import DayPlan, plan_day
from align.types import Chronotype
from api.response_models import (
    BaselineResponse,
    CanonTemplateResponse,
    DayRequest,
    EvaluationResponse,
)

logger = logging.getLogger(__name__)

governance_router = APIRouter(
    prefix="/api",
    tags=["Governance"],
)


def _plan(body: DayRequest) -> DayPlan:
    profile = body.profile.to_profile() if body.profile else None
    blocks = [record.to_busy_block() for record in body.busy_blocks]
    try:
        return plan_day(profile, body.date, blocks, tz=body.timezone, thresholds=load_thresholds())
    except ZoneInfoNotFoundError as e:
        logger.warning(f"Unknown timezone: {body.timezone}")
        raise HTTPException(status_code=400, detail=f"Unknown timezone: {body.timezone}") from e


@governance_router.get("/canon/{chronotype}", response_model=CanonTemplateResponse)
def get_canon_template(chronotype: str) -> dict:
    """Canon windows for a chronotype, verbatim (times may exceed 24:00)."""
    try:
        key = Chronotype(chronotype.upper())
    except ValueError as e:
        raise HTTPException(status_code=404, detail=f"Unknown chronotype: {chronotype}") from e

    return {"canon_version": CANON_VERSION, **templates_for(key).to_dict()}


@governance_router.post("/baseline", response_model=BaselineResponse)
def get_baseline_windows(body: DayRequest) -> dict:
    """Baseline windows for a day. Empty when the profile is missing or LOW."""
    profile = body.profile.to_profile() if body.profile else None
    try:
        windows = generate_baseline_windows(profile, body.date, tz=body.timezone)
    except ZoneInfoNotFoundError as e:
        raise HTTPException(status_code=400, detail=f"Unknown timezone: {body.timezone}") from e

    return {"date": body.date.isoformat(), "windows": [w.to_dict() for w in windows]}


@governance_router.post("/evaluate", response_model=EvaluationResponse)
def evaluate(body: DayRequest) -> dict:
    """Per-mode verdicts for a day (always five decisions)."""
    return _plan(body).to_dict()


@governance_router.post("/export/ics")
def export_ics(body: DayRequest) -> Response:
    """Verdicts as an ICS calendar. SILENCE modes produce no events."""
    plan = _plan(body)
    content = generate_ics(plan.decisions, plan.day)
    filename = f"align-{plan.day.isoformat()}.ics"
    return Response(
        content=content,
        media_type="text/calendar; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
