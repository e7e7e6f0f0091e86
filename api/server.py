"""
Align API Server - REST API over the governance engine.

Run:
    python -m api.server            # port from PORT, default 8420
"""
# ruff: noqa: S104
# S104: Development server binding (guarded by __name__ check)

import logging
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from align import config
from align.canon import CANON_VERSION
from align.observability import EvaluationIdMiddleware, configure_logging
from api.governance_router import governance_router
from api.response_models import HealthResponse

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Align API",
    description="Deterministic per-mode governance verdicts from chronotype and busy time",
    version="1.0.0",
)

# Credentials are only allowed with an explicit origin list
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=config.CORS_ORIGINS != ["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)
app.add_middleware(EvaluationIdMiddleware)

app.include_router(governance_router)


@app.get("/api/health", response_model=HealthResponse)
def health() -> dict:
    """Liveness check."""
    return {
        "status": "healthy",
        "canon_version": CANON_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


if __name__ == "__main__":
    configure_logging(config.LOG_LEVEL, config.LOG_JSON)
    logger.info(f"Starting Align API on port {config.API_PORT}")
    uvicorn.run(app, host="0.0.0.0", port=config.API_PORT)
