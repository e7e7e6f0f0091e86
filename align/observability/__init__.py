"""
Observability module: structured logging and evaluation IDs.

Usage:
    from align.observability import get_logger, EvaluationContext

    logger = get_logger(__name__)
    with EvaluationContext(day="2024-01-15"):
        logger.info("Evaluating")  # carries evaluation_id and evaluation_day
"""

from .context import (
    EvaluationContext,
    EvaluationScope,
    current_scope,
    generate_evaluation_id,
    get_evaluation_day,
    get_evaluation_id,
    reset_scope,
    set_evaluation_id,
)
from .logging import (
    EvaluationIdMiddleware,
    HumanFormatter,
    JSONFormatter,
    configure_logging,
    get_logger,
)

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "JSONFormatter",
    "HumanFormatter",
    "EvaluationIdMiddleware",
    # Context
    "EvaluationContext",
    "EvaluationScope",
    "current_scope",
    "generate_evaluation_id",
    "get_evaluation_day",
    "get_evaluation_id",
    "reset_scope",
    "set_evaluation_id",
]
