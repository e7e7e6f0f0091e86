"""
Evaluation scope: which evaluation, and which day, the current code runs for.

One context variable holds an immutable EvaluationScope. Nested scopes
inherit the outer evaluation ID unless given their own, so a multi-day
export logs every day under one ID while each record names its day.
"""

import contextvars
import uuid
from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class EvaluationScope:
    evaluation_id: str
    day: Optional[str] = None


_scope_var: contextvars.ContextVar[Optional[EvaluationScope]] = contextvars.ContextVar(
    "evaluation_scope", default=None
)


def generate_evaluation_id() -> str:
    return f"eval-{uuid.uuid4().hex[:16]}"


def current_scope() -> Optional[EvaluationScope]:
    return _scope_var.get()


def get_evaluation_id() -> Optional[str]:
    scope = _scope_var.get()
    return scope.evaluation_id if scope else None


def get_evaluation_day() -> Optional[str]:
    """ISO date being evaluated, if the scope names one."""
    scope = _scope_var.get()
    return scope.day if scope else None


def set_evaluation_id(evaluation_id: str) -> contextvars.Token:
    """Rebind the ID, keeping the current day. Returns token for reset_scope."""
    scope = _scope_var.get()
    if scope is None:
        return _scope_var.set(EvaluationScope(evaluation_id=evaluation_id))
    return _scope_var.set(replace(scope, evaluation_id=evaluation_id))


def reset_scope(token: contextvars.Token) -> None:
    _scope_var.reset(token)


class EvaluationContext:
    """
    Bind an evaluation scope for the duration of a block.

        with EvaluationContext():                    # new ID
            with EvaluationContext(day="2024-01-15"):  # same ID, day added
                plan = ...

        with EvaluationContext(evaluation_id="req-abc123"):  # X-Request-ID
            ...
    """

    def __init__(self, evaluation_id: Optional[str] = None, day: Optional[str] = None):
        outer = _scope_var.get()
        if evaluation_id is None:
            evaluation_id = outer.evaluation_id if outer else generate_evaluation_id()
        if day is None and outer is not None:
            day = outer.day
        self.evaluation_id = evaluation_id
        self.day = day
        self._token: Optional[contextvars.Token] = None

    def __enter__(self) -> "EvaluationContext":
        self._token = _scope_var.set(EvaluationScope(self.evaluation_id, self.day))
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._token is not None:
            _scope_var.reset(self._token)
