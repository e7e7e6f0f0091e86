"""
Boundary errors.

The engine itself never raises for well-typed input; these cover data
arriving from storage or HTTP before it reaches the engine.
"""


class AlignError(Exception):
    """Base class for Align boundary errors."""


class BusyBlockValidationError(AlignError, ValueError):
    """Raised when a raw busy block record fails validation."""

    def __init__(self, message: str, record=None):
        super().__init__(message)
        self.message = message
        self.record = record
