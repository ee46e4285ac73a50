"""
errors.py — Typed exceptions for duit

Every error carries a machine-readable ``code`` so callers catch by type
and report by code, never by parsing the message.

    DuitError
    +-- InvalidArgumentError       (also a ValueError)
    +-- UnsupportedOperationError  (also an AttributeError)

Mixed-currency arithmetic keeps raising plain TypeError, like any other
operation between incompatible Python types.
"""

from __future__ import annotations


class DuitError(Exception):
    """Base class for all duit errors."""

    code: str = "DUIT_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidArgumentError(DuitError, ValueError):
    """An argument is outside the domain of a money operation."""

    code: str = "INVALID_ARGUMENT"


class UnsupportedOperationError(DuitError, AttributeError):
    """The requested operation is not exposed by the money value."""

    code: str = "UNSUPPORTED_OPERATION"

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Method [{operation}] is not available.")
