"""
Failure description — a ready-made structured error payload.

Result is generic over its error type, so plain strings or domain enums are
fine. FailureDescription is for callers who want a code + message pair that
maps cleanly onto logs and API responses:

    fail(FailureDescription(ErrorCode.NOT_FOUND, "User 42 not found"))

Enum + frozen dataclass gives __eq__, __hash__ and __repr__ for free, and
Enum members compare with `is`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import Enum, unique


@unique
class ErrorCode(Enum):
    """
    Structured error codes for the failure track.

    Caller-side problems first, then problems of the system itself.
    """

    # --- Caller-side errors ---
    VALIDATION_ERROR = "VALIDATION_ERROR"
    """Invalid input format, missing fields, type mismatches."""

    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    """Invalid credentials, expired tokens."""

    AUTHORIZATION_ERROR = "AUTHORIZATION_ERROR"
    """Insufficient permissions."""

    NOT_FOUND = "NOT_FOUND"
    """Resource doesn't exist."""

    BUSINESS_RULE_ERROR = "BUSINESS_RULE_ERROR"
    """Domain invariant violated, business constraint failed."""

    # --- System-side errors ---
    TECHNICAL_ERROR = "TECHNICAL_ERROR"
    """Infrastructure issues."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    """System misconfiguration."""

    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    """A downstream dependency answered with an error."""

    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    """Operation exceeded time limit."""

    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    """Unclassified failures."""


@dataclass(frozen=True, slots=True)
class FailureDescription:
    """
    Immutable failure descriptor: error code, message and creation time.

    Equality ignores the timestamp, so two descriptions of the same problem
    compare equal however far apart they were created.

    >>> desc = FailureDescription(ErrorCode.VALIDATION_ERROR, "Name is required")
    >>> desc.code
    <ErrorCode.VALIDATION_ERROR: 'VALIDATION_ERROR'>
    >>> desc == FailureDescription(ErrorCode.VALIDATION_ERROR, "Name is required")
    True
    """

    code: ErrorCode
    message: str
    timestamp: datetime = field(
        default_factory=lambda: datetime.now(UTC),
        compare=False,
        repr=False,
    )

    def prefixed(self, context: str) -> FailureDescription:
        """
        Copy with the message prefixed by some context.

            .map_error(lambda err: err.prefixed("Loading order 7"))
            # message → "Loading order 7: <original message>"
        """
        return replace(self, message=f"{context}: {self.message}")

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"
