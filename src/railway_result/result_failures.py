"""
Convenience factory methods for common FailureDescription failures.

Usage:
    from railway_result import ResultFailures

    # Instead of:
    fail(FailureDescription(ErrorCode.VALIDATION_ERROR, "Name is required"))

    # Write:
    ResultFailures.validation_error("Name is required")
"""

from __future__ import annotations

from typing import Any, TypeAlias

from railway_result.failure import ErrorCode, FailureDescription
from railway_result.result import Failure, Result

FailureResult: TypeAlias = Result[Any, FailureDescription]


class ResultFailures:
    """Factory methods for the most frequent failure types."""

    @staticmethod
    def of(code: ErrorCode, message: str) -> FailureResult:
        """Failure with an arbitrary code."""
        return Failure(FailureDescription(code=code, message=message))

    @staticmethod
    def validation_error(message: str) -> FailureResult:
        """Invalid input — missing fields, wrong format, type mismatch."""
        return ResultFailures.of(ErrorCode.VALIDATION_ERROR, message)

    @staticmethod
    def business_rule_error(message: str) -> FailureResult:
        """Domain invariant violated — business constraint failed."""
        return ResultFailures.of(ErrorCode.BUSINESS_RULE_ERROR, message)

    @staticmethod
    def not_found(resource_type: str, identifier: str) -> FailureResult:
        """Resource doesn't exist."""
        return ResultFailures.of(
            ErrorCode.NOT_FOUND,
            f"{resource_type} not found with identifier: {identifier}",
        )

    @staticmethod
    def authentication_error(message: str) -> FailureResult:
        return ResultFailures.of(ErrorCode.AUTHENTICATION_ERROR, message)

    @staticmethod
    def authorization_error(message: str) -> FailureResult:
        return ResultFailures.of(ErrorCode.AUTHORIZATION_ERROR, message)

    @staticmethod
    def technical_error(message: str) -> FailureResult:
        return ResultFailures.of(ErrorCode.TECHNICAL_ERROR, message)

    @staticmethod
    def external_service_error(message: str) -> FailureResult:
        """A downstream dependency answered with an error."""
        return ResultFailures.of(ErrorCode.EXTERNAL_SERVICE_ERROR, message)

    @staticmethod
    def timeout_error(message: str) -> FailureResult:
        return ResultFailures.of(ErrorCode.TIMEOUT_ERROR, message)

    @staticmethod
    def configuration_error(message: str) -> FailureResult:
        return ResultFailures.of(ErrorCode.CONFIGURATION_ERROR, message)
