"""
Test assertions for Result values.

Expressive assert helpers that produce clear messages and hand back the
payload of the expected track.

Usage in tests:
    from railway_result import ErrorCode, ResultAssertions

    def test_create_user():
        user = ResultAssertions.assert_success(create_user(valid_command))
        assert user.name == "Alice"

    def test_invalid_email():
        result = create_user(bad_command)
        ResultAssertions.assert_failure_code(result, ErrorCode.VALIDATION_ERROR)
        ResultAssertions.assert_failure_message_contains(result, "email")
"""

from __future__ import annotations

from typing import Any, TypeVar

from railway_result.failure import ErrorCode, FailureDescription
from railway_result.result import Failure, Result, Success

T = TypeVar("T")
E = TypeVar("E")


class ResultAssertions:
    """Expressive test assertions for Result values."""

    @staticmethod
    def assert_success(result: Result[T, E], message: str = "") -> T:
        """
        Assert the Result is a Success and return the value.

            value = ResultAssertions.assert_success(result)
        """
        context = f" — {message}" if message else ""
        match result:
            case Success(v):
                return v
            case Failure(err):
                raise AssertionError(f"Expected Success but got Failure({err!r}){context}")
        raise AssertionError(f"Expected a Result, got {result!r}")

    @staticmethod
    def assert_failure(result: Result[T, E], message: str = "") -> E:
        """
        Assert the Result is a Failure and return the error payload.

            error = ResultAssertions.assert_failure(result)
        """
        context = f" — {message}" if message else ""
        match result:
            case Failure(err):
                return err
            case Success(v):
                raise AssertionError(f"Expected Failure but got Success({v!r}){context}")
        raise AssertionError(f"Expected a Result, got {result!r}")

    @staticmethod
    def assert_success_value(result: Result[T, E], expected_value: Any) -> None:
        """Assert the Result is a Success holding the given value."""
        value = ResultAssertions.assert_success(result)
        assert value == expected_value, (
            f"Expected success value {expected_value!r} but got {value!r}"
        )

    @staticmethod
    def assert_failure_value(result: Result[T, E], expected_error: Any) -> None:
        """Assert the Result is a Failure holding the given error payload."""
        error = ResultAssertions.assert_failure(result)
        assert error == expected_error, (
            f"Expected failure {expected_error!r} but got {error!r}"
        )

    # ──────────────────────── FailureDescription payloads ────────────────────────

    @staticmethod
    def assert_failure_code(
        result: Result[T, FailureDescription],
        expected_code: ErrorCode,
    ) -> FailureDescription:
        """Assert a FailureDescription failure with the given code."""
        error = ResultAssertions.assert_failure(result)
        assert error.code == expected_code, (
            f"Expected error code {expected_code.value} "
            f"but got {error.code.value}: {error.message!r}"
        )
        return error

    @staticmethod
    def assert_failure_message_contains(
        result: Result[T, FailureDescription],
        substring: str,
    ) -> None:
        """Assert the failure message contains the substring (case-insensitive)."""
        error = ResultAssertions.assert_failure(result)
        assert substring.lower() in error.message.lower(), (
            f"Expected failure message to contain {substring!r} "
            f"but message was: {error.message!r}"
        )
