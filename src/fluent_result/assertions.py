"""
Test assertions for Result values.

Expressive assert helpers that produce clear failure messages.

Usage in tests:
    from fluent_result import ResultAssertions, StatusCode

    def test_create_user():
        user = ResultAssertions.assert_success(create_user(valid_command))
        assert user.name == "Alice"

    def test_invalid_email():
        result = create_user(bad_command)
        ResultAssertions.assert_failure(result, StatusCode.INVALID_ARGUMENT)
        ResultAssertions.assert_message_contains(result, "email")
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, TypeVar

from fluent_result.result import Result
from fluent_result.status import StatusCode

T = TypeVar("T")


def _describe(result: Result[Any]) -> str:
    return f"{result.status.value}: {list(result.messages or ())!r}"


class ResultAssertions:
    """Expressive test assertions for Result values."""

    @staticmethod
    def assert_success(result: Result[T], message: str = "") -> T:
        """
        Assert the Result is successful and return its data.

            data = ResultAssertions.assert_success(result)
        """
        context = f" — {message}" if message else ""
        assert result.is_successful(), (
            f"Expected Success but got {_describe(result)}{context}"
        )
        return result.data  # type: ignore[return-value]

    @staticmethod
    def assert_success_data(result: Result[T], expected_data: Any) -> None:
        """Assert the Result is successful with the given data."""
        data = ResultAssertions.assert_success(result)
        assert data == expected_data, (
            f"Expected data {expected_data!r} but got {data!r}"
        )

    @staticmethod
    def assert_failure(
        result: Result[T],
        expected_status: Optional[StatusCode] = None,
        message: str = "",
    ) -> Result[T]:
        """
        Assert the Result failed, optionally with a specific status.

            ResultAssertions.assert_failure(result, StatusCode.NOT_FOUND)
        """
        context = f" — {message}" if message else ""
        assert not result.is_successful(), (
            f"Expected failure but got Success({result.data!r}){context}"
        )
        if expected_status is not None:
            assert result.status is expected_status, (
                f"Expected status {expected_status.value} "
                f"but got {_describe(result)}{context}"
            )
        return result

    @staticmethod
    def assert_messages(result: Result[T], expected: Optional[Sequence[str]]) -> None:
        """Assert the exact messages, in order. None expects no messages at all."""
        actual = None if result.messages is None else list(result.messages)
        wanted = None if expected is None else list(expected)
        assert actual == wanted, f"Expected messages {wanted!r} but got {actual!r}"

    @staticmethod
    def assert_message_contains(result: Result[T], substring: str) -> None:
        """Assert that at least one message contains the substring, case-insensitively."""
        messages = result.messages or ()
        assert any(substring.lower() in m.lower() for m in messages), (
            f"Expected a message containing {substring!r} "
            f"but messages were: {list(messages)!r}"
        )
