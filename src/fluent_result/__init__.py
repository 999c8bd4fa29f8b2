"""
Railway-oriented outcomes for Python.

Every operation that can fail returns a Result carrying data, a status and
optional messages. Combinators chain, transform, validate and merge
Results without branching on success at each step.

    from fluent_result import Result, StatusCode

    def find_user(user_id: int) -> Result[User]:
        user = users.get(user_id)
        if user is None:
            return Result.create_with_error(StatusCode.NOT_FOUND, f"User {user_id} not found")
        return Result.create(user)

    greeting = (
        find_user(7)
        .validate(lambda u: u.active, StatusCode.CONFLICT, "User is disabled")
        .map(lambda u: f"Hello, {u.name}")
    )
"""

from fluent_result.status import StatusCode
from fluent_result.result import (
    Result,
    ResultMetadata,
    ResultOfItems,
    create,
    create_result_of_items,
    create_with_error,
    validate,
)
from fluent_result.async_result import AsyncResult
from fluent_result.errors import ResultValidationError, UnsupportedStatusError
from fluent_result.assertions import ResultAssertions

__all__ = [
    "StatusCode",
    "Result",
    "ResultMetadata",
    "ResultOfItems",
    "AsyncResult",
    "create",
    "create_with_error",
    "create_result_of_items",
    "validate",
    "ResultValidationError",
    "UnsupportedStatusError",
    "ResultAssertions",
]

__version__ = "1.0.0"
