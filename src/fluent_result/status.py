"""
Status codes — the closed set of outcomes a Result can carry.

A Result is successful exactly when its status is StatusCode.SUCCESS.
Every other member marks the failure track; the HTTP adapter maps each of
them to a single transport status code.

Enum values are the display names used when a status is rendered in
messages and serialized bodies:

    >>> StatusCode.INVALID_ARGUMENT.value
    'InvalidArgument'
"""

from __future__ import annotations

from enum import Enum, unique


@unique
class StatusCode(Enum):
    """
    Operation status carried by every Result.

    SUCCESS is the default status: a Result built without an explicit
    status is on the success track.
    """

    SUCCESS = "Success"
    """The operation completed (→ 200)."""

    NOT_FOUND = "NotFound"
    """One or more requested objects were not found (→ 404)."""

    INVALID_ARGUMENT = "InvalidArgument"
    """One or more arguments were invalid (→ 400)."""

    OPERATION_FAILED = "OperationFailed"
    """The operation failed (→ 500)."""

    CONFLICT = "Conflict"
    """The operation conflicts with another running operation (→ 409)."""

    def __str__(self) -> str:
        return self.value
