"""
Exceptions raised at the edges of the Result algebra.

Status failures travel as data and never raise. These types exist only
for the two places where control is handed back to ordinary exception
handling:

  - ResultValidationError — raised by as_valid_data() on a failed Result
  - UnsupportedStatusError — raised by the HTTP adapter for a status it
    cannot map
"""

from __future__ import annotations

from typing import Iterable

from fluent_result.status import StatusCode


def _render_message(status: StatusCode, validation_errors: tuple[str, ...]) -> str:
    rendered = f"Validation failed with status {status.value}."
    if validation_errors:
        rendered += " " + ". ".join(validation_errors) + "."
    return rendered


class ResultValidationError(Exception):
    """
    A failed Result was unwrapped with as_valid_data().

    Carries the status and the accumulated messages of the Result:

    >>> err = ResultValidationError(StatusCode.CONFLICT, ["Already exists"])
    >>> str(err)
    'Validation failed with status Conflict. Already exists.'
    """

    def __init__(self, status: StatusCode, validation_errors: Iterable[str] | None = None) -> None:
        self.status = status
        self.validation_errors: tuple[str, ...] = tuple(validation_errors or ())
        super().__init__(_render_message(status, self.validation_errors))

    def __reduce__(self) -> tuple:
        return (type(self), (self.status, self.validation_errors))


class UnsupportedStatusError(ValueError):
    """The HTTP adapter received a status with no transport mapping."""

    def __init__(self, status: object) -> None:
        self.status = status
        super().__init__(f"Unsupported result status: {status!r}")
