"""
AsyncResult — a pending Result that chains like a concrete one.

Wraps any awaitable of a Result and exposes the same combinators as
Result. Every combinator returns a new AsyncResult; nothing runs until the
chain is awaited:

    user = await (
        Result.create(user_id)
        .map_async(fetch_user)
        .validate(lambda u: u.active, StatusCode.CONFLICT, "User is disabled")
        .switch(load_profile)
        .catch(lambda err: Result.create_with_error(StatusCode.OPERATION_FAILED, str(err)))
    )

Scheduling rules:
  - map / switch / validate are strictly sequential: a step is never
    started before the previous Result is known to be successful
  - combine fans out: all requested branches run concurrently
    (asyncio.gather) and are joined before the first-failure check; a
    failing branch does not cancel its siblings
  - catch is the only combinator that intercepts raised exceptions

Callables passed to the combinators may be plain or coroutine functions:
an awaitable return value is awaited, anything else is used as is.
"""

from __future__ import annotations

import asyncio
import inspect
from typing import (
    Any,
    Awaitable,
    Callable,
    Generator,
    Generic,
    Optional,
    Sequence,
    TypeVar,
    Union,
)

import structlog

from fluent_result.result import (
    Message,
    Result,
    ResultOfItems,
    collect_branches,
    first_failure,
)
from fluent_result.status import StatusCode

T = TypeVar("T")
U = TypeVar("U")
V = TypeVar("V")

log = structlog.get_logger(__name__)


async def _settle(value: Union[V, Awaitable[V]]) -> V:
    if inspect.isawaitable(value):
        return await value
    return value


async def _ready(result: Result[T]) -> Result[T]:
    return result


class AsyncResult(Generic[T]):
    """
    Awaitable wrapper around a pending Result.

    The source is awaited at most once, even by concurrent awaiters;
    awaiting the same AsyncResult again returns the cached Result, or
    re-raises the exception the source raised.

        >>> async def main():
        ...     return await AsyncResult.of(Result.create(2)).map(lambda x: x + 1)
        >>> asyncio.run(main()).data
        3
    """

    __slots__ = ("_source", "_task", "_resolved")

    def __init__(self, source: Awaitable[Result[T]]) -> None:
        self._source = source
        self._task: Optional[asyncio.Future[Result[T]]] = None
        self._resolved: Optional[Result[T]] = None

    @staticmethod
    def of(value: Union[Result[T], Awaitable[Result[T]]]) -> AsyncResult[T]:
        """Lift a Result, a coroutine or any awaitable of a Result."""
        if isinstance(value, AsyncResult):
            return value
        if isinstance(value, Result):
            return AsyncResult(_ready(value))
        return AsyncResult(value)

    def __await__(self) -> Generator[Any, None, Result[T]]:
        return self._resolve().__await__()

    async def _resolve(self) -> Result[T]:
        if self._resolved is not None:
            return self._resolved
        # Concurrent awaiters share one task; a raised error is re-raised to each.
        if self._task is None:
            self._task = asyncio.ensure_future(self._source)
        self._resolved = await self._task
        return self._resolved

    def _then(self, step: Callable[[Result[T]], Awaitable[Result[U]]]) -> AsyncResult[U]:
        async def run() -> Result[U]:
            return await step(await self)

        return AsyncResult(run())

    # ──────────────────────── Map ────────────────────────

    def map(self, converter: Callable[[T], Union[U, Awaitable[U]]]) -> AsyncResult[U]:
        """Transform the data once resolved. The converter is not started on failure."""

        async def step(result: Result[T]) -> Result[U]:
            if not result.is_successful():
                return result.to()
            return Result.create(await _settle(converter(result.data)))  # type: ignore[arg-type]

        return self._then(step)

    def map_list(self, converter: Callable[[Any], Union[U, Awaitable[U]]]) -> AsyncResult[list[U]]:
        """Apply the converter to every item, one after another, keeping order."""

        async def convert_all(items: Sequence[Any]) -> list[U]:
            return [await _settle(converter(item)) for item in items]

        return self.map(convert_all)  # type: ignore[arg-type]

    # ──────────────────────── Switch ────────────────────────

    def switch(
        self,
        continuation: Callable[[T], Union[Result[U], Awaitable[Result[U]]]],
    ) -> AsyncResult[U]:
        """Chain a Result-returning step once this Result resolved successfully."""

        async def step(result: Result[T]) -> Result[U]:
            if not result.is_successful():
                return result.to()
            return await _settle(continuation(result.data))  # type: ignore[arg-type]

        return self._then(step)

    # ──────────────────────── Validate ────────────────────────

    def validate(
        self,
        condition: Union[bool, Callable[[T], Union[bool, Awaitable[bool]]], None],
        status: StatusCode,
        message: Message[T],
        skip_on_invalid_result: bool = False,
    ) -> AsyncResult[T]:
        """
        Same rules as Result.validate; the predicate may be a coroutine function.

        When skip_on_invalid_result gates the check, the predicate is never
        called.
        """

        async def step(result: Result[T]) -> Result[T]:
            if skip_on_invalid_result and not result.is_successful():
                return result
            passed = bool(await _settle(condition(result.data))) if callable(condition) else condition
            return result.validate(passed, status, message, skip_on_invalid_result)

        return self._then(step)

    def validate_not_null(
        self,
        status: StatusCode,
        message: str,
        skip_on_invalid_result: bool = True,
    ) -> AsyncResult[T]:
        """Fail the resolved Result when its data is None."""

        async def step(result: Result[T]) -> Result[T]:
            return result.validate_not_null(status, message, skip_on_invalid_result)

        return self._then(step)

    # ──────────────────────── Combine ────────────────────────

    def combine(self, requests: Callable[[T], Any], mapper: Callable[..., Any]) -> AsyncResult[Any]:
        """
        Merge independent branches requested from the resolved data.

            await Result.create(user).combine_async(
                lambda u: (roles.get_async(u.role_id), friends.count_async(u.id)),
                lambda u, role, friend_count: UserView(u, role, friend_count),
            )

        Branches may be coroutines, AsyncResults or concrete Results. They
        are all started before any is inspected; once every branch settled
        the first failure in positional order wins.
        """

        async def step(result: Result[T]) -> Result[Any]:
            if not result.is_successful():
                return result.to()
            branches = collect_branches(requests(result.data))  # type: ignore[arg-type]
            resolved: list[Result[Any]] = await asyncio.gather(*(_settle(branch) for branch in branches))
            failure = first_failure(resolved)
            if failure is not None:
                return failure.to()
            return Result.create(await _settle(mapper(result.data, *(branch.data for branch in resolved))))

        return self._then(step)

    # ──────────────────────── Exception Bridge ────────────────────────

    def catch(
        self,
        on_error: Callable[[Exception], Union[Result[T], Awaitable[Result[T]]]],
    ) -> AsyncResult[T]:
        """
        Turn an exception raised while resolving into a Result.

        A Result that resolves normally passes through untouched, failed
        status included.

            await fetch_user(user_id).catch(
                lambda err: Result.create_with_error(StatusCode.OPERATION_FAILED, str(err))
            )
        """

        async def run() -> Result[T]:
            try:
                return await self
            except Exception as error:
                log.debug("result.catch.intercepted", error_type=type(error).__name__)
                return await _settle(on_error(error))

        return AsyncResult(run())

    async def as_valid_data(self) -> T:
        """Await, then unwrap the data or raise ResultValidationError."""
        return (await self).as_valid_data()

    # ──────────────────────── Paging ────────────────────────

    def to_result_of_items(
        self,
        converter: Optional[Callable[[T], Union[ResultOfItems[Any], Awaitable[ResultOfItems[Any]]]]] = None,
    ) -> AsyncResult[Sequence[Any]]:
        """Lift the resolved sequence into a ResultOfItems."""

        async def step(result: Result[T]) -> Result[Sequence[Any]]:
            if converter is None or not result.is_successful():
                return result.to_result_of_items()
            return await _settle(converter(result.data))  # type: ignore[arg-type]

        return self._then(step)

    def __repr__(self) -> str:
        state = "pending" if self._resolved is None else repr(self._resolved)
        return f"AsyncResult({state})"
