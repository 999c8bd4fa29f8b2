"""
Result — the outcome value at the core of the railway.

A Result[T] always carries a status, optional data and an optional ordered
tuple of messages. It is on the success track exactly when its status is
StatusCode.SUCCESS; every other status puts it on the failure track.

    ┌───────────┐    switch     ┌───────────┐   validate    ┌──────────┐
    │  create   │──Success──────│   load    │──Success──────│  check   │──→ Result[T]
    │           │               │           │               │          │
    └─────┬─────┘               └─────┬─────┘               └─────┬────┘
          │ failure status            │ failure status            │ failure status
          └───────────────────────────┴───────────────────────────┴──→ Result[T]

Each combinator inspects the status before doing any work, so a failed
Result flows through the rest of a pipeline untouched. Combinators never
mutate: every step returns a new Result.

Differences from an exception-based flow:
  - failures are data (status + messages), they never raise
  - validate() accumulates messages instead of stopping at the first one
  - as_valid_data() is the one place where a failure becomes an exception
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Any,
    Awaitable,
    Callable,
    Generic,
    Iterable,
    Optional,
    Sequence,
    TypeVar,
    Union,
    overload,
)

import structlog

from fluent_result.errors import ResultValidationError
from fluent_result.status import StatusCode

if TYPE_CHECKING:
    from fluent_result.async_result import AsyncResult

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")
T1 = TypeVar("T1")
T2 = TypeVar("T2")
T3 = TypeVar("T3")
T4 = TypeVar("T4")
T5 = TypeVar("T5")

Condition = Union[bool, Callable[[T], bool], None]
Message = Union[str, Callable[[T], str], None]

log = structlog.get_logger(__name__)


def append_message(messages: Optional[tuple[str, ...]], message: Optional[str]) -> Optional[tuple[str, ...]]:
    """Append one message to an existing (possibly absent) message tuple."""
    if message is None:
        return messages
    if messages is None:
        return (message,)
    return (*messages, message)


def resolve_message(message: Message[T], data: Optional[T]) -> Optional[str]:
    """Render a literal message, or compute it from the current data."""
    if callable(message):
        return message(data)
    return message


def condition_holds(condition: Condition[T], data: Optional[T]) -> bool:
    """Evaluate a plain boolean or a per-data predicate. A missing condition fails."""
    if condition is None:
        return False
    if isinstance(condition, bool):
        return condition
    return bool(condition(data))


def collect_branches(requested: Any) -> tuple[Any, ...]:
    """Normalize what a combine() request function returned into a tuple of branches."""
    branches = tuple(requested) if isinstance(requested, (tuple, list)) else (requested,)
    if not branches:
        raise ValueError("combine requires at least one requested result")
    return branches


def first_failure(results: Iterable[Result[Any]]) -> Optional[Result[Any]]:
    """Return the first result, in positional order, that is not successful."""
    for result in results:
        if not result.is_successful():
            return result
    return None


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    """
    Outcome of an operation: data, a status and optional messages.

    Usage:
        >>> Result.create(21).map(lambda x: x * 2).data
        42

        >>> failed = Result.create_with_error(StatusCode.NOT_FOUND, "No such user")
        >>> failed.map(lambda user: user.name).status
        <StatusCode.NOT_FOUND: 'NotFound'>

    `messages` is None when nothing was ever attached; an empty tuple is
    normalized to None.
    """

    data: Optional[T] = None
    status: StatusCode = StatusCode.SUCCESS
    messages: Optional[tuple[str, ...]] = None

    def __post_init__(self) -> None:
        if self.messages is not None:
            object.__setattr__(self, "messages", tuple(self.messages) or None)

    # ──────────────────────── Static Factories ────────────────────────

    @staticmethod
    def create(data: T, message: Optional[str] = None) -> Result[T]:
        """
        Create a successful Result.

        An optional message annotates the Result without failing it.
        """
        return Result(data, StatusCode.SUCCESS, None if message is None else (message,))

    @staticmethod
    def create_with_error(status: StatusCode, *messages: str) -> Result[T]:
        """
        Create a failed Result with no data.

            Result.create_with_error(StatusCode.NOT_FOUND, "User not found")
        """
        return Result(None, status, messages)

    # ──────────────────────── Introspection ────────────────────────

    def is_successful(self) -> bool:
        """Check if this Result is on the success track."""
        return self.status is StatusCode.SUCCESS

    def to(self, default: Optional[U] = None) -> Result[U]:
        """
        Re-type this Result: keep status and messages, replace the data.

        Used for every failed pass-through, where the data of the new type
        is absent.
        """
        return Result(default, self.status, self.messages)

    # ──────────────────────── Map ────────────────────────

    def map(self, converter: Callable[[T], U]) -> Result[U]:
        """
        Transform the data of a successful Result. Short-circuits on failure.

            Result.create(5).map(lambda x: x * 2)            # → Result(10)
            Result.create_with_error(...).map(lambda x: ...)  # → same status/messages

        The converter is never invoked for a failed Result.
        """
        if not self.is_successful():
            return self.to()
        return Result.create(converter(self.data))  # type: ignore[arg-type]

    def map_list(self, converter: Callable[[Any], U]) -> Result[list[U]]:
        """Apply the converter to every item of a successful sequence, keeping order."""
        return self.map(lambda items: [converter(item) for item in items])  # type: ignore[union-attr]

    # ──────────────────────── Switch ────────────────────────

    def switch(self, continuation: Callable[[T], Result[U]]) -> Result[U]:
        """
        Chain a Result-returning step. Short-circuits on failure.

        This is the bind of the railway: on success the continuation's
        Result replaces this one entirely, status and messages included.

            def load_role(user: User) -> Result[Role]: ...

            Result.create(user).switch(load_role)
        """
        if not self.is_successful():
            return self.to()
        return continuation(self.data)  # type: ignore[arg-type]

    # ──────────────────────── Validate ────────────────────────

    def validate(
        self,
        condition: Condition[T],
        status: StatusCode,
        message: Message[T],
        skip_on_invalid_result: bool = False,
    ) -> Result[T]:
        """
        Check the data against a predicate (or a plain boolean).

        - skip_on_invalid_result and already failed → returned unchanged,
          the predicate is not evaluated
        - predicate holds → returned unchanged, even when already failed
        - predicate fails → same data, status overwritten with `status`,
          message appended after any existing messages

        `message` may be a function of the current data; it is only called
        when the check fails.

            (
                Result.create(order)
                .validate(lambda o: o.total > 0, StatusCode.INVALID_ARGUMENT, "Total must be positive")
                .validate(lambda o: o.items, StatusCode.INVALID_ARGUMENT, "Order has no items")
            )
        """
        if skip_on_invalid_result and not self.is_successful():
            return self
        if condition_holds(condition, self.data):
            return self
        return dataclasses.replace(
            self,
            status=status,
            messages=append_message(self.messages, resolve_message(message, self.data)),
        )

    def validate_not_null(
        self,
        status: StatusCode,
        message: str,
        skip_on_invalid_result: bool = True,
    ) -> Result[T]:
        """
        Fail the Result when its data is None.

        When skipping an already failed Result, its status and messages are
        kept and the data is dropped.
        """
        if skip_on_invalid_result and not self.is_successful():
            return self.to()
        if self.data is None:
            return Result(None, status, append_message(self.messages, message))
        return self

    # ──────────────────────── Combine ────────────────────────

    @overload
    def combine(
        self,
        requests: Callable[[T], Result[T1]],
        mapper: Callable[[T, T1], R],
    ) -> Result[R]: ...

    @overload
    def combine(
        self,
        requests: Callable[[T], tuple[Result[T1], Result[T2]]],
        mapper: Callable[[T, T1, T2], R],
    ) -> Result[R]: ...

    @overload
    def combine(
        self,
        requests: Callable[[T], tuple[Result[T1], Result[T2], Result[T3]]],
        mapper: Callable[[T, T1, T2, T3], R],
    ) -> Result[R]: ...

    @overload
    def combine(
        self,
        requests: Callable[[T], tuple[Result[T1], Result[T2], Result[T3], Result[T4]]],
        mapper: Callable[[T, T1, T2, T3, T4], R],
    ) -> Result[R]: ...

    @overload
    def combine(
        self,
        requests: Callable[[T], tuple[Result[T1], Result[T2], Result[T3], Result[T4], Result[T5]]],
        mapper: Callable[[T, T1, T2, T3, T4, T5], R],
    ) -> Result[R]: ...

    def combine(self, requests: Callable[[T], Any], mapper: Callable[..., R]) -> Result[R]:
        """
        Merge this Result with independent Results requested from its data.

            Result.create(user).combine(
                lambda u: (roles.get(u.role_id), friends.count(u.id)),
                lambda u, role, friend_count: f"{u.name} ({role.name}) has {friend_count} friends",
            )

        The request function is skipped when this Result failed. Otherwise
        the requested Results are checked in positional order and the first
        failure (status and messages) becomes the outcome. When all succeed
        the mapper receives this data followed by every requested data.
        """
        if not self.is_successful():
            return self.to()
        branches: tuple[Result[Any], ...] = collect_branches(requests(self.data))  # type: ignore[arg-type]
        failure = first_failure(branches)
        if failure is not None:
            return failure.to()
        return Result.create(mapper(self.data, *(branch.data for branch in branches)))

    # ──────────────────────── Escape Hatch ────────────────────────

    def as_valid_data(self) -> T:
        """
        Unwrap the data of a successful Result.

        Raises ResultValidationError, carrying status and messages, when the
        Result failed.

            Result.create(5).as_valid_data()  # → 5
        """
        if not self.is_successful():
            log.debug(
                "result.as_valid_data.rejected",
                status=self.status.value,
                message_count=len(self.messages or ()),
            )
            raise ResultValidationError(self.status, self.messages)
        return self.data  # type: ignore[return-value]

    # ──────────────────────── Paging ────────────────────────

    def to_result_of_items(
        self,
        converter: Optional[Callable[[T], ResultOfItems[Any]]] = None,
    ) -> ResultOfItems[Any]:
        """
        Lift a Result of a sequence into a ResultOfItems.

        Without a converter the items are wrapped with count and total set
        to their length; None data counts as no items. A failed Result
        propagates without calling the converter.
        """
        if not self.is_successful():
            return ResultOfItems(None, self.status, self.messages)
        if converter is None:
            items = () if self.data is None else self.data
            return create_result_of_items(items, len(items))  # type: ignore[arg-type]
        return converter(self.data)  # type: ignore[arg-type]

    # ──────────────────────── Async Support ────────────────────────

    def to_async(self) -> AsyncResult[T]:
        """Lift this Result into the pending form to chain async steps."""
        from fluent_result.async_result import AsyncResult

        return AsyncResult.of(self)

    def map_async(self, converter: Callable[[T], Union[U, Awaitable[U]]]) -> AsyncResult[U]:
        """
        Async map — the converter may be a coroutine function.

            result = await Result.create(user_id).map_async(fetch_user)
        """
        return self.to_async().map(converter)

    def switch_async(
        self,
        continuation: Callable[[T], Union[Result[U], Awaitable[Result[U]]]],
    ) -> AsyncResult[U]:
        """Async switch — the continuation is only started on success."""
        return self.to_async().switch(continuation)

    def validate_async(
        self,
        condition: Union[bool, Callable[[T], Union[bool, Awaitable[bool]]], None],
        status: StatusCode,
        message: Message[T],
        skip_on_invalid_result: bool = False,
    ) -> AsyncResult[T]:
        """Async validate — the predicate may be a coroutine function."""
        return self.to_async().validate(condition, status, message, skip_on_invalid_result)

    def combine_async(self, requests: Callable[[T], Any], mapper: Callable[..., Any]) -> AsyncResult[Any]:
        """Async combine — every requested branch is awaited concurrently."""
        return self.to_async().combine(requests, mapper)

    def to_result_of_items_async(
        self,
        converter: Optional[Callable[[T], Union[ResultOfItems[Any], Awaitable[ResultOfItems[Any]]]]] = None,
    ) -> AsyncResult[Sequence[Any]]:
        """Async to_result_of_items — the converter may be a coroutine function."""
        return self.to_async().to_result_of_items(converter)

    # ──────────────────────── Serialization ────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """Serialized shape: {data, status, messages}."""
        return {
            "data": self.data,
            "status": self.status.value,
            "messages": None if self.messages is None else list(self.messages),
        }


# ──────────────────────── Paged Results ────────────────────────


@dataclass(frozen=True, slots=True)
class ResultMetadata:
    """
    Paging information attached to a ResultOfItems.

    >>> ResultMetadata(count=3, total=10)
    ResultMetadata(count=3, total=10, page_size=None, page_index=None)
    """

    count: int
    total: Optional[int] = None
    page_size: Optional[int] = None
    page_index: Optional[int] = None


@dataclass(frozen=True, slots=True)
class ResultOfItems(Result[Sequence[T]]):
    """
    A Result whose data is a sequence of items, plus paging metadata.

    metadata is None when the Result was built without paging information,
    e.g. a failure propagated by to_result_of_items().
    """

    metadata: Optional[ResultMetadata] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialized shape: {data, status, messages, metadata}."""
        body = Result.to_dict(self)
        if self.data is not None:
            body["data"] = list(self.data)
        body["metadata"] = None if self.metadata is None else dataclasses.asdict(self.metadata)
        return body


# ──────────────────────── Module-level Factories ────────────────────────


def create(data: T, message: Optional[str] = None) -> Result[T]:
    """Create a successful Result, optionally annotated with a message."""
    return Result.create(data, message)


def create_with_error(status: StatusCode, *messages: str) -> Result[Any]:
    """Create a failed Result with the given status and messages."""
    return Result.create_with_error(status, *messages)


def validate(condition: bool, status: StatusCode, message: Optional[str]) -> Result[bool]:
    """
    Guard clause building block.

        validate(age >= 18, StatusCode.INVALID_ARGUMENT, "Must be an adult")

    Returns create(True) when the condition holds, otherwise a failure
    carrying `status` and `message`.
    """
    if condition:
        return Result.create(True)
    return Result(None, status, append_message(None, message))


def create_result_of_items(
    items: Sequence[T],
    total_count: Optional[int],
    page_size: Optional[int] = None,
    page_index: Optional[int] = None,
    count: Optional[int] = None,
) -> ResultOfItems[T]:
    """
    Create a successful ResultOfItems.

        create_result_of_items(page, total_count=120, page_size=20, page_index=3)

    metadata.count defaults to the number of items.
    """
    return ResultOfItems(
        items,
        StatusCode.SUCCESS,
        None,
        ResultMetadata(
            count=len(items) if count is None else count,
            total=total_count,
            page_size=page_size,
            page_index=page_index,
        ),
    )
