"""
Tests for map / map_list — sync and async.

Test categories:
  - Success track: converter applied, result wrapped with create()
  - Short-circuit: failed Result keeps status/messages, converter never called
  - Laws: identity
  - Async: converter only started on success
"""

from __future__ import annotations

import asyncio

import pytest

from fluent_result import AsyncResult, Result, ResultAssertions, StatusCode, create_with_error

from tests.conftest import pending


class TestMap:
    def test_map_transforms_data(self):
        assert Result.create(5).map(lambda x: x * 2).data == 10

    def test_map_chain(self):
        result = Result.create(3).map(lambda x: x + 1).map(lambda x: x * 2).map(str)
        ResultAssertions.assert_success_data(result, "8")

    def test_identity_law(self):
        assert Result.create(41).map(lambda x: x) == Result.create(41)

    def test_map_drops_informational_messages(self):
        result = Result.create(1, "note").map(lambda x: x + 1)
        assert result.messages is None

    def test_map_short_circuits_on_failure(self):
        called = False

        def convert(x: int) -> int:
            nonlocal called
            called = True
            return x

        result = create_with_error(StatusCode.CONFLICT, "A", "B").map(convert)
        assert not called
        ResultAssertions.assert_failure(result, StatusCode.CONFLICT)
        ResultAssertions.assert_messages(result, ["A", "B"])
        assert result.data is None

    def test_failed_data_is_dropped_on_pass_through(self):
        failed = Result("kept", StatusCode.INVALID_ARGUMENT, ("bad",))
        assert failed.map(str.upper).data is None

    def test_converter_errors_propagate(self):
        with pytest.raises(ZeroDivisionError):
            Result.create(1).map(lambda x: x / 0)


class TestMapList:
    def test_maps_every_item_in_order(self):
        result = Result.create([3, 1, 2]).map_list(lambda x: x * 10)
        assert result.data == [30, 10, 20]

    def test_accepts_tuples(self):
        assert Result.create((1, 2)).map_list(str).data == ["1", "2"]

    def test_failure_passes_through(self):
        result = create_with_error(StatusCode.NOT_FOUND, "none").map_list(str)
        ResultAssertions.assert_failure(result, StatusCode.NOT_FOUND)
        ResultAssertions.assert_messages(result, ["none"])


class TestMapAsync:
    @pytest.mark.asyncio
    async def test_map_async_with_coroutine_function(self):
        async def double(x: int) -> int:
            return x * 2

        result = await Result.create(5).map_async(double)
        assert result.data == 10

    @pytest.mark.asyncio
    async def test_map_async_with_plain_function(self):
        result = await Result.create(5).map_async(lambda x: x + 1)
        assert result.data == 6

    @pytest.mark.asyncio
    async def test_map_async_does_not_start_on_failure(self):
        started = False

        async def convert(x: int) -> int:
            nonlocal started
            started = True
            return x

        result = await create_with_error(StatusCode.NOT_FOUND, "x").map_async(convert)
        assert not started
        ResultAssertions.assert_failure(result, StatusCode.NOT_FOUND)

    @pytest.mark.asyncio
    async def test_map_on_pending_result(self):
        result = await AsyncResult.of(pending(2)).map(lambda x: x * 3).map(str)
        assert result.data == "6"

    @pytest.mark.asyncio
    async def test_map_on_pending_failure(self):
        result = await AsyncResult.of(pending(2, StatusCode.CONFLICT, "busy")).map(lambda x: x * 3)
        ResultAssertions.assert_failure(result, StatusCode.CONFLICT)
        ResultAssertions.assert_messages(result, ["busy"])

    @pytest.mark.asyncio
    async def test_map_list_async_keeps_order(self):
        async def label(x: int) -> str:
            return f"#{x}"

        result = await AsyncResult.of(pending([1, 2, 3])).map_list(label)
        assert result.data == ["#1", "#2", "#3"]

    @pytest.mark.asyncio
    async def test_converter_errors_propagate(self):
        async def explode(x: int) -> int:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            await Result.create(1).map_async(explode)


class TestAsyncResult:
    @pytest.mark.asyncio
    async def test_awaiting_twice_returns_cached_result(self):
        calls = 0

        async def source() -> Result[int]:
            nonlocal calls
            calls += 1
            return Result.create(calls)

        pending_result = AsyncResult.of(source())
        first = await pending_result
        second = await pending_result
        assert first is second
        assert calls == 1

    @pytest.mark.asyncio
    async def test_concurrent_awaiters_share_one_resolution(self):
        calls = 0

        async def source() -> Result[int]:
            nonlocal calls
            calls += 1
            await asyncio.sleep(0)
            return Result.create(calls)

        shared = AsyncResult.of(source())

        async def use() -> Result[int]:
            return await shared

        first, second = await asyncio.gather(use(), use())
        assert first is second
        assert calls == 1

    @pytest.mark.asyncio
    async def test_awaiting_again_after_error_reraises_original(self):
        async def explode() -> Result[int]:
            raise ConnectionError("db down")

        shared = AsyncResult.of(explode())
        with pytest.raises(ConnectionError):
            await shared
        result = await shared.catch(lambda err: create_with_error(StatusCode.OPERATION_FAILED, str(err)))
        ResultAssertions.assert_messages(result, ["db down"])

    @pytest.mark.asyncio
    async def test_of_returns_same_async_result(self):
        pending_result = Result.create(1).to_async()
        assert AsyncResult.of(pending_result) is pending_result

    @pytest.mark.asyncio
    async def test_to_async_resolves_to_same_result(self):
        result = Result.create(4)
        assert await result.to_async() is result

    def test_repr_while_pending(self):
        pending_result = AsyncResult.of(Result.create(1))
        assert repr(pending_result) == "AsyncResult(pending)"
        pending_result._source.close()
