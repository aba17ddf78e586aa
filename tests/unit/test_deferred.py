"""
Tests for the asynchronous bridge — DeferredResult, lift and from_result.

Steps are plain coroutines plus asyncio.Future objects, to show that any
awaitable works as a source.
"""

from __future__ import annotations

import asyncio

import pytest

from railway_result import DeferredResult, Result, fail, from_result, lift, succeed


async def _resolved(result: Result) -> Result:
    await asyncio.sleep(0)
    return result


def deferred(result: Result) -> DeferredResult:
    return DeferredResult(_resolved(result))


class TestAwaiting:
    @pytest.mark.asyncio
    async def test_awaits_to_wrapped_result(self):
        assert await deferred(succeed(1)) == succeed(1)
        assert await deferred(fail("x")) == fail("x")

    @pytest.mark.asyncio
    async def test_accepts_asyncio_future(self):
        future: asyncio.Future = asyncio.get_running_loop().create_future()
        future.set_result(succeed("from future"))
        assert await DeferredResult(future) == succeed("from future")

    @pytest.mark.asyncio
    async def test_outcome_is_memoized(self, calls):
        async def source():
            calls.append("source")
            return succeed(1)

        chain = DeferredResult(source())
        assert await chain == succeed(1)
        assert await chain == succeed(1)
        assert calls == ["source"]

    @pytest.mark.asyncio
    async def test_non_result_source_raises_type_error(self):
        async def source():
            return 42

        with pytest.raises(TypeError, match="Expected a Result"):
            await DeferredResult(source())

    @pytest.mark.asyncio
    async def test_source_exception_propagates(self):
        async def source():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            await DeferredResult(source()).map_ok(lambda x: x)

    @pytest.mark.asyncio
    async def test_reawait_after_source_raised_reports_consumed_source(self):
        async def source():
            raise RuntimeError("boom")

        chain = DeferredResult(source())
        with pytest.raises(RuntimeError, match="boom"):
            await chain
        with pytest.raises(RuntimeError, match="already consumed"):
            await chain

    @pytest.mark.asyncio
    async def test_concurrent_children_of_unresolved_parent_are_rejected(self):
        """
        GIVEN one unresolved parent shared by two children
        WHEN both children are awaited together
        THEN the second await of the parent raises a clear RuntimeError.
        """
        parent = deferred(succeed(1))
        with pytest.raises(RuntimeError, match="already consumed"):
            await asyncio.gather(parent.map_ok(str), parent.map_ok(lambda x: x + 1))

    @pytest.mark.asyncio
    async def test_children_of_resolved_parent_can_run_together(self):
        parent = deferred(succeed(1))
        await parent
        first, second = await asyncio.gather(parent.map_ok(str), parent.map_ok(lambda x: x + 1))
        assert (first, second) == (succeed("1"), succeed(2))

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        async def never():
            await asyncio.Event().wait()
            return succeed(1)

        task = asyncio.ensure_future(DeferredResult(never()).map_ok(lambda x: x))
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    def test_repr_shows_pending_and_completed(self):
        assert repr(from_result(succeed(1))) == "DeferredResult(Success(1))"
        pending = DeferredResult(asyncio.sleep(0, result=succeed(1)))
        assert repr(pending) == "DeferredResult(<pending>)"
        pending._source.close()  # type: ignore[union-attr]


class TestTransformations:
    @pytest.mark.asyncio
    async def test_map_ok(self):
        assert await deferred(succeed(5)).map_ok(lambda x: x * 2) == succeed(10)

    @pytest.mark.asyncio
    async def test_map_ok_skipped_on_failure(self, calls):
        result = await deferred(fail("bad")).map_ok(lambda x: calls.append("mapper"))
        assert result == fail("bad")
        assert calls == []

    @pytest.mark.asyncio
    async def test_map_error(self):
        assert await deferred(fail("bad")).map_error(str.upper) == fail("BAD")
        assert await deferred(succeed(1)).map_error(str.upper) == succeed(1)

    @pytest.mark.asyncio
    async def test_inspect_runs_on_success_only(self):
        captured: list = []
        assert await deferred(succeed(1)).inspect(captured.append) == succeed(1)
        assert await deferred(fail("x")).inspect(captured.append) == fail("x")
        assert captured == [1]

    @pytest.mark.asyncio
    async def test_inspect_error_runs_on_failure_only(self):
        captured: list = []
        await deferred(succeed(1)).inspect_error(captured.append)
        await deferred(fail("x")).inspect_error(captured.append)
        assert captured == ["x"]

    @pytest.mark.asyncio
    async def test_nothing_runs_until_awaited(self, calls):
        chain = deferred(succeed(1)).map_ok(lambda x: calls.append("mapper") or x)
        assert calls == []
        await chain
        assert calls == ["mapper"]


class TestBindCombine:
    @pytest.mark.asyncio
    async def test_with_sync_selector(self):
        result = await deferred(succeed(42)).bind_combine(
            lambda n: succeed("Forty-two"),
            lambda n, s: f"{n} {s}",
        )
        assert result == succeed("42 Forty-two")

    @pytest.mark.asyncio
    async def test_with_async_selector(self):
        async def get_string(n: int) -> Result[str, str]:
            await asyncio.sleep(0)
            return succeed("Forty-two")

        result = await deferred(succeed(42)).bind_combine(get_string, lambda n, s: f"{n} {s}")
        assert result == succeed("42 Forty-two")

    @pytest.mark.asyncio
    async def test_failed_receiver_never_invokes_selector(self, calls):
        async def selector(value):
            calls.append("selector")
            return succeed(value)

        def combine(a, b):
            calls.append("combine")
            return b

        result = await deferred(fail("Error 42")).bind_combine(selector, combine)
        assert result == fail("Error 42")
        assert calls == []

    @pytest.mark.asyncio
    async def test_failed_selector_propagates(self):
        async def selector(_):
            return fail("second")

        result = await deferred(succeed(1)).bind_combine(selector, lambda a, b: b)
        assert result == fail("second")

    @pytest.mark.asyncio
    async def test_receiver_completes_before_selector_starts(self, calls):
        async def first():
            calls.append("first.start")
            await asyncio.sleep(0)
            calls.append("first.end")
            return succeed(1)

        async def second(n):
            calls.append("second.start")
            await asyncio.sleep(0)
            calls.append("second.end")
            return succeed(n + 1)

        result = await DeferredResult(first()).bind_combine(second, lambda a, b: (a, b))
        assert result == succeed((1, 2))
        assert calls == ["first.start", "first.end", "second.start", "second.end"]

    @pytest.mark.asyncio
    async def test_selector_returning_non_result_raises(self):
        with pytest.raises(TypeError, match="Expected a Result from selector"):
            await deferred(succeed(1)).bind_combine(lambda n: n, lambda a, b: b)

    @pytest.mark.asyncio
    async def test_bind_keeps_new_value(self):
        async def double(n):
            return succeed(n * 2)

        assert await deferred(succeed(4)).bind(double) == succeed(8)

    @pytest.mark.asyncio
    async def test_bind_combine_async_from_sync_result(self):
        async def get_string(n):
            return succeed(str(n))

        result = await succeed(7).bind_combine_async(get_string, lambda n, s: (n, s))
        assert result == succeed((7, "7"))


class TestTerminalOperations:
    @pytest.mark.asyncio
    async def test_reduce(self):
        assert await deferred(succeed(2)).reduce(lambda v: v * 10, len) == 20
        assert await deferred(fail("abc")).reduce(lambda v: v * 10, len) == 3

    @pytest.mark.asyncio
    async def test_collapse(self):
        assert await deferred(succeed("ok")).collapse() == "ok"
        assert await deferred(fail("Error 42")).collapse() == "Error 42"

    @pytest.mark.asyncio
    async def test_inspect_either(self, calls):
        await deferred(fail("x")).inspect_either(
            lambda v: calls.append("ok"),
            lambda e: calls.append("error"),
        )
        assert calls == ["error"]


class TestLift:
    @pytest.mark.asyncio
    async def test_wraps_plain_value_as_success(self):
        async def fetch() -> int:
            return 42

        assert await lift(fetch()) == succeed(42)

    @pytest.mark.asyncio
    async def test_lifted_value_feeds_the_chain(self):
        async def fetch() -> int:
            return 21

        result = await lift(fetch()).bind(lambda n: succeed(n * 2))
        assert result == succeed(42)


class TestFromResult:
    @pytest.mark.asyncio
    async def test_completed_deferred(self):
        assert await from_result(fail("x")) == fail("x")
        assert await succeed(1).to_deferred() == succeed(1)

    def test_rejects_non_result(self):
        with pytest.raises(TypeError):
            from_result(42)  # type: ignore[arg-type]
