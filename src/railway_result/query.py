"""
Query sugar — write a bind_combine chain as straight-line generator code.

Each `yield` hands a Result to the driver and evaluates to its success value;
the first failure ends the query and later lines never run:

    @query
    def describe() -> Generator[Result[Any, str], Any, str]:
        num = yield get_number()
        words = yield get_string(num)
        msg = yield get_message(num, words)
        return msg

    describe()   # same Result as the equivalent bind_combine chain

Every earlier value stays in scope for later steps, which is what
bind_combine's combine callback provides in chained form.

@query_async accepts the same kind of generator but lets it yield awaitables
of Results as well; the decorated function returns a DeferredResult.
"""

from __future__ import annotations

import functools
from typing import Any, Callable, Generator, ParamSpec, TypeAlias, TypeVar

from railway_result.deferred import DeferredResult, settle
from railway_result.result import Failure, Result, Success

P = ParamSpec("P")
E = TypeVar("E")
R = TypeVar("R")

QueryGenerator: TypeAlias = Generator[Result[Any, E], Any, R]


def query(fn: Callable[P, QueryGenerator[E, R]]) -> Callable[P, Result[R, E]]:
    """Turn a Result-yielding generator function into a Result-returning function."""

    @functools.wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[R, E]:
        return _run(fn(*args, **kwargs))

    return wrapper


def query_async(fn: Callable[P, Generator[Any, Any, R]]) -> Callable[P, DeferredResult[R, Any]]:
    """Like query, but steps may be awaitables of Results; returns a DeferredResult."""

    @functools.wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> DeferredResult[R, Any]:
        return DeferredResult(_run_async(fn(*args, **kwargs)))

    return wrapper


def _run(steps: QueryGenerator[E, R]) -> Result[R, E]:
    sent: Any = None
    while True:
        try:
            step = steps.send(sent)
        except StopIteration as stop:
            return Success(stop.value)
        match step:
            case Success(v):
                sent = v
            case Failure(_):
                steps.close()
                return step
            case _:
                steps.close()
                raise TypeError(f"query steps must yield Result, got {type(step).__name__}")


async def _run_async(steps: Generator[Any, Any, R]) -> Result[R, Any]:
    sent: Any = None
    while True:
        try:
            step = steps.send(sent)
        except StopIteration as stop:
            return Success(stop.value)
        try:
            outcome = await settle(step, "query step")
        except BaseException:
            steps.close()
            raise
        match outcome:
            case Success(v):
                sent = v
            case Failure(_):
                steps.close()
                return outcome
