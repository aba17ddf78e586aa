"""
Result — the two-track value at the heart of Railway-Oriented Programming.

A Result[T, E] is either Success(value: T) or Failure(error: E). Nothing is
thrown: every step returns a Result and .bind_combine() / .bind() stop
calling later steps once one of them has failed.

    ┌────────────┐  bind_combine  ┌────────────┐  bind_combine  ┌────────────┐
    │ get_number │──Success───────│ get_string │──Success───────│get_message │──→ Result[R, E]
    └─────┬──────┘                └─────┬──────┘                └─────┬──────┘
          │ Failure                     │ Failure                     │ Failure
          └─────────────────────────────┴─────────────────────────────┴──→ Result[R, E]

Design notes:
  - Success and Failure are frozen dataclasses; the variant class IS the
    discriminant, so a Result never carries an unused payload slot
  - match/case destructures either variant: case Success(v) / case Failure(e)
  - The error type E is whatever the caller picks (str, an Enum,
    FailureDescription, ...); nothing here inspects it
"""

from __future__ import annotations

from dataclasses import dataclass
from inspect import isawaitable, iscoroutine
from typing import (
    TYPE_CHECKING,
    Any,
    Awaitable,
    Callable,
    Generic,
    Iterable,
    TypeVar,
)

if TYPE_CHECKING:
    from railway_result.deferred import DeferredResult
    from railway_result.execution import ExecutionContext

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
F = TypeVar("F")
A = TypeVar("A")
B = TypeVar("B")
R = TypeVar("R")


class Result(Generic[T, E]):
    """
    Railway-Oriented Programming Result.

    Two possible states:
      - Success(value: T) — the happy path
      - Failure(error: E) — the error track

    Every combinator returns a NEW Result; an existing one never changes state.

        >>> succeed(21).map_ok(lambda x: x * 2)
        Success(42)

        >>> fail("bad input").map_ok(lambda x: x * 2)
        Failure('bad input')
    """

    __slots__ = ()

    # ──────────────────────── Constructors ────────────────────────

    @staticmethod
    def succeed(value: T) -> Result[T, Any]:
        """Create a successful Result wrapping the given value."""
        return Success(value)

    @staticmethod
    def fail(error: E) -> Result[Any, E]:
        """Create a failed Result wrapping the given error payload."""
        return Failure(error)

    # ──────────────────────── Introspection ────────────────────────

    def is_success(self) -> bool:
        """Check if this Result is a Success."""
        return isinstance(self, Success)

    def is_failure(self) -> bool:
        """Check if this Result is a Failure."""
        return isinstance(self, Failure)

    # ──────────────────────── Eliminators ────────────────────────

    def reduce(self, on_ok: Callable[[T], R], on_error: Callable[[E], R]) -> R:
        """
        Apply exactly one of two functions depending on the state.

        This is the fundamental destructor; collapse() and inspect_either()
        are both special cases of it.

            result.reduce(
                on_ok=lambda user: f"Hello {user.name}",
                on_error=lambda err: f"Error: {err}",
            )
        """
        match self:
            case Success(v):
                return on_ok(v)
            case Failure(err):
                return on_error(err)
        raise TypeError("unreachable")  # pragma: no cover

    def collapse(self) -> Any:
        """
        Return the contained value, whichever track it is on.

        Only meaningful when T and E are the same type, e.g. once both
        rails have been turned into a final message string.

            >>> succeed("done").collapse()
            'done'
            >>> fail("Error 42").collapse()
            'Error 42'
        """
        return self.reduce(_identity, _identity)

    def inspect_either(
        self,
        on_ok: Callable[[T], Any],
        on_error: Callable[[E], Any],
    ) -> None:
        """Terminal step: run exactly one of the callbacks, return nothing."""
        self.reduce(on_ok, on_error)

    def get_or_else(self, default: T) -> T:
        """Extract the success value or return a default on failure."""
        match self:
            case Success(v):
                return v
            case _:
                return default

    # ──────────────────────── Core Transformations ────────────────────────

    def map_ok(self, mapper: Callable[[T], U]) -> Result[U, E]:
        """
        Transform the success value. Short-circuits on failure.

            succeed(5).map_ok(lambda x: x * 2)      # → Success(10)
            fail("x").map_ok(lambda x: x * 2)       # → Failure('x'), mapper not called
        """
        match self:
            case Success(v):
                return Success(mapper(v))
            case Failure(err):
                return Failure(err)
        raise TypeError("unreachable")  # pragma: no cover

    def map_error(self, mapper: Callable[[E], F]) -> Result[T, F]:
        """
        Transform the error payload. Passes success through unchanged.

        The only combinator that touches a failure in flight.
        """
        match self:
            case Success(v):
                return Success(v)
            case Failure(err):
                return Failure(mapper(err))
        raise TypeError("unreachable")  # pragma: no cover

    def bind_combine(
        self,
        selector: Callable[[T], Result[U, E]],
        combine: Callable[[T, U], R],
    ) -> Result[R, E]:
        """
        Chain a Result-returning step and fold its value with the current one.

        This is the KEY operator — it connects railway segments while keeping
        the previous success value in scope:

          - Failure: returned as-is, neither selector nor combine is called
          - Success(v): selector(v) runs; if it failed, its error propagates,
            otherwise the outcome is Success(combine(v, out))

        combine only ever sees the immediately preceding value and the new
        one. Longer chains accumulate by nesting, e.g. into tuples:

            (
                get_number()
                .bind_combine(get_string, lambda num, s: (num, s))
                .bind_combine(lambda p: get_message(*p), lambda _, msg: msg)
            )

        A selector returning an awaitable raises TypeError; use
        bind_combine_async for those.
        """
        match self:
            case Success(v):
                step = selector(v)
                if isawaitable(step):
                    if iscoroutine(step):
                        step.close()
                    raise TypeError("selector returned an awaitable; use bind_combine_async")
                return step.map_ok(lambda out: combine(v, out))
            case Failure(err):
                return Failure(err)
        raise TypeError("unreachable")  # pragma: no cover

    def bind(self, selector: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """
        Chain a Result-returning function. Short-circuits on failure.

        Haskell's >>=, Rust's .and_then(); same as bind_combine with a
        combine that keeps only the new value.
        """
        return self.bind_combine(selector, _second)

    def ensure(self, predicate: Callable[[T], bool], error: E) -> Result[T, E]:
        """
        Validate the success value against a condition.
        Short-circuits on existing failure.

            succeed(order).ensure(lambda o: o.total > 0, "Order total must be positive")
        """
        return self.bind(lambda v: Success(v) if predicate(v) else Failure(error))

    def recover(self, recovery_fn: Callable[[E], T]) -> Result[T, E]:
        """
        Turn a failure into a success explicitly.

            result.recover(lambda err: default_user)
        """
        match self:
            case Success(_):
                return self
            case Failure(err):
                return Success(recovery_fn(err))
        raise TypeError("unreachable")  # pragma: no cover

    # ──────────────────────── Side Effects ────────────────────────

    def inspect(self, action: Callable[[T], Any]) -> Result[T, E]:
        """
        Run a side effect on the success value, return this Result unchanged.

        Useful for logging and debugging mid-chain.

            result.inspect(lambda user: log.info("user.created", user_id=user.id))
        """
        match self:
            case Success(v):
                action(v)
        return self

    def inspect_error(self, action: Callable[[E], Any]) -> Result[T, E]:
        """Run a side effect on the error payload, return this Result unchanged."""
        match self:
            case Failure(err):
                action(err)
        return self

    # ──────────────────────── Async Bridge Entry Points ────────────────────────

    def to_deferred(self) -> DeferredResult[T, E]:
        """Wrap this Result as an already-completed DeferredResult."""
        from railway_result.deferred import from_result

        return from_result(self)

    def bind_combine_async(
        self,
        selector: Callable[[T], Result[U, E] | Awaitable[Result[U, E]]],
        combine: Callable[[T, U], R],
    ) -> DeferredResult[R, E]:
        """
        bind_combine with a selector that may return an awaitable.

            msg = await get_number().bind_combine_async(fetch_string, lambda n, s: (n, s))
        """
        return self.to_deferred().bind_combine(selector, combine)

    # ──────────────────────── Execution Context ────────────────────────

    def within(self, execution_context: ExecutionContext) -> Result[T, E]:
        """
        Hand this Result to an execution context (logging, timing, ...).

            result = (
                succeed(cmd)
                .bind(validate)
                .bind(persist)
                .within(LoggingExecutionContext(operation="CreateOrder"))
            )
        """
        return execution_context.execute(lambda: self)

    # ──────────────────────── Sequencing Helpers ────────────────────────

    @staticmethod
    def combine(
        ra: Result[A, E],
        rb: Result[B, E],
        combiner: Callable[[A, B], R],
    ) -> Result[R, E]:
        """
        Combine two Results. Both must succeed; the first failure wins.

            Result.combine(validate_name(cmd), validate_age(cmd), Person)
        """
        return ra.bind_combine(lambda _: rb, combiner)

    @staticmethod
    def all_of(results: Iterable[Result[T, E]]) -> Result[list[T], E]:
        """
        Collect Results into a Result of list, stopping at the first failure.

        The iterable is consumed lazily, so a generator of steps is only
        evaluated up to the failing one.
        """
        values: list[T] = []
        for r in results:
            match r:
                case Success(v):
                    values.append(v)
                case Failure(err):
                    return Failure(err)
        return Success(values)

    # ──────────────────────── Dunder methods ────────────────────────

    def __bool__(self) -> bool:
        """Allow truthiness check: `if result: ...` succeeds only on Success."""
        return self.is_success()


@dataclass(frozen=True, slots=True)
class Success(Result[T, E]):
    """The success track — wraps a value of type T."""

    _value: T

    def __repr__(self) -> str:
        return f"Success({self._value!r})"


@dataclass(frozen=True, slots=True)
class Failure(Result[T, E]):
    """The failure track — wraps an error payload of type E."""

    _error: E

    def __repr__(self) -> str:
        return f"Failure({self._error!r})"


def succeed(value: T) -> Result[T, Any]:
    """Module-level alias of Result.succeed."""
    return Success(value)


def fail(error: E) -> Result[Any, E]:
    """Module-level alias of Result.fail."""
    return Failure(error)


def _identity(value: Any) -> Any:
    return value


def _second(_: Any, value: U) -> U:
    return value
