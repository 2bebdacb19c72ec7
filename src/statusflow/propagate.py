"""Early-return propagation for functions that return ``Status`` values.

Python functions cannot return on behalf of their caller, so the helpers here
raise a ``Propagate`` signal on the failure path and the ``@propagating``
decorator on the enclosing function turns it into that function's return
value::

    @propagating
    def load(key: str) -> StatusOr[int]:
        return_if_error(connect())
        raw = assign_or_return(fetch(key), lambda _: _.append_context(f"loading {key}"))
        return Success(int(raw))

Because ``assign_or_return`` raises before returning, the assignment target is
never evaluated on failure.
"""

from __future__ import annotations

import functools
import inspect
import logging
import sys
from types import CodeType
from typing import TYPE_CHECKING, Any, overload

from statusflow.builder import CONTINUE, ErrorBuilder, consume
from statusflow.errors import MisuseError
from statusflow.status import Status, Success, is_result

if TYPE_CHECKING:
    from collections.abc import Callable

    from statusflow.status import StatusOr

    type ErrorExpression = Callable[[ErrorBuilder], Any]

log = logging.getLogger(__name__)

_NOT_DECORATED_HINT = (
    "Decorate the function that calls the helper with @propagating, and call the "
    "helper as a statement in that function's body, not inside a lambda or "
    "generator expression."
)

# Code objects of functions wrapped by @propagating.
_decorated: set[CodeType] = set()


class Propagate(BaseException):  # noqa: N818
    """Signal carrying the enclosing function's return value on a failure path.

    Derives from ``BaseException`` so ``except Exception`` blocks between the
    propagation site and the decorator do not intercept it.
    """

    def __init__(self, value: Any, origin: CodeType, site: str) -> None:
        super().__init__(
            f"{site}() propagated out of {origin.co_qualname} without passing "
            "through its @propagating wrapper"
        )
        self.value = value
        self.origin = origin
        self.site = site


def _failure_of(result: object, site: str) -> Status | None:
    if not is_result(result):
        raise MisuseError(
            f"{site}() expects a Status or Success, got {type(result).__name__}",
            hint="Return Success(value) or a Status from fallible functions.",
        )
    return None if result.ok() else result


def _propagate(
    status: Status, on_error: ErrorExpression | None, site: str, caller: CodeType
) -> None:
    if caller not in _decorated:
        raise MisuseError(
            f"{site}() called from {caller.co_qualname}, which is not decorated "
            "with @propagating",
            hint=_NOT_DECORATED_HINT,
        )
    builder = ErrorBuilder(status)
    value = builder if on_error is None else on_error(builder)
    if value is not CONTINUE:
        raise Propagate(value, caller, site)


def if_error(result: Status | Success[Any]) -> ErrorBuilder | None:
    """Return an ``ErrorBuilder`` over a failed ``result``, or None on success.

    Meant for explicit early returns::

        if (err := if_error(step())) is not None:
            return err.append_context("during step")
    """
    status = _failure_of(result, "if_error")
    if status is None:
        return None
    return ErrorBuilder(status)


def return_if_error(
    result: Status | Success[Any], on_error: ErrorExpression | None = None
) -> None:
    """Return from the enclosing ``@propagating`` function when ``result`` failed.

    Success falls through with no effect. On failure the status is wrapped in
    an ``ErrorBuilder``; ``on_error`` (if given) receives it and its result
    becomes the return value. ``CONTINUE`` from ``on_error`` falls through.
    """
    status = _failure_of(result, "return_if_error")
    if status is None:
        return
    _propagate(status, on_error, "return_if_error", sys._getframe(1).f_code)


@overload
def assign_or_return[T](
    result: StatusOr[T], on_error: ErrorExpression | None = None
) -> T: ...
@overload
def assign_or_return[T](
    result: StatusOr[T],
    on_error: ErrorExpression | None = None,
    *,
    into: Callable[[T], object],
) -> None: ...
def assign_or_return(result, on_error=None, *, into=None):
    """Extract the payload of ``result`` or return from the enclosing function.

    On success the payload is returned, or handed to ``into`` when given. On
    failure nothing is assigned: the enclosing ``@propagating`` function
    returns the failure, or whatever ``on_error`` evaluates to. ``on_error``
    may return ``CONTINUE`` only together with ``into``, in which case the
    destination stays untouched and execution proceeds.

    Whether ``on_error`` returns ``CONTINUE`` is only known after it ran, so a
    misplaced ``CONTINUE`` raises ``MisuseError`` after its side effects (log
    records, builder consumption) have happened.
    """
    if isinstance(result, Success):
        if into is None:
            return result.value
        into(result.value)
        return None

    status = _failure_of(result, "assign_or_return")
    if status is None:
        raise MisuseError(
            "assign_or_return() got an OK Status, which carries no payload",
            hint="Use return_if_error() for results without a payload.",
        )
    _propagate(status, on_error, "assign_or_return", sys._getframe(1).f_code)
    # Reached only when on_error returned CONTINUE.
    if into is None:
        raise MisuseError(
            "assign_or_return() cannot continue without a destination",
            hint="Pass into=... so the destination can stay untouched, or return from on_error.",
        )
    return None


def _resolve(signal: Propagate, target: CodeType, qualname: str) -> Any:
    if signal.origin is not target:
        raise MisuseError(str(signal), hint=_NOT_DECORATED_HINT) from None
    value = consume(signal.value)
    log.debug("Propagating %s out of %s", value, qualname)
    return value


def propagating[**P, R](fn: Callable[P, R]) -> Callable[P, R]:
    """Let ``return_if_error`` and ``assign_or_return`` return from ``fn``.

    Any ``ErrorBuilder`` that ends up as the return value, either returned
    directly or propagated, is consumed into its ``Status``.
    """
    if inspect.isgeneratorfunction(fn) or inspect.isasyncgenfunction(fn):
        raise MisuseError(
            f"@propagating cannot wrap generator function {fn.__qualname__}",
            hint="A generator has no single return value to propagate into; "
            "collect results in a regular function instead.",
        )
    target = inspect.unwrap(fn).__code__
    qualname = getattr(fn, "__qualname__", repr(fn))
    _decorated.add(target)

    if inspect.iscoroutinefunction(fn):

        @functools.wraps(fn)
        async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> Any:
            try:
                value = await fn(*args, **kwargs)
            except Propagate as signal:
                return _resolve(signal, target, qualname)
            return consume(value)

        return async_wrapper  # type: ignore[return-value]

    @functools.wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> Any:
        try:
            value = fn(*args, **kwargs)
        except Propagate as signal:
            return _resolve(signal, target, qualname)
        return consume(value)

    return wrapper  # type: ignore[return-value]


__all__ = [
    "CONTINUE",
    "Propagate",
    "assign_or_return",
    "if_error",
    "propagating",
    "return_if_error",
]
