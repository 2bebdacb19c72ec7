"""Status values and the success carrier they pair with.

A ``Status`` is the failure descriptor that propagation forwards and decorates.
A fallible function either returns a ``Status`` (no payload) or a
``StatusOr[T]``, which is a ``Success[T]`` on success or a non-OK ``Status``
on failure.
"""

from __future__ import annotations

import dataclasses
import enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


class StatusCode(enum.IntEnum):
    """Canonical status codes."""

    OK = 0
    CANCELLED = 1
    UNKNOWN = 2
    INVALID_ARGUMENT = 3
    DEADLINE_EXCEEDED = 4
    NOT_FOUND = 5
    ALREADY_EXISTS = 6
    PERMISSION_DENIED = 7
    RESOURCE_EXHAUSTED = 8
    FAILED_PRECONDITION = 9
    ABORTED = 10
    OUT_OF_RANGE = 11
    UNIMPLEMENTED = 12
    INTERNAL = 13
    UNAVAILABLE = 14
    DATA_LOSS = 15
    UNAUTHENTICATED = 16


@dataclasses.dataclass(frozen=True, slots=True)
class Status:
    """An immutable error classification plus a human-readable message.

    OK statuses never carry a message or payloads; both are dropped on
    construction so that every OK status compares equal.
    """

    code: StatusCode = StatusCode.OK
    message: str = ""
    payloads: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        code = StatusCode(self.code)
        object.__setattr__(self, "code", code)
        if code is StatusCode.OK:
            object.__setattr__(self, "message", "")
            object.__setattr__(self, "payloads", ())

    def ok(self) -> bool:
        return self.code is StatusCode.OK

    def with_message(self, message: str) -> Status:
        """Return a copy carrying ``message``; OK statuses are returned as-is."""
        if self.ok():
            return self
        return dataclasses.replace(self, message=message)

    def with_payload(self, key: str, value: str) -> Status:
        """Return a copy with ``key`` set to ``value``, replacing any prior entry."""
        if self.ok():
            return self
        kept = tuple((k, v) for k, v in self.payloads if k != key)
        return dataclasses.replace(self, payloads=(*kept, (key, value)))

    def payload(self, key: str) -> str | None:
        for k, v in self.payloads:
            if k == key:
                return v
        return None

    def __str__(self) -> str:
        if self.ok():
            return "OK"
        if not self.message:
            return self.code.name
        return f"{self.code.name}: {self.message}"


@dataclasses.dataclass(frozen=True, slots=True)
class Success[T]:
    """A successful result carrying its payload."""

    value: T

    def ok(self) -> bool:
        return True


type StatusOr[T] = Success[T] | Status
"""Either a ``Success`` payload or a non-OK ``Status``, never both."""


def ok_status() -> Status:
    return Status()


def _make(code: StatusCode) -> Callable[[str], Status]:
    def factory(message: str = "") -> Status:
        return Status(code, message)

    factory.__name__ = f"{code.name.lower()}_error"
    factory.__qualname__ = factory.__name__
    factory.__doc__ = f"Return a ``{code.name}`` status with ``message``."
    return factory


cancelled_error = _make(StatusCode.CANCELLED)
unknown_error = _make(StatusCode.UNKNOWN)
invalid_argument_error = _make(StatusCode.INVALID_ARGUMENT)
deadline_exceeded_error = _make(StatusCode.DEADLINE_EXCEEDED)
not_found_error = _make(StatusCode.NOT_FOUND)
already_exists_error = _make(StatusCode.ALREADY_EXISTS)
permission_denied_error = _make(StatusCode.PERMISSION_DENIED)
resource_exhausted_error = _make(StatusCode.RESOURCE_EXHAUSTED)
failed_precondition_error = _make(StatusCode.FAILED_PRECONDITION)
aborted_error = _make(StatusCode.ABORTED)
out_of_range_error = _make(StatusCode.OUT_OF_RANGE)
unimplemented_error = _make(StatusCode.UNIMPLEMENTED)
internal_error = _make(StatusCode.INTERNAL)
unavailable_error = _make(StatusCode.UNAVAILABLE)
data_loss_error = _make(StatusCode.DATA_LOSS)
unauthenticated_error = _make(StatusCode.UNAUTHENTICATED)


def is_result(value: object) -> bool:
    """Return True when ``value`` is a ``Status`` or a ``Success``."""
    return isinstance(value, (Status, Success))


__all__ = [
    "Status",
    "StatusCode",
    "StatusOr",
    "Success",
    "aborted_error",
    "already_exists_error",
    "cancelled_error",
    "data_loss_error",
    "deadline_exceeded_error",
    "failed_precondition_error",
    "internal_error",
    "invalid_argument_error",
    "is_result",
    "not_found_error",
    "ok_status",
    "out_of_range_error",
    "permission_denied_error",
    "resource_exhausted_error",
    "unauthenticated_error",
    "unavailable_error",
    "unimplemented_error",
    "unknown_error",
]
