"""Fatal checks for states that must never occur.

These are not part of propagation: a failed check means a bug, so it is
logged at CRITICAL and raised instead of being returned.
"""

from __future__ import annotations

import logging
from typing import Any

from statusflow.errors import BadResultAccessError, CheckFailedError, MisuseError
from statusflow.status import Status, StatusOr, Success, is_result

log = logging.getLogger(__name__)


def _fail(message: str) -> CheckFailedError:
    log.critical("Check failed: %s", message, stacklevel=3)
    return CheckFailedError(f"Check failed: {message}")


def check(condition: object, message: str = "") -> None:
    """Raise ``CheckFailedError`` unless ``condition`` is truthy."""
    if not condition:
        raise _fail(message or "condition is false")


def check_ok(result: Status | Success[Any], message: str | None = None) -> None:
    """Raise ``CheckFailedError`` unless ``result`` is OK."""
    if not is_result(result):
        raise MisuseError(
            f"check_ok() expects a Status or Success, got {type(result).__name__}"
        )
    if result.ok():
        return
    detail = f"OK == {result}"
    raise _fail(f"{detail} ({message})" if message else detail)


def value_or_die[T](result: StatusOr[T]) -> T:
    """Return the payload of ``result``; a failure here is a bug."""
    if isinstance(result, Success):
        return result.value
    if isinstance(result, Status):
        log.critical("Payload accessed on failed result: %s", result, stacklevel=2)
        raise BadResultAccessError(
            f"Attempting to fetch value instead of handling error {result}",
            status=result,
            hint="Propagate with assign_or_return() instead of assuming success.",
        )
    raise MisuseError(
        f"value_or_die() expects a Status or Success, got {type(result).__name__}"
    )
