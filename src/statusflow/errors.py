"""Exception hierarchy for statusflow.

Recoverable failures travel as ``Status`` values. The exceptions below are
reserved for programming errors and fatal checks.
"""

from __future__ import annotations


class StatusflowError(Exception):
    """Base exception for all statusflow errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(StatusflowError):
    """Configuration validation or resolution failed."""


class MisuseError(StatusflowError, TypeError):
    """A propagation construct was used in a way that cannot be honoured.

    Examples are building an ``ErrorBuilder`` from an OK status, extracting a
    payload from something that is not a result, or propagating from a frame
    that is not decorated with ``@propagating``.
    """


class BuilderConsumedError(MisuseError):
    """An ``ErrorBuilder`` was used after it had already been consumed."""


class CheckFailedError(StatusflowError, AssertionError):
    """A fatal check failed; the program reached a state it must never reach."""


class BadResultAccessError(CheckFailedError):
    """The payload of a failed result was accessed."""

    def __init__(self, message: str, *, status: object, hint: str | None = None):
        super().__init__(message, hint=hint)
        self.status = status
