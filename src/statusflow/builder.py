"""Chainable wrapper used to decorate a failing Status before it is returned.

An ``ErrorBuilder`` is created by the propagation helpers on the failure path
only. Each augmentation mutates the builder in place and returns it so calls
can be chained; the chain ends when the builder is consumed, either by
``build()`` (yielding the augmented ``Status``) or by ``and_continue()``.

Policies compose through ``with_policy``::

    def team_policy(builder: ErrorBuilder) -> ErrorBuilder:
        return builder.log_warning().attach("team", "storage")

    return_if_error(save(record), lambda _: _.with_policy(team_policy))
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any, Final, Self

from statusflow.config import Config, current_config
from statusflow.errors import BuilderConsumedError, MisuseError
from statusflow.status import Status, StatusCode

if TYPE_CHECKING:
    from collections.abc import Callable


class _Continue:
    """Marker returned by an error expression that wants execution to proceed."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "CONTINUE"

    def __reduce__(self) -> str:
        return "CONTINUE"


CONTINUE: Final = _Continue()


class ErrorBuilder:
    """Owns one non-OK ``Status`` until it is consumed."""

    __slots__ = ("_config", "_consumed", "_status")

    def __init__(self, status: Status, *, config: Config | None = None) -> None:
        if not isinstance(status, Status):
            raise MisuseError(
                f"ErrorBuilder requires a Status, got {type(status).__name__}",
                hint="Wrap only the failure side of a result.",
            )
        if status.ok():
            raise MisuseError(
                "ErrorBuilder cannot wrap an OK status",
                hint="Builders exist only on the failure path; check ok() first.",
            )
        self._status = status
        self._config = config if config is not None else current_config()
        self._consumed = False

    # --- Views ---

    @property
    def code(self) -> StatusCode:
        return self._status.code

    @property
    def message(self) -> str:
        return self._status.message

    @property
    def consumed(self) -> bool:
        return self._consumed

    def __repr__(self) -> str:
        state = "consumed" if self._consumed else "live"
        return f"ErrorBuilder({self._status!s}, {state})"

    def _live(self) -> Status:
        if self._consumed:
            raise BuilderConsumedError(
                "ErrorBuilder used after it was consumed",
                hint="A builder yields its Status exactly once; keep the returned Status instead.",
            )
        return self._status

    # --- Augmentation ---

    def append_context(self, text: str) -> Self:
        """Append ``text`` to the message, joined by the configured separator."""
        status = self._live()
        if text:
            msg = status.message
            joined = f"{msg}{self._config.context_separator}{text}" if msg else text
            self._status = status.with_message(joined)
        return self

    def prepend_context(self, text: str) -> Self:
        """Prepend ``text`` to the message, joined by the configured separator."""
        status = self._live()
        if text:
            msg = status.message
            joined = f"{text}{self._config.context_separator}{msg}" if msg else text
            self._status = status.with_message(joined)
        return self

    def __lshift__(self, value: object) -> Self:
        return self.append_context(str(value))

    def attach(self, key: str, value: str) -> Self:
        """Attach a payload entry; an existing entry under ``key`` is replaced."""
        self._status = self._live().with_payload(key, value)
        return self

    def log(self, level: int | None = None) -> Self:
        """Emit one log record describing the status as it stands now."""
        status = self._live()
        lvl = self._config.log_level if level is None else level
        logging.getLogger(self._config.logger_name).log(
            lvl,
            "%s",
            status,
            extra={"status_code": status.code.name},
            stacklevel=self._stacklevel(),
        )
        return self

    def log_error(self) -> Self:
        return self.log(logging.ERROR)

    def log_warning(self) -> Self:
        return self.log(logging.WARNING)

    def log_info(self) -> Self:
        return self.log(logging.INFO)

    @staticmethod
    def _stacklevel() -> int:
        # Point the record at the first frame outside this module.
        depth = 1
        frame = sys._getframe(1)
        while frame is not None and frame.f_code.co_filename == __file__:
            frame = frame.f_back
            depth += 1
        return depth

    def with_policy(self, policy: Callable[[ErrorBuilder], Any]) -> Any:
        """Apply ``policy`` to this builder.

        When the policy returns an ``ErrorBuilder`` chaining continues with it;
        any other value is handed back untouched and ends the chain.
        """
        self._live()
        return policy(self)

    # --- Consumption ---

    def build(self) -> Status:
        """Consume the builder and return the augmented status."""
        status = self._live()
        self._consumed = True
        return status

    def and_continue(self) -> _Continue:
        """Consume the builder and ask the propagation site to carry on."""
        self._live()
        self._consumed = True
        return CONTINUE


def consume(value: Any) -> Any:
    """Return ``value`` with any ``ErrorBuilder`` converted to its ``Status``."""
    if isinstance(value, ErrorBuilder):
        return value.build()
    return value
