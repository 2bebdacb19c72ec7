from __future__ import annotations

import pytest

from statusflow.errors import (
    BadResultAccessError,
    BuilderConsumedError,
    CheckFailedError,
    ConfigurationError,
    MisuseError,
    StatusflowError,
)
from statusflow.status import not_found_error

pytestmark = pytest.mark.unit


def test_error_carries_hint() -> None:
    err = MisuseError("bad use", hint="do this")
    assert str(err) == "bad use"
    assert err.hint == "do this"


def test_hint_defaults_to_none() -> None:
    assert ConfigurationError("fail").hint is None


def test_subclass_hierarchy() -> None:
    """Programming errors stay catchable by their builtin counterparts."""
    consumed = BuilderConsumedError("reused")
    access = BadResultAccessError("no value", status=not_found_error("x"))

    assert isinstance(consumed, MisuseError)
    assert isinstance(consumed, TypeError)
    assert isinstance(consumed, StatusflowError)
    assert isinstance(access, CheckFailedError)
    assert isinstance(access, AssertionError)
    assert isinstance(access, StatusflowError)
    assert access.status == not_found_error("x")
