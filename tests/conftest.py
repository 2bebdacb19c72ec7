"""Pytest configuration and fixtures.

Provides environment isolation and log capture helpers. Fixtures here are
autouse unless noted.
"""

from __future__ import annotations

from contextlib import suppress
import logging
import os

import pytest

from statusflow.config import reload_config

# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_statusflow_env(request, monkeypatch):
    """Clear STATUSFLOW_* variables and the cached config around each test.

    Opt-out: @pytest.mark.allow_env_pollution
    """
    if not request.node.get_closest_marker("allow_env_pollution"):
        for key in list(os.environ.keys()):
            if key.startswith("STATUSFLOW_"):
                monkeypatch.delenv(key, raising=False)
    reload_config()
    yield
    reload_config()


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture
def status_logs(caplog):
    """Capture records emitted on the ``statusflow`` logger at DEBUG and above."""
    caplog.set_level(logging.DEBUG, logger="statusflow")
    return caplog
