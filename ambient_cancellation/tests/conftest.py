"""Pytest configuration for the ambient cancellation test suite.

Every test gets its own ``ScopeStackManager`` (and therefore its own context
variable), so scopes leaked by one test can never be observed by another.
"""

from __future__ import annotations

import io
import logging
from typing import Iterator

import pytest

from ambient_cancellation.base.logging import BASE_LOGGER_NAME, get_logger
from ambient_cancellation.config import ScopeSettings
from ambient_cancellation.di import AmbientContainer
from ambient_cancellation.locator import AmbientCancellationTokenLocator
from ambient_cancellation.scope import ScopeStackManager


@pytest.fixture()
def manager() -> ScopeStackManager:
    """Tolerant-policy manager (the default)."""
    return ScopeStackManager(ScopeSettings())


@pytest.fixture()
def strict_manager() -> ScopeStackManager:
    return ScopeStackManager(ScopeSettings(release_policy="strict"))


@pytest.fixture()
def locator(manager: ScopeStackManager) -> AmbientCancellationTokenLocator:
    return AmbientCancellationTokenLocator(manager)


@pytest.fixture()
def container(monkeypatch: pytest.MonkeyPatch) -> Iterator[AmbientContainer]:
    """Container with environment overrides cleared for deterministic settings."""
    for name in (
        "AMBIENT_CANCELLATION_RELEASE_POLICY",
        "AMBIENT_CANCELLATION_LOG_LEVEL",
        "AMBIENT_CANCELLATION_LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)
    built = AmbientContainer()
    yield built
    built.clear()


@pytest.fixture()
def log_stream() -> Iterator[io.StringIO]:
    """Capture everything the package logs (DEBUG and up) as raw messages.

    Base logger handlers and level are restored after the test.
    """
    base = get_logger(BASE_LOGGER_NAME)
    saved_handlers = list(base.handlers)
    saved_level = base.level
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    handler.setLevel(logging.DEBUG)
    base.handlers[:] = [handler]
    base.setLevel(logging.DEBUG)
    try:
        yield stream
    finally:
        base.handlers[:] = saved_handlers
        base.setLevel(saved_level)
