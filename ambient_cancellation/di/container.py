"""Minimal dependency injection container for the ambient scope stack.

Goals:
- Construct exactly one ``ScopeStackManager`` per container and share it.
- Hand out the locator facade so consumers depend on the Protocol, not on
  the manager.
- Apply the logging settings once, when the manager is first built.
"""

from __future__ import annotations

from typing import Any, Dict

from ..base.interfaces import IAmbientCancellationTokenLocator
from ..base.logging import configure_logger
from ..config import ScopeSettings, load_settings
from ..locator import AmbientCancellationTokenLocator
from ..scope import ScopeStackManager


class AmbientContainer:
    """Holds the process-wide scope manager and locator singletons."""

    def __init__(self, settings: ScopeSettings | None = None) -> None:
        """Initialize the container.

        Args:
            settings: Pre-built settings; loaded from the environment on first
                use when omitted.
        """
        self._settings = settings
        self._singletons: Dict[str, Any] = {}

    def settings(self) -> ScopeSettings:
        if self._settings is None:
            self._settings = load_settings()
        return self._settings

    def scope_manager(self) -> ScopeStackManager:
        """Return the shared ``ScopeStackManager``, creating it on first call."""
        if "scope_manager" not in self._singletons:
            settings = self.settings()
            configure_logger(level=settings.log_level, json_mode=settings.log_json)
            self._singletons["scope_manager"] = ScopeStackManager(settings)
        return self._singletons["scope_manager"]

    def locator(self) -> IAmbientCancellationTokenLocator:
        """Return the shared locator facade bound to ``scope_manager()``."""
        if "locator" not in self._singletons:
            self._singletons["locator"] = AmbientCancellationTokenLocator(self.scope_manager())
        return self._singletons["locator"]

    def clear(self) -> None:  # shutdown / testing convenience
        """Drop cached singletons; the next call builds fresh ones."""
        self._singletons.clear()


def build_container(overrides: Dict[str, Any] | None = None) -> AmbientContainer:
    """Build a container from defaults, environment and ``overrides``."""
    return AmbientContainer(settings=load_settings(overrides))


__all__ = ["AmbientContainer", "build_container"]
