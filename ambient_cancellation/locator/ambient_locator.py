"""Default ``IAmbientCancellationTokenLocator`` implementation.

Thin facade over a ``ScopeStackManager``: ``get`` reads the ambient token,
``set`` enters a new scope. No logic of its own.
"""

from __future__ import annotations

from ..base.cancellation import CancellationToken
from ..scope import CancellationTokenScope, ScopeStackManager


class AmbientCancellationTokenLocator:
    """Locator bound to one scope manager."""

    def __init__(self, manager: ScopeStackManager) -> None:
        self._manager = manager

    def get(self) -> CancellationToken:
        return self._manager.retrieve()

    def set(self, token: CancellationToken) -> CancellationTokenScope:
        return self._manager.enter(token)


__all__ = ["AmbientCancellationTokenLocator"]
