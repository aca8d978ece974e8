"""Scope handle returned by ``ScopeStackManager.enter``.

A ``CancellationTokenScope`` binds one cancellation token to the ambient
context of the flow that created it. Token, parent and identity are fixed at
construction; the only mutable state is the released flag, flipped once by
the owning manager.

Handles are context managers (sync and async). Leaving the block releases
the scope on every exit path, including exceptions. Entering the block does
not activate anything: ``enter`` already did, and re-entering a handle that
is no longer the flow's current scope is refused (see
``ScopeStackManager._guard_reentry``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from ...base.cancellation import CancellationToken
from .scope_id import ScopeId

if TYPE_CHECKING:  # pragma: no cover
    from ..manager import ScopeStackManager


class CancellationTokenScope:
    """One nested binding of a cancellation token to the ambient context."""

    __slots__ = ("_manager", "_token", "_parent", "_scope_id", "_depth", "_released", "__weakref__")

    def __init__(
        self,
        manager: "ScopeStackManager",
        token: CancellationToken,
        parent: "Optional[CancellationTokenScope]",
    ) -> None:
        self._manager = manager
        self._token = token
        self._parent = parent
        self._scope_id = ScopeId()
        self._depth = 0 if parent is None else parent.depth + 1
        self._released = False

    @property
    def token(self) -> CancellationToken:
        return self._token

    @property
    def parent(self) -> "Optional[CancellationTokenScope]":
        """Scope that was ambient when this one was entered."""
        return self._parent

    @property
    def scope_id(self) -> ScopeId:
        return self._scope_id

    @property
    def depth(self) -> int:
        """Number of enclosing scopes (0 for a root scope)."""
        return self._depth

    @property
    def released(self) -> bool:
        return self._released

    @property
    def manager(self) -> "ScopeStackManager":
        return self._manager

    def _mark_released(self) -> None:
        self._released = True

    def release(self) -> None:
        """Restore the previous ambient scope. Safe to call more than once."""
        self._manager.exit(self)

    close = release

    def __enter__(self) -> "CancellationTokenScope":
        self._manager._guard_reentry(self)
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.release()
        return False

    async def __aenter__(self) -> "CancellationTokenScope":
        return self.__enter__()

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        return self.__exit__(exc_type, exc, tb)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationTokenScope(id={self._scope_id}, depth={self._depth}, "
            f"released={self._released}, token={self._token!r})"
        )


__all__ = ["CancellationTokenScope"]
