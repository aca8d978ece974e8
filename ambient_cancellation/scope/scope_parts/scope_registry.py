"""Identity-keyed registry of live, unreleased scopes.

The registry maps ``ScopeId`` to scope through a ``WeakValueDictionary``, so
it never keeps a scope alive on its own: entries vanish when the scope is
released explicitly or when an abandoned scope is garbage collected.

It is the only structure shared between flows. A single ``Lock`` guards each
dictionary operation; the lock is never held while calling out.
"""

from __future__ import annotations

import weakref
from threading import Lock
from typing import List, Optional

from .cancellation_token_scope import CancellationTokenScope
from .scope_id import ScopeId


class ScopeRegistry:
    """Thread-safe weak mapping ``ScopeId -> CancellationTokenScope``."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._scopes: "weakref.WeakValueDictionary[ScopeId, CancellationTokenScope]" = (
            weakref.WeakValueDictionary()
        )

    def add(self, scope: CancellationTokenScope) -> bool:
        """Register ``scope``; returns ``False`` if it was already present."""
        with self._lock:
            if scope.scope_id in self._scopes:
                return False
            self._scopes[scope.scope_id] = scope
            return True

    def find(self, scope_id: ScopeId) -> Optional[CancellationTokenScope]:
        with self._lock:
            return self._scopes.get(scope_id)

    def discard(self, scope_id: ScopeId) -> bool:
        """Remove an entry; ``True`` only for the caller that removed it."""
        with self._lock:
            return self._scopes.pop(scope_id, None) is not None

    def snapshot(self) -> List[CancellationTokenScope]:
        with self._lock:
            return list(self._scopes.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._scopes)


__all__ = ["ScopeRegistry"]
