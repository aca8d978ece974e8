"""Cooperative cancellation token implementation.

``CancellationToken`` is the value carried by ambient scopes. Code that picks
the token up from the ambient context polls it (``cancelled`` /
``raise_if_cancelled``); whoever owns the token calls ``cancel``.

``CancellationToken.NONE`` is the "no cancellation" sentinel returned when no
scope is active. It can never be cancelled.
"""

from __future__ import annotations

from threading import Lock
from typing import ClassVar, List

from .state import State
from .cancelled_error import CancelledError


class CancellationToken:
    """A cooperative cancellation token with optional cascading semantics.

    Thread-safe for ``cancel`` + ``raise_if_cancelled`` usage. Child tokens
    inherit cancellation when the parent is cancelled.
    """

    NONE: ClassVar["CancellationToken"]

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    @property
    def can_be_cancelled(self) -> bool:
        """``False`` only for the ``NONE`` sentinel."""
        return True

    def cancel(self, reason: str | None = None) -> None:
        """Request cooperative cancellation and cascade to children."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            children = list(self._children)
        for child in children:
            child.cancel(reason)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            should_cancel = self._state.cancelled
            reason = self._state.reason
        if should_cancel:
            token.cancel(reason)
        return token

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if token is cancelled."""
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "operation cancelled")

    def child(self) -> "CancellationToken":
        """Create and link a child token (shortcut)."""
        return CancellationToken(parent=self)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, children={len(self._children)})"
        )


class _NeverCancelledToken(CancellationToken):
    """Sentinel token: cancel requests are ignored, children never cascade."""

    @property
    def can_be_cancelled(self) -> bool:
        return False

    def cancel(self, reason: str | None = None) -> None:
        return None

    def link_child(self, token: CancellationToken) -> CancellationToken:
        # Nothing to cascade; keeping children would grow forever.
        return token

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return "CancellationToken.NONE"


CancellationToken.NONE = _NeverCancelledToken()


__all__ = ["CancellationToken"]
