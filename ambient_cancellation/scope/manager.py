"""Scope stack manager: per-flow ambient cancellation scopes.

Purpose
-------
Track, for every logical flow of execution, a singly linked stack of nested
``CancellationTokenScope`` objects and expose push (``enter``), pop
(``exit``) and peek (``retrieve``).

Flow tracking
-------------
The current scope lives in a ``contextvars.ContextVar`` owned by the manager.
Each thread has its own context and each asyncio task runs in a copy of the
context that was current when the task was created, so:

- concurrent flows never see each other's scopes;
- a task keeps its scope across ``await`` points regardless of which worker
  resumes it;
- tasks spawned inside a scope inherit it (threads and executors through
  ``ambient_cancellation.scope.flow``).

Each flow only ever writes its own slot. The identity-keyed ``ScopeRegistry``
is the only shared structure and holds scopes weakly.

Release policy
--------------
Releasing the flow's current scope restores its nearest unreleased ancestor.
Releasing any other scope (an outer scope while an inner one is active, or a
scope that is not on this flow's stack) is handled by ``release_policy``:

- ``tolerant``: the scope is marked released and a warning event is logged.
  This flow's slot is left alone; ``retrieve`` walks past released scopes, so
  a released scope is never observed again.
- ``strict``: ``ScopeError`` is raised and nothing changes.

The same policy applies to ``with handle:`` on a handle that is not this
flow's current scope: it is never made current again.

Notes
-----
Build one manager per process (see ``ambient_cancellation.di``). Every
``ContextVar`` stays referenced by the contexts that used it, so managers are
not meant to be created per request.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from contextvars import ContextVar
from typing import List, Optional

from ..base.cancellation import CancellationToken
from ..base.errors import ScopeError, ScopeErrorCode
from ..base.logging import LogContext, get_logger, log_event
from ..config import ScopeSettings
from .scope_parts import CancellationTokenScope, ScopeId, ScopeRegistry


def _flow_name() -> str:
    """Thread name, plus the asyncio task name when called inside a task."""
    name = threading.current_thread().name
    try:
        task = asyncio.current_task()
    except RuntimeError:
        task = None
    if task is not None:
        name = f"{name}/{task.get_name()}"
    return name


def _nearest_live(scope: Optional[CancellationTokenScope]) -> Optional[CancellationTokenScope]:
    while scope is not None and scope.released:
        scope = scope.parent
    return scope


def _is_ancestor(candidate: CancellationTokenScope, scope: Optional[CancellationTokenScope]) -> bool:
    node = scope.parent if scope is not None else None
    while node is not None:
        if node is candidate:
            return True
        node = node.parent
    return False


class ScopeStackManager:
    """Maintain per-flow ambient cancellation scopes.

    Thread-safe and asyncio-safe. ``enter``, ``exit`` and ``retrieve`` never
    block on I/O and never suspend.
    """

    def __init__(self, settings: ScopeSettings | None = None) -> None:
        self._settings = settings or ScopeSettings()
        self._current: ContextVar[Optional[CancellationTokenScope]] = ContextVar(
            f"ambient_cancellation.current_scope.{id(self):x}", default=None
        )
        self._registry = ScopeRegistry()
        self.logger = get_logger("ambient_cancellation.scope", json_mode=self._settings.log_json)

    @property
    def settings(self) -> ScopeSettings:
        return self._settings

    # ---- core operations ----
    def enter(self, token: CancellationToken | None = None) -> CancellationTokenScope:
        """Make ``token`` the ambient token for this flow until the scope is released.

        ``None`` stands for ``CancellationToken.NONE``. The returned handle is
        already active; use it as a context manager or call ``release``.
        """
        if token is None:
            token = CancellationToken.NONE
        scope = CancellationTokenScope(self, token, self.current_scope())
        self._registry.add(scope)
        self._current.set(scope)
        if self.logger.isEnabledFor(logging.DEBUG):
            log_event(self.logger, "scope.enter", self._log_context(scope), level=logging.DEBUG)
        return scope

    def exit(self, scope: CancellationTokenScope) -> None:
        """Release ``scope``. Second and later calls are no-ops."""
        if scope.manager is not self:
            scope.manager.exit(scope)
            return
        if scope.released:
            return
        current = self.current_scope()
        code: Optional[ScopeErrorCode] = None
        if current is not scope:
            code = (
                ScopeErrorCode.OUT_OF_ORDER_RELEASE
                if _is_ancestor(scope, current)
                else ScopeErrorCode.FOREIGN_RELEASE
            )
            if self._settings.release_policy == "strict":
                log_event(
                    self.logger,
                    "scope.release_rejected",
                    self._log_context(scope),
                    level=logging.ERROR,
                    error_code=code.value,
                )
                raise ScopeError(
                    code,
                    f"{scope.scope_id} is not the current scope of this flow",
                    scope_id=str(scope.scope_id),
                )
        if not self._registry.discard(scope.scope_id):
            return  # lost a concurrent release race
        scope._mark_released()
        if current is scope:
            self._current.set(_nearest_live(scope.parent))
            if self.logger.isEnabledFor(logging.DEBUG):
                log_event(self.logger, "scope.exit", self._log_context(scope), level=logging.DEBUG)
        else:
            event = (
                "scope.release_out_of_order"
                if code is ScopeErrorCode.OUT_OF_ORDER_RELEASE
                else "scope.release_foreign"
            )
            log_event(self.logger, event, self._log_context(scope), level=logging.WARNING)

    def retrieve(self) -> CancellationToken:
        """Ambient token of this flow, or ``CancellationToken.NONE``. Never raises."""
        scope = self.current_scope()
        return scope.token if scope is not None else CancellationToken.NONE

    # ---- helpers ----
    def current_scope(self) -> Optional[CancellationTokenScope]:
        """Innermost unreleased scope visible to this flow."""
        return _nearest_live(self._current.get())

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` when the ambient token has been cancelled."""
        self.retrieve().raise_if_cancelled()

    def find(self, scope_id: ScopeId) -> Optional[CancellationTokenScope]:
        """Look up a live, unreleased scope by identity (any flow)."""
        return self._registry.find(scope_id)

    def active_scopes(self) -> List[CancellationTokenScope]:
        return self._registry.snapshot()

    def active_scope_count(self) -> int:
        return len(self._registry)

    def _guard_reentry(self, scope: CancellationTokenScope) -> None:
        """Entering a handle with ``with`` never makes it current again.

        ``enter`` already activated the scope, so a handle that is this flow's
        current scope (or one already released) passes through unchanged. Any
        other handle, an outer scope while an inner one is active or a handle
        created by another flow, is rejected under ``strict`` and left
        inactive with a warning under ``tolerant``.
        """
        if scope.released or self.current_scope() is scope:
            return
        if self._settings.release_policy == "strict":
            log_event(
                self.logger,
                "scope.reentry_rejected",
                self._log_context(scope),
                level=logging.ERROR,
                error_code=ScopeErrorCode.STALE_REENTRY.value,
            )
            raise ScopeError(
                ScopeErrorCode.STALE_REENTRY,
                f"{scope.scope_id} is not the current scope of this flow and cannot be re-entered",
                scope_id=str(scope.scope_id),
            )
        log_event(self.logger, "scope.reentry_ignored", self._log_context(scope), level=logging.WARNING)

    def _log_context(self, scope: CancellationTokenScope) -> LogContext:
        return LogContext(
            scope_id=str(scope.scope_id),
            parent_id=str(scope.parent.scope_id) if scope.parent is not None else None,
            depth=scope.depth,
            flow=_flow_name(),
            extra={"cancellable": scope.token.can_be_cancelled},
        )


__all__ = ["ScopeStackManager"]
