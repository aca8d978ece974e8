"""ambient_cancellation package

Ambient propagation of a cancellation token through a call graph.

A caller enters a scope carrying a ``CancellationToken``; any code running in
that dynamic extent (synchronously, after ``await`` points, or in tasks and
threads spawned from it) retrieves the current token without receiving it as
an argument. Scopes nest and restore on release.

Typical wiring::

    container = build_container()
    locator = container.locator()

    with locator.set(token):
        ...
        locator.get().raise_if_cancelled()

Public API (re-exported):
    - Version: ``__version__``
    - Tokens: :class:`CancellationToken`, :class:`CancelledError`
    - Core: :class:`ScopeStackManager`, :class:`CancellationTokenScope`, :class:`ScopeId`
    - Facade: :class:`IAmbientCancellationTokenLocator`, :class:`AmbientCancellationTokenLocator`
    - Flow helpers: :func:`bind`, :func:`start_thread`, :class:`FlowThreadPoolExecutor`
    - Errors: :class:`ScopeError`, :class:`ScopeErrorCode`
    - Config / DI: :class:`ScopeSettings`, :func:`load_settings`,
      :class:`AmbientContainer`, :func:`build_container`
"""

from .base.cancellation import CancellationToken, CancelledError
from .base.errors import ScopeError, ScopeErrorCode
from .base.interfaces import IAmbientCancellationTokenLocator
from .config import ScopeSettings, load_settings
from .di import AmbientContainer, build_container
from .locator import AmbientCancellationTokenLocator
from .scope import (
    CancellationTokenScope,
    FlowThreadPoolExecutor,
    ScopeId,
    ScopeStackManager,
    bind,
    start_thread,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CancellationToken",
    "CancelledError",
    "ScopeStackManager",
    "CancellationTokenScope",
    "ScopeId",
    "IAmbientCancellationTokenLocator",
    "AmbientCancellationTokenLocator",
    "bind",
    "start_thread",
    "FlowThreadPoolExecutor",
    "ScopeError",
    "ScopeErrorCode",
    "ScopeSettings",
    "load_settings",
    "AmbientContainer",
    "build_container",
]
