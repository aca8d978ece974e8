"""Scope stack package.

Provides the per-flow ambient scope manager, its scope handles and the
helpers that carry the ambient scope into threads.
"""

from .manager import ScopeStackManager
from .scope_parts import CancellationTokenScope, ScopeId, ScopeRegistry
from .flow import FlowThreadPoolExecutor, bind, start_thread

__all__ = [
    "ScopeStackManager",
    "CancellationTokenScope",
    "ScopeId",
    "ScopeRegistry",
    "FlowThreadPoolExecutor",
    "bind",
    "start_thread",
]
