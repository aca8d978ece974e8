"""Scope building blocks split into single-class modules."""

from .scope_id import ScopeId
from .cancellation_token_scope import CancellationTokenScope
from .scope_registry import ScopeRegistry

__all__ = ["ScopeId", "CancellationTokenScope", "ScopeRegistry"]
