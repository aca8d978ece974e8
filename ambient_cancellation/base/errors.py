"""Scope error taxonomy public surface.

Re-exports the one-class-per-file implementations under
``ambient_cancellation.base.errors_parts``.
"""

from .errors_parts.error_code import ScopeErrorCode
from .errors_parts.scope_error import ScopeError

__all__ = ["ScopeErrorCode", "ScopeError"]
