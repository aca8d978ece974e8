"""Errors parts package public surface.

Prefer importing from ``ambient_cancellation.base.errors`` for the stable surface.
"""

from .error_code import ScopeErrorCode
from .scope_error import ScopeError

__all__ = ["ScopeErrorCode", "ScopeError"]
