"""
Structured scope error exception type.

Carries a normalized ``ScopeErrorCode`` plus the identity of the scope the
failing operation targeted, for structured logging.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ScopeErrorCode


@dataclass
class ScopeError(Exception):
    """Represents a rejected scope operation.

    Attributes:
        code: Normalized :class:`ScopeErrorCode` classification.
        message: Human-readable description suitable for logging.
        scope_id: Printable identity of the scope involved, when known.
    """

    code: ScopeErrorCode
    message: str
    scope_id: Optional[str] = None

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"


__all__ = ["ScopeError"]
