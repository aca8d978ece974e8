"""
Normalized scope error codes (taxonomy).

Defines the ``ScopeErrorCode`` enumeration attached to ``ScopeError``. Values
are lowercase snake_case and are a stable contract for logging.
"""
from __future__ import annotations

from enum import Enum


class ScopeErrorCode(str, Enum):
    """Categories of scope misuse surfaced under the strict release policy."""

    OUT_OF_ORDER_RELEASE = "out_of_order_release"
    FOREIGN_RELEASE = "foreign_release"
    STALE_REENTRY = "stale_reentry"


__all__ = ["ScopeErrorCode"]
