"""Structured logging context object for scope events.

This module defines :class:`LogContext`, a dataclass carrying the fields
common to scope lifecycle events (scope identity, parent identity, nesting
depth, the flow it happened on, plus free-form extras). ``to_dict`` merges
``extra`` and prunes ``None`` values for clean structured output.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for scope logging events."""

    scope_id: Optional[str] = None
    parent_id: Optional[str] = None
    depth: Optional[int] = None
    flow: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
