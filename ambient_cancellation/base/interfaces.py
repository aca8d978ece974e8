"""
Consumer-facing interfaces (Protocols) for the ambient cancellation package.

Re-exports the single-class modules under
``ambient_cancellation.base.interfaces_parts`` behind a stable import path.
"""

from __future__ import annotations

from .interfaces_parts import IAmbientCancellationTokenLocator

__all__ = ["IAmbientCancellationTokenLocator"]
