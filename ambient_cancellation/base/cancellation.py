"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose the cancellation token carried by ambient scopes via the canonical
``ambient_cancellation.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts``.

Notes
-----
- ``CancellationToken`` is polled cooperatively; ``CancellationToken.NONE`` is
  the never-cancelled sentinel.
- ``CancelledError`` is raised by ``raise_if_cancelled``.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
