"""Cancellation error type.

Defines ``CancelledError``, raised when code polling a token (directly or via
the ambient scope) observes a cancellation request.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation observes cooperative cancellation.

    Deliberately distinct from ``asyncio.CancelledError``: this one signals
    that a token was cancelled, not that the running task was interrupted.
    """


__all__ = ["CancelledError"]
