"""Internal state holder for cancellation tokens.

Dataclass used by ``CancellationToken`` to track whether cancellation was
requested and the reason given. Kept apart so the token class stays focused.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class State:
    """Mutable cancellation status guarded by the owning token's lock."""

    cancelled: bool = False
    reason: Optional[str] = None


__all__ = ["State"]
