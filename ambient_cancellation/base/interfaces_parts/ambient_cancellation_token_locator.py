"""IAmbientCancellationTokenLocator Protocol (single-class module).

Capability interface through which consumers reach the ambient token without
depending on the scope manager directly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from ..cancellation import CancellationToken

if TYPE_CHECKING:  # pragma: no cover
    from ...scope.scope_parts import CancellationTokenScope


@runtime_checkable
class IAmbientCancellationTokenLocator(Protocol):
    """Read and establish the ambient cancellation token."""

    def get(self) -> CancellationToken:
        """Ambient token of the calling flow; ``CancellationToken.NONE`` if none."""
        ...

    def set(self, token: CancellationToken) -> "CancellationTokenScope":
        """Make ``token`` ambient; releasing the returned handle restores the previous one."""
        ...
