"""Opaque identity marker minted once per scope.

``ScopeId`` keys the manager's ``ScopeRegistry`` so "which scope is this" can
be answered without the lookup structure owning the scope. Equality and
hashing are by identity; the serial exists only for readable logs.
"""

from __future__ import annotations

import itertools

_SERIALS = itertools.count(1)


class ScopeId:
    """Unique, otherwise meaningless scope identity."""

    __slots__ = ("_serial",)

    def __init__(self) -> None:
        self._serial = next(_SERIALS)

    def __str__(self) -> str:
        return f"scope-{self._serial}"

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"ScopeId({self._serial})"


__all__ = ["ScopeId"]
