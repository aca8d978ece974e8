"""Composition root for the ambient cancellation package.

Dependency-free: builds the shared scope manager and the locator facade once
per process and hands them to whoever wires the application.
"""
from __future__ import annotations

from .container import AmbientContainer, build_container

__all__ = ["AmbientContainer", "build_container"]
