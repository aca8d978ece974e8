"""Locator facade exposing the ambient token through the capability Protocol."""

from .ambient_locator import AmbientCancellationTokenLocator

__all__ = ["AmbientCancellationTokenLocator"]
