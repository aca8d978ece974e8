"""Interfaces (Protocols) split into single-class modules."""

from .ambient_cancellation_token_locator import IAmbientCancellationTokenLocator

__all__ = ["IAmbientCancellationTokenLocator"]
