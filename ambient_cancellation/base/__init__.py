"""
Ambient Cancellation Base Package

Collaborators shared by the scope stack and its facade:
- Cancellation: the token carried by scopes and its error type
- Errors: scope error taxonomy
- Interfaces: the locator capability Protocol
- Logging: structured logger setup and event emission
"""

from .cancellation import CancellationToken, CancelledError
from .errors import ScopeError, ScopeErrorCode
from .interfaces import IAmbientCancellationTokenLocator
from .logging import LogContext, configure_logger, get_logger, log_event

__all__ = [
    "CancellationToken",
    "CancelledError",
    "ScopeError",
    "ScopeErrorCode",
    "IAmbientCancellationTokenLocator",
    "LogContext",
    "configure_logger",
    "get_logger",
    "log_event",
]
