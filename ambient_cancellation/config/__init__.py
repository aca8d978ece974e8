"""Configuration layer for the ambient cancellation package.

Merge order (later wins):
    1. Built-in defaults (``DEFAULTS``)
    2. Environment variables (``ENV_FIELD_MAP``)
    3. In-code overrides passed to ``load_settings``

Environment Variables
---------------------
AMBIENT_CANCELLATION_RELEASE_POLICY   ``tolerant`` (default) or ``strict``
AMBIENT_CANCELLATION_LOG_LEVEL        logging level name (default ``WARNING``)
AMBIENT_CANCELLATION_LOG_JSON         ``1``/``true`` for JSON logs (default), ``0``/``false`` for plain

Public API
----------
* ScopeSettings
* load_settings(overrides: dict | None = None) -> ScopeSettings
"""
from __future__ import annotations

import os
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator

ReleasePolicy = Literal["tolerant", "strict"]

DEFAULTS: Dict[str, Any] = {
    "release_policy": "tolerant",
    "log_level": "WARNING",
    "log_json": True,
}

ENV_FIELD_MAP: Dict[str, str] = {
    "release_policy": "AMBIENT_CANCELLATION_RELEASE_POLICY",
    "log_level": "AMBIENT_CANCELLATION_LOG_LEVEL",
    "log_json": "AMBIENT_CANCELLATION_LOG_JSON",
}


class ScopeSettings(BaseModel):
    """Validated runtime settings for the scope stack and its logging.

    Attributes
    ----------
    release_policy:
        How a release that is not the flow's current scope is handled.
        ``tolerant`` marks it released and logs a warning; ``strict`` raises
        ``ScopeError`` and changes nothing.
    log_level:
        Level name applied to the package base logger.
    log_json:
        JSON formatter when true, plain text otherwise.
    """

    model_config = ConfigDict(frozen=True)

    release_policy: ReleasePolicy = "tolerant"
    log_level: str = "WARNING"
    log_json: bool = True

    @field_validator("release_policy", mode="before")
    @classmethod
    def _normalize_policy(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARN", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value!r}")
        return level


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field, env_name in ENV_FIELD_MAP.items():
        val = os.getenv(env_name)
        if val is not None and val.strip():
            out[field] = val.strip()
    return out


def load_settings(overrides: Optional[Dict[str, Any]] = None) -> ScopeSettings:
    """Return merged, validated settings.

    Raises ``pydantic.ValidationError`` for values that do not validate
    (unknown release policy or log level, non-boolean ``log_json``).
    """
    cfg: Dict[str, Any] = dict(DEFAULTS)
    cfg |= _env_overrides()
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return ScopeSettings(**cfg)


__all__ = [
    "DEFAULTS",
    "ENV_FIELD_MAP",
    "ReleasePolicy",
    "ScopeSettings",
    "load_settings",
]
