"""
Shared helpers for parsing env-style configuration values

Provides the tolerant converters used when option defaults come from
environment variables (parse_bool, parse_int). Malformed values fall back to
the supplied default instead of raising.
"""

from __future__ import annotations


def parse_bool(value: str | None, default: bool = False) -> bool:
    """Interpret env-style booleans."""
    if value is None:
        return default
    stripped = value.strip().lower()
    if not stripped:
        return default
    return stripped in {"1", "true", "yes", "on"}


def parse_int(value: str | None, default: int) -> int:
    """Best-effort int parser with fallback."""
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default
