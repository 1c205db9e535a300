"""Sanitisation helpers.

User-supplied text is trimmed before it is measured or stored, so
that length limits apply to what readers will actually see. These
helpers never raise; deciding whether an empty result is acceptable
is left to the caller.
"""
from __future__ import annotations

from typing import Any, Optional


def clean_text(value: Any) -> str:
    """Return ``value`` with surrounding whitespace removed.

    Parameters
    ----------
    value: Any
        The raw value taken from a request body.

    Returns
    -------
    str
        The trimmed string, or an empty string when ``value`` is
        missing or is not a string at all.
    """
    if not isinstance(value, str):
        return ""
    return value.strip()


def clean_optional(value: Any) -> Optional[str]:
    """Trim an optional field, mapping blanks and non-strings to ``None``."""
    cleaned = clean_text(value)
    return cleaned or None


def clean_email(value: Any) -> str:
    return clean_text(value).lower()
