"""Ally code parsing helpers.

Ally codes are accepted as 9 digits (``123456789``) or dashed
(``123-456-789``) and always stored as 9 digits.
"""

from __future__ import annotations

import re

_SIMPLE = re.compile(r"^\d{9}$")
_DASHED = re.compile(r"^\d{3}-\d{3}-\d{3}$")


def is_ally_code(value: str) -> bool:
    value = value.strip()
    return bool(_SIMPLE.match(value) or _DASHED.match(value))


def normalize_ally_code(value: str) -> str:
    """Return the 9 digit form, or the trimmed input unchanged when invalid."""
    value = value.strip()
    if _DASHED.match(value):
        return value.replace("-", "")
    return value
