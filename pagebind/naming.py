"""Normalization helpers for logical element, field and rule names."""

from __future__ import annotations

import re

_NON_ALNUM = re.compile(r"[^0-9a-zA-Z]+")


def to_lookup_key(value: str) -> str:
    """Normalize a human phrase to the key used for every metadata lookup.

    ``"Last Name"``, ``"last_name"`` and ``"LASTNAME"`` all map to
    ``"lastname"``.
    """

    return _NON_ALNUM.sub("", value or "").casefold()


def to_identifier(value: str) -> str:
    """Turn free text such as ``"create new"`` into ``"CreateNew"``."""

    words = [word for word in _NON_ALNUM.split(value or "") if word]
    return "".join(word[:1].upper() + word[1:] for word in words)
