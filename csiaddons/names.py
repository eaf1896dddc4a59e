"""Helpers for names and string lists."""

from __future__ import annotations

import re
from collections.abc import Iterable

_INVALID_LEASE_CHARS = re.compile(r"[^a-zA-Z0-9-]")


def normalize_lease_name(name: str) -> str:
    """Sanitize a string so that it can name a Lease object."""
    if not name:
        raise ValueError("lease name must not be empty")
    name = _INVALID_LEASE_CHARS.sub("-", name)
    if name.endswith("-"):
        # a lease name must not end with '-'
        name += "X"
    return name


def remove_from_list(items: Iterable[str], value: str) -> list[str]:
    """Return the items without any occurrence of ``value``."""
    return [item for item in items if item != value]