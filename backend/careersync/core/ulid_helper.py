"""ULID generation helper utilities."""

from typing import Optional

import ulid


def generate_ulid() -> str:
    """Generate a new ULID string."""
    return str(ulid.ULID())


def parse_ulid(value: str) -> Optional[ulid.ULID]:
    """Parse a ULID string, returning None when it is malformed."""
    try:
        return ulid.ULID.from_str(value)
    except (ValueError, TypeError):
        return None


def is_valid_ulid(value: str) -> bool:
    return parse_ulid(value) is not None
