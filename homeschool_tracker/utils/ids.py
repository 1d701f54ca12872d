"""Entity id generation."""

import secrets
import time
from typing import Optional

_BASE36_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
_RANDOM_SUFFIX_LENGTH = 11


def to_base36(value: int) -> str:
    """Render a non-negative integer in lowercase base 36."""
    if value < 0:
        raise ValueError("Only non-negative integers can be rendered")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def generate_id(timestamp_ms: Optional[int] = None) -> str:
    """
    Generate an opaque entity id.

    The id is the creation time in milliseconds (base 36) followed by a
    fixed-width random base-36 suffix. Ids are never reused; collisions
    need the same millisecond and the same 56 random bits.

    Args:
        timestamp_ms: Override for the time component (tests)

    Returns:
        A lowercase alphanumeric string
    """
    millis = int(time.time() * 1000) if timestamp_ms is None else timestamp_ms
    suffix = to_base36(secrets.randbits(56)).rjust(_RANDOM_SUFFIX_LENGTH, "0")
    return to_base36(millis) + suffix
