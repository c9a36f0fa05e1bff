"""Chronological push identifiers for transaction keys.

Keys follow the realtime-database layout: eight characters encoding the
creation time in milliseconds, then twelve random characters. Lexical order of
the keys therefore matches creation order, which both store backends rely on
to return children in insertion order.
"""

import secrets
import threading
import time

PUSH_CHARS = "-0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ_abcdefghijklmnopqrstuvwxyz"

_lock = threading.Lock()
_last_timestamp = 0
_last_random: list[int] = []


def generate_push_id(now_ms: int | None = None) -> str:
    """Return a new 20-character push id.

    Ids generated within the same millisecond increment the random suffix so
    they still sort after each other.

    Args:
        now_ms: Optional timestamp override, in milliseconds since the epoch.

    Returns:
        str: Unique, lexically ordered identifier.
    """
    global _last_timestamp, _last_random
    timestamp = int(time.time() * 1000) if now_ms is None else now_ms
    with _lock:
        if timestamp == _last_timestamp and _last_random:
            random_part = _increment(_last_random)
        else:
            random_part = [secrets.randbelow(64) for _ in range(12)]
        _last_timestamp = timestamp
        _last_random = random_part

    time_chars = []
    remaining = timestamp
    for _ in range(8):
        time_chars.append(PUSH_CHARS[remaining % 64])
        remaining //= 64
    prefix = "".join(reversed(time_chars))
    suffix = "".join(PUSH_CHARS[index] for index in random_part)
    return prefix + suffix


def _increment(digits: list[int]) -> list[int]:
    result = list(digits)
    position = len(result) - 1
    while position >= 0 and result[position] == 63:
        result[position] = 0
        position -= 1
    if position >= 0:
        result[position] += 1
    return result


__all__ = ["PUSH_CHARS", "generate_push_id"]
