"""A 64-bit FNV-style string hash."""

from __future__ import annotations

_OFFSET_BASIS = 0x811C_9DC5
_PRIME = 0x0100_0000_01B3
_MASK = (1 << 64) - 1
_STR_TERMINATOR = b"\xff"


def fnv(value: str) -> int:
    """Hash a string to an unsigned 64-bit integer."""
    if not isinstance(value, str):
        raise TypeError(f"fnv expects a str, got {type(value).__name__}")
    result = _OFFSET_BASIS
    for byte in value.encode("utf-8") + _STR_TERMINATOR:
        result ^= byte
        result = (result * _PRIME) & _MASK
    return result