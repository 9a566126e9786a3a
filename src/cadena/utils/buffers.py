"""Normalization of bytes-like arguments."""

from __future__ import annotations

from typing import Any


def to_bytes(value: Any, *, name: str = "value") -> bytes:
    """Return ``value`` as ``bytes``.

    Accepts bytes, bytearray, memoryview and any other object supporting
    the buffer protocol. Text is rejected rather than encoded, since the
    automaton works on raw bytes and has no encoding of its own.

    Raises:
        TypeError: If value is a str or does not support the buffer protocol

    """
    if isinstance(value, bytes):
        return value
    if isinstance(value, str):
        raise TypeError(f"{name} must be bytes-like, not str (encode it first)")
    try:
        return memoryview(value).tobytes()
    except TypeError:
        raise TypeError(
            f"{name} must be bytes-like, not {type(value).__name__}"
        ) from None
