"""Utility modules for Cadena.

Provides:
- hashing: hash_bytes, hash_str for cache keys
- buffers: to_bytes for bytes-like arguments
- logger: get_logger for logging
"""

from cadena.utils.buffers import to_bytes
from cadena.utils.hashing import hash_bytes, hash_str
from cadena.utils.logger import get_logger

__all__ = [
    "get_logger",
    "hash_bytes",
    "hash_str",
    "to_bytes",
]
