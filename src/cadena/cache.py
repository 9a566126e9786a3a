"""Content-addressed compile cache for Cadena.

Provides (pattern_hash, config_hash) -> Regex caching to avoid
recompiling patterns that have already been seen.

Only frozen automata are cached. hash_config() returns "" for configs
that leave automata unfrozen, which tells compile() to bypass the cache.

Thread Safety:
    DictCompileCache is not thread-safe. For parallel compilation, use a
    cache implementation with internal locking.

Example:
    >>> import cadena
    >>> cache = cadena.DictCompileCache()
    >>> r1 = cadena.compile(b"abc", cache=cache)
    >>> r2 = cadena.compile(b"abc", cache=cache)  # Cache hit
    >>> r1 is r2
    True
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from cadena.utils.hashing import hash_bytes, hash_str

if TYPE_CHECKING:
    from cadena.config import CompileConfig
    from cadena.regex import Regex


class CompileCache(Protocol):
    """Protocol for content-addressed compile caches.

    Cache key is (pattern_hash, config_hash). Cached value is a Regex
    whose automaton is frozen, so it is safe to share.
    """

    def get(self, pattern_hash: str, config_hash: str) -> Regex | None:
        """Return cached Regex if present, else None."""
        ...

    def put(self, pattern_hash: str, config_hash: str, regex: Regex) -> None:
        """Store Regex in cache."""
        ...


class DictCompileCache:
    """In-memory compile cache using a dict."""

    __slots__ = ("_data",)

    def __init__(self) -> None:
        self._data: dict[tuple[str, str], Regex] = {}

    def __len__(self) -> int:
        return len(self._data)

    def get(self, pattern_hash: str, config_hash: str) -> Regex | None:
        """Return cached Regex if present, else None."""
        return self._data.get((pattern_hash, config_hash))

    def put(self, pattern_hash: str, config_hash: str, regex: Regex) -> None:
        """Store Regex in cache."""
        self._data[(pattern_hash, config_hash)] = regex


def hash_pattern(pattern: bytes) -> str:
    """Compute SHA256 hash of a pattern for cache key."""
    return hash_bytes(pattern)


def hash_config(config: CompileConfig) -> str:
    """Compute hash of CompileConfig for cache key.

    Returns:
        Hex digest of config hash, or "" if cache should be bypassed
    """
    if not config.freeze:
        return ""
    return hash_str(f"max_states={config.max_states}")


__all__ = [
    "CompileCache",
    "DictCompileCache",
    "hash_config",
    "hash_pattern",
]
