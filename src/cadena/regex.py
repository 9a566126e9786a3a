"""Compiled literal pattern.

Regex is the value returned by cadena.compile(): it owns the pattern and
its automaton and answers match queries.

Thread Safety:
    A Regex built with the default config holds a frozen automaton and is
    safe to share between threads.

"""

from __future__ import annotations

from cadena.builder import compile_pattern
from cadena.config import CompileConfig
from cadena.dfa.automaton import Dfa
from cadena.utils.buffers import to_bytes


class Regex:
    """A compiled pattern that matches one exact byte sequence.

    Usage:
        >>> regex = Regex.parse(b"abc")
        >>> regex.match_bytes(b"abc")
        True
        >>> regex.match_bytes(b"abx")
        False

    """

    __slots__ = ("_dfa", "_pattern")

    def __init__(self, pattern: bytes, dfa: Dfa) -> None:
        self._pattern = pattern
        self._dfa = dfa

    @classmethod
    def parse(cls, pattern: bytes, *, config: CompileConfig | None = None) -> Regex:
        """Compile ``pattern`` into a Regex."""
        pattern = to_bytes(pattern, name="pattern")
        return cls(pattern, compile_pattern(pattern, config=config))

    @property
    def pattern(self) -> bytes:
        return self._pattern

    @property
    def dfa(self) -> Dfa:
        return self._dfa

    def match_bytes(self, data: bytes) -> bool:
        """Return True if ``data`` is byte-for-byte equal to the pattern."""
        return self._dfa.match_bytes(data)

    def __call__(self, data: bytes) -> bool:
        return self.match_bytes(data)

    def __repr__(self) -> str:
        return f"Regex({self._pattern!r})"
