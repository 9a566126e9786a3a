"""
Cadena: literal byte-pattern matching on a deterministic finite automaton

The skeleton of a regex engine: a pattern compiles to a chain of DFA
states, one transition per byte, ending in a single accept state. An
input matches iff it is byte-for-byte identical to the pattern.

Quick Start:
    >>> import cadena
    >>> regex = cadena.compile(b"abc")
    >>> cadena.matches(regex, b"abc")
    True
    >>> cadena.matches(regex, b"abcd")
    False

    >>> # Walk the automaton by hand
    >>> cursor = regex.dfa.start()
    >>> cursor = cursor.transition(ord("a"))
    >>> cursor.is_accepting()
    False

Installation:
    pip install cadena              # Zero runtime dependencies
"""

from cadena.builder import compile_pattern
from cadena.cache import CompileCache, DictCompileCache, hash_config, hash_pattern
from cadena.config import (
    MAX_STATES,
    CompileConfig,
    compile_config_context,
    get_compile_config,
    reset_compile_config,
    set_compile_config,
)
from cadena.dfa import Dfa, DfaBuilderCursor, DfaCursor, State, StateId
from cadena.errors import (
    CadenaError,
    DuplicateTransitionError,
    FrozenAutomatonError,
    InvalidStateError,
    SerializationError,
    StateLimitError,
)
from cadena.regex import Regex
from cadena.serialization import from_dict, from_json, to_dict, to_json
from cadena.utils.buffers import to_bytes
from cadena.utils.logger import get_logger

__version__ = "0.1.0"

logger = get_logger(__name__)


def compile(
    pattern: bytes,
    *,
    config: CompileConfig | None = None,
    cache: CompileCache | None = None,
) -> Regex:
    """Compile a literal byte pattern.

    Args:
        pattern: Byte sequence to match exactly (may be empty)
        config: Compile configuration (uses the active context config if None)
        cache: Optional content-addressed compile cache. Bypassed when the
            config leaves automata unfrozen.

    Returns:
        Compiled Regex

    Raises:
        StateLimitError: If the pattern is too long for config.max_states
        TypeError: If pattern is not bytes-like

    Example:
        >>> regex = compile(b"")
        >>> regex.match_bytes(b""), regex.match_bytes(b"a")
        (True, False)
    """
    pattern = to_bytes(pattern, name="pattern")
    if config is None:
        config = get_compile_config()

    pattern_hash = config_hash = ""
    if cache is not None:
        config_hash = hash_config(config)
        if config_hash:
            pattern_hash = hash_pattern(pattern)
            cached = cache.get(pattern_hash, config_hash)
            if cached is not None:
                logger.debug("Compile cache hit for pattern of %d bytes", len(pattern))
                return cached

    regex = Regex.parse(pattern, config=config)

    if cache is not None and config_hash:
        cache.put(pattern_hash, config_hash, regex)

    return regex


def matches(regex: Regex, data: bytes) -> bool:
    """Return True if ``data`` matches the compiled pattern exactly.

    Never raises for bytes-like input.
    """
    return regex.match_bytes(data)


__all__ = [
    # Version
    "__version__",
    # Main API
    "compile",
    "matches",
    "compile_pattern",
    "Regex",
    # Automaton
    "Dfa",
    "DfaCursor",
    "DfaBuilderCursor",
    "State",
    "StateId",
    # Errors
    "CadenaError",
    "DuplicateTransitionError",
    "FrozenAutomatonError",
    "InvalidStateError",
    "SerializationError",
    "StateLimitError",
    # Cache
    "CompileCache",
    "DictCompileCache",
    "hash_config",
    "hash_pattern",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Configuration (ContextVar-based)
    "MAX_STATES",
    "CompileConfig",
    "get_compile_config",
    "set_compile_config",
    "reset_compile_config",
    "compile_config_context",
]
