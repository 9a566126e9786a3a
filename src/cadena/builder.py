"""Pattern compiler: literal bytes to a chain-shaped DFA.

Each byte of the pattern gets its own state, even when the same byte
value appears twice, so a pattern of length n compiles to n + 1 states
joined by n transitions. The last state is the only accept state; for
the empty pattern that is the start state itself.

Example:
    >>> dfa = compile_pattern(b"ab")
    >>> len(dfa)
    3
    >>> dfa.match_bytes(b"ab"), dfa.match_bytes(b"a")
    (True, False)

"""

from __future__ import annotations

from cadena.config import CompileConfig, get_compile_config
from cadena.dfa.automaton import Dfa
from cadena.utils.buffers import to_bytes
from cadena.utils.logger import get_logger

logger = get_logger(__name__)


def compile_pattern(pattern: bytes, *, config: CompileConfig | None = None) -> Dfa:
    """Build the DFA recognizing exactly ``pattern``.

    Args:
        pattern: Literal byte sequence (may be empty)
        config: Compile configuration (uses the active context config if None)

    Returns:
        The compiled automaton, frozen unless config.freeze is False

    Raises:
        StateLimitError: If the pattern needs more states than config.max_states
        TypeError: If pattern is not bytes-like

    """
    pattern = to_bytes(pattern, name="pattern")
    if config is None:
        config = get_compile_config()

    logger.debug("Compiling pattern of %d bytes", len(pattern))

    dfa = Dfa(max_states=config.max_states)
    curr = dfa.start_id()
    for byte in pattern:
        next_state = dfa.add_state()
        dfa.add_transition(curr, byte, next_state)
        curr = next_state

    # The state reached after the last byte is the only accept state
    dfa.builder_cursor_at(curr).mark_accept()

    if config.freeze:
        dfa.freeze()

    logger.debug("Compiled DFA with %d states", len(dfa))
    return dfa


__all__ = ["compile_pattern"]
