"""ContextVar-based compile configuration for Cadena.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is read by the pattern compiler and by every automaton created
without an explicit state limit.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    from cadena.config import CompileConfig, compile_config_context

    with compile_config_context(CompileConfig(max_states=1024)):
        regex = cadena.compile(b"abc")

"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator

# State identifiers are 16 bits wide.
MAX_STATES = 1 << 16


@dataclass(frozen=True, slots=True)
class CompileConfig:
    """Immutable compile configuration.

    Attributes:
        max_states: Maximum number of states a new automaton may hold,
            between 1 and MAX_STATES
        freeze: Freeze compiled automata so they can be shared and cached

    """

    max_states: int = MAX_STATES
    freeze: bool = True

    def __post_init__(self) -> None:
        check_max_states(self.max_states)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "CompileConfig":
        """Create CompileConfig from dictionary.

        Only includes keys that are valid CompileConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> CompileConfig.from_dict({"max_states": 10, "color": "red"}).max_states
            10

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


def check_max_states(value: int) -> None:
    """Validate a state limit.

    Raises:
        TypeError: If value is not an int (bools are rejected too)
        ValueError: If value is outside 1..MAX_STATES
    """
    if type(value) is not int:
        raise TypeError(f"max_states must be an int, got {type(value).__name__}")
    if not 1 <= value <= MAX_STATES:
        raise ValueError(f"max_states must be between 1 and {MAX_STATES}, got {value}")


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: CompileConfig = CompileConfig()

_compile_config: ContextVar[CompileConfig] = ContextVar(
    "compile_config",
    default=_DEFAULT_CONFIG,
)


def get_compile_config() -> CompileConfig:
    """Get current compile configuration (thread-local)."""
    return _compile_config.get()


def set_compile_config(config: CompileConfig) -> None:
    """Set compile configuration for current context.

    Only affects the current thread's context. Other threads are unaffected.
    """
    _compile_config.set(config)


def reset_compile_config() -> None:
    """Reset to default configuration."""
    _compile_config.set(_DEFAULT_CONFIG)


@contextmanager
def compile_config_context(config: CompileConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with compile_config_context(CompileConfig(max_states=4)):
        ...     get_compile_config().max_states
        4

    """
    previous = _compile_config.get()
    _compile_config.set(config)
    try:
        yield
    finally:
        _compile_config.set(previous)


__all__ = [
    "MAX_STATES",
    "check_max_states",
    "CompileConfig",
    "compile_config_context",
    "get_compile_config",
    "reset_compile_config",
    "set_compile_config",
]
