"""Exception classes for Cadena.

Provides standardized exceptions for error handling throughout Cadena.
Matching never raises; every error here comes from building, mutating
or loading an automaton.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cadena.dfa.automaton import StateId


class CadenaError(Exception):
    """Base exception for all Cadena errors.
    
    Subclass this for specific error categories.
    """

    pass


class StateLimitError(CadenaError):
    """Automaton would exceed its maximum number of states.

    Raised instead of wrapping the state identifier around.
    """

    def __init__(self, limit: int) -> None:
        """Initialize state limit error.

        Args:
            limit: Maximum number of states the automaton may hold
        """
        self.limit = limit
        super().__init__(f"DFAs with more than {limit} states are not supported")


class DuplicateTransitionError(CadenaError):
    """A second transition was added for the same state and input byte.

    This is a bug in whatever is building the automaton. The existing
    transition is left in place.
    """

    def __init__(
        self,
        state: StateId,
        byte: int,
        existing: StateId,
        attempted: StateId,
    ) -> None:
        """Initialize duplicate transition error.

        Args:
            state: State the transition leaves from
            byte: Input byte of the transition
            existing: Target of the transition already recorded
            attempted: Target of the rejected transition
        """
        self.state = state
        self.byte = byte
        self.existing = existing
        self.attempted = attempted
        super().__init__(
            f"bug: transition to state {attempted.index} from state {state.index} "
            f"via input {byte!r} ({bytes([byte])!r}) would overwrite an existing "
            f"transition to state {existing.index}"
        )


class InvalidStateError(CadenaError):
    """A state identifier does not belong to the automaton it was used with.

    Covers identifiers that are out of range and identifiers issued by a
    different automaton instance.
    """

    pass


class FrozenAutomatonError(CadenaError):
    """An automaton was mutated after it was frozen."""

    pass


class SerializationError(CadenaError):
    """Serialized automaton data is malformed."""

    pass
