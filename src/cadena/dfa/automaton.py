"""Deterministic finite automaton over bytes.

A Dfa is a dense list of states. Index 0 is always the start state.
Each state maps an input byte to at most one next state, which is what
makes the automaton deterministic.

State identifiers are validated handles: every StateId records the
automaton that issued it, and every dereference checks both ownership
and range. Using an identifier with the wrong automaton raises
InvalidStateError instead of silently reading an unrelated state.

Lifecycle:
    An automaton is created with only its start state, mutated while a
    pattern is compiled, then frozen. After freeze() every mutating call
    raises FrozenAutomatonError.

Thread Safety:
    A frozen Dfa is safe to share for concurrent matching. Building is
    single-threaded; do not read an automaton while another thread is
    still mutating it.

"""

from __future__ import annotations

import itertools
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from cadena.config import check_max_states, get_compile_config
from cadena.errors import (
    DuplicateTransitionError,
    FrozenAutomatonError,
    InvalidStateError,
    StateLimitError,
)
from cadena.utils.buffers import to_bytes
from cadena.utils.logger import get_logger

if TYPE_CHECKING:
    from cadena.dfa.cursor import DfaBuilderCursor, DfaCursor

logger = get_logger(__name__)

InputByte = int

# Serial numbers tie StateIds to the automaton that issued them.
_serials = itertools.count(1)


@dataclass(frozen=True, slots=True)
class StateId:
    """Identifier of a state within one specific automaton.

    Attributes:
        index: Position of the state in the automaton's state list
        owner: Serial number of the issuing automaton

    """

    index: int
    owner: int = field(repr=False)


@dataclass(frozen=True, slots=True)
class State:
    """Read-only view of a single automaton state.

    Returned by Dfa.state(). The accept flag is a snapshot; transitions
    is a live read-only mapping. Mutation goes through the Dfa only.

    Attributes:
        id: Identifier of this state
        accept: True if a string ending at this state is accepted
        transitions: Next state for each input byte leaving this state

    """

    id: StateId
    accept: bool = False
    transitions: Mapping[InputByte, StateId] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(slots=True)
class _StateData:
    id: StateId
    accept: bool = False
    transitions: dict[InputByte, StateId] = field(default_factory=dict)


def _check_byte(value: InputByte) -> None:
    if type(value) is not int or not 0 <= value <= 0xFF:
        raise ValueError(f"input must be a byte value (0-255), got {value!r}")


class Dfa:
    """Deterministic finite automaton.

    Usage:
        >>> dfa = Dfa()
        >>> end = dfa.add_state()
        >>> dfa.add_transition(dfa.start_id(), ord("a"), end)
        >>> dfa.mark_accept(end)
        >>> dfa.match_bytes(b"a")
        True

    """

    __slots__ = ("_frozen", "_max_states", "_serial", "_states")

    def __init__(self, *, max_states: int | None = None) -> None:
        """Create an automaton holding only the (non-accepting) start state.

        Args:
            max_states: State limit. Defaults to the active CompileConfig.

        Raises:
            TypeError: If max_states is not an int
            ValueError: If max_states is outside 1..MAX_STATES
        """
        if max_states is None:
            max_states = get_compile_config().max_states
        else:
            check_max_states(max_states)

        self._max_states = max_states
        self._serial = next(_serials)
        self._states: list[_StateData] = []
        self._frozen = False
        # Must have at least one state. First state is the start state.
        self.add_state()

    @classmethod
    def create_empty(cls, *, max_states: int | None = None) -> Dfa:
        """Return an automaton with only a non-accepting start state."""
        return cls(max_states=max_states)

    @property
    def max_states(self) -> int:
        return self._max_states

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __len__(self) -> int:
        return len(self._states)

    def __eq__(self, other: object) -> bool:
        """Structural equality: same accept flags and transitions by index."""
        if not isinstance(other, Dfa):
            return NotImplemented
        if len(self) != len(other):
            return False
        for mine, theirs in zip(self._states, other._states):
            if mine.accept != theirs.accept:
                return False
            if {b: s.index for b, s in mine.transitions.items()} != {
                b: s.index for b, s in theirs.transitions.items()
            }:
                return False
        return True

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        accepting = sum(1 for s in self._states if s.accept)
        return f"Dfa(states={len(self)}, accepting={accepting}, frozen={self._frozen})"

    # ------------------------------------------------------------------
    # Mutation (compile time only)
    # ------------------------------------------------------------------

    def freeze(self) -> None:
        """Disallow further mutation. Idempotent."""
        if not self._frozen:
            self._frozen = True
            logger.debug("Froze DFA with %d states", len(self._states))

    def add_state(self) -> StateId:
        """Push a new non-accepting, transition-less state and return its ID.

        Raises:
            StateLimitError: If the automaton already holds max_states states
            FrozenAutomatonError: If the automaton is frozen
        """
        self._check_mutable()
        index = len(self._states)
        if index >= self._max_states:
            raise StateLimitError(self._max_states)
        state_id = StateId(index, self._serial)
        self._states.append(_StateData(state_id))
        return state_id

    def add_transition(self, from_state: StateId, input: InputByte, to_state: StateId) -> None:
        """Record that reading ``input`` in ``from_state`` moves to ``to_state``.

        Raises:
            DuplicateTransitionError: If from_state already has a transition
                for input. The existing transition is kept.
            InvalidStateError: If either identifier is foreign or out of range
            ValueError: If input is not a byte value
            FrozenAutomatonError: If the automaton is frozen
        """
        self._check_mutable()
        _check_byte(input)
        state = self._state(from_state)
        self._state(to_state)

        existing = state.transitions.get(input)
        if existing is not None:
            raise DuplicateTransitionError(from_state, input, existing, to_state)
        state.transitions[input] = to_state

    def mark_accept(self, state_id: StateId) -> None:
        """Mark a state as an accept state. Idempotent."""
        self._check_mutable()
        self._state(state_id).accept = True

    def _check_mutable(self) -> None:
        if self._frozen:
            raise FrozenAutomatonError("cannot modify a frozen DFA")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def start_id(self) -> StateId:
        """Return the ID of the start state (always index 0)."""
        return self._states[0].id

    def state(self, state_id: StateId) -> State:
        """Get a read-only view of a state based on its ID.

        Raises:
            InvalidStateError: If the ID is foreign or out of range
        """
        data = self._state(state_id)
        return State(data.id, data.accept, MappingProxyType(data.transitions))

    def _state(self, state_id: StateId) -> _StateData:
        """Resolve a state ID to its mutable record.

        Raises:
            InvalidStateError: If the ID was issued by another automaton or
                is out of range for this one
        """
        if not isinstance(state_id, StateId):
            raise TypeError(f"expected StateId, got {type(state_id).__name__}")
        if state_id.owner != self._serial:
            raise InvalidStateError(
                f"state {state_id.index} belongs to a different DFA"
            )
        if not 0 <= state_id.index < len(self._states):
            raise InvalidStateError(
                f"state {state_id.index} is out of range for a DFA with "
                f"{len(self._states)} states"
            )
        return self._states[state_id.index]

    def state_ids(self) -> Iterator[StateId]:
        """Iterate state IDs in insertion order, start state first."""
        return (s.id for s in self._states)

    def lookup_transition(self, state_id: StateId, input: InputByte) -> StateId | None:
        """Return the next state for ``input``, or None if there is no edge."""
        return self._state(state_id).transitions.get(input)

    def transitions(self, state_id: StateId) -> list[tuple[InputByte, StateId]]:
        """Outgoing transitions of a state, sorted by input byte."""
        return sorted(self._state(state_id).transitions.items())

    def accepts(self, state_id: StateId) -> bool:
        return self._state(state_id).accept

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def start(self) -> DfaCursor:
        """Return a cursor to the start state."""
        return self.cursor_at(self.start_id())

    def cursor_at(self, state_id: StateId) -> DfaCursor:
        from cadena.dfa.cursor import DfaCursor

        return DfaCursor.at(self, state_id)

    def builder_cursor_at(self, state_id: StateId) -> DfaBuilderCursor:
        """Return a cursor that may also mark its state as accepting.

        Raises:
            FrozenAutomatonError: If the automaton is frozen
        """
        from cadena.dfa.cursor import DfaBuilderCursor

        self._check_mutable()
        return DfaBuilderCursor.at(self, state_id)

    def match_bytes(self, data: bytes) -> bool:
        """Return True if this automaton accepts ``data``.

        Fails fast on the first byte with no outgoing transition; there is
        at most one path, so there is nothing to backtrack into.
        """
        curr = self.start()
        for byte in to_bytes(data, name="input"):
            next_cursor = curr.transition(byte)
            if next_cursor is None:
                return False
            curr = next_cursor
        return curr.is_accepting()


__all__ = [
    "Dfa",
    "InputByte",
    "State",
    "StateId",
]
