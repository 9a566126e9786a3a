"""Cursors into a DFA.

A cursor pairs an automaton with a current state and hides the state
table behind two operations: transition() and is_accepting(). Cursors
never change position; each transition returns a new cursor, so a
caller may keep several positions alive at once.

DfaCursor is read-only and is what match-time code receives.
DfaBuilderCursor adds mark_accept() for the compiler and nothing else.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Self

    from cadena.dfa.automaton import Dfa, InputByte, StateId


class DfaCursor:
    """Read-only position inside a DFA."""

    __slots__ = ("_current", "_dfa")

    def __init__(self, dfa: Dfa, current: StateId) -> None:
        self._dfa = dfa
        self._current = current

    @classmethod
    def at(cls, dfa: Dfa, state_id: StateId) -> Self:
        """Bind a cursor to ``state_id``.

        Raises:
            InvalidStateError: If state_id does not belong to dfa
        """
        dfa.state(state_id)
        return cls(dfa, state_id)

    @property
    def state_id(self) -> StateId:
        return self._current

    def transition(self, input: InputByte) -> Self | None:
        """Follow the transition for ``input`` from the current state.

        Returns:
            A cursor at the next state, or None if no transition exists
        """
        next_state = self._dfa.lookup_transition(self._current, input)
        if next_state is None:
            return None
        return type(self)(self._dfa, next_state)

    def is_accepting(self) -> bool:
        """Return True if the current state is an accept state."""
        return self._dfa.accepts(self._current)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DfaCursor):
            return NotImplemented
        # StateIds carry their owner, so this also compares automata.
        return self._current == other._current

    def __hash__(self) -> int:
        return hash(self._current)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(state={self._current.index})"


class DfaBuilderCursor(DfaCursor):
    """Cursor used while compiling; may mark its state as accepting."""

    __slots__ = ()

    def mark_accept(self) -> None:
        """Mark the current state as an accept state.

        Raises:
            FrozenAutomatonError: If the automaton was frozen meanwhile
        """
        self._dfa.mark_accept(self._current)


__all__ = [
    "DfaBuilderCursor",
    "DfaCursor",
]
