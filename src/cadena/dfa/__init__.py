"""Deterministic finite automaton and its cursors."""

from cadena.dfa.automaton import Dfa, InputByte, State, StateId
from cadena.dfa.cursor import DfaBuilderCursor, DfaCursor

__all__ = [
    "Dfa",
    "DfaBuilderCursor",
    "DfaCursor",
    "InputByte",
    "State",
    "StateId",
]
