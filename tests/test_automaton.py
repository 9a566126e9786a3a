"""Tests for the Dfa state table."""

import pytest

from cadena import CompileConfig, compile_config_context, compile_pattern
from cadena.config import MAX_STATES
from cadena.dfa import Dfa, State, StateId
from cadena.errors import (
    DuplicateTransitionError,
    FrozenAutomatonError,
    InvalidStateError,
    StateLimitError,
)


class TestCreateEmpty:
    def test_single_start_state(self) -> None:
        dfa = Dfa.create_empty()
        assert len(dfa) == 1
        assert dfa.start_id().index == 0
        assert not dfa.accepts(dfa.start_id())
        assert dfa.transitions(dfa.start_id()) == []

    def test_not_frozen(self) -> None:
        assert not Dfa().frozen

    def test_default_limit(self) -> None:
        assert Dfa().max_states == MAX_STATES == 65536

    def test_limit_from_context_config(self) -> None:
        with compile_config_context(CompileConfig(max_states=8)):
            assert Dfa().max_states == 8
        assert Dfa().max_states == MAX_STATES

    @pytest.mark.parametrize("limit", [0, -1, MAX_STATES + 1])
    def test_invalid_limit(self, limit: int) -> None:
        with pytest.raises(ValueError, match="max_states"):
            Dfa(max_states=limit)

    @pytest.mark.parametrize("limit", [True, 2.5, "8"])
    def test_non_int_limit(self, limit: object) -> None:
        with pytest.raises(TypeError, match="max_states must be an int"):
            Dfa(max_states=limit)  # type: ignore[arg-type]


class TestAddState:
    def test_ids_are_sequential(self) -> None:
        dfa = Dfa()
        assert [dfa.add_state().index for _ in range(3)] == [1, 2, 3]
        assert len(dfa) == 4

    def test_new_state_is_blank(self) -> None:
        dfa = Dfa()
        s = dfa.add_state()
        state = dfa.state(s)
        assert isinstance(state, State)
        assert state.id == s
        assert state.accept is False
        assert dict(state.transitions) == {}
        assert not dfa.accepts(s)

    def test_limit_reached(self) -> None:
        dfa = Dfa(max_states=2)
        dfa.add_state()
        with pytest.raises(StateLimitError) as exc_info:
            dfa.add_state()
        assert exc_info.value.limit == 2
        assert len(dfa) == 2

    def test_limit_of_one_allows_only_start(self) -> None:
        with pytest.raises(StateLimitError):
            Dfa(max_states=1).add_state()

    def test_full_id_space(self) -> None:
        dfa = Dfa()
        for _ in range(MAX_STATES - 1):
            last = dfa.add_state()
        assert last.index == MAX_STATES - 1
        with pytest.raises(StateLimitError, match="65536"):
            dfa.add_state()


class TestTransitions:
    def test_add_and_lookup(self) -> None:
        dfa = Dfa()
        s = dfa.add_state()
        dfa.add_transition(dfa.start_id(), ord("a"), s)
        assert dfa.lookup_transition(dfa.start_id(), ord("a")) == s
        assert dfa.lookup_transition(dfa.start_id(), ord("b")) is None
        assert dfa.lookup_transition(s, ord("a")) is None

    def test_duplicate_is_rejected(self) -> None:
        dfa = Dfa()
        s1 = dfa.add_state()
        s2 = dfa.add_state()
        dfa.add_transition(dfa.start_id(), 0x61, s1)
        with pytest.raises(DuplicateTransitionError) as exc_info:
            dfa.add_transition(dfa.start_id(), 0x61, s2)
        err = exc_info.value
        assert err.state == dfa.start_id()
        assert err.byte == 0x61
        assert err.existing == s1
        assert err.attempted == s2
        # Existing transition survives
        assert dfa.lookup_transition(dfa.start_id(), 0x61) == s1

    def test_same_target_twice_is_still_duplicate(self) -> None:
        dfa = Dfa()
        s = dfa.add_state()
        dfa.add_transition(dfa.start_id(), 1, s)
        with pytest.raises(DuplicateTransitionError):
            dfa.add_transition(dfa.start_id(), 1, s)

    def test_cycles_and_shared_targets(self) -> None:
        dfa = Dfa()
        start = dfa.start_id()
        loop = dfa.add_state()
        dfa.add_transition(start, ord("a"), loop)
        dfa.add_transition(start, ord("b"), loop)
        dfa.add_transition(loop, ord("a"), loop)
        dfa.add_transition(loop, ord("c"), start)
        dfa.mark_accept(loop)
        assert dfa.match_bytes(b"a")
        assert dfa.match_bytes(b"baaa")
        assert dfa.match_bytes(b"acb")
        assert not dfa.match_bytes(b"ac")
        assert not dfa.match_bytes(b"b" * 2)

    def test_transitions_sorted_by_byte(self) -> None:
        dfa = Dfa()
        a, b, c = dfa.add_state(), dfa.add_state(), dfa.add_state()
        dfa.add_transition(dfa.start_id(), 0xFF, c)
        dfa.add_transition(dfa.start_id(), 0x00, a)
        dfa.add_transition(dfa.start_id(), 0x10, b)
        assert dfa.transitions(dfa.start_id()) == [(0x00, a), (0x10, b), (0xFF, c)]

    @pytest.mark.parametrize("byte", [-1, 256, 1000])
    def test_byte_out_of_range(self, byte: int) -> None:
        dfa = Dfa()
        s = dfa.add_state()
        with pytest.raises(ValueError, match="byte"):
            dfa.add_transition(dfa.start_id(), byte, s)

    def test_non_int_byte(self) -> None:
        dfa = Dfa()
        s = dfa.add_state()
        with pytest.raises(ValueError):
            dfa.add_transition(dfa.start_id(), "a", s)  # type: ignore[arg-type]


class TestAccept:
    def test_mark_accept_is_idempotent(self) -> None:
        dfa = Dfa()
        dfa.mark_accept(dfa.start_id())
        dfa.mark_accept(dfa.start_id())
        assert dfa.accepts(dfa.start_id())
        assert dfa.match_bytes(b"")


class TestStateIdValidation:
    def test_foreign_id_rejected(self) -> None:
        dfa, other = Dfa(), Dfa()
        with pytest.raises(InvalidStateError, match="different DFA"):
            dfa.accepts(other.start_id())

    def test_foreign_target_rejected(self) -> None:
        dfa, other = Dfa(), Dfa()
        foreign = other.add_state()
        with pytest.raises(InvalidStateError):
            dfa.add_transition(dfa.start_id(), 0, foreign)
        assert dfa.transitions(dfa.start_id()) == []

    def test_fabricated_id_out_of_range(self) -> None:
        dfa = Dfa()
        forged = StateId(5, dfa.start_id().owner)
        with pytest.raises(InvalidStateError, match="out of range"):
            dfa.lookup_transition(forged, 0)

    def test_negative_index_rejected(self) -> None:
        dfa = Dfa()
        dfa.add_state()
        with pytest.raises(InvalidStateError):
            dfa.state(StateId(-1, dfa.start_id().owner))

    def test_non_state_id_rejected(self) -> None:
        with pytest.raises(TypeError):
            Dfa().state(0)  # type: ignore[arg-type]

    def test_ids_from_equal_dfas_differ(self) -> None:
        assert Dfa().start_id() != Dfa().start_id()


class TestFreeze:
    def test_mutation_after_freeze(self) -> None:
        dfa = Dfa()
        s = dfa.add_state()
        dfa.freeze()
        with pytest.raises(FrozenAutomatonError):
            dfa.add_state()
        with pytest.raises(FrozenAutomatonError):
            dfa.add_transition(dfa.start_id(), 0, s)
        with pytest.raises(FrozenAutomatonError):
            dfa.mark_accept(s)
        with pytest.raises(FrozenAutomatonError):
            dfa.builder_cursor_at(s)

    def test_queries_after_freeze(self) -> None:
        dfa = Dfa()
        dfa.mark_accept(dfa.start_id())
        dfa.freeze()
        dfa.freeze()
        assert dfa.frozen
        assert dfa.match_bytes(b"")
        assert dfa.start().is_accepting()

    def test_state_view_is_read_only(self) -> None:
        dfa = compile_pattern(b"abc")
        start = dfa.state(dfa.start_id())
        with pytest.raises(AttributeError):
            start.accept = True  # type: ignore[misc]
        with pytest.raises(TypeError):
            start.transitions[ord("a")] = dfa.start_id()  # type: ignore[index]
        assert not dfa.match_bytes(b"")
        assert not dfa.match_bytes(b"aaa")
        assert dfa.match_bytes(b"abc")

    def test_state_view_tracks_later_transitions(self) -> None:
        dfa = Dfa()
        view = dfa.state(dfa.start_id())
        s = dfa.add_state()
        dfa.add_transition(dfa.start_id(), 1, s)
        assert view.transitions[1] == s

    def test_bool_byte_rejected(self) -> None:
        dfa = Dfa()
        s = dfa.add_state()
        with pytest.raises(ValueError, match="byte"):
            dfa.add_transition(dfa.start_id(), True, s)  # type: ignore[arg-type]


class TestEquality:
    def test_structural(self) -> None:
        def build() -> Dfa:
            dfa = Dfa()
            s = dfa.add_state()
            dfa.add_transition(dfa.start_id(), 7, s)
            dfa.mark_accept(s)
            return dfa

        assert build() == build()

    def test_differs_on_accept(self) -> None:
        a, b = Dfa(), Dfa()
        b.mark_accept(b.start_id())
        assert a != b

    def test_differs_on_transition(self) -> None:
        a, b = Dfa(), Dfa()
        sa, sb = a.add_state(), b.add_state()
        a.add_transition(a.start_id(), 1, sa)
        b.add_transition(b.start_id(), 2, sb)
        assert a != b

    def test_unhashable(self) -> None:
        with pytest.raises(TypeError):
            hash(Dfa())

    def test_repr(self) -> None:
        assert repr(Dfa()) == "Dfa(states=1, accepting=0, frozen=False)"


class TestStateIds:
    def test_insertion_order(self) -> None:
        dfa = Dfa()
        added = [dfa.add_state() for _ in range(3)]
        assert list(dfa.state_ids()) == [dfa.start_id(), *added]
