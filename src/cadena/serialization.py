"""DFA serialization: JSON round trip for automata.

Converts a Dfa to/from JSON-compatible dicts. Useful for:
- Storing compiled automata next to their patterns
- Debugging and inspection
- Loading hand-built automata (cycles, shared targets) that the
  literal compiler never produces

Format (version 1):
    {
        "version": 1,
        "start": 0,
        "states": [
            {"accept": false, "transitions": [[97, 1]]},
            {"accept": true, "transitions": []}
        ]
    }

Transitions are lists of [byte, target_index] pairs sorted by byte, so
output is deterministic and duplicate pairs can be detected on load.

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from typing import Any

from cadena.config import MAX_STATES
from cadena.dfa.automaton import Dfa
from cadena.errors import CadenaError, SerializationError

FORMAT_VERSION = 1


def to_dict(dfa: Dfa) -> dict[str, Any]:
    """Convert a Dfa to a JSON-compatible dict."""
    return {
        "version": FORMAT_VERSION,
        "start": dfa.start_id().index,
        "states": [
            {
                "accept": dfa.accepts(state_id),
                "transitions": [[byte, target.index] for byte, target in dfa.transitions(state_id)],
            }
            for state_id in dfa.state_ids()
        ],
    }


def from_dict(data: dict[str, Any], *, freeze: bool = True) -> Dfa:
    """Rebuild a Dfa from a dict produced by to_dict().

    The automaton is rebuilt through its normal mutating API, so every
    invariant it enforces (unique transitions, valid targets, state
    limit) holds for loaded automata too.

    Args:
        data: Serialized automaton
        freeze: Freeze the rebuilt automaton

    Raises:
        SerializationError: If data is malformed or violates an invariant

    """
    if not isinstance(data, dict):
        raise SerializationError(f"expected a dict, got {type(data).__name__}")
    if data.get("version") != FORMAT_VERSION:
        raise SerializationError(f"unsupported format version: {data.get('version')!r}")
    if data.get("start", 0) != 0:
        raise SerializationError("the start state must be state 0")

    states = data.get("states")
    if not isinstance(states, list) or not states:
        raise SerializationError("'states' must be a non-empty list")
    if len(states) > MAX_STATES:
        raise SerializationError(f"too many states: {len(states)} > {MAX_STATES}")

    dfa = Dfa(max_states=MAX_STATES)
    ids = [dfa.start_id()]
    for _ in range(len(states) - 1):
        ids.append(dfa.add_state())

    for index, state in enumerate(states):
        if not isinstance(state, dict):
            raise SerializationError(f"state {index}: expected a dict")
        try:
            for byte, target in state.get("transitions", []):
                if type(target) is not int or not 0 <= target < len(ids):
                    raise SerializationError(
                        f"state {index}: transition target {target!r} is out of range"
                    )
                dfa.add_transition(ids[index], byte, ids[target])
        except (TypeError, ValueError, CadenaError) as e:
            if isinstance(e, SerializationError):
                raise
            raise SerializationError(f"state {index}: {e}") from e
        accept = state.get("accept", False)
        if not isinstance(accept, bool):
            raise SerializationError(f"state {index}: accept must be a bool, got {accept!r}")
        if accept:
            dfa.mark_accept(ids[index])

    if freeze:
        dfa.freeze()
    return dfa


def to_json(dfa: Dfa, *, indent: int | None = None) -> str:
    """Serialize a Dfa to a JSON string (sorted keys)."""
    return json.dumps(to_dict(dfa), indent=indent, sort_keys=True)


def from_json(json_str: str, *, freeze: bool = True) -> Dfa:
    """Deserialize a Dfa from a JSON string.

    Raises:
        SerializationError: If the string is not valid JSON or not a valid DFA
    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise SerializationError(f"invalid JSON: {e}") from e
    return from_dict(data, freeze=freeze)


__all__ = [
    "FORMAT_VERSION",
    "from_dict",
    "from_json",
    "to_dict",
    "to_json",
]
