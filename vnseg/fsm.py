"""
Finite state machine primitives for vnseg.

Provides the deterministic automaton used to encode the word lexicon,
together with the configurations and events produced while a simulator
walks an input over it.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterator, Optional

from vnseg.errors import AutomatonDisposedError


# ============================================================================
# States
# ============================================================================

@dataclass
class State:
    """A node of the automaton and its outgoing transitions."""
    id: int
    final: bool = False
    transitions: Dict[str, int] = field(default_factory=dict)

    def out_inputs(self) -> FrozenSet[str]:
        """Characters labelling an outgoing transition of this state."""
        return frozenset(self.transitions)

    def __repr__(self):
        return f"State({self.id}{', final' if self.final else ''})"


# ============================================================================
# Deterministic Automaton
# ============================================================================

class DFA:
    """
    Deterministic finite automaton over characters.

    The automaton is filled once by a loader and is read-only afterwards.
    `dispose()` releases the transition table; any lookup made after that
    raises `AutomatonDisposedError`.
    """

    def __init__(self):
        self._states: Dict[int, State] = {}
        self._initial: Optional[int] = None
        self._disposed = False

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def add_state(self, state_id: int, final: bool = False, initial: bool = False) -> State:
        self._check()
        state = self._states.get(state_id)
        if state is None:
            state = State(state_id, final)
            self._states[state_id] = state
        elif final:
            state.final = True
        if initial:
            if self._initial is not None and self._initial != state_id:
                raise ValueError(
                    f"DFA already has initial state {self._initial}, got {state_id}"
                )
            self._initial = state_id
        return state

    def add_transition(self, src: int, char: str, dst: int):
        self._check()
        if len(char) != 1:
            raise ValueError(f"Transition input must be one character, got {char!r}")
        if src not in self._states or dst not in self._states:
            raise ValueError(f"Transition {src} -{char}-> {dst} uses an unknown state")
        transitions = self._states[src].transitions
        if transitions.get(char, dst) != dst:
            raise ValueError(f"State {src} already has a transition on {char!r}")
        transitions[char] = dst

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @property
    def initial_state(self) -> State:
        self._check()
        if self._initial is None:
            raise ValueError("DFA has no initial state")
        return self._states[self._initial]

    def get_state(self, state_id: int) -> State:
        self._check()
        return self._states[state_id]

    def next_state(self, state: State, char: str) -> Optional[State]:
        """Follow the transition of a state on a character, if any."""
        self._check()
        target = state.transitions.get(char)
        if target is None:
            return None
        return self._states.get(target)

    def recognizes(self, word: str) -> bool:
        """Check whether the automaton accepts exactly this word."""
        state = self.initial_state
        for char in word:
            state = self.next_state(state, char)
            if state is None:
                return False
        return state.final

    def states(self) -> Iterator[State]:
        self._check()
        return iter(self._states.values())

    def __len__(self):
        return len(self._states)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self):
        """Release the transition table."""
        self._states.clear()
        self._initial = None
        self._disposed = True

    def _check(self):
        if self._disposed:
            raise AutomatonDisposedError("DFA has been disposed")


# ============================================================================
# Configurations
# ============================================================================

@dataclass(frozen=True)
class Configuration:
    """
    Snapshot of a simulation: the current state plus the input left to read.

    `parent` is the index of the configuration this one was derived from in
    the simulator's configuration arena, or None for a root configuration.
    """
    state: State
    parent: Optional[int]
    total_input: str
    unprocessed_input: str


@dataclass(frozen=True)
class ConfigurationEvent:
    """A transition of the simulator from one configuration to the next."""
    source: Configuration
    target: Configuration
    char: str

    def __str__(self):
        return (
            f"{self.source.state.id} -{self.char!r}-> {self.target.state.id} "
            f"[{self.target.unprocessed_input!r}]"
        )
