"""
FSM Arena — Two-State Automaton Strategies

Copyright (c) 2026 SolisHQ (github.com/solishq). MIT License.

A strategy is a finite-state machine with exactly two states. Each state
emits an action (0 = cooperate, 1 = defect) and names the state to move to
for each of the opponent's two possible moves.

Automatons are immutable. Reacting to an opponent returns a new value, so
one instance can sit in several matches without any of them seeing the
others' moves.
"""

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Optional

import numpy as np

from .errors import InvalidConfiguration


class Action(IntEnum):
    COOPERATE = 0
    DEFECT = 1


@dataclass(frozen=True)
class State:
    """Output action plus transition targets, indexed by the opponent's move."""
    action: int
    transitions: tuple[int, int]

    def __post_init__(self):
        if self.action not in (0, 1):
            raise InvalidConfiguration(f"state action must be 0 or 1, got {self.action!r}")
        if len(self.transitions) != 2 or any(t not in (0, 1) for t in self.transitions):
            raise InvalidConfiguration(
                f"state transitions must be two targets in {{0, 1}}, got {self.transitions!r}"
            )

    def next_state(self, opponent_action: int) -> int:
        return self.transitions[opponent_action]


@dataclass(frozen=True)
class Automaton:
    states: tuple[State, State]
    current: int = 0
    initial: Optional[int] = None

    def __post_init__(self):
        if len(self.states) != 2:
            raise InvalidConfiguration(f"automaton needs exactly 2 states, got {len(self.states)}")
        if self.current not in (0, 1):
            raise InvalidConfiguration(f"current state must be 0 or 1, got {self.current!r}")
        if self.initial is None:
            object.__setattr__(self, 'initial', self.current)
        elif self.initial not in (0, 1):
            raise InvalidConfiguration(f"initial state must be 0 or 1, got {self.initial!r}")

    @classmethod
    def from_table(cls, table, initial: int = 0) -> "Automaton":
        """Build from ((action, on0, on1), (action, on0, on1))."""
        try:
            rows = [tuple(int(v) for v in row) for row in table]
            exact = all(int(v) == v for row in table for v in row)
        except (TypeError, ValueError) as e:
            raise InvalidConfiguration(f"malformed transition table {table!r}") from e
        if not exact:
            raise InvalidConfiguration(f"transition table entries must be whole numbers, got {table!r}")
        if len(rows) != 2 or any(len(r) != 3 for r in rows):
            raise InvalidConfiguration(f"transition table must be 2 rows of 3, got {table!r}")
        states = tuple(State(action=r[0], transitions=(r[1], r[2])) for r in rows)
        return cls(states=states, current=initial)

    @property
    def action(self) -> int:
        return self.states[self.current].action

    def step(self, opponent_action: int) -> "Automaton":
        return replace(self, current=self.states[self.current].next_state(opponent_action))

    def reset(self) -> "Automaton":
        if self.current == self.initial:
            return self
        return replace(self, current=self.initial)

    def table(self) -> tuple:
        return tuple((s.action, *s.transitions) for s in self.states)

    def to_dict(self) -> dict:
        return {
            'states': [list(row) for row in self.table()],
            'current': self.current,
            'initial': self.initial,
            'label': label(self),
        }


def current_action(a: Automaton) -> int:
    return a.action


def step(a: Automaton, opponent_action: int) -> Automaton:
    return a.step(opponent_action)


def generate_random(rng: np.random.Generator) -> Automaton:
    """Uniform random automaton: initial index, then (action, on0, on1) per state."""
    draws = [int(v) for v in rng.integers(0, 2, size=7)]
    initial = draws[0]
    states = (
        State(action=draws[1], transitions=(draws[2], draws[3])),
        State(action=draws[4], transitions=(draws[5], draws[6])),
    )
    return Automaton(states=states, current=initial)


# ─── Presets ────────────────────────────────────────────

ALL_DEFECT = Automaton.from_table(((1, 1, 1), (1, 1, 1)), initial=1)
ALL_COOPERATE = Automaton.from_table(((0, 0, 0), (0, 0, 0)), initial=0)
TIT_FOR_TAT = Automaton.from_table(((0, 0, 1), (1, 0, 1)), initial=0)
GRIM_TRIGGER = Automaton.from_table(((0, 0, 1), (1, 1, 1)), initial=0)

PRESETS = {
    "AllDefect": ALL_DEFECT,
    "AllCooperate": ALL_COOPERATE,
    "TitForTat": TIT_FOR_TAT,
    "GrimTrigger": GRIM_TRIGGER,
}


def get_preset(name: str) -> Automaton:
    try:
        return PRESETS[name]
    except KeyError:
        raise InvalidConfiguration(
            f"unknown preset {name!r}; choose from {', '.join(PRESETS)}"
        ) from None


# ─── Behavioural Labels ─────────────────────────────────

def _reachable(a: Automaton) -> list[State]:
    seen = [a.current]
    for idx in seen:
        for target in a.states[idx].transitions:
            if target not in seen:
                seen.append(target)
    return [a.states[i] for i in seen]


def label(a: Automaton) -> str:
    """
    Name the preset whose play this automaton reproduces from its current
    state, judged over reachable states only. "Other" when none matches.
    """
    reachable = _reachable(a)
    actions = {s.action for s in reachable}
    if actions == {Action.DEFECT}:
        return "AllDefect"
    if actions == {Action.COOPERATE}:
        return "AllCooperate"
    if a.action != Action.COOPERATE:
        return "Other"

    def follows(s: State, opponent_action: int) -> int:
        return a.states[s.next_state(opponent_action)].action

    # Mirror the opponent's last move
    if all(follows(s, o) == o for s in reachable for o in (0, 1)):
        return "TitForTat"
    # Cooperate until the first defection, then defect forever
    if all(
        (follows(s, 0), follows(s, 1)) == ((0, 1) if s.action == Action.COOPERATE else (1, 1))
        for s in reachable
    ):
        return "GrimTrigger"
    return "Other"
