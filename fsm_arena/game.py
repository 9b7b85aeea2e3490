"""
FSM Arena — Repeated Prisoner's Dilemma

Copyright (c) 2026 SolisHQ (github.com/solishq). MIT License.

One fixed 2x2 game: reward 3, temptation 4, sucker 0, punishment 1.
Pairs are formed by position (slot 2i plays slot 2i+1) and play a fixed
number of rounds, each automaton reacting to the other's previous move.
"""

from typing import Sequence

import numpy as np
from loguru import logger

from .automaton import Action, Automaton
from .errors import InvalidConfiguration


PAYOFF_MATRIX = {
    (Action.COOPERATE, Action.COOPERATE): (3, 3),
    (Action.COOPERATE, Action.DEFECT): (0, 4),
    (Action.DEFECT, Action.COOPERATE): (4, 0),
    (Action.DEFECT, Action.DEFECT): (1, 1),
}


def payoff(action_a: int, action_b: int) -> tuple[int, int]:
    """Returns (payoff_a, payoff_b) for one simultaneous move."""
    try:
        return PAYOFF_MATRIX[(action_a, action_b)]
    except KeyError:
        raise InvalidConfiguration(f"actions must be 0 or 1, got ({action_a!r}, {action_b!r})") from None


def _check_rounds(rounds: int):
    if rounds < 1:
        raise InvalidConfiguration(f"rounds per match must be >= 1, got {rounds}")


def match_pair(a: Automaton, b: Automaton, rounds: int) -> list[tuple[int, int]]:
    """Play `rounds` rounds. Returns the payoff pair of every round, in order."""
    _check_rounds(rounds)
    outcomes = []
    for _ in range(rounds):
        action_a, action_b = a.action, b.action
        outcomes.append(payoff(action_a, action_b))
        a, b = a.step(action_b), b.step(action_a)
    return outcomes


def match_population(population: Sequence[Automaton], rounds: int) -> np.ndarray:
    """
    Match slot 2i against slot 2i+1 and return each slot's total payoff,
    in population order. Odd populations are rejected before any match.
    """
    n = len(population)
    if n % 2:
        raise InvalidConfiguration(f"population size must be even to pair, got {n}")
    _check_rounds(rounds)

    payoffs = np.zeros(n, dtype=float)
    for i in range(0, n, 2):
        outcomes = match_pair(population[i], population[i + 1], rounds)
        totals = np.sum(outcomes, axis=0)
        payoffs[i], payoffs[i + 1] = totals[0], totals[1]

    logger.debug("[game] matched {} pairs x {} rounds, total payoff {}", n // 2, rounds, payoffs.sum())
    return payoffs
