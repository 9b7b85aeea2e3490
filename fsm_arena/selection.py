"""
FSM Arena — Fitness-Proportional Selection

Copyright (c) 2026 SolisHQ (github.com/solishq). MIT License.
"""

from typing import Sequence, TypeVar

import numpy as np

from .errors import DegenerateFitness, InvalidConfiguration

T = TypeVar("T")

# Float error allowed on the last cumulative entry before it is pinned to 1
TOLERANCE = 1e-9


def compute_distribution(payoffs: Sequence[float]) -> np.ndarray:
    """
    Cumulative fitness distribution: N+1 entries, first 0, last 1.
    Entry i is the combined payoff share of slots 0..i-1.
    """
    values = np.asarray(payoffs, dtype=float)
    total = values.sum()
    if total == 0:
        raise DegenerateFitness(total=float(total))

    cumulative = np.concatenate(([0.0], np.cumsum(values / total)))
    if abs(cumulative[-1] - 1.0) > TOLERANCE:
        raise DegenerateFitness(total=float(total))
    cumulative[-1] = 1.0
    return cumulative


def sample(distribution: np.ndarray, population: Sequence[T], count: int,
           rng: np.random.Generator) -> list[T]:
    """
    Draw `count` individuals with replacement. Each draw takes r in [0, 1)
    and picks population[i - 1] for the smallest i with distribution[i] > r.
    """
    if len(distribution) != len(population) + 1:
        raise InvalidConfiguration(
            f"distribution has {len(distribution)} entries for {len(population)} individuals"
        )
    if count < 0:
        raise InvalidConfiguration(f"sample count must be >= 0, got {count}")

    draws = rng.random(count)
    indices = np.searchsorted(distribution, draws, side='right')
    return [population[i - 1] for i in indices]
