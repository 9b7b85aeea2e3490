"""
FSM Arena — Evolution Loop

Copyright (c) 2026 SolisHQ (github.com/solishq). MIT License.

CYCLE:
  1. Every pair plays its repeated match; each slot earns its total payoff.
  2. The cycle's mean payoff (per slot, per round) joins the history.
  3. The first `speed` slots die. Because the population is shuffled at
     the end of every cycle, this is a uniformly random death process.
  4. `speed` replacements are resampled from the whole population with
     probability proportional to payoff.
  5. Survivors (reset to their initial state) and replacements are
     shuffled into the next population. Size never changes.

The engine keeps no state between calls. The population and history are
threaded through the loop and the history is returned to the caller.
"""

from typing import Sequence

import numpy as np
from loguru import logger

from .automaton import Automaton, generate_random, get_preset
from .config import SeedLike, check_population_size, check_run, make_rng
from .errors import DegenerateFitness, InvalidConfiguration
from .game import match_population
from .selection import compute_distribution, sample


def generate_population(n: int, rng: SeedLike = None) -> list[Automaton]:
    """`n` independent uniformly random automatons."""
    check_population_size(n)
    rng = make_rng(rng)
    return [generate_random(rng) for _ in range(n)]


def seed_population(n: int, presets: dict[str, int], rng: SeedLike = None) -> list[Automaton]:
    """`presets[name]` copies of each named preset, random automatons for the rest, shuffled."""
    check_population_size(n)
    rng = make_rng(rng)
    population = []
    for name, count in presets.items():
        if count < 0:
            raise InvalidConfiguration(f"preset count for {name!r} must be >= 0, got {count}")
        population.extend([get_preset(name)] * count)
    if len(population) > n:
        raise InvalidConfiguration(f"{len(population)} preset automatons exceed population {n}")
    population.extend(generate_random(rng) for _ in range(n - len(population)))
    return [population[i] for i in rng.permutation(n)]


def run_cycle(population: Sequence[Automaton], speed: int, rounds: int,
              rng: np.random.Generator) -> tuple[list[Automaton], float]:
    """One generation. Returns (next population, mean payoff of this one)."""
    n = len(population)
    check_run(n, speed, rounds)
    payoffs = match_population(population, rounds)
    mean_payoff = float(payoffs.sum() / (rounds * n))

    distribution = compute_distribution(payoffs)
    survivors = [a.reset() for a in population[speed:]]
    successors = [a.reset() for a in sample(distribution, population, speed, rng)]

    merged = survivors + successors
    order = rng.permutation(n)
    return [merged[i] for i in order], mean_payoff


def evolve(population: Sequence[Automaton], cycles: int, speed: int,
           rounds_per_match: int, rng: SeedLike = None) -> list[float]:
    """
    Run `cycles` generations and return the mean payoff of each.

    Raises InvalidConfiguration before any work on bad parameters, and
    DegenerateFitness (tagged with the cycle index) if a cycle's total
    payoff is zero. Nothing is returned from a failed run.
    """
    population = list(population)
    check_run(len(population), speed, rounds_per_match, cycles)
    rng = make_rng(rng)

    logger.info("[evolve] start: {} automatons, {} cycles, speed {}, {} rounds/match",
                len(population), cycles, speed, rounds_per_match)

    history: list[float] = []
    for cycle in range(cycles):
        try:
            population, mean_payoff = run_cycle(population, speed, rounds_per_match, rng)
        except DegenerateFitness as e:
            logger.error("[evolve] cycle {}: zero total payoff, aborting run", cycle)
            raise DegenerateFitness(total=e.total, cycle=cycle) from e
        history.append(mean_payoff)
        logger.debug("[evolve] cycle {} mean={:.4f}", cycle, mean_payoff)

    if history:
        logger.info("[evolve] done: first mean {:.4f}, last mean {:.4f}", history[0], history[-1])
    return history
