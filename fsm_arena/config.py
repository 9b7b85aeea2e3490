"""
FSM Arena — Run Configuration

Copyright (c) 2026 SolisHQ (github.com/solishq). MIT License.

Shape and range checks live on the pydantic model. Relations between
fields (even population, speed below population) are engine invariants
and surface as InvalidConfiguration from `validate_run()`.
"""

from typing import Optional, Union

import numpy as np
from pydantic import BaseModel, Field

from .errors import InvalidConfiguration


DEFAULT_POPULATION = 100
DEFAULT_CYCLES = 200
DEFAULT_SPEED = 10
DEFAULT_ROUNDS = 10

SeedLike = Union[None, int, np.random.Generator]


class EvolutionConfig(BaseModel):
    population: int = Field(default=DEFAULT_POPULATION, ge=2, le=100_000)
    cycles: int = Field(default=DEFAULT_CYCLES, ge=0, le=1_000_000)
    speed: int = Field(default=DEFAULT_SPEED, ge=1)
    rounds: int = Field(default=DEFAULT_ROUNDS, ge=1, le=10_000)
    seed: Optional[int] = Field(default=None, ge=0)
    presets: dict[str, int] = Field(default_factory=dict)

    def validate_run(self) -> "EvolutionConfig":
        check_run(self.population, self.speed, self.rounds, self.cycles)
        return self


def check_population_size(n: int):
    if n < 2 or n % 2:
        raise InvalidConfiguration(f"population size must be even and >= 2, got {n}")


def check_run(population_size: int, speed: int, rounds: int, cycles: int = 0):
    """Every run-level invariant, checked before any cycle executes."""
    check_population_size(population_size)
    if not 0 < speed < population_size:
        raise InvalidConfiguration(
            f"speed must satisfy 0 < speed < {population_size}, got {speed}"
        )
    if rounds < 1:
        raise InvalidConfiguration(f"rounds per match must be >= 1, got {rounds}")
    if cycles < 0:
        raise InvalidConfiguration(f"cycles must be >= 0, got {cycles}")


def make_rng(seed: SeedLike = None) -> np.random.Generator:
    """A Generator from a seed, or the Generator itself when one is passed."""
    if isinstance(seed, (int, np.integer)) and seed < 0:
        raise InvalidConfiguration(f"seed must be >= 0, got {seed}")
    return np.random.default_rng(seed)
