# FSM Arena Evolution Engine
# Copyright (c) 2026 SolisHQ (github.com/solishq). MIT License.

from .automaton import (
    Action, State, Automaton, current_action, step, generate_random, label,
    ALL_DEFECT, ALL_COOPERATE, TIT_FOR_TAT, GRIM_TRIGGER, PRESETS, get_preset,
)
from .game import payoff, match_pair, match_population
from .selection import compute_distribution, sample
from .evolution import generate_population, seed_population, run_cycle, evolve
from .errors import FsmArenaError, InvalidConfiguration, DegenerateFitness

__author__ = "SolisHQ"
__version__ = "1.0.0"
