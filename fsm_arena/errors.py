"""
FSM Arena — Error Kinds

Copyright (c) 2026 SolisHQ (github.com/solishq). MIT License.

Both errors are fatal. A run either completes every cycle or raises;
there is no fallback selection and no partial history.
"""

from typing import Optional


class FsmArenaError(Exception):
    """Base class for every error raised by the engine."""


class InvalidConfiguration(FsmArenaError, ValueError):
    """Run parameters or automaton tables the engine cannot work with."""


class DegenerateFitness(FsmArenaError, ArithmeticError):
    """Total payoff of a cycle is zero, so proportional selection is undefined."""

    def __init__(self, total: float = 0.0, cycle: Optional[int] = None):
        self.total = total
        self.cycle = cycle
        where = f" in cycle {cycle}" if cycle is not None else ""
        super().__init__(f"total payoff is {total}{where}; fitness distribution undefined")
