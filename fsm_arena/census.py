"""
FSM Arena — Population Census

Copyright (c) 2026 SolisHQ (github.com/solishq). MIT License.

Reporting helpers for the CLI and server. Nothing here feeds back into
the simulation.
"""

from collections import Counter
from typing import Sequence

import numpy as np

from .automaton import PRESETS, Automaton, label


def census(population: Sequence[Automaton]) -> dict[str, int]:
    """Count automatons per behavioural label, every label present."""
    counts = Counter(label(a) for a in population)
    return {name: counts.get(name, 0) for name in [*PRESETS, "Other"]}


def summarize(history: Sequence[float]) -> dict:
    """Headline numbers of a mean-payoff history."""
    if not len(history):
        return {'cycles': 0, 'first': None, 'last': None, 'min': None, 'max': None, 'mean': None}
    values = np.asarray(history, dtype=float)
    return {
        'cycles': int(values.size),
        'first': float(values[0]),
        'last': float(values[-1]),
        'min': float(values.min()),
        'max': float(values.max()),
        'mean': float(values.mean()),
    }
