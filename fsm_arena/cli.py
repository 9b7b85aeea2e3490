#!/usr/bin/env python3
"""
FSM Arena — CLI Runner

Copyright (c) 2026 SolisHQ (github.com/solishq). MIT License.

Quick way to run simulations and see results.

Usage:
    fsm-arena --population 100 --cycles 200 --speed 10 --rounds 10 --seed 7
    fsm-arena --preset TitForTat=20 --preset AllDefect=20 --json
"""

import argparse
import json
import sys

from loguru import logger
from pydantic import ValidationError

from .census import census, summarize
from .config import (
    DEFAULT_CYCLES, DEFAULT_POPULATION, DEFAULT_ROUNDS, DEFAULT_SPEED,
    EvolutionConfig, make_rng,
)
from .errors import FsmArenaError, InvalidConfiguration
from .evolution import evolve, seed_population


def _parse_preset(value: str) -> tuple[str, int]:
    name, sep, count = value.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected NAME=COUNT, got {value!r}")
    try:
        return name, int(count)
    except ValueError:
        raise argparse.ArgumentTypeError(f"count must be an integer, got {count!r}") from None


def _preset_counts(pairs) -> dict[str, int]:
    """Repeated --preset flags for the same name add up."""
    counts: dict[str, int] = {}
    for name, count in pairs:
        counts[name] = counts.get(name, 0) + count
    return counts


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Evolve two-state automatons in the repeated prisoner's dilemma")
    parser.add_argument("--population", type=int, default=DEFAULT_POPULATION, help="Population size (even)")
    parser.add_argument("--cycles", type=int, default=DEFAULT_CYCLES, help="Number of cycles")
    parser.add_argument("--speed", type=int, default=DEFAULT_SPEED, help="Automatons replaced per cycle")
    parser.add_argument("--rounds", type=int, default=DEFAULT_ROUNDS, help="Rounds per match")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--preset", type=_parse_preset, action="append", default=[],
                        metavar="NAME=COUNT", help="Seed the population with preset automatons")
    parser.add_argument("--json", action="store_true", help="Output JSON")
    parser.add_argument("--quiet", action="store_true", help="Less output")
    parser.add_argument("--verbose", action="store_true", help="Log every cycle")
    return parser


def _configure_logging(args):
    logger.remove()
    if args.quiet or args.json:
        level = "WARNING"
    elif args.verbose:
        level = "DEBUG"
    else:
        level = "INFO"
    logger.add(sys.stderr, level=level)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args)

    try:
        config = EvolutionConfig(
            population=args.population,
            cycles=args.cycles,
            speed=args.speed,
            rounds=args.rounds,
            seed=args.seed,
            presets=_preset_counts(args.preset),
        ).validate_run()
    except ValidationError as e:
        print(f"error: invalid configuration: {e}", file=sys.stderr)
        return 2
    except InvalidConfiguration as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    rng = make_rng(config.seed)
    try:
        population = seed_population(config.population, config.presets, rng)
        before = census(population)
        history = evolve(population, config.cycles, config.speed, config.rounds, rng)
    except FsmArenaError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    summary = summarize(history)

    if args.json:
        result = {
            "config": config.model_dump(),
            "summary": summary,
            "initial_census": before,
            "history": history,
        }
        print(json.dumps(result, indent=2))
        return 0

    if not args.quiet:
        print("FSM Arena\n")
        print(f"Config: {config.population} automatons, {config.cycles} cycles")
        print(f"Speed: {config.speed}, Rounds/match: {config.rounds}, Seed: {config.seed}\n")

        print(f"{'Strategy':<15} {'Count':>6}")
        print("-" * 22)
        for name, count in sorted(before.items(), key=lambda x: -x[1]):
            print(f"{name:<15} {count:>6}")

    print(f"\n{'='*50}")
    print("MEAN PAYOFF HISTORY")
    print(f"{'='*50}\n")
    if summary['cycles'] == 0:
        print("No cycles run.")
        return 0
    for key in ('first', 'last', 'min', 'max', 'mean'):
        print(f"  {key:<6} {summary[key]:.4f}")
    if not args.quiet:
        step = max(1, len(history) // 10)
        print()
        for i in range(0, len(history), step):
            print(f"  cycle {i:>6}: {history[i]:.4f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
