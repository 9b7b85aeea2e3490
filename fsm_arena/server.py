"""
FSM Arena — Server

Copyright (c) 2026 SolisHQ (github.com/solishq). MIT License.

FastAPI control surface. One live session (population + history) that can
be advanced cycle by cycle, plus a stateless one-shot evolve endpoint.
"""

import asyncio
from typing import Optional

import numpy as np
from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from pydantic import BaseModel, Field

from .automaton import PRESETS, Automaton
from .census import census, summarize
from .config import DEFAULT_CYCLES, DEFAULT_POPULATION, DEFAULT_ROUNDS, DEFAULT_SPEED, check_run, make_rng
from .errors import FsmArenaError
from .evolution import evolve, run_cycle, seed_population


# ─── State ──────────────────────────────────────────────

class Session:
    def __init__(self, population: list[Automaton], rng: np.random.Generator, seed: Optional[int]):
        self.population = population
        self.rng = rng
        self.seed = seed
        self.history: list[float] = []


session: Optional[Session] = None
_session_lock = asyncio.Lock()


# ─── App ────────────────────────────────────────────────

app = FastAPI(title="FSM Arena")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def _bad_request(e: FsmArenaError) -> HTTPException:
    logger.warning("[server] rejected: {}", e)
    return HTTPException(status_code=400, detail=str(e))


def _require_session() -> Session:
    if session is None:
        raise HTTPException(status_code=404, detail="No simulation. POST /sim/create first.")
    return session


@app.get("/health")
async def health():
    return {"status": "ok", "engine": "fsm-arena"}


@app.get("/presets")
async def presets():
    return {name: a.to_dict() for name, a in PRESETS.items()}


# ─── Models ─────────────────────────────────────────────

class CreateRequest(BaseModel):
    population: int = Field(default=DEFAULT_POPULATION, ge=2, le=100_000)
    seed: Optional[int] = Field(default=None, ge=0)
    presets: dict[str, int] = Field(default_factory=dict)

class CycleRequest(BaseModel):
    cycles: int = Field(default=1, ge=0, le=100_000)
    speed: int = Field(default=DEFAULT_SPEED, ge=1)
    rounds: int = Field(default=DEFAULT_ROUNDS, ge=1, le=10_000)

class EvolveRequest(CreateRequest):
    cycles: int = Field(default=DEFAULT_CYCLES, ge=0, le=100_000)
    speed: int = Field(default=DEFAULT_SPEED, ge=1)
    rounds: int = Field(default=DEFAULT_ROUNDS, ge=1, le=10_000)


# ─── Simulation Control ────────────────────────────────

@app.post("/sim/create")
async def create_sim(req: CreateRequest):
    global session
    try:
        rng = make_rng(req.seed)
        population = seed_population(req.population, req.presets, rng)
    except FsmArenaError as e:
        raise _bad_request(e)
    async with _session_lock:
        session = Session(population, rng, req.seed)
    logger.info("[server] created session: {} automatons, seed {}", len(population), req.seed)
    return {"status": "created", "population": len(population), "census": census(population)}


@app.post("/sim/cycle")
async def advance(req: CycleRequest):
    sim = _require_session()
    try:
        check_run(len(sim.population), req.speed, req.rounds, req.cycles)
    except FsmArenaError as e:
        raise _bad_request(e)
    async with _session_lock:
        population = sim.population
        means = []
        try:
            for _ in range(req.cycles):
                population, mean_payoff = run_cycle(population, req.speed, req.rounds, sim.rng)
                means.append(mean_payoff)
        except FsmArenaError as e:
            raise _bad_request(e)
        # Commit only once every requested cycle succeeded
        sim.population = population
        start = len(sim.history)
        sim.history.extend(means)
    return {"start_cycle": start, "history": means, "census": census(sim.population)}


@app.get("/sim/history")
async def history():
    sim = _require_session()
    return {"history": list(sim.history), "summary": summarize(sim.history)}


@app.get("/sim/census")
async def get_census():
    sim = _require_session()
    return census(sim.population)


@app.get("/sim/population")
async def get_population(limit: int = Query(default=100, ge=0), offset: int = Query(default=0, ge=0)):
    sim = _require_session()
    return {
        "total": len(sim.population),
        "automatons": [a.to_dict() for a in sim.population[offset:offset + limit]],
    }


@app.post("/evolve")
async def evolve_once(req: EvolveRequest):
    try:
        rng = make_rng(req.seed)
        population = seed_population(req.population, req.presets, rng)
        result = evolve(population, req.cycles, req.speed, req.rounds, rng)
    except FsmArenaError as e:
        raise _bad_request(e)
    return {"history": result, "summary": summarize(result)}
