"""Reproducible randomness for strategies, derived from observation context."""

from __future__ import annotations

from src.hanabi.rng import DeterministicGenerator
from src.hanabi.visibility import Observation


def seed_from_observation(observation: Observation, base_seed: int = 0) -> int:
    """Seed from the game, the seat and how many turns that seat has taken."""
    turns_taken = sum(1 for e in observation.action_history if e.seat == observation.seat)
    return (
        base_seed
        + (observation.strategy_seed or 0)
        + observation.seat * 10000
        + turns_taken
    )


def observation_rng(observation: Observation, base_seed: int = 0) -> DeterministicGenerator:
    """Generator for strategies that need several random numbers per turn."""
    return DeterministicGenerator(seed_from_observation(observation, base_seed))


def observation_random(observation: Observation, base_seed: int = 0) -> float:
    """One deterministic random number in [0, 1)."""
    return observation_rng(observation, base_seed).next_float()
