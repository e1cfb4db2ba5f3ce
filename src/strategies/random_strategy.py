"""Baseline strategy: a uniformly random legal action."""

from __future__ import annotations

from src.hanabi.models import Action
from src.hanabi.visibility import Observation, legal_actions

from .base import BaseStrategy
from .observation_rng import observation_rng


class RandomStrategy(BaseStrategy):
    """Picks a random legal action with observation-seeded randomness."""

    name = "Random"

    def __init__(self, base_seed: int = 42):
        self.base_seed = base_seed

    def decide(self, observation: Observation) -> Action:
        actions = legal_actions(observation)
        return observation_rng(observation, self.base_seed).choice(actions)
