"""Strategy that always takes the first legal action."""

from __future__ import annotations

from src.hanabi.models import Action
from src.hanabi.visibility import Observation, legal_actions

from .base import BaseStrategy


class FirstLegalStrategy(BaseStrategy):
    name = "FirstLegal"

    def decide(self, observation: Observation) -> Action:
        return legal_actions(observation)[0]
