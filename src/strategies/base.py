"""Strategy contract used by the simulator."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Protocol, runtime_checkable

from src.hanabi.models import Action, FinalState, GameEvent
from src.hanabi.visibility import Observation


@runtime_checkable
class Strategy(Protocol):
    """The one capability the simulator requires: observation in, action out."""

    def decide(self, observation: Observation) -> Action:
        ...


class BaseStrategy(ABC):
    """Convenience base with no-op lifecycle hooks.

    The simulator builds one instance per seat per game, so any state a
    subclass keeps is private to that seat and that game.
    """

    name: str = "base"

    @abstractmethod
    def decide(self, observation: Observation) -> Action:
        """Choose an action for the observing seat."""

    def on_game_start(self, observation: Observation) -> None:
        pass

    def on_action_resolved(self, event: GameEvent) -> None:
        pass

    def on_game_end(self, final_state: FinalState) -> None:
        pass


class FunctionStrategy(BaseStrategy):
    """Adapts a bare ``Observation -> Action`` callable."""

    name = "function"

    def __init__(self, fn: Callable[[Observation], Action]):
        self._fn = fn

    def decide(self, observation: Observation) -> Action:
        return self._fn(observation)


StrategyFactory = Callable[[], Strategy]
