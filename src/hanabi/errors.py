"""Exceptions raised by the Hanabi engine and simulator."""

from __future__ import annotations


class HanabiError(Exception):
    """Base class for engine errors."""


class IllegalActionError(HanabiError, ValueError):
    """An action broke the rules (bad slot, no tokens, self-hint, ...).

    Misplays are not illegal; they are ordinary outcomes.
    """

    def __init__(self, reason: str, action: object | None = None, seat: int | None = None):
        super().__init__(reason)
        self.reason = reason
        self.action = action
        self.seat = seat


class StrategyContractError(HanabiError, TypeError):
    """A strategy returned something that is not an action."""


class GameOverError(HanabiError):
    """An action was submitted to a finished game."""
