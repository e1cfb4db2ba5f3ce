"""Name -> factory map for the strategies a run can use."""

from __future__ import annotations

from typing import Iterable

from .base import Strategy, StrategyFactory
from .deduction import DeductionStrategy
from .first_legal import FirstLegalStrategy
from .hint_partner import HintPartnerStrategy
from .random_strategy import RandomStrategy


class StrategyRegistry:
    """
    Explicit registry passed to the simulator.

    Factories must be zero-argument callables returning a fresh strategy.
    Use classes or ``functools.partial`` (not lambdas) when runs are spread
    over worker processes, since factories are pickled.
    """

    def __init__(self, factories: dict[str, StrategyFactory] | None = None):
        self._factories: dict[str, StrategyFactory] = dict(factories or {})

    def register(self, name: str, factory: StrategyFactory) -> None:
        if not name:
            raise ValueError("Strategy name must be non-empty")
        self._factories[name] = factory

    def names(self) -> list[str]:
        return list(self._factories)

    def get(self, name: str) -> StrategyFactory:
        if name not in self._factories:
            raise KeyError(f"Unknown strategy: {name!r} (available: {', '.join(self._factories)})")
        return self._factories[name]

    def create(self, name: str) -> Strategy:
        return self.get(name)()

    def select(self, names: Iterable[str] | None = None) -> dict[str, StrategyFactory]:
        """Factories for ``names`` in the given order (all registered when None)."""
        if names is None:
            return dict(self._factories)
        return {name: self.get(name) for name in names}

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)


def default_registry() -> StrategyRegistry:
    """Registry with the built-in strategies."""
    return StrategyRegistry({
        RandomStrategy.name: RandomStrategy,
        FirstLegalStrategy.name: FirstLegalStrategy,
        HintPartnerStrategy.name: HintPartnerStrategy,
        DeductionStrategy.name: DeductionStrategy,
    })
