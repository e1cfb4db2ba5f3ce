"""Decision strategies and the registry the simulator draws them from."""

from .base import Strategy, BaseStrategy, FunctionStrategy, StrategyFactory
from .observation_rng import observation_rng, observation_random, seed_from_observation
from .random_strategy import RandomStrategy
from .first_legal import FirstLegalStrategy
from .hint_partner import HintPartnerStrategy
from .deduction import DeductionStrategy
from .registry import StrategyRegistry, default_registry

__all__ = [
    # Contract
    "Strategy",
    "BaseStrategy",
    "FunctionStrategy",
    "StrategyFactory",
    # Randomness
    "observation_rng",
    "observation_random",
    "seed_from_observation",
    # Built-ins
    "RandomStrategy",
    "FirstLegalStrategy",
    "HintPartnerStrategy",
    "DeductionStrategy",
    # Registry
    "StrategyRegistry",
    "default_registry",
]
