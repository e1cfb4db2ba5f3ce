"""Hanabi rules engine, observations and hint knowledge."""

from .models import (
    Card,
    Color,
    COLORS,
    NUMBERS,
    CARD_COUNTS,
    HintKnowledge,
    HintPolicy,
    EndReason,
    PlayAction,
    DiscardAction,
    ColorHintAction,
    NumberHintAction,
    Action,
    PlayEvent,
    DiscardEvent,
    ColorHintEvent,
    NumberHintEvent,
    GameEvent,
    HanabiConfig,
    HanabiState,
    FinalState,
)
from .errors import (
    HanabiError,
    IllegalActionError,
    StrategyContractError,
    GameOverError,
)
from .rng import DeterministicGenerator
from .deck import create_deck, shuffle_deck, deal, hand_size_for
from .game import (
    create_game,
    validate_action,
    execute_action,
    apply_action,
    check_terminal,
    calculate_score,
    is_playable,
    is_critical,
    count_remaining,
)
from .visibility import (
    Observation,
    build_observation,
    legal_actions,
    validate_for_observation,
    knowledge_for_own_slot,
    knowledge_for_visible_card,
    assert_no_leaks,
    assert_view_safe,
)
from .metrics import compute_game_metrics

__all__ = [
    # Models
    "Card",
    "Color",
    "COLORS",
    "NUMBERS",
    "CARD_COUNTS",
    "HintKnowledge",
    "HintPolicy",
    "EndReason",
    "PlayAction",
    "DiscardAction",
    "ColorHintAction",
    "NumberHintAction",
    "Action",
    "PlayEvent",
    "DiscardEvent",
    "ColorHintEvent",
    "NumberHintEvent",
    "GameEvent",
    "HanabiConfig",
    "HanabiState",
    "FinalState",
    # Errors
    "HanabiError",
    "IllegalActionError",
    "StrategyContractError",
    "GameOverError",
    # Deck
    "DeterministicGenerator",
    "create_deck",
    "shuffle_deck",
    "deal",
    "hand_size_for",
    # Game
    "create_game",
    "validate_action",
    "execute_action",
    "apply_action",
    "check_terminal",
    "calculate_score",
    "is_playable",
    "is_critical",
    "count_remaining",
    # Visibility
    "Observation",
    "build_observation",
    "legal_actions",
    "validate_for_observation",
    "knowledge_for_own_slot",
    "knowledge_for_visible_card",
    "assert_no_leaks",
    "assert_view_safe",
    # Metrics
    "compute_game_metrics",
]
