"""Run configuration for strategy simulations."""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, Field

from src.hanabi.models import MAX_HINT_TOKENS, MAX_LIFE_TOKENS, HanabiConfig, HintPolicy


class LoggingMode(str, Enum):
    NORMAL = "normal"
    DEBUG = "debug"  # Capture full traces


class IllegalActionPolicy(str, Enum):
    """What the simulator does when a strategy returns an illegal action."""
    FAIL_FAST = "fail_fast"
    SUBSTITUTE_FIRST_LEGAL = "substitute_first_legal"


class GameConfig(BaseModel):
    """Configuration for a simulation run."""

    player_count: int = Field(default=2, ge=2, le=5)
    hint_tokens: int = Field(default=MAX_HINT_TOKENS, ge=0, le=MAX_HINT_TOKENS)
    life_tokens: int = Field(default=MAX_LIFE_TOKENS, ge=1, le=MAX_LIFE_TOKENS)

    # Seeds: an explicit (non-empty) list wins over game_count
    game_count: int = Field(default=1000, ge=0)
    seed_list: Annotated[list[int], Field(min_length=1)] | None = None

    logging_mode: LoggingMode = LoggingMode.NORMAL
    hint_policy: HintPolicy = HintPolicy.MATCH_REQUIRED
    illegal_action_policy: IllegalActionPolicy = IllegalActionPolicy.FAIL_FAST

    # Worker processes; 1 runs everything in-process
    max_workers: int = Field(default=1, ge=1)

    @property
    def capture_traces(self) -> bool:
        return self.logging_mode == LoggingMode.DEBUG

    def resolve_seeds(self) -> list[int]:
        """The ordered seed list every strategy in the run shares."""
        if self.seed_list is not None:
            return list(self.seed_list)
        return list(range(self.game_count))

    def rules(self) -> HanabiConfig:
        return HanabiConfig(
            num_players=self.player_count,
            hint_tokens=self.hint_tokens,
            life_tokens=self.life_tokens,
            hint_policy=self.hint_policy,
        )


class ConfigPreset(BaseModel):
    """A named, ready-to-run configuration."""
    id: str
    description: str
    config: GameConfig


CONFIG_PRESETS: dict[str, ConfigPreset] = {
    "default": ConfigPreset(
        id="default",
        description="2 players, 1000 games",
        config=GameConfig(),
    ),
    "quick": ConfigPreset(
        id="quick",
        description="2 players, 100 games",
        config=GameConfig(game_count=100),
    ),
    "4p": ConfigPreset(
        id="4p",
        description="4 players, 500 games",
        config=GameConfig(player_count=4, game_count=500),
    ),
    "debug": ConfigPreset(
        id="debug",
        description="2 players, 10 games with full traces",
        config=GameConfig(game_count=10, logging_mode=LoggingMode.DEBUG),
    ),
}


def get_preset(preset_id: str) -> GameConfig:
    """Copy of a preset's config; raises KeyError for unknown ids."""
    if preset_id not in CONFIG_PRESETS:
        raise KeyError(f"Unknown config preset: {preset_id!r}")
    return CONFIG_PRESETS[preset_id].config.model_copy(deep=True)
