"""Core game logic for Hanabi: validation, resolution and end detection."""

from __future__ import annotations

from typing import Mapping, Sequence

from .deck import create_deck, deal, shuffle_deck
from .errors import GameOverError, IllegalActionError, StrategyContractError
from .knowledge import record_hint
from .models import (
    ACTION_TYPES,
    CARD_COUNTS,
    MAX_HINT_TOKENS,
    MAX_SCORE,
    NUMBERS,
    Action,
    Card,
    Color,
    ColorHintAction,
    ColorHintEvent,
    DiscardAction,
    DiscardEvent,
    EndReason,
    GameEvent,
    HanabiConfig,
    HanabiState,
    HintPolicy,
    NumberHintAction,
    NumberHintEvent,
    PlayAction,
    PlayEvent,
)


def create_game(config: HanabiConfig, seed: int) -> HanabiState:
    """
    Create a new Hanabi game.

    Args:
        config: Rules configuration
        seed: Seed for the deterministic shuffle

    Returns:
        Initial game state with dealt hands; seat 0 acts first
    """
    deck = shuffle_deck(create_deck(), seed)
    hands, remaining = deal(deck, config.num_players)

    return HanabiState(
        config=config,
        seed=seed,
        hands=hands,
        deck=remaining,
        hint_tokens=config.hint_tokens,
        life_tokens=config.life_tokens,
    )


def calculate_score(played_stacks: Mapping[Color, int]) -> int:
    return min(sum(played_stacks.values()), MAX_SCORE)


def is_playable(card: Card, played_stacks: Mapping[Color, int]) -> bool:
    """Check if a card can be legally played."""
    return card.value == played_stacks.get(card.color, 0) + 1


def playable_next(played_stacks: Mapping[Color, int]) -> dict[Color, int]:
    """Get the next playable number for each unfinished color."""
    return {color: played + 1 for color, played in played_stacks.items() if played < 5}


def count_remaining(discard_pile: Sequence[Card], color: Color, value: int) -> int:
    """Count how many copies of a card are not yet discarded (deck, hands or stacks)."""
    discarded = sum(1 for c in discard_pile if c.color == color and c.value == value)
    return CARD_COUNTS[value] - discarded


def is_critical(card: Card, played_stacks: Mapping[Color, int], discard_pile: Sequence[Card]) -> bool:
    """Check if a card is critical (last copy and still needed)."""
    # Already played or not needed
    if played_stacks.get(card.color, 0) >= card.value:
        return False

    # Is this the last copy?
    return count_remaining(discard_pile, card.color, card.value) == 1


def check_action(
    action: Action,
    *,
    actor: int,
    hand_size: int,
    hint_tokens: int,
    num_players: int,
    hands: Mapping[int, Sequence[Card]],
    hint_policy: HintPolicy,
) -> str | None:
    """
    Legality rules shared by the engine and by observation-only validation.

    ``hands`` must contain every seat that may be hinted (all seats but the
    actor are enough).

    Returns:
        None if the action is legal, otherwise a description of the problem
    """
    if not isinstance(action, ACTION_TYPES):
        raise StrategyContractError(f"Not a Hanabi action: {action!r}")

    if isinstance(action, PlayAction):
        if action.slot < 0 or action.slot >= hand_size:
            return f"Invalid play: slot {action.slot} out of range [0, {hand_size - 1}]"
        return None

    if isinstance(action, DiscardAction):
        if action.slot < 0 or action.slot >= hand_size:
            return f"Invalid discard: slot {action.slot} out of range [0, {hand_size - 1}]"
        if hint_tokens >= MAX_HINT_TOKENS:
            return "Cannot discard: already at max hint tokens"
        return None

    # Hints
    if hint_tokens <= 0:
        return "Cannot hint: no hint tokens remaining"
    if action.target == actor:
        return "Cannot hint: cannot hint yourself"
    if action.target < 0 or action.target >= num_players:
        return f"Invalid hint: target {action.target} out of range"

    target_hand = hands.get(action.target, ())
    if isinstance(action, NumberHintAction):
        if action.number not in NUMBERS:
            return f"Invalid hint: number hint must be 1-5, got {action.number}"
        if hint_policy == HintPolicy.POSITION_ENCODING:
            return None
        has_match = any(card.value == action.number for card in target_hand)
    else:
        has_match = any(card.color == action.color for card in target_hand)

    if not has_match:
        return "Invalid hint: no matching cards in target hand"
    return None


def validate_action(state: HanabiState, action: Action) -> str | None:
    """
    Check an action for the current player.

    Returns:
        None if legal, otherwise the reason it is illegal
    """
    if state.game_over:
        return "Game is already over"
    actor = state.current_player
    return check_action(
        action,
        actor=actor,
        hand_size=len(state.hands[actor]),
        hint_tokens=state.hint_tokens,
        num_players=state.config.num_players,
        hands=dict(enumerate(state.hands)),
        hint_policy=state.config.hint_policy,
    )


def draw_card(state: HanabiState, seat: int) -> Card | None:
    """Move the front card of the deck into a seat's hand, if any remain."""
    if not state.deck:
        return None
    card = state.deck.pop(0)
    state.hands[seat].append(card)
    return card


def _snapshot(state: HanabiState) -> dict[str, int]:
    return {
        "turn_number": state.turn_number,
        "seat": state.current_player,
        "hint_tokens_after": state.hint_tokens,
        "life_tokens_after": state.life_tokens,
        "score_after": state.score,
    }


def _execute_play(state: HanabiState, action: PlayAction) -> PlayEvent:
    seat = state.current_player
    card = state.hands[seat].pop(action.slot)
    success = is_playable(card, state.played_stacks)

    if success:
        state.played_stacks[card.color] = card.value
        # Bonus hint token for completing a stack
        if card.value == 5 and state.hint_tokens < MAX_HINT_TOKENS:
            state.hint_tokens += 1
    else:
        state.life_tokens -= 1
        state.discard_pile.append(card)

    draw_card(state, seat)
    return PlayEvent(slot=action.slot, card=card, success=success, **_snapshot(state))


def _execute_discard(state: HanabiState, action: DiscardAction) -> DiscardEvent:
    seat = state.current_player
    card = state.hands[seat].pop(action.slot)
    state.discard_pile.append(card)
    state.hint_tokens = min(state.hint_tokens + 1, MAX_HINT_TOKENS)

    draw_card(state, seat)
    return DiscardEvent(slot=action.slot, card=card, **_snapshot(state))


def _execute_hint(state: HanabiState, action: ColorHintAction | NumberHintAction) -> GameEvent:
    state.hint_tokens -= 1
    target_hand = state.hands[action.target]

    matched_slots: list[int] = []
    matched_ids: list[int] = []
    for slot, card in enumerate(target_hand):
        if isinstance(action, ColorHintAction):
            matched = card.color == action.color
            state.knowledge[card.id] = record_hint(state.knowledge[card.id], matched, color=action.color)
        else:
            matched = card.value == action.number
            state.knowledge[card.id] = record_hint(state.knowledge[card.id], matched, number=action.number)
        if matched:
            matched_slots.append(slot)
            matched_ids.append(card.id)

    common = {
        "target": action.target,
        "matched_slots": tuple(matched_slots),
        "matched_card_ids": tuple(matched_ids),
        "hand_card_ids": tuple(card.id for card in target_hand),
        **_snapshot(state),
    }
    if isinstance(action, ColorHintAction):
        return ColorHintEvent(color=action.color, **common)
    return NumberHintEvent(number=action.number, **common)


def execute_action(state: HanabiState, action: Action) -> GameEvent:
    """
    Resolve an already-validated action, mutating ``state`` in place.

    Legality is not re-checked here; call ``validate_action`` first (or use
    ``apply_action``).

    Returns:
        The resolved event, also appended to ``state.action_history``
    """
    if state.game_over:
        raise GameOverError("Game is already over")

    if isinstance(action, PlayAction):
        event = _execute_play(state, action)
    elif isinstance(action, DiscardAction):
        event = _execute_discard(state, action)
    elif isinstance(action, (ColorHintAction, NumberHintAction)):
        event = _execute_hint(state, action)
    else:
        raise StrategyContractError(f"Not a Hanabi action: {action!r}")

    state.action_history.append(event)
    state.current_player = (state.current_player + 1) % state.config.num_players

    # The turn that empties the deck starts the countdown; later turns spend it
    if state.final_round_turns_left is not None:
        state.final_round_turns_left -= 1
    elif not state.deck:
        state.final_round_turns_left = state.config.num_players

    game_over, reason = check_terminal(state)
    if game_over:
        state.game_over = True
        state.end_reason = reason
    else:
        state.turn_number += 1

    return event


def apply_action(state: HanabiState, action: Action) -> GameEvent:
    """Validate then execute; raises IllegalActionError on an illegal action."""
    reason = validate_action(state, action)
    if reason is not None:
        if state.game_over:
            raise GameOverError(reason)
        raise IllegalActionError(reason, action=action, seat=state.current_player)
    return execute_action(state, action)


def check_terminal(state: HanabiState) -> tuple[bool, EndReason | None]:
    """
    Check if the game has ended.

    Lives are checked first so a misplay that loses the last life always ends
    the game as LIVES_ZERO.

    Returns:
        (is_game_over, reason)
    """
    if state.life_tokens <= 0:
        return True, EndReason.LIVES_ZERO

    if calculate_score(state.played_stacks) == MAX_SCORE:
        return True, EndReason.MAX_SCORE

    if state.final_round_turns_left is not None and state.final_round_turns_left <= 0:
        return True, EndReason.DECK_EMPTY

    return False, None
