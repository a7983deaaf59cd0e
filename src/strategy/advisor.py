"""
Advice composer: turns a two-card hand and a dealer upcard into one final
action with a short justification.

Classification order:
    1. Pair  → pair table (SPLIT / HIT / STAND, or DOUBLE_10 → hard 10)
    2. Soft total 13–21 → soft table
    3. Anything else → hard table

Raw table codes are then normalised to exactly one of HIT, STAND, DOUBLE,
SPLIT, SURRENDER. Intermediate codes never leave this module.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from src.engine.cards import Card, hand_to_str, str_to_card
from src.engine.hand import hand_totals, is_pair, pair_rank, upcard_value
from src.engine.rules import RuleConfig
from src.strategy.tables import RawDecision, hard_decision, pair_decision, soft_decision

logger = logging.getLogger(__name__)

SURRENDER_FALLBACK_NOTE: str = " (or Hit if surrender not available)"


class Action(Enum):
    HIT = 'HIT'
    STAND = 'STAND'
    DOUBLE = 'DOUBLE'
    SPLIT = 'SPLIT'
    SURRENDER = 'SURRENDER'


@dataclass(frozen=True)
class Advice:
    """The recommended action for one decision, with its explanation."""
    action: Action
    reason: str

    def __str__(self) -> str:
        return f"{self.action.value} — {self.reason}"


_DIRECT: dict[RawDecision, Action] = {
    RawDecision.HIT: Action.HIT,
    RawDecision.STAND: Action.STAND,
    RawDecision.DOUBLE: Action.DOUBLE,
    RawDecision.SPLIT: Action.SPLIT,
}


def normalize_decision(raw: RawDecision, reason: str) -> Advice:
    """Map a raw table code to a final Advice.

    SURRENDER_OR_HIT becomes SURRENDER with a note about the hit fallback;
    DOUBLE_10 becomes DOUBLE.

    Examples:
        >>> normalize_decision(RawDecision.SURRENDER_OR_HIT, 'Hard 16 vs T.').reason
        'Hard 16 vs T. (or Hit if surrender not available)'
    """
    if raw is RawDecision.SURRENDER_OR_HIT:
        return Advice(Action.SURRENDER, (reason + SURRENDER_FALLBACK_NOTE).strip())
    if raw is RawDecision.DOUBLE_10:
        return Advice(Action.DOUBLE, reason.strip())
    return Advice(_DIRECT[raw], reason.strip())


def basic_strategy_advice(
    cards: tuple[Card, ...],
    dealer_card: Card,
    rules: RuleConfig,
) -> Advice:
    """Return the basic-strategy action for a starting hand.

    Args:
        cards:       The player's two cards.
        dealer_card: The dealer's upcard.
        rules:       Rule configuration for this decision.

    Returns:
        Advice with a final Action and a reason naming the classification
        used (pair rank / soft total / hard total vs upcard).
    """
    up = upcard_value(dealer_card)

    if is_pair(cards):
        face = cards[0].rank
        decision = pair_decision(pair_rank(cards), up, rules.double_after_split)
        logger.debug("%s vs %s: pair table → %s", hand_to_str(cards), up, decision.name)

        if decision is RawDecision.SPLIT:
            return Advice(Action.SPLIT, f"Pair of {face}s vs {up}: split.")
        if decision is RawDecision.DOUBLE_10:
            hard = hard_decision(10, up, rules.dealer_rule, rules.late_surrender)
            return normalize_decision(hard, f"Hard 10 vs {up}.")
        return normalize_decision(decision, f"Pair strategy for {face}{face} vs {up}.")

    total, soft = hand_totals(cards)
    if soft and 13 <= total <= 21:
        decision = soft_decision(total, up, rules.dealer_rule)
        reason = f"Soft {total} vs {up}."
    else:
        decision = hard_decision(total, up, rules.dealer_rule, rules.late_surrender)
        reason = f"Hard {total} vs {up}."
    logger.debug("%s vs %s: %s → %s", hand_to_str(cards), up, reason, decision.name)

    return normalize_decision(decision, reason)


def advise(
    cards: tuple[Card | str, ...],
    dealer_card: Card | str,
    rules: RuleConfig | None = None,
) -> Advice:
    """Convenience wrapper accepting card strings ('AS', '10H') and default rules.

    Examples:
        >>> advise(('5C', '6D'), 'AS').action
        <Action.HIT: 'HIT'>
    """
    hand = tuple(c if isinstance(c, Card) else str_to_card(c) for c in cards)
    up = dealer_card if isinstance(dealer_card, Card) else str_to_card(dealer_card)
    return basic_strategy_advice(hand, up, rules if rules is not None else RuleConfig())
