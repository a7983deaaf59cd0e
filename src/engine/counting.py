"""
Hi-Lo card counting.

Count values:
    2–6           +1
    7–9            0
    10, J, Q, K, A −1

The running count lives in an explicit CountState value; accumulate()
returns a new state rather than mutating anything. The true count divides
the running count by the estimated decks remaining, which is floored at a
quarter deck so the division stays defined as the shoe empties.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable

from .cards import RANK_VALUES, TEN_TOKEN, Card, InvalidCardError
from .rules import MAX_DECKS, MIN_DECKS

CARDS_PER_DECK: int = 52
MIN_DECKS_REMAINING: float = 0.25

HI_LO_VALUES: dict[str, int] = {
    '2': 1, '3': 1, '4': 1, '5': 1, '6': 1,
    '7': 0, '8': 0, '9': 0,
    '10': -1, 'J': -1, 'Q': -1, 'K': -1, 'A': -1,
}


@dataclass(frozen=True)
class CountState:
    """Running count for one stream of revealed cards."""
    total_decks: int
    running_count: int = 0
    cards_dealt: int = 0


def card_count_value(card: Card | str) -> int:
    """Return the Hi-Lo value of a card or rank (the 'T' token is accepted).

    Raises:
        InvalidCardError: For an unknown rank.

    Examples:
        >>> card_count_value('5')
        1
        >>> card_count_value('8')
        0
        >>> card_count_value('T')
        -1
    """
    rank = card.rank if isinstance(card, Card) else card
    if rank == TEN_TOKEN:
        rank = '10'
    if rank not in RANK_VALUES:
        raise InvalidCardError(f"Unknown rank {rank!r}.")
    return HI_LO_VALUES[rank]


def new_count_state(total_decks: int) -> CountState:
    """Start a fresh count for a shoe of ``total_decks`` decks.

    Raises:
        ValueError: If total_decks is outside 1–8.
    """
    if not MIN_DECKS <= total_decks <= MAX_DECKS:
        raise ValueError(f"total_decks must be between {MIN_DECKS} and {MAX_DECKS}, got {total_decks}.")
    return CountState(total_decks=total_decks)


def accumulate(state: CountState, card: Card) -> CountState:
    """Return the state after revealing one more card."""
    return replace(
        state,
        running_count=state.running_count + card_count_value(card),
        cards_dealt=state.cards_dealt + 1,
    )


def accumulate_all(state: CountState, cards: Iterable[Card]) -> CountState:
    """Reveal a sequence of cards in order."""
    for card in cards:
        state = accumulate(state, card)
    return state


def running_count_of(cards: Iterable[Card]) -> int:
    """Return the Hi-Lo sum of a sequence of cards."""
    return sum(card_count_value(c) for c in cards)


def decks_remaining(cards_dealt: int, total_decks: int) -> float:
    """Estimate decks left in the shoe, floored at a quarter deck.

    Raises:
        ValueError: If total_decks <= 0 or cards_dealt < 0.

    Examples:
        >>> round(decks_remaining(5, 1), 3)
        0.904
        >>> decks_remaining(52, 1)
        0.25
        >>> decks_remaining(0, 6)
        6.0
    """
    if total_decks <= 0:
        raise ValueError(f"total_decks must be positive, got {total_decks}.")
    if cards_dealt < 0:
        raise ValueError(f"cards_dealt cannot be negative, got {cards_dealt}.")
    remaining = max(0, total_decks * CARDS_PER_DECK - cards_dealt)
    return max(MIN_DECKS_REMAINING, remaining / CARDS_PER_DECK)


def state_decks_remaining(state: CountState) -> float:
    return decks_remaining(state.cards_dealt, state.total_decks)


def true_count(state: CountState) -> float:
    """Running count divided by estimated decks remaining."""
    return state.running_count / state_decks_remaining(state)
