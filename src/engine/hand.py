"""
Hand evaluation: totals, softness, pair detection and upcard tokens.

Ace valuation follows standard blackjack:
    Every ace starts at 11; while the hand busts and an ace is still
    counted high, one ace is demoted to 1.

Pair detection uses the ten-bucket convention: 10, J, Q and K all
normalise to 'T', so a 10 paired with a King is a pair. Totals always use
numeric values (A=11/1, ten group=10, others=face value).

All functions operate on tuples of Card values and have no side effects.
"""

from __future__ import annotations

from typing import NamedTuple

from .cards import RANK_ACE, RANK_VALUES, Card, ten_bucket

# Dealer upcard tokens in chart column order
UPCARDS: tuple[str, ...] = ('2', '3', '4', '5', '6', '7', '8', '9', 'T', 'A')

HAND_PAIR: str = 'pair'
HAND_SOFT: str = 'soft'
HAND_HARD: str = 'hard'


class HandTotals(NamedTuple):
    total: int
    is_soft: bool


def hand_totals(cards: tuple[Card, ...]) -> HandTotals:
    """Return the best total and softness of a hand.

    Aces are summed at 11, then demoted to 1 one at a time while the total
    exceeds 21. The hand is soft when an ace is still counted at 11 after
    demotion (and the total did not bust).

    Examples:
        >>> hand_totals((str_to_card('AS'), str_to_card('6H')))
        HandTotals(total=17, is_soft=True)
        >>> hand_totals((str_to_card('AS'), str_to_card('6H'), str_to_card('5D')))
        HandTotals(total=12, is_soft=False)
        >>> hand_totals((str_to_card('KH'), str_to_card('QD'), str_to_card('5C')))
        HandTotals(total=25, is_soft=False)
    """
    total = 0
    high_aces = 0
    for card in cards:
        total += RANK_VALUES[card.rank]
        if card.rank == RANK_ACE:
            high_aces += 1

    while total > 21 and high_aces > 0:
        total -= 10
        high_aces -= 1

    return HandTotals(total, high_aces > 0 and total <= 21)


def calculate_total(cards: tuple[Card, ...]) -> int:
    """Return the best total for a hand (> 21 when unavoidably bust)."""
    return hand_totals(cards).total


def is_soft(cards: tuple[Card, ...]) -> bool:
    """Return True if the hand has an ace still counted as 11."""
    return hand_totals(cards).is_soft


def is_bust(total: int) -> bool:
    """Return True if a total exceeds 21 (bust).

    Examples:
        >>> is_bust(21)
        False
        >>> is_bust(22)
        True
    """
    return total > 21


def is_pair(cards: tuple[Card, ...]) -> bool:
    """Return True for a two-card hand whose ten-bucket ranks match.

    Hands of any other size are never pairs; pair evaluation is only
    meaningful before splitting.

    Examples:
        >>> is_pair((str_to_card('8S'), str_to_card('8H')))
        True
        >>> is_pair((str_to_card('10S'), str_to_card('KH')))
        True
        >>> is_pair((str_to_card('8S'), str_to_card('8H'), str_to_card('8D')))
        False
    """
    if len(cards) != 2:
        return False
    return ten_bucket(cards[0].rank) == ten_bucket(cards[1].rank)


def pair_rank(cards: tuple[Card, ...]) -> str:
    """Return the normalised rank token ('A', '2'..'9', 'T') of a pair.

    Raises:
        ValueError: If the hand is not a pair.
    """
    if not is_pair(cards):
        raise ValueError("Hand is not a pair.")
    return ten_bucket(cards[0].rank)


def upcard_value(card: Card) -> str:
    """Reduce a dealer card to its table-lookup token ('2'..'9', 'T', 'A').

    Examples:
        >>> upcard_value(str_to_card('JD'))
        'T'
        >>> upcard_value(str_to_card('AS'))
        'A'
    """
    return ten_bucket(card.rank)


def classify_hand(cards: tuple[Card, ...]) -> str:
    """Classify a hand the way the advisor reads it: pair, then soft, then hard."""
    if is_pair(cards):
        return HAND_PAIR
    return HAND_SOFT if is_soft(cards) else HAND_HARD
