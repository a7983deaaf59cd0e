"""
Card constants, the Card value type, and human-readable I/O helpers.

A card is an immutable (rank, suit) pair:
    rank in RANK_NAMES  ->  '2'..'9', '10', 'J', 'Q', 'K', 'A'
    suit in SUIT_NAMES  ->  'C', 'D', 'H', 'S'

Ranks and suits are a closed set validated at construction, so no unknown
value can ever reach the strategy tables or the counting engine.
String representations are used exclusively at I/O boundaries.
"""

from __future__ import annotations

from dataclasses import dataclass

RANK_NAMES: list[str] = ['2', '3', '4', '5', '6', '7', '8', '9', '10', 'J', 'Q', 'K', 'A']
SUIT_NAMES: list[str] = ['C', 'D', 'H', 'S']

# Point value per rank. Ace carries its high value (11); hand evaluation
# demotes it to 1 when needed.
RANK_VALUES: dict[str, int] = {
    '2': 2, '3': 3, '4': 4, '5': 5, '6': 6, '7': 7, '8': 8, '9': 9,
    '10': 10, 'J': 10, 'Q': 10, 'K': 10, 'A': 11,
}

RANK_ACE: str = 'A'
TEN_TOKEN: str = 'T'

# Ranks that count as 10 points (non-ace)
TEN_VALUE_RANKS: frozenset[str] = frozenset({'10', 'J', 'Q', 'K'})

# Alternative spellings accepted by str_to_card
_SUIT_SYMBOLS: dict[str, str] = {'♣': 'C', '♦': 'D', '♥': 'H', '♠': 'S'}
_RANK_ALIASES: dict[str, str] = {'T': '10'}


class InvalidCardError(ValueError):
    """Raised when a card is built from an unknown rank or suit."""


@dataclass(frozen=True)
class Card:
    """A single playing card. Frozen, hashable, validated on construction."""
    rank: str
    suit: str

    def __post_init__(self) -> None:
        if self.rank not in RANK_VALUES:
            raise InvalidCardError(f"Unknown rank {self.rank!r}; expected one of {RANK_NAMES}.")
        if self.suit not in SUIT_NAMES:
            raise InvalidCardError(f"Unknown suit {self.suit!r}; expected one of {SUIT_NAMES}.")

    def __str__(self) -> str:
        return card_to_str(self)


def card_value(card: Card) -> int:
    """Return the point value of a card, with Ace at its high value.

    Examples:
        >>> card_value(Card('7', 'H'))
        7
        >>> card_value(Card('Q', 'S'))
        10
        >>> card_value(Card('A', 'C'))
        11
    """
    return RANK_VALUES[card.rank]


def ten_bucket(rank: str) -> str:
    """Collapse the ten-value ranks into the single 'T' token.

    Examples:
        >>> ten_bucket('K')
        'T'
        >>> ten_bucket('9')
        '9'
    """
    return TEN_TOKEN if rank in TEN_VALUE_RANKS else rank


def card_to_str(card: Card) -> str:
    """Convert a card to its human-readable string representation.

    Examples:
        >>> card_to_str(Card('2', 'C'))
        '2C'
        >>> card_to_str(Card('10', 'H'))
        '10H'
    """
    return card.rank + card.suit


def str_to_card(s: str) -> Card:
    """Parse a human-readable card string into a Card.

    The format is <rank><suit> where suit is the last character.
    Rank can be '2'-'9', '10' (or 'T'), 'J', 'Q', 'K', or 'A'.
    Suit can be 'C', 'D', 'H', 'S' or the matching symbol.

    Raises:
        InvalidCardError: If the string does not name a card.

    Examples:
        >>> str_to_card('AS')
        Card(rank='A', suit='S')
        >>> str_to_card('10C')
        Card(rank='10', suit='C')
        >>> str_to_card('T♥')
        Card(rank='10', suit='H')
    """
    s = s.strip()
    if len(s) < 2:
        raise InvalidCardError(f"Cannot parse card from {s!r}.")
    suit_char = s[-1].upper()
    rank_str = s[:-1].upper()
    suit = _SUIT_SYMBOLS.get(suit_char, suit_char)
    rank = _RANK_ALIASES.get(rank_str, rank_str)
    return Card(rank, suit)


def hand_to_str(cards: tuple[Card, ...]) -> str:
    """Convert a hand to a human-readable string.

    Examples:
        >>> hand_to_str((Card('A', 'C'), Card('7', 'S')))
        'AC 7S'
    """
    return ' '.join(card_to_str(c) for c in cards)
