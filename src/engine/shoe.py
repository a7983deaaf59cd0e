"""
Multi-deck shoe that supplies Card values to the drills.

The shoe is a shuffled list of Cards (deck_count × 52). Drawing pops from
the end; a spent shoe is rebuilt and reshuffled on the next draw, so the
drills never run dry. Shuffling uses a numpy Generator so tests can seed it.
"""

from __future__ import annotations

import logging

import numpy as np

from .cards import RANK_NAMES, SUIT_NAMES, Card
from .rules import MAX_DECKS, MIN_DECKS

logger = logging.getLogger(__name__)

CARDS_PER_DECK: int = 52


def create_shoe(deck_count: int, rng: np.random.Generator | None = None) -> list[Card]:
    """Create a freshly shuffled shoe of ``deck_count`` decks.

    Raises:
        ValueError: If deck_count is outside 1–8.

    Examples:
        >>> len(create_shoe(2))
        104
    """
    if not MIN_DECKS <= deck_count <= MAX_DECKS:
        raise ValueError(f"deck_count must be between {MIN_DECKS} and {MAX_DECKS}, got {deck_count}.")
    rng = rng if rng is not None else np.random.default_rng()

    cards = [
        Card(rank, suit)
        for _ in range(deck_count)
        for rank in RANK_NAMES
        for suit in SUIT_NAMES
    ]
    order = rng.permutation(len(cards))
    return [cards[i] for i in order]


class Shoe:
    """A drawable shoe with a discard pile.

    Args:
        deck_count: Number of 52-card decks (1–8).
        seed:       Optional seed for reproducible shuffles.
    """

    def __init__(self, deck_count: int = 6, seed: int | None = None) -> None:
        self.deck_count = deck_count
        self._rng = np.random.default_rng(seed)
        self.cards: list[Card] = create_shoe(deck_count, self._rng)
        self.discard: list[Card] = []

    def __len__(self) -> int:
        return len(self.cards)

    @property
    def total_cards(self) -> int:
        return self.deck_count * CARDS_PER_DECK

    def reshuffle(self) -> None:
        """Rebuild a full shoe and clear the discard pile."""
        self.cards = create_shoe(self.deck_count, self._rng)
        self.discard = []
        logger.info("Reshuffled a fresh %d-deck shoe", self.deck_count)

    def draw(self) -> Card:
        """Draw one card, reshuffling first if the shoe is empty."""
        if not self.cards:
            self.reshuffle()
        card = self.cards.pop()
        self.discard.append(card)
        return card

    def draw_many(self, n: int) -> tuple[Card, ...]:
        """Draw ``n`` cards in order."""
        if n < 0:
            raise ValueError(f"Cannot draw a negative number of cards ({n}).")
        return tuple(self.draw() for _ in range(n))
