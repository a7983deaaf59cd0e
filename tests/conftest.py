"""
Shared pytest fixtures for the blackjack trainer tests.

Provides convenience wrappers around str_to_card for building known hands
and the rule configurations the tables branch on.
"""

from __future__ import annotations

import pytest

from src.engine.cards import Card, str_to_card
from src.engine.rules import RuleConfig


def hand(*card_strs: str) -> tuple[Card, ...]:
    """Build a hand tuple from human-readable card strings.

    Examples:
        >>> hand('AS', '7H')
        (Card(rank='A', suit='S'), Card(rank='7', suit='H'))
    """
    return tuple(str_to_card(s) for s in card_strs)


def card(card_str: str) -> Card:
    return str_to_card(card_str)


@pytest.fixture
def s17() -> RuleConfig:
    """Six decks, dealer stands on soft 17, DAS and late surrender allowed."""
    return RuleConfig()


@pytest.fixture
def h17() -> RuleConfig:
    return RuleConfig(dealer_rule='H17')


@pytest.fixture
def no_surrender() -> RuleConfig:
    return RuleConfig(late_surrender=False)


@pytest.fixture
def h():
    """Expose the hand() helper as a fixture for convenience."""
    return hand
