"""Tests for src/engine/hand.py — totals, softness, pairs and upcard tokens."""

from __future__ import annotations

import itertools

import pytest

from src.engine.cards import RANK_NAMES, Card
from src.engine.hand import (
    HAND_HARD,
    HAND_PAIR,
    HAND_SOFT,
    UPCARDS,
    HandTotals,
    calculate_total,
    classify_hand,
    hand_totals,
    is_bust,
    is_pair,
    is_soft,
    pair_rank,
    upcard_value,
)
from tests.conftest import card, hand


# ─── hand_totals ──────────────────────────────────────────────────────────────

class TestHandTotals:
    def test_ace_six_is_soft_17(self):
        assert hand_totals(hand('AS', '6H')) == HandTotals(17, True)

    def test_ace_six_five_demotes_to_hard_12(self):
        assert hand_totals(hand('AS', '6H', '5D')) == HandTotals(12, False)

    def test_ace_ace_is_soft_12(self):
        assert hand_totals(hand('AC', 'AS')) == HandTotals(12, True)

    def test_ace_ten_is_soft_21(self):
        assert hand_totals(hand('AC', 'KH')) == HandTotals(21, True)

    def test_ace_nine(self):
        assert hand_totals(hand('AD', '9C')) == HandTotals(20, True)

    def test_hard_no_ace(self):
        assert hand_totals(hand('10C', '6H')) == HandTotals(16, False)

    def test_face_cards(self):
        assert hand_totals(hand('KH', 'QD')) == HandTotals(20, False)

    def test_three_aces_and_eight(self):
        # 11 + 1 + 1 + 8 = 21, one ace still high
        assert hand_totals(hand('AC', 'AD', 'AH', '8S')) == HandTotals(21, True)

    def test_bust_hand_reports_bust_total(self):
        result = hand_totals(hand('KH', 'QD', '5C'))
        assert result.total == 25
        assert not result.is_soft
        assert is_bust(result.total)

    def test_all_aces_low_bust(self):
        result = hand_totals(hand('AC', 'KD', 'QH', '5S'))
        assert result.total == 26
        assert not result.is_soft

    def test_order_independent_for_all_two_card_hands(self):
        for r1, r2 in itertools.product(RANK_NAMES, repeat=2):
            a, b = Card(r1, 'S'), Card(r2, 'H')
            assert hand_totals((a, b)) == hand_totals((b, a))

    def test_two_card_totals_in_range(self):
        for r1, r2 in itertools.product(RANK_NAMES, repeat=2):
            total = calculate_total((Card(r1, 'S'), Card(r2, 'H')))
            assert 4 <= total <= 21

    def test_wrappers_agree(self):
        cards = hand('AS', '7D')
        assert calculate_total(cards) == 18
        assert is_soft(cards)


# ─── is_pair / pair_rank ──────────────────────────────────────────────────────

class TestIsPair:
    def test_same_rank(self):
        assert is_pair(hand('8S', '8H'))

    def test_ten_and_king_pair(self):
        assert is_pair(hand('10S', 'KH'))

    def test_jack_queen_pair(self):
        assert is_pair(hand('JC', 'QD'))

    def test_different_ranks(self):
        assert not is_pair(hand('8S', '9H'))

    def test_ace_and_ten_not_pair(self):
        assert not is_pair(hand('AS', '10H'))

    def test_three_cards_never_pair(self):
        assert not is_pair(hand('8S', '8H', '8D'))

    def test_one_card_never_pair(self):
        assert not is_pair(hand('8S'))

    def test_empty_hand(self):
        assert not is_pair(())

    def test_pair_rank_normalises_tens(self):
        assert pair_rank(hand('KS', '10H')) == 'T'
        assert pair_rank(hand('AS', 'AH')) == 'A'

    def test_pair_rank_rejects_non_pair(self):
        with pytest.raises(ValueError):
            pair_rank(hand('7S', '8H'))


# ─── upcard_value ─────────────────────────────────────────────────────────────

class TestUpcardValue:
    @pytest.mark.parametrize('s', ['10D', 'JD', 'QD', 'KD'])
    def test_tens(self, s):
        assert upcard_value(card(s)) == 'T'

    def test_ace(self):
        assert upcard_value(card('AH')) == 'A'

    @pytest.mark.parametrize('rank', ['2', '3', '4', '5', '6', '7', '8', '9'])
    def test_pips(self, rank):
        assert upcard_value(Card(rank, 'C')) == rank

    def test_every_rank_maps_to_a_column(self):
        assert {upcard_value(Card(r, 'S')) for r in RANK_NAMES} == set(UPCARDS)


# ─── classify_hand ────────────────────────────────────────────────────────────

class TestClassifyHand:
    def test_pair_first(self):
        assert classify_hand(hand('AS', 'AH')) == HAND_PAIR

    def test_soft(self):
        assert classify_hand(hand('AS', '7H')) == HAND_SOFT

    def test_hard(self):
        assert classify_hand(hand('10S', '7H')) == HAND_HARD

    def test_exactly_one_class_per_two_card_hand(self):
        for r1, r2 in itertools.product(RANK_NAMES, repeat=2):
            cards = (Card(r1, 'S'), Card(r2, 'H'))
            assert classify_hand(cards) in (HAND_PAIR, HAND_SOFT, HAND_HARD)
