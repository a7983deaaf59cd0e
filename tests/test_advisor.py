"""Tests for src/strategy/advisor.py — classification, normalisation and advice."""

from __future__ import annotations

import itertools

import pytest

from src.engine.cards import RANK_NAMES, Card
from src.engine.rules import RuleConfig
from src.strategy.advisor import (
    SURRENDER_FALLBACK_NOTE,
    Action,
    Advice,
    advise,
    basic_strategy_advice,
    normalize_decision,
)
from src.strategy.tables import RawDecision
from tests.conftest import card, hand

ALL_RULES: list[RuleConfig] = [
    RuleConfig(dealer_rule=rule, double_after_split=das, late_surrender=ls)
    for rule, das, ls in itertools.product(['S17', 'H17'], [True, False], [True, False])
]


# ─── normalize_decision ───────────────────────────────────────────────────────

class TestNormalizeDecision:
    @pytest.mark.parametrize('raw,action', [
        (RawDecision.HIT, Action.HIT),
        (RawDecision.STAND, Action.STAND),
        (RawDecision.DOUBLE, Action.DOUBLE),
        (RawDecision.SPLIT, Action.SPLIT),
        (RawDecision.DOUBLE_10, Action.DOUBLE),
        (RawDecision.SURRENDER_OR_HIT, Action.SURRENDER),
    ])
    def test_every_code_maps_to_a_final_action(self, raw, action):
        assert normalize_decision(raw, 'x').action is action

    def test_surrender_reason_suffix(self):
        advice = normalize_decision(RawDecision.SURRENDER_OR_HIT, 'Hard 16 vs T.')
        assert advice.reason == 'Hard 16 vs T. (or Hit if surrender not available)'

    def test_plain_reason_unchanged(self):
        assert normalize_decision(RawDecision.HIT, 'Hard 12 vs 2.').reason == 'Hard 12 vs 2.'


# ─── Exhaustive guarantees ────────────────────────────────────────────────────

class TestAdviceGuarantees:
    @pytest.mark.parametrize('rules', ALL_RULES, ids=lambda r: r.label())
    def test_every_hand_gets_one_final_action(self, rules):
        for r1, r2, up in itertools.product(RANK_NAMES, RANK_NAMES, RANK_NAMES):
            advice = basic_strategy_advice((Card(r1, 'S'), Card(r2, 'H')), Card(up, 'D'), rules)
            assert isinstance(advice, Advice)
            assert isinstance(advice.action, Action)
            assert advice.reason

    @pytest.mark.parametrize('rules', ALL_RULES, ids=lambda r: r.label())
    def test_no_surrender_when_disabled(self, rules):
        if rules.late_surrender:
            pytest.skip("surrender enabled")
        for r1, r2, up in itertools.product(RANK_NAMES, RANK_NAMES, RANK_NAMES):
            advice = basic_strategy_advice((Card(r1, 'S'), Card(r2, 'H')), Card(up, 'D'), rules)
            assert advice.action is not Action.SURRENDER

    def test_card_order_does_not_matter(self, s17):
        for r1, r2, up in itertools.product(RANK_NAMES, RANK_NAMES, ['2', '6', '10', 'A']):
            a, b, d = Card(r1, 'S'), Card(r2, 'H'), Card(up, 'C')
            assert basic_strategy_advice((a, b), d, s17).action is basic_strategy_advice((b, a), d, s17).action


# ─── Known scenarios ──────────────────────────────────────────────────────────

class TestPairs:
    def test_eights_split(self, s17):
        advice = basic_strategy_advice(hand('8S', '8H'), card('10D'), s17)
        assert advice == Advice(Action.SPLIT, 'Pair of 8s vs T: split.')

    def test_aces_split(self, s17):
        assert basic_strategy_advice(hand('AS', 'AH'), card('AD'), s17).action is Action.SPLIT

    @pytest.mark.parametrize('up', RANK_NAMES)
    def test_ten_king_always_stands(self, s17, up):
        advice = basic_strategy_advice(hand('10S', 'KH'), Card(up, 'C'), s17)
        assert advice.action is Action.STAND

    def test_pair_stand_reason(self, s17):
        advice = basic_strategy_advice(hand('9S', '9H'), card('7D'), s17)
        assert advice == Advice(Action.STAND, 'Pair strategy for 99 vs 7.')

    def test_fives_double_vs_six(self, s17):
        advice = basic_strategy_advice(hand('5S', '5H'), card('6D'), s17)
        assert advice == Advice(Action.DOUBLE, 'Hard 10 vs 6.')

    def test_fives_hit_vs_ten(self, s17):
        assert basic_strategy_advice(hand('5S', '5H'), card('KD'), s17).action is Action.HIT

    def test_fours_split_only_with_das(self, s17):
        no_das = RuleConfig(double_after_split=False)
        assert basic_strategy_advice(hand('4S', '4H'), card('5D'), s17).action is Action.SPLIT
        assert basic_strategy_advice(hand('4S', '4H'), card('5D'), no_das).action is Action.HIT

    def test_sevens_hit_vs_eight(self, s17):
        advice = basic_strategy_advice(hand('7S', '7H'), card('8D'), s17)
        assert advice == Advice(Action.HIT, 'Pair strategy for 77 vs 8.')


class TestSoftHands:
    def test_soft_18_vs_9_hits(self, s17):
        assert basic_strategy_advice(hand('AS', '7H'), card('9D'), s17) == Advice(Action.HIT, 'Soft 18 vs 9.')

    def test_soft_18_vs_2(self, s17, h17):
        assert basic_strategy_advice(hand('AS', '7H'), card('2D'), s17).action is Action.STAND
        assert basic_strategy_advice(hand('AS', '7H'), card('2D'), h17).action is Action.DOUBLE

    def test_soft_19_vs_6(self, s17, h17):
        assert basic_strategy_advice(hand('8S', 'AH'), card('6D'), s17).action is Action.STAND
        assert basic_strategy_advice(hand('8S', 'AH'), card('6D'), h17).action is Action.DOUBLE

    def test_soft_13_vs_5_doubles(self, s17):
        assert basic_strategy_advice(hand('AS', '2H'), card('5D'), s17) == Advice(Action.DOUBLE, 'Soft 13 vs 5.')

    def test_blackjack_stands(self, s17):
        assert basic_strategy_advice(hand('AS', 'KH'), card('6D'), s17) == Advice(Action.STAND, 'Soft 21 vs 6.')


class TestHardHands:
    def test_hard_11_vs_ace_s17_hits(self, s17):
        assert basic_strategy_advice(hand('5S', '6H'), card('AD'), s17) == Advice(Action.HIT, 'Hard 11 vs A.')

    def test_hard_11_vs_ace_h17_doubles(self, h17):
        assert basic_strategy_advice(hand('5S', '6H'), card('AD'), h17).action is Action.DOUBLE

    def test_hard_16_vs_ten_surrenders(self, s17):
        advice = basic_strategy_advice(hand('10S', '6H'), card('KD'), s17)
        assert advice.action is Action.SURRENDER
        assert advice.reason == 'Hard 16 vs T.' + SURRENDER_FALLBACK_NOTE
        assert 'Hit' in advice.reason

    def test_hard_16_vs_ten_hits_without_surrender(self, no_surrender):
        advice = basic_strategy_advice(hand('10S', '6H'), card('KD'), no_surrender)
        assert advice == Advice(Action.HIT, 'Hard 16 vs T.')

    def test_hard_15_vs_ace_no_surrender(self, s17):
        assert basic_strategy_advice(hand('9S', '6H'), card('AD'), s17).action is Action.HIT

    def test_hard_12_vs_4_stands(self, s17):
        assert basic_strategy_advice(hand('10S', '2H'), card('4D'), s17).action is Action.STAND

    def test_hard_9_vs_2_hits(self, s17):
        assert basic_strategy_advice(hand('4S', '5H'), card('2D'), s17).action is Action.HIT

    def test_hard_19_stands_vs_ace(self, h17):
        assert basic_strategy_advice(hand('10S', '9H'), card('AD'), h17) == Advice(Action.STAND, 'Hard 19 vs A.')

    def test_three_card_hand_uses_hard_total(self, s17):
        # A-6-5 demotes to hard 12; never read as a pair
        assert basic_strategy_advice(hand('AS', '6H', '5D'), card('4C'), s17) == Advice(
            Action.STAND, 'Hard 12 vs 4.'
        )


class TestAdvise:
    def test_accepts_strings(self):
        assert advise(('5C', '6D'), 'AS').action is Action.HIT

    def test_accepts_rules(self, h17):
        assert advise(('5C', '6D'), 'AS', h17).action is Action.DOUBLE

    def test_accepts_cards(self, s17):
        assert advise(hand('8S', '8H'), card('6D'), s17).action is Action.SPLIT

    def test_str(self):
        assert str(advise(('AS', '7H'), '9D')) == 'HIT — Soft 18 vs 9.'
