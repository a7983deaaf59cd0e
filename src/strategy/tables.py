"""
Basic-strategy decision tables: pairs, soft totals, hard totals.

Each table is data: per row, the set of dealer upcards for which a decision
applies, split by the rule axis that changes it (DAS, S17/H17). The lookup
functions only read these tables, so each rule variant can be audited and
tested on its own.

Lookups return a RawDecision. Two codes are intermediate markers that the
advisor resolves before anything reaches the player:
    SURRENDER_OR_HIT  surrender if allowed, otherwise hit
    DOUBLE_10         a pair of fives, played as hard 10

Upcard tokens are '2'..'9', 'T', 'A' (see src.engine.hand.UPCARDS).
"""

from __future__ import annotations

from enum import Enum, auto
from typing import NamedTuple

from src.engine.hand import UPCARDS
from src.engine.rules import DealerRule


class RawDecision(Enum):
    HIT = auto()
    STAND = auto()
    DOUBLE = auto()
    SPLIT = auto()
    SURRENDER_OR_HIT = auto()
    DOUBLE_10 = auto()


# ─── Upcard sets ──────────────────────────────────────────────────────────────

def _ups(*tokens: str) -> frozenset[str]:
    return frozenset(tokens)


_NONE: frozenset[str] = frozenset()
_ALL: frozenset[str] = frozenset(UPCARDS)
_TWO_TO_SIX: frozenset[str] = _ups('2', '3', '4', '5', '6')
_TWO_TO_SEVEN: frozenset[str] = _ups('2', '3', '4', '5', '6', '7')
_THREE_TO_SIX: frozenset[str] = _ups('3', '4', '5', '6')
_FOUR_TO_SIX: frozenset[str] = _ups('4', '5', '6')


# ─── Pair table ───────────────────────────────────────────────────────────────

class PairRow(NamedTuple):
    split_das: frozenset[str]      # split vs these when DAS is allowed
    split_no_das: frozenset[str]   # split vs these when DAS is not allowed
    otherwise: RawDecision


PAIR_TABLE: dict[str, PairRow] = {
    'A': PairRow(_ALL, _ALL, RawDecision.SPLIT),
    '8': PairRow(_ALL, _ALL, RawDecision.SPLIT),
    'T': PairRow(_NONE, _NONE, RawDecision.STAND),
    '9': PairRow(_ups('2', '3', '4', '5', '6', '8', '9'), _ups('2', '3', '4', '5', '6', '8', '9'),
                 RawDecision.STAND),
    '7': PairRow(_TWO_TO_SEVEN, _TWO_TO_SEVEN, RawDecision.HIT),
    '6': PairRow(_TWO_TO_SIX, _TWO_TO_SIX, RawDecision.HIT),
    '5': PairRow(_NONE, _NONE, RawDecision.DOUBLE_10),
    '4': PairRow(_ups('5', '6'), _NONE, RawDecision.HIT),
    '3': PairRow(_TWO_TO_SEVEN, _ups('4', '5', '6', '7'), RawDecision.HIT),
    '2': PairRow(_TWO_TO_SEVEN, _ups('4', '5', '6', '7'), RawDecision.HIT),
}


# ─── Soft table ───────────────────────────────────────────────────────────────
# Doubling widens under H17: the dealer has to draw to soft 17, so the
# player can double more aggressively.

class SoftRow(NamedTuple):
    double_s17: frozenset[str]
    double_h17: frozenset[str]
    stand_s17: frozenset[str]
    stand_h17: frozenset[str]
    otherwise: RawDecision


_SOFT_13_14 = SoftRow(_ups('5', '6'), _FOUR_TO_SIX, _NONE, _NONE, RawDecision.HIT)
_SOFT_15_16 = SoftRow(_FOUR_TO_SIX, _THREE_TO_SIX, _NONE, _NONE, RawDecision.HIT)
_SOFT_20_21 = SoftRow(_NONE, _NONE, _ALL, _ALL, RawDecision.STAND)

SOFT_TABLE: dict[int, SoftRow] = {
    13: _SOFT_13_14,
    14: _SOFT_13_14,
    15: _SOFT_15_16,
    16: _SOFT_15_16,
    17: SoftRow(_THREE_TO_SIX, _TWO_TO_SIX, _NONE, _NONE, RawDecision.HIT),
    18: SoftRow(_THREE_TO_SIX, _TWO_TO_SIX, _ups('2', '7', '8'), _ups('7', '8'), RawDecision.HIT),
    19: SoftRow(_NONE, _ups('6'), _ALL, _ALL, RawDecision.STAND),
    20: _SOFT_20_21,
    21: _SOFT_20_21,
}


# ─── Hard table ───────────────────────────────────────────────────────────────

class HardRow(NamedTuple):
    double_s17: frozenset[str]
    double_h17: frozenset[str]
    stand: frozenset[str]
    otherwise: RawDecision


# Late surrender, checked before every other hard rule.
SURRENDER_TABLE: dict[int, frozenset[str]] = {
    16: _ups('9', 'T', 'A'),
    15: _ups('T'),
}

HARD_ALWAYS_HIT_MAX: int = 8
HARD_ALWAYS_STAND_MIN: int = 17

_HARD_STIFF = HardRow(_NONE, _NONE, _TWO_TO_SIX, RawDecision.HIT)

HARD_TABLE: dict[int, HardRow] = {
    9: HardRow(_THREE_TO_SIX, _THREE_TO_SIX, _NONE, RawDecision.HIT),
    10: HardRow(_ups('2', '3', '4', '5', '6', '7', '8', '9'),
                _ups('2', '3', '4', '5', '6', '7', '8', '9'), _NONE, RawDecision.HIT),
    11: HardRow(_ALL - {'A'}, _ALL, _NONE, RawDecision.HIT),
    12: HardRow(_NONE, _NONE, _FOUR_TO_SIX, RawDecision.HIT),
    13: _HARD_STIFF,
    14: _HARD_STIFF,
    15: _HARD_STIFF,
    16: _HARD_STIFF,
}


# ─── Lookups ──────────────────────────────────────────────────────────────────

def _check_upcard(upcard: str) -> None:
    if upcard not in _ALL:
        raise ValueError(f"Unknown upcard token {upcard!r}; expected one of {UPCARDS}.")


def pair_decision(pair_rank: str, upcard: str, double_after_split: bool) -> RawDecision:
    """Look up the pair table.

    Args:
        pair_rank:          Normalised pair rank ('A', '2'..'9', 'T').
        upcard:             Dealer upcard token.
        double_after_split: Whether DAS is allowed.

    Examples:
        >>> pair_decision('8', 'A', False)
        <RawDecision.SPLIT: 4>
        >>> pair_decision('4', '5', False)
        <RawDecision.HIT: 1>
        >>> pair_decision('5', '6', True)
        <RawDecision.DOUBLE_10: 6>
    """
    _check_upcard(upcard)
    try:
        row = PAIR_TABLE[pair_rank]
    except KeyError:
        raise ValueError(f"Unknown pair rank {pair_rank!r}.") from None
    split_vs = row.split_das if double_after_split else row.split_no_das
    if upcard in split_vs:
        return RawDecision.SPLIT
    return row.otherwise


def soft_decision(total: int, upcard: str, dealer_rule: DealerRule) -> RawDecision:
    """Look up the soft table for a soft total (13–21). Other totals hit.

    Examples:
        >>> soft_decision(18, '2', DealerRule.S17)
        <RawDecision.STAND: 2>
        >>> soft_decision(18, '2', DealerRule.H17)
        <RawDecision.DOUBLE: 3>
    """
    _check_upcard(upcard)
    row = SOFT_TABLE.get(total)
    if row is None:
        return RawDecision.HIT

    h17 = dealer_rule is DealerRule.H17
    if upcard in (row.double_h17 if h17 else row.double_s17):
        return RawDecision.DOUBLE
    if upcard in (row.stand_h17 if h17 else row.stand_s17):
        return RawDecision.STAND
    return row.otherwise


def hard_decision(
    total: int,
    upcard: str,
    dealer_rule: DealerRule,
    late_surrender: bool,
) -> RawDecision:
    """Look up the hard table.

    Surrender is checked first when allowed; it is advisory, so the result
    is SURRENDER_OR_HIT and the advisor supplies the fallback.

    Examples:
        >>> hard_decision(16, 'T', DealerRule.S17, True)
        <RawDecision.SURRENDER_OR_HIT: 5>
        >>> hard_decision(11, 'A', DealerRule.S17, False)
        <RawDecision.HIT: 1>
        >>> hard_decision(11, 'A', DealerRule.H17, False)
        <RawDecision.DOUBLE: 3>
    """
    _check_upcard(upcard)
    if late_surrender and upcard in SURRENDER_TABLE.get(total, _NONE):
        return RawDecision.SURRENDER_OR_HIT

    if total <= HARD_ALWAYS_HIT_MAX:
        return RawDecision.HIT
    if total >= HARD_ALWAYS_STAND_MIN:
        return RawDecision.STAND

    row = HARD_TABLE[total]
    h17 = dealer_rule is DealerRule.H17
    if upcard in (row.double_h17 if h17 else row.double_s17):
        return RawDecision.DOUBLE
    if upcard in row.stand:
        return RawDecision.STAND
    return row.otherwise
