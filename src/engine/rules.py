"""
Table rule configuration.

A RuleConfig is an immutable snapshot of the house rules that select a
basic-strategy variant:
    deck_count          1–8 decks in the shoe
    dealer_rule         S17 (dealer stands on soft 17) or H17 (hits)
    double_after_split  DAS — doubling allowed on split hands
    late_surrender      surrender available on the first two cards
    dealer_peeks        dealer checks for blackjack (informational only)

The configuration is passed into every decision; nothing stores it.
Out-of-range values are rejected here, at the boundary, rather than clamped
deep inside the engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

MIN_DECKS: int = 1
MAX_DECKS: int = 8


class RuleConfigError(ValueError):
    """Raised when a rule configuration value is out of range."""


class DealerRule(Enum):
    S17 = 'S17'
    H17 = 'H17'


@dataclass(frozen=True)
class RuleConfig:
    """Immutable rule set consumed per decision.

    Defaults: six decks, S17, DAS and late surrender allowed, dealer peeks.
    """
    deck_count: int = 6
    dealer_rule: DealerRule = DealerRule.S17
    double_after_split: bool = True
    late_surrender: bool = True
    dealer_peeks: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.dealer_rule, str):
            try:
                object.__setattr__(self, 'dealer_rule', DealerRule(self.dealer_rule.upper()))
            except ValueError:
                raise RuleConfigError(
                    f"dealer_rule must be 'S17' or 'H17', got {self.dealer_rule!r}."
                ) from None
        elif not isinstance(self.dealer_rule, DealerRule):
            raise RuleConfigError(f"dealer_rule must be a DealerRule, got {self.dealer_rule!r}.")

        if isinstance(self.deck_count, bool) or not isinstance(self.deck_count, int):
            raise RuleConfigError(f"deck_count must be an integer, got {self.deck_count!r}.")
        if not MIN_DECKS <= self.deck_count <= MAX_DECKS:
            raise RuleConfigError(
                f"deck_count must be between {MIN_DECKS} and {MAX_DECKS}, got {self.deck_count}."
            )

        for name in ('double_after_split', 'late_surrender', 'dealer_peeks'):
            if not isinstance(getattr(self, name), bool):
                raise RuleConfigError(f"{name} must be a bool, got {getattr(self, name)!r}.")

    @property
    def hits_soft_17(self) -> bool:
        return self.dealer_rule is DealerRule.H17

    def label(self) -> str:
        """Short description for chart titles.

        Examples:
            >>> RuleConfig().label()
            '6D · S17 · DAS · LS'
            >>> RuleConfig(deck_count=2, dealer_rule='H17', double_after_split=False,
            ...            late_surrender=False).label()
            '2D · H17 · no DAS · no LS'
        """
        parts = [
            f"{self.deck_count}D",
            self.dealer_rule.value,
            "DAS" if self.double_after_split else "no DAS",
            "LS" if self.late_surrender else "no LS",
        ]
        return " · ".join(parts)
