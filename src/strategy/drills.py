"""
Drill bookkeeping for the strategy drill and the flash counting test.

All state is explicit and immutable: each call takes the current value and
returns the next one. The caller (the dashboard) owns creation, storage and
reset.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from src.engine.cards import Card
from src.engine.counting import running_count_of
from src.engine.shoe import Shoe
from src.strategy.advisor import Action, Advice

FLASH_MIN_CARDS: int = 4
FLASH_MAX_CARDS: int = 20


# ─── Strategy drill ───────────────────────────────────────────────────────────

@dataclass(frozen=True)
class DrillStats:
    hands: int = 0
    correct: int = 0
    streak: int = 0
    best_streak: int = 0

    @property
    def accuracy(self) -> float:
        return self.correct / self.hands if self.hands else 0.0

    @property
    def accuracy_pct(self) -> int:
        return round(self.accuracy * 100)


@dataclass(frozen=True)
class DrillResult:
    correct: bool
    chosen: Action
    expected: Action
    reason: str
    message: str


def _as_action(chosen: Action | str) -> Action:
    if isinstance(chosen, Action):
        return chosen
    try:
        return Action(chosen.strip().upper())
    except ValueError:
        raise ValueError(f"Unknown action {chosen!r}.") from None


def grade_answer(
    stats: DrillStats,
    chosen: Action | str,
    advice: Advice,
) -> tuple[DrillStats, DrillResult]:
    """Grade one drill answer against the advised action.

    Returns:
        (updated stats, result). A correct answer extends the streak; a
        wrong one resets it.
    """
    action = _as_action(chosen)
    expected = advice.action

    if action is expected:
        streak = stats.streak + 1
        new_stats = replace(
            stats,
            hands=stats.hands + 1,
            correct=stats.correct + 1,
            streak=streak,
            best_streak=max(stats.best_streak, streak),
        )
        message = f"Correct: {expected.value}"
    else:
        new_stats = replace(stats, hands=stats.hands + 1, streak=0)
        message = f"Incorrect. You chose {action.value}. Correct: {expected.value}"

    return new_stats, DrillResult(action is expected, action, expected, advice.reason, message)


# ─── Flash test ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class FlashTest:
    cards: tuple[Card, ...]

    @property
    def answer(self) -> int:
        return running_count_of(self.cards)


@dataclass(frozen=True)
class FlashResult:
    correct: bool
    answer: int
    guess: int
    off_by: int
    best: int
    message: str


def clamp_flash_cards(n_cards: int) -> int:
    return max(FLASH_MIN_CARDS, min(FLASH_MAX_CARDS, n_cards))


def new_flash_test(shoe: Shoe, n_cards: int = 8) -> FlashTest:
    """Draw a short burst of cards to count (card count clamped to 4–20)."""
    return FlashTest(shoe.draw_many(clamp_flash_cards(n_cards)))


def check_flash(test: FlashTest, guess: int, best: int = 0) -> FlashResult:
    """Check a flash-test guess.

    ``best`` is the largest burst counted correctly so far; it grows to the
    size of this burst on a correct answer.
    """
    answer = test.answer
    if guess == answer:
        return FlashResult(True, answer, guess, 0, max(best, len(test.cards)), "Correct!")
    off_by = guess - answer
    return FlashResult(
        False, answer, guess, off_by, best, f"Off by {off_by:+d}. True count was {answer}."
    )
