"""Basic-strategy reference chart for a given rule configuration.

The chart is a read-only projection of the decision tables:

    hard  — rows = hard totals 8–17        (hard table, surrender shown as R)
    soft  — rows = A,2 … A,9 (totals 13–20) (soft table)
    pairs — rows = AA, TT, 99 … 22          (pair table, DOUBLE_10 shown as D)

Every section has ten columns, one per dealer upcard 2–9, T, A. Cells hold
a single-letter code:

    H = Hit   S = Stand   D = Double   P = Split   R = Surrender (else Hit)

Public functions:

    generate_reference_chart(rules)   — build the chart (never cached)
    chart_to_dataframes(chart)        — one pandas DataFrame per section
    format_reference_chart(chart)     — plain-text rendering
    print_reference_chart(chart)      — print the text rendering
    chart_differences(a, b)           — cells that change between two charts
    print_chart_differences(a, b)     — print those changes
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import pandas as pd

from src.engine.hand import UPCARDS
from src.engine.rules import RuleConfig
from src.strategy.tables import RawDecision, hard_decision, pair_decision, soft_decision

logger = logging.getLogger(__name__)

# ─── Constants ────────────────────────────────────────────────────────────────

HARD_TOTALS: list[int] = list(range(8, 18))
SOFT_TOTALS: list[int] = list(range(13, 21))
PAIR_RANKS: list[str] = ['A', 'T', '9', '8', '7', '6', '5', '4', '3', '2']

SECTION_HARD: str = 'hard'
SECTION_SOFT: str = 'soft'
SECTION_PAIRS: str = 'pairs'

SECTION_TITLES: dict[str, str] = {
    SECTION_HARD: 'Hard Totals',
    SECTION_SOFT: 'Soft Totals (A,x)',
    SECTION_PAIRS: 'Pairs (P = Split)',
}

CHART_CODES: dict[RawDecision, str] = {
    RawDecision.HIT: 'H',
    RawDecision.STAND: 'S',
    RawDecision.DOUBLE: 'D',
    RawDecision.SPLIT: 'P',
    RawDecision.SURRENDER_OR_HIT: 'R',
    RawDecision.DOUBLE_10: 'D',
}

CODE_NAMES: dict[str, str] = {
    'H': 'Hit',
    'S': 'Stand',
    'D': 'Double',
    'P': 'Split',
    'R': 'Surrender',
}


# ─── Types ────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ChartSection:
    """One table of the chart. ``raw[r][c]`` is the table code behind ``codes[r][c]``."""
    name: str
    title: str
    row_labels: tuple[str, ...]
    col_labels: tuple[str, ...]
    raw: tuple[tuple[RawDecision, ...], ...]

    @property
    def codes(self) -> tuple[tuple[str, ...], ...]:
        return tuple(tuple(CHART_CODES[d] for d in row) for row in self.raw)

    def code_at(self, row_label: str, upcard: str) -> str:
        r = self.row_labels.index(row_label)
        c = self.col_labels.index(upcard)
        return CHART_CODES[self.raw[r][c]]


@dataclass(frozen=True)
class ReferenceChart:
    rules: RuleConfig
    hard: ChartSection
    soft: ChartSection
    pairs: ChartSection

    @property
    def sections(self) -> tuple[ChartSection, ChartSection, ChartSection]:
        return (self.hard, self.soft, self.pairs)


@dataclass(frozen=True)
class ChartDifference:
    section: str
    row_label: str
    upcard: str
    before: str
    after: str


# ─── Generation ───────────────────────────────────────────────────────────────

def soft_row_label(total: int) -> str:
    """'A,2' for soft 13 … 'A,9' for soft 20."""
    return f"A,{total - 11}"


def pair_row_label(rank: str) -> str:
    return f"{rank}{rank}"


def _section(name: str, row_labels: list[str], rows: list[tuple[RawDecision, ...]]) -> ChartSection:
    return ChartSection(
        name=name,
        title=SECTION_TITLES[name],
        row_labels=tuple(row_labels),
        col_labels=UPCARDS,
        raw=tuple(rows),
    )


def generate_reference_chart(rules: RuleConfig) -> ReferenceChart:
    """Build the full strategy chart for ``rules``.

    Hard and soft rows go straight to their tables (no advisor), so a
    surrender cell shows its primary recommendation. Pair rows use the pair
    table with DAS taken from ``rules``.

    Args:
        rules: Rule configuration to project.

    Returns:
        ReferenceChart with 10 hard rows, 8 soft rows and 10 pair rows,
        each with 10 upcard columns.
    """
    hard_rows = [
        tuple(hard_decision(t, up, rules.dealer_rule, rules.late_surrender) for up in UPCARDS)
        for t in HARD_TOTALS
    ]
    soft_rows = [
        tuple(soft_decision(t, up, rules.dealer_rule) for up in UPCARDS)
        for t in SOFT_TOTALS
    ]
    pair_rows = [
        tuple(pair_decision(rank, up, rules.double_after_split) for up in UPCARDS)
        for rank in PAIR_RANKS
    ]
    logger.debug("Generated reference chart for %s", rules.label())

    return ReferenceChart(
        rules=rules,
        hard=_section(SECTION_HARD, [str(t) for t in HARD_TOTALS], hard_rows),
        soft=_section(SECTION_SOFT, [soft_row_label(t) for t in SOFT_TOTALS], soft_rows),
        pairs=_section(SECTION_PAIRS, [pair_row_label(r) for r in PAIR_RANKS], pair_rows),
    )


# ─── Renderings ───────────────────────────────────────────────────────────────

def section_to_dataframe(section: ChartSection) -> pd.DataFrame:
    return pd.DataFrame(
        [list(row) for row in section.codes],
        index=pd.Index(section.row_labels, name=section.title),
        columns=list(section.col_labels),
    )


def chart_to_dataframes(chart: ReferenceChart) -> dict[str, pd.DataFrame]:
    """Return {'hard': df, 'soft': df, 'pairs': df} with letter codes as cells."""
    return {s.name: section_to_dataframe(s) for s in chart.sections}


def format_reference_chart(chart: ReferenceChart) -> str:
    """Render the chart as fixed-width text, one block per section."""
    lines: list[str] = [f"Basic Strategy  ({chart.rules.label()})"]
    for section in chart.sections:
        lines.append("")
        lines.append(section.title)
        lines.append(f"  {'':>4}  " + " ".join(f"{u:>2}" for u in section.col_labels))
        for label, row in zip(section.row_labels, section.codes):
            lines.append(f"  {label:>4}  " + " ".join(f"{code:>2}" for code in row))
    lines.append("")
    lines.append("  " + "  ".join(f"{k}={v}" for k, v in CODE_NAMES.items()))
    return "\n".join(lines)


def print_reference_chart(chart: ReferenceChart) -> None:
    print(format_reference_chart(chart))


# ─── Rule sensitivity ─────────────────────────────────────────────────────────

def chart_differences(before: ReferenceChart, after: ReferenceChart) -> list[ChartDifference]:
    """List every cell whose code differs between two charts.

    Useful for seeing what a single rule change (S17→H17, DAS, surrender)
    does to the strategy.
    """
    diffs: list[ChartDifference] = []
    for sec_a, sec_b in zip(before.sections, after.sections):
        for label, row_a, row_b in zip(sec_a.row_labels, sec_a.codes, sec_b.codes):
            for up, code_a, code_b in zip(sec_a.col_labels, row_a, row_b):
                if code_a != code_b:
                    diffs.append(ChartDifference(sec_a.name, label, up, code_a, code_b))
    return diffs


def print_chart_differences(before: ReferenceChart, after: ReferenceChart) -> None:
    """Print the cells that change from ``before`` to ``after``."""
    diffs = chart_differences(before, after)

    print("=" * 56)
    print(f"Strategy changes: {before.rules.label()}  →  {after.rules.label()}")
    print("=" * 56)
    if not diffs:
        print("  (no differences)")
    else:
        print(f"  {'Section':<7}  {'Hand':>4}  {'Up':>2}  {'Before':<9}  {'After':<9}")
        print(f"  {'-------':<7}  {'----':>4}  {'--':>2}  {'------':<9}  {'-----':<9}")
        for d in diffs:
            print(
                f"  {d.section:<7}  {d.row_label:>4}  {d.upcard:>2}  "
                f"{CODE_NAMES[d.before]:<9}  {CODE_NAMES[d.after]:<9}"
            )
    print()
