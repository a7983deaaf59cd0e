"""Reference-chart heat maps (matplotlib).

Data builder:

    build_chart_matrices(chart)        — {section: (rows, 10) numeric matrix}

Plot functions:

    plot_reference_chart(chart, ...)   — 1×3 figure: hard | soft | pairs
    plot_chart_for_rules(rules, ...)   — convenience: generate + plot
    plot_rule_comparison(a, b, ...)    — 2×3 figure, changed cells outlined

Matrix convention:
    Shape  : hard (10, 10), soft (8, 10), pairs (10, 10);
             rows = chart rows, cols = upcards [2..9, T, A]
    Values : 0=H, 1=S, 2=D, 3=P, 4=R
"""

from __future__ import annotations

import matplotlib
import matplotlib.colors
import matplotlib.figure
import matplotlib.patches
import matplotlib.pyplot as plt
import numpy as np

from src.analysis.reference_chart import (
    ChartSection,
    ReferenceChart,
    chart_differences,
    generate_reference_chart,
)
from src.engine.rules import RuleConfig

# ─── Constants ────────────────────────────────────────────────────────────────

CODE_ORDER: list[str] = ['H', 'S', 'D', 'P', 'R']
CODE_INDEX: dict[str, int] = {code: i for i, code in enumerate(CODE_ORDER)}

# Hit=red, Stand=green, Double=blue, Split=yellow, Surrender=grey
_CODE_COLORS: list[str] = ["#d62728", "#2ca02c", "#1f77b4", "#ffdd57", "#8c8c8c"]
_TEXT_COLORS: dict[str, str] = {'H': "white", 'S': "white", 'D': "white", 'P': "black", 'R': "white"}
_HIGHLIGHT_COLOR: str = "black"


def _make_action_cmap() -> matplotlib.colors.ListedColormap:
    return matplotlib.colors.ListedColormap(_CODE_COLORS)


_ACTION_CMAP: matplotlib.colors.ListedColormap = _make_action_cmap()


# ─── Data builders ────────────────────────────────────────────────────────────


def section_matrix(section: ChartSection) -> np.ndarray:
    """Return the section's codes as a float matrix of CODE_INDEX values."""
    return np.array(
        [[CODE_INDEX[code] for code in row] for row in section.codes],
        dtype=np.float64,
    )


def build_chart_matrices(chart: ReferenceChart) -> dict[str, np.ndarray]:
    """Return {'hard': m, 'soft': m, 'pairs': m} numeric matrices for plotting."""
    return {s.name: section_matrix(s) for s in chart.sections}


# ─── Rendering helper ─────────────────────────────────────────────────────────


def _render_panel(
    ax: matplotlib.axes.Axes,
    section: ChartSection,
    highlight: set[tuple[str, str]] | None = None,
) -> matplotlib.image.AxesImage:
    """Render one chart section onto *ax* and return the AxesImage.

    ``highlight`` holds (row_label, upcard) cells to outline.
    """
    data = section_matrix(section)
    im = ax.imshow(
        data,
        cmap=_ACTION_CMAP,
        vmin=-0.5,
        vmax=len(CODE_ORDER) - 0.5,
        aspect="auto",
    )

    ax.set_xticks(range(len(section.col_labels)))
    ax.set_xticklabels(section.col_labels, fontsize=9)
    ax.set_yticks(range(len(section.row_labels)))
    ax.set_yticklabels(section.row_labels, fontsize=9)
    ax.xaxis.tick_top()
    ax.set_title(section.title, fontsize=10, pad=22)

    for r, row in enumerate(section.codes):
        for c, code in enumerate(row):
            ax.text(
                c,
                r,
                code,
                ha="center",
                va="center",
                fontsize=9,
                color=_TEXT_COLORS[code],
                fontweight="bold",
            )
            if highlight and (section.row_labels[r], section.col_labels[c]) in highlight:
                ax.add_patch(
                    matplotlib.patches.Rectangle(
                        (c - 0.5, r - 0.5), 1, 1, fill=False, edgecolor=_HIGHLIGHT_COLOR, linewidth=2.5
                    )
                )

    return im


def _legend_handles() -> list[matplotlib.patches.Patch]:
    names = {'H': "Hit", 'S': "Stand", 'D': "Double", 'P': "Split", 'R': "Surrender"}
    return [
        matplotlib.patches.Patch(color=_CODE_COLORS[CODE_INDEX[code]], label=names[code])
        for code in CODE_ORDER
    ]


def _finish(fig: matplotlib.figure.Figure, show: bool, save_path: str | None) -> None:
    fig.legend(handles=_legend_handles(), loc="lower center", ncol=len(CODE_ORDER), fontsize=9)
    fig.tight_layout(rect=(0, 0.06, 1, 0.95))
    if save_path is not None:
        fig.savefig(save_path, bbox_inches="tight", dpi=120)
    if show:
        plt.show()


# ─── Public plot functions ────────────────────────────────────────────────────


def plot_reference_chart(
    chart: ReferenceChart,
    *,
    show: bool = True,
    save_path: str | None = None,
) -> matplotlib.figure.Figure:
    """Plot the hard, soft and pair sections as a 1×3 figure.

    Args:
        chart:     ReferenceChart from generate_reference_chart().
        show:      If True, call plt.show() after rendering.
        save_path: If not None, save the figure to this path before showing.

    Returns:
        matplotlib.figure.Figure.
    """
    fig, axes = plt.subplots(1, 3, figsize=(15, 6))
    fig.suptitle(f"Basic Strategy  ({chart.rules.label()})", fontsize=13, fontweight="bold")

    for ax, section in zip(axes, chart.sections):
        _render_panel(ax, section)
    axes[0].set_ylabel("Player hand", fontsize=9)

    _finish(fig, show, save_path)
    return fig


def plot_chart_for_rules(
    rules: RuleConfig,
    *,
    show: bool = True,
    save_path: str | None = None,
) -> matplotlib.figure.Figure:
    """Convenience: generate the chart for ``rules`` and plot it."""
    return plot_reference_chart(generate_reference_chart(rules), show=show, save_path=save_path)


def plot_rule_comparison(
    before: RuleConfig,
    after: RuleConfig,
    *,
    show: bool = True,
    save_path: str | None = None,
) -> matplotlib.figure.Figure:
    """Side-by-side charts for two rule sets, cells that change outlined.

    Produces a 2×3 figure:
        Row 0 = ``before`` rules, Row 1 = ``after`` rules.
        Col 0 = hard, Col 1 = soft, Col 2 = pairs.

    Returns:
        matplotlib.figure.Figure with 6 subplot axes.
    """
    chart_a = generate_reference_chart(before)
    chart_b = generate_reference_chart(after)

    changed: dict[str, set[tuple[str, str]]] = {}
    for d in chart_differences(chart_a, chart_b):
        changed.setdefault(d.section, set()).add((d.row_label, d.upcard))

    fig, axes = plt.subplots(2, 3, figsize=(15, 11))
    fig.suptitle("Basic Strategy Rule Comparison", fontsize=14, fontweight="bold")

    for row, chart in enumerate((chart_a, chart_b)):
        for col, section in enumerate(chart.sections):
            _render_panel(axes[row, col], section, changed.get(section.name))
        axes[row, 0].set_ylabel(chart.rules.label(), fontsize=10, fontweight="bold")

    _finish(fig, show, save_path)
    return fig


# ─── Entry point ──────────────────────────────────────────────────────────────

if __name__ == "__main__":
    s17 = RuleConfig()
    h17 = RuleConfig(dealer_rule="H17")

    print("Generating reference charts …")
    plot_chart_for_rules(s17, show=False, save_path="chart_s17.png")
    plot_chart_for_rules(h17, show=False, save_path="chart_h17.png")
    plot_rule_comparison(s17, h17, show=False, save_path="chart_s17_vs_h17.png")
    print("Saved: chart_s17.png, chart_h17.png, chart_s17_vs_h17.png")
