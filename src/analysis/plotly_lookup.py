"""Interactive Plotly reference chart.

Three public functions:

    build_chart_lookup_figure(rules)
        — hard / soft / pair heatmaps; hover shows the hand, upcard and action.
    build_rule_comparison_figure(before, after)
        — 2×3 grid of the two rule sets; hover flags cells that change.
    save_lookup_html(fig, path)
        — Export any figure to a self-contained HTML file.
"""

from __future__ import annotations

import plotly.graph_objects as go
from plotly.subplots import make_subplots

from src.analysis.heat_maps import CODE_ORDER, section_matrix
from src.analysis.reference_chart import (
    CODE_NAMES,
    SECTION_HARD,
    SECTION_PAIRS,
    ChartSection,
    ReferenceChart,
    chart_differences,
    generate_reference_chart,
)
from src.engine.rules import RuleConfig
from src.strategy.advisor import SURRENDER_FALLBACK_NOTE

# ─── Constants ────────────────────────────────────────────────────────────────

_CODE_COLORS: dict[str, str] = {
    'H': "#d62728",
    'S': "#2ca02c",
    'D': "#1f77b4",
    'P': "#ffdd57",
    'R': "#8c8c8c",
}


def _discrete_colorscale() -> list[list]:
    """Stepped colorscale: each code owns one band of [0, 1]."""
    n = len(CODE_ORDER)
    scale: list[list] = []
    for i, code in enumerate(CODE_ORDER):
        scale.append([i / n, _CODE_COLORS[code]])
        scale.append([(i + 1) / n, _CODE_COLORS[code]])
    return scale


_ACTION_COLORSCALE: list[list] = _discrete_colorscale()


# ─── Hover text builders ──────────────────────────────────────────────────────


def _hand_description(section: ChartSection, row_label: str) -> str:
    if section.name == SECTION_HARD:
        return f"Hard {row_label}"
    if section.name == SECTION_PAIRS:
        return f"Pair {row_label}"
    return f"Soft {row_label}"


def _build_hover(
    section: ChartSection,
    changed: dict[tuple[str, str], str] | None = None,
) -> list[list[str]]:
    """Return a rows×10 list of HTML hover strings for one chart section.

    Args:
        section: Chart section to describe.
        changed: Optional {(row_label, upcard): previous code} for cells that
                 differ from another rule set.
    """
    rows: list[list[str]] = []
    for label, codes in zip(section.row_labels, section.codes):
        row: list[str] = []
        for up, code in zip(section.col_labels, codes):
            action = CODE_NAMES[code]
            if code == 'R':
                action += SURRENDER_FALLBACK_NOTE
            lines = [
                f"Hand: <b>{_hand_description(section, label)}</b>",
                f"Dealer: {up}",
                f"Action: <b>{action}</b>",
            ]
            if changed is not None and (label, up) in changed:
                lines.append(f"Changed from: {CODE_NAMES[changed[(label, up)]]}")
            row.append("<br>".join(lines))
        rows.append(row)
    return rows


# ─── Trace builder ─────────────────────────────────────────────────────────────


def _make_heatmap_trace(
    section: ChartSection,
    hover_text: list[list[str]],
    *,
    name: str,
) -> go.Heatmap:
    """Build one go.Heatmap trace for a chart section, annotated with codes."""
    return go.Heatmap(
        z=section_matrix(section).tolist(),
        x=list(section.col_labels),
        y=list(section.row_labels),
        colorscale=_ACTION_COLORSCALE,
        zmin=-0.5,
        zmax=len(CODE_ORDER) - 0.5,
        text=[list(row) for row in section.codes],
        texttemplate="%{text}",
        customdata=hover_text,
        hovertemplate="%{customdata}<extra></extra>",
        showscale=False,
        xgap=1,
        ygap=1,
        name=name,
    )


# ─── Public figure builders ───────────────────────────────────────────────────


def build_chart_lookup_figure(rules: RuleConfig) -> go.Figure:
    """Build an interactive figure of the reference chart for ``rules``.

    Returns:
        go.Figure with three heatmap traces (hard, soft, pairs) in a 1×3 layout.
    """
    chart = generate_reference_chart(rules)
    return build_reference_chart_figure(chart)


def build_reference_chart_figure(chart: ReferenceChart) -> go.Figure:
    """Same as build_chart_lookup_figure() for an already generated chart."""
    fig = make_subplots(
        rows=1,
        cols=3,
        subplot_titles=[s.title for s in chart.sections],
        horizontal_spacing=0.06,
    )
    for col, section in enumerate(chart.sections, start=1):
        fig.add_trace(
            _make_heatmap_trace(section, _build_hover(section), name=section.title),
            row=1,
            col=col,
        )

    fig.update_layout(
        title_text=f"Basic Strategy Lookup — {chart.rules.label()}",
        title_font_size=15,
        height=480,
        width=1150,
    )
    fig.update_yaxes(autorange="reversed", type="category")
    fig.update_xaxes(side="top", type="category")
    return fig


def build_rule_comparison_figure(before: RuleConfig, after: RuleConfig) -> go.Figure:
    """Build a 2×3 interactive comparison of two rule sets.

    Layout::

        Row 1 = ``before`` rules     Row 2 = ``after`` rules
        Col 1 = hard   Col 2 = soft   Col 3 = pairs

    Hover text on the ``after`` row names the previous action for every
    cell that changed.
    """
    chart_a = generate_reference_chart(before)
    chart_b = generate_reference_chart(after)

    changed: dict[str, dict[tuple[str, str], str]] = {}
    for d in chart_differences(chart_a, chart_b):
        changed.setdefault(d.section, {})[(d.row_label, d.upcard)] = d.before

    subplot_titles = [f"{before.label()} — {s.title}" for s in chart_a.sections] + [
        f"{after.label()} — {s.title}" for s in chart_b.sections
    ]
    fig = make_subplots(
        rows=2,
        cols=3,
        subplot_titles=subplot_titles,
        horizontal_spacing=0.06,
        vertical_spacing=0.12,
    )

    for row, chart in enumerate((chart_a, chart_b), start=1):
        for col, section in enumerate(chart.sections, start=1):
            diff = changed.get(section.name, {}) if row == 2 else None
            fig.add_trace(
                _make_heatmap_trace(section, _build_hover(section, diff), name=f"r{row}c{col}"),
                row=row,
                col=col,
            )

    fig.update_layout(
        title_text="Basic Strategy Rule Comparison",
        title_font_size=15,
        height=900,
        width=1150,
    )
    fig.update_yaxes(autorange="reversed", type="category")
    fig.update_xaxes(type="category")
    return fig


# ─── HTML export ───────────────────────────────────────────────────────────────


def save_lookup_html(fig: go.Figure, path: str) -> None:
    """Save a Plotly figure to a self-contained HTML file.

    Plotly JS is loaded from the CDN so the file itself remains compact.
    """
    fig.write_html(path, include_plotlyjs="cdn")


# ─── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    s17 = RuleConfig()
    h17 = RuleConfig(dealer_rule="H17")

    print("Building interactive lookup figures …")
    save_lookup_html(build_chart_lookup_figure(s17), "chart_s17_lookup.html")
    save_lookup_html(build_chart_lookup_figure(h17), "chart_h17_lookup.html")
    save_lookup_html(build_rule_comparison_figure(s17, h17), "chart_comparison_lookup.html")
    print("Saved: chart_s17_lookup.html, chart_h17_lookup.html, chart_comparison_lookup.html")
