"""Blackjack Trainer — Streamlit Dashboard.

Four-tab interactive trainer:
  Tab 1 — Strategy Drill    (grade Hit/Stand/Double/Split/Surrender choices)
  Tab 2 — Counting Drill    (Hi-Lo running count, decks remaining, true count)
  Tab 3 — Flash Test        (count a short burst, then check)
  Tab 4 — Reference Chart   (basic strategy for the selected rules)

Run:
    streamlit run app.py
"""

from __future__ import annotations

import contextlib
import io
import logging
from dataclasses import replace

import matplotlib

matplotlib.use("Agg")  # must be set before any other matplotlib imports

import streamlit as st

from src.analysis.heat_maps import plot_reference_chart
from src.analysis.plotly_lookup import build_reference_chart_figure
from src.analysis.reference_chart import (
    chart_to_dataframes,
    generate_reference_chart,
    print_chart_differences,
)
from src.engine.cards import hand_to_str
from src.engine.counting import (
    accumulate,
    new_count_state,
    state_decks_remaining,
    true_count,
)
from src.engine.hand import calculate_total, classify_hand
from src.engine.rules import MAX_DECKS, MIN_DECKS, DealerRule, RuleConfig, RuleConfigError
from src.engine.shoe import Shoe
from src.strategy.advisor import Action, basic_strategy_advice
from src.strategy.drills import (
    FLASH_MAX_CARDS,
    FLASH_MIN_CARDS,
    DrillStats,
    check_flash,
    grade_answer,
    new_flash_test,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("blackjack_trainer.app")

# ─── Page config ──────────────────────────────────────────────────────────────

st.set_page_config(
    page_title="Blackjack Trainer",
    page_icon="🃏",
    layout="wide",
)

# ─── Sidebar controls ─────────────────────────────────────────────────────────

with st.sidebar:
    st.title("🃏 Blackjack Trainer")
    st.markdown("---")
    st.subheader("Table rules")

    deck_count = st.slider("Decks", min_value=MIN_DECKS, max_value=MAX_DECKS, value=6, step=1)
    dealer_rule = st.selectbox(
        "Dealer soft 17",
        options=[DealerRule.S17, DealerRule.H17],
        format_func=lambda r: "Stands (S17)" if r is DealerRule.S17 else "Hits (H17)",
        index=0,
    )
    das = st.checkbox("Double after split (DAS)", value=True)
    late_surrender = st.checkbox("Late surrender", value=True)
    peek = st.checkbox("Dealer peeks for blackjack", value=True)

    st.markdown("---")
    st.caption("Basic strategy · Hi-Lo counting")

try:
    rules = RuleConfig(
        deck_count=deck_count,
        dealer_rule=dealer_rule,
        double_after_split=das,
        late_surrender=late_surrender,
        dealer_peeks=peek,
    )
except RuleConfigError as exc:
    st.error(f"Invalid rules: {exc}")
    st.stop()

# ─── Session state ────────────────────────────────────────────────────────────


def _deal_strategy_hand() -> None:
    shoe: Shoe = st.session_state["shoe"]
    st.session_state["player_cards"] = shoe.draw_many(2)
    st.session_state["dealer_card"] = shoe.draw()
    st.session_state["feedback"] = ""
    st.session_state["explanation"] = ""


# The shoe is rebuilt whenever the deck count changes.
if st.session_state.get("shoe_decks") != rules.deck_count:
    st.session_state["shoe"] = Shoe(rules.deck_count)
    st.session_state["shoe_decks"] = rules.deck_count
    st.session_state["count_state"] = new_count_state(rules.deck_count)
    st.session_state["count_cards"] = []
    logger.info("New %d-deck shoe for the drills", rules.deck_count)

st.session_state.setdefault("drill_stats", DrillStats())
st.session_state.setdefault("flash_best", 0)
st.session_state.setdefault("flash_test", None)
st.session_state.setdefault("count_state", new_count_state(rules.deck_count))
st.session_state.setdefault("count_cards", [])
if "player_cards" not in st.session_state:
    _deal_strategy_hand()

# ─── Tabs ─────────────────────────────────────────────────────────────────────

tab1, tab2, tab3, tab4 = st.tabs(
    [
        "Strategy Drill",
        "Counting Drill",
        "Flash Test",
        "Reference Chart",
    ]
)

# ── Tab 1: Strategy Drill ─────────────────────────────────────────────────────

with tab1:
    st.header("Strategy Drill")
    st.caption(f"Rules: {rules.label()}")

    player_cards = st.session_state["player_cards"]
    dealer_card = st.session_state["dealer_card"]
    advice = basic_strategy_advice(player_cards, dealer_card, rules)

    col1, col2, col3 = st.columns(3)
    col1.metric("Your hand", hand_to_str(player_cards))
    col2.metric("Total", f"{calculate_total(player_cards)} ({classify_hand(player_cards).title()})")
    col3.metric("Dealer shows", str(dealer_card))

    buttons = st.columns(len(Action) + 1)
    for col, action in zip(buttons, Action):
        if col.button(action.value.title(), key=f"answer_{action.name}"):
            stats, result = grade_answer(st.session_state["drill_stats"], action, advice)
            st.session_state["drill_stats"] = stats
            st.session_state["feedback"] = ("✅ " if result.correct else "❌ ") + result.message
            st.session_state["explanation"] = result.reason
    if buttons[-1].button("Next hand", type="primary"):
        _deal_strategy_hand()
        st.rerun()

    if st.session_state["feedback"]:
        st.info(st.session_state["feedback"])
    if st.button("Show why"):
        st.session_state["explanation"] = str(advice)
    if st.session_state["explanation"]:
        st.write(st.session_state["explanation"])

    stats: DrillStats = st.session_state["drill_stats"]
    st.markdown("---")
    s1, s2, s3, s4, s5 = st.columns(5)
    s1.metric("Hands", stats.hands)
    s2.metric("Correct", stats.correct)
    s3.metric("Accuracy", f"{stats.accuracy_pct}%")
    s4.metric("Streak", stats.streak)
    s5.metric("Best streak", stats.best_streak)

# ── Tab 2: Counting Drill ─────────────────────────────────────────────────────

with tab2:
    st.header("Counting Drill")
    st.caption("Hi-Lo: 2–6 = +1 · 7–9 = 0 · 10–A = −1")

    c1, c2, c3 = st.columns(3)
    if c1.button("New stream"):
        st.session_state["count_state"] = new_count_state(rules.deck_count)
        st.session_state["count_cards"] = []
    n_reveal = c2.number_input("Cards per reveal", min_value=1, max_value=10, value=1, step=1)
    if c3.button("Reveal", type="primary"):
        state = st.session_state["count_state"]
        for _ in range(int(n_reveal)):
            card = st.session_state["shoe"].draw()
            state = accumulate(state, card)
            st.session_state["count_cards"].append(card)
        st.session_state["count_state"] = state

    state = st.session_state["count_state"]
    shown = st.session_state["count_cards"][-20:]
    st.subheader("Stream")
    st.write(" ".join(str(c) for c in shown) if shown else "—")

    reveal_counts = st.checkbox("Show counts", value=True)
    if reveal_counts:
        m1, m2, m3, m4 = st.columns(4)
        m1.metric("Cards dealt", state.cards_dealt)
        m2.metric("Running count", state.running_count)
        m3.metric("Decks remaining", f"{state_decks_remaining(state):.2f}")
        m4.metric("True count", f"{true_count(state):.2f}")

# ── Tab 3: Flash Test ─────────────────────────────────────────────────────────

with tab3:
    st.header("Flash Test")
    n_flash = st.slider(
        "Cards", min_value=FLASH_MIN_CARDS, max_value=FLASH_MAX_CARDS, value=8, step=1
    )
    if st.button("Flash", type="primary"):
        st.session_state["flash_test"] = new_flash_test(st.session_state["shoe"], n_flash)
        st.session_state["flash_feedback"] = ""

    test = st.session_state["flash_test"]
    if test is not None:
        hide = st.checkbox("Hide cards", value=False)
        st.write("⏱️ Enter your count and hit Check." if hide else hand_to_str(test.cards))
        guess = st.number_input("Your count", min_value=-40, max_value=40, value=0, step=1)
        if st.button("Check"):
            result = check_flash(test, int(guess), st.session_state["flash_best"])
            st.session_state["flash_best"] = result.best
            st.session_state["flash_feedback"] = ("✅ " if result.correct else "❌ ") + result.message
        if st.session_state.get("flash_feedback"):
            st.info(st.session_state["flash_feedback"])

    st.metric("Flash best", f"{st.session_state['flash_best']} cards correct")

# ── Tab 4: Reference Chart ────────────────────────────────────────────────────

with tab4:
    st.header("Reference Chart")
    st.caption("H = Hit · S = Stand · D = Double · P = Split · R = Surrender (else Hit)")

    chart = generate_reference_chart(rules)

    view = st.radio("View", ["Tables", "Heat map", "Interactive"], horizontal=True)
    if view == "Tables":
        for df in chart_to_dataframes(chart).values():
            st.subheader(df.index.name)
            st.dataframe(df, use_container_width=True)
    elif view == "Heat map":
        st.pyplot(plot_reference_chart(chart, show=False))
    else:
        st.plotly_chart(build_reference_chart_figure(chart), use_container_width=True)

    st.markdown("---")
    st.subheader("What changes with the dealer rule")
    other = replace(
        rules,
        dealer_rule=DealerRule.H17 if rules.dealer_rule is DealerRule.S17 else DealerRule.S17,
    )
    buf = io.StringIO()
    with contextlib.redirect_stdout(buf):
        print_chart_differences(chart, generate_reference_chart(other))
    st.code(buf.getvalue(), language=None)
