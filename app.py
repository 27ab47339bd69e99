import logging
import time

import matplotlib.pyplot as plt
import pandas as pd
import streamlit as st

from classical.knapsack_dp import KnapsackError, Item, solve
from data.sample_items import (
    CAPACITY_SLIDER_RANGE,
    DIFFICULTY_PRESETS,
    capacity_for,
    demo_items,
    generate_items,
)
from utils.benchmark import sweep_capacity
from utils.config import configure_logging, load_settings
from utils.explain import backtrace_path, cell_decision, describe_solution, table_frame, table_heatmap
from utils.resources import estimate_table_resources
from utils.scoring import evaluate_backpack

settings = load_settings()
configure_logging(settings)
logger = logging.getLogger("knapsack_app")

st.set_page_config(page_title="Knapsack Challenge — Open House", layout="wide")

st.title("🎒 Knapsack Challenge — Open House")
st.caption("Pack the most valuable backpack without going over the weight limit (0-1 knapsack)")

DIFFICULTY_LABELS = {"easy": "Easy", "medium": "Medium", "hard": "Hard"}


def new_puzzle():
    """Fresh items and capacity for the selected difficulty; clears the backpack and the timer."""
    d = st.session_state.difficulty
    items = generate_items(d, seed=settings.seed)
    st.session_state.puzzle_items = items
    st.session_state.capacity = capacity_for(items, d)
    st.session_state.picked = []
    st.session_state.timer_started = None
    st.session_state.timer_elapsed = 0.0
    logger.info("new %s puzzle: %d items, capacity %d", d, len(items), st.session_state.capacity)


def init_state():
    if "puzzle_items" not in st.session_state:
        st.session_state.difficulty = settings.default_difficulty
        new_puzzle()


def toggle_timer():
    started = st.session_state.timer_started
    if started is None:
        st.session_state.timer_started = time.time()
    else:
        st.session_state.timer_elapsed += time.time() - started
        st.session_state.timer_started = None


def reset_timer():
    st.session_state.timer_elapsed = 0.0
    if st.session_state.timer_started is not None:
        st.session_state.timer_started = time.time()


def clear_backpack():
    st.session_state.picked = []


def elapsed_seconds():
    total = st.session_state.timer_elapsed
    if st.session_state.timer_started is not None:
        total += time.time() - st.session_state.timer_started
    return int(total)


def run_self_tests():
    items1 = demo_items()
    s1 = solve(items1, 7)
    s2 = solve(items1, 0)
    s3 = solve([Item(id="x", name="X", weight=10, value=100, emoji="💎")], 5)
    chosen_sum = s1.total_value
    return [
        ("T1 best value", s1.best_value == 24, f"got {s1.best_value}"),
        ("T2 zero capacity", s2.best_value == 0, f"got {s2.best_value}"),
        ("T3 too heavy", s3.best_value == 0, f"got {s3.best_value}"),
        ("T4 sum chosen equals best", chosen_sum == s1.best_value, f"sum {chosen_sum}"),
    ]


init_state()
items = st.session_state.puzzle_items

with st.sidebar:
    st.header("Puzzle")
    st.selectbox(
        "Difficulty",
        list(DIFFICULTY_PRESETS),
        format_func=lambda d: DIFFICULTY_LABELS.get(d, d),
        key="difficulty",
        on_change=new_puzzle,
    )
    st.button("New puzzle", on_click=new_puzzle, use_container_width=True)

    st.header("Timer")
    running = st.session_state.timer_started is not None
    st.button("⏱ Running (pause)" if running else "⏱ Start timer", on_click=toggle_timer, use_container_width=True)
    st.button("Reset time", on_click=reset_timer, use_container_width=True)
    st.write(f"Time: `{elapsed_seconds()}s`")

cap_lo, cap_hi = CAPACITY_SLIDER_RANGE
cap_hi = max(cap_hi, st.session_state.capacity)
capacity = st.slider("Capacity", cap_lo, cap_hi, key="capacity")

try:
    solution = solve(items, capacity)
except KnapsackError as e:
    logger.warning("solver rejected input: %s", e)
    st.error(f"Cannot solve this puzzle: {e}")
    st.stop()

by_id = {it.id: it for it in items}
st.multiselect(
    "Backpack (pick items from the shelf)",
    options=[it.id for it in items],
    format_func=lambda i: f"{by_id[i].label} (w={by_id[i].weight}, v={by_id[i].value})",
    key="picked",
)
report = evaluate_backpack(items, st.session_state.picked, capacity, solution)

tab_play, tab_explain, tab_sweep = st.tabs(["Play", "Answer & explanation", "Capacity sweep"])

with tab_play:
    col1, col2 = st.columns([2, 1])
    with col1:
        st.subheader("Shelf")
        picked = set(st.session_state.picked)
        df_items = pd.DataFrame({
            "item": [it.label for it in items],
            "weight": [it.weight for it in items],
            "value": [it.value for it in items],
            "value/weight": [round(it.ratio, 2) for it in items],
            "in backpack": [it.id in picked for it in items],
        })
        st.dataframe(df_items, use_container_width=True, hide_index=True)

        st.markdown(f"**Backpack weight:** {report.weight}/{report.capacity}")
        st.progress(report.fill_pct / 100.0)
        if report.overweight:
            st.error("Too heavy! Take something out.")

    with col2:
        st.subheader("Score")
        st.metric("Your value", report.value)
        st.metric("Best possible", report.best_value)
        st.button("Clear backpack", on_click=clear_backpack)
        if report.is_optimal:
            st.success("✅ Optimal pick, well done!")
        else:
            st.info("Keep adjusting to reach the best value.")

with tab_explain:
    st.markdown(
        "We fill a table where `dp[i][c]` is the best value using items 1..i with capacity `c`. "
        "If item i weighs `w <= c`, we take the larger of *skip i* (`dp[i-1][c]`) and "
        "*take i* (`dp[i-1][c-w] + value(i)`); otherwise we copy the row above."
    )
    with st.expander("Explained for first-timers", expanded=False):
        st.markdown(
            "- Picture a shopping trip with a bag that holds at most `c` kilos; we want the most total value.\n"
            "- Cell `dp[i][c]` is the best value looking only at items up to `i` with at most `c` kilos.\n"
            "- If this item is too heavy (`w > c`) we cannot take it, so we copy the cell above.\n"
            "- Otherwise we keep whichever is bigger: skipping it, or taking it and filling the remaining `c-w`.\n"
            "- Read the answer in the bottom-right cell, then walk upward: whenever a cell differs from "
            "the one above, that item was taken."
        )
    st.write(describe_solution(solution))

    if solution.items:
        df_table = table_frame(solution)
        chosen_rows = {i for i, _, took in backtrace_path(solution) if took}

        def _highlight(df):
            styles = pd.DataFrame("", index=df.index, columns=df.columns)
            for i in chosen_rows:
                styles.iloc[i - 1, :] = "background-color: #dcfce7"
            return styles

        st.dataframe(df_table.style.apply(_highlight, axis=None), use_container_width=True)

        res = estimate_table_resources(len(items), capacity)
        st.caption(f"Table: {res['rows']} x {res['cols']} = {res['cells']} cells")

        with st.expander("Step through the backtrace", expanded=False):
            for i, c, _ in backtrace_path(solution):
                st.write(cell_decision(solution, i, c).describe(solution))

        fig = table_heatmap(solution)
        st.pyplot(fig)
        plt.close(fig)

    with st.expander("Why doesn't greedy by value/weight always win?", expanded=False):
        st.write(
            "Grabbing the item with the best ratio can use up weight that a combination of several "
            "smaller items would have filled more profitably. DP checks every budget, so it always "
            "finds the true 0-1 optimum."
        )

with tab_sweep:
    st.subheader("Best value as capacity grows")
    sweep_hi = max(cap_hi, capacity)
    df_sweep = sweep_capacity(items, range(0, sweep_hi + 1))
    st.line_chart(df_sweep, x="capacity", y="best_value", height=240)
    st.dataframe(df_sweep, use_container_width=True, hide_index=True)

with st.expander("Self-tests (DP)", expanded=False):
    tests = run_self_tests()
    if all(ok for _, ok, _ in tests):
        st.success("All tests passed.")
    else:
        st.error("Some tests failed.")
    for name, ok, detail in tests:
        st.write(f"{name}: {'✅' if ok else '❌'} {detail}")

st.caption(
    "Tip: the value/weight ratio is a handy first filter, but this is 0-1 knapsack: "
    "each item can be taken at most once and greedy is not always optimal."
)
