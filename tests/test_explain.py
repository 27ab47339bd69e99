from __future__ import annotations

import matplotlib.pyplot as plt
import pytest

from classical.knapsack_dp import solve
from utils.explain import (
    BASE,
    EXCLUDE,
    INCLUDE,
    TOO_HEAVY,
    backtrace_path,
    cell_decision,
    describe_solution,
    table_frame,
    table_heatmap,
)


@pytest.fixture()
def abcd_solution(abcd_items):
    return solve(abcd_items, 7)


def test_cell_decisions(abcd_solution) -> None:
    last = cell_decision(abcd_solution, 4, 7)
    assert last.kind == EXCLUDE
    assert (last.value, last.exclude_value, last.include_value) == (24, 24, 23)

    take_c = cell_decision(abcd_solution, 3, 7)
    assert take_c.kind == INCLUDE
    assert take_c.include_value == 24

    assert cell_decision(abcd_solution, 3, 4).kind == TOO_HEAVY
    assert cell_decision(abcd_solution, 3, 4).include_value is None
    assert cell_decision(abcd_solution, 0, 5).kind == BASE
    assert cell_decision(abcd_solution, 2, 0).kind == BASE


def test_describe_cell_mentions_item(abcd_solution) -> None:
    text = cell_decision(abcd_solution, 3, 7).describe(abcd_solution)
    assert "C" in text
    assert "take" in text


def test_backtrace_path_agrees_with_chosen(abcd_solution) -> None:
    path = backtrace_path(abcd_solution)
    assert path == [(4, 7, False), (3, 7, True), (2, 2, True), (1, 0, False)]
    took = {abcd_solution.items[i - 1].id for i, _, t in path if t}
    assert took == abcd_solution.chosen


def test_backtrace_path_empty_items() -> None:
    assert backtrace_path(solve([], 4)) == []


def test_table_frame(abcd_solution) -> None:
    df = table_frame(abcd_solution)
    assert df.shape == (4, 8)
    assert list(df.columns) == list(range(8))
    assert df.iloc[-1].tolist() == [0, 1, 6, 7, 7, 18, 22, 24]
    assert df.index[1] == "💎 B (w=2, v=6)"

    with_base = table_frame(abcd_solution, include_base_row=True)
    assert with_base.shape == (5, 8)
    assert with_base.iloc[0].sum() == 0


def test_table_heatmap_returns_figure(abcd_solution) -> None:
    fig = table_heatmap(abcd_solution)
    try:
        assert fig.axes
        assert "24" in fig.axes[0].get_title()
    finally:
        plt.close(fig)


def test_describe_solution(abcd_solution) -> None:
    text = describe_solution(abcd_solution)
    assert "24" in text
    assert "💎 B" in text and "🚀 C" in text
    assert describe_solution(solve([], 3)).endswith("-")
