"""
Helpers for the "show answer & explain" view: per-cell decisions, the
backtrace path through the table, and table renderings (DataFrame, heatmap).
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd

from classical.knapsack_dp import Solution

BASE = "base"
TOO_HEAVY = "too_heavy"
EXCLUDE = "exclude"
INCLUDE = "include"


@dataclass(frozen=True)
class CellDecision:
    i: int
    c: int
    kind: str
    value: int
    exclude_value: Optional[int] = None
    include_value: Optional[int] = None

    def describe(self, solution: Solution) -> str:
        if self.kind == BASE:
            return f"dp[{self.i}][{self.c}] = 0 (no items or no capacity)"
        it = solution.items[self.i - 1]
        if self.kind == TOO_HEAVY:
            return (f"{it.label} weighs {it.weight} > {self.c}: copy dp[{self.i - 1}][{self.c}]"
                    f" = {self.value}")
        verb = "take" if self.kind == INCLUDE else "skip"
        return (f"{it.label}: max(skip = {self.exclude_value}, take = {self.include_value})"
                f" = {self.value} -> {verb}")


def cell_decision(solution: Solution, i: int, c: int) -> CellDecision:
    """Explain how table[i, c] was filled. Ties count as exclude, matching the backtrace."""
    table = solution.table
    value = table[i, c]
    if i == 0 or c == 0:
        return CellDecision(i, c, BASE, value)
    it = solution.items[i - 1]
    above = table[i - 1, c]
    if it.weight > c:
        return CellDecision(i, c, TOO_HEAVY, value, exclude_value=above)
    take = table[i - 1, c - it.weight] + it.value
    kind = INCLUDE if take > above else EXCLUDE
    return CellDecision(i, c, kind, value, exclude_value=above, include_value=take)


def backtrace_path(solution: Solution) -> List[Tuple[int, int, bool]]:
    """Cells visited by the reconstruction, from (n, capacity) down to row 1."""
    table = solution.table
    c = solution.capacity
    path = []
    for i in range(len(solution.items), 0, -1):
        took = table[i, c] != table[i - 1, c]
        path.append((i, c, took))
        if took:
            c -= solution.items[i - 1].weight
    return path


def row_label(solution: Solution, i: int) -> str:
    if i == 0:
        return "(no items)"
    it = solution.items[i - 1]
    return f"{it.label} (w={it.weight}, v={it.value})"


def table_frame(solution: Solution, include_base_row: bool = False) -> pd.DataFrame:
    start = 0 if include_base_row else 1
    rows = solution.table.rows()[start:]
    index = [row_label(solution, i) for i in range(start, solution.table.n_rows)]
    df = pd.DataFrame(rows, index=index, columns=list(range(solution.table.n_cols)), dtype="int64")
    df.index.name = "i / c"
    return df


def table_heatmap(solution: Solution):
    table = solution.table
    fig, ax = plt.subplots(figsize=(max(6.0, 0.35 * table.n_cols), max(3.0, 0.45 * table.n_rows)))
    im = ax.imshow(table.rows(), aspect="auto", origin="upper", cmap="Blues")
    ax.set_xticks(range(table.n_cols))
    ax.set_xticklabels([str(c) for c in range(table.n_cols)])
    ax.set_yticks(range(table.n_rows))
    ax.set_yticklabels([row_label(solution, i) for i in range(table.n_rows)])
    ax.set_xlabel("capacity c")
    ax.set_ylabel("items considered i")
    ax.set_title(f"dp[i][c] (best = {solution.best_value})")
    for i, c, took in backtrace_path(solution):
        ax.scatter([c], [i], marker="o" if took else "x", color="darkorange", s=40)
    fig.colorbar(im, ax=ax, shrink=0.85)
    fig.tight_layout()
    return fig


def describe_solution(solution: Solution) -> str:
    names = ", ".join(it.label for it in solution.chosen_items) or "-"
    return f"Best value {solution.best_value} by choosing: {names}"
