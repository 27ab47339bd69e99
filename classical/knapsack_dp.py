import logging
import math
import numbers
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Iterator, List, Optional, Sequence, Tuple

from utils.config import max_table_cells
from utils.resources import estimate_table_resources

logger = logging.getLogger(__name__)


class KnapsackError(ValueError):
    """Base class for rejected solver inputs."""


class InvalidCapacity(KnapsackError):
    pass


class InvalidItem(KnapsackError):
    pass


class DuplicateIdentity(KnapsackError):
    pass


class ResourceBound(KnapsackError):
    pass


@dataclass(frozen=True)
class Item:
    id: Hashable
    weight: int
    value: int
    name: str = ""
    emoji: str = ""

    @property
    def ratio(self) -> float:
        if self.weight == 0:
            return math.inf if self.value > 0 else 0.0
        return self.value / self.weight

    @property
    def label(self) -> str:
        return f"{self.emoji} {self.name}".strip() or str(self.id)


class DPTable:
    """
    Dense (n+1) x (capacity+1) table stored in one flat list.
    Cell (i, c) lives at i*(capacity+1)+c.
    """

    __slots__ = ("_cells", "_n_rows", "_n_cols")

    def __init__(self, n_rows: int, n_cols: int, cells: Optional[List[int]] = None):
        if cells is not None and len(cells) != n_rows * n_cols:
            raise ValueError(f"expected {n_rows * n_cols} cells for a {n_rows}x{n_cols} table, got {len(cells)}")
        self._n_rows = n_rows
        self._n_cols = n_cols
        self._cells = cells if cells is not None else [0] * (n_rows * n_cols)

    @property
    def n_rows(self) -> int:
        return self._n_rows

    @property
    def n_cols(self) -> int:
        return self._n_cols

    @property
    def shape(self) -> Tuple[int, int]:
        return self._n_rows, self._n_cols

    def __getitem__(self, key: Tuple[int, int]) -> int:
        i, c = key
        if not (0 <= i < self._n_rows and 0 <= c < self._n_cols):
            raise IndexError(f"cell {key} outside table of shape {self.shape}")
        return self._cells[i * self._n_cols + c]

    def row(self, i: int) -> List[int]:
        if not 0 <= i < self._n_rows:
            raise IndexError(f"row {i} outside table with {self._n_rows} rows")
        start = i * self._n_cols
        return self._cells[start:start + self._n_cols]

    def rows(self) -> List[List[int]]:
        return [self.row(i) for i in range(self._n_rows)]

    def __iter__(self) -> Iterator[List[int]]:
        return iter(self.rows())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DPTable):
            return NotImplemented
        return self.shape == other.shape and self._cells == other._cells

    def __repr__(self) -> str:
        return f"DPTable(rows={self._n_rows}, cols={self._n_cols})"


@dataclass(frozen=True)
class Solution:
    best_value: int
    chosen: frozenset
    table: DPTable = field(repr=False)
    items: Tuple[Item, ...] = field(repr=False)
    capacity: int = 0

    @property
    def chosen_items(self) -> List[Item]:
        return [it for it in self.items if it.id in self.chosen]

    @property
    def total_weight(self) -> int:
        return sum(int(it.weight) for it in self.chosen_items)

    @property
    def total_value(self) -> int:
        return sum(int(it.value) for it in self.chosen_items)


def _as_count(x: Any) -> Optional[int]:
    if isinstance(x, bool) or not isinstance(x, numbers.Integral):
        return None
    return int(x)


def _validate(items: Sequence[Item], capacity: Any, max_cells: Optional[int]) -> int:
    cap = _as_count(capacity)
    if cap is None or cap < 0:
        raise InvalidCapacity(f"capacity must be a non-negative integer, got {capacity!r}")
    seen = set()
    for idx, it in enumerate(items):
        w, v = _as_count(it.weight), _as_count(it.value)
        if w is None or w < 0:
            raise InvalidItem(f"item {it.id!r} at position {idx} has invalid weight {it.weight!r}")
        if v is None or v < 0:
            raise InvalidItem(f"item {it.id!r} at position {idx} has invalid value {it.value!r}")
        if it.id in seen:
            raise DuplicateIdentity(f"identity {it.id!r} appears more than once")
        seen.add(it.id)
    if max_cells is not None:
        res = estimate_table_resources(len(items), cap)
        if res["cells"] > max_cells:
            raise ResourceBound(
                f"table of {res['rows']}x{res['cols']} = {res['cells']} cells exceeds limit {max_cells}"
            )
    return cap


def solve(items: Sequence[Item], capacity: int, max_cells: Optional[int] = None) -> Solution:
    """
    Exact 0-1 knapsack via dynamic programming, O(n*capacity) time and space.

    Two phases:
      fill      table[i, c] = best value using items 1..i under budget c
      backtrace walk up from (n, capacity); item i is taken iff its row differs
                from the row above at the current budget

    Ties between excluding and including an item resolve to exclusion, so the
    reconstructed set is deterministic for a given input order.
    Raises a KnapsackError subclass before allocating anything if inputs are invalid.
    """
    if max_cells is None:
        max_cells = max_table_cells()

    items = tuple(items)
    W = _validate(items, capacity, max_cells)
    n = len(items)
    cols = W + 1
    dp = [0] * ((n + 1) * cols)

    for i in range(1, n + 1):
        wt, v = int(items[i - 1].weight), int(items[i - 1].value)
        prev = (i - 1) * cols
        cur = i * cols
        for c in range(cols):
            best = dp[prev + c]
            if wt <= c:
                cand = dp[prev + c - wt] + v
                if cand > best:
                    best = cand
            dp[cur + c] = best

    c = W
    chosen = set()
    for i in range(n, 0, -1):
        if dp[i * cols + c] != dp[(i - 1) * cols + c]:
            chosen.add(items[i - 1].id)
            c -= int(items[i - 1].weight)

    best_value = dp[n * cols + W]
    logger.debug("solved knapsack n=%d capacity=%d best=%d chosen=%d", n, W, best_value, len(chosen))
    return Solution(
        best_value=best_value,
        chosen=frozenset(chosen),
        table=DPTable(n + 1, cols, dp),
        items=items,
        capacity=W,
    )


def solve_knapsack_dp(values: List[int], weights: List[int], capacity: int) -> Dict:
    """
    Knapsack via dynamic programming (O(n*capacity)).
    Returns best_value, picked_items (indices), total_weight.
    """
    if len(values) != len(weights):
        raise InvalidItem(f"got {len(values)} values but {len(weights)} weights")
    items = [Item(id=i, weight=w, value=v) for i, (v, w) in enumerate(zip(values, weights))]
    sol = solve(items, capacity)
    picked = sorted(sol.chosen)
    return {
        "best_value": int(sol.best_value),
        "picked_items": picked,
        "total_weight": int(sol.total_weight),
    }
