from dataclasses import dataclass
from typing import Iterable, Sequence

from classical.knapsack_dp import Item, Solution


@dataclass(frozen=True)
class BackpackReport:
    weight: int
    value: int
    capacity: int
    best_value: int
    overweight: bool
    is_optimal: bool
    fill_pct: int


def evaluate_backpack(items: Sequence[Item], picked_ids: Iterable, capacity: int, solution: Solution) -> BackpackReport:
    """Score the player's current backpack against the solver's optimum. Unknown ids are ignored."""
    picked = set(picked_ids)
    chosen = [it for it in items if it.id in picked]
    weight = sum(it.weight for it in chosen)
    value = sum(it.value for it in chosen)
    overweight = weight > capacity
    return BackpackReport(
        weight=weight,
        value=value,
        capacity=capacity,
        best_value=solution.best_value,
        overweight=overweight,
        is_optimal=(value == solution.best_value and not overweight),
        fill_pct=min(100, round(weight / max(capacity, 1) * 100)),
    )
