from __future__ import annotations

import itertools

import numpy as np
import pytest

from classical.knapsack_dp import Item
from data.sample_items import demo_items


@pytest.fixture()
def abcd_items() -> list[Item]:
    return demo_items()


@pytest.fixture(autouse=True)
def _clean_knapsack_env(monkeypatch) -> None:
    """Keep KNAPSACK_* settings from the developer's shell out of the tests."""
    for name in ("KNAPSACK_MAX_TABLE_CELLS", "KNAPSACK_LOG_LEVEL", "KNAPSACK_DEFAULT_DIFFICULTY", "KNAPSACK_SEED"):
        monkeypatch.delenv(name, raising=False)


def random_items(seed: int, n: int, max_weight: int = 9, max_value: int = 20) -> list[Item]:
    rng = np.random.default_rng(seed)
    return [
        Item(id=f"it{i}", weight=int(rng.integers(0, max_weight + 1)), value=int(rng.integers(0, max_value + 1)))
        for i in range(n)
    ]


def brute_force_best(items: list[Item], capacity: int) -> int:
    best = 0
    for r in range(len(items) + 1):
        for combo in itertools.combinations(items, r):
            if sum(it.weight for it in combo) <= capacity:
                best = max(best, sum(it.value for it in combo))
    return best
