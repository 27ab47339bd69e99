from __future__ import annotations

from utils.benchmark import sweep_capacity
from utils.resources import estimate_table_resources


def test_sweep_capacity(abcd_items) -> None:
    df = sweep_capacity(abcd_items, range(0, 15))
    assert list(df.columns) == ["capacity", "best_value", "total_weight", "chosen_count", "cells", "runtime_ms"]
    assert len(df) == 15
    assert df["best_value"].is_monotonic_increasing
    assert (df["total_weight"] <= df["capacity"]).all()
    assert df.loc[df["capacity"] == 7, "best_value"].item() == 24
    assert df.loc[df["capacity"] == 14, "best_value"].item() == 47
    assert df["cells"].tolist() == [5 * (c + 1) for c in range(15)]


def test_sweep_capacity_empty() -> None:
    df = sweep_capacity([], [])
    assert df.empty
    assert "best_value" in df.columns


def test_estimate_table_resources() -> None:
    res = estimate_table_resources(4, 7)
    assert res == {"rows": 5, "cols": 8, "cells": 40, "approx_bytes": 320}
