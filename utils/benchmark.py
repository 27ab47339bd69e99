import logging
import time

import pandas as pd

from classical.knapsack_dp import solve
from utils.resources import estimate_table_resources

logger = logging.getLogger(__name__)


def sweep_capacity(items, capacities):
    """Solve the same items at every capacity; best_value is non-decreasing in capacity."""
    rows = []
    for cap in capacities:
        start = time.perf_counter()
        sol = solve(items, int(cap))
        elapsed = (time.perf_counter() - start) * 1000.0
        rows.append({
            "capacity": int(cap),
            "best_value": int(sol.best_value),
            "total_weight": int(sol.total_weight),
            "chosen_count": len(sol.chosen),
            "cells": int(estimate_table_resources(len(items), cap)["cells"]),
            "runtime_ms": float(elapsed),
        })
    logger.info("capacity sweep over %d points for %d items", len(rows), len(items))
    return pd.DataFrame(rows, columns=["capacity", "best_value", "total_weight", "chosen_count", "cells", "runtime_ms"])
