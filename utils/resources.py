CELL_BYTES = 8


def estimate_table_resources(n_items, capacity):
    rows = int(n_items) + 1
    cols = int(capacity) + 1
    cells = rows * cols
    return {
        "rows": rows,
        "cols": cols,
        "cells": cells,
        "approx_bytes": cells * CELL_BYTES,
    }
