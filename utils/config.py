import logging
import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_MAX_TABLE_CELLS = 5_000_000
DIFFICULTIES = ("easy", "medium", "hard")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    max_table_cells: int = DEFAULT_MAX_TABLE_CELLS
    log_level: str = "INFO"
    default_difficulty: str = "medium"
    seed: Optional[int] = None


def _int_env(name, default):
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw.replace("_", ""))
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def max_table_cells() -> int:
    """The solver's table limit alone, from KNAPSACK_MAX_TABLE_CELLS."""
    max_cells = _int_env("KNAPSACK_MAX_TABLE_CELLS", DEFAULT_MAX_TABLE_CELLS)
    if max_cells <= 0:
        raise ValueError(f"KNAPSACK_MAX_TABLE_CELLS must be positive, got {max_cells}")
    return max_cells


def load_settings() -> Settings:
    """Read KNAPSACK_* environment variables; blank or unset means default."""
    max_cells = max_table_cells()

    level = os.getenv("KNAPSACK_LOG_LEVEL", "").strip().upper() or "INFO"
    if level not in LOG_LEVELS:
        raise ValueError(f"KNAPSACK_LOG_LEVEL must be one of {LOG_LEVELS}, got {level!r}")

    difficulty = os.getenv("KNAPSACK_DEFAULT_DIFFICULTY", "").strip().lower() or "medium"
    if difficulty not in DIFFICULTIES:
        raise ValueError(f"KNAPSACK_DEFAULT_DIFFICULTY must be one of {DIFFICULTIES}, got {difficulty!r}")

    return Settings(
        max_table_cells=max_cells,
        log_level=level,
        default_difficulty=difficulty,
        seed=_int_env("KNAPSACK_SEED", None),
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
