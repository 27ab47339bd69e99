from __future__ import annotations

import pytest

from data.sample_items import (
    DIFFICULTY_PRESETS,
    EMOJI_CATALOG,
    MIN_CAPACITY,
    capacity_for,
    generate_items,
)
from utils.config import DIFFICULTIES


def test_presets_cover_configured_difficulties() -> None:
    assert tuple(DIFFICULTY_PRESETS) == DIFFICULTIES


@pytest.mark.parametrize("difficulty, count", [("easy", 6), ("medium", 8), ("hard", 10)])
def test_generate_items_respects_preset(difficulty: str, count: int) -> None:
    cfg = DIFFICULTY_PRESETS[difficulty]
    items = generate_items(difficulty, seed=11)
    assert len(items) == count
    assert len({it.id for it in items}) == count
    for i, it in enumerate(items):
        assert cfg["weight"][0] <= it.weight <= cfg["weight"][1]
        assert cfg["value"][0] <= it.value <= cfg["value"][1]
        assert (it.emoji, it.name) == EMOJI_CATALOG[i]
        assert type(it.weight) is int and type(it.value) is int


def test_generate_items_is_reproducible_under_seed() -> None:
    assert generate_items("hard", seed=5) == generate_items("hard", seed=5)
    assert generate_items("hard", seed=5) != generate_items("hard", seed=6)


def test_unknown_difficulty() -> None:
    with pytest.raises(ValueError, match="unknown difficulty"):
        generate_items("nightmare")
    with pytest.raises(ValueError):
        capacity_for([], "nightmare")


def test_capacity_for_uses_ratio_and_floor(abcd_items) -> None:
    # total weight 14
    assert capacity_for(abcd_items, "easy") == MIN_CAPACITY
    heavy = generate_items("hard", seed=2)
    total = sum(it.weight for it in heavy)
    assert capacity_for(heavy, "hard") == max(MIN_CAPACITY, int(total * 0.33))
