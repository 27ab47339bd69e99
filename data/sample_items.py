import numpy as np

from classical.knapsack_dp import Item

EMOJI_CATALOG = [
    ("🧪", "Potion"),
    ("📘", "Book"),
    ("🧩", "Puzzle Piece"),
    ("🧁", "Cupcake"),
    ("⚙️", "Gear"),
    ("💎", "Gem"),
    ("🥤", "Soda"),
    ("📷", "Camera"),
    ("🎮", "Game Controller"),
    ("🎧", "Headphones"),
    ("🔬", "Microscope"),
    ("🧠", "Brain Booster"),
    ("🪙", "Coin"),
    ("🍫", "Chocolate Bar"),
    ("🌟", "Star Badge"),
    ("🚀", "Rocket"),
    ("🧸", "Teddy Bear"),
    ("📦", "Supply Box"),
    ("🍎", "Apple"),
    ("🥇", "Gold Medal"),
]

# count, (weight min, max), (value min, max), capacity ratio
DIFFICULTY_PRESETS = {
    "easy": dict(count=6, weight=(1, 10), value=(2, 20), cap_ratio=0.45),
    "medium": dict(count=8, weight=(1, 10), value=(2, 20), cap_ratio=0.38),
    "hard": dict(count=10, weight=(1, 15), value=(2, 30), cap_ratio=0.33),
}

MIN_CAPACITY = 8
CAPACITY_SLIDER_RANGE = (4, 40)


def _preset(difficulty):
    try:
        return DIFFICULTY_PRESETS[difficulty]
    except KeyError:
        raise ValueError(
            f"unknown difficulty {difficulty!r}; expected one of {sorted(DIFFICULTY_PRESETS)}"
        ) from None


def generate_items(difficulty, seed=None):
    """Random puzzle for the given difficulty; same seed, same items (ids included)."""
    cfg = _preset(difficulty)
    rng = np.random.default_rng(seed)
    w_lo, w_hi = cfg["weight"]
    v_lo, v_hi = cfg["value"]
    items = []
    used_ids = set()
    for i in range(cfg["count"]):
        weight = int(rng.integers(w_lo, w_hi + 1))
        value = int(rng.integers(v_lo, v_hi + 1))
        uid = f"{int(rng.integers(0, 16**7)):07x}"
        while uid in used_ids:
            uid = f"{int(rng.integers(0, 16**7)):07x}"
        used_ids.add(uid)
        emoji, name = EMOJI_CATALOG[i % len(EMOJI_CATALOG)]
        items.append(Item(id=uid, weight=weight, value=value, name=name, emoji=emoji))
    return items


def capacity_for(items, difficulty):
    ratio = _preset(difficulty)["cap_ratio"]
    total_w = sum(it.weight for it in items)
    return max(MIN_CAPACITY, int(np.floor(total_w * ratio)))


def demo_items():
    """The four-item puzzle used by the self-test panel: best value 24 at capacity 7."""
    return [
        Item(id="a", name="A", weight=1, value=1, emoji="🧪"),
        Item(id="b", name="B", weight=2, value=6, emoji="💎"),
        Item(id="c", name="C", weight=5, value=18, emoji="🚀"),
        Item(id="d", name="D", weight=6, value=22, emoji="🎮"),
    ]
