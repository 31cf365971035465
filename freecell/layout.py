"""FreeCell desk layout.

The desk is a fixed row of 16 spots: 4 foundations, 4 free cells and
8 cascades. Which zone a spot belongs to follows from its index alone.
"""
from __future__ import annotations

from freecell import deck

BASE_NUM = 4  # foundation piles
CELL_NUM = 4  # open cells
PILE_NUM = 8  # cascades
DESK_SIZE = BASE_NUM + CELL_NUM + PILE_NUM

BASE_START = 0
BASE_END = BASE_START + BASE_NUM

CELL_START = BASE_END
CELL_END = CELL_START + CELL_NUM

PILE_START = CELL_END
PILE_END = PILE_START + PILE_NUM


def desk_range() -> range:
    return range(DESK_SIZE)


def play_range() -> range:
    """Cells and cascades: every spot a card can be played from."""
    return range(BASE_END, DESK_SIZE)


def base_range() -> range:
    return range(BASE_START, BASE_END)


def cell_range() -> range:
    return range(CELL_START, CELL_END)


def pile_range() -> range:
    return range(PILE_START, PILE_END)


def is_base(spot: int) -> bool:
    return BASE_START <= spot < BASE_END


def is_cell(spot: int) -> bool:
    return CELL_START <= spot < CELL_END


def is_pile(spot: int) -> bool:
    return PILE_START <= spot < PILE_END


def is_play(spot: int) -> bool:
    return BASE_END <= spot < DESK_SIZE


def spot_name(spot: int) -> str:
    if is_base(spot):
        return f"base {1 + spot - BASE_START}"
    if is_pile(spot):
        return f"pile {1 + spot - PILE_START}"
    if is_cell(spot):
        return f"cell {1 + spot - CELL_START}"
    return f"unknown {spot}"


def spot_to_compact(spot: int) -> int:
    """Index in the replay page order: cascades, foundations, cells."""
    if is_pile(spot):
        return spot - PILE_START
    if is_base(spot):
        return spot - BASE_START + PILE_NUM
    if is_cell(spot):
        return spot - CELL_START + PILE_NUM + BASE_NUM
    raise ValueError(f"not a desk spot: {spot}")


def compact_to_spot(index: int) -> int:
    if 0 <= index < PILE_NUM:
        return PILE_START + index
    if PILE_NUM <= index < PILE_NUM + BASE_NUM:
        return BASE_START + index - PILE_NUM
    if PILE_NUM + BASE_NUM <= index < DESK_SIZE:
        return CELL_START + index - PILE_NUM - BASE_NUM
    raise ValueError(f"not a compact spot index: {index}")


def spot_to_hex(spot: int) -> str:
    return format(spot_to_compact(spot), "x")


def hex_to_spot(digit: str) -> int:
    return compact_to_spot(int(digit, 16))


def is_tableau(lower: int, upper: int) -> bool:
    """True when ``upper`` may sit on ``lower``: one rank down, other color."""
    return (
        deck.card_rank(lower) == deck.card_rank(upper) + 1
        and deck.card_color(lower) != deck.card_color(upper)
    )
