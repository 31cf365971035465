"""Standard 52-card deck.

13 ranks in each of the 4 French suits. A card is a small int,
``rank * SUIT_NUM + suit``, so the suit order is spades, diamonds, clubs,
hearts and the color of a card is the parity of its suit.
"""
from __future__ import annotations

import math

RANK_NUM = 13
SUIT_NUM = 4
CARD_NUM = RANK_NUM * SUIT_NUM

RANKS = "A23456789TJQK"
SUITS = "♠♦♣♥"

_LCG_M = float(0x80000000)
_LCG_A = 1103515245.0
_LCG_C = 12345.0


def to_card(rank: int, suit: int) -> int:
    return rank * SUIT_NUM + suit


def card_rank(card: int) -> int:
    return (card // SUIT_NUM) % RANK_NUM


def card_suit(card: int) -> int:
    return card % SUIT_NUM


def card_color(card: int) -> int:
    """0 for blacks (spades and clubs) and 1 for reds (diamonds and hearts)."""
    return card & 1


def is_card_black(card: int) -> bool:
    return card_color(card) == 0


def is_card_red(card: int) -> bool:
    return not is_card_black(card)


def card_to_string(card: int) -> str:
    return RANKS[card_rank(card)] + SUITS[card_suit(card)]


def to_string(cards) -> str:
    return "".join(card_to_string(card) for card in cards)


def new() -> list[int]:
    return list(range(CARD_NUM))


def shuffle(cards: list[int], seed: int) -> list[int]:
    """Shuffle ``cards`` in place with the demo site's LCG and return them.

    The generator runs in double precision; deals must match the ones the
    replay page produces for the same number.
    """
    size = len(cards)
    for i in range(size):
        seed = int(math.floor(math.fmod(_LCG_A * seed + _LCG_C, _LCG_M)))
        j = seed % size
        if i != j:
            cards[i], cards[j] = cards[j], cards[i]
    return cards


def deal(seed: int) -> list[int]:
    return shuffle(new(), seed)
