"""Canonical board key used to spot transpositions.

Layout of the 64 bytes: the depth of each foundation, then every non-empty
cascade as its length followed by its cards from the bottom up, cascades
sorted by content, zero padded. Free cells are left out: with foundations
and cascades fixed, the cells hold whatever cards remain.
"""
from __future__ import annotations

from freecell.deck import CARD_NUM
from freecell.layout import BASE_NUM, BASE_START, PILE_NUM, base_range, pile_range

KEY_SIZE = BASE_NUM + PILE_NUM + CARD_NUM


def fingerprint(desk) -> bytes:
    key = bytearray(KEY_SIZE)
    for i in base_range():
        key[i - BASE_START] = len(desk[i])

    piles = sorted(bytes(desk[i]) for i in pile_range() if desk[i])
    pos = BASE_NUM
    for pile in piles:
        key[pos] = len(pile)
        pos += 1
        key[pos:pos + len(pile)] = pile
        pos += len(pile)
    return bytes(key)
