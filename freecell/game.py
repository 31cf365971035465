from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Union

from freecell import deck
from freecell.fingerprint import fingerprint
from freecell.layout import (
    BASE_START,
    PILE_NUM,
    PILE_START,
    base_range,
    cell_range,
    desk_range,
    is_tableau,
    pile_range,
    play_range,
    spot_name,
    spot_to_hex,
)

Pile = list[int]
Desk = list[Pile]
# Two bytes per move: giver spot, then taker spot.
Path = bytes


@dataclass(frozen=True, slots=True)
class Move:
    """A card going from the top of ``giver`` to the top of ``taker``."""

    giver: int
    taker: int

    def to_hex(self) -> str:
        return spot_to_hex(self.giver) + spot_to_hex(self.taker)

    def to_notation(self) -> str:
        return f"{spot_name(self.giver)} -> {spot_name(self.taker)}"


def iter_path(path: Path) -> Iterator[Move]:
    for i in range(0, len(path), 2):
        yield Move(path[i], path[i + 1])


def pack_moves(moves: Iterable[Move]) -> Path:
    buf = bytearray()
    for mv in moves:
        buf.append(mv.giver)
        buf.append(mv.taker)
    return bytes(buf)


class Game:
    """
    A mutable FreeCell board plus the path that produced it from the deal.

    move_card/backward are exact inverses and do not check legality;
    the move generators only emit legal moves.
    """

    def __init__(self):
        self.desk: Desk = [[] for _ in desk_range()]
        self._path = bytearray()

    # -- path ---------------------------------------------------------------

    def path(self) -> Path:
        return bytes(self._path)

    def path_len(self) -> int:
        return len(self._path) // 2

    def moves(self) -> Iterator[Move]:
        return iter_path(bytes(self._path))

    def last_move(self) -> Optional[Move]:
        if not self._path:
            return None
        return Move(self._path[-2], self._path[-1])

    def clear(self):
        self._path.clear()
        for pile in self.desk:
            pile.clear()

    def deal(self, cards: Iterable[int]):
        self.clear()
        for index, card in enumerate(cards):
            self.desk[PILE_START + index % PILE_NUM].append(card)

    def move_card(self, giver: int, taker: int):
        stack = self.desk[giver]
        if not stack:
            raise IndexError(f"empty giver: {spot_name(giver)}")
        self.desk[taker].append(stack.pop())
        self._path.append(giver)
        self._path.append(taker)

    def backward(self, mark: int):
        path = self._path
        desk = self.desk
        while len(path) > 2 * mark:
            # move destination => source
            taker = path.pop()
            giver = path.pop()
            stack = desk[taker]
            if not stack:
                raise IndexError(f"empty taker: {spot_name(taker)}")
            desk[giver].append(stack.pop())

    def rewind(self):
        self.backward(0)

    def forward(self, moves: Union[Path, bytearray, Iterable[Move]]):
        if isinstance(moves, (bytes, bytearray)):
            for i in range(0, len(moves), 2):
                self.move_card(moves[i], moves[i + 1])
            return
        for mv in moves:
            self.move_card(mv.giver, mv.taker)

    def set_path(self, moves: Union[Path, bytearray, Iterable[Move]]):
        self.rewind()
        self.forward(moves)

    # -- queries ------------------------------------------------------------

    def card_at(self, spot: int) -> Optional[int]:
        stack = self.desk[spot]
        return stack[-1] if stack else None

    def is_move_forward(self, giver: int, taker: int) -> bool:
        path = self._path
        if not path:
            return True
        return path[-2] != taker or path[-1] != giver

    def base_min_ranks(self) -> tuple[int, int]:
        """Lowest foundation depth among the black and the red suits."""
        black = deck.RANK_NUM
        red = deck.RANK_NUM
        for i in base_range():
            rank = len(self.desk[i])
            if deck.is_card_black(i - BASE_START):
                black = min(black, rank)
            else:
                red = min(red, rank)
        return black, red

    def get_base(self, card: int) -> Optional[int]:
        taker = BASE_START + deck.card_suit(card)
        if len(self.desk[taker]) == deck.card_rank(card):
            return taker
        return None

    def get_empty_cell(self) -> Optional[int]:
        for i in cell_range():
            if not self.desk[i]:
                return i
        return None

    def get_empty_pile(self) -> Optional[int]:
        for i in pile_range():
            if not self.desk[i]:
                return i
        return None

    def count_empty_cells(self) -> int:
        return sum(1 for i in cell_range() if not self.desk[i])

    def count_empty_piles(self) -> int:
        return sum(1 for i in pile_range() if not self.desk[i])

    def count_empty(self) -> int:
        return self.count_empty_cells() + self.count_empty_piles()

    def count_solved(self) -> int:
        return sum(len(self.desk[i]) for i in base_range())

    def count_unsolved(self) -> int:
        return sum(len(self.desk[i]) for i in play_range())

    def is_done(self) -> bool:
        for i in play_range():
            if self.desk[i]:
                return False
        return True

    def count_locks_at(self, spot: int) -> int:
        """Cards sitting above a lower card of the same suit."""
        lowest = [deck.RANK_NUM] * deck.SUIT_NUM
        count = 0
        for card in self.desk[spot]:
            suit = deck.card_suit(card)
            rank = deck.card_rank(card)
            if rank > lowest[suit]:
                count += 1
            else:
                lowest[suit] = rank
        return count

    def count_locks(self) -> int:
        return sum(self.count_locks_at(i) for i in pile_range())

    def estimate_path_len(self) -> int:
        return self.path_len() + self.count_unsolved() + self.count_locks()

    def fingerprint(self) -> bytes:
        return fingerprint(self.desk)

    # -- auto play ----------------------------------------------------------

    def move_cards_auto(self) -> int:
        """Promote safe cards to the foundations until nothing moves.

        A card is safe when its rank is at most one above the lowest
        foundation of the opposite color.
        """
        count = 0
        progress = True
        while progress:
            progress = False
            ranks = self.base_min_ranks()
            for giver in play_range():
                card = self.card_at(giver)
                if card is None or not _is_safe(card, ranks):
                    continue
                taker = self.get_base(card)
                if taker is None:
                    continue
                self.move_card(giver, taker)
                count += 1
                progress = True
                break
        return count

    # -- move generation ----------------------------------------------------

    def moves_to_base(self) -> Iterator[Move]:
        for giver in play_range():
            card = self.card_at(giver)
            if card is None:
                continue
            taker = self.get_base(card)
            if taker is not None and self.is_move_forward(giver, taker):
                yield Move(giver, taker)

    def moves_to_tableau(self) -> Iterator[Move]:
        for giver in play_range():
            free_card = self.card_at(giver)
            if free_card is None:
                continue
            for taker in pile_range():
                pile_card = self.card_at(taker)
                if (
                    pile_card is not None
                    and giver != taker
                    and is_tableau(pile_card, free_card)
                    and self.is_move_forward(giver, taker)
                ):
                    yield Move(giver, taker)

        # A foundation card may come back only while no card of the opposite
        # color could still need it.
        ranks = self.base_min_ranks()
        for giver in base_range():
            free_card = self.card_at(giver)
            if free_card is None or _is_safe(free_card, ranks):
                continue
            for taker in pile_range():
                pile_card = self.card_at(taker)
                if (
                    pile_card is not None
                    and is_tableau(pile_card, free_card)
                    and self.is_move_forward(giver, taker)
                ):
                    yield Move(giver, taker)

    def moves_to_cell(self) -> Iterator[Move]:
        taker = self.get_empty_cell()
        if taker is None:
            return
        for giver in pile_range():
            if self.desk[giver] and self.is_move_forward(giver, taker):
                yield Move(giver, taker)

    def moves_to_pile(self) -> Iterator[Move]:
        taker = self.get_empty_pile()
        if taker is None:
            return
        # Moving the last card of a cascade to another empty one is a no-op.
        for giver in pile_range():
            if len(self.desk[giver]) > 1 and self.is_move_forward(giver, taker):
                yield Move(giver, taker)
        for giver in cell_range():
            if self.desk[giver] and self.is_move_forward(giver, taker):
                yield Move(giver, taker)

    def iter_moves(self) -> Iterator[Move]:
        yield from self.moves_to_base()
        yield from self.moves_to_tableau()
        yield from self.moves_to_cell()
        yield from self.moves_to_pile()

    def all_moves(self) -> list[Move]:
        return list(self.iter_moves())

    def has_move_to_base(self) -> bool:
        return next(self.moves_to_base(), None) is not None

    def has_move_to_tableau(self) -> bool:
        return next(self.moves_to_tableau(), None) is not None

    def has_move_to_cell(self) -> bool:
        return next(self.moves_to_cell(), None) is not None

    def has_move_to_pile(self) -> bool:
        return next(self.moves_to_pile(), None) is not None

    def has_next_move(self) -> bool:
        return (
            self.has_move_to_cell()
            or self.has_move_to_pile()
            or self.has_move_to_base()
            or self.has_move_to_tableau()
        )


def _is_safe(card: int, ranks: tuple[int, int]) -> bool:
    black, red = ranks
    opposite = red if deck.is_card_black(card) else black
    return 1 + opposite >= deck.card_rank(card)
