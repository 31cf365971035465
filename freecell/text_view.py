from __future__ import annotations

from freecell import deck
from freecell.game import Game, Path, iter_path
from freecell.layout import BASE_NUM, CELL_NUM, base_range, cell_range, pile_range, spot_name


def format_game(game: Game) -> str:
    """
    Cells and foundations on the first line, then the cascades row by row:

    |  |  |  |  |A♠|  |  |  |
    -------------------------
    |K♦|3♠|4♠|J♠|T♥|7♠|K♠|A♠|
    """
    desk = game.desk
    line = "|"
    for i in cell_range():
        if len(desk[i]) == 0:
            line += "  "
        elif len(desk[i]) == 1:
            line += deck.card_to_string(desk[i][0])
        else:
            line += "XX"
        line += "|"
    for i in base_range():
        line += deck.card_to_string(desk[i][-1]) if desk[i] else "  "
        line += "|"

    lines = [line, "-" * (3 * (CELL_NUM + BASE_NUM) + 1)]
    height = max((len(desk[i]) for i in pile_range()), default=0)
    for row in range(height):
        line = "|"
        for i in pile_range():
            line += deck.card_to_string(desk[i][row]) if len(desk[i]) > row else "  "
            line += "|"
        lines.append(line)
    return "\n".join(lines)


def format_replay(cards, path: Path) -> list[str]:
    """Numbered move list, e.g. ``1. A♠: pile 8 -> base 1``."""
    game = Game()
    game.deal(cards)
    lines = []
    for i, mv in enumerate(iter_path(path), 1):
        card = game.card_at(mv.giver)
        if card is None:
            raise IndexError(f"empty giver at move {i}: {spot_name(mv.giver)}")
        lines.append(f"{i}. {deck.card_to_string(card)}: {spot_name(mv.giver)} -> {spot_name(mv.taker)}")
        game.move_card(mv.giver, mv.taker)
    return lines


def print_game(game: Game):
    print(format_game(game))
    print()
