"""PNG picture of a desk: cells and foundations on top, cascades fanned below."""
from __future__ import annotations

from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from freecell import deck
from freecell.game import Game
from freecell.layout import PILE_NUM, base_range, cell_range, pile_range

CARD_W, CARD_H = 64, 88
GAP = 10
FAN_STEP = 26
MARGIN = 16

TABLE_COLOR = (27, 67, 50)
SLOT_OUTLINE = (153, 246, 228)
CARD_FRONT = (250, 245, 236)
CARD_BORDER = (70, 58, 50)


def get_font(size):
    for name in ("DejaVuSans-Bold.ttf", "Arial.ttf", "Helvetica.ttc"):
        try:
            return ImageFont.truetype(name, size=size)
        except OSError:
            continue
    return ImageFont.load_default()


def suit_color(suit):
    return (190, 40, 40) if suit % 2 == 1 else (35, 35, 45)


# Suit glyphs in unit coordinates around the glyph center, scaled by its size.
SUIT_SHAPES = {
    0: (
        ("polygon", ((-0.5, 0.15), (0.5, 0.15), (0.0, -0.5))),
        ("ellipse", (-0.5, -0.05, 0.0, 0.3)),
        ("ellipse", (0.0, -0.05, 0.5, 0.3)),
        ("rectangle", (-0.08, 0.15, 0.08, 0.5)),
    ),
    1: (("polygon", ((0.0, -0.5), (0.4, 0.0), (0.0, 0.5), (-0.4, 0.0))),),
    2: (
        ("ellipse", (-0.5, -0.1, -0.05, 0.35)),
        ("ellipse", (0.05, -0.1, 0.5, 0.35)),
        ("ellipse", (-0.22, -0.5, 0.22, -0.05)),
        ("rectangle", (-0.08, 0.1, 0.08, 0.5)),
    ),
    3: (
        ("ellipse", (-0.5, -0.4, 0.0, 0.1)),
        ("ellipse", (0.0, -0.4, 0.5, 0.1)),
        ("polygon", ((-0.48, -0.1), (0.48, -0.1), (0.0, 0.5))),
    ),
}


def draw_suit(draw, suit, cx, cy, size, fill):
    for kind, coords in SUIT_SHAPES[suit]:
        if kind == "polygon":
            draw.polygon([(cx + x * size, cy + y * size) for x, y in coords], fill=fill)
            continue
        x0, y0, x1, y1 = coords
        box = (cx + x0 * size, cy + y0 * size, cx + x1 * size, cy + y1 * size)
        if kind == "ellipse":
            draw.ellipse(box, fill=fill)
        else:
            draw.rectangle(box, fill=fill)


def draw_card(draw, x, y, card, font):
    suit = deck.card_suit(card)
    color = suit_color(suit)
    draw.rectangle((x, y, x + CARD_W - 1, y + CARD_H - 1), fill=CARD_FRONT, outline=CARD_BORDER, width=2)
    draw.text((x + 6, y + 3), deck.RANKS[deck.card_rank(card)], fill=color, font=font)
    draw_suit(draw, suit, x + CARD_W - 16, y + 13, 14, color)
    draw_suit(draw, suit, x + CARD_W // 2, y + CARD_H // 2 + 8, 26, color)


def draw_slot(draw, x, y):
    draw.rectangle((x, y, x + CARD_W - 1, y + CARD_H - 1), outline=SLOT_OUTLINE, width=1)


def _column_x(column: int) -> int:
    return MARGIN + column * (CARD_W + GAP)


def render_desk(game: Game) -> Image.Image:
    desk = game.desk
    height = max((len(desk[i]) for i in pile_range()), default=0)
    width = 2 * MARGIN + PILE_NUM * CARD_W + (PILE_NUM - 1) * GAP
    pile_top = MARGIN + CARD_H + 2 * GAP
    total_h = pile_top + CARD_H + max(0, height - 1) * FAN_STEP + MARGIN

    img = Image.new("RGB", (width, total_h), TABLE_COLOR)
    d = ImageDraw.Draw(img)
    font = get_font(18)

    for column, spot in enumerate(list(cell_range()) + list(base_range())):
        x = _column_x(column)
        card = game.card_at(spot)
        if card is None:
            draw_slot(d, x, MARGIN)
        else:
            draw_card(d, x, MARGIN, card, font)

    for column, spot in enumerate(pile_range()):
        x = _column_x(column)
        if not desk[spot]:
            draw_slot(d, x, pile_top)
            continue
        for row, card in enumerate(desk[spot]):
            draw_card(d, x, pile_top + row * FAN_STEP, card, font)
    return img


def save_snapshot(game: Game, out_path) -> Path:
    path = Path(out_path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    render_desk(game).save(path, "PNG")
    return path
