import tempfile
import unittest
from pathlib import Path

from PIL import Image, ImageDraw

from freecell import deck
from freecell import snapshot
from freecell.game import Game


class SnapshotTestCase(unittest.TestCase):
    def test_render_dealt_board(self):
        game = Game()
        game.deal(deck.deal(1))
        img = snapshot.render_desk(game)
        self.assertEqual((614, 384), img.size)
        self.assertEqual(snapshot.TABLE_COLOR, img.getpixel((0, 0)))

    def test_render_empty_board(self):
        img = snapshot.render_desk(Game())
        self.assertEqual((614, 228), img.size)

    def test_suit_glyphs_fill_their_center(self):
        for suit in range(deck.SUIT_NUM):
            img = Image.new("RGB", (40, 40), (255, 255, 255))
            snapshot.draw_suit(ImageDraw.Draw(img), suit, 20, 20, 30, snapshot.suit_color(suit))
            self.assertEqual(snapshot.suit_color(suit), img.getpixel((20, 26)))
            self.assertEqual((255, 255, 255), img.getpixel((1, 1)))

    def test_save_snapshot_writes_png(self):
        game = Game()
        game.deal(deck.deal(2))
        game.move_cards_auto()
        with tempfile.TemporaryDirectory() as td:
            out = snapshot.save_snapshot(game, Path(td) / "shots" / "deal.png")
            self.assertTrue(out.exists())
            with Image.open(out) as img:
                self.assertEqual("PNG", img.format)


if __name__ == "__main__":
    unittest.main()
