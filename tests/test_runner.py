import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path

from freecell import deck
from freecell.game import Game, Move, pack_moves
from freecell.layout import BASE_START, CELL_START, PILE_START
from solver import runner
from solver.config import DEFAULT_CONFIG, PLAIN_GRADES, SolverConfig
from solver.engine import Solver

KNOWN_SEED = 173205951
KNOWN_PATH = (
    "4871317c7b737478653d35d53d3e39c8606c656a60e04e46e6461e1f16f6e6213ed35d535f575171f1272f262b"
    "2aead35d5e590939c94a083a395c56060a4204020205050beb6b1b1a1e12e21e1b17152b186869d9f9e96a6b2a"
    "2b6a6b2a2b4a38c818787958595a49686b28"
)


def king_on_ace_deal():
    cards = list(range(deck.CARD_NUM - 1, -1, -1))
    for index, card in zip(range(3, deck.CARD_NUM, 8), (40, 32, 24, 16, 8, 0, 48)):
        cards[index] = card
    return cards


class HexPathTestCase(unittest.TestCase):
    def test_move_digits(self):
        path = pack_moves([
            Move(PILE_START + 4, BASE_START),
            Move(PILE_START + 7, PILE_START + 1),
            Move(PILE_START + 7, CELL_START),
        ])
        self.assertEqual("48717c", runner.path_to_hex(path))
        self.assertEqual(path, runner.hex_to_path("48717c"))

    def test_known_link_replays_to_done(self):
        path = runner.hex_to_path(KNOWN_PATH)
        self.assertEqual(108, len(path) // 2)
        self.assertEqual(KNOWN_PATH, runner.path_to_hex(path))

        game = Game()
        game.deal(deck.deal(KNOWN_SEED))
        game.forward(path)
        self.assertTrue(game.is_done())

    def test_bad_hex_raises(self):
        with self.assertRaises(ValueError):
            runner.hex_to_path("487")
        with self.assertRaises(ValueError):
            runner.hex_to_path("4g")

    def test_make_link(self):
        path = runner.hex_to_path("4871")
        self.assertEqual(
            "https://constf1.github.io/angular/freecell-demo?deal=12&path=4871",
            runner.make_link(12, path),
        )


class RunSolverTestCase(unittest.TestCase):
    def test_stops_on_first_solution(self):
        config = SolverConfig(any_solution=True)
        solver = Solver(config)
        solver.deal_cards(king_on_ace_deal())
        seen = []

        report = runner.run_solver(solver, config, on_solution=seen.append)

        self.assertEqual("solved", report.status)
        self.assertEqual("any_solution", report.stop_reason)
        self.assertEqual(53, report.path_len)
        self.assertEqual([report.path], seen)
        self.assertIsNone(report.link())

    def test_runs_until_frontier_is_empty(self):
        solver = Solver()
        solver.deal_cards(king_on_ace_deal())
        report = runner.run_solver(solver)
        self.assertEqual("solved", report.status)
        self.assertEqual("exhausted", report.stop_reason)
        self.assertEqual(1, report.solutions_found)

    def test_budgeted_seed_report(self):
        config = SolverConfig(grab_max=200, done_max=1000, max_seconds=30.0, any_solution=True)
        report = runner.solve_seed(KNOWN_SEED, config)

        self.assertIn(report.status, {"solved", "not_found"})
        self.assertIn(report.stop_reason, {"any_solution", "done_limit", "time_limit", "exhausted"})
        data = report.to_dict()
        self.assertEqual(KNOWN_SEED, data["seed"])
        self.assertIn("expanded_paths", data["stats"])
        if report.status == "solved":
            self.assertTrue(data["link"].endswith(data["path"]))
            game = Game()
            game.deal(deck.deal(KNOWN_SEED))
            game.forward(report.path)
            self.assertTrue(game.is_done())
        else:
            self.assertIsNone(data["path_len"])

    def test_solves_known_deal(self):
        config = SolverConfig(any_solution=True, done_max=500_000, max_seconds=300.0)
        report = runner.solve_seed(KNOWN_SEED, config)

        self.assertEqual("solved", report.status)
        self.assertEqual("any_solution", report.stop_reason)
        self.assertLessEqual(report.path_len, config.path_max)

        game = Game()
        game.deal(deck.deal(KNOWN_SEED))
        game.forward(report.path)
        self.assertEqual(deck.CARD_NUM, game.count_solved())
        self.assertTrue(game.is_done())

        link = report.link()
        self.assertTrue(link.startswith(f"{runner.LINK_BASE}?deal={KNOWN_SEED}&path="))
        self.assertEqual(report.path, runner.hex_to_path(link.rsplit("=", 1)[1]))


class CommandLineTestCase(unittest.TestCase):
    def test_defaults(self):
        args = runner.parse_args(["42"])
        self.assertEqual(42, args.deal)
        self.assertEqual(DEFAULT_CONFIG, runner.build_config(args))

    def test_rejects_bad_numbers(self):
        err = io.StringIO()
        with contextlib.redirect_stderr(err), self.assertRaises(SystemExit):
            runner.parse_args(["42", "-P", "abc"])
        self.assertIn("should be a non-negative integer value, but got 'abc'.", err.getvalue())

        with contextlib.redirect_stderr(io.StringIO()), self.assertRaises(SystemExit):
            runner.parse_args(["-1"])

    def test_options_override_config_file(self):
        with tempfile.TemporaryDirectory() as td:
            ini = Path(td) / "solver.ini"
            ini.write_text("[solver]\npath_max = 120\ngrab_max = 30\ngrades = plain\n", encoding="utf-8")
            args = runner.parse_args(["7", "--config", str(ini), "-S", "500", "-A", "-D"])
            config = runner.build_config(args)

        self.assertEqual(120, config.path_max)
        self.assertEqual(500, config.grab_max)
        self.assertTrue(config.any_solution)
        self.assertTrue(config.verbose)
        self.assertEqual(PLAIN_GRADES, config.grade_policy)

    def test_main_prints_json_and_saves_settings(self):
        with tempfile.TemporaryDirectory() as td:
            saved = Path(td) / "out.ini"
            out = io.StringIO()
            with contextlib.redirect_stdout(out):
                runner.main([
                    str(KNOWN_SEED), "-L", "1000", "-S", "200", "-T", "30", "-A",
                    "--json", "--save-config", str(saved),
                ])
            self.assertTrue(saved.exists())
            self.assertIn("done_max = 1000", saved.read_text(encoding="utf-8"))

        data = json.loads(out.getvalue())
        self.assertEqual(KNOWN_SEED, data["seed"])
        self.assertIn(data["status"], {"solved", "not_found"})


if __name__ == "__main__":
    unittest.main()
