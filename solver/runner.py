from __future__ import annotations

import argparse
import json
import time
from dataclasses import dataclass, replace
from typing import Optional

from freecell.game import Game, Path, iter_path
from freecell.layout import hex_to_spot
from freecell.text_view import format_replay, print_game
from solver.config import DEFAULT_CONFIG, GRADE_POLICIES, SolverConfig
from solver.engine import STEP_EXHAUSTED, STEP_SOLVED, Solver
from solver.settings_store import config_to_settings, load_settings, save_settings, settings_to_config

LINK_BASE = "https://constf1.github.io/angular/freecell-demo"


def path_to_hex(path: Path) -> str:
    return "".join(mv.to_hex() for mv in iter_path(path))


def hex_to_path(text: str) -> Path:
    text = text.strip()
    if len(text) % 2 != 0:
        raise ValueError(f"hex path must have an even length, got {len(text)}")
    buf = bytearray()
    for ch in text:
        try:
            spot = hex_to_spot(ch)
        except ValueError:
            raise ValueError(f"not a spot digit: {ch!r}") from None
        buf.append(spot)
    return bytes(buf)


def make_link(seed: int, path: Path) -> str:
    return f"{LINK_BASE}?deal={seed}&path={path_to_hex(path)}"


@dataclass(slots=True)
class SolveReport:
    seed: Optional[int]
    status: str
    stop_reason: str
    path: Path
    steps: int
    done_size: int
    bank_size: int
    elapsed_ms: float
    solutions_found: int
    stats: dict

    @property
    def path_len(self) -> int:
        return len(self.path) // 2

    def link(self) -> Optional[str]:
        if self.status != "solved" or self.seed is None:
            return None
        return make_link(self.seed, self.path)

    def to_dict(self) -> dict:
        return {
            "seed": self.seed,
            "status": self.status,
            "stop_reason": self.stop_reason,
            "path_len": self.path_len if self.status == "solved" else None,
            "path": path_to_hex(self.path),
            "link": self.link(),
            "steps": self.steps,
            "done_size": self.done_size,
            "bank_size": self.bank_size,
            "elapsed_ms": round(self.elapsed_ms, 3),
            "solutions_found": self.solutions_found,
            "stats": self.stats,
        }


def run_solver(solver: Solver, config: Optional[SolverConfig] = None, on_solution=None) -> SolveReport:
    """Step a dealt solver until a budget runs out, the frontier empties or, with any_solution, it solves."""
    if config is None:
        config = solver.config
    path_upper_limit = config.path_upper_limit()
    batch_limit = config.batch_limit()
    done_limit = config.done_limit()
    started = time.perf_counter()

    if solver.solution is not None and on_solution is not None:
        on_solution(solver.solution)

    stop_reason = "exhausted"
    while True:
        if config.any_solution and solver.solution is not None:
            stop_reason = "any_solution"
            break
        outcome = solver.step(path_upper_limit, batch_limit, config.verbose)
        if outcome == STEP_EXHAUSTED:
            stop_reason = "exhausted"
            break
        if outcome == STEP_SOLVED and on_solution is not None:
            on_solution(solver.solution)
        if config.any_solution and outcome == STEP_SOLVED:
            stop_reason = "any_solution"
            break
        if len(solver.done) > done_limit:
            stop_reason = "done_limit"
            if config.verbose:
                print(
                    f"Done: {len(solver.done)}, {len(solver.bank)} still in process, "
                    "but we're over the limit!\n"
                )
            break
        if config.max_seconds > 0 and (time.perf_counter() - started) >= config.max_seconds:
            stop_reason = "time_limit"
            break

    elapsed_ms = (time.perf_counter() - started) * 1000.0
    solved = solver.solution is not None
    return SolveReport(
        seed=solver.seed,
        status="solved" if solved else "not_found",
        stop_reason=stop_reason,
        path=solver.solution if solved else b"",
        steps=solver.stats.steps,
        done_size=len(solver.done),
        bank_size=len(solver.bank),
        elapsed_ms=elapsed_ms,
        solutions_found=solver.stats.solutions_found,
        stats=solver.stats.to_dict(),
    )


def solve_seed(seed: int, config: SolverConfig = DEFAULT_CONFIG, on_solution=None) -> SolveReport:
    solver = Solver(config)
    solver.deal(seed)
    return run_solver(solver, config, on_solution=on_solution)


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        number = -1
    if number < 0:
        raise argparse.ArgumentTypeError(f"should be a non-negative integer value, but got '{value}'.")
    return number


def _non_negative_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        number = -1.0
    if number < 0:
        raise argparse.ArgumentTypeError(f"should be a non-negative number, but got '{value}'.")
    return number


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Solves FreeCell solitaires for [https://constf1.github.io/angular/freecell-demo]"
    )
    parser.add_argument("deal", type=_non_negative_int, metavar="NUMBER", help="The deal number to use.")
    parser.add_argument(
        "-P", "--path", dest="path_max", type=_non_negative_int, default=None, metavar="NUMBER",
        help=f"The upper bound of the search range, inclusive. Default: {DEFAULT_CONFIG.path_max}.",
    )
    parser.add_argument(
        "-S", "--scoop", dest="grab_max", type=_non_negative_int, default=None, metavar="NUMBER",
        help=f"The maximum number of variants processed in one iteration. Default: {DEFAULT_CONFIG.grab_max}.",
    )
    parser.add_argument(
        "-L", "--limit", dest="done_max", type=_non_negative_int, default=None, metavar="NUMBER",
        help=f"The maximum number of variants processed in total. Default: {DEFAULT_CONFIG.done_max}.",
    )
    parser.add_argument(
        "-T", "--max-seconds", dest="max_seconds", type=_non_negative_float, default=None, metavar="SECONDS",
        help="Wall clock budget in seconds, 0 for none. Default: 0.",
    )
    parser.add_argument("-D", "--debug", "--verbose", dest="verbose", action="store_true", default=None, help="Use debug output.")
    parser.add_argument("-A", "--any", dest="any_solution", action="store_true", default=None, help="Stop on the first result.")
    parser.add_argument("--grades", choices=tuple(GRADE_POLICIES), default=None, help="Frontier grading policy. Default: thresholded.")
    parser.add_argument("--config", type=str, default="", help="Optional INI file with a [solver] section.")
    parser.add_argument("--save-config", type=str, default="", help="Write the effective settings to this INI file.")
    parser.add_argument("--snapshot", type=str, default="", help="Save a PNG of the dealt board to this path.")
    parser.add_argument("--json", action="store_true", help="Print the report as json.")
    parser.add_argument("--pretty", action="store_true", help="Pretty-print json output.")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> SolverConfig:
    config = DEFAULT_CONFIG
    if args.config:
        config = settings_to_config(load_settings(args.config), config)

    overrides = {}
    for name in ("path_max", "grab_max", "done_max", "max_seconds", "any_solution", "verbose"):
        value = getattr(args, name)
        if value is not None:
            overrides[name] = value
    if args.grades is not None:
        overrides["grade_policy"] = GRADE_POLICIES[args.grades]
    return replace(config, **overrides)


def print_link(seed: int, path: Path):
    print(f"{make_link(seed, path)}\n")


def print_path(cards, path: Path):
    for line in format_replay(cards, path):
        print(line)


def main(argv=None) -> None:
    args = parse_args(argv)
    config = build_config(args)
    if args.save_config:
        save_settings(config_to_settings(config), args.save_config)

    seed = args.deal
    solver = Solver(config)
    solver.deal(seed)

    if args.snapshot:
        from freecell.snapshot import save_snapshot

        game = Game()
        game.deal(solver.cards)
        out = save_snapshot(game, args.snapshot)
        print(f"snapshot saved out={out}")

    def on_solution(path: Path):
        if args.json:
            return
        print(f"Path ({len(path) // 2}):")
        print_link(seed, path)

    report = run_solver(solver, config, on_solution=on_solution)

    if args.json:
        if args.pretty:
            print(json.dumps(report.to_dict(), ensure_ascii=False, indent=2))
        else:
            print(json.dumps(report.to_dict(), ensure_ascii=False))
        return

    if config.verbose:
        game = Game()
        game.deal(solver.cards)
        print(f"Deal #{seed}")
        print_game(game)
        if report.status == "solved":
            print("Solution:")
            print_path(solver.cards, report.path)
        else:
            print("Solution not found!")
    elif report.status != "solved":
        print(
            f"Solution not found! reason={report.stop_reason} "
            f"done={report.done_size} bank={report.bank_size} elapsed_ms={report.elapsed_ms:.1f}"
        )


if __name__ == "__main__":
    main()
