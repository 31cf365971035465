from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from freecell import deck
from freecell.game import Game, Path
from solver.config import DEFAULT_CONFIG, SolverConfig
from solver.grader import Grader

# Solver status.
IDLE = "idle"
SEARCHING = "searching"
EXHAUSTED = "exhausted"
SOLVED = "solved"

# Outcome of a single step.
STEP_EXHAUSTED = "exhausted"
STEP_SOLVED = "solved"
STEP_BATCH = "batch"

Bank = Grader[Path]
# Fingerprint => lowest estimated total length seen for that board.
Done = dict[bytes, int]


@dataclass(slots=True)
class SolverStats:
    steps: int = 0
    expanded_paths: int = 0
    generated_children: int = 0
    pruned_children: int = 0
    duplicate_children: int = 0
    solutions_found: int = 0

    def to_dict(self) -> dict:
        return {
            "steps": self.steps,
            "expanded_paths": self.expanded_paths,
            "generated_children": self.generated_children,
            "pruned_children": self.pruned_children,
            "duplicate_children": self.duplicate_children,
            "solutions_found": self.solutions_found,
        }


def clean_bank(bank: Bank, game: Game, path_upper_limit: int) -> int:
    """Drop every path whose estimate reaches ``path_upper_limit``."""

    def keep(_grade: int, path: Path) -> bool:
        game.set_path(path)
        return game.estimate_path_len() < path_upper_limit

    return bank.retain(keep)


def clean_done(done: Done, path_upper_limit: int) -> int:
    stale = [key for key, length in done.items() if length >= path_upper_limit]
    for key in stale:
        del done[key]
    return len(stale)


class Solver:
    """
    Best-first branch and bound over move paths.

    deal: reset everything for a new deal
    step: expand one batch from the cheapest frontier grade
    """

    def __init__(self, config: SolverConfig = DEFAULT_CONFIG):
        self.config = config
        self.game = Game()
        self.bank: Bank = Grader()
        self.done: Done = {}
        self.solution: Optional[Path] = None
        self.status = IDLE
        self.seed: Optional[int] = None
        self.cards: tuple[int, ...] = ()
        self.stats = SolverStats()

    def clear(self):
        self.game.clear()
        self.bank.clear()
        self.done.clear()
        self.solution = None
        self.status = IDLE
        self.seed = None
        self.cards = ()
        self.stats = SolverStats()

    def deal(self, seed: int):
        self.deal_cards(deck.deal(seed))
        self.seed = seed

    def deal_cards(self, cards: Iterable[int]):
        self.clear()
        self.cards = tuple(cards)
        game = self.game
        game.deal(self.cards)
        game.move_cards_auto()

        path = game.path()
        self.bank.add(0, path)
        self.done[game.fingerprint()] = game.path_len()
        self.status = SEARCHING
        if game.is_done():
            # Auto play alone cleared the deal.
            self.solution = path
            self.stats.solutions_found += 1
            self.status = SOLVED
        game.rewind()

    def solution_len(self) -> Optional[int]:
        if self.solution is None:
            return None
        return len(self.solution) // 2

    def step(
        self,
        path_upper_limit: Optional[int] = None,
        batch_limit: Optional[int] = None,
        debug: Optional[bool] = None,
    ) -> str:
        if path_upper_limit is None:
            path_upper_limit = self.config.path_upper_limit()
        if batch_limit is None:
            batch_limit = self.config.batch_limit()
        if debug is None:
            debug = self.config.verbose

        if self.solution is not None:
            path_upper_limit = min(path_upper_limit, len(self.solution) // 2)

        grade = self.bank.first_grade()
        if grade is None:
            if self.status == SEARCHING:
                self.status = EXHAUSTED
            return STEP_EXHAUSTED
        batch = self.bank.split_off(grade, max(1, batch_limit))
        self.stats.steps += 1

        prioritize = len(self.bank) > 0
        policy = self.config.grade_policy
        game = self.game
        stats = self.stats

        while batch:
            path = batch.pop()
            game.set_path(path)
            mark = game.path_len()
            stats.expanded_paths += 1

            # Mutating the board invalidates a lazy generator; collect first.
            for mv in game.all_moves():
                game.backward(mark)
                game.move_card(mv.giver, mv.taker)
                game.move_cards_auto()
                stats.generated_children += 1

                # Skip over long solutions.
                estimate = game.estimate_path_len()
                if estimate >= path_upper_limit:
                    stats.pruned_children += 1
                    continue

                if game.has_next_move():
                    key = game.fingerprint()
                    seen = self.done.get(key)
                    if seen is not None and estimate >= seen:
                        stats.duplicate_children += 1
                        continue
                    self.done[key] = estimate
                    child_grade = policy.grade(game) if prioritize else 0
                    self.bank.add(child_grade, game.path())
                    continue

                sol_len = game.path_len()
                if sol_len < path_upper_limit and game.is_done():
                    self._record_solution(game.path(), grade, batch, debug)
                    return STEP_SOLVED

        return STEP_BATCH

    def _record_solution(self, path: Path, grade: int, batch: list[Path], debug: bool):
        sol_len = len(path) // 2
        self.solution = path
        self.status = SOLVED
        self.stats.solutions_found += 1
        if debug:
            print(f"Solved! Path of {sol_len} moves.")

        # Unexamined paths of this batch go back untouched.
        while batch:
            self.bank.add(grade, batch.pop())

        removed = clean_bank(self.bank, self.game, sol_len)
        if debug:
            print("Cleaning:")
            print(f"    bank: {len(self.bank)}; removed: {removed}")

        removed = clean_done(self.done, sol_len)
        if debug:
            print(f"    done: {len(self.done)}; removed: {removed}")
