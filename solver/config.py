from __future__ import annotations

from dataclasses import dataclass

from freecell.game import Game


@dataclass(frozen=True, slots=True)
class GradePolicy:
    """Frontier grade of a board; lower grades are expanded first."""

    unsolved_weight: int = 10
    lock_weight: int = 9
    # Paths shorter than this all share grade 0.
    shallow_len: int = 8
    len_weight: int = 4
    # Past this length the path length weighs more; 0 disables the step.
    long_len: int = 88
    long_len_weight: int = 8

    def length_weight(self, length: int) -> int:
        if self.long_len and length > self.long_len:
            return self.long_len_weight
        return self.len_weight

    def grade(self, game: Game) -> int:
        length = game.path_len()
        if length < self.shallow_len:
            return 0
        return (
            self.unsolved_weight * game.count_unsolved()
            + self.lock_weight * game.count_locks()
            + self.length_weight(length) * length
        )


THRESHOLDED_GRADES = GradePolicy()
PLAIN_GRADES = GradePolicy(shallow_len=0, len_weight=1, long_len=0, long_len_weight=1)

GRADE_POLICIES = {
    "thresholded": THRESHOLDED_GRADES,
    "plain": PLAIN_GRADES,
}


@dataclass(frozen=True, slots=True)
class SolverConfig:
    # Longest solution worth reporting (inclusive).
    path_max: int = 256
    # Paths taken from the frontier per step.
    grab_max: int = 1000
    # Stop once this many boards are recorded as visited.
    done_max: int = 10_000_000
    # Wall clock budget for the driver loop; 0 means no limit.
    max_seconds: float = 0.0
    # Stop at the first solution instead of looking for shorter ones.
    any_solution: bool = False
    verbose: bool = False
    grade_policy: GradePolicy = THRESHOLDED_GRADES

    def path_upper_limit(self) -> int:
        return self.path_max + 1

    def batch_limit(self) -> int:
        return max(1, self.grab_max)

    def done_limit(self) -> int:
        return max(1000, self.done_max)


DEFAULT_CONFIG = SolverConfig()
