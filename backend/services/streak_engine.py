"""
streak_engine.py — Streak counter arithmetic
Pure functions describing how one check-in moves a habit's counters.
Counters are maintained incrementally (O(1) per check-in); `replay` rebuilds
them from the full ledger when they need repairing.
"""

from typing import Iterable, NamedTuple


class StreakCounters(NamedTuple):
    streak: int = 0
    longest_streak: int = 0
    total_completions: int = 0


def apply(counters: StreakCounters, completed: bool) -> StreakCounters:
    """Counters after recording a check-in."""
    if not completed:
        # A missed day breaks the run but leaves history alone
        return counters._replace(streak=0)

    streak = counters.streak + 1
    return StreakCounters(
        streak=streak,
        longest_streak=max(counters.longest_streak, streak),
        total_completions=counters.total_completions + 1,
    )


def reverse(counters: StreakCounters) -> StreakCounters:
    """Counters after deleting a completed check-in.

    longest_streak is a high-water mark and is never lowered.
    """
    return counters._replace(
        streak=max(0, counters.streak - 1),
        total_completions=max(0, counters.total_completions - 1),
    )


def replay(completed_flags: Iterable[bool]) -> StreakCounters:
    """Rebuild counters from check-ins given oldest first."""
    counters = StreakCounters()
    for completed in completed_flags:
        counters = apply(counters, completed)
    return counters


def read(habit) -> StreakCounters:
    return StreakCounters(
        streak=habit.streak or 0,
        longest_streak=habit.longest_streak or 0,
        total_completions=habit.total_completions or 0,
    )


def write(habit, counters: StreakCounters) -> None:
    habit.streak = counters.streak
    habit.longest_streak = counters.longest_streak
    habit.total_completions = counters.total_completions
