# daily_diet/services/metrics.py
"""Aggregate diet metrics derived from a user's meal log."""
from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class MealMetrics:
    total_meals: int = 0
    meals_on_diet: int = 0
    meals_off_diet: int = 0
    best_streak: int = 0


def compute_metrics(on_diet_flags: Iterable[bool]) -> MealMetrics:
    """
    Fold over meals in creation order (oldest first).

    The running streak grows on each on-diet meal and resets to zero on an
    off-diet one; best_streak is the longest run seen.
    """
    total = on_diet = current = best = 0
    for flag in on_diet_flags:
        total += 1
        if flag:
            on_diet += 1
            current += 1
            best = max(best, current)
        else:
            current = 0
    return MealMetrics(
        total_meals=total,
        meals_on_diet=on_diet,
        meals_off_diet=total - on_diet,
        best_streak=best,
    )
