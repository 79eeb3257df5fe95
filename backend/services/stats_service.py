"""
stats_service.py — Habit streaks, rolling averages and the weekly summary
Everything here is derived from the saved daily-log history plus today's
in-progress entry. Streaks walk saved entries, not calendar days: a day
with no entry is invisible, only an explicit false breaks a run.
"""

import math
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from models.daily_log import DailyLogEntry, parse_number


class WeeklySummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    days: int
    avg_weight: Optional[float] = None
    avg_sleep: Optional[float] = None
    avg_hydration: Optional[float] = None
    smoothie_days: int = 0
    workout_days: int = 0


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def current_streak(
    history: Iterable[DailyLogEntry],
    field: str,
    exclude_date: str | None = None,
    today_done: bool = False,
) -> int:
    """Consecutive true entries counting back from the newest, plus one if today is done."""
    entries = [e for e in history if e.date and e.date != exclude_date]
    entries.sort(key=lambda e: e.date, reverse=True)

    streak = 0
    for entry in entries:
        if getattr(entry, field):
            streak += 1
        else:
            break
    return streak + 1 if today_done else streak


def best_streak(
    history: Iterable[DailyLogEntry],
    field: str,
    exclude_date: str | None = None,
    today_done: bool = False,
) -> int:
    """Longest run of true entries; a done today extends the tail run by one."""
    entries = sorted((e for e in history if e.date and e.date != exclude_date), key=lambda e: e.date)

    best = 0
    current = 0
    for entry in entries:
        if getattr(entry, field):
            current += 1
            if current > best:
                best = current
        else:
            current = 0

    if today_done:
        best = max(best, current + 1)
    return best


def rolling_average(series: Iterable, window_size: int = 7) -> list[tuple]:
    """(key, mean of up to window_size points ending at each index).

    Points are (key, value) pairs; bare numbers are keyed by their index.
    """
    if window_size < 1:
        raise ValueError("window_size must be at least 1")

    points = []
    for i, point in enumerate(series):
        if isinstance(point, (tuple, list)):
            key, value = point
        else:
            key, value = i, point
        points.append((key, float(value)))

    result = []
    for idx, (key, _) in enumerate(points):
        window = points[max(0, idx - window_size + 1): idx + 1]
        result.append((key, sum(v for _, v in window) / len(window)))
    return result


def _positive_mean(values: list[Optional[float]]) -> Optional[float]:
    valid = [v for v in values if v is not None and v > 0]
    return sum(valid) / len(valid) if valid else None


def weekly_summary(
    history: Iterable[DailyLogEntry],
    today: DailyLogEntry | None = None,
) -> WeeklySummary | None:
    """Averages over the last 7 logged days. Zero or unparseable values are left out."""
    combined = list(history)
    if today is not None and today.date and today.has_data():
        if not any(e.date == today.date for e in combined):
            combined.append(today)

    if not combined:
        return None

    combined.sort(key=lambda e: e.date)
    last7 = combined[-7:]

    return WeeklySummary(
        days=len(last7),
        avg_weight=_positive_mean([parse_number(e.weight_kg) for e in last7]),
        avg_sleep=_positive_mean([parse_number(e.sleep_hours) for e in last7]),
        avg_hydration=_positive_mean([parse_number(e.hydration_litres) for e in last7]),
        smoothie_days=sum(1 for e in last7 if e.smoothie_done),
        workout_days=sum(1 for e in last7 if e.workout_done),
    )


def streak_badge(smoothie: int, workout: int) -> dict:
    overall = min(smoothie, workout)
    if overall >= 3:
        label, level = "Streak active", "active"
    elif overall >= 1:
        label, level = "Streak warming up", "warming"
    else:
        label, level = "Streak offline", "offline"
    return {"overall": overall, "label": label, "level": level}


def hydration_progress(litres: str, target: float = 2.0) -> int:
    """Percent of the daily hydration target, clamped to 0..100."""
    amount = parse_number(litres) or 0.0
    if target <= 0:
        return 0
    return min(100, max(0, round_half_up(amount / target * 100)))
