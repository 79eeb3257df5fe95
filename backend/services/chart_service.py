"""
chart_service.py — Weight trend chart geometry
Maps the weight series and its 7-point rolling average onto one shared
pixel scale for an SVG line chart.
"""

from typing import Iterable, Optional

from models.daily_log import DailyLogEntry, parse_number
from services.stats_service import rolling_average

CHART_WIDTH = 600
CHART_HEIGHT = 200
CHART_PADDING_X = 20
CHART_PADDING_Y = 20
ROLLING_WINDOW = 7
NOT_ENOUGH_DATA = "Not enough data yet. Save at least two days with a weight value to see the trend."


class InsufficientDataError(ValueError):
    """Fewer than two points: there is no line to draw."""


def value_bounds(values: Iterable[float]) -> tuple[float, float]:
    """Min/max widened by 10% of the range (or of one unit when flat)."""
    values = list(values)
    if not values:
        raise InsufficientDataError("no values to bound")
    lo, hi = min(values), max(values)
    padding = ((hi - lo) or 1) * 0.1
    return lo - padding, hi + padding


def x_position(index: int, count: int, width: float, padding_x: float) -> float:
    if count == 1:
        return width / 2
    step = (width - padding_x * 2) / (count - 1)
    return padding_x + step * index


def y_position(value: float, bounds: tuple[float, float], height: float, padding_y: float) -> float:
    lo, hi = bounds
    if hi == lo:
        return height / 2
    ratio = (value - lo) / (hi - lo)
    return height - padding_y - ratio * (height - padding_y * 2)


def scale_to_pixels(
    series: Iterable[float],
    width: float = CHART_WIDTH,
    height: float = CHART_HEIGHT,
    padding_x: float = CHART_PADDING_X,
    padding_y: float = CHART_PADDING_Y,
    bounds: Optional[tuple[float, float]] = None,
) -> list[tuple[float, float]]:
    values = [float(v) for v in series]
    if len(values) < 2:
        raise InsufficientDataError(f"need at least 2 points, got {len(values)}")
    bounds = bounds or value_bounds(values)
    count = len(values)
    return [
        (x_position(i, count, width, padding_x), y_position(v, bounds, height, padding_y))
        for i, v in enumerate(values)
    ]


def _fmt(n: float) -> str:
    n = round(n, 2)
    return str(int(n)) if n == int(n) else str(n)


def to_polyline(points: Iterable[tuple[float, float]]) -> str:
    return " ".join(f"{_fmt(x)},{_fmt(y)}" for x, y in points)


class ChartService:
    @staticmethod
    def weight_series(history: Iterable[DailyLogEntry]) -> list[tuple[str, float]]:
        """(date, kg) for entries with a usable weight, oldest first."""
        points = []
        for entry in sorted(history, key=lambda e: e.date):
            weight = parse_number(entry.weight_kg)
            if weight is not None and weight > 0:
                points.append((entry.date, weight))
        return points

    @staticmethod
    def weight_chart(
        history: Iterable[DailyLogEntry],
        width: float = CHART_WIDTH,
        height: float = CHART_HEIGHT,
        padding_x: float = CHART_PADDING_X,
        padding_y: float = CHART_PADDING_Y,
    ) -> dict:
        points = ChartService.weight_series(history)
        if len(points) < 2:
            return {"hasData": False, "message": NOT_ENOUGH_DATA, "pointCount": len(points)}

        rolling = rolling_average(points, ROLLING_WINDOW)
        bounds = value_bounds([w for _, w in points] + [a for _, a in rolling])

        raw_xy = scale_to_pixels([w for _, w in points], width, height, padding_x, padding_y, bounds)
        avg_xy = scale_to_pixels([a for _, a in rolling], width, height, padding_x, padding_y, bounds)

        return {
            "hasData": True,
            "width": width,
            "height": height,
            "min": bounds[0],
            "max": bounds[1],
            "points": [
                {"date": d, "weight": w, "x": x, "y": y}
                for (d, w), (x, y) in zip(points, raw_xy)
            ],
            "rolling": [
                {"date": d, "avg": a, "x": x, "y": y}
                for (d, a), (x, y) in zip(rolling, avg_xy)
            ],
            "polyline": to_polyline(raw_xy),
            "rollingPolyline": to_polyline(avg_xy),
        }
