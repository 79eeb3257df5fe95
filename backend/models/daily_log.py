import math
import re
from typing import Optional

from pydantic import field_validator

from models.base_record import BaseRecord, coerce_text, coerce_flag

DAILY_LOG_NUMERIC_FIELDS = ("weight_kg", "sleep_hours", "hydration_litres")
HABIT_FIELDS = ("smoothie_done", "workout_done")

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def parse_number(text) -> Optional[float]:
    """Leading numeric prefix of a text field ("72.5kg" -> 72.5), or None."""
    if isinstance(text, bool):
        return None
    if isinstance(text, (int, float)):
        value = float(text)
    elif not text:
        return None
    else:
        match = _LEADING_NUMBER.match(str(text))
        if not match:
            return None
        value = float(match.group(0))
    # "1e999" overflows to inf; treat it as unparseable
    return value if math.isfinite(value) else None


class DailyLogEntry(BaseRecord):
    date: str = ""  # YYYY-MM-DD
    weight_kg: str = ""
    sleep_hours: str = ""
    mood: str = ""
    hydration_litres: str = ""
    smoothie_done: bool = False
    workout_done: bool = False
    saved_at: Optional[str] = None

    @field_validator("date", "weight_kg", "sleep_hours", "mood", "hydration_litres", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator("smoothie_done", "workout_done", mode="before")
    @classmethod
    def _flags(cls, v):
        return coerce_flag(v)

    def has_data(self) -> bool:
        return bool(
            self.weight_kg
            or self.sleep_hours
            or self.hydration_litres
            or self.mood
            or self.smoothie_done
            or self.workout_done
        )
