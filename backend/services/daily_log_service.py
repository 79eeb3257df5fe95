"""
daily_log_service.py — Today's log, history and the home dashboard
Today's entry is edited field by field and saved into history, one entry per
date. The dashboard pulls streaks, the weekly summary and the list counts
together for the home page.
"""

import logging
from datetime import date

from sqlalchemy.orm import Session

import config
from models.base_record import RecordValidationError, now_iso
from models.daily_log import DailyLogEntry
from models.order import OrderItem
from models.reminder import ReminderItem
from models.task import TaskItem
from services.record_store import RecordStore, slot_key
from services.stats_service import (
    current_streak,
    best_streak,
    weekly_summary,
    streak_badge,
    hydration_progress,
)
from session_context import SessionContext

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "date", "weight_kg", "sleep_hours", "mood", "hydration_litres",
    "smoothie_done", "workout_done",
)


class DailyLogService:
    @staticmethod
    def get_today(db: Session, today: str | None = None) -> DailyLogEntry:
        """Stored in-progress entry, or a blank one dated today."""
        entry = RecordStore.load_object(db, slot_key("today"), DailyLogEntry)
        if entry is None:
            entry = DailyLogEntry(date=today or date.today().isoformat())
        return entry

    @staticmethod
    def update_today(db: Session, data: dict) -> DailyLogEntry:
        entry = DailyLogService.get_today(db)
        changes = {k: v for k, v in data.items() if k in EDITABLE_FIELDS and v is not None}
        entry = DailyLogEntry.normalize({**entry.model_dump(), **changes})
        RecordStore.save_object(db, slot_key("today"), entry)
        return entry

    @staticmethod
    def get_history(db: Session) -> list[DailyLogEntry]:
        """Oldest → newest."""
        history = RecordStore.load(db, slot_key("history"), DailyLogEntry)
        history.sort(key=lambda e: e.date)
        return history

    @staticmethod
    def save_to_history(db: Session) -> list[DailyLogEntry]:
        """Upsert today's entry into history by date and stamp savedAt."""
        today = DailyLogService.get_today(db)
        if not today.date:
            raise RecordValidationError("Set a date before saving to history.")

        entry = today.model_copy(update={"saved_at": now_iso()})
        history = [h for h in DailyLogService.get_history(db) if h.date != entry.date]
        history.append(entry)
        history.sort(key=lambda e: e.date)
        if not RecordStore.save(db, slot_key("history"), history):
            raise RuntimeError("Could not save to history")
        logger.info(f"Saved {entry.date} to history ({len(history)} entries)")
        return history

    @staticmethod
    def delete_history_entry(db: Session, entry_date: str) -> bool:
        history = DailyLogService.get_history(db)
        remaining = [h for h in history if h.date != entry_date]
        if len(remaining) == len(history):
            return False
        RecordStore.save(db, slot_key("history"), remaining)
        return True

    @staticmethod
    def streaks(history: list[DailyLogEntry], today: DailyLogEntry) -> dict:
        result = {}
        for field, label in (("smoothie_done", "smoothie"), ("workout_done", "workout")):
            done = getattr(today, field)
            result[label] = {
                "current": current_streak(history, field, exclude_date=today.date, today_done=done),
                "best": best_streak(history, field, exclude_date=today.date, today_done=done),
            }
        result["badge"] = streak_badge(result["smoothie"]["current"], result["workout"]["current"])
        return result

    @staticmethod
    def open_ops(today: DailyLogEntry) -> list[str]:
        ops = []
        if not today.workout_done:
            ops.append("Treadmill / walk 20 mins")
        if not today.smoothie_done:
            ops.append("Make smoothie")
        ops.append("Prep food for tomorrow")
        return ops

    @staticmethod
    def dashboard(db: Session, ctx: SessionContext) -> dict:
        today = DailyLogService.get_today(db)
        history = DailyLogService.get_history(db)

        tasks = RecordStore.load(db, slot_key("tasks", ctx.profile_id), TaskItem)
        orders = RecordStore.load(db, slot_key("orders"), OrderItem)
        reminders = RecordStore.load(db, slot_key("reminders"), ReminderItem)

        summary = weekly_summary(history, today)
        return {
            "profile": ctx.profile_name,
            "today": today.to_document(),
            "todayTaskCount": len([t for t in tasks if t.status == "Today"]),
            "openOrders": len([o for o in orders if o.is_open]),
            "activeReminders": len([r for r in reminders if not r.completed]),
            "streaks": DailyLogService.streaks(history, today),
            "weeklySummary": summary.model_dump(by_alias=True) if summary else None,
            "hydrationPercent": hydration_progress(today.hydration_litres, config.HYDRATION_TARGET_LITRES),
            "openOps": DailyLogService.open_ops(today),
            "quote": config.EPAPER_QUOTE,
        }
