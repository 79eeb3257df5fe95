"""
reminder_service.py — Shared household reminders
Active/Completed lanes, assignee filter (including Unassigned) and
overdue / due-today flags relative to a given date.
"""

from datetime import date

from sqlalchemy.orm import Session

import config
from models.base_record import RecordValidationError, require_choice
from models.reminder import ReminderItem, REMINDER_LANES, REMINDER_SEARCH_FIELDS
from services.list_filter import FilterCriteria, filter_records, group_by_status
from services.record_store import RecordStore, slot_key

EDITABLE_FIELDS = ("title", "due_date", "assigned_to", "completed")


def _lane(r: ReminderItem) -> str:
    return r.lane


def _check(data: dict) -> dict:
    if "title" in data:
        data["title"] = (data["title"] or "").strip()
        if not data["title"]:
            raise RecordValidationError("Reminder text is required.")
    if data.get("assigned_to"):
        require_choice(data["assigned_to"], config.HOUSEHOLD_MEMBERS, "Assignee")
    return data


class ReminderService:
    @staticmethod
    def _key() -> str:
        return slot_key("reminders")

    @staticmethod
    def get_all(db: Session, criteria: FilterCriteria | None = None) -> list[ReminderItem]:
        reminders = RecordStore.load(db, ReminderService._key(), ReminderItem)
        return filter_records(reminders, criteria, REMINDER_SEARCH_FIELDS, status_of=_lane)

    @staticmethod
    def create(db: Session, data: dict) -> ReminderItem:
        data = _check({"title": data.get("title"), **{k: v for k, v in data.items() if k in EDITABLE_FIELDS}})
        data["completed"] = False
        reminder = ReminderItem(**{k: v for k, v in data.items() if v is not None})

        reminders = RecordStore.load(db, ReminderService._key(), ReminderItem)
        reminders.append(reminder)
        RecordStore.save(db, ReminderService._key(), reminders)
        return reminder

    @staticmethod
    def update(db: Session, reminder_id: str, data: dict) -> ReminderItem | None:
        changes = _check({k: v for k, v in data.items() if k in EDITABLE_FIELDS and v is not None})
        reminders = RecordStore.load(db, ReminderService._key(), ReminderItem)
        for i, r in enumerate(reminders):
            if r.id == reminder_id:
                reminders[i] = r.model_copy(update=changes)
                RecordStore.save(db, ReminderService._key(), reminders)
                return reminders[i]
        return None

    @staticmethod
    def toggle_completed(db: Session, reminder_id: str) -> ReminderItem | None:
        reminders = RecordStore.load(db, ReminderService._key(), ReminderItem)
        for i, r in enumerate(reminders):
            if r.id == reminder_id:
                reminders[i] = r.model_copy(update={"completed": not r.completed})
                RecordStore.save(db, ReminderService._key(), reminders)
                return reminders[i]
        return None

    @staticmethod
    def delete(db: Session, reminder_id: str) -> bool:
        reminders = RecordStore.load(db, ReminderService._key(), ReminderItem)
        remaining = [r for r in reminders if r.id != reminder_id]
        if len(remaining) == len(reminders):
            return False
        RecordStore.save(db, ReminderService._key(), remaining)
        return True

    @staticmethod
    def board(db: Session, criteria: FilterCriteria | None = None) -> dict[str, list[ReminderItem]]:
        return group_by_status(ReminderService.get_all(db, criteria), REMINDER_LANES, status_of=_lane)

    @staticmethod
    def annotate(reminders: list[ReminderItem], today: str | None = None) -> list[dict]:
        today = today or date.today().isoformat()
        return [
            {**r.to_document(), "overdue": r.is_overdue(today), "dueToday": r.is_due_today(today)}
            for r in reminders
        ]

    @staticmethod
    def get_overview(db: Session) -> dict:
        reminders = RecordStore.load(db, ReminderService._key(), ReminderItem)
        active = len([r for r in reminders if not r.completed])
        return {"active": active, "completed": len(reminders) - active}
