from pydantic import field_validator

import config
from models.base_record import CollectionRecord, coerce_text, coerce_flag

REMINDER_LANES = ["Active", "Completed"]
REMINDER_SEARCH_FIELDS = ("title",)


class ReminderItem(CollectionRecord):
    title: str = ""
    due_date: str = ""  # YYYY-MM-DD or empty
    completed: bool = False
    assigned_to: str = ""

    @field_validator("title", "due_date", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator("completed", mode="before")
    @classmethod
    def _completed(cls, v):
        return coerce_flag(v)

    @field_validator("assigned_to", mode="before")
    @classmethod
    def _assignee(cls, v):
        return v if v in config.HOUSEHOLD_MEMBERS else ""

    @property
    def lane(self) -> str:
        return "Completed" if self.completed else "Active"

    def is_overdue(self, today: str) -> bool:
        return bool(self.due_date) and self.due_date < today and not self.completed

    def is_due_today(self, today: str) -> bool:
        return bool(self.due_date) and self.due_date == today and not self.completed
