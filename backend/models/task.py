from pydantic import field_validator

import config
from models.base_record import CollectionRecord, coerce_text, choice_or_default

TASK_STATUSES = ["Inbox", "Today", "This Week", "Later", "Waiting", "Done"]
TASK_PRIORITIES = ["Normal", "High", "Low"]
TASK_SEARCH_FIELDS = ("title", "notes")


class TaskItem(CollectionRecord):
    title: str = ""
    notes: str = ""
    status: str = TASK_STATUSES[0]
    priority: str = TASK_PRIORITIES[0]
    assigned_to: str = ""  # "" = unassigned
    due_date: str = ""  # YYYY-MM-DD or empty

    @field_validator("title", "notes", "due_date", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, v):
        return choice_or_default(v, TASK_STATUSES)

    @field_validator("priority", mode="before")
    @classmethod
    def _priority(cls, v):
        return choice_or_default(v, TASK_PRIORITIES)

    @field_validator("assigned_to", mode="before")
    @classmethod
    def _assignee(cls, v):
        return v if v in config.HOUSEHOLD_MEMBERS else ""
