"""
task_service.py — Task management
Add / update / delete tasks in the active profile's task slot, plus the
filtered list and the status board.
"""

from sqlalchemy.orm import Session

import config
from models.base_record import RecordValidationError, require_choice
from models.task import TaskItem, TASK_STATUSES, TASK_PRIORITIES, TASK_SEARCH_FIELDS
from services.list_filter import FilterCriteria, filter_records, group_by_status
from services.record_store import RecordStore, slot_key
from session_context import SessionContext

EDITABLE_FIELDS = ("title", "notes", "status", "priority", "assigned_to", "due_date")


def _check(data: dict) -> dict:
    if "title" in data:
        data["title"] = (data["title"] or "").strip()
        if not data["title"]:
            raise RecordValidationError("Task title is required.")
    if "notes" in data:
        data["notes"] = (data["notes"] or "").strip()
    if data.get("status") is not None:
        require_choice(data["status"], TASK_STATUSES, "Status")
    if data.get("priority") is not None:
        require_choice(data["priority"], TASK_PRIORITIES, "Priority")
    if data.get("assigned_to"):
        require_choice(data["assigned_to"], config.HOUSEHOLD_MEMBERS, "Assignee")
    return data


class TaskService:
    @staticmethod
    def _key(ctx: SessionContext) -> str:
        return slot_key("tasks", ctx.profile_id)

    @staticmethod
    def get_all(db: Session, ctx: SessionContext, criteria: FilterCriteria | None = None) -> list[TaskItem]:
        tasks = RecordStore.load(db, TaskService._key(ctx), TaskItem)
        return filter_records(tasks, criteria, TASK_SEARCH_FIELDS)

    @staticmethod
    def get_by_id(db: Session, ctx: SessionContext, task_id: str) -> TaskItem | None:
        tasks = RecordStore.load(db, TaskService._key(ctx), TaskItem)
        return next((t for t in tasks if t.id == task_id), None)

    @staticmethod
    def create(db: Session, ctx: SessionContext, data: dict) -> TaskItem:
        """Validate and append one task. Nothing is stored when validation fails."""
        data = _check({"title": data.get("title"), **{k: v for k, v in data.items() if k in EDITABLE_FIELDS}})
        task = TaskItem(**{k: v for k, v in data.items() if v is not None})

        tasks = RecordStore.load(db, TaskService._key(ctx), TaskItem)
        tasks.append(task)
        RecordStore.save(db, TaskService._key(ctx), tasks)
        return task

    @staticmethod
    def update(db: Session, ctx: SessionContext, task_id: str, data: dict) -> TaskItem | None:
        changes = _check({k: v for k, v in data.items() if k in EDITABLE_FIELDS and v is not None})
        tasks = RecordStore.load(db, TaskService._key(ctx), TaskItem)
        for i, t in enumerate(tasks):
            if t.id == task_id:
                tasks[i] = t.model_copy(update=changes)
                RecordStore.save(db, TaskService._key(ctx), tasks)
                return tasks[i]
        return None

    @staticmethod
    def delete(db: Session, ctx: SessionContext, task_id: str) -> bool:
        tasks = RecordStore.load(db, TaskService._key(ctx), TaskItem)
        remaining = [t for t in tasks if t.id != task_id]
        if len(remaining) == len(tasks):
            return False
        RecordStore.save(db, TaskService._key(ctx), remaining)
        return True

    @staticmethod
    def board(db: Session, ctx: SessionContext, criteria: FilterCriteria | None = None) -> dict[str, list[TaskItem]]:
        return group_by_status(TaskService.get_all(db, ctx, criteria), TASK_STATUSES)

    @staticmethod
    def get_stats(db: Session, ctx: SessionContext) -> dict:
        tasks = RecordStore.load(db, TaskService._key(ctx), TaskItem)
        return {
            "total": len(tasks),
            "today": len([t for t in tasks if t.status == "Today"]),
            "done": len([t for t in tasks if t.status == "Done"]),
        }
