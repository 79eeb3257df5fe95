from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import Optional

from database import get_db
from models.base_record import ApiModel, RecordValidationError
from services.list_filter import FilterCriteria
from services.task_service import TaskService
from session_context import SessionContext, get_session_context

router = APIRouter(prefix="/api/v1/tasks", tags=["Tasks"])

class TaskCreate(ApiModel):
    title: str
    notes: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    assigned_to: Optional[str] = None
    due_date: Optional[str] = None

class TaskUpdate(ApiModel):
    title: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    assigned_to: Optional[str] = None
    due_date: Optional[str] = None

def _criteria(status: str, priority: str, assigned_to: str, search: str) -> FilterCriteria:
    return FilterCriteria(status=status, fields={"priority": priority, "assigned_to": assigned_to}, search=search)

@router.get("")
def list_tasks(
    status: str = "All",
    priority: str = "All",
    assigned_to: str = "All",
    search: str = "",
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    tasks = TaskService.get_all(db, ctx, _criteria(status, priority, assigned_to, search))
    return [t.to_document() for t in tasks]

@router.get("/board")
def task_board(
    status: str = "All",
    priority: str = "All",
    assigned_to: str = "All",
    search: str = "",
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    lanes = TaskService.board(db, ctx, _criteria(status, priority, assigned_to, search))
    return {s: [t.to_document() for t in items] for s, items in lanes.items()}

@router.get("/stats")
def task_stats(db: Session = Depends(get_db), ctx: SessionContext = Depends(get_session_context)):
    return TaskService.get_stats(db, ctx)

@router.post("")
def create_task(task_data: TaskCreate, db: Session = Depends(get_db), ctx: SessionContext = Depends(get_session_context)):
    try:
        task = TaskService.create(db, ctx, task_data.model_dump(exclude_unset=True))
        return {"status": "success", "data": task.to_document()}
    except RecordValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/{task_id}")
def get_task(task_id: str, db: Session = Depends(get_db), ctx: SessionContext = Depends(get_session_context)):
    task = TaskService.get_by_id(db, ctx, task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task.to_document()

@router.put("/{task_id}")
def update_task(task_id: str, task_data: TaskUpdate, db: Session = Depends(get_db), ctx: SessionContext = Depends(get_session_context)):
    try:
        task = TaskService.update(db, ctx, task_id, task_data.model_dump(exclude_unset=True))
    except RecordValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return {"status": "success", "data": task.to_document()}

@router.delete("/{task_id}")
def delete_task(task_id: str, confirm: bool = False, db: Session = Depends(get_db), ctx: SessionContext = Depends(get_session_context)):
    if not confirm:
        raise HTTPException(status_code=400, detail="Delete this task? Repeat with confirm=true.")
    if not TaskService.delete(db, ctx, task_id):
        raise HTTPException(status_code=404, detail="Task not found")
    return {"status": "success"}
