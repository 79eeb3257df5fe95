from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import Optional

from database import get_db
from models.base_record import ApiModel, RecordValidationError
from services.list_filter import FilterCriteria
from services.reminder_service import ReminderService

router = APIRouter(prefix="/api/v1/reminders", tags=["Reminders"])

class ReminderCreate(ApiModel):
    title: str
    due_date: Optional[str] = None
    assigned_to: Optional[str] = None

class ReminderUpdate(ApiModel):
    title: Optional[str] = None
    due_date: Optional[str] = None
    assigned_to: Optional[str] = None
    completed: Optional[bool] = None

def _criteria(status: str, assigned_to: str, search: str) -> FilterCriteria:
    return FilterCriteria(status=status, fields={"assigned_to": assigned_to}, search=search)

@router.get("")
def list_reminders(status: str = "All", assigned_to: str = "All", search: str = "", db: Session = Depends(get_db)):
    reminders = ReminderService.get_all(db, _criteria(status, assigned_to, search))
    return ReminderService.annotate(reminders)

@router.get("/board")
def reminder_board(status: str = "All", assigned_to: str = "All", search: str = "", db: Session = Depends(get_db)):
    lanes = ReminderService.board(db, _criteria(status, assigned_to, search))
    return {lane: ReminderService.annotate(items) for lane, items in lanes.items()}

@router.get("/overview")
def reminder_overview(db: Session = Depends(get_db)):
    return ReminderService.get_overview(db)

@router.post("")
def create_reminder(reminder_data: ReminderCreate, db: Session = Depends(get_db)):
    try:
        reminder = ReminderService.create(db, reminder_data.model_dump(exclude_unset=True))
        return {"status": "success", "data": reminder.to_document()}
    except RecordValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.put("/{reminder_id}")
def update_reminder(reminder_id: str, reminder_data: ReminderUpdate, db: Session = Depends(get_db)):
    try:
        reminder = ReminderService.update(db, reminder_id, reminder_data.model_dump(exclude_unset=True))
    except RecordValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not reminder:
        raise HTTPException(status_code=404, detail="Reminder not found")
    return {"status": "success", "data": reminder.to_document()}

@router.post("/{reminder_id}/toggle")
def toggle_reminder(reminder_id: str, db: Session = Depends(get_db)):
    reminder = ReminderService.toggle_completed(db, reminder_id)
    if not reminder:
        raise HTTPException(status_code=404, detail="Reminder not found")
    return {"status": "success", "data": reminder.to_document()}

@router.delete("/{reminder_id}")
def delete_reminder(reminder_id: str, confirm: bool = False, db: Session = Depends(get_db)):
    if not confirm:
        raise HTTPException(status_code=400, detail="Delete this reminder? Repeat with confirm=true.")
    if not ReminderService.delete(db, reminder_id):
        raise HTTPException(status_code=404, detail="Reminder not found")
    return {"status": "success"}
