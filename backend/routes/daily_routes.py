from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import Optional, Union

from database import get_db
from models.base_record import ApiModel, RecordValidationError
from services.chart_service import ChartService, CHART_WIDTH, CHART_HEIGHT, CHART_PADDING_X, CHART_PADDING_Y
from services.daily_log_service import DailyLogService
from services.stats_service import weekly_summary
from session_context import SessionContext, get_session_context

router = APIRouter(prefix="/api/v1", tags=["Daily Log"])

class TodayUpdate(ApiModel):
    date: Optional[str] = None
    weight_kg: Optional[Union[str, float]] = None
    sleep_hours: Optional[Union[str, float]] = None
    mood: Optional[str] = None
    hydration_litres: Optional[Union[str, float]] = None
    smoothie_done: Optional[bool] = None
    workout_done: Optional[bool] = None

@router.get("/today")
def get_today(db: Session = Depends(get_db)):
    return DailyLogService.get_today(db).to_document()

@router.put("/today")
def update_today(today_data: TodayUpdate, db: Session = Depends(get_db)):
    try:
        entry = DailyLogService.update_today(db, today_data.model_dump(exclude_unset=True))
        return {"status": "success", "data": entry.to_document()}
    except RecordValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.post("/today/save")
def save_today_to_history(db: Session = Depends(get_db)):
    try:
        history = DailyLogService.save_to_history(db)
        return {"status": "success", "data": [h.to_document() for h in history]}
    except RecordValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

@router.get("/history")
def list_history(db: Session = Depends(get_db)):
    return [h.to_document() for h in DailyLogService.get_history(db)]

@router.delete("/history/{entry_date}")
def delete_history_entry(entry_date: str, confirm: bool = False, db: Session = Depends(get_db)):
    if not confirm:
        raise HTTPException(status_code=400, detail="Delete this day from history? Repeat with confirm=true.")
    if not DailyLogService.delete_history_entry(db, entry_date):
        raise HTTPException(status_code=404, detail="History entry not found")
    return {"status": "success"}

@router.get("/history/weight-chart")
def weight_chart(
    width: float = CHART_WIDTH,
    height: float = CHART_HEIGHT,
    padding_x: float = CHART_PADDING_X,
    padding_y: float = CHART_PADDING_Y,
    db: Session = Depends(get_db),
):
    return ChartService.weight_chart(DailyLogService.get_history(db), width, height, padding_x, padding_y)

@router.get("/stats/weekly")
def weekly_stats(db: Session = Depends(get_db)):
    summary = weekly_summary(DailyLogService.get_history(db), DailyLogService.get_today(db))
    return summary.model_dump(by_alias=True) if summary else None

@router.get("/stats/streaks")
def streak_stats(db: Session = Depends(get_db)):
    return DailyLogService.streaks(DailyLogService.get_history(db), DailyLogService.get_today(db))

@router.get("/dashboard")
def dashboard(db: Session = Depends(get_db), ctx: SessionContext = Depends(get_session_context)):
    return DailyLogService.dashboard(db, ctx)
