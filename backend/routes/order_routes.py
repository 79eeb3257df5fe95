from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import Optional, Union

from database import get_db
from models.base_record import ApiModel, RecordValidationError
from services.list_filter import FilterCriteria
from services.order_service import OrderService

router = APIRouter(prefix="/api/v1/orders", tags=["Orders"])

class OrderCreate(ApiModel):
    customer_name: str
    item: str
    status: Optional[str] = None
    channel: Optional[str] = None
    price: Optional[Union[float, str]] = None
    deposit_paid: Optional[bool] = None
    due_date: Optional[str] = None
    notes: Optional[str] = None
    fulfilment: Optional[str] = None

class OrderUpdate(ApiModel):
    customer_name: Optional[str] = None
    item: Optional[str] = None
    status: Optional[str] = None
    channel: Optional[str] = None
    price: Optional[Union[float, str]] = None
    deposit_paid: Optional[bool] = None
    due_date: Optional[str] = None
    notes: Optional[str] = None
    fulfilment: Optional[str] = None

def _criteria(status: str, channel: str, fulfilment: str, search: str) -> FilterCriteria:
    return FilterCriteria(status=status, fields={"channel": channel, "fulfilment": fulfilment}, search=search)

@router.get("")
def list_orders(status: str = "All", channel: str = "All", fulfilment: str = "All", search: str = "", db: Session = Depends(get_db)):
    orders = OrderService.get_all(db, _criteria(status, channel, fulfilment, search))
    return [o.to_document() for o in orders]

@router.get("/board")
def order_board(status: str = "All", channel: str = "All", fulfilment: str = "All", search: str = "", db: Session = Depends(get_db)):
    lanes = OrderService.board(db, _criteria(status, channel, fulfilment, search))
    return {s: [o.to_document() for o in items] for s, items in lanes.items()}

@router.get("/overview")
def order_overview(db: Session = Depends(get_db)):
    return OrderService.get_overview(db)

@router.post("")
def create_order(order_data: OrderCreate, db: Session = Depends(get_db)):
    try:
        order = OrderService.create(db, order_data.model_dump(exclude_unset=True))
        return {"status": "success", "data": order.to_document()}
    except RecordValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.put("/{order_id}")
def update_order(order_id: str, order_data: OrderUpdate, db: Session = Depends(get_db)):
    try:
        order = OrderService.update(db, order_id, order_data.model_dump(exclude_unset=True))
    except RecordValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return {"status": "success", "data": order.to_document()}

@router.post("/{order_id}/toggle-deposit")
def toggle_deposit(order_id: str, db: Session = Depends(get_db)):
    order = OrderService.toggle_deposit(db, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return {"status": "success", "data": order.to_document()}

@router.delete("/{order_id}")
def delete_order(order_id: str, confirm: bool = False, db: Session = Depends(get_db)):
    if not confirm:
        raise HTTPException(status_code=400, detail="Delete this order? Repeat with confirm=true.")
    if not OrderService.delete(db, order_id):
        raise HTTPException(status_code=404, detail="Order not found")
    return {"status": "success"}
