"""
order_service.py — Maker orders board
Orders are shared across profiles. Price is optional but must be numeric
when given.
"""

from sqlalchemy.orm import Session

from models.base_record import RecordValidationError, require_choice
from models.order import (
    OrderItem,
    ORDER_STATUSES,
    ORDER_CHANNELS,
    ORDER_FULFILMENTS,
    ORDER_SEARCH_FIELDS,
    parse_price,
)
from services.list_filter import FilterCriteria, filter_records, group_by_status
from services.record_store import RecordStore, slot_key

EDITABLE_FIELDS = (
    "customer_name", "item", "status", "channel", "price",
    "deposit_paid", "due_date", "notes", "fulfilment",
)


def _check(data: dict) -> dict:
    for field in ("customer_name", "item"):
        if field in data:
            data[field] = (data[field] or "").strip()
            if not data[field]:
                raise RecordValidationError("Customer name and item are required.")
    if "notes" in data:
        data["notes"] = (data["notes"] or "").strip()
    if "price" in data:
        raw = data["price"]
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            data["price"] = None
        else:
            price = parse_price(raw)
            if price is None:
                raise RecordValidationError("Price must be a valid number or left empty.")
            data["price"] = price
    if data.get("status") is not None:
        require_choice(data["status"], ORDER_STATUSES, "Status")
    if data.get("channel") is not None:
        require_choice(data["channel"], ORDER_CHANNELS, "Channel")
    if data.get("fulfilment") is not None:
        require_choice(data["fulfilment"], ORDER_FULFILMENTS, "Fulfilment")
    return data


class OrderService:
    KEY_ENTITY = "orders"

    @staticmethod
    def get_all(db: Session, criteria: FilterCriteria | None = None) -> list[OrderItem]:
        orders = RecordStore.load(db, slot_key(OrderService.KEY_ENTITY), OrderItem)
        return filter_records(orders, criteria, ORDER_SEARCH_FIELDS)

    @staticmethod
    def create(db: Session, data: dict) -> OrderItem:
        data = {k: v for k, v in data.items() if k in EDITABLE_FIELDS}
        data.setdefault("customer_name", "")
        data.setdefault("item", "")
        data = _check(data)
        order = OrderItem(**{k: v for k, v in data.items() if v is not None or k == "price"})

        orders = RecordStore.load(db, slot_key(OrderService.KEY_ENTITY), OrderItem)
        orders.append(order)
        RecordStore.save(db, slot_key(OrderService.KEY_ENTITY), orders)
        return order

    @staticmethod
    def update(db: Session, order_id: str, data: dict) -> OrderItem | None:
        """Partial update: status, fulfilment, deposit, price, text fields."""
        changes = {k: v for k, v in data.items() if k in EDITABLE_FIELDS and (v is not None or k == "price")}
        changes = _check(changes)
        orders = RecordStore.load(db, slot_key(OrderService.KEY_ENTITY), OrderItem)
        for i, o in enumerate(orders):
            if o.id == order_id:
                orders[i] = o.model_copy(update=changes)
                RecordStore.save(db, slot_key(OrderService.KEY_ENTITY), orders)
                return orders[i]
        return None

    @staticmethod
    def toggle_deposit(db: Session, order_id: str) -> OrderItem | None:
        orders = RecordStore.load(db, slot_key(OrderService.KEY_ENTITY), OrderItem)
        for i, o in enumerate(orders):
            if o.id == order_id:
                orders[i] = o.model_copy(update={"deposit_paid": not o.deposit_paid})
                RecordStore.save(db, slot_key(OrderService.KEY_ENTITY), orders)
                return orders[i]
        return None

    @staticmethod
    def delete(db: Session, order_id: str) -> bool:
        orders = RecordStore.load(db, slot_key(OrderService.KEY_ENTITY), OrderItem)
        remaining = [o for o in orders if o.id != order_id]
        if len(remaining) == len(orders):
            return False
        RecordStore.save(db, slot_key(OrderService.KEY_ENTITY), remaining)
        return True

    @staticmethod
    def board(db: Session, criteria: FilterCriteria | None = None) -> dict[str, list[OrderItem]]:
        return group_by_status(OrderService.get_all(db, criteria), ORDER_STATUSES)

    @staticmethod
    def get_overview(db: Session) -> dict:
        orders = RecordStore.load(db, slot_key(OrderService.KEY_ENTITY), OrderItem)
        return {
            "open": len([o for o in orders if o.is_open]),
            "total": len(orders),
            "completed": len([o for o in orders if o.status == "Completed"]),
            "waitingOnCustomer": len([o for o in orders if o.status == "Waiting on Customer"]),
        }
