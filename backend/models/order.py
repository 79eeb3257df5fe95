import math
from typing import Optional

from pydantic import field_validator

from models.base_record import CollectionRecord, coerce_text, coerce_flag, choice_or_default

ORDER_STATUSES = [
    "Enquiry",
    "Pending",
    "In Progress",
    "Waiting on Customer",
    "Completed",
    "Cancelled",
]
ORDER_CHANNELS = ["Instagram", "Facebook", "Etsy", "Website", "In Person", "Other"]
ORDER_FULFILMENTS = ["Collection", "Local Delivery", "Shipped"]
CLOSED_ORDER_STATUSES = ("Completed", "Cancelled")
ORDER_SEARCH_FIELDS = ("customer_name", "item", "notes")


def parse_price(value) -> Optional[float]:
    """Number, or None for empty / unparseable input."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        price = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            price = float(text)
        except ValueError:
            return None
    return price if math.isfinite(price) else None


class OrderItem(CollectionRecord):
    customer_name: str = ""
    item: str = ""
    status: str = ORDER_STATUSES[0]
    channel: str = ORDER_CHANNELS[0]
    price: Optional[float] = None
    deposit_paid: bool = False
    due_date: str = ""
    notes: str = ""
    fulfilment: str = ORDER_FULFILMENTS[0]

    @field_validator("customer_name", "item", "due_date", "notes", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, v):
        return choice_or_default(v, ORDER_STATUSES)

    @field_validator("channel", mode="before")
    @classmethod
    def _channel(cls, v):
        return choice_or_default(v, ORDER_CHANNELS)

    @field_validator("fulfilment", mode="before")
    @classmethod
    def _fulfilment(cls, v):
        return choice_or_default(v, ORDER_FULFILMENTS)

    @field_validator("price", mode="before")
    @classmethod
    def _price(cls, v):
        return parse_price(v)

    @field_validator("deposit_paid", mode="before")
    @classmethod
    def _deposit(cls, v):
        return coerce_flag(v)

    @property
    def is_open(self) -> bool:
        return self.status not in CLOSED_ORDER_STATUSES
