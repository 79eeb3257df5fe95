from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, DateTime
from database import Base


class StorageSlot(Base):
    __tablename__ = "storage_slots"

    key = Column(String(200), primary_key=True)
    value = Column(Text, nullable=False)  # raw JSON document
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
