# Import all models so the storage table registers with SQLAlchemy Base.metadata
# and record schemas are importable from one place

from models.storage_slot import StorageSlot
from models.task import TaskItem
from models.order import OrderItem
from models.reminder import ReminderItem
from models.daily_log import DailyLogEntry
from models.profile import Profile, CurrentProfile

__all__ = [
    "StorageSlot",
    "TaskItem",
    "OrderItem",
    "ReminderItem",
    "DailyLogEntry",
    "Profile",
    "CurrentProfile",
]
