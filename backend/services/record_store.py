"""
record_store.py — Key-value slot persistence
Each collection lives as one JSON document in a named storage slot. Loading
normalizes every record through its schema; storage and parse failures are
logged and degrade to an empty read or a no-op write.
"""

import json
import logging
from typing import TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config import STORAGE_KEY_PREFIX
from models.base_record import BaseRecord, RecordValidationError
from models.storage_slot import StorageSlot

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseRecord)

# Entities partitioned per active profile; everything else is shared
PROFILE_SCOPED_ENTITIES = {"tasks"}


def slot_key(entity: str, profile_id: str | None = None, prefix: str = STORAGE_KEY_PREFIX) -> str:
    """Pure key resolution: lifeOS_tasks, lifeOS_tasks_<profile>, lifeOS_orders, ..."""
    key = f"{prefix}_{entity}"
    if profile_id and entity in PROFILE_SCOPED_ENTITIES:
        key = f"{key}_{profile_id}"
    return key


class RecordStore:
    @staticmethod
    def read_raw(db: Session, key: str) -> str | None:
        try:
            slot = db.get(StorageSlot, key)
            return slot.value if slot else None
        except SQLAlchemyError as e:
            logger.error(f"Failed to read slot {key}: {e}")
            return None

    @staticmethod
    def write_raw(db: Session, key: str, text: str) -> bool:
        try:
            slot = db.get(StorageSlot, key)
            if slot is None:
                db.add(StorageSlot(key=key, value=text))
            else:
                slot.value = text
            db.commit()
            return True
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to save slot {key}: {e}")
            return False

    @staticmethod
    def _parse(key: str, text: str | None):
        if text is None:
            return None
        try:
            return json.loads(text)
        except ValueError as e:
            logger.error(f"Malformed JSON in slot {key}: {e}")
            return None

    @staticmethod
    def load(db: Session, key: str, model: type[T]) -> list[T]:
        """All records in a list slot, normalized. Sorted by createdAt when the model has one."""
        raw = RecordStore._parse(key, RecordStore.read_raw(db, key))
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.error(f"Slot {key} does not hold a list, ignoring it")
            return []

        records = []
        for item in raw:
            try:
                records.append(model.normalize(item))
            except RecordValidationError as e:
                logger.warning(f"Skipping unreadable record in {key}: {e}")

        if "created_at" in model.model_fields:
            records.sort(key=lambda r: r.created_at)
        return records

    @staticmethod
    def save(db: Session, key: str, records: list[BaseRecord]) -> bool:
        """Overwrite the slot with the full collection (last write wins)."""
        text = json.dumps([r.to_document() for r in records])
        return RecordStore.write_raw(db, key, text)

    @staticmethod
    def load_object(db: Session, key: str, model: type[T]) -> T | None:
        raw = RecordStore._parse(key, RecordStore.read_raw(db, key))
        if raw is None:
            return None
        try:
            return model.normalize(raw)
        except RecordValidationError as e:
            logger.warning(f"Unreadable document in {key}: {e}")
            return None

    @staticmethod
    def save_object(db: Session, key: str, record: BaseRecord) -> bool:
        return RecordStore.write_raw(db, key, json.dumps(record.to_document()))

    @staticmethod
    def clear(db: Session, key: str) -> bool:
        try:
            slot = db.get(StorageSlot, key)
            if slot is not None:
                db.delete(slot)
                db.commit()
            return True
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to clear slot {key}: {e}")
            return False
