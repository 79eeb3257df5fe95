"""
profile_service.py — Local profile switching
Profiles partition personal data on a shared device. The optional PIN is a
plain 4-digit string compare, not real security.
"""

import logging
import re

from sqlalchemy.orm import Session

from models.base_record import RecordValidationError
from models.profile import Profile, CurrentProfile
from services.record_store import RecordStore, slot_key

logger = logging.getLogger(__name__)

PIN_PATTERN = re.compile(r"[0-9]{4}")


class IncorrectPinError(RecordValidationError):
    pass


class ProfileService:
    @staticmethod
    def get_all(db: Session) -> list[Profile]:
        return RecordStore.load(db, slot_key("profiles"), Profile)

    @staticmethod
    def find(db: Session, profile_id: str) -> Profile | None:
        return next((p for p in ProfileService.get_all(db) if p.id == profile_id), None)

    @staticmethod
    def create(db: Session, name: str, pin: str | None = None) -> Profile:
        """Add a profile and make it the current one."""
        trimmed = (name or "").strip()
        if not trimmed:
            raise RecordValidationError("Profile name is required.")
        if pin and not PIN_PATTERN.fullmatch(pin):
            raise RecordValidationError("PIN must be 4 digits (or leave it blank).")

        profile = Profile(name=trimmed, pin=pin or None)
        profiles = ProfileService.get_all(db)
        profiles.append(profile)
        RecordStore.save(db, slot_key("profiles"), profiles)
        ProfileService.set_current(db, profile)
        logger.info(f"Created profile {profile.name} ({profile.id})")
        return profile

    @staticmethod
    def login(db: Session, profile_id: str, pin: str = "") -> CurrentProfile | None:
        """None when the profile does not exist; IncorrectPinError on a PIN mismatch."""
        if not profile_id:
            raise RecordValidationError("Select a profile or create a new one.")
        profile = ProfileService.find(db, profile_id)
        if profile is None:
            return None
        if profile.pin and (pin or "") != profile.pin:
            raise IncorrectPinError("Incorrect PIN.")
        return ProfileService.set_current(db, profile)

    @staticmethod
    def set_current(db: Session, profile: Profile) -> CurrentProfile:
        current = CurrentProfile(id=profile.id, name=profile.name)
        RecordStore.save_object(db, slot_key("currentProfile"), current)
        return current

    @staticmethod
    def get_current(db: Session) -> CurrentProfile:
        return RecordStore.load_object(db, slot_key("currentProfile"), CurrentProfile) or CurrentProfile()

    @staticmethod
    def logout(db: Session) -> None:
        RecordStore.clear(db, slot_key("currentProfile"))

    @staticmethod
    def delete(db: Session, profile_id: str) -> bool:
        profiles = ProfileService.get_all(db)
        remaining = [p for p in profiles if p.id != profile_id]
        if len(remaining) == len(profiles):
            return False
        RecordStore.save(db, slot_key("profiles"), remaining)
        if ProfileService.get_current(db).id == profile_id:
            ProfileService.logout(db)
        return True
