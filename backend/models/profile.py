from typing import Optional

from pydantic import field_validator

from models.base_record import BaseRecord, CollectionRecord

GUEST_NAME = "Guest"


class Profile(CollectionRecord):
    name: str = ""
    pin: Optional[str] = None  # 4 digits, not real security

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, v):
        return str(v).strip() if v is not None else ""

    @field_validator("pin", mode="before")
    @classmethod
    def _pin(cls, v):
        return str(v) if v not in (None, "") else None

    def public(self) -> dict:
        return {"id": self.id, "name": self.name, "createdAt": self.created_at, "hasPin": bool(self.pin)}


class CurrentProfile(BaseRecord):
    """Pointer to the active profile, kept apart from the profile list."""

    id: Optional[str] = None
    name: str = GUEST_NAME

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, v):
        return str(v) if v else GUEST_NAME
