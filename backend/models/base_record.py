"""
base_record.py — Shared record schema plumbing
Every stored document passes through a pydantic model on load, which fills
missing fields with their documented fallbacks. Field names are snake_case in
Python and camelCase in the stored JSON.
"""

import time
import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel


class RecordValidationError(ValueError):
    """A record could not be normalized, or user input failed validation."""


def new_id() -> str:
    """Opaque unique token: epoch millis plus a random hex suffix."""
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:12]}"


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def coerce_text(value) -> str:
    if value is None:
        return ""
    return str(value)


def coerce_flag(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)


def choice_or_default(value, allowed: list[str]) -> str:
    """Known enum values pass through; anything else falls back to the first."""
    if isinstance(value, str) and value in allowed:
        return value
    return allowed[0]


def require_choice(value: str, allowed: list[str], label: str) -> str:
    if value not in allowed:
        raise RecordValidationError(f"{label} must be one of: {', '.join(allowed)}.")
    return value


class ApiModel(BaseModel):
    """Accepts both camelCase and snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class BaseRecord(ApiModel):
    @classmethod
    def normalize(cls, raw):
        """Build a typed record from a raw stored document, or raise RecordValidationError."""
        if not isinstance(raw, dict):
            raise RecordValidationError(f"{cls.__name__} must be an object, got {type(raw).__name__}")
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            raise RecordValidationError(f"{cls.__name__}: {e}") from e

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class CollectionRecord(BaseRecord):
    """A record that lives in a list slot: stable id plus creation stamp."""

    id: str = Field(default_factory=new_id)
    created_at: str = Field(default_factory=now_iso)

    @field_validator("id", mode="before")
    @classmethod
    def _id_or_new(cls, v):
        return str(v) if v else new_id()

    @field_validator("created_at", mode="before")
    @classmethod
    def _created_or_now(cls, v):
        return str(v) if v else now_iso()
