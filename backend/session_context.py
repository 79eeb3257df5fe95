from dataclasses import dataclass

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from database import get_db
from models.profile import CurrentProfile, Profile, GUEST_NAME
from services.record_store import RecordStore, slot_key

PROFILE_HEADER = "X-Profile-Id"


@dataclass(frozen=True)
class SessionContext:
    """Who is active for this request. Passed explicitly to every store call."""

    profile_id: str | None = None
    profile_name: str = GUEST_NAME


def resolve_context(db: Session, profile_id: str | None = None) -> SessionContext:
    """
    Explicit profile id wins (it must exist); otherwise fall back to the
    stored current-profile pointer, otherwise Guest.
    """
    if profile_id:
        profiles = RecordStore.load(db, slot_key("profiles"), Profile)
        match = next((p for p in profiles if p.id == profile_id), None)
        if match is None:
            raise LookupError(profile_id)
        return SessionContext(profile_id=match.id, profile_name=match.name)

    current = RecordStore.load_object(db, slot_key("currentProfile"), CurrentProfile)
    if current is None or not current.id:
        return SessionContext()
    return SessionContext(profile_id=current.id, profile_name=current.name)


def get_session_context(request: Request, db: Session = Depends(get_db)) -> SessionContext:
    """FastAPI dependency — resolves the active profile from the X-Profile-Id header."""
    header = request.headers.get(PROFILE_HEADER, "").strip()
    try:
        return resolve_context(db, header or None)
    except LookupError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown profile",
        )
