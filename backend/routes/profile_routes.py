from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import Optional

from database import get_db
from models.base_record import ApiModel, RecordValidationError
from services.profile_service import ProfileService, IncorrectPinError

router = APIRouter(prefix="/api/v1/profiles", tags=["Profiles"])

class ProfileCreate(ApiModel):
    name: str
    pin: Optional[str] = None

class ProfileLogin(ApiModel):
    profile_id: str = ""
    pin: Optional[str] = None

@router.get("")
def list_profiles(db: Session = Depends(get_db)):
    return [p.public() for p in ProfileService.get_all(db)]

@router.post("")
def create_profile(profile_data: ProfileCreate, db: Session = Depends(get_db)):
    try:
        profile = ProfileService.create(db, profile_data.name, profile_data.pin)
        return {"status": "success", "data": profile.public()}
    except RecordValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.post("/login")
def login(login_data: ProfileLogin, db: Session = Depends(get_db)):
    try:
        current = ProfileService.login(db, login_data.profile_id, login_data.pin or "")
    except IncorrectPinError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except RecordValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if current is None:
        raise HTTPException(status_code=404, detail="Profile not found.")
    return {"status": "success", "data": current.to_document()}

@router.get("/current")
def current_profile(db: Session = Depends(get_db)):
    return ProfileService.get_current(db).to_document()

@router.post("/logout")
def logout(db: Session = Depends(get_db)):
    ProfileService.logout(db)
    return {"status": "success"}

@router.delete("/{profile_id}")
def delete_profile(profile_id: str, confirm: bool = False, db: Session = Depends(get_db)):
    if not confirm:
        raise HTTPException(status_code=400, detail="Delete this profile? Repeat with confirm=true.")
    if not ProfileService.delete(db, profile_id):
        raise HTTPException(status_code=404, detail="Profile not found.")
    return {"status": "success"}
