"""Profile registration and lookup endpoints."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.dependencies.auth import (
    get_current_user, get_current_patient, get_current_doctor, get_current_pharmacist,
)
from app.dependencies.rate_limit import rate_limit
from app.schemas.profile import (
    PatientRegister, DoctorRegister, PharmacistRegister, ProfileDetail, ProfileRead,
)
from app.services.profile_service import ProfileService
from app.utils.errors import ForbiddenError

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.post("/patient", response_model=ProfileDetail, status_code=status.HTTP_201_CREATED)
async def register_patient(
    payload: PatientRegister,
    current_user = Depends(get_current_patient),
    db: Session = Depends(get_db),
    _: None = Depends(rate_limit),
):
    try:
        return ProfileService.register_patient(db, current_user["sub"], payload.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/doctor", response_model=ProfileDetail, status_code=status.HTTP_201_CREATED)
async def register_doctor(
    payload: DoctorRegister,
    current_user = Depends(get_current_doctor),
    db: Session = Depends(get_db),
    _: None = Depends(rate_limit),
):
    try:
        return ProfileService.register_doctor(db, current_user["sub"], payload.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/pharmacist", response_model=ProfileDetail, status_code=status.HTTP_201_CREATED)
async def register_pharmacist(
    payload: PharmacistRegister,
    current_user = Depends(get_current_pharmacist),
    db: Session = Depends(get_db),
    _: None = Depends(rate_limit),
):
    try:
        return ProfileService.register_pharmacist(db, current_user["sub"], payload.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/me", response_model=ProfileDetail)
async def get_me(current_user = Depends(get_current_user), db: Session = Depends(get_db)):
    return ProfileService.ensure_profile(db, current_user["sub"])


@router.get("/qr/{qr_code}", response_model=ProfileRead)
async def get_by_qr(
    qr_code: str,
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Resolve a scanned QR code. Only doctors and pharmacists scan codes."""
    if current_user.get("user_type") not in ("doctor", "pharmacist"):
        raise ForbiddenError("Only doctors and pharmacists can scan QR codes")
    return ProfileService.get_by_qr(db, qr_code)
