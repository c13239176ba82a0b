"""Doctor endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.dependencies.auth import get_current_doctor
from app.dependencies.rate_limit import rate_limit
from app.schemas.profile import DoctorProfileRead, PatientSummary
from app.services.profile_service import ProfileService
from app.services.verification_client import VerificationClient, get_verification_client

router = APIRouter(prefix="/doctors", tags=["doctors"])


@router.get("/me", response_model=DoctorProfileRead)
async def get_doctor(current_doctor = Depends(get_current_doctor), db: Session = Depends(get_db)):
    return ProfileService.ensure_doctor(db, current_doctor["sub"])


@router.post("/me/verify-license", response_model=DoctorProfileRead)
async def verify_license(
    current_doctor = Depends(get_current_doctor),
    db: Session = Depends(get_db),
    client: VerificationClient = Depends(get_verification_client),
    _: None = Depends(rate_limit),
):
    try:
        return await ProfileService.verify_doctor_license(db, current_doctor["sub"], client)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/patients", response_model=List[PatientSummary])
async def search_patients(
    q: Optional[str] = None,
    limit: int = Query(100, ge=1, le=500),
    current_doctor = Depends(get_current_doctor),
    db: Session = Depends(get_db),
):
    ProfileService.ensure_doctor(db, current_doctor["sub"])
    return [
        PatientSummary(
            id=p.id,
            name=p.profile.name,
            phone=p.profile.phone,
            age=p.age,
            sex=p.sex,
            aadhaar_verified=bool(p.aadhaar_verified),
        )
        for p in ProfileService.search_patients(db, q, limit=limit)
    ]
