"""Pharmacist endpoints."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.dependencies.auth import get_current_pharmacist
from app.dependencies.rate_limit import rate_limit
from app.schemas.profile import PharmacistProfileRead
from app.services.profile_service import ProfileService
from app.services.verification_client import VerificationClient, get_verification_client

router = APIRouter(prefix="/pharmacists", tags=["pharmacists"])


@router.get("/me", response_model=PharmacistProfileRead)
async def get_pharmacist(current_user = Depends(get_current_pharmacist), db: Session = Depends(get_db)):
    return ProfileService.ensure_pharmacist(db, current_user["sub"])


@router.post("/me/verify-license", response_model=PharmacistProfileRead)
async def verify_license(
    current_user = Depends(get_current_pharmacist),
    db: Session = Depends(get_db),
    client: VerificationClient = Depends(get_verification_client),
    _: None = Depends(rate_limit),
):
    try:
        return await ProfileService.verify_pharmacist_license(db, current_user["sub"], client)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
