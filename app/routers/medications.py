"""Medication catalog endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.dependencies.auth import get_current_user
from app.schemas.medication import MedicationCreate, MedicationRead
from app.services.medication_service import MedicationService
from app.utils.errors import ForbiddenError

router = APIRouter(prefix="/medications", tags=["medications"])


@router.get("", response_model=List[MedicationRead])
async def list_medications(
    q: Optional[str] = None,
    limit: int = Query(100, ge=1, le=500),
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return MedicationService.list(db, q, limit=limit)


@router.get("/{medication_id}", response_model=MedicationRead)
async def get_medication(
    medication_id: int,
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return MedicationService.get(db, medication_id)


@router.post("", response_model=MedicationRead, status_code=status.HTTP_201_CREATED)
async def create_medication(
    payload: MedicationCreate,
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if current_user.get("user_type") not in ("doctor", "pharmacist"):
        raise ForbiddenError("Only doctors and pharmacists can add medications")
    return MedicationService.create(db, payload.model_dump())
