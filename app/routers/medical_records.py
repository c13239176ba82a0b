"""Medical record endpoints."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.dependencies.auth import get_current_user, get_current_doctor
from app.schemas.medical_record import MedicalRecordCreate, MedicalRecordDetail
from app.services.medical_record_service import MedicalRecordService

router = APIRouter(prefix="/medical-records", tags=["medical-records"])


@router.post("", response_model=MedicalRecordDetail, status_code=status.HTTP_201_CREATED)
async def create_record(
    payload: MedicalRecordCreate,
    current_doctor = Depends(get_current_doctor),
    db: Session = Depends(get_db),
):
    try:
        return MedicalRecordService.create_record(
            db,
            current_doctor["sub"],
            payload.model_dump(exclude_none=True),
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{record_id}", response_model=MedicalRecordDetail)
async def get_record(
    record_id: int,
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return MedicalRecordService.get_record(db, record_id, current_user)
