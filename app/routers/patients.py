"""Patient endpoints."""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.dependencies.auth import get_current_patient
from app.dependencies.rate_limit import rate_limit
from app.schemas.medical_record import MedicalRecordRead
from app.schemas.prescription import PrescriptionRead
from app.schemas.profile import PatientProfileRead
from app.schemas.reminder import ReminderCreate, ReminderRead, ReminderStatusUpdate
from app.schemas.verification import AadhaarOtpVerify, VerificationResult
from app.services.medical_record_service import MedicalRecordService
from app.services.prescription_service import PrescriptionService
from app.services.profile_service import ProfileService
from app.services.reminder_service import ReminderService
from app.services.verification_client import VerificationClient, get_verification_client

router = APIRouter(prefix="/patients", tags=["patients"])


@router.get("/me", response_model=PatientProfileRead)
async def get_patient(current_user = Depends(get_current_patient), db: Session = Depends(get_db)):
    return ProfileService.ensure_patient(db, current_user["sub"])


@router.post("/me/aadhaar/send-otp", response_model=VerificationResult)
async def send_aadhaar_otp(
    current_user = Depends(get_current_patient),
    db: Session = Depends(get_db),
    client: VerificationClient = Depends(get_verification_client),
    _: None = Depends(rate_limit),
):
    try:
        return await ProfileService.send_aadhaar_otp(db, current_user["sub"], client)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/me/aadhaar/verify", response_model=PatientProfileRead)
async def verify_aadhaar(
    payload: AadhaarOtpVerify,
    current_user = Depends(get_current_patient),
    db: Session = Depends(get_db),
    client: VerificationClient = Depends(get_verification_client),
    _: None = Depends(rate_limit),
):
    try:
        return await ProfileService.verify_aadhaar(db, current_user["sub"], payload.otp, client)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/me/records", response_model=List[MedicalRecordRead])
async def my_records(current_user = Depends(get_current_patient), db: Session = Depends(get_db)):
    patient = ProfileService.ensure_patient(db, current_user["sub"])
    return MedicalRecordService.list_for_patient(db, patient.id)


@router.get("/me/prescriptions", response_model=List[PrescriptionRead])
async def my_prescriptions(current_user = Depends(get_current_patient), db: Session = Depends(get_db)):
    patient = ProfileService.ensure_patient(db, current_user["sub"])
    return PrescriptionService.list_for_patient(db, patient.id)


@router.get("/me/reminders", response_model=List[ReminderRead])
async def my_reminders(
    upcoming_only: bool = False,
    current_user = Depends(get_current_patient),
    db: Session = Depends(get_db),
):
    patient = ProfileService.ensure_patient(db, current_user["sub"])
    return ReminderService.list_for_patient(db, patient.id, upcoming_only=upcoming_only)


@router.post("/me/reminders", response_model=ReminderRead, status_code=status.HTTP_201_CREATED)
async def create_reminder(
    payload: ReminderCreate,
    current_user = Depends(get_current_patient),
    db: Session = Depends(get_db),
):
    try:
        return ReminderService.create(db, current_user["sub"], payload.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/me/reminders/{reminder_id}", response_model=ReminderRead)
async def update_reminder(
    reminder_id: int,
    payload: ReminderStatusUpdate,
    current_user = Depends(get_current_patient),
    db: Session = Depends(get_db),
):
    try:
        return ReminderService.update_status(db, current_user["sub"], reminder_id, payload.status)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
