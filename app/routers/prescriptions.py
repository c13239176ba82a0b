"""Prescription lookup and dispensing endpoints."""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.dependencies.auth import get_current_user, get_current_pharmacist
from app.schemas.prescription import (
    PrescriptionRead, PrescriptionItemRead, DispenseRequest, DispenseResponse, CancelRequest,
)
from app.services.prescription_service import PrescriptionService
from app.services.profile_service import ProfileService
from app.utils.errors import ForbiddenError

router = APIRouter(prefix="/prescriptions", tags=["prescriptions"])


@router.get("/queue", response_model=List[PrescriptionRead])
async def dispense_queue(
    limit: int = Query(50, ge=1, le=200),
    current_user = Depends(get_current_pharmacist),
    db: Session = Depends(get_db),
):
    ProfileService.ensure_pharmacist(db, current_user["sub"])
    return PrescriptionService.dispense_queue(db, limit=limit)


@router.get("/{prescription_id}", response_model=PrescriptionRead)
async def get_prescription(
    prescription_id: int,
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    prescription = PrescriptionService.get(db, prescription_id)
    user_type = current_user.get("user_type")
    if user_type == "patient":
        patient = ProfileService.ensure_patient(db, current_user["sub"])
        if prescription.patient_profile_id != patient.id:
            raise ForbiddenError("You do not have access to this prescription")
    elif user_type == "doctor":
        doctor = ProfileService.ensure_doctor(db, current_user["sub"])
        if prescription.doctor_profile_id != doctor.id:
            raise ForbiddenError("You do not have access to this prescription")
    elif user_type == "pharmacist":
        ProfileService.ensure_pharmacist(db, current_user["sub"])
    else:
        raise ForbiddenError()
    return prescription


@router.post("/items/{item_id}/dispense", response_model=DispenseResponse)
async def dispense_item(
    item_id: int,
    payload: DispenseRequest,
    current_user = Depends(get_current_pharmacist),
    db: Session = Depends(get_db),
):
    try:
        item = PrescriptionService.dispense_item(db, current_user["sub"], item_id, payload.quantity)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return DispenseResponse(
        item=PrescriptionItemRead.model_validate(item),
        prescription_id=item.prescription_id,
        prescription_status=item.prescription.status,
    )


@router.post("/{prescription_id}/cancel", response_model=PrescriptionRead)
async def cancel_prescription(
    prescription_id: int,
    payload: CancelRequest,
    current_user = Depends(get_current_pharmacist),
    db: Session = Depends(get_db),
):
    return PrescriptionService.cancel(db, current_user["sub"], prescription_id, payload.reason)
