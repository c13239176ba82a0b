"""Prescription and dispensing schemas."""
from datetime import date, datetime
from typing import Optional, List

from pydantic import BaseModel, Field, ConfigDict

from app.schemas.medication import MedicationBrief


class PrescriptionItemCreate(BaseModel):
    medication_id: int = Field(..., gt=0)
    dosage_instructions: str = Field(..., min_length=1)
    frequency: str = Field(..., min_length=1, max_length=100)
    duration_days: Optional[int] = Field(None, gt=0)
    quantity: int = Field(..., gt=0)


class PrescriptionCreate(BaseModel):
    valid_until: Optional[date] = None
    notes: Optional[str] = None
    items: List[PrescriptionItemCreate] = Field(..., min_length=1)


class PrescriptionItemRead(BaseModel):
    id: int
    prescription_id: int
    medication_id: int
    dosage_instructions: str
    frequency: str
    duration_days: Optional[int] = None
    quantity: int
    dispensed_quantity: int = 0
    remaining_quantity: int
    status: str
    dispensed_at: Optional[datetime] = None
    dispensed_by_pharmacist_id: Optional[int] = None
    medication: Optional[MedicationBrief] = None

    model_config = ConfigDict(from_attributes=True)


class PrescriptionRead(BaseModel):
    id: int
    prescription_number: str
    patient_profile_id: int
    doctor_profile_id: int
    medical_record_id: int
    status: str
    issued_date: date
    valid_until: Optional[date] = None
    notes: Optional[str] = None
    cancelled_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = None
    items: List[PrescriptionItemRead] = []

    model_config = ConfigDict(from_attributes=True)


class DispenseRequest(BaseModel):
    quantity: int = Field(..., gt=0)


class DispenseResponse(BaseModel):
    item: PrescriptionItemRead
    prescription_id: int
    prescription_status: str


class CancelRequest(BaseModel):
    reason: Optional[str] = Field(None, max_length=500)
