"""Medical record schemas."""
from datetime import date, datetime
from typing import Optional, List, Dict, Any

from pydantic import BaseModel, Field, ConfigDict, field_validator

from app.schemas.prescription import PrescriptionCreate, PrescriptionRead


class MedicalRecordCreate(BaseModel):
    patient_profile_id: int = Field(..., gt=0)
    diagnosis: str = Field(..., min_length=1)
    symptoms: Optional[List[str]] = None
    vital_signs: Optional[Dict[str, Any]] = None
    notes: Optional[str] = None
    visit_date: Optional[date] = None
    follow_up_date: Optional[date] = None
    prescription: Optional[PrescriptionCreate] = None

    @field_validator("diagnosis")
    @classmethod
    def diagnosis_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("diagnosis must not be blank")
        return v

    @field_validator("symptoms", mode="before")
    @classmethod
    def split_symptoms(cls, v):
        # The registration form submits a comma separated string
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v


class MedicalRecordRead(BaseModel):
    id: int
    patient_profile_id: int
    doctor_profile_id: int
    diagnosis: str
    symptoms: Optional[List[str]] = None
    vital_signs: Optional[Dict[str, Any]] = None
    notes: Optional[str] = None
    visit_date: date
    follow_up_date: Optional[date] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class MedicalRecordDetail(MedicalRecordRead):
    prescriptions: List[PrescriptionRead] = []
