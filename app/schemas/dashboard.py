"""Role-scoped dashboard views.

One typed payload per role, all served from ``GET /dashboard``.
"""
from typing import List, Literal, Union, Dict

from pydantic import BaseModel, Field

from app.schemas.inventory import InventoryRead
from app.schemas.medical_record import MedicalRecordRead
from app.schemas.prescription import PrescriptionRead
from app.schemas.profile import (
    ProfileRead, PatientProfileRead, DoctorProfileRead, PharmacistProfileRead, PatientSummary,
)
from app.schemas.reminder import ReminderRead


class PatientDashboard(BaseModel):
    role: Literal["patient"] = "patient"
    profile: ProfileRead
    patient: PatientProfileRead
    medical_records: List[MedicalRecordRead] = []
    prescriptions: List[PrescriptionRead] = []
    upcoming_reminders: List[ReminderRead] = []


class DoctorDashboard(BaseModel):
    role: Literal["doctor"] = "doctor"
    profile: ProfileRead
    doctor: DoctorProfileRead
    medical_records: List[MedicalRecordRead] = []
    prescriptions: List[PrescriptionRead] = []
    patients: List[PatientSummary] = []


class PharmacistSummary(BaseModel):
    pending_prescriptions: int = 0
    partially_dispensed_prescriptions: int = 0
    stock: Dict[str, int] = Field(default_factory=dict)


class PharmacistDashboard(BaseModel):
    role: Literal["pharmacist"] = "pharmacist"
    profile: ProfileRead
    pharmacist: PharmacistProfileRead
    prescriptions: List[PrescriptionRead] = []
    inventory: List[InventoryRead] = []
    summary: PharmacistSummary


Dashboard = Union[PatientDashboard, DoctorDashboard, PharmacistDashboard]
