from typing import Optional

from sqlalchemy.orm import Session

from app.core.constants import UserRole, PrescriptionStatus
from app.schemas.dashboard import (
    Dashboard, PatientDashboard, DoctorDashboard, PharmacistDashboard, PharmacistSummary,
)
from app.schemas.profile import PatientSummary
from app.services.inventory_service import InventoryService
from app.services.medical_record_service import MedicalRecordService
from app.services.prescription_service import PrescriptionService
from app.services.profile_service import ProfileService
from app.services.reminder_service import ReminderService
from app.utils.errors import ForbiddenError


class DashboardService:
    """Builds the single dashboard payload each role sees on sign-in."""

    @staticmethod
    def for_user(db: Session, current_user: dict, patient_query: Optional[str] = None) -> Dashboard:
        user_type = current_user.get("user_type")
        user_id = current_user["sub"]
        if user_type == UserRole.PATIENT.value:
            return DashboardService.patient_view(db, user_id)
        if user_type == UserRole.DOCTOR.value:
            return DashboardService.doctor_view(db, user_id, patient_query)
        if user_type == UserRole.PHARMACIST.value:
            return DashboardService.pharmacist_view(db, user_id)
        raise ForbiddenError("Unknown role")

    @staticmethod
    def patient_view(db: Session, user_id: str) -> PatientDashboard:
        patient = ProfileService.ensure_patient(db, user_id)
        return PatientDashboard.model_validate(
            {
                "profile": patient.profile,
                "patient": patient,
                "medical_records": MedicalRecordService.list_for_patient(db, patient.id),
                "prescriptions": PrescriptionService.list_for_patient(db, patient.id),
                "upcoming_reminders": ReminderService.list_for_patient(db, patient.id, upcoming_only=True),
            },
            from_attributes=True,
        )

    @staticmethod
    def doctor_view(db: Session, user_id: str, patient_query: Optional[str] = None) -> DoctorDashboard:
        doctor = ProfileService.ensure_doctor(db, user_id)
        patients = [
            PatientSummary(
                id=p.id,
                name=p.profile.name,
                phone=p.profile.phone,
                age=p.age,
                sex=p.sex,
                aadhaar_verified=bool(p.aadhaar_verified),
            )
            for p in ProfileService.search_patients(db, patient_query)
        ]
        return DoctorDashboard.model_validate(
            {
                "profile": doctor.profile,
                "doctor": doctor,
                "medical_records": MedicalRecordService.list_for_doctor(db, doctor.id),
                "prescriptions": PrescriptionService.list_for_doctor(db, doctor.id),
                "patients": patients,
            },
            from_attributes=True,
        )

    @staticmethod
    def pharmacist_view(db: Session, user_id: str) -> PharmacistDashboard:
        pharmacist = ProfileService.ensure_pharmacist(db, user_id)
        queue = PrescriptionService.dispense_queue(db)
        rows = InventoryService.rows_for_pharmacist(db, pharmacist.id)
        summary = PharmacistSummary(
            pending_prescriptions=sum(
                1 for p in queue if p.status == PrescriptionStatus.PENDING.value
            ),
            partially_dispensed_prescriptions=sum(
                1 for p in queue if p.status == PrescriptionStatus.PARTIALLY_DISPENSED.value
            ),
            stock=InventoryService.summarize(rows),
        )
        return PharmacistDashboard.model_validate(
            {
                "profile": pharmacist.profile,
                "pharmacist": pharmacist,
                "prescriptions": queue,
                "inventory": rows,
                "summary": summary,
            },
            from_attributes=True,
        )
