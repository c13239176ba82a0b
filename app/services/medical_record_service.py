import logging
from datetime import date, timedelta
from typing import List

from sqlalchemy.orm import Session, selectinload

from app.core.config import settings
from app.core.constants import PrescriptionStatus, PrescriptionItemStatus
from app.models.medical_record import MedicalRecord
from app.models.medication import Medication
from app.models.prescription import Prescription, PrescriptionItem
from app.models.profile import PatientProfile
from app.services.profile_service import ProfileService
from app.utils.errors import RecordNotFoundError, ProfileNotFoundError, ForbiddenError
from app.utils.helpers import generate_prescription_number

logger = logging.getLogger(__name__)


class MedicalRecordService:
    @staticmethod
    def create_record(db: Session, user_id: str, payload: dict) -> MedicalRecord:
        """
        Create a visit record, optionally with a prescription.

        The record, prescription and items are written in a single commit.
        """
        doctor = ProfileService.ensure_doctor(db, user_id)

        patient = (
            db.query(PatientProfile)
            .filter(PatientProfile.id == payload["patient_profile_id"])
            .first()
        )
        if not patient:
            raise ProfileNotFoundError("Patient not found")

        diagnosis = (payload.get("diagnosis") or "").strip()
        if not diagnosis:
            raise ValueError("Please select a patient and enter a diagnosis")

        visit_date = payload.get("visit_date") or date.today()
        record = MedicalRecord(
            patient_profile_id=patient.id,
            doctor_profile_id=doctor.id,
            diagnosis=payload["diagnosis"],
            symptoms=payload.get("symptoms") or [],
            vital_signs=payload.get("vital_signs") or None,
            notes=payload.get("notes"),
            visit_date=visit_date,
            follow_up_date=payload.get("follow_up_date"),
        )
        rx = payload.get("prescription")
        if rx:
            record.prescriptions.append(
                MedicalRecordService._build_prescription(db, doctor.id, patient.id, visit_date, rx)
            )

        db.add(record)
        db.commit()
        db.refresh(record)
        logger.info(f"Doctor {doctor.id} created medical record {record.id} for patient {patient.id}")
        return record

    @staticmethod
    def _build_prescription(db: Session, doctor_id: int, patient_id: int, issued: date, rx: dict) -> Prescription:
        items = rx.get("items") or []
        if not items:
            raise ValueError("A prescription needs at least one item")

        medication_ids = {it["medication_id"] for it in items}
        found = {
            m.id for m in db.query(Medication.id).filter(Medication.id.in_(medication_ids)).all()
        }
        missing = sorted(medication_ids - found)
        if missing:
            raise RecordNotFoundError(f"Unknown medication id(s): {missing}")

        valid_until = rx.get("valid_until") or issued + timedelta(days=settings.PRESCRIPTION_VALIDITY_DAYS)
        if valid_until < issued:
            raise ValueError("valid_until cannot be before the issue date")

        prescription = Prescription(
            patient_profile_id=patient_id,
            doctor_profile_id=doctor_id,
            prescription_number=generate_prescription_number(),
            issued_date=issued,
            valid_until=valid_until,
            notes=rx.get("notes"),
            status=PrescriptionStatus.PENDING.value,
        )
        for it in items:
            prescription.items.append(
                PrescriptionItem(
                    medication_id=it["medication_id"],
                    dosage_instructions=it["dosage_instructions"],
                    frequency=it["frequency"],
                    duration_days=it.get("duration_days"),
                    quantity=it["quantity"],
                    dispensed_quantity=0,
                    status=PrescriptionItemStatus.PENDING.value,
                )
            )
        return prescription

    @staticmethod
    def _query(db: Session):
        return db.query(MedicalRecord).options(
            selectinload(MedicalRecord.prescriptions)
            .selectinload(Prescription.items)
            .selectinload(PrescriptionItem.medication)
        )

    @staticmethod
    def get_record(db: Session, record_id: int, viewer: dict) -> MedicalRecord:
        """Fetch a record the viewer wrote (doctor) or owns (patient)."""
        record = MedicalRecordService._query(db).filter(MedicalRecord.id == record_id).first()
        if not record:
            raise RecordNotFoundError("Medical record not found")

        user_type = viewer.get("user_type")
        if user_type == "doctor":
            allowed = ProfileService.ensure_doctor(db, viewer["sub"]).id == record.doctor_profile_id
        elif user_type == "patient":
            allowed = ProfileService.ensure_patient(db, viewer["sub"]).id == record.patient_profile_id
        else:
            allowed = False
        if not allowed:
            raise ForbiddenError("You do not have access to this medical record")
        return record

    @staticmethod
    def list_for_doctor(db: Session, doctor_id: int, limit: int = 20) -> List[MedicalRecord]:
        return (
            db.query(MedicalRecord)
            .filter(MedicalRecord.doctor_profile_id == doctor_id)
            .order_by(MedicalRecord.visit_date.desc(), MedicalRecord.id.desc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def list_for_patient(db: Session, patient_id: int) -> List[MedicalRecord]:
        return (
            db.query(MedicalRecord)
            .filter(MedicalRecord.patient_profile_id == patient_id)
            .order_by(MedicalRecord.visit_date.desc(), MedicalRecord.id.desc())
            .all()
        )
