"""Medication reminders a patient schedules against prescription items.

Reminders are stored and listed only; nothing here delivers them.
"""
from datetime import timezone
from typing import List

from sqlalchemy.orm import Session

from app.core.constants import ReminderStatus
from app.models.prescription import Prescription, PrescriptionItem
from app.models.reminder import MedicationReminder
from app.services.profile_service import ProfileService
from app.utils.errors import RecordNotFoundError
from app.utils.helpers import utcnow


class ReminderService:
    @staticmethod
    def create(db: Session, user_id: str, payload: dict) -> MedicationReminder:
        patient = ProfileService.ensure_patient(db, user_id)

        item = (
            db.query(PrescriptionItem)
            .join(Prescription)
            .filter(
                PrescriptionItem.id == payload["prescription_item_id"],
                Prescription.patient_profile_id == patient.id,
            )
            .first()
        )
        if not item:
            raise RecordNotFoundError("Prescription item not found")

        notification_time = payload["notification_time"]
        if notification_time.tzinfo is not None:
            notification_time = notification_time.astimezone(timezone.utc).replace(tzinfo=None)

        reminder = MedicationReminder(
            patient_profile_id=patient.id,
            prescription_item_id=item.id,
            notification_time=notification_time,
            message=payload.get("message"),
            status=ReminderStatus.PENDING.value,
        )
        db.add(reminder)
        db.commit()
        db.refresh(reminder)
        return reminder

    @staticmethod
    def list_for_patient(db: Session, patient_id: int, upcoming_only: bool = False) -> List[MedicationReminder]:
        q = db.query(MedicationReminder).filter(MedicationReminder.patient_profile_id == patient_id)
        if upcoming_only:
            q = q.filter(
                MedicationReminder.notification_time >= utcnow(),
                MedicationReminder.status == ReminderStatus.PENDING.value,
            )
        return q.order_by(MedicationReminder.notification_time.asc()).all()

    @staticmethod
    def update_status(db: Session, user_id: str, reminder_id: int, status: str) -> MedicationReminder:
        patient = ProfileService.ensure_patient(db, user_id)
        allowed = {s.value for s in ReminderStatus}
        if status not in allowed:
            raise ValueError(f"status must be one of {sorted(allowed)}")

        reminder = (
            db.query(MedicationReminder)
            .filter(
                MedicationReminder.id == reminder_id,
                MedicationReminder.patient_profile_id == patient.id,
            )
            .first()
        )
        if not reminder:
            raise RecordNotFoundError("Reminder not found")

        reminder.status = status
        db.commit()
        db.refresh(reminder)
        return reminder
