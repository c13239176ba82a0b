from sqlalchemy import Column, Integer, String, DateTime, Date, Text, ForeignKey
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.core.constants import PrescriptionStatus, PrescriptionItemStatus
from app.models.base import IDMixin, TimestampMixin


class Prescription(IDMixin, TimestampMixin, Base):
    __tablename__ = "prescriptions"

    patient_profile_id = Column(
        Integer, ForeignKey("patient_profiles.id", ondelete="CASCADE"), index=True, nullable=False
    )
    doctor_profile_id = Column(
        Integer, ForeignKey("doctor_profiles.id", ondelete="CASCADE"), index=True, nullable=False
    )
    medical_record_id = Column(
        Integer, ForeignKey("medical_records.id", ondelete="CASCADE"), nullable=False
    )

    prescription_number = Column(String(20), unique=True, nullable=False)
    issued_date = Column(Date, nullable=False, index=True)
    valid_until = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)

    status = Column(String(30), default=PrescriptionStatus.PENDING.value, nullable=False, index=True)

    cancelled_at = Column(DateTime, nullable=True)
    cancelled_by_pharmacist_id = Column(Integer, ForeignKey("pharmacist_profiles.id"), nullable=True)
    cancellation_reason = Column(Text, nullable=True)

    patient = relationship("PatientProfile")
    doctor = relationship("DoctorProfile")
    medical_record = relationship("MedicalRecord", back_populates="prescriptions")
    items = relationship(
        "PrescriptionItem",
        back_populates="prescription",
        cascade="all, delete-orphan",
        order_by="PrescriptionItem.id",
    )


class PrescriptionItem(IDMixin, TimestampMixin, Base):
    __tablename__ = "prescription_items"

    prescription_id = Column(
        Integer, ForeignKey("prescriptions.id", ondelete="CASCADE"), index=True, nullable=False
    )
    medication_id = Column(Integer, ForeignKey("medications.id"), nullable=False)

    dosage_instructions = Column(Text, nullable=False)
    frequency = Column(String(100), nullable=False)
    duration_days = Column(Integer, nullable=True)

    quantity = Column(Integer, nullable=False)
    dispensed_quantity = Column(Integer, default=0, nullable=False)
    status = Column(String(20), default=PrescriptionItemStatus.PENDING.value, nullable=False)

    dispensed_at = Column(DateTime, nullable=True)
    dispensed_by_pharmacist_id = Column(Integer, ForeignKey("pharmacist_profiles.id"), nullable=True)

    prescription = relationship("Prescription", back_populates="items")
    medication = relationship("Medication")

    @property
    def remaining_quantity(self) -> int:
        return self.quantity - (self.dispensed_quantity or 0)
