"""Visit records written by doctors. Immutable once created."""
from sqlalchemy import Column, Integer, Date, Text, JSON, ForeignKey
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.models.base import IDMixin, TimestampMixin


class MedicalRecord(IDMixin, TimestampMixin, Base):
    __tablename__ = "medical_records"

    patient_profile_id = Column(
        Integer, ForeignKey("patient_profiles.id", ondelete="CASCADE"), index=True, nullable=False
    )
    doctor_profile_id = Column(
        Integer, ForeignKey("doctor_profiles.id", ondelete="CASCADE"), index=True, nullable=False
    )

    diagnosis = Column(Text, nullable=False)
    symptoms = Column(JSON, nullable=True)
    vital_signs = Column(JSON, nullable=True)
    notes = Column(Text, nullable=True)
    visit_date = Column(Date, nullable=False, index=True)
    follow_up_date = Column(Date, nullable=True)

    patient = relationship("PatientProfile")
    doctor = relationship("DoctorProfile")
    prescriptions = relationship("Prescription", back_populates="medical_record")
