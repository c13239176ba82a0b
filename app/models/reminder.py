from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.core.constants import ReminderStatus
from app.models.base import IDMixin, TimestampMixin


class MedicationReminder(IDMixin, TimestampMixin, Base):
    __tablename__ = "medication_notifications"

    patient_profile_id = Column(
        Integer, ForeignKey("patient_profiles.id", ondelete="CASCADE"), index=True, nullable=False
    )
    prescription_item_id = Column(
        Integer, ForeignKey("prescription_items.id", ondelete="CASCADE"), nullable=False
    )

    notification_time = Column(DateTime, nullable=False, index=True)
    message = Column(Text, nullable=True)
    status = Column(String(20), default=ReminderStatus.PENDING.value, nullable=False)

    prescription_item = relationship("PrescriptionItem")
