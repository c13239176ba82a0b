from sqlalchemy import Column, String, Text, JSON
from app.core.database import Base
from app.models.base import IDMixin, TimestampMixin


class Medication(IDMixin, TimestampMixin, Base):
    __tablename__ = "medications"

    name = Column(String(255), nullable=False, index=True)
    generic_name = Column(String(255), nullable=True)
    strength = Column(String(50), nullable=False)
    dosage_form = Column(String(50), nullable=False)
    manufacturer = Column(String(200), nullable=True)
    description = Column(Text, nullable=True)
    side_effects = Column(JSON, nullable=True)
    contraindications = Column(JSON, nullable=True)

    def __repr__(self):
        return f"<Medication {self.name} {self.strength}>"
