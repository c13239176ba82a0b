from sqlalchemy import Column, Integer, String, Date, Float, ForeignKey
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.models.base import IDMixin, TimestampMixin
from app.utils.stock import classify_stock


class InventoryItem(IDMixin, TimestampMixin, Base):
    __tablename__ = "pharmacy_inventory"

    pharmacist_profile_id = Column(
        Integer, ForeignKey("pharmacist_profiles.id", ondelete="CASCADE"), index=True, nullable=False
    )
    medication_id = Column(Integer, ForeignKey("medications.id"), index=True, nullable=False)

    current_stock = Column(Integer, default=0, nullable=False)
    minimum_stock_level = Column(Integer, default=10, nullable=False)
    maximum_stock_level = Column(Integer, default=1000, nullable=False)

    expiry_date = Column(Date, nullable=True)
    batch_number = Column(String(64), nullable=True)
    supplier = Column(String(200), nullable=True)
    unit_cost = Column(Float, nullable=True)

    pharmacist = relationship("PharmacistProfile", back_populates="inventory")
    medication = relationship("Medication")

    @property
    def stock_status(self) -> str:
        return classify_stock(
            self.current_stock, self.minimum_stock_level, self.maximum_stock_level
        ).value
