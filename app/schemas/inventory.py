"""Pharmacy inventory schemas."""
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict, model_validator

from app.schemas.medication import MedicationBrief


class InventoryCreate(BaseModel):
    medication_id: int = Field(..., gt=0)
    current_stock: int = Field(0, ge=0)
    minimum_stock_level: Optional[int] = Field(None, ge=0)
    maximum_stock_level: Optional[int] = Field(None, gt=0)
    expiry_date: Optional[date] = None
    batch_number: Optional[str] = Field(None, max_length=64)
    supplier: Optional[str] = Field(None, max_length=200)
    unit_cost: Optional[float] = Field(None, ge=0)

    @model_validator(mode="after")
    def check_thresholds(self):
        lo, hi = self.minimum_stock_level, self.maximum_stock_level
        if lo is not None and hi is not None and lo >= hi:
            raise ValueError("minimum_stock_level must be below maximum_stock_level")
        return self


class StockUpdate(BaseModel):
    current_stock: int = Field(..., ge=0)


class InventoryRead(BaseModel):
    id: int
    pharmacist_profile_id: int
    medication_id: int
    current_stock: int
    minimum_stock_level: int
    maximum_stock_level: int
    expiry_date: Optional[date] = None
    batch_number: Optional[str] = None
    supplier: Optional[str] = None
    unit_cost: Optional[float] = None
    stock_status: str
    medication: Optional[MedicationBrief] = None

    model_config = ConfigDict(from_attributes=True)
