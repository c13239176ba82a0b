"""Medication catalog schemas."""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List


class MedicationCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    generic_name: Optional[str] = None
    strength: str = Field(..., min_length=1, max_length=50)
    dosage_form: str = Field(..., min_length=1, max_length=50)
    manufacturer: Optional[str] = None
    description: Optional[str] = None
    side_effects: Optional[List[str]] = None
    contraindications: Optional[List[str]] = None


class MedicationRead(MedicationCreate):
    id: int

    model_config = ConfigDict(from_attributes=True)


class MedicationBrief(BaseModel):
    id: int
    name: str
    generic_name: Optional[str] = None
    strength: str
    dosage_form: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
