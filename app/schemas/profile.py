"""Profile registration and read schemas."""
import re
from datetime import date, datetime
from typing import Optional, Any, Dict

from pydantic import BaseModel, Field, ConfigDict, field_validator

from app.core.constants import AADHAAR_PATTERN


class ProfileBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    phone: str = Field(..., min_length=6, max_length=20)

    @field_validator("name", "phone")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class PatientRegister(ProfileBase):
    date_of_birth: date
    age: Optional[int] = Field(None, ge=0, le=150)
    sex: str = Field(..., pattern="^(male|female|other)$")
    address: str = Field(..., min_length=1)
    aadhaar_number: Optional[str] = None

    @field_validator("aadhaar_number")
    @classmethod
    def validate_aadhaar(cls, v):
        if v is None or v == "":
            return None
        v = v.replace(" ", "")
        if not re.match(AADHAAR_PATTERN, v):
            raise ValueError("Aadhaar number must be 12 digits")
        return v


class DoctorRegister(ProfileBase):
    imr_license: str = Field(..., min_length=1, max_length=32)
    specialization: str = Field(..., min_length=1, max_length=100)
    experience: int = Field(0, ge=0, le=80)

    @field_validator("imr_license")
    @classmethod
    def normalize_license(cls, v: str) -> str:
        return v.strip().upper()


class PharmacistRegister(ProfileBase):
    pmc_license: str = Field(..., min_length=1, max_length=32)
    pharmacy_name: str = Field(..., min_length=1, max_length=200)
    operating_hours: str = Field(..., min_length=1, max_length=100)

    @field_validator("pmc_license")
    @classmethod
    def normalize_license(cls, v: str) -> str:
        return v.strip().upper()


class ProfileRead(BaseModel):
    id: int
    user_id: str
    user_type: str
    name: str
    phone: str
    qr_code: Optional[str] = None
    is_verified: bool = False
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PatientProfileRead(BaseModel):
    id: int
    profile_id: int
    date_of_birth: date
    age: int
    sex: str
    address: str
    aadhaar_number: Optional[str] = None
    aadhaar_verified: bool = False

    model_config = ConfigDict(from_attributes=True)


class DoctorProfileRead(BaseModel):
    id: int
    profile_id: int
    imr_license: str
    imr_verified: bool = False
    specialization: str
    experience: int
    license_details: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(from_attributes=True)


class PharmacistProfileRead(BaseModel):
    id: int
    profile_id: int
    pharmacy_name: str
    operating_hours: str
    pmc_license: str
    pmc_verified: bool = False
    license_details: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(from_attributes=True)


class ProfileDetail(ProfileRead):
    patient_profile: Optional[PatientProfileRead] = None
    doctor_profile: Optional[DoctorProfileRead] = None
    pharmacist_profile: Optional[PharmacistProfileRead] = None


class PatientSummary(BaseModel):
    """Directory entry shown to doctors."""
    id: int
    name: str
    phone: str
    age: int
    sex: str
    aadhaar_verified: bool = False
