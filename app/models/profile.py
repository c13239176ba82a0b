"""Identity profiles: one shared row per user plus one role-specific row."""
from sqlalchemy import Column, Integer, String, Boolean, Date, DateTime, Text, JSON, ForeignKey
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.models.base import IDMixin, TimestampMixin


class Profile(IDMixin, TimestampMixin, Base):
    __tablename__ = "profiles"

    # Subject claim of the auth provider's token
    user_id = Column(String(64), unique=True, index=True, nullable=False)
    user_type = Column(String(20), index=True, nullable=False)
    name = Column(String(200), nullable=False)
    phone = Column(String(20), nullable=False)
    qr_code = Column(String(64), unique=True, index=True, nullable=True)
    is_verified = Column(Boolean, default=False, nullable=False)

    patient_profile = relationship(
        "PatientProfile", back_populates="profile", uselist=False, cascade="all, delete-orphan"
    )
    doctor_profile = relationship(
        "DoctorProfile", back_populates="profile", uselist=False, cascade="all, delete-orphan"
    )
    pharmacist_profile = relationship(
        "PharmacistProfile", back_populates="profile", uselist=False, cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Profile {self.user_type}:{self.user_id}>"


class PatientProfile(IDMixin, TimestampMixin, Base):
    __tablename__ = "patient_profiles"

    profile_id = Column(Integer, ForeignKey("profiles.id", ondelete="CASCADE"), unique=True, nullable=False)
    date_of_birth = Column(Date, nullable=False)
    age = Column(Integer, nullable=False)
    sex = Column(String(20), nullable=False)
    address = Column(Text, nullable=False)
    aadhaar_number = Column(String(12), index=True, nullable=True)
    aadhaar_verified = Column(Boolean, default=False, nullable=False)
    aadhaar_verified_at = Column(DateTime, nullable=True)

    profile = relationship("Profile", back_populates="patient_profile")


class DoctorProfile(IDMixin, TimestampMixin, Base):
    __tablename__ = "doctor_profiles"

    profile_id = Column(Integer, ForeignKey("profiles.id", ondelete="CASCADE"), unique=True, nullable=False)
    imr_license = Column(String(32), index=True, nullable=False)
    imr_verified = Column(Boolean, default=False, nullable=False)
    specialization = Column(String(100), nullable=False)
    experience = Column(Integer, nullable=False, default=0)
    license_details = Column(JSON, nullable=True)
    verified_at = Column(DateTime, nullable=True)

    profile = relationship("Profile", back_populates="doctor_profile")


class PharmacistProfile(IDMixin, TimestampMixin, Base):
    __tablename__ = "pharmacist_profiles"

    profile_id = Column(Integer, ForeignKey("profiles.id", ondelete="CASCADE"), unique=True, nullable=False)
    pharmacy_name = Column(String(200), nullable=False)
    operating_hours = Column(String(100), nullable=False)
    pmc_license = Column(String(32), index=True, nullable=False)
    pmc_verified = Column(Boolean, default=False, nullable=False)
    license_details = Column(JSON, nullable=True)
    verified_at = Column(DateTime, nullable=True)

    profile = relationship("Profile", back_populates="pharmacist_profile")
    inventory = relationship("InventoryItem", back_populates="pharmacist", cascade="all, delete-orphan")
