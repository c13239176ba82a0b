import logging
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.constants import UserRole
from app.models.profile import Profile, PatientProfile, DoctorProfile, PharmacistProfile
from app.services.verification_client import VerificationClient
from app.schemas.verification import VerificationResult
from app.utils.errors import (
    ProfileNotFoundError, ProfileAlreadyExistsError, VerificationFailedError,
)
from app.utils.helpers import generate_qr_code, age_from_dob, utcnow

logger = logging.getLogger(__name__)


class ProfileService:
    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    @staticmethod
    def get_by_user_id(db: Session, user_id: str) -> Optional[Profile]:
        return db.query(Profile).filter(Profile.user_id == str(user_id)).first()

    @staticmethod
    def ensure_profile(db: Session, user_id: str) -> Profile:
        profile = ProfileService.get_by_user_id(db, user_id)
        if not profile:
            raise ProfileNotFoundError("Profile not found. Complete registration first.")
        return profile

    @staticmethod
    def ensure_patient(db: Session, user_id: str) -> PatientProfile:
        patient = (
            db.query(PatientProfile)
            .join(Profile)
            .filter(Profile.user_id == str(user_id))
            .first()
        )
        if not patient:
            raise ProfileNotFoundError("Patient profile not found")
        return patient

    @staticmethod
    def ensure_doctor(db: Session, user_id: str) -> DoctorProfile:
        doctor = (
            db.query(DoctorProfile)
            .join(Profile)
            .filter(Profile.user_id == str(user_id))
            .first()
        )
        if not doctor:
            raise ProfileNotFoundError("Doctor profile not found")
        return doctor

    @staticmethod
    def ensure_pharmacist(db: Session, user_id: str) -> PharmacistProfile:
        pharmacist = (
            db.query(PharmacistProfile)
            .join(Profile)
            .filter(Profile.user_id == str(user_id))
            .first()
        )
        if not pharmacist:
            raise ProfileNotFoundError("Pharmacist profile not found")
        return pharmacist

    @staticmethod
    def get_by_qr(db: Session, qr_code: str) -> Profile:
        profile = db.query(Profile).filter(Profile.qr_code == qr_code).first()
        if not profile:
            raise ProfileNotFoundError("No profile matches this QR code")
        return profile

    @staticmethod
    def search_patients(db: Session, query: Optional[str] = None, limit: int = 100) -> List[PatientProfile]:
        q = db.query(PatientProfile).join(Profile)
        if query:
            term = f"%{query.strip()}%"
            q = q.filter(or_(Profile.name.ilike(term), Profile.phone.ilike(term)))
        return q.order_by(Profile.name.asc()).limit(limit).all()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    @staticmethod
    def _new_profile(db: Session, user_id: str, role: UserRole, payload: dict) -> Profile:
        if ProfileService.get_by_user_id(db, user_id):
            raise ProfileAlreadyExistsError("A profile already exists for this account")

        for field in ("name", "phone"):
            if not payload.get(field):
                raise ValueError(f"{field} is required")

        profile = Profile(
            user_id=str(user_id),
            user_type=role.value,
            name=payload["name"],
            phone=payload["phone"],
            qr_code=generate_qr_code(role.value),
            is_verified=False,
        )
        db.add(profile)
        return profile

    @staticmethod
    def register_patient(db: Session, user_id: str, payload: dict) -> Profile:
        profile = ProfileService._new_profile(db, user_id, UserRole.PATIENT, payload)
        dob = payload["date_of_birth"]
        age = payload.get("age")
        profile.patient_profile = PatientProfile(
            date_of_birth=dob,
            age=age if age is not None else age_from_dob(dob),
            sex=payload["sex"],
            address=payload["address"],
            aadhaar_number=payload.get("aadhaar_number"),
            aadhaar_verified=False,
        )
        db.commit()
        db.refresh(profile)
        logger.info(f"Registered patient profile {profile.id} for user {user_id}")
        return profile

    @staticmethod
    def register_doctor(db: Session, user_id: str, payload: dict) -> Profile:
        profile = ProfileService._new_profile(db, user_id, UserRole.DOCTOR, payload)
        profile.doctor_profile = DoctorProfile(
            imr_license=payload["imr_license"],
            specialization=payload["specialization"],
            experience=payload.get("experience") or 0,
            imr_verified=False,
        )
        db.commit()
        db.refresh(profile)
        logger.info(f"Registered doctor profile {profile.id} for user {user_id}")
        return profile

    @staticmethod
    def register_pharmacist(db: Session, user_id: str, payload: dict) -> Profile:
        profile = ProfileService._new_profile(db, user_id, UserRole.PHARMACIST, payload)
        profile.pharmacist_profile = PharmacistProfile(
            pmc_license=payload["pmc_license"],
            pharmacy_name=payload["pharmacy_name"],
            operating_hours=payload["operating_hours"],
            pmc_verified=False,
        )
        db.commit()
        db.refresh(profile)
        logger.info(f"Registered pharmacist profile {profile.id} for user {user_id}")
        return profile

    # ------------------------------------------------------------------
    # Verification flows
    # ------------------------------------------------------------------
    @staticmethod
    async def send_aadhaar_otp(db: Session, user_id: str, client: VerificationClient) -> VerificationResult:
        patient = ProfileService.ensure_patient(db, user_id)
        if not patient.aadhaar_number:
            raise ValueError("Add an Aadhaar number to your profile before requesting an OTP")
        if patient.aadhaar_verified:
            raise ValueError("Aadhaar already verified")

        result = await client.send_aadhaar_otp(patient.aadhaar_number)
        if not result.success:
            raise VerificationFailedError(result.message or "Could not send OTP")
        return result

    @staticmethod
    async def verify_aadhaar(db: Session, user_id: str, otp: str, client: VerificationClient) -> PatientProfile:
        patient = ProfileService.ensure_patient(db, user_id)
        if not patient.aadhaar_number:
            raise ValueError("Add an Aadhaar number to your profile before verifying")

        result = await client.verify_aadhaar_otp(patient.aadhaar_number, otp)
        if not result.verified:
            raise VerificationFailedError(result.message or "Aadhaar verification failed")

        patient.aadhaar_verified = True
        patient.aadhaar_verified_at = utcnow()
        patient.profile.is_verified = True
        db.commit()
        db.refresh(patient)
        logger.info(f"Aadhaar verified for patient profile {patient.id}")
        return patient

    @staticmethod
    async def verify_doctor_license(db: Session, user_id: str, client: VerificationClient) -> DoctorProfile:
        doctor = ProfileService.ensure_doctor(db, user_id)

        result = await client.verify_imr_license(doctor.imr_license, doctor.profile.name)
        if not result.verified:
            raise VerificationFailedError(result.message or "IMR license verification failed")

        doctor.imr_verified = True
        doctor.verified_at = utcnow()
        doctor.license_details = result.metadata.get("license_details")
        doctor.profile.is_verified = True
        db.commit()
        db.refresh(doctor)
        logger.info(f"IMR license verified for doctor profile {doctor.id}")
        return doctor

    @staticmethod
    async def verify_pharmacist_license(db: Session, user_id: str, client: VerificationClient) -> PharmacistProfile:
        pharmacist = ProfileService.ensure_pharmacist(db, user_id)

        result = await client.verify_pmc_license(
            pharmacist.pmc_license, pharmacist.profile.name, pharmacist.pharmacy_name
        )
        if not result.verified:
            raise VerificationFailedError(result.message or "PMC license verification failed")

        pharmacist.pmc_verified = True
        pharmacist.verified_at = utcnow()
        pharmacist.license_details = result.metadata.get("license_details")
        pharmacist.profile.is_verified = True
        db.commit()
        db.refresh(pharmacist)
        logger.info(f"PMC license verified for pharmacist profile {pharmacist.id}")
        return pharmacist
