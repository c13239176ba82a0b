"""Mock identity/credential registry.

Stands in for the UIDAI Aadhaar OTP service and the medical (IMR) and
pharmacy (PMC) council registries. Every check is format-based; no real
integration is performed. Callers get a response body dict on success and a
``ValueError`` carrying the user-facing message on validation failure.
"""
import re
import time
import logging
from typing import Dict, Any, Optional

from app.core.constants import LICENSE_PATTERN, AADHAAR_PATTERN, AADHAAR_OTP_PATTERN

logger = logging.getLogger(__name__)


def _mask(identifier: str) -> str:
    return f"{'*' * max(len(identifier) - 4, 0)}{identifier[-4:]}"


class RegistryService:
    @staticmethod
    def send_aadhaar_otp(aadhaar_number: str) -> Dict[str, Any]:
        if not re.match(AADHAAR_PATTERN, aadhaar_number or ""):
            raise ValueError("Invalid Aadhaar number format")

        logger.info(f"Aadhaar OTP requested for {_mask(aadhaar_number)}")
        return {
            "success": True,
            "verified": False,
            "message": "OTP sent successfully",
            "transaction_id": f"mock-{int(time.time() * 1000)}",
        }

    @staticmethod
    def verify_aadhaar_otp(aadhaar_number: str, code: Optional[str]) -> Dict[str, Any]:
        if not re.match(AADHAAR_PATTERN, aadhaar_number or ""):
            raise ValueError("Invalid Aadhaar number format")
        if not code or not re.match(AADHAAR_OTP_PATTERN, code):
            raise ValueError("Invalid OTP")

        logger.info(f"Aadhaar verified for {_mask(aadhaar_number)}")
        return {
            "success": True,
            "verified": True,
            "message": "Aadhaar verified successfully",
            "name": "John Doe",
            "gender": "M",
            "dob": "1990-01-01",
        }

    @staticmethod
    def verify_imr_license(license_number: str, doctor_name: str) -> Dict[str, Any]:
        if not re.match(LICENSE_PATTERN, license_number or ""):
            raise ValueError("Invalid IMR license format")

        logger.info(f"IMR license {license_number} verified for {doctor_name}")
        return {
            "success": True,
            "verified": True,
            "message": "IMR license verified successfully",
            "license_details": {
                "license_number": license_number,
                "doctor_name": doctor_name,
                "registration_date": "2020-01-15",
                "expiry_date": "2030-01-15",
                "status": "Active",
                "medical_council": "Medical Council of India",
                "qualifications": ["MBBS", "MD"],
                "specialization": "General Medicine",
            },
        }

    @staticmethod
    def verify_pmc_license(license_number: str, pharmacist_name: str, pharmacy_name: Optional[str]) -> Dict[str, Any]:
        if not re.match(LICENSE_PATTERN, license_number or ""):
            raise ValueError("Invalid PMC license format")

        logger.info(f"PMC license {license_number} verified for {pharmacist_name}")
        return {
            "success": True,
            "verified": True,
            "message": "PMC license verified successfully",
            "license_details": {
                "license_number": license_number,
                "pharmacist_name": pharmacist_name,
                "pharmacy_name": pharmacy_name,
                "registration_date": "2019-03-10",
                "expiry_date": "2029-03-10",
                "status": "Active",
                "pharmacy_council": "Pharmacy Council of India",
                "qualifications": ["D.Pharm", "B.Pharm"],
                "license_type": "Retail Pharmacy License",
            },
        }
