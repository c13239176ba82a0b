"""Verification registry request/response schemas."""
from typing import Optional, Dict, Any, Literal

from pydantic import BaseModel, Field


class AadhaarVerificationRequest(BaseModel):
    identifier: str = Field(..., description="12 digit Aadhaar number")
    code: Optional[str] = Field(None, description="One-time code, required for verify_otp")
    action: Literal["send_otp", "verify_otp"]


class LicenseVerificationRequest(BaseModel):
    identifier: str = Field(..., description="IMR or PMC license number")
    name: str
    pharmacy_name: Optional[str] = None
    action: Literal["verify"] = "verify"


class VerificationResult(BaseModel):
    """Outcome of a call to the verification registry."""
    success: bool
    verified: bool = False
    message: str = ""
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "VerificationResult":
        body = dict(payload)
        success = bool(body.pop("success", False))
        verified = bool(body.pop("verified", False))
        message = body.pop("message", None) or body.pop("detail", None) or ""
        return cls(success=success, verified=verified, message=str(message), metadata=body)


class AadhaarOtpVerify(BaseModel):
    otp: str = Field(..., min_length=4, max_length=8)
