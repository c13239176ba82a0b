"""Mock verification registry (Aadhaar OTP, IMR and PMC licenses).

Validation failures come back as HTTP 400 with the same body shape as a
success so the client can read ``verified`` either way.
"""
import logging

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from app.dependencies.rate_limit import rate_limit
from app.schemas.verification import AadhaarVerificationRequest, LicenseVerificationRequest
from app.services.registry_service import RegistryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/verification", tags=["verification"])


def _failure(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"success": False, "verified": False, "message": message},
    )


@router.post("/aadhaar")
async def verify_aadhaar(payload: dict = Body(...), _: None = Depends(rate_limit)):
    action = payload.get("action")
    if action not in ("send_otp", "verify_otp"):
        return _failure("Invalid action")
    try:
        request = AadhaarVerificationRequest(**payload)
        if request.action == "send_otp":
            return RegistryService.send_aadhaar_otp(request.identifier)
        return RegistryService.verify_aadhaar_otp(request.identifier, request.code)
    except ValueError as e:
        logger.info(f"Aadhaar {action} rejected: {e}")
        return _failure(_message(e))


@router.post("/imr-license")
async def verify_imr_license(payload: dict = Body(...), _: None = Depends(rate_limit)):
    if payload.get("action", "verify") != "verify":
        return _failure("Invalid action")
    try:
        request = LicenseVerificationRequest(**payload)
        return RegistryService.verify_imr_license(request.identifier, request.name)
    except ValueError as e:
        logger.info(f"IMR license check rejected: {e}")
        return _failure(_message(e))


@router.post("/pmc-license")
async def verify_pmc_license(payload: dict = Body(...), _: None = Depends(rate_limit)):
    if payload.get("action", "verify") != "verify":
        return _failure("Invalid action")
    try:
        request = LicenseVerificationRequest(**payload)
        return RegistryService.verify_pmc_license(
            request.identifier, request.name, request.pharmacy_name
        )
    except ValueError as e:
        logger.info(f"PMC license check rejected: {e}")
        return _failure(_message(e))


def _message(exc: ValueError) -> str:
    # pydantic's ValidationError is a ValueError; keep its first message short
    errors = getattr(exc, "errors", None)
    if callable(errors):
        first = errors()[0]
        field = ".".join(str(p) for p in first.get("loc", ()))
        return f"{field}: {first.get('msg')}" if field else first.get("msg", str(exc))
    return str(exc)
