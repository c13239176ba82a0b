"""Async client for the verification registry endpoints.

Transport failures, timeouts, 429 and 5xx responses are retried with exponential
backoff up to ``max_retries`` extra attempts. Any other 4xx is a definitive answer
from the registry and is returned as an unverified result without retrying.
"""
import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from app.core.config import settings
from app.schemas.verification import VerificationResult
from app.utils.errors import VerificationServiceError

logger = logging.getLogger(__name__)


class VerificationClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        backoff: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.VERIFICATION_BASE_URL
        self.timeout = timeout if timeout is not None else settings.VERIFICATION_TIMEOUT_SECONDS
        self.max_retries = max_retries if max_retries is not None else settings.VERIFICATION_MAX_RETRIES
        self.backoff = backoff if backoff is not None else settings.VERIFICATION_BACKOFF_SECONDS
        self.transport = transport

    async def send_aadhaar_otp(self, aadhaar_number: str) -> VerificationResult:
        return await self._post(
            "/verification/aadhaar",
            {"identifier": aadhaar_number, "action": "send_otp"},
        )

    async def verify_aadhaar_otp(self, aadhaar_number: str, code: str) -> VerificationResult:
        return await self._post(
            "/verification/aadhaar",
            {"identifier": aadhaar_number, "code": code, "action": "verify_otp"},
        )

    async def verify_imr_license(self, license_number: str, doctor_name: str) -> VerificationResult:
        return await self._post(
            "/verification/imr-license",
            {"identifier": license_number, "name": doctor_name, "action": "verify"},
        )

    async def verify_pmc_license(
        self, license_number: str, pharmacist_name: str, pharmacy_name: str
    ) -> VerificationResult:
        return await self._post(
            "/verification/pmc-license",
            {
                "identifier": license_number,
                "name": pharmacist_name,
                "pharmacy_name": pharmacy_name,
                "action": "verify",
            },
        )

    async def _post(self, path: str, payload: Dict[str, Any]) -> VerificationResult:
        attempts = self.max_retries + 1
        last_error = "no response"

        for attempt in range(1, attempts + 1):
            try:
                async with httpx.AsyncClient(
                    base_url=self.base_url,
                    timeout=self.timeout,
                    transport=self.transport,
                ) as client:
                    response = await client.post(path, json=payload)
            except httpx.TransportError as e:
                last_error = f"{type(e).__name__}: {e}"
                logger.warning(f"Verification call {path} failed (attempt {attempt}/{attempts}): {last_error}")
            else:
                if response.status_code < 500 and response.status_code != 429:
                    return self._to_result(response)
                last_error = f"HTTP {response.status_code}"
                logger.warning(f"Verification call {path} returned {response.status_code} (attempt {attempt}/{attempts})")

            if attempt < attempts:
                await asyncio.sleep(self.backoff * (2 ** (attempt - 1)))

        logger.error(f"Verification call {path} gave up after {attempts} attempts: {last_error}")
        raise VerificationServiceError(f"Verification service unavailable ({last_error})")

    @staticmethod
    def _to_result(response: httpx.Response) -> VerificationResult:
        try:
            body = response.json()
        except ValueError:
            body = {"message": response.text}
        if not isinstance(body, dict):
            body = {"message": str(body)}

        result = VerificationResult.from_payload(body)
        if response.is_error:
            # Registry rejected the input; never treat that as verified
            result.success = False
            result.verified = False
            if not result.message:
                result.message = f"Verification rejected (HTTP {response.status_code})"
        return result


def get_verification_client() -> VerificationClient:
    """FastAPI dependency; overridden in tests to route calls in-process."""
    return VerificationClient()
