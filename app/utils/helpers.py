"""Helper utilities (timestamps, identifiers, request helpers)."""
import secrets
from datetime import date, datetime, timezone
from typing import Optional

from fastapi import Request

from app.core.config import settings


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how DateTime columns are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def generate_qr_code(role: str) -> str:
    return f"{role}-{secrets.token_hex(8)}"


def generate_prescription_number() -> str:
    return f"RX{secrets.token_hex(5).upper()}"


def age_from_dob(dob: date, today: Optional[date] = None) -> int:
    today = today or date.today()
    years = today.year - dob.year
    if (today.month, today.day) < (dob.month, dob.day):
        years -= 1
    return max(years, 0)


def _trusted_proxies() -> set:
    return {p.strip() for p in settings.TRUSTED_PROXIES.split(",") if p.strip()}


def get_client_ip(request: Request) -> str:
    """Return the client's IP address.

    The socket peer is used unless it is one of ``TRUSTED_PROXIES``; then
    `X-Forwarded-For` is walked from the right and the first address not
    belonging to a trusted proxy is returned. Returns 'unknown' if not found.
    """
    client = getattr(request, "client", None)
    peer = client.host if client and getattr(client, "host", None) else "unknown"

    trusted = _trusted_proxies()
    x_forwarded_for = request.headers.get("x-forwarded-for")
    if peer not in trusted or not x_forwarded_for:
        return peer

    hops = [ip.strip() for ip in x_forwarded_for.split(",") if ip.strip()]
    for ip in reversed(hops):
        if ip not in trusted:
            return ip
    return hops[0] if hops else peer
