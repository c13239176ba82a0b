from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.core.security import decode_token
from app.core.constants import UserRole

security = HTTPBearer(auto_error=False)


def get_current_user_from_token(token: str):
    """
    Decode a bearer token issued by the auth provider and return its claims.
    """
    payload = decode_token(token)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        )

    if not payload.get("sub"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has no subject",
        )

    return {
        **payload,
        "sub": str(payload["sub"]),
    }


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
):
    """Verify JWT token and return current user"""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return get_current_user_from_token(credentials.credentials)


async def get_current_patient(
    current_user = Depends(get_current_user),
):
    """Verify current user is a patient"""
    if current_user.get("user_type") != UserRole.PATIENT.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only patients can access this resource",
        )
    return current_user


async def get_current_doctor(
    current_user = Depends(get_current_user),
):
    """Verify current user is a doctor"""
    if current_user.get("user_type") != UserRole.DOCTOR.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only doctors can access this resource",
        )
    return current_user


async def get_current_pharmacist(
    current_user = Depends(get_current_user),
):
    """Verify current user is a pharmacist"""
    if current_user.get("user_type") != UserRole.PHARMACIST.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only pharmacists can access this resource",
        )
    return current_user
