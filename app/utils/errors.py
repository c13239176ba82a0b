"""Custom error definitions for API exceptions."""
from fastapi import HTTPException
from starlette import status


class Unauthorized(HTTPException):
    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class ForbiddenError(HTTPException):
    def __init__(self, detail: str = "You do not have access to this resource"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class ProfileNotFoundError(HTTPException):
    def __init__(self, detail: str = "Profile not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ProfileAlreadyExistsError(HTTPException):
    def __init__(self, detail: str = "Profile already exists"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class RecordNotFoundError(HTTPException):
    def __init__(self, detail: str = "Record not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class InvalidTransitionError(HTTPException):
    def __init__(self, detail: str = "Invalid status transition"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class DispenseQuantityError(HTTPException):
    def __init__(self, detail: str = "Invalid dispense quantity"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InsufficientStockError(HTTPException):
    def __init__(self, detail: str = "Insufficient stock"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class VerificationFailedError(HTTPException):
    def __init__(self, detail: str = "Verification failed"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class VerificationServiceError(HTTPException):
    def __init__(self, detail: str = "Verification service unavailable"):
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)
