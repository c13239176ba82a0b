"""Application constants such as user roles and lifecycle states."""
from enum import Enum


class UserRole(str, Enum):
    PATIENT = "patient"
    DOCTOR = "doctor"
    PHARMACIST = "pharmacist"


class PrescriptionStatus(str, Enum):
    PENDING = "pending"
    PARTIALLY_DISPENSED = "partially_dispensed"
    DISPENSED = "dispensed"
    CANCELLED = "cancelled"


class PrescriptionItemStatus(str, Enum):
    PENDING = "pending"
    DISPENSED = "dispensed"


class StockStatus(str, Enum):
    OUT_OF_STOCK = "out-of-stock"
    LOW_STOCK = "low-stock"
    OVERSTOCK = "overstock"
    IN_STOCK = "in-stock"


class ReminderStatus(str, Enum):
    PENDING = "pending"
    SENT = "sent"
    DISMISSED = "dismissed"


# Prescriptions a pharmacist can still act on
OPEN_PRESCRIPTION_STATUSES = (
    PrescriptionStatus.PENDING.value,
    PrescriptionStatus.PARTIALLY_DISPENSED.value,
)

LICENSE_PATTERN = r"^[A-Z0-9]{8,15}$"
AADHAAR_PATTERN = r"^\d{12}$"
AADHAAR_OTP_PATTERN = r"^\d{6}$"
