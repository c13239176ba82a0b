"""Service layer package."""

__all__ = [
    "profile_service",
    "registry_service",
    "verification_client",
    "medication_service",
    "medical_record_service",
    "prescription_service",
    "inventory_service",
    "reminder_service",
    "dashboard_service",
]
