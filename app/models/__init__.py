"""Models package placeholder."""

__all__ = [
    "base",
    "profile",
    "medication",
    "medical_record",
    "prescription",
    "inventory",
    "reminder",
]
