from fastapi import FastAPI
from fastapi.exceptions import HTTPException as FastAPIHTTPException

from app.core.config import settings
from app.core.logger import setup_logging
from app.middleware.cors import configure_cors
from app.middleware.logging import RequestLoggerMiddleware
from app.middleware.auth import JWTMiddleware
from app.middleware import error_handler

# Routers
from app.routers import health as health_router
from app.routers import profiles as profiles_router
from app.routers import patients as patients_router
from app.routers import doctors as doctors_router
from app.routers import pharmacists as pharmacists_router
from app.routers import medications as medications_router
from app.routers import medical_records as medical_records_router
from app.routers import prescriptions as prescriptions_router
from app.routers import inventory as inventory_router
from app.routers import verification as verification_router
from app.routers import dashboard as dashboard_router


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance."""
    setup_logging()
    description = (
        "MediQR Backend API.\n\n"
        "Patient, doctor and pharmacist profiles, medical records, prescriptions "
        "with dispensing, pharmacy inventory and identity/license verification."
    )

    openapi_tags = [
        {"name": "profiles", "description": "Role registration, own profile and QR lookups."},
        {"name": "patients", "description": "Patient records, prescriptions, reminders and Aadhaar verification."},
        {"name": "doctors", "description": "Doctor license verification and patient directory."},
        {"name": "pharmacists", "description": "Pharmacist license verification."},
        {"name": "medications", "description": "Medication catalog."},
        {"name": "medical-records", "description": "Visit records written by doctors."},
        {"name": "prescriptions", "description": "Prescription lookup, dispensing and cancellation."},
        {"name": "inventory", "description": "Pharmacy stock levels and classification."},
        {"name": "verification", "description": "Mock Aadhaar, IMR and PMC registry endpoints."},
        {"name": "dashboard", "description": "Role-scoped dashboard views."},
        {"name": "health", "description": "Health checks and service status endpoints."},
    ]

    app = FastAPI(
        title=f"{settings.APP_NAME} Backend API",
        version="0.1.0",
        description=description,
        openapi_tags=openapi_tags,
    )

    # Middleware
    configure_cors(app)
    app.add_middleware(RequestLoggerMiddleware)
    app.add_middleware(JWTMiddleware)

    # Exception handlers
    app.add_exception_handler(FastAPIHTTPException, error_handler.http_exception_handler)

    # Include routers
    app.include_router(health_router.router)
    app.include_router(profiles_router.router)
    app.include_router(patients_router.router)
    app.include_router(doctors_router.router)
    app.include_router(pharmacists_router.router)
    app.include_router(medications_router.router)
    app.include_router(medical_records_router.router)
    app.include_router(prescriptions_router.router)
    app.include_router(inventory_router.router)
    app.include_router(verification_router.router)
    app.include_router(dashboard_router.router)

    return app


app = create_app()
