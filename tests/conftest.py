"""Pytest fixtures for async FastAPI testing.

Loads `.env.test`, initializes a clean test database, and provides an
`AsyncClient` for integration tests. The verification client dependency is
pointed back at the app under test so the mock registry is exercised
in-process, without a running server.
"""
import pathlib
import uuid
from datetime import date
from types import SimpleNamespace

import httpx
import pytest
from dotenv import load_dotenv

# Must run before any `app` import so settings pick up .env.test
_ROOT = pathlib.Path(__file__).resolve().parent.parent
load_dotenv(dotenv_path=str(_ROOT / ".env.test"))


@pytest.fixture(scope="session")
def prepare_database():
    """Create clean schema for the test session."""
    from app.core.database import engine, Base

    # Drop / create all tables to ensure clean DB
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    yield

    # Teardown: drop all tables
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(prepare_database):
    """Yield a SQLAlchemy session for direct DB access in tests."""
    from app.core.database import SessionLocal

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
async def async_client(prepare_database):
    """Provide an httpx AsyncClient configured with the FastAPI app."""
    from app.main import create_app
    from app.services.verification_client import VerificationClient, get_verification_client

    app = create_app()
    app.dependency_overrides[get_verification_client] = lambda: VerificationClient(
        base_url="http://testserver",
        transport=httpx.ASGITransport(app=app),
        max_retries=0,
        backoff=0,
    )

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


def _headers(user_id: str, user_type: str) -> dict:
    from app.core.security import create_access_token

    token = create_access_token(user_id=user_id, user_type=user_type)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers():
    """Build bearer headers for an arbitrary subject and role."""
    return _headers


@pytest.fixture
def make_patient(db_session):
    from app.services.profile_service import ProfileService

    def _make(name="Asha Patel", aadhaar_number=None, date_of_birth=date(1990, 5, 17)):
        user_id = f"user-{uuid.uuid4().hex[:12]}"
        profile = ProfileService.register_patient(
            db_session,
            user_id,
            {
                "name": name,
                "phone": f"98{uuid.uuid4().int % 10**8:08d}",
                "date_of_birth": date_of_birth,
                "sex": "female",
                "address": "12 MG Road, Pune",
                "aadhaar_number": aadhaar_number,
            },
        )
        return SimpleNamespace(
            user_id=user_id,
            profile=profile,
            patient=profile.patient_profile,
            headers=_headers(user_id, "patient"),
        )

    return _make


@pytest.fixture
def make_doctor(db_session):
    from app.services.profile_service import ProfileService

    def _make(name="Dr. Rohan Sharma", imr_license="MH20231234"):
        user_id = f"user-{uuid.uuid4().hex[:12]}"
        profile = ProfileService.register_doctor(
            db_session,
            user_id,
            {
                "name": name,
                "phone": "9811112222",
                "imr_license": imr_license,
                "specialization": "General Medicine",
                "experience": 8,
            },
        )
        return SimpleNamespace(
            user_id=user_id,
            profile=profile,
            doctor=profile.doctor_profile,
            headers=_headers(user_id, "doctor"),
        )

    return _make


@pytest.fixture
def make_pharmacist(db_session):
    from app.services.profile_service import ProfileService

    def _make(name="Meera Iyer", pmc_license="PMC0098765"):
        user_id = f"user-{uuid.uuid4().hex[:12]}"
        profile = ProfileService.register_pharmacist(
            db_session,
            user_id,
            {
                "name": name,
                "phone": "9822223333",
                "pmc_license": pmc_license,
                "pharmacy_name": "Care Pharmacy",
                "operating_hours": "09:00-21:00",
            },
        )
        return SimpleNamespace(
            user_id=user_id,
            profile=profile,
            pharmacist=profile.pharmacist_profile,
            headers=_headers(user_id, "pharmacist"),
        )

    return _make


@pytest.fixture
def make_medication(db_session):
    from app.services.medication_service import MedicationService

    def _make(name="Paracetamol", strength="500mg"):
        return MedicationService.create(
            db_session,
            {
                "name": f"{name} {uuid.uuid4().hex[:4]}",
                "generic_name": name,
                "strength": strength,
                "dosage_form": "tablet",
            },
        )

    return _make


@pytest.fixture
def make_prescription(db_session):
    """Create a medical record carrying one prescription; returns the prescription."""
    from app.services.medical_record_service import MedicalRecordService

    def _make(doctor, patient, items, visit_date=None, valid_until=None):
        rx = {"items": items}
        if valid_until is not None:
            rx["valid_until"] = valid_until
        payload = {
            "patient_profile_id": patient.patient.id,
            "diagnosis": "Viral fever",
            "prescription": rx,
        }
        if visit_date is not None:
            payload["visit_date"] = visit_date
        record = MedicalRecordService.create_record(db_session, doctor.user_id, payload)
        return record.prescriptions[0]

    return _make


def item_payload(medication_id: int, quantity: int = 20) -> dict:
    return {
        "medication_id": medication_id,
        "dosage_instructions": "1 tablet after meals",
        "frequency": "twice daily",
        "duration_days": 10,
        "quantity": quantity,
    }


@pytest.fixture
def rx_item():
    return item_payload
