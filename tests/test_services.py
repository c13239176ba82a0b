"""Service layer and helper tests."""
import re
from datetime import date

from fastapi import Request

from app.core.config import settings
from app.dependencies.rate_limit import SlidingWindowLimiter
from app.services.medication_service import MedicationService, STARTER_CATALOG
from app.services.profile_service import ProfileService
from app.utils.helpers import age_from_dob, generate_prescription_number, generate_qr_code, get_client_ip


def test_age_from_dob_respects_birthday():
    today = date(2026, 6, 15)
    assert age_from_dob(date(2000, 6, 15), today) == 26
    assert age_from_dob(date(2000, 6, 16), today) == 25
    assert age_from_dob(date(2030, 1, 1), today) == 0


def test_identifiers_have_expected_shape():
    assert re.match(r"^RX[0-9A-F]{10}$", generate_prescription_number())
    assert re.match(r"^pharmacist-[0-9a-f]{16}$", generate_qr_code("pharmacist"))
    assert len({generate_prescription_number() for _ in range(200)}) == 200


def test_seed_catalog_is_idempotent(db_session):
    first = MedicationService.seed_catalog(db_session)
    second = MedicationService.seed_catalog(db_session)

    assert first <= len(STARTER_CATALOG)
    assert second == 0
    names = {m.name for m in MedicationService.list(db_session, limit=500)}
    assert {entry["name"] for entry in STARTER_CATALOG} <= names


def test_medication_search_matches_generic_name(db_session, make_medication):
    medication = make_medication(name="Cholecalciferol")

    results = MedicationService.list(db_session, "cholecalc", limit=500)
    assert medication.id in {m.id for m in results}


def test_search_patients_matches_phone(db_session, make_patient):
    patient = make_patient()

    results = ProfileService.search_patients(db_session, patient.profile.phone)
    assert [p.id for p in results] == [patient.patient.id]


def test_sliding_window_limiter():
    limiter = SlidingWindowLimiter(limit=2, window_seconds=10)
    assert limiter.allow("1.2.3.4:/profiles/patient", now=0)
    assert limiter.allow("1.2.3.4:/profiles/patient", now=1)
    assert not limiter.allow("1.2.3.4:/profiles/patient", now=2)
    assert limiter.allow("5.6.7.8:/profiles/patient", now=2)
    assert limiter.allow("1.2.3.4:/profiles/patient", now=10.5)


def _request(peer, forwarded_for=None):
    headers = []
    if forwarded_for:
        headers.append((b"x-forwarded-for", forwarded_for.encode()))
    return Request({"type": "http", "headers": headers, "client": (peer, 4321)})


def test_client_ip_ignores_forwarded_for_from_untrusted_peer(monkeypatch):
    monkeypatch.setattr(settings, "TRUSTED_PROXIES", "")
    assert get_client_ip(_request("203.0.113.9", "10.0.0.1")) == "203.0.113.9"


def test_client_ip_uses_forwarded_for_behind_trusted_proxy(monkeypatch):
    monkeypatch.setattr(settings, "TRUSTED_PROXIES", "10.0.0.2, 10.0.0.3")
    assert get_client_ip(_request("10.0.0.2", "198.51.100.7, 10.0.0.3")) == "198.51.100.7"
    # Spoofed leftmost entries are not reached while an untrusted hop sits to the right
    assert get_client_ip(_request("10.0.0.2", "1.1.1.1, 198.51.100.7")) == "198.51.100.7"
    assert get_client_ip(_request("10.0.0.2")) == "10.0.0.2"
