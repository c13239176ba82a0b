"""Profile registration, lookup and verification flows."""
import uuid
from datetime import date

import pytest

from app.utils.helpers import age_from_dob


def _subject():
    return f"user-{uuid.uuid4().hex[:12]}"


def _patient_payload(**overrides):
    payload = {
        "name": "Kavya Rao",
        "phone": "9876543210",
        "date_of_birth": "1994-08-20",
        "sex": "female",
        "address": "4 Residency Road, Bengaluru",
        "aadhaar_number": "1234 5678 9012",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_register_patient_and_fetch_me(async_client, auth_headers):
    headers = auth_headers(_subject(), "patient")

    r = await async_client.post("/profiles/patient", json=_patient_payload(), headers=headers)
    assert r.status_code == 201, r.text
    profile = r.json()
    assert profile["user_type"] == "patient"
    assert profile["qr_code"].startswith("patient-")
    assert profile["is_verified"] is False
    details = profile["patient_profile"]
    assert details["aadhaar_number"] == "123456789012"
    assert details["age"] == age_from_dob(date(1994, 8, 20))

    r = await async_client.get("/profiles/me", headers=headers)
    assert r.status_code == 200
    assert r.json()["patient_profile"]["id"] == details["id"]

    r = await async_client.post("/profiles/patient", json=_patient_payload(), headers=headers)
    assert r.status_code == 409


@pytest.mark.asyncio
async def test_register_doctor_and_pharmacist(async_client, auth_headers):
    r = await async_client.post(
        "/profiles/doctor",
        json={
            "name": "Dr. Anil Kumar",
            "phone": "9000000001",
            "imr_license": " ka20190042 ",
            "specialization": "Cardiology",
            "experience": 12,
        },
        headers=auth_headers(_subject(), "doctor"),
    )
    assert r.status_code == 201, r.text
    doctor = r.json()
    assert doctor["qr_code"].startswith("doctor-")
    assert doctor["doctor_profile"]["imr_license"] == "KA20190042"
    assert doctor["doctor_profile"]["imr_verified"] is False

    r = await async_client.post(
        "/profiles/pharmacist",
        json={
            "name": "Sunita Desai",
            "phone": "9000000002",
            "pmc_license": "PMC2020777",
            "pharmacy_name": "Desai Medicals",
            "operating_hours": "08:00-22:00",
        },
        headers=auth_headers(_subject(), "pharmacist"),
    )
    assert r.status_code == 201, r.text
    assert r.json()["pharmacist_profile"]["pharmacy_name"] == "Desai Medicals"


@pytest.mark.asyncio
async def test_registration_validation(async_client, auth_headers):
    headers = auth_headers(_subject(), "patient")

    r = await async_client.post(
        "/profiles/patient", json=_patient_payload(aadhaar_number="1234"), headers=headers
    )
    assert r.status_code == 422

    r = await async_client.post("/profiles/patient", json=_patient_payload(name="  "), headers=headers)
    assert r.status_code == 422

    payload = _patient_payload()
    payload.pop("address")
    r = await async_client.post("/profiles/patient", json=payload, headers=headers)
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_role_gating(async_client, auth_headers):
    r = await async_client.get("/profiles/me")
    assert r.status_code == 401

    r = await async_client.get("/profiles/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401

    r = await async_client.post(
        "/profiles/doctor",
        json={"name": "X", "phone": "9000000003", "imr_license": "AB123456", "specialization": "ENT"},
        headers=auth_headers(_subject(), "patient"),
    )
    assert r.status_code == 403

    r = await async_client.get("/profiles/me", headers=auth_headers(_subject(), "patient"))
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_qr_lookup(async_client, make_patient, make_doctor, make_pharmacist):
    patient = make_patient()
    doctor = make_doctor()
    pharmacist = make_pharmacist()
    code = patient.profile.qr_code

    for scanner in (doctor, pharmacist):
        r = await async_client.get(f"/profiles/qr/{code}", headers=scanner.headers)
        assert r.status_code == 200, r.text
        assert r.json()["id"] == patient.profile.id

    r = await async_client.get(f"/profiles/qr/{code}", headers=patient.headers)
    assert r.status_code == 403

    r = await async_client.get("/profiles/qr/patient-doesnotexist", headers=doctor.headers)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_doctor_license_verification(async_client, db_session, make_doctor):
    doctor = make_doctor(imr_license="MH20231234")

    r = await async_client.post("/doctors/me/verify-license", headers=doctor.headers)
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["imr_verified"] is True
    assert body["license_details"]["license_number"] == "MH20231234"

    db_session.expire_all()
    profile = db_session.get(type(doctor.profile), doctor.profile.id)
    assert profile.is_verified is True


@pytest.mark.asyncio
async def test_doctor_with_malformed_license_stays_unverified(async_client, db_session, make_doctor):
    doctor = make_doctor(imr_license="BAD-1")

    r = await async_client.post("/doctors/me/verify-license", headers=doctor.headers)
    assert r.status_code == 400
    assert "Invalid IMR license format" in r.json()["detail"]

    db_session.expire_all()
    profile = db_session.get(type(doctor.profile), doctor.profile.id)
    assert profile.is_verified is False
    assert profile.doctor_profile.imr_verified is False


@pytest.mark.asyncio
async def test_pharmacist_license_verification(async_client, make_pharmacist):
    pharmacist = make_pharmacist(pmc_license="PMC0098765")

    r = await async_client.post("/pharmacists/me/verify-license", headers=pharmacist.headers)
    assert r.status_code == 200, r.text
    assert r.json()["pmc_verified"] is True
    assert r.json()["license_details"]["license_type"] == "Retail Pharmacy License"


@pytest.mark.asyncio
async def test_patient_aadhaar_flow(async_client, make_patient):
    patient = make_patient(aadhaar_number="123412341234")

    r = await async_client.post("/patients/me/aadhaar/send-otp", headers=patient.headers)
    assert r.status_code == 200, r.text
    assert r.json()["metadata"]["transaction_id"].startswith("mock-")

    r = await async_client.post(
        "/patients/me/aadhaar/verify", json={"otp": "12ab56"}, headers=patient.headers
    )
    assert r.status_code == 400

    r = await async_client.post(
        "/patients/me/aadhaar/verify", json={"otp": "654321"}, headers=patient.headers
    )
    assert r.status_code == 200, r.text
    assert r.json()["aadhaar_verified"] is True

    r = await async_client.post("/patients/me/aadhaar/send-otp", headers=patient.headers)
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_aadhaar_otp_requires_number(async_client, make_patient):
    patient = make_patient(aadhaar_number=None)

    r = await async_client.post("/patients/me/aadhaar/send-otp", headers=patient.headers)
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_doctor_patient_directory(async_client, make_doctor, make_patient):
    doctor = make_doctor()
    tag = uuid.uuid4().hex[:6]
    make_patient(name=f"Zeenat {tag}")
    make_patient(name=f"Farhan {tag}")

    r = await async_client.get(f"/doctors/patients?q=zeenat {tag}", headers=doctor.headers)
    assert r.status_code == 200
    names = [p["name"] for p in r.json()]
    assert names == [f"Zeenat {tag}"]

    r = await async_client.get("/doctors/patients", headers=make_patient().headers)
    assert r.status_code == 403
