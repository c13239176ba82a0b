"""Medical record creation and access."""
from datetime import date, timedelta

import pytest

from app.services.medical_record_service import MedicalRecordService
from app.utils.errors import ForbiddenError, RecordNotFoundError


@pytest.mark.asyncio
async def test_create_record_with_prescription_round_trip(async_client, make_doctor, make_patient, make_medication):
    doctor = make_doctor()
    patient = make_patient()
    medication = make_medication()
    vitals = {"bp": "120/80", "pulse": 72, "temperature": 99.1}

    r = await async_client.post(
        "/medical-records",
        json={
            "patient_profile_id": patient.patient.id,
            "diagnosis": "Acute pharyngitis",
            "symptoms": " sore throat, fever ,, cough ",
            "vital_signs": vitals,
            "notes": "Review in a week",
            "visit_date": "2026-03-01",
            "follow_up_date": "2026-03-08",
            "prescription": {
                "notes": "Complete the course",
                "items": [
                    {
                        "medication_id": medication.id,
                        "dosage_instructions": "1 capsule after meals",
                        "frequency": "three times daily",
                        "duration_days": 5,
                        "quantity": 15,
                    }
                ],
            },
        },
        headers=doctor.headers,
    )
    assert r.status_code == 201, r.text
    created = r.json()
    assert created["symptoms"] == ["sore throat", "fever", "cough"]
    assert created["doctor_profile_id"] == doctor.doctor.id
    rx = created["prescriptions"][0]
    assert rx["status"] == "pending"
    assert rx["valid_until"] == "2026-03-31"
    assert rx["items"][0]["remaining_quantity"] == 15
    assert rx["items"][0]["medication"]["id"] == medication.id

    r = await async_client.get(f"/medical-records/{created['id']}", headers=patient.headers)
    assert r.status_code == 200, r.text
    fetched = r.json()
    assert fetched["diagnosis"] == "Acute pharyngitis"
    assert fetched["symptoms"] == created["symptoms"]
    assert fetched["vital_signs"] == vitals

    r = await async_client.get("/patients/me/records", headers=patient.headers)
    assert created["id"] in {rec["id"] for rec in r.json()}


@pytest.mark.asyncio
async def test_create_record_validation(async_client, make_doctor, make_patient):
    doctor = make_doctor()
    patient = make_patient()

    r = await async_client.post(
        "/medical-records",
        json={"patient_profile_id": patient.patient.id, "diagnosis": "   "},
        headers=doctor.headers,
    )
    assert r.status_code == 422

    r = await async_client.post(
        "/medical-records",
        json={"patient_profile_id": patient.patient.id, "diagnosis": "Flu", "prescription": {"items": []}},
        headers=doctor.headers,
    )
    assert r.status_code == 422

    r = await async_client.post(
        "/medical-records",
        json={
            "patient_profile_id": patient.patient.id,
            "diagnosis": "Flu",
            "prescription": {
                "items": [
                    {
                        "medication_id": 987654,
                        "dosage_instructions": "once",
                        "frequency": "daily",
                        "quantity": 1,
                    }
                ]
            },
        },
        headers=doctor.headers,
    )
    assert r.status_code == 404

    r = await async_client.post(
        "/medical-records",
        json={"patient_profile_id": 987654, "diagnosis": "Flu"},
        headers=doctor.headers,
    )
    assert r.status_code == 404

    r = await async_client.post(
        "/medical-records",
        json={"patient_profile_id": patient.patient.id, "diagnosis": "Flu"},
        headers=patient.headers,
    )
    assert r.status_code == 403


def test_empty_vitals_are_stored_as_null(db_session, make_doctor, make_patient):
    doctor = make_doctor()
    patient = make_patient()

    record = MedicalRecordService.create_record(
        db_session,
        doctor.user_id,
        {"patient_profile_id": patient.patient.id, "diagnosis": "Migraine", "vital_signs": {}},
    )
    assert record.vital_signs is None
    assert record.symptoms == []
    assert record.visit_date == date.today()


def test_prescription_rejected_when_valid_until_precedes_issue(db_session, make_doctor, make_patient, make_medication, rx_item):
    doctor = make_doctor()
    patient = make_patient()
    medication = make_medication()

    with pytest.raises(ValueError):
        MedicalRecordService.create_record(
            db_session,
            doctor.user_id,
            {
                "patient_profile_id": patient.patient.id,
                "diagnosis": "Cold",
                "prescription": {
                    "valid_until": date.today() - timedelta(days=1),
                    "items": [rx_item(medication.id, 3)],
                },
            },
        )
    assert MedicalRecordService.list_for_patient(db_session, patient.patient.id) == []


def test_record_visible_only_to_author_and_owner(db_session, make_doctor, make_patient, make_pharmacist):
    doctor = make_doctor()
    other_doctor = make_doctor(name="Dr. Other")
    patient = make_patient()
    other_patient = make_patient(name="Other Patient")
    pharmacist = make_pharmacist()

    record = MedicalRecordService.create_record(
        db_session, doctor.user_id, {"patient_profile_id": patient.patient.id, "diagnosis": "Asthma"}
    )

    assert MedicalRecordService.get_record(
        db_session, record.id, {"sub": doctor.user_id, "user_type": "doctor"}
    ).id == record.id
    assert MedicalRecordService.get_record(
        db_session, record.id, {"sub": patient.user_id, "user_type": "patient"}
    ).id == record.id

    for viewer in (
        {"sub": other_doctor.user_id, "user_type": "doctor"},
        {"sub": other_patient.user_id, "user_type": "patient"},
        {"sub": pharmacist.user_id, "user_type": "pharmacist"},
    ):
        with pytest.raises(ForbiddenError):
            MedicalRecordService.get_record(db_session, record.id, viewer)

    with pytest.raises(RecordNotFoundError):
        MedicalRecordService.get_record(
            db_session, 999999, {"sub": doctor.user_id, "user_type": "doctor"}
        )


def test_doctor_listing_is_newest_first_and_limited(db_session, make_doctor, make_patient):
    doctor = make_doctor()
    patient = make_patient()
    today = date.today()
    for offset in range(25):
        MedicalRecordService.create_record(
            db_session,
            doctor.user_id,
            {
                "patient_profile_id": patient.patient.id,
                "diagnosis": f"Visit {offset}",
                "visit_date": today - timedelta(days=offset),
            },
        )

    records = MedicalRecordService.list_for_doctor(db_session, doctor.doctor.id)
    assert len(records) == 20
    assert records[0].visit_date == today
    assert all(a.visit_date >= b.visit_date for a, b in zip(records, records[1:]))
