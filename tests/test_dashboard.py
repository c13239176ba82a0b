"""Role-scoped dashboard views."""
import uuid
from datetime import timedelta

import pytest

from app.services.inventory_service import InventoryService
from app.services.prescription_service import PrescriptionService
from app.services.reminder_service import ReminderService
from app.utils.helpers import utcnow


@pytest.mark.asyncio
async def test_patient_dashboard(async_client, db_session, make_doctor, make_patient, make_medication, make_prescription, rx_item):
    doctor = make_doctor()
    patient = make_patient()
    medication = make_medication()
    prescription = make_prescription(doctor, patient, [rx_item(medication.id, 10)])
    ReminderService.create(
        db_session,
        patient.user_id,
        {
            "prescription_item_id": prescription.items[0].id,
            "notification_time": utcnow() + timedelta(hours=2),
            "message": "Take Paracetamol",
        },
    )

    r = await async_client.get("/dashboard", headers=patient.headers)
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["role"] == "patient"
    assert body["profile"]["id"] == patient.profile.id
    assert body["patient"]["id"] == patient.patient.id
    assert [p["id"] for p in body["prescriptions"]] == [prescription.id]
    assert body["prescriptions"][0]["items"][0]["quantity"] == 10
    assert len(body["medical_records"]) == 1
    assert body["upcoming_reminders"][0]["message"] == "Take Paracetamol"


@pytest.mark.asyncio
async def test_doctor_dashboard(async_client, make_doctor, make_patient, make_medication, make_prescription, rx_item):
    doctor = make_doctor()
    tag = uuid.uuid4().hex[:6]
    patient = make_patient(name=f"Ishaan {tag}")
    medication = make_medication()
    make_prescription(doctor, patient, [rx_item(medication.id, 3)])

    r = await async_client.get(f"/dashboard?q={tag}", headers=doctor.headers)
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["role"] == "doctor"
    assert body["doctor"]["id"] == doctor.doctor.id
    assert len(body["medical_records"]) == 1
    assert len(body["prescriptions"]) == 1
    assert [p["id"] for p in body["patients"]] == [patient.patient.id]


@pytest.mark.asyncio
async def test_pharmacist_dashboard(async_client, db_session, make_doctor, make_patient, make_pharmacist, make_medication, make_prescription, rx_item):
    doctor = make_doctor()
    patient = make_patient()
    pharmacist = make_pharmacist()
    medication = make_medication()
    InventoryService.create_row(
        db_session, pharmacist.user_id, {"medication_id": medication.id, "current_stock": 4}
    )
    InventoryService.create_row(
        db_session, pharmacist.user_id, {"medication_id": medication.id, "current_stock": 0}
    )
    partial = make_prescription(doctor, patient, [rx_item(medication.id, 5)])
    pending = make_prescription(doctor, patient, [rx_item(medication.id, 1)])
    PrescriptionService.dispense_item(db_session, pharmacist.user_id, partial.items[0].id, 2)

    r = await async_client.get("/dashboard", headers=pharmacist.headers)
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["role"] == "pharmacist"
    queue_ids = {p["id"] for p in body["prescriptions"]}
    assert {partial.id, pending.id} <= queue_ids
    assert [row["current_stock"] for row in body["inventory"]] == [0, 2]
    summary = body["summary"]
    assert summary["stock"]["out-of-stock"] == 1
    assert summary["stock"]["low-stock"] == 1
    assert summary["stock"]["in-stock"] == 0
    assert summary["pending_prescriptions"] >= 1
    assert summary["partially_dispensed_prescriptions"] >= 1


@pytest.mark.asyncio
async def test_dashboard_requires_profile(async_client, auth_headers):
    r = await async_client.get("/dashboard", headers=auth_headers(f"user-{uuid.uuid4().hex}", "pharmacist"))
    assert r.status_code == 404

    r = await async_client.get("/dashboard")
    assert r.status_code == 401
