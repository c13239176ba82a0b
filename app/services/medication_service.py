from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.models.medication import Medication
from app.utils.errors import RecordNotFoundError


class MedicationService:
    @staticmethod
    def create(db: Session, payload: dict) -> Medication:
        medication = Medication(**payload)
        db.add(medication)
        db.commit()
        db.refresh(medication)
        return medication

    @staticmethod
    def get(db: Session, medication_id: int) -> Medication:
        medication = db.query(Medication).filter(Medication.id == medication_id).first()
        if not medication:
            raise RecordNotFoundError("Medication not found")
        return medication

    @staticmethod
    def list(db: Session, query: Optional[str] = None, limit: int = 100) -> List[Medication]:
        q = db.query(Medication)
        if query:
            term = f"%{query.strip()}%"
            q = q.filter(or_(Medication.name.ilike(term), Medication.generic_name.ilike(term)))
        return q.order_by(Medication.name.asc()).limit(limit).all()

    @staticmethod
    def seed_catalog(db: Session) -> int:
        """Insert the starter catalog, skipping entries already present. Returns rows added."""
        added = 0
        for entry in STARTER_CATALOG:
            exists = (
                db.query(Medication)
                .filter(Medication.name == entry["name"], Medication.strength == entry["strength"])
                .first()
            )
            if exists:
                continue
            db.add(Medication(**entry))
            added += 1
        db.commit()
        return added


STARTER_CATALOG = [
    {
        "name": "Paracetamol",
        "generic_name": "Acetaminophen",
        "strength": "500mg",
        "dosage_form": "tablet",
        "side_effects": ["nausea", "rash"],
        "contraindications": ["severe liver disease"],
    },
    {
        "name": "Amoxicillin",
        "generic_name": "Amoxicillin",
        "strength": "250mg",
        "dosage_form": "capsule",
        "side_effects": ["diarrhoea", "rash"],
        "contraindications": ["penicillin allergy"],
    },
    {
        "name": "Metformin",
        "generic_name": "Metformin hydrochloride",
        "strength": "500mg",
        "dosage_form": "tablet",
        "side_effects": ["stomach upset"],
        "contraindications": ["severe renal impairment"],
    },
    {
        "name": "Vitamin D3",
        "generic_name": "Cholecalciferol",
        "strength": "1000 IU",
        "dosage_form": "tablet",
    },
    {
        "name": "Cetirizine",
        "generic_name": "Cetirizine hydrochloride",
        "strength": "10mg",
        "dosage_form": "tablet",
        "side_effects": ["drowsiness"],
    },
]
