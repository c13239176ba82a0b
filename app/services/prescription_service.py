import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from app.core.config import settings
from app.core.constants import (
    PrescriptionStatus, PrescriptionItemStatus, OPEN_PRESCRIPTION_STATUSES,
)
from app.models.prescription import Prescription, PrescriptionItem
from app.services.inventory_service import InventoryService
from app.services.profile_service import ProfileService
from app.utils.errors import (
    RecordNotFoundError, InvalidTransitionError, DispenseQuantityError, InsufficientStockError,
)
from app.utils.helpers import utcnow

logger = logging.getLogger(__name__)

# Order of the forward path; cancelled sits outside it
_STATUS_RANK = {
    PrescriptionStatus.PENDING.value: 0,
    PrescriptionStatus.PARTIALLY_DISPENSED.value: 1,
    PrescriptionStatus.DISPENSED.value: 2,
}


def derive_prescription_status(items: List[PrescriptionItem]) -> PrescriptionStatus:
    """Prescription status as a function of its items."""
    if items and all(i.status == PrescriptionItemStatus.DISPENSED.value for i in items):
        return PrescriptionStatus.DISPENSED
    if any((i.dispensed_quantity or 0) > 0 for i in items):
        return PrescriptionStatus.PARTIALLY_DISPENSED
    return PrescriptionStatus.PENDING


class PrescriptionService:
    """
    Prescription lifecycle:
    - pending -> partially_dispensed -> dispensed, driven by item dispensing
    - pending -> cancelled, by a pharmacist
    The parent status is always recomputed from the items, never set directly
    except for cancellation.
    """

    @staticmethod
    def _query(db: Session):
        return db.query(Prescription).options(
            selectinload(Prescription.items).selectinload(PrescriptionItem.medication)
        )

    @staticmethod
    def get(db: Session, prescription_id: int) -> Prescription:
        prescription = (
            PrescriptionService._query(db)
            .filter(Prescription.id == prescription_id)
            .first()
        )
        if not prescription:
            raise RecordNotFoundError("Prescription not found")
        return prescription

    @staticmethod
    def list_for_patient(db: Session, patient_id: int) -> List[Prescription]:
        return (
            PrescriptionService._query(db)
            .filter(Prescription.patient_profile_id == patient_id)
            .order_by(Prescription.issued_date.desc(), Prescription.id.desc())
            .all()
        )

    @staticmethod
    def list_for_doctor(db: Session, doctor_id: int, limit: int = 20) -> List[Prescription]:
        return (
            PrescriptionService._query(db)
            .filter(Prescription.doctor_profile_id == doctor_id)
            .order_by(Prescription.issued_date.desc(), Prescription.id.desc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def dispense_queue(db: Session, limit: int = 50) -> List[Prescription]:
        return (
            PrescriptionService._query(db)
            .filter(Prescription.status.in_(OPEN_PRESCRIPTION_STATUSES))
            .order_by(Prescription.issued_date.desc(), Prescription.id.desc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def dispense_item(db: Session, user_id: str, item_id: int, quantity: int) -> PrescriptionItem:
        pharmacist = ProfileService.ensure_pharmacist(db, user_id)

        item = (
            db.query(PrescriptionItem)
            .filter(PrescriptionItem.id == item_id)
            .with_for_update()
            .populate_existing()
            .first()
        )
        if not item:
            raise RecordNotFoundError("Prescription item not found")

        prescription = item.prescription
        db.refresh(prescription)
        if prescription.status not in OPEN_PRESCRIPTION_STATUSES:
            raise InvalidTransitionError(
                f"Cannot dispense against a {prescription.status} prescription"
            )
        if prescription.valid_until and prescription.valid_until < date.today():
            raise ValueError(f"Prescription expired on {prescription.valid_until.isoformat()}")

        remaining = item.remaining_quantity
        if quantity <= 0:
            raise DispenseQuantityError("Quantity must be greater than zero")
        if quantity > remaining:
            raise DispenseQuantityError(
                f"Cannot dispense {quantity}; only {remaining} remaining"
            )

        # Guarded increment; a concurrent dispense that committed after our read leaves no row to match
        claimed = (
            db.query(PrescriptionItem)
            .filter(
                PrescriptionItem.id == item.id,
                func.coalesce(PrescriptionItem.dispensed_quantity, 0) + quantity <= PrescriptionItem.quantity,
            )
            .update(
                {PrescriptionItem.dispensed_quantity: func.coalesce(PrescriptionItem.dispensed_quantity, 0) + quantity},
                synchronize_session=False,
            )
        )
        if not claimed:
            db.rollback()
            db.refresh(item)
            raise DispenseQuantityError(
                f"Cannot dispense {quantity}; only {item.remaining_quantity} remaining"
            )
        db.refresh(item)

        if settings.INVENTORY_DEBIT_ON_DISPENSE:
            try:
                InventoryService.debit(db, pharmacist.id, item.medication_id, quantity)
            except InsufficientStockError:
                db.rollback()
                raise

        if item.dispensed_quantity == item.quantity:
            item.status = PrescriptionItemStatus.DISPENSED.value
        item.dispensed_at = utcnow()
        item.dispensed_by_pharmacist_id = pharmacist.id

        new_status = derive_prescription_status(prescription.items)
        if _STATUS_RANK[new_status.value] < _STATUS_RANK[prescription.status]:
            # Item rows only ever grow, so this would mean corrupted data
            db.rollback()
            raise InvalidTransitionError("Prescription status cannot move backwards")
        prescription.status = new_status.value

        db.commit()
        db.refresh(item)
        logger.info(
            f"Pharmacist {pharmacist.id} dispensed {quantity} of item {item.id}; "
            f"prescription {prescription.id} is now {prescription.status}"
        )
        return item

    @staticmethod
    def cancel(db: Session, user_id: str, prescription_id: int, reason: Optional[str] = None) -> Prescription:
        pharmacist = ProfileService.ensure_pharmacist(db, user_id)
        prescription = PrescriptionService.get(db, prescription_id)

        if prescription.status != PrescriptionStatus.PENDING.value:
            raise InvalidTransitionError(
                f"Only pending prescriptions can be cancelled (current: {prescription.status})"
            )

        prescription.status = PrescriptionStatus.CANCELLED.value
        prescription.cancelled_at = utcnow()
        prescription.cancelled_by_pharmacist_id = pharmacist.id
        prescription.cancellation_reason = reason
        db.commit()
        db.refresh(prescription)
        logger.info(f"Prescription {prescription.id} cancelled by pharmacist {pharmacist.id}")
        return prescription
