"""Pharmacy inventory bookkeeping."""
import logging
from datetime import date
from typing import List

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.constants import StockStatus
from app.models.inventory import InventoryItem
from app.models.medication import Medication
from app.services.profile_service import ProfileService
from app.utils.errors import RecordNotFoundError, InsufficientStockError

logger = logging.getLogger(__name__)


class InventoryService:
    @staticmethod
    def list_rows(db: Session, user_id: str) -> List[InventoryItem]:
        pharmacist = ProfileService.ensure_pharmacist(db, user_id)
        return InventoryService.rows_for_pharmacist(db, pharmacist.id)

    @staticmethod
    def rows_for_pharmacist(db: Session, pharmacist_id: int) -> List[InventoryItem]:
        return (
            db.query(InventoryItem)
            .filter(InventoryItem.pharmacist_profile_id == pharmacist_id)
            .order_by(InventoryItem.current_stock.asc(), InventoryItem.id.asc())
            .all()
        )

    @staticmethod
    def create_row(db: Session, user_id: str, payload: dict) -> InventoryItem:
        pharmacist = ProfileService.ensure_pharmacist(db, user_id)

        if not db.query(Medication).filter(Medication.id == payload["medication_id"]).first():
            raise RecordNotFoundError("Medication not found")

        minimum = payload.get("minimum_stock_level")
        maximum = payload.get("maximum_stock_level")
        if minimum is None:
            minimum = settings.DEFAULT_MIN_STOCK_LEVEL
        if maximum is None:
            maximum = settings.DEFAULT_MAX_STOCK_LEVEL
        if minimum >= maximum:
            raise ValueError("minimum_stock_level must be below maximum_stock_level")

        row = InventoryItem(
            pharmacist_profile_id=pharmacist.id,
            medication_id=payload["medication_id"],
            current_stock=payload.get("current_stock") or 0,
            minimum_stock_level=minimum,
            maximum_stock_level=maximum,
            expiry_date=payload.get("expiry_date"),
            batch_number=payload.get("batch_number"),
            supplier=payload.get("supplier"),
            unit_cost=payload.get("unit_cost"),
        )
        db.add(row)
        db.commit()
        db.refresh(row)
        return row

    @staticmethod
    def update_stock(db: Session, user_id: str, row_id: int, new_value: int) -> InventoryItem:
        """Overwrite the stock level of one of the caller's rows."""
        if new_value < 0:
            raise ValueError("Stock level cannot be negative")

        pharmacist = ProfileService.ensure_pharmacist(db, user_id)
        row = (
            db.query(InventoryItem)
            .filter(
                InventoryItem.id == row_id,
                InventoryItem.pharmacist_profile_id == pharmacist.id,
            )
            .first()
        )
        if not row:
            raise RecordNotFoundError("Inventory row not found")

        previous = row.current_stock
        row.current_stock = new_value
        db.commit()
        db.refresh(row)
        logger.info(f"Inventory row {row.id} stock overwritten {previous} -> {new_value}")
        return row

    @staticmethod
    def debit(db: Session, pharmacist_id: int, medication_id: int, quantity: int) -> None:
        """Take ``quantity`` units out of non-expired stock, earliest expiry first.

        Each row is decremented with a guarded UPDATE; nothing is committed here,
        the caller owns the transaction.
        """
        today = date.today()
        rows = (
            db.query(InventoryItem)
            .filter(
                InventoryItem.pharmacist_profile_id == pharmacist_id,
                InventoryItem.medication_id == medication_id,
                InventoryItem.current_stock > 0,
                or_(InventoryItem.expiry_date.is_(None), InventoryItem.expiry_date >= today),
            )
            .with_for_update()
            .populate_existing()
            .all()
        )
        # Undated batches are used last
        rows.sort(key=lambda r: (r.expiry_date is None, r.expiry_date or today, r.id))

        available = sum(r.current_stock for r in rows)
        if available < quantity:
            raise InsufficientStockError(
                f"Insufficient stock: {available} available, {quantity} requested"
            )

        outstanding = quantity
        for row in rows:
            if outstanding == 0:
                break
            taken = min(row.current_stock, outstanding)
            updated = (
                db.query(InventoryItem)
                .filter(InventoryItem.id == row.id, InventoryItem.current_stock >= taken)
                .update(
                    {InventoryItem.current_stock: InventoryItem.current_stock - taken},
                    synchronize_session="evaluate",
                )
            )
            if not updated:
                raise InsufficientStockError(
                    f"Stock of inventory row {row.id} changed while dispensing"
                )
            outstanding -= taken

    @staticmethod
    def summarize(rows: List[InventoryItem]) -> dict:
        counts = {status.value: 0 for status in StockStatus}
        for row in rows:
            counts[row.stock_status] += 1
        return counts
