"""Pharmacy inventory endpoints."""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.dependencies.auth import get_current_pharmacist
from app.schemas.inventory import InventoryCreate, InventoryRead, StockUpdate
from app.services.inventory_service import InventoryService

router = APIRouter(prefix="/inventory", tags=["inventory"])


@router.get("", response_model=List[InventoryRead])
async def list_inventory(current_user = Depends(get_current_pharmacist), db: Session = Depends(get_db)):
    return InventoryService.list_rows(db, current_user["sub"])


@router.post("", response_model=InventoryRead, status_code=status.HTTP_201_CREATED)
async def create_row(
    payload: InventoryCreate,
    current_user = Depends(get_current_pharmacist),
    db: Session = Depends(get_db),
):
    try:
        return InventoryService.create_row(db, current_user["sub"], payload.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{row_id}/stock", response_model=InventoryRead)
async def update_stock(
    row_id: int,
    payload: StockUpdate,
    current_user = Depends(get_current_pharmacist),
    db: Session = Depends(get_db),
):
    try:
        return InventoryService.update_stock(db, current_user["sub"], row_id, payload.current_stock)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
