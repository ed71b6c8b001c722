from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, status

from . import schemas
from .services import SOFT_DELETE, InventoryRepository, get_repository

router = APIRouter(
    prefix="/api/v1/inventory",
    tags=["inventory"],
)


@router.get("", response_model=List[schemas.InventoryItemRead])
def list_inventory(
    category: Optional[str] = None,
    location: Optional[str] = None,
    q: Optional[str] = None,
    repo: InventoryRepository = Depends(get_repository),
):
    return repo.list_items(category=category, location=location, q=q)


@router.get("/{item_id}", response_model=schemas.InventoryItemRead)
def get_inventory_item(
    item_id: int,
    repo: InventoryRepository = Depends(get_repository),
):
    return schemas.InventoryItemRead.model_validate(repo.get_item(item_id))


@router.post(
    "",
    response_model=schemas.InventoryItemRead,
    status_code=status.HTTP_201_CREATED,
)
def create_inventory_item(
    payload: schemas.InventoryItemCreate,
    repo: InventoryRepository = Depends(get_repository),
):
    return schemas.InventoryItemRead.model_validate(repo.create_item(payload))


@router.put("/{item_id}", response_model=schemas.InventoryItemRead)
def update_inventory_item(
    item_id: int,
    payload: schemas.InventoryItemUpdate,
    repo: InventoryRepository = Depends(get_repository),
):
    return schemas.InventoryItemRead.model_validate(repo.update_item(item_id, payload))


@router.patch("/{item_id}/quantity", response_model=schemas.InventoryItemRead)
def adjust_inventory_quantity(
    item_id: int,
    payload: Optional[schemas.QuantityAdjustRequest] = None,
    repo: InventoryRepository = Depends(get_repository),
):
    payload = payload or schemas.QuantityAdjustRequest()
    item = repo.adjust_quantity(item_id, payload.delta, reason=payload.reason)
    return schemas.InventoryItemRead.model_validate(item)


@router.delete("/{item_id}", response_model=schemas.DeleteResult)
def delete_inventory_item(
    item_id: int,
    mode: str = SOFT_DELETE,
    reason: Optional[str] = None,
    repo: InventoryRepository = Depends(get_repository),
):
    return repo.remove_item(item_id, mode=mode, reason=reason)
