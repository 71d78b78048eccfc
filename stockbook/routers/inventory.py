from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from stockbook.deps import inventory_service_dep
from stockbook.schemas import InventoryStats, LanguageSetting, Movement, MovementCreate, MutationResult
from stockbook.services.inventory_service import InventoryService

router = APIRouter(tags=["inventory"])


@router.post("/movements", response_model=MutationResult, status_code=201)
def create_movement(
    payload: MovementCreate,
    service: InventoryService = Depends(inventory_service_dep),
) -> MutationResult:
    return service.register_movement(payload)


@router.get("/movements", response_model=list[Movement])
def list_movements(
    product_id: Optional[str] = None,
    service: InventoryService = Depends(inventory_service_dep),
) -> list[Movement]:
    return service.movements(product_id)


@router.get("/stats", response_model=InventoryStats)
def get_stats(service: InventoryService = Depends(inventory_service_dep)) -> InventoryStats:
    return service.stats()


@router.get("/settings/language", response_model=LanguageSetting)
def get_language(service: InventoryService = Depends(inventory_service_dep)) -> LanguageSetting:
    return LanguageSetting(language=service.language)


@router.put("/settings/language", response_model=LanguageSetting)
def set_language(
    payload: LanguageSetting,
    service: InventoryService = Depends(inventory_service_dep),
) -> LanguageSetting:
    return LanguageSetting(language=service.set_language(payload.language))
