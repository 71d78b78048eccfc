from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response

from stockbook.deps import inventory_service_dep
from stockbook.schemas import (
    MutationResult,
    PriceUpdateRequest,
    Product,
    ProductCreate,
    ProductUpdate,
    QuickAdjustRequest,
    StockSetRequest,
)
from stockbook.services.inventory_service import InventoryService

router = APIRouter(tags=["products"])


@router.get("/products", response_model=list[Product])
def list_products(
    q: str = "",
    category: str = "",
    service: InventoryService = Depends(inventory_service_dep),
) -> list[Product]:
    return service.list_products(q, category)


@router.get("/categories", response_model=list[str])
def list_categories(service: InventoryService = Depends(inventory_service_dep)) -> list[str]:
    return service.categories()


@router.post("/products", response_model=MutationResult, status_code=201)
def create_product(
    payload: ProductCreate,
    service: InventoryService = Depends(inventory_service_dep),
) -> MutationResult:
    return service.create_product(payload)


@router.get("/products/{product_id}", response_model=Product)
def get_product(
    product_id: str,
    service: InventoryService = Depends(inventory_service_dep),
) -> Product:
    product = service.get_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.put("/products/{product_id}", response_model=MutationResult)
def update_product(
    product_id: str,
    payload: ProductUpdate,
    service: InventoryService = Depends(inventory_service_dep),
) -> MutationResult:
    return service.update_product(product_id, payload)


@router.delete("/products/{product_id}", status_code=204)
def delete_product(
    product_id: str,
    service: InventoryService = Depends(inventory_service_dep),
) -> Response:
    service.remove_product(product_id)
    return Response(status_code=204)


@router.post("/products/{product_id}/quick-adjust", response_model=MutationResult)
def quick_adjust(
    product_id: str,
    payload: QuickAdjustRequest,
    service: InventoryService = Depends(inventory_service_dep),
) -> MutationResult:
    return service.quick_adjust(product_id, payload.step)


@router.put("/products/{product_id}/stock", response_model=MutationResult)
def set_stock(
    product_id: str,
    payload: StockSetRequest,
    service: InventoryService = Depends(inventory_service_dep),
) -> MutationResult:
    return service.set_total(product_id, payload.quantity)


@router.put("/products/{product_id}/price", response_model=MutationResult)
def set_price(
    product_id: str,
    payload: PriceUpdateRequest,
    service: InventoryService = Depends(inventory_service_dep),
) -> MutationResult:
    return service.update_price(product_id, payload.price)
