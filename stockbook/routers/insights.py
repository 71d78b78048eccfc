from __future__ import annotations

from fastapi import APIRouter, Depends

from stockbook.deps import insight_service_dep, inventory_service_dep
from stockbook.schemas import DescriptionRead, DescriptionRequest, Insight
from stockbook.services.insight_service import InsightService
from stockbook.services.inventory_service import InventoryService

router = APIRouter(prefix="/insights", tags=["insights"])


@router.get("", response_model=list[Insight])
def get_insights(
    inventory: InventoryService = Depends(inventory_service_dep),
    insights: InsightService = Depends(insight_service_dep),
) -> list[Insight]:
    return insights.generate_insights(inventory.list_products())


@router.post("/description", response_model=DescriptionRead)
def generate_description(
    payload: DescriptionRequest,
    insights: InsightService = Depends(insight_service_dep),
) -> DescriptionRead:
    return DescriptionRead(description=insights.generate_description(payload.name, payload.category))
