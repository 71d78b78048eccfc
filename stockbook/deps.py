from __future__ import annotations

from collections.abc import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from stockbook.db import get_session
from stockbook.repositories.blob_repository import BlobRepository
from stockbook.services.insight_service import InsightService
from stockbook.services.inventory_service import InventoryService
from stockbook.services.persistence import PersistenceGateway
from stockbook.shop_config import ShopConfig, load_shop_config


def session_dep() -> Generator[Session, None, None]:
    db = get_session()
    try:
        yield db
    finally:
        db.close()


def shop_config_dep() -> ShopConfig:
    return load_shop_config()


def gateway_dep(
    db: Session = Depends(session_dep),
    config: ShopConfig = Depends(shop_config_dep),
) -> PersistenceGateway:
    return PersistenceGateway(
        BlobRepository(db),
        storage=config.storage,
        seed_catalog=config.shop.seed_catalog,
        default_language=config.shop.default_language,
    )


def inventory_service_dep(gateway: PersistenceGateway = Depends(gateway_dep)) -> InventoryService:
    return InventoryService(gateway)


def insight_service_dep(
    config: ShopConfig = Depends(shop_config_dep),
    inventory: InventoryService = Depends(inventory_service_dep),
) -> InsightService:
    return InsightService(config=config.ai, language=inventory.language)
