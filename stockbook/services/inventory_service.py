from __future__ import annotations

import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, Optional

import structlog

from stockbook import ledger
from stockbook.ledger import LedgerResult
from stockbook.schemas import (
    InventoryStats,
    Movement,
    MovementCreate,
    MutationResult,
    Product,
    ProductCreate,
    ProductUpdate,
)
from stockbook.services.catalog_store import CatalogStore
from stockbook.services.movement_log import MovementLog
from stockbook.services.persistence import PersistenceGateway

logger = structlog.get_logger(__name__)

# Un solo escritor por proceso: cargar, conciliar y guardar no se intercalan.
_state_lock = threading.Lock()


class InventoryService:
    """Punto único entre las intenciones del usuario y las dos colecciones.

    Cada operación ejecuta una conciliación, añade como mucho un movimiento
    y guarda el catálogo y el historial. Las mutaciones recargan el estado
    guardado bajo un bloqueo de proceso antes de conciliar.
    """

    def __init__(self, gateway: PersistenceGateway):
        self._gateway = gateway
        self._reload()

    def _reload(self) -> None:
        self._catalog = CatalogStore(self._gateway.load_products())
        self._log = MovementLog(self._gateway.load_movements())
        self._language = self._gateway.load_language()

    @contextmanager
    def _fresh_state(self) -> Iterator[None]:
        with _state_lock:
            self._reload()
            yield

    @property
    def catalog(self) -> CatalogStore:
        return self._catalog

    @property
    def log(self) -> MovementLog:
        return self._log

    @property
    def language(self) -> str:
        return self._language

    def set_language(self, language: str) -> str:
        with _state_lock:
            self._language = language
            self._gateway.save_language(language)
        logger.info("Language changed", language=language)
        return language

    def _commit(self, action: str, result: LedgerResult) -> MutationResult:
        if result.product is None:
            logger.info("Product not found, nothing to do", action=action)
            return MutationResult()
        if not result.changed:
            logger.info("No stock change", action=action, product_id=result.product.id)
            return MutationResult(product=result.product)

        if result.movement is not None:
            self._log.append(result.movement)

        self._gateway.save_products(self._catalog.list())
        if result.movement is not None:
            self._gateway.save_movements(self._log.list())
            logger.info(
                "Stock movement recorded",
                action=action,
                product_id=result.product.id,
                type=result.movement.type,
                quantity=result.movement.quantity,
                stock_after=result.product.quantity,
            )
        else:
            logger.info("Product updated", action=action, product_id=result.product.id)
        return MutationResult(product=result.product, movement=result.movement)

    def list_products(self, query: str = "", category: str = "") -> list[Product]:
        return self._catalog.search(query, category=category)

    def categories(self) -> list[str]:
        return self._catalog.categories()

    def get_product(self, product_id: str) -> Optional[Product]:
        return self._catalog.get(product_id)

    def create_product(self, payload: ProductCreate, now: Optional[datetime] = None) -> MutationResult:
        with self._fresh_state():
            return self._commit(
                "product_create",
                self._catalog.add(payload, language=self._language, now=now),
            )

    def update_product(
        self, product_id: str, payload: ProductUpdate, now: Optional[datetime] = None
    ) -> MutationResult:
        with self._fresh_state():
            return self._commit(
                "product_update",
                self._catalog.update(
                    product_id,
                    payload.model_dump(exclude_unset=True),
                    language=self._language,
                    now=now,
                ),
            )

    def remove_product(self, product_id: str) -> Optional[Product]:
        with self._fresh_state():
            removed = self._catalog.remove(product_id)
            if removed is None:
                logger.info("Product not found, nothing to do", action="product_delete")
                return None
            self._gateway.save_products(self._catalog.list())
        logger.info("Product deleted", product_id=product_id, name=removed.name)
        return removed

    def quick_adjust(self, product_id: str, step: int, now: Optional[datetime] = None) -> MutationResult:
        with self._fresh_state():
            result = ledger.quick_adjust(
                self._catalog.list(), product_id, step, language=self._language, now=now
            )
            return self._commit("quick_adjust", self._catalog.adopt(result))

    def set_total(self, product_id: str, new_total: int, now: Optional[datetime] = None) -> MutationResult:
        with self._fresh_state():
            result = ledger.manual_total(
                self._catalog.list(), product_id, new_total, language=self._language, now=now
            )
            return self._commit("manual_total", self._catalog.adopt(result))

    def update_price(self, product_id: str, price: int, now: Optional[datetime] = None) -> MutationResult:
        with self._fresh_state():
            result = ledger.update_price(self._catalog.list(), product_id, price, now=now)
            return self._commit("price_update", self._catalog.adopt(result))

    def register_movement(self, payload: MovementCreate, now: Optional[datetime] = None) -> MutationResult:
        with self._fresh_state():
            result = ledger.typed_movement(
                self._catalog.list(),
                payload.product_id,
                payload.type,
                payload.quantity,
                payload.reason,
                language=self._language,
                now=now,
            )
            return self._commit("movement_create", self._catalog.adopt(result))

    def movements(self, product_id: Optional[str] = None) -> list[Movement]:
        """Historial para mostrar: el más reciente primero."""
        if product_id:
            return list(reversed(self._log.for_product(product_id)))
        return self._log.newest_first()

    def stats(self) -> InventoryStats:
        return self._catalog.stats()
