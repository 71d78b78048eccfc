from __future__ import annotations

from collections import Counter
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional

from stockbook import ledger
from stockbook.ledger import LedgerResult
from stockbook.schemas import InventoryStats, Product, ProductCreate, StockLevel
from stockbook.translations import DEFAULT_LANGUAGE


class CatalogStore:
    """Conjunto ordenado de productos (orden de inserción)."""

    def __init__(self, products: Iterable[Product] = ()):
        self._products: list[Product] = list(products)

    def __len__(self) -> int:
        return len(self._products)

    def adopt(self, result: LedgerResult) -> LedgerResult:
        self._products = list(result.products)
        return result

    def add(
        self,
        draft: ProductCreate,
        language: str = DEFAULT_LANGUAGE,
        now: Optional[datetime] = None,
    ) -> LedgerResult:
        return self.adopt(ledger.create_product(self._products, draft, language=language, now=now))

    def update(
        self,
        product_id: str,
        changes: Mapping[str, Any],
        language: str = DEFAULT_LANGUAGE,
        now: Optional[datetime] = None,
    ) -> LedgerResult:
        return self.adopt(
            ledger.catalog_edit(self._products, product_id, changes, language=language, now=now)
        )

    def remove(self, product_id: str) -> Optional[Product]:
        return self.adopt(ledger.remove_product(self._products, product_id)).product

    def get(self, product_id: str) -> Optional[Product]:
        for p in self._products:
            if p.id == product_id:
                return p
        return None

    def list(self) -> list[Product]:
        return list(self._products)

    def search(self, query: str = "", category: str = "") -> list[Product]:
        """Texto sobre nombre o SKU; la categoría debe coincidir exacta (vacía = todas)."""
        q = (query or "").strip().lower()
        found = self._products
        if category:
            found = [p for p in found if p.category == category]
        if q:
            found = [p for p in found if q in p.name.lower() or q in p.sku.lower()]
        return list(found)

    def categories(self) -> list[str]:
        return list(dict.fromkeys(p.category for p in self._products))

    def low_stock(self) -> list[Product]:
        return [p for p in self._products if p.is_low_stock]

    def top_category(self) -> Optional[str]:
        # Counter keeps first-seen order, most_common is stable on ties.
        counts = Counter(p.category for p in self._products)
        if not counts:
            return None
        return counts.most_common(1)[0][0]

    def stock_levels(self, limit: int = 10) -> list[StockLevel]:
        return [
            StockLevel(name=p.name, stock=p.quantity, min=p.min_stock)
            for p in self._products[:limit]
        ]

    def stats(self) -> InventoryStats:
        return InventoryStats(
            total_items=sum(p.quantity for p in self._products),
            low_stock_items=len(self.low_stock()),
            total_value=sum(p.price * p.quantity for p in self._products),
            top_category=self.top_category(),
            stock_levels=self.stock_levels(),
        )
