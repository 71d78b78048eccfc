from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Sequence
from uuid import uuid4

from stockbook.schemas import Movement, MovementType, Product, ProductCreate
from stockbook.translations import DEFAULT_LANGUAGE, label

EDITABLE_FIELDS = ("name", "sku", "category", "price", "quantity", "min_stock", "description")


@dataclass(frozen=True)
class LedgerResult:
    """Resultado de una operación: catálogo nuevo, producto afectado y movimiento opcional."""

    products: list[Product] = field(default_factory=list)
    product: Optional[Product] = None
    movement: Optional[Movement] = None
    changed: bool = False


def new_id() -> str:
    return uuid4().hex[:12]


def _now(provided: Optional[datetime]) -> datetime:
    return provided or datetime.now(timezone.utc)


def _index_of(products: Sequence[Product], product_id: str) -> Optional[int]:
    for i, p in enumerate(products):
        if p.id == product_id:
            return i
    return None


def _replace(products: Sequence[Product], index: int, updated: Product) -> list[Product]:
    out = list(products)
    out[index] = updated
    return out


def _movement(
    product: Product,
    movement_type: MovementType,
    quantity: int,
    unit_price: int,
    reason: str,
    when: datetime,
    product_name: Optional[str] = None,
) -> Movement:
    return Movement(
        id=new_id(),
        product_id=product.id,
        product_name=product_name if product_name is not None else product.name,
        type=movement_type,
        quantity=quantity,
        unit_price=unit_price,
        total_value=quantity * unit_price,
        date=when,
        reason=reason,
    )


def quick_adjust(
    products: Sequence[Product],
    product_id: str,
    step: int,
    language: str = DEFAULT_LANGUAGE,
    now: Optional[datetime] = None,
) -> LedgerResult:
    """Suma o resta unidades (normalmente +/-1); la cantidad nunca baja de 0.

    El movimiento registra el delta real aplicado, no el paso pedido.
    """
    idx = _index_of(products, product_id)
    if idx is None:
        return LedgerResult(products=list(products))

    product = products[idx]
    new_qty = max(0, product.quantity + step)
    if new_qty == product.quantity:
        return LedgerResult(products=list(products), product=product)

    when = _now(now)
    movement = _movement(
        product,
        "in" if step > 0 else "out",
        abs(new_qty - product.quantity),
        product.price,
        label(language, "quick_adjust"),
        when,
    )
    updated = product.model_copy(update={"quantity": new_qty, "last_updated": when})
    return LedgerResult(
        products=_replace(products, idx, updated),
        product=updated,
        movement=movement,
        changed=True,
    )


def manual_total(
    products: Sequence[Product],
    product_id: str,
    new_total: int,
    language: str = DEFAULT_LANGUAGE,
    now: Optional[datetime] = None,
) -> LedgerResult:
    """Reemplaza la cantidad por un total contado a mano."""
    idx = _index_of(products, product_id)
    if idx is None:
        return LedgerResult(products=list(products))

    product = products[idx]
    new_total = max(0, new_total)
    if new_total == product.quantity:
        return LedgerResult(products=list(products), product=product)

    when = _now(now)
    delta = new_total - product.quantity
    movement = _movement(
        product,
        "in" if delta > 0 else "out",
        abs(delta),
        product.price,
        label(language, "manual_adjust"),
        when,
    )
    updated = product.model_copy(update={"quantity": new_total, "last_updated": when})
    return LedgerResult(
        products=_replace(products, idx, updated),
        product=updated,
        movement=movement,
        changed=True,
    )


def typed_movement(
    products: Sequence[Product],
    product_id: str,
    movement_type: MovementType,
    quantity: int,
    reason: str = "",
    language: str = DEFAULT_LANGUAGE,
    now: Optional[datetime] = None,
) -> LedgerResult:
    """Registra una entrada o salida explícita.

    Una salida mayor que el stock deja la cantidad en 0 pero el movimiento
    conserva la cantidad solicitada.
    """
    if quantity <= 0:
        return LedgerResult(products=list(products))

    idx = _index_of(products, product_id)
    if idx is None:
        return LedgerResult(products=list(products))

    product = products[idx]
    if movement_type == "in":
        final_qty = product.quantity + quantity
    else:
        final_qty = max(0, product.quantity - quantity)

    when = _now(now)
    movement = _movement(
        product,
        movement_type,
        quantity,
        product.price,
        (reason or "").strip() or label(language, movement_type),
        when,
    )
    updated = product.model_copy(update={"quantity": final_qty, "last_updated": when})
    return LedgerResult(
        products=_replace(products, idx, updated),
        product=updated,
        movement=movement,
        changed=True,
    )


def create_product(
    products: Sequence[Product],
    draft: ProductCreate,
    language: str = DEFAULT_LANGUAGE,
    now: Optional[datetime] = None,
) -> LedgerResult:
    """Da de alta un producto con su movimiento de stock inicial.

    El movimiento inicial se emite siempre, también con cantidad 0.
    """
    when = _now(now)
    product = Product(
        id=new_id(),
        name=draft.name,
        sku=draft.sku.strip(),
        category=draft.category.strip(),
        price=draft.price,
        quantity=max(0, draft.quantity),
        min_stock=draft.min_stock,
        description=draft.description,
        last_updated=when,
    )
    movement = _movement(
        product,
        "in",
        product.quantity,
        product.price,
        label(language, "initial_stock"),
        when,
    )
    return LedgerResult(
        products=[*products, product],
        product=product,
        movement=movement,
        changed=True,
    )


def catalog_edit(
    products: Sequence[Product],
    product_id: str,
    changes: Mapping[str, Any],
    language: str = DEFAULT_LANGUAGE,
    now: Optional[datetime] = None,
) -> LedgerResult:
    """Aplica cambios de ficha; si cambia la cantidad genera un ajuste manual."""
    idx = _index_of(products, product_id)
    if idx is None:
        return LedgerResult(products=list(products))

    existing = products[idx]
    when = _now(now)
    update: dict[str, Any] = {
        k: v for k, v in changes.items() if k in EDITABLE_FIELDS and v is not None
    }
    if "quantity" in update:
        update["quantity"] = max(0, int(update["quantity"]))
    update["last_updated"] = when
    updated = existing.model_copy(update=update)

    movement: Optional[Movement] = None
    if updated.quantity != existing.quantity:
        delta = updated.quantity - existing.quantity
        movement = _movement(
            existing,
            "in" if delta > 0 else "out",
            abs(delta),
            updated.price,
            label(language, "manual_adjust"),
            when,
            product_name=existing.name,
        )
    return LedgerResult(
        products=_replace(products, idx, updated),
        product=updated,
        movement=movement,
        changed=True,
    )


def update_price(
    products: Sequence[Product],
    product_id: str,
    price: int,
    now: Optional[datetime] = None,
) -> LedgerResult:
    idx = _index_of(products, product_id)
    if idx is None:
        return LedgerResult(products=list(products))

    updated = products[idx].model_copy(update={"price": price, "last_updated": _now(now)})
    return LedgerResult(
        products=_replace(products, idx, updated), product=updated, changed=True
    )


def remove_product(products: Sequence[Product], product_id: str) -> LedgerResult:
    """Quita el producto del catálogo; su historial de movimientos no se toca."""
    idx = _index_of(products, product_id)
    if idx is None:
        return LedgerResult(products=list(products))
    removed = products[idx]
    return LedgerResult(
        products=[p for p in products if p.id != product_id],
        product=removed,
        changed=True,
    )
