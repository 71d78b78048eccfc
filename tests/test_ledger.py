"""
Tests for the stock reconciliation functions.
"""
from datetime import datetime, timezone

import pytest

from stockbook import ledger
from stockbook.schemas import Product, ProductCreate


def make_product(**overrides) -> Product:
    data = {
        "id": "p1",
        "name": "Cabo USB Tipo-C (1.5m)",
        "sku": "CAB-001",
        "category": "Acessórios",
        "price": 2500,
        "quantity": 5,
        "min_stock": 2,
        "description": "",
        "last_updated": datetime(2024, 1, 1, tzinfo=timezone.utc),
    }
    data.update(overrides)
    return Product(**data)


class TestQuickAdjust:
    def test_increment_records_in_movement(self, now):
        result = ledger.quick_adjust([make_product()], "p1", 1, now=now)

        assert result.product.quantity == 6
        assert result.product.last_updated == now
        assert result.movement.type == "in"
        assert result.movement.quantity == 1
        assert result.movement.unit_price == 2500
        assert result.movement.total_value == 2500
        assert result.movement.reason == "Ajuste Rápido"
        assert result.products[0].quantity == 6

    def test_decrement_records_out_movement(self, now):
        result = ledger.quick_adjust([make_product()], "p1", -1, now=now)

        assert result.product.quantity == 4
        assert result.movement.type == "out"
        assert result.movement.quantity == 1

    def test_clamped_decrement_records_actual_delta(self):
        result = ledger.quick_adjust([make_product(quantity=2)], "p1", -5)

        assert result.product.quantity == 0
        assert result.movement.type == "out"
        assert result.movement.quantity == 2

    def test_decrement_from_zero_is_noop(self):
        products = [make_product(quantity=0)]
        result = ledger.quick_adjust(products, "p1", -1)

        assert result.movement is None
        assert result.changed is False
        assert result.product.quantity == 0
        assert result.products == products

    def test_unknown_product_is_noop(self):
        products = [make_product()]
        result = ledger.quick_adjust(products, "missing", 1)

        assert result.product is None
        assert result.movement is None
        assert result.products == products

    def test_other_products_untouched(self):
        other = make_product(id="p2", name="Other", quantity=7)
        result = ledger.quick_adjust([make_product(), other], "p1", 1)

        assert result.products[1] is other

    def test_label_follows_language(self):
        result = ledger.quick_adjust([make_product()], "p1", 1, language="en")

        assert result.movement.reason == "Quick Adjustment"


class TestManualTotal:
    def test_same_total_emits_nothing(self):
        result = ledger.manual_total([make_product(quantity=5)], "p1", 5)

        assert result.movement is None
        assert result.changed is False

    @pytest.mark.parametrize(
        "new_total, expected_type, expected_qty",
        [(12, "in", 7), (1, "out", 4), (0, "out", 5)],
    )
    def test_different_total_emits_one_movement(self, new_total, expected_type, expected_qty):
        result = ledger.manual_total([make_product(quantity=5)], "p1", new_total)

        assert result.product.quantity == new_total
        assert result.movement.type == expected_type
        assert result.movement.quantity == expected_qty
        assert result.movement.reason == "Ajuste Manual"

    def test_negative_target_never_goes_below_zero(self):
        result = ledger.manual_total([make_product(quantity=5)], "p1", -3)

        assert result.product.quantity == 0
        assert result.movement.quantity == 5


class TestTypedMovement:
    def test_in_adds_quantity(self):
        result = ledger.typed_movement([make_product(quantity=5)], "p1", "in", 20, "compra")

        assert result.product.quantity == 25
        assert result.movement.type == "in"
        assert result.movement.quantity == 20
        assert result.movement.reason == "compra"

    def test_out_larger_than_stock_records_requested_quantity(self):
        result = ledger.typed_movement([make_product(quantity=5)], "p1", "out", 50, "bulk sale")

        assert result.product.quantity == 0
        # Requested magnitude is kept even though only 5 units were removed.
        assert result.movement.quantity == 50
        assert result.movement.total_value == 50 * 2500

    def test_empty_reason_uses_direction_label(self):
        result_in = ledger.typed_movement([make_product()], "p1", "in", 1, "")
        result_out = ledger.typed_movement([make_product()], "p1", "out", 1, "   ", language="fr")

        assert result_in.movement.reason == "Entrada"
        assert result_out.movement.reason == "Sortie"

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_non_positive_quantity_is_ignored(self, quantity):
        products = [make_product()]
        result = ledger.typed_movement(products, "p1", "in", quantity)

        assert result.movement is None
        assert result.product is None
        assert result.products == products


class TestCreateProduct:
    def test_new_product_gets_initial_movement(self, widget_draft, now):
        result = ledger.create_product([], widget_draft, now=now)

        assert len(result.products) == 1
        product = result.product
        assert product.id
        assert product.last_updated == now
        assert result.movement.product_id == product.id
        assert result.movement.product_name == "Widget"
        assert result.movement.type == "in"
        assert result.movement.quantity == 10
        assert result.movement.total_value == 1000
        assert result.movement.reason == "Stock Inicial"

    def test_zero_initial_quantity_still_emits_movement(self):
        result = ledger.create_product([], ProductCreate(name="Vazio", price=50, quantity=0))

        assert result.movement is not None
        assert result.movement.quantity == 0

    def test_min_stock_defaults_to_five(self):
        result = ledger.create_product([], ProductCreate(name="Novo", quantity=5))

        assert result.product.min_stock == 5
        assert result.product.is_low_stock

    def test_ids_are_unique(self, widget_draft):
        first = ledger.create_product([], widget_draft)
        second = ledger.create_product(first.products, widget_draft)

        assert first.product.id != second.product.id
        assert len(second.products) == 2


class TestCatalogEdit:
    def test_field_changes_without_quantity_emit_nothing(self, now):
        result = ledger.catalog_edit(
            [make_product()], "p1", {"name": "Cabo Novo", "min_stock": 4}, now=now
        )

        assert result.product.name == "Cabo Novo"
        assert result.product.min_stock == 4
        assert result.product.last_updated == now
        assert result.movement is None

    def test_quantity_change_uses_new_price_and_old_name(self):
        result = ledger.catalog_edit(
            [make_product(quantity=5, price=2500)],
            "p1",
            {"name": "Cabo Renomeado", "quantity": 8, "price": 3000},
        )

        assert result.product.quantity == 8
        assert result.movement.type == "in"
        assert result.movement.quantity == 3
        assert result.movement.unit_price == 3000
        assert result.movement.product_name == "Cabo USB Tipo-C (1.5m)"
        assert result.movement.reason == "Ajuste Manual"

    def test_quantity_change_keeps_existing_price(self):
        result = ledger.catalog_edit([make_product(quantity=5)], "p1", {"quantity": 2})

        assert result.movement.type == "out"
        assert result.movement.quantity == 3
        assert result.movement.unit_price == 2500

    def test_unknown_fields_ignored(self):
        result = ledger.catalog_edit([make_product()], "p1", {"id": "hijack", "quantity": None})

        assert result.product.id == "p1"
        assert result.product.quantity == 5


class TestPriceAndRemoval:
    def test_price_update_never_emits_movement(self):
        result = ledger.update_price([make_product()], "p1", 2700)

        assert result.product.price == 2700
        assert result.movement is None
        assert result.changed is True

    def test_remove_filters_product(self):
        other = make_product(id="p2")
        result = ledger.remove_product([make_product(), other], "p1")

        assert result.product.id == "p1"
        assert result.products == [other]

    def test_remove_unknown_is_noop(self):
        products = [make_product()]
        result = ledger.remove_product(products, "nope")

        assert result.product is None
        assert result.products == products


def test_quantity_never_negative_over_sequence():
    products = [make_product(quantity=1)]
    steps = [
        lambda ps: ledger.quick_adjust(ps, "p1", -1),
        lambda ps: ledger.quick_adjust(ps, "p1", -1),
        lambda ps: ledger.typed_movement(ps, "p1", "out", 9),
        lambda ps: ledger.manual_total(ps, "p1", 3),
        lambda ps: ledger.typed_movement(ps, "p1", "out", 4),
        lambda ps: ledger.catalog_edit(ps, "p1", {"quantity": -2}),
    ]
    for step in steps:
        products = step(products).products
        assert products[0].quantity >= 0
