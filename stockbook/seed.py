from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from stockbook.schemas import Product

DEMO_PRODUCTS: list[dict] = [
    {
        "id": "1",
        "name": "Folhas de Formato A4 (Resma 500 fls)",
        "sku": "PAP-001",
        "category": "Papelaria",
        "price": 4500,
        "quantity": 40,
        "min_stock": 10,
        "description": "Papel sulfite A4 branco de alta qualidade para impressões.",
    },
    {
        "id": "2",
        "name": "Cabo USB Tipo-C (1.5m)",
        "sku": "CAB-001",
        "category": "Acessórios",
        "price": 2500,
        "quantity": 25,
        "min_stock": 5,
        "description": "Cabo de carregamento rápido e dados Tipo-C.",
    },
    {
        "id": "3",
        "name": "Cabo USB V8 (Micro USB)",
        "sku": "CAB-002",
        "category": "Acessórios",
        "price": 1800,
        "quantity": 15,
        "min_stock": 5,
        "description": "Cabo USB padrão para dispositivos Android antigos.",
    },
    {
        "id": "4",
        "name": "Cartucho de Tinta Preto 667",
        "sku": "SUP-001",
        "category": "Suprimentos",
        "price": 12500,
        "quantity": 8,
        "min_stock": 3,
        "description": "Cartucho original para impressoras HP.",
    },
    {
        "id": "5",
        "name": "Pen Drive 32GB Kingston",
        "sku": "STO-001",
        "category": "Armazenamento",
        "price": 5500,
        "quantity": 12,
        "min_stock": 4,
        "description": "Dispositivo de armazenamento USB 3.0.",
    },
    {
        "id": "6",
        "name": "Serviço de Impressão (PB)",
        "sku": "SERV-001",
        "category": "Serviços",
        "price": 100,
        "quantity": 5000,
        "min_stock": 100,
        "description": "Custo por folha impressa em preto e branco.",
    },
]


def demo_catalog(now: Optional[datetime] = None) -> list[Product]:
    """Catálogo inicial cuando todavía no hay nada guardado."""
    when = now or datetime.now(timezone.utc)
    return [Product(**spec, last_updated=when) for spec in DEMO_PRODUCTS]
