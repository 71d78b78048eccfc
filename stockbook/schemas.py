from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ValidationInfo, field_validator
from typing_extensions import Literal

MovementType = Literal["in", "out"]
Language = Literal["pt", "en", "fr"]
Priority = Literal["low", "medium", "high"]

LANGUAGES: tuple[str, ...] = ("pt", "en", "fr")


class Product(BaseModel):
    id: str
    name: str
    sku: str = ""
    category: str = ""
    price: int = 0
    quantity: int = 0
    min_stock: int = 5
    description: str = ""
    last_updated: datetime

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.min_stock


class Movement(BaseModel):
    id: str
    product_id: str
    product_name: str
    type: MovementType
    quantity: int
    unit_price: int
    total_value: int
    date: datetime
    reason: str = ""

    model_config = {"frozen": True}


def _must_be_non_negative(v: Optional[int], field: str) -> Optional[int]:
    if v is not None and v < 0:
        raise ValueError(f"{field} must be >= 0")
    return v


class ProductCreate(BaseModel):
    name: str
    sku: str = ""
    category: str = ""
    price: int = 0
    quantity: int = 0
    min_stock: int = 5
    description: str = ""

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must not be empty")
        return v.strip()

    @field_validator("price", "quantity", "min_stock")
    @classmethod
    def must_be_non_negative(cls, v: int, info: ValidationInfo) -> int:
        return _must_be_non_negative(v, info.field_name)


class ProductUpdate(BaseModel):
    name: Optional[str] = None
    sku: Optional[str] = None
    category: Optional[str] = None
    price: Optional[int] = None
    quantity: Optional[int] = None
    min_stock: Optional[int] = None
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("name must not be empty")
        return v.strip() if v is not None else None

    @field_validator("price", "quantity", "min_stock")
    @classmethod
    def must_be_non_negative(cls, v: Optional[int], info: ValidationInfo) -> Optional[int]:
        return _must_be_non_negative(v, info.field_name)


class QuickAdjustRequest(BaseModel):
    step: int = 1


class StockSetRequest(BaseModel):
    quantity: int

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("quantity must be >= 0")
        return v


class PriceUpdateRequest(BaseModel):
    price: int

    @field_validator("price")
    @classmethod
    def price_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("price must be >= 0")
        return v


class MovementCreate(BaseModel):
    product_id: str
    type: MovementType
    quantity: int
    reason: str = ""

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("quantity must be greater than 0")
        return v


class MutationResult(BaseModel):
    product: Optional[Product] = None
    movement: Optional[Movement] = None


class StockLevel(BaseModel):
    name: str
    stock: int
    min: int


class InventoryStats(BaseModel):
    total_items: int
    low_stock_items: int
    total_value: int
    top_category: Optional[str] = None
    stock_levels: list[StockLevel] = []


class Insight(BaseModel):
    title: str
    description: str
    recommendation: str
    priority: Priority


class DescriptionRequest(BaseModel):
    name: str
    category: str = ""


class DescriptionRead(BaseModel):
    description: str


class LanguageSetting(BaseModel):
    language: Language
