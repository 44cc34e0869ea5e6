# 🧾 storefront/api/schemas.py
"""🧾 Pydantic-схеми HTTP-запитів (camelCase назовні, snake_case всередині)."""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from pydantic import BaseModel, ConfigDict, Field

# 🔠 Системні імпорти
from decimal import Decimal
from typing import List, Optional


def _camel(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part.title() for part in tail)


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=_camel, populate_by_name=True, extra="forbid")


# ================================
# 💸 ЦІНОУТВОРЕННЯ
# ================================
class CalculateIn(ApiModel):
    cost_price: Optional[Decimal] = None
    cost_in_foreign: Optional[Decimal] = None
    discount_percent: Decimal = Decimal("0")
    margin_percent: Optional[Decimal] = None
    max_installments: Optional[int] = None


class ManualRateIn(ApiModel):
    rate: Optional[Decimal] = None
    enabled: bool = True


class SettingsPatchIn(ApiModel):
    tax_rate: Optional[Decimal] = None
    processor_rate: Optional[Decimal] = None
    processor_fixed_fee: Optional[Decimal] = None
    default_profit_margin: Optional[Decimal] = None
    max_installments: Optional[int] = None
    no_fee_installments: Optional[int] = None
    min_installment_value: Optional[Decimal] = None
    installment_interest_rate: Optional[Decimal] = None
    installment_interest_mode: Optional[str] = None
    company_name: Optional[str] = None


# ================================
# 📦 КАТАЛОГ
# ================================
class OptionIn(ApiModel):
    attribute: str
    value: str


class VariantIn(ApiModel):
    name: str
    sku: Optional[str] = None
    price: Optional[Decimal] = None
    stock: int = 0
    serial_numbers: List[str] = Field(default_factory=list)
    tracks_serials: bool = False
    is_active: bool = True
    options: List[OptionIn] = Field(default_factory=list)


class ProductIn(ApiModel):
    name: str
    sku: Optional[str] = None
    price: Decimal = Decimal("0")
    stock: int = 0
    has_variations: bool = False
    option_schema: List[str] = Field(default_factory=list)
    variants: List[VariantIn] = Field(default_factory=list)


class AttributeIn(ApiModel):
    name: str
    values: List[str] = Field(default_factory=list)


class GenerateVariantsIn(ApiModel):
    attributes: List[AttributeIn]
    base_price: Optional[Decimal] = None


class StockIn(ApiModel):
    stock: int


class ActiveIn(ApiModel):
    is_active: bool


class SerialIn(ApiModel):
    serial_number: str
