# 📦 storefront/domain/catalog/entities.py
"""
📦 Сутності каталогу: товар, варіант і типізовані опції варіанту.

🔹 `VariantOption`: пара (атрибут, значення) замість довільного словника.
🔹 `Product.option_schema`: впорядкований список атрибутів, якому підкоряються опції варіантів.
🔹 `Product`/`Variant` змінювані: мутують лише робочі копії всередині транзакції репозиторію.
🔹 `generate_variants`: декартів добуток значень атрибутів у порядку схеми.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import itertools                                                    # 🔁 Декартів добуток атрибутів
import logging                                                      # 🧾 Логування нормалізації
import uuid                                                         # 🆔 Ідентифікатори сутностей
from dataclasses import dataclass, field                            # 🧱 Опис сутностей
from decimal import Decimal                                         # 💰 Ціни
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

# 🧩 Внутрішні модулі проєкту
from storefront.domain.pricing.rounding import ZERO, Number, to_decimal
from storefront.shared.errors import InvalidInput                   # 🚨 Валідація
from storefront.shared.utils.logger import LOG_NAME                 # 🏷️ Базове імʼя логера

logger = logging.getLogger(f"{LOG_NAME}.domain.catalog")

NAME_MAX_LEN = 200                                                  # 🏷️ Ліміт назви
ATTRIBUTE_MAX_LEN = 60                                              # 🔑 Ліміт назви атрибуту/значення


def new_id() -> str:
    """🆔 Короткий унікальний ідентифікатор."""
    return uuid.uuid4().hex


def _clean_str(value: Any, *, max_len: int) -> str:
    """Trim + обрізання до ліміту."""
    raw = str(value or "").strip()
    if len(raw) > max_len:
        logger.debug("✂️ _clean_str: %r → обрізано до %s символів", raw, max_len)
        return raw[:max_len]
    return raw


def _clean_sku(value: Any) -> Optional[str]:
    sku = _clean_str(value, max_len=NAME_MAX_LEN)
    return sku or None


def _non_negative_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(f"{name} must be an integer.", field=name)
    if value < 0:
        raise InvalidInput(f"{name} must be >= 0, got {value}.", field=name)
    return value


def _price(name: str, value: Optional[Number]) -> Optional[Decimal]:
    if value is None:
        return None
    result = to_decimal(value, field=name)
    if result < ZERO:
        raise InvalidInput(f"{name} must be >= 0.", field=name)
    return result


# ================================
# 🔖 ОПЦІЇ ВАРІАНТУ
# ================================
@dataclass(frozen=True)
class VariantOption:
    """🔖 Одна характеристика варіанту, наприклад («Колір», «Синій»)."""

    attribute: str
    value: str

    def __post_init__(self) -> None:
        attribute = _clean_str(self.attribute, max_len=ATTRIBUTE_MAX_LEN)
        value = _clean_str(self.value, max_len=ATTRIBUTE_MAX_LEN)
        if not attribute or not value:
            raise InvalidInput("Variant option needs a non-empty attribute and value.", field="options")
        object.__setattr__(self, "attribute", attribute)
        object.__setattr__(self, "value", value)

    def to_dict(self) -> Dict[str, str]:
        return {"attribute": self.attribute, "value": self.value}


def normalize_schema(schema: Iterable[str]) -> Tuple[str, ...]:
    """🗂️ Упорядкована схема атрибутів без порожніх і повторів."""
    result: List[str] = []
    seen = set()
    for raw in schema or ():
        name = _clean_str(raw, max_len=ATTRIBUTE_MAX_LEN)
        if not name:
            continue
        if name.casefold() in seen:
            raise InvalidInput(f"Attribute {name!r} is listed twice in the option schema.", field="option_schema")
        seen.add(name.casefold())
        result.append(name)
    return tuple(result)


def conform_options(options: Iterable[Any], schema: Sequence[str]) -> Tuple[VariantOption, ...]:
    """
    📐 Приводить опції варіанту до схеми товару.

    Приймає `VariantOption`, пари `(attribute, value)` або словники з ключами
    `attribute`/`value`. Атрибут поза схемою або повтор атрибуту → `InvalidInput`.
    Результат упорядковано за схемою. Порожня схема не обмежує атрибути.
    """
    parsed: List[VariantOption] = []
    for item in options or ():
        if isinstance(item, VariantOption):
            parsed.append(item)
        elif isinstance(item, dict):
            parsed.append(VariantOption(item.get("attribute", ""), item.get("value", "")))
        else:
            attribute, value = item
            parsed.append(VariantOption(attribute, value))

    seen = set()
    for option in parsed:
        if option.attribute in seen:
            raise InvalidInput(f"Attribute {option.attribute!r} appears twice.", field="options")
        seen.add(option.attribute)

    if not schema:
        return tuple(parsed)

    order = {name: index for index, name in enumerate(schema)}
    unknown = [o.attribute for o in parsed if o.attribute not in order]
    if unknown:
        raise InvalidInput(
            f"Attributes {unknown} are not part of the product option schema {list(schema)}.",
            field="options",
        )
    return tuple(sorted(parsed, key=lambda o: order[o.attribute]))


# ================================
# 🧩 ВАРІАНТ
# ================================
@dataclass
class Variant:
    """🧩 Варіант товару з власним залишком або списком серійних номерів."""

    name: str
    product_id: Optional[str] = None
    id: str = field(default_factory=new_id)
    sku: Optional[str] = None
    price: Optional[Decimal] = None
    stock: int = 0
    tracks_serials: bool = False                                    # 🔢 Залишок = кількість серійників
    serial_numbers: List[str] = field(default_factory=list)
    is_active: bool = True
    options: Tuple[VariantOption, ...] = ()

    def __post_init__(self) -> None:
        self.name = _clean_str(self.name, max_len=NAME_MAX_LEN)
        if not self.name:
            raise InvalidInput("Variant name must not be empty.", field="name")
        self.sku = _clean_sku(self.sku)
        self.price = _price("price", self.price)
        self.stock = _non_negative_int("stock", self.stock)
        self.serial_numbers = [str(s).strip() for s in self.serial_numbers]
        if any(not s for s in self.serial_numbers):
            raise InvalidInput("Serial numbers must not be blank.", field="serial_numbers")
        if len(set(self.serial_numbers)) != len(self.serial_numbers):
            raise InvalidInput("Serial numbers must be unique.", field="serial_numbers")
        if self.serial_numbers:
            self.tracks_serials = True                              # 🔗 Наявні серійники вмикають облік
        if self.tracks_serials:
            self.stock = len(self.serial_numbers)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "productId": self.product_id,
            "name": self.name,
            "sku": self.sku,
            "price": None if self.price is None else str(self.price),
            "stock": self.stock,
            "tracksSerials": self.tracks_serials,
            "serialNumbers": list(self.serial_numbers),
            "isActive": self.is_active,
            "options": [option.to_dict() for option in self.options],
        }


# ================================
# 📦 ТОВАР
# ================================
@dataclass
class Product:
    """📦 Товар; при `has_variations` залишок виводиться з активних варіантів."""

    name: str
    id: str = field(default_factory=new_id)
    sku: Optional[str] = None
    price: Decimal = ZERO
    stock: int = 0
    has_variations: bool = False
    option_schema: Tuple[str, ...] = ()
    variants: List[Variant] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.name = _clean_str(self.name, max_len=NAME_MAX_LEN)
        if not self.name:
            raise InvalidInput("Product name must not be empty.", field="name")
        self.sku = _clean_sku(self.sku)
        self.price = _price("price", self.price) or ZERO
        self.stock = _non_negative_int("stock", self.stock)
        self.option_schema = normalize_schema(self.option_schema)

    def find_variant(self, variant_id: str) -> Optional[Variant]:
        return next((v for v in self.variants if v.id == variant_id), None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "sku": self.sku,
            "price": str(self.price),
            "stock": self.stock,
            "hasVariations": self.has_variations,
            "optionSchema": list(self.option_schema),
            "variants": [variant.to_dict() for variant in self.variants],
        }


# ================================
# 🧬 ГЕНЕРАТОР ВАРІАНТІВ
# ================================
def generate_variants(
    product_name: str,
    attributes: Sequence[Tuple[str, Sequence[str]]],
    base_price: Optional[Number] = None,
) -> List[Variant]:
    """
    🧬 Будує варіанти для кожної комбінації значень атрибутів.

    Args:
        product_name: Назва товару, з якої складається назва варіанту.
        attributes: Впорядковані пари (атрибут, значення). Атрибути без значень пропускаються.
        base_price: Ціна, яку отримує кожен варіант.

    Returns:
        List[Variant]: Варіанти «{товар} {значення…}» з нульовим залишком, активні.
            Порожній список, якщо жоден атрибут не має значень.
    """
    name = _clean_str(product_name, max_len=NAME_MAX_LEN)
    axes: List[List[VariantOption]] = []
    for attribute, values in attributes:
        options = [VariantOption(attribute, value) for value in values if str(value or "").strip()]
        if options:
            axes.append(options)

    if not axes:
        logger.info("🧬 generate_variants: жодного атрибуту зі значеннями для %r", name)
        return []

    variants = [
        Variant(
            name=" ".join([name, *(option.value for option in combo)]),
            price=base_price,
            stock=0,
            is_active=True,
            options=tuple(combo),
        )
        for combo in itertools.product(*axes)
    ]
    logger.info("🧬 generate_variants: %s → %s варіантів", name, len(variants))
    return variants


__all__ = [
    "VariantOption",
    "Variant",
    "Product",
    "new_id",
    "normalize_schema",
    "conform_options",
    "generate_variants",
]
