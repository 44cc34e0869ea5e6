# 📦 storefront/api/routers/catalog.py
"""📦 Ендпоінти товарів, варіантів, залишків і серійних номерів."""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from fastapi import APIRouter, Depends

# 🧩 Внутрішні модулі проєкту
from storefront.api.deps import get_container, require_admin
from storefront.api.schemas import ActiveIn, GenerateVariantsIn, ProductIn, SerialIn, StockIn, VariantIn
from storefront.config.setup.container import Container
from storefront.domain.catalog import Product, Variant

router = APIRouter(tags=["catalog"])


def _to_variant(data: VariantIn) -> Variant:
    return Variant(
        name=data.name,
        sku=data.sku,
        price=data.price,
        stock=data.stock,
        serial_numbers=list(data.serial_numbers),
        tracks_serials=data.tracks_serials,
        is_active=data.is_active,
        options=tuple((o.attribute, o.value) for o in data.options),
    )


def _variant_response(product: Product, variant: Variant) -> dict:
    return {"variant": variant.to_dict(), "productStock": product.stock, "product": product.to_dict()}


# ================================
# 📦 ТОВАРИ
# ================================
@router.post("/products", status_code=201, dependencies=[Depends(require_admin)])
def create_product(data: ProductIn, container: Container = Depends(get_container)):
    variants = [_to_variant(v) for v in data.variants]
    product = container.catalog_service.create_product(
        name=data.name,
        sku=data.sku,
        price=data.price,
        stock=data.stock,
        has_variations=data.has_variations or bool(variants),
        option_schema=data.option_schema,
        variants=variants,
    )
    return product.to_dict()


@router.get("/products/{product_id}")
def get_product(product_id: str, container: Container = Depends(get_container)):
    return container.catalog_service.get_product(product_id).to_dict()


@router.patch("/products/{product_id}/stock", dependencies=[Depends(require_admin)])
def update_product_stock(product_id: str, data: StockIn, container: Container = Depends(get_container)):
    return container.catalog_service.update_product_stock(product_id, data.stock).to_dict()


# ================================
# 🧩 ВАРІАНТИ
# ================================
@router.post("/products/{product_id}/variants", status_code=201, dependencies=[Depends(require_admin)])
def add_variant(product_id: str, data: VariantIn, container: Container = Depends(get_container)):
    product, variant = container.catalog_service.add_variant(
        product_id,
        name=data.name,
        sku=data.sku,
        price=data.price,
        stock=data.stock,
        serial_numbers=data.serial_numbers,
        tracks_serials=data.tracks_serials,
        is_active=data.is_active,
        options=[(o.attribute, o.value) for o in data.options],
    )
    return _variant_response(product, variant)


@router.post("/products/{product_id}/variants/generate", status_code=201, dependencies=[Depends(require_admin)])
def generate_variants(product_id: str, data: GenerateVariantsIn, container: Container = Depends(get_container)):
    product, created = container.catalog_service.generate_variants_for(
        product_id,
        [(a.name, a.values) for a in data.attributes],
        base_price=data.base_price,
    )
    return {"created": [v.to_dict() for v in created], "product": product.to_dict()}


@router.patch("/variants/{variant_id}/stock", dependencies=[Depends(require_admin)])
def update_variant_stock(variant_id: str, data: StockIn, container: Container = Depends(get_container)):
    product, variant = container.catalog_service.update_variant_stock(variant_id, data.stock)
    return _variant_response(product, variant)


@router.patch("/variants/{variant_id}/active", dependencies=[Depends(require_admin)])
def set_variant_active(variant_id: str, data: ActiveIn, container: Container = Depends(get_container)):
    product, variant = container.catalog_service.set_variant_active(variant_id, data.is_active)
    return _variant_response(product, variant)


# ================================
# 🔢 СЕРІЙНІ НОМЕРИ
# ================================
@router.post("/variants/{variant_id}/serial-numbers", status_code=201, dependencies=[Depends(require_admin)])
def add_serial_number(variant_id: str, data: SerialIn, container: Container = Depends(get_container)):
    product, variant = container.catalog_service.add_serial(variant_id, data.serial_number)
    return _variant_response(product, variant)


@router.delete("/variants/{variant_id}/serial-numbers/{serial}", dependencies=[Depends(require_admin)])
def remove_serial_number(variant_id: str, serial: str, container: Container = Depends(get_container)):
    product, variant = container.catalog_service.remove_serial(variant_id, serial)
    return _variant_response(product, variant)
