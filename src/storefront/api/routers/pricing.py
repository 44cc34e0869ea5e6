# 💸 storefront/api/routers/pricing.py
"""💸 Ендпоінти курсу валют, налаштувань і розрахунку ціни."""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from fastapi import APIRouter, Depends

# 🔠 Системні імпорти
from typing import Any, Dict

# 🧩 Внутрішні модулі проєкту
from storefront.api.deps import get_container, require_admin
from storefront.api.schemas import CalculateIn, ManualRateIn, SettingsPatchIn
from storefront.config.setup.container import Container
from storefront.shared.errors import InvalidInput

router = APIRouter(prefix="/pricing", tags=["pricing"])


def _manual_state(container: Container) -> Dict[str, Any]:
    provider = container.exchange_rate_provider
    manual = provider.manual_rate
    return {"manualEnabled": provider.manual_enabled, "manualRate": None if manual is None else str(manual)}


@router.get("/dollar-rate")
async def get_dollar_rate(container: Container = Depends(get_container)):
    rate = await container.exchange_rate_provider.get()
    return rate.to_dict()


@router.post("/dollar-rate/refresh", dependencies=[Depends(require_admin)])
async def refresh_dollar_rate(container: Container = Depends(get_container)):
    """Forced upstream fetch; responds 503 and keeps the cached value on failure."""
    rate = await container.exchange_rate_provider.refresh()
    return rate.to_dict()


@router.put("/dollar-rate/manual", dependencies=[Depends(require_admin)])
async def set_manual_dollar_rate(data: ManualRateIn, container: Container = Depends(get_container)):
    provider = container.exchange_rate_provider
    if data.rate is not None:
        await provider.set_manual_rate(data.rate, enabled=data.enabled)
    elif not data.enabled:
        await provider.disable_manual_rate()
    else:
        raise InvalidInput("A rate is required to enable the manual rate.", field="rate")
    return _manual_state(container)


@router.get("/settings")
def get_settings(container: Container = Depends(get_container)):
    return container.settings_store.public_view(container.exchange_rate_provider.peek())


@router.put("/settings", dependencies=[Depends(require_admin)])
def update_settings(data: SettingsPatchIn, container: Container = Depends(get_container)):
    container.settings_store.update(data.model_dump(exclude_none=True))
    return container.settings_store.public_view(container.exchange_rate_provider.peek())


@router.post("/calculate")
async def calculate_price(data: CalculateIn, container: Container = Depends(get_container)):
    breakdown = await container.quote_service.quote(
        cost=data.cost_price,
        cost_in_foreign=data.cost_in_foreign,
        discount_percent=data.discount_percent,
        margin_percent=data.margin_percent,
        max_installments=data.max_installments,
    )
    return breakdown.to_dict()
