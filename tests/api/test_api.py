"""
🧪 test_api.py: HTTP-контракт через FastAPI TestClient

- Курс, ручний курс, примусове оновлення
- Розрахунок ціни та єдиний формат помилок
- Адмін-доступ за X-Admin-Token
- Каталог: товари, варіанти, серійні номери
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from storefront.api import create_app
from storefront.config import ConfigService
from storefront.config.setup.container import Container
from storefront.shared.errors import RateSourceError

ADMIN = {"X-Admin-Token": "secret"}


class StubRateSource:
    def __init__(self, rate: str = "5.00", fail: bool = False):
        self.rate = rate
        self.fail = fail
        self.calls = 0

    async def fetch_rate(self) -> Decimal:
        self.calls += 1
        if self.fail:
            raise RateSourceError("upstream down", status_code=502)
        return Decimal(self.rate)

    async def close(self) -> None:
        pass


def _config(admin_token="secret") -> ConfigService:
    return ConfigService.from_dict(
        {
            "pricing": {
                "tax_rate": "15",
                "processor_rate": "4",
                "processor_fixed_fee": "0.5",
                "default_profit_margin": "30",
            },
            "exchange_rate": {"ttl_sec": 3600, "timeout_sec": 1, "retry_attempts": 1, "retry_delay_sec": 0},
            "api": {"admin_token": admin_token},
        }
    )


@pytest.fixture
def source() -> StubRateSource:
    return StubRateSource()


@pytest.fixture
def client(source):
    app = create_app(Container(_config(), rate_source=source))
    with TestClient(app) as test_client:
        yield test_client


# -------------------
# 💱 Курс
# -------------------

def test_dollar_rate_is_fetched_once_and_cached(client, source):
    first = client.get("/pricing/dollar-rate").json()
    second = client.get("/pricing/dollar-rate").json()

    assert first["rate"] == "5.0000"
    assert first["source"] == "fresh"
    assert second["updatedAt"] == first["updatedAt"]
    assert source.calls == 1


def test_rate_unavailable_is_503(source, client):
    source.fail = True
    response = client.get("/pricing/dollar-rate")

    assert response.status_code == 503
    assert response.json()["error"] == "rate_unavailable"


def test_refresh_failure_keeps_cached_rate(client, source):
    client.get("/pricing/dollar-rate")
    source.fail = True

    response = client.post("/pricing/dollar-rate/refresh", headers=ADMIN)

    assert response.status_code == 503
    assert response.json()["error"] == "rate_refresh_failed"
    assert client.get("/pricing/settings").json()["lastDollarRate"] == "5.0000"


def test_manual_rate_round_trip(client, source):
    response = client.put("/pricing/dollar-rate/manual", json={"rate": "5.5"}, headers=ADMIN)
    assert response.json() == {"manualEnabled": True, "manualRate": "5.5"}

    rate = client.get("/pricing/dollar-rate").json()
    assert rate["source"] == "manual"
    assert rate["rate"] == "5.5"
    assert source.calls == 0

    response = client.put("/pricing/dollar-rate/manual", json={"enabled": False}, headers=ADMIN)
    assert response.json() == {"manualEnabled": False, "manualRate": "5.5"}
    assert client.get("/pricing/dollar-rate").json()["source"] == "fresh"


def test_manual_rate_must_be_positive(client):
    response = client.put("/pricing/dollar-rate/manual", json={"rate": "0"}, headers=ADMIN)
    assert response.status_code == 422
    assert response.json()["details"] == {"field": "rate"}


# -------------------
# 💸 Розрахунок
# -------------------

def test_calculate_local_cost(client, source):
    body = client.post("/pricing/calculate", json={"costPrice": "1000"}).json()

    assert body["deviceValue"] == "1555.30"
    assert body["realValue"] == "1300.00"
    assert body["profit"] == "300.00"
    assert body["profitMargin"] == "23.08"
    assert body["installments"][0]["value"] == "1555.30"
    assert source.calls == 0


def test_calculate_foreign_cost_uses_current_rate(client):
    body = client.post("/pricing/calculate", json={"costInForeign": "200", "discountPercent": "10"}).json()

    assert body["costPrice"] == "1000.00"
    assert body["dollarRate"] == "5.0000"
    assert body["deviceValue"] == "1399.77"


def test_calculate_honours_per_call_installment_limit(client):
    body = client.post("/pricing/calculate", json={"costPrice": "1000", "maxInstallments": 2}).json()

    assert [o["installments"] for o in body["installments"]] == [1, 2]
    assert all(o["noFee"] is True for o in body["installments"])
    assert client.get("/pricing/settings").json()["maxInstallments"] == 12


@pytest.mark.parametrize(
    "payload, field",
    [
        ({"costPrice": "100", "costInForeign": "20"}, "cost"),
        ({}, "cost"),
        ({"costPrice": "100", "discountPercent": "120"}, "discount_percent"),
        ({"costPrice": "-1"}, "cost"),
        ({"costPrice": "100", "maxInstallments": 0}, "max_installments"),
    ],
)
def test_calculate_rejects_invalid_input(client, payload, field):
    response = client.post("/pricing/calculate", json=payload)

    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "invalid_input"
    assert body["details"]["field"] == field


def test_malformed_body_uses_same_error_shape(client):
    response = client.post("/pricing/calculate", json={"costPrice": "abc"})

    assert response.status_code == 422
    assert response.json()["error"] == "invalid_input"
    assert set(response.json()) == {"error", "message", "details"}


# -------------------
# ⚙️ Налаштування та доступ
# -------------------

def test_settings_update_requires_admin(client):
    assert client.put("/pricing/settings", json={"maxInstallments": 6}).status_code == 401

    wrong = client.put("/pricing/settings", json={"maxInstallments": 6}, headers={"X-Admin-Token": "nope"})
    assert wrong.status_code == 403
    assert wrong.json()["error"] == "forbidden"

    ok = client.put("/pricing/settings", json={"maxInstallments": 6}, headers=ADMIN)
    assert ok.status_code == 200
    assert ok.json()["maxInstallments"] == 6
    assert client.get("/pricing/settings").json()["maxInstallments"] == 6


def test_invalid_settings_are_rejected_and_kept(client):
    response = client.put("/pricing/settings", json={"noFeeInstallments": 13}, headers=ADMIN)

    assert response.status_code == 422
    assert response.json()["details"]["field"] == "no_fee_installments"
    assert client.get("/pricing/settings").json()["noFeeInstallments"] == 3


def test_admin_endpoints_are_closed_without_configured_token(source):
    app = create_app(Container(_config(admin_token=None), rate_source=source))
    with TestClient(app) as client:
        response = client.put("/pricing/settings", json={"maxInstallments": 6}, headers=ADMIN)
    assert response.status_code == 403


# -------------------
# 📦 Каталог
# -------------------

def _create_phone(client) -> dict:
    response = client.post(
        "/products",
        json={
            "name": "iPhone 15",
            "sku": "IP15",
            "variants": [
                {"name": "iPhone 15 Azul", "serialNumbers": ["SN-1"]},
                {"name": "iPhone 15 Preto", "stock": 4},
            ],
        },
        headers=ADMIN,
    )
    assert response.status_code == 201
    return response.json()


def test_catalog_flow(client):
    phone = _create_phone(client)
    blue, black = phone["variants"]
    assert phone["hasVariations"] is True
    assert phone["stock"] == 5

    added = client.post(f"/variants/{blue['id']}/serial-numbers", json={"serialNumber": "SN-2"}, headers=ADMIN)
    assert added.status_code == 201
    assert added.json()["variant"]["stock"] == 2
    assert added.json()["productStock"] == 6

    duplicate = client.post(f"/variants/{black['id']}/serial-numbers", json={"serialNumber": "SN-1"}, headers=ADMIN)
    assert duplicate.status_code == 409
    assert duplicate.json()["error"] == "duplicate_serial"

    missing = client.delete(f"/variants/{blue['id']}/serial-numbers/SN-404", headers=ADMIN)
    assert missing.status_code == 404
    assert missing.json()["error"] == "serial_not_found"

    stock = client.patch(f"/variants/{black['id']}/stock", json={"stock": 10}, headers=ADMIN)
    assert stock.json()["productStock"] == 12

    inactive = client.patch(f"/variants/{black['id']}/active", json={"isActive": False}, headers=ADMIN)
    assert inactive.json()["productStock"] == 2

    removed = client.delete(f"/variants/{blue['id']}/serial-numbers/SN-1", headers=ADMIN)
    assert removed.json()["productStock"] == 1
    assert client.get(f"/products/{phone['id']}").json()["stock"] == 1


def test_generate_variants_endpoint(client):
    shirt = client.post("/products", json={"name": "Camiseta", "price": "59.90"}, headers=ADMIN).json()

    response = client.post(
        f"/products/{shirt['id']}/variants/generate",
        json={"attributes": [{"name": "Cor", "values": ["Azul", "Preto"]}, {"name": "Tamanho", "values": ["P"]}]},
        headers=ADMIN,
    )

    assert response.status_code == 201
    body = response.json()
    assert [v["name"] for v in body["created"]] == ["Camiseta Azul P", "Camiseta Preto P"]
    assert body["product"]["optionSchema"] == ["Cor", "Tamanho"]


def test_catalog_errors(client):
    assert client.get("/products/missing").json()["error"] == "product_not_found"
    assert client.patch("/variants/missing/stock", json={"stock": 1}, headers=ADMIN).status_code == 404
    assert client.post("/products", json={"name": "x"}).status_code == 401

    _create_phone(client)
    conflict = client.post("/products", json={"name": "Outro", "sku": "IP15"}, headers=ADMIN)
    assert conflict.status_code == 409
    assert conflict.json()["error"] == "duplicate_sku"
