"""🧪 ConfigService: YAML + змінні середовища, крапкові ключі."""

import pytest

from storefront.config import ConfigService
from storefront.config.config_service import CONFIG_PATH_ENV


@pytest.fixture(autouse=True)
def fresh_singleton():
    ConfigService.reset()
    yield
    ConfigService.reset()


def test_get_by_dotted_key():
    cfg = ConfigService.from_dict({"pricing": {"tax_rate": "15"}, "api": {"admin_token": None}})

    assert cfg.get("pricing.tax_rate") == "15"
    assert cfg.get("pricing.missing", "x") == "x"
    assert cfg.get("api.admin_token", "fallback") is None


def test_from_dict_copies_input():
    source = {"pricing": {"tax_rate": "15"}}
    cfg = ConfigService.from_dict(source)
    source["pricing"]["tax_rate"] = "99"
    assert cfg.get("pricing.tax_rate") == "15"


def test_yaml_is_loaded_and_env_overrides_it(tmp_path, monkeypatch):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        "pricing:\n  tax_rate: '10'\napi:\n  admin_token: from-yaml\nexchange_rate:\n  ttl_sec: 60\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(CONFIG_PATH_ENV, str(config_file))
    monkeypatch.setenv("ADMIN_TOKEN", "from-env")
    monkeypatch.setenv("EXCHANGE_RATE_URL", "")

    cfg = ConfigService()

    assert cfg.get("pricing.tax_rate") == "10"
    assert cfg.get("api.admin_token") == "from-env"
    assert cfg.get("exchange_rate.ttl_sec") == 60
    assert cfg.get("exchange_rate.url") is None
    assert ConfigService() is cfg


def test_missing_yaml_falls_back_to_env_only(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(CONFIG_PATH_ENV, str(tmp_path / "absent.yaml"))
    monkeypatch.setenv("MANUAL_DOLLAR_RATE", "5.5")

    cfg = ConfigService()

    assert cfg.get("exchange_rate.manual_rate") == "5.5"
    assert cfg.get("pricing") is None


def test_bundled_yaml_has_pricing_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)
    for name in ("ADMIN_TOKEN", "EXCHANGE_RATE_URL", "EXCHANGE_RATE_CACHE_FILE", "MANUAL_DOLLAR_RATE", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    cfg = ConfigService()

    assert cfg.get("pricing.max_installments") == 12
    assert cfg.get("exchange_rate.pair") == "USDBRL"
