# ⚙️ config_service.py
"""
⚙️ config_service.py: Сервіс для доступу до статичної конфігурації.

🔹 Клас `ConfigService`:
- Завантажує конфігурацію з config.yaml та змінних середовища (.env).
- Надає єдиний метод .get() для доступу до будь-якого параметра.
- Працює як Singleton.
"""

# 🌐 Зовнішні бібліотеки
import yaml                                  # 📦 YAML-парсинг
from dotenv import load_dotenv              # 🔐 Завантаження змінних із .env

# 🔠 Системні імпорти
import copy                                 # 🧬 Незалежні копії вузлів
import logging                              # 🧾 Логування
import os                                   # 📁 Доступ до змінних середовища
from pathlib import Path                    # 📁 Побудова шляху до файлів
from typing import Any, Dict, Optional      # 🧩 Типізація

# 🔐 Змінна середовища → крапковий ключ конфігу
ENV_KEYS: Dict[str, str] = {
    "ADMIN_TOKEN": "api.admin_token",
    "EXCHANGE_RATE_URL": "exchange_rate.url",
    "EXCHANGE_RATE_CACHE_FILE": "exchange_rate.cache_file",
    "MANUAL_DOLLAR_RATE": "exchange_rate.manual_rate",
    "LOG_LEVEL": "logging.level",
}
CONFIG_PATH_ENV = "STOREFRONT_CONFIG"        # 📄 Альтернативний шлях до config.yaml


# ============================
# ⚙️ СЕРВІС ДОСТУПУ ДО КОНФІГІВ
# ============================
class ConfigService:
    """
    ⚙️ Надає доступ до всіх статичних конфігураційних параметрів проєкту.
    Працює як Singleton: конфігурація зчитується лише один раз.
    """

    _instance: Optional["ConfigService"] = None   # 🧩 Singleton-екземпляр

    def __new__(cls):
        # ✅ Патерн Singleton: створюємо лише один екземпляр
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._config = {}
            instance._load_all_configs()
            cls._instance = instance
            logging.debug("🔄 Singleton ConfigService створено і конфігурація завантажена")
        return cls._instance

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConfigService":
        """🧪 Окремий екземпляр із готового словника (без файлів і .env), поза Singleton."""
        instance = super().__new__(cls)
        instance._config = copy.deepcopy(data or {})
        return instance

    @classmethod
    def reset(cls) -> None:
        """♻️ Скидає Singleton; наступний виклик перечитає джерела."""
        cls._instance = None

    def _load_all_configs(self) -> None:
        """
        📥 Завантажує всі джерела конфігурації в один словник.
        Пріоритет (пізніше перекриває раніше): config.yaml → змінні середовища.
        """

        # --- 1. YAML-файл ---
        yaml_path = Path(os.getenv(CONFIG_PATH_ENV) or Path(__file__).parent / "config.yaml")
        try:
            logging.debug("📘 Завантаження %s", yaml_path)
            with open(yaml_path, "r", encoding="utf-8") as f:
                self._deep_update(self._config, yaml.safe_load(f) or {})
        except (FileNotFoundError, yaml.YAMLError) as e:
            logging.warning(f"⚠️ Не вдалося завантажити config.yaml: {e}")

        # --- 2. .env та змінні середовища ---
        logging.debug("🔐 Завантаження змінних з .env")
        load_dotenv()  # 🔐 Ініціалізує змінні середовища з файлу .env
        env_vars = {key: os.getenv(name) for name, key in ENV_KEYS.items()}
        env_vars = {key: value for key, value in env_vars.items() if value not in (None, "")}
        self._deep_update(self._config, self._unflatten_dict(env_vars))

        logging.info("✅ Конфігурацію успішно завантажено.")

    def get(self, key: str, default: Any = None) -> Any:
        """
        🔑 Отримує значення конфігурації за ключем (наприклад: 'exchange_rate.ttl_sec').

        Args:
            key (str): Ключ у форматі з крапкою.
            default (Any): Значення за замовчуванням, якщо ключ не знайдено.

        Returns:
            Any: Значення параметра або default.
        """
        value: Any = self._config
        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]                 # 🔎 Переходимо глибше в структуру
            else:
                logging.debug(f"❓ Ключ '{key}' не знайдено, повертаємо значення за замовчуванням")
                return default
        return value

    def as_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._config)

    # ===============================
    # 🔧 ДОПОМІЖНІ МЕТОДИ ЗЛИТТЯ КОНФІГІВ
    # ===============================

    @staticmethod
    def _unflatten_dict(d: Dict[str, Any]) -> Dict[str, Any]:
        """
        🔁 Перетворює ключі з крапками в ієрархічний словник.
        'api.admin_token' → {'api': {'admin_token': ...}}
        """
        result: Dict[str, Any] = {}
        for key, value in d.items():
            parts = key.split('.')
            d_ref = result
            for part in parts[:-1]:
                d_ref = d_ref.setdefault(part, {})
            d_ref[parts[-1]] = value
        return result

    def _deep_update(self, source: Dict, overrides: Dict) -> None:
        """
        🔁 Рекурсивно обʼєднує два словника (оновлення значень).
        Вкладені словники обʼєднує глибоко.
        """
        for key, value in overrides.items():
            if (
                isinstance(value, dict) and
                key in source and
                isinstance(source[key], dict)
            ):
                self._deep_update(source[key], value)  # 🔁 Глибоке обʼєднання
            else:
                source[key] = value                    # 🧩 Перезапис простого значення


__all__ = ["ConfigService", "ENV_KEYS", "CONFIG_PATH_ENV"]
