"""
Конфигурация бота — загрузка переменных окружения
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Загружаем .env из корня проекта
BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")


class Config:
    """Конфигурация приложения"""

    # --- Telegram ---
    BOT_TOKEN: str = os.getenv("BOT_TOKEN", "")

    # --- Webhook (пустой WEBHOOK_URL → polling) ---
    WEBHOOK_URL: str = os.getenv("WEBHOOK_URL", "")
    WEBHOOK_LISTEN: str = os.getenv("WEBHOOK_LISTEN", "0.0.0.0")
    WEBHOOK_PORT: int = int(os.getenv("WEBHOOK_PORT", "8443"))
    WEBHOOK_PATH: str = os.getenv("WEBHOOK_PATH", "api/bot")

    # --- Database ---
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")
    DB_POOL_MIN_SIZE: int = int(os.getenv("DB_POOL_MIN_SIZE", "2"))
    DB_POOL_MAX_SIZE: int = int(os.getenv("DB_POOL_MAX_SIZE", "10"))

    # --- Settings ---
    TIMEZONE: str = os.getenv("TIMEZONE", "UTC")
    START_PHASE: int = int(os.getenv("START_PHASE", "1"))
    START_DAY: int = int(os.getenv("START_DAY", "1"))

    @classmethod
    def validate(cls) -> list[str]:
        """Проверка обязательных переменных"""
        errors = []

        if not cls.BOT_TOKEN:
            errors.append("BOT_TOKEN не задан")
        if not cls.DATABASE_URL:
            errors.append("DATABASE_URL не задан")
        if cls.START_PHASE < 0 or cls.START_DAY < 0:
            errors.append("START_PHASE и START_DAY не могут быть отрицательными")

        return errors


# Синглтон конфигурации
config = Config()
