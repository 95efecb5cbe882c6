"""
Пул соединений PostgreSQL
"""

import logging

import asyncpg
from typing import Optional

from reminder_bot.config import config
from reminder_bot.services.errors import StoreUnavailable

logger = logging.getLogger(__name__)


# Глобальный пул соединений (один на процесс)
_pool: Optional[asyncpg.Pool] = None


async def get_pool() -> asyncpg.Pool:
    """
    Получить пул соединений (создаёт при первом вызове).
    Если БД недоступна, StoreUnavailable; следующий вызов попробует снова.
    """
    global _pool

    if _pool is None:
        try:
            _pool = await asyncpg.create_pool(
                config.DATABASE_URL,
                min_size=config.DB_POOL_MIN_SIZE,
                max_size=config.DB_POOL_MAX_SIZE
            )
        except (OSError, asyncpg.PostgresError, asyncpg.InterfaceError) as e:
            logger.error(f"Не удалось подключиться к БД: {e!r}")
            raise StoreUnavailable(f"PostgreSQL недоступен: {e}") from e

    return _pool


async def close_pool():
    """Закрыть пул соединений"""
    global _pool

    if _pool:
        await _pool.close()
        _pool = None
