"""
Автоматические миграции базы данных

Применённые файлы записываются в schema_migrations, поэтому
повторный запуск выполняет только новые миграции.
"""

import logging
from pathlib import Path
from typing import Optional

from reminder_bot.database.connection import get_pool

logger = logging.getLogger(__name__)

# Путь к папке с миграциями
MIGRATIONS_DIR = Path(__file__).resolve().parent.parent.parent / "migrations"


async def run_migrations(migrations_dir: Optional[Path] = None) -> list[str]:
    """Выполнить новые SQL-миграции из папки migrations/, вернуть их имена"""
    migrations_dir = migrations_dir or MIGRATIONS_DIR
    pool = await get_pool()

    if not migrations_dir.exists():
        logger.warning(f"Папка миграций не найдена: {migrations_dir}")
        return []

    # Сортировка по имени: 001_..., 002_...
    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("Миграции не найдены")
        return []

    applied_now = []

    async with pool.acquire() as conn:
        await conn.execute(
            """
            CREATE TABLE IF NOT EXISTS schema_migrations (
                name TEXT PRIMARY KEY,
                applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
            )
            """
        )
        rows = await conn.fetch("SELECT name FROM schema_migrations")
        applied = {row["name"] for row in rows}

        for sql_file in sql_files:
            if sql_file.name in applied:
                continue

            logger.info(f"Выполняю миграцию: {sql_file.name}")
            sql_content = sql_file.read_text(encoding="utf-8")
            try:
                async with conn.transaction():
                    await conn.execute(sql_content)
                    await conn.execute(
                        "INSERT INTO schema_migrations (name) VALUES ($1)",
                        sql_file.name
                    )
            except Exception as e:
                logger.error(f"✗ Ошибка в {sql_file.name}: {e}")
                raise
            logger.info(f"✓ Миграция {sql_file.name} выполнена")
            applied_now.append(sql_file.name)

    return applied_now
