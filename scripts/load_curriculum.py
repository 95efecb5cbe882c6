#!/usr/bin/env python3
"""
Загрузка программы (каталога напоминаний) из JSON

Использование:
    python scripts/load_curriculum.py curriculum.json

Формат файла — список объектов:
    [{"phase": 1, "day": 1, "focus": "...", "resource": "...", "practice": "..."}, ...]
"""

import asyncio
import json
import sys
from pathlib import Path

# Добавляем корневую директорию в PYTHONPATH
ROOT_DIR = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT_DIR))

from reminder_bot.database import queries as db
from reminder_bot.database.connection import get_pool, close_pool
from reminder_bot.database.migrations import run_migrations
from reminder_bot.database.models import ReminderEntry


def parse_entries(items: list) -> list[ReminderEntry]:
    """Проверить записи файла и превратить их в ReminderEntry"""
    entries = []
    for index, item in enumerate(items):
        try:
            phase = int(item["phase"])
            day = int(item["day"])
        except (KeyError, TypeError, ValueError):
            raise ValueError(f"Запись #{index}: нужны целые phase и day")

        if phase < 0 or day < 0:
            raise ValueError(f"Запись #{index}: phase и day не могут быть отрицательными")

        entries.append(ReminderEntry(
            phase=phase,
            day=day,
            focus=str(item.get("focus", "")),
            resource=str(item.get("resource", "")),
            practice=str(item.get("practice", "")),
        ))
    return entries


async def load_curriculum(path: Path):
    items = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(items, list):
        print("❌ Ошибка: ожидается JSON-список записей")
        sys.exit(1)

    try:
        entries = parse_entries(items)
    except ValueError as e:
        print(f"❌ Ошибка: {e}")
        sys.exit(1)

    try:
        await get_pool()
        await run_migrations()
        inserted = await db.insert_reminders(entries)
        total = await db.count_reminders()
        print(f"✅ Загружено напоминаний: {inserted} (всего в каталоге: {total})")
    finally:
        await close_pool()


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Использование: python scripts/load_curriculum.py <файл.json>")
        sys.exit(1)

    asyncio.run(load_curriculum(Path(sys.argv[1])))
