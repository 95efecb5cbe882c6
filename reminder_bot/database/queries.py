"""
SQL-запросы к базе данных
"""

from typing import Optional, List, Iterable

from reminder_bot.database.connection import get_pool
from reminder_bot.database.models import UserProgress, ReminderEntry


USER_COLUMNS = "user_id, current_phase, current_day, paused_until, reminder_time"
REMINDER_COLUMNS = "phase, day, focus, resource, practice"

# Поля, которые можно передать в upsert_user_progress
UPSERT_FIELDS = ("current_phase", "current_day", "paused_until", "reminder_time")


# ============================================
# Users (прогресс)
# ============================================

async def get_user_progress(user_id: str) -> Optional[UserProgress]:
    """Получить прогресс пользователя"""
    pool = await get_pool()
    row = await pool.fetchrow(
        f"SELECT {USER_COLUMNS} FROM users WHERE user_id = $1",
        user_id
    )
    if row:
        return UserProgress(**dict(row))
    return None


async def save_user_progress(progress: UserProgress):
    """Сохранить изменённый прогресс (запись должна существовать)"""
    pool = await get_pool()
    await pool.execute(
        """
        UPDATE users
        SET current_phase = $2,
            current_day = $3,
            paused_until = $4,
            reminder_time = COALESCE($5, reminder_time),
            updated_at = NOW()
        WHERE user_id = $1
        """,
        progress.user_id,
        progress.current_phase,
        progress.current_day,
        progress.paused_until,
        progress.reminder_time
    )


async def upsert_user_progress(user_id: str, **fields) -> UserProgress:
    """
    Создать пользователя или обновить часть полей.
    Незаданные поля новой записи берутся из DEFAULT таблицы.
    """
    unknown = set(fields) - set(UPSERT_FIELDS)
    if unknown:
        raise ValueError(f"Неизвестные поля: {', '.join(sorted(unknown))}")

    columns = [name for name in UPSERT_FIELDS if name in fields]
    values = [fields[name] for name in columns]

    insert_columns = ", ".join(["user_id", *columns])
    placeholders = ", ".join(f"${i}" for i in range(1, len(columns) + 2))
    updates = ", ".join(
        [f"{name} = EXCLUDED.{name}" for name in columns] + ["updated_at = NOW()"]
    )

    pool = await get_pool()
    row = await pool.fetchrow(
        f"""
        INSERT INTO users ({insert_columns})
        VALUES ({placeholders})
        ON CONFLICT (user_id) DO UPDATE SET {updates}
        RETURNING {USER_COLUMNS}
        """,
        user_id, *values
    )
    return UserProgress(**dict(row))


# ============================================
# Reminders (каталог)
# ============================================

async def get_reminder(phase: int, day: int) -> Optional[ReminderEntry]:
    """Напоминание на (фаза, день). При дублях — первое по id"""
    pool = await get_pool()
    row = await pool.fetchrow(
        f"""
        SELECT {REMINDER_COLUMNS} FROM reminders
        WHERE phase = $1 AND day = $2
        ORDER BY id
        LIMIT 1
        """,
        phase, day
    )
    if row:
        return ReminderEntry(**dict(row))
    return None


async def get_reminders(
    phase: int,
    day_from: Optional[int] = None,
    day_to: Optional[int] = None
) -> List[ReminderEntry]:
    """
    Напоминания фазы, отсортированные по дню.
    day_from и day_to включительные, None — без ограничения.
    """
    pool = await get_pool()
    rows = await pool.fetch(
        f"""
        SELECT {REMINDER_COLUMNS} FROM reminders
        WHERE phase = $1
          AND ($2::int IS NULL OR day >= $2)
          AND ($3::int IS NULL OR day <= $3)
        ORDER BY day, id
        """,
        phase, day_from, day_to
    )
    return [ReminderEntry(**dict(row)) for row in rows]


async def insert_reminders(entries: Iterable[ReminderEntry]) -> int:
    """Загрузить напоминания в каталог, вернуть количество"""
    records = [
        (entry.phase, entry.day, entry.focus, entry.resource, entry.practice)
        for entry in entries
    ]
    if not records:
        return 0

    pool = await get_pool()
    await pool.executemany(
        f"INSERT INTO reminders ({REMINDER_COLUMNS}) VALUES ($1, $2, $3, $4, $5)",
        records
    )
    return len(records)


async def count_reminders() -> int:
    """Размер каталога"""
    pool = await get_pool()
    count = await pool.fetchval("SELECT COUNT(*) FROM reminders")
    return count or 0
