"""
Логика прогресса пользователя по программе

Каждая операция: прочитать прогресс → решить → записать.
Сериализацию по пользователю обеспечивает диспетчер.
"""

import logging
import re
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional, Tuple

from reminder_bot.config import config
from reminder_bot.database import queries as db
from reminder_bot.database.models import UserProgress, ReminderEntry, DEFAULT_REMINDER_TIME
from reminder_bot.services import timefmt
from reminder_bot.services.errors import UserNotFound, ValidationError
from reminder_bot.states import UserState, Command, derive_state

logger = logging.getLogger(__name__)

RANGE_SPAN = 7
MAX_PAUSE_DAYS = 3650
# Верхняя граница INTEGER в PostgreSQL
MAX_DB_INT = 2 ** 31 - 1
SECONDS_PER_DAY = 24 * 60 * 60

INT_RE = re.compile(r"^[+-]?\d+$")


@dataclass(frozen=True)
class StatusReport:
    """Ответ на /status"""
    phase: int
    day: int
    state: UserState
    paused_until: Optional[datetime] = None


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ============================================
# Чистые функции
# ============================================

def next_day(progress: UserProgress) -> UserProgress:
    """Следующий день. Фаза не меняется, границу фазы не проверяем"""
    return replace(progress, current_day=progress.current_day + 1)


def pause_deadline(now: datetime, days: int) -> datetime:
    return now + timedelta(seconds=days * SECONDS_PER_DAY)


def day_window(current_day: int, direction: Command, span: int = RANGE_SPAN) -> Tuple[int, int]:
    """
    Включительные границы дней для prev7/next7. Текущий день не входит.
    prev7: [cur - span, cur - 1], next7: [cur + 1, cur + span]
    """
    if direction == Command.PREV7:
        return current_day - span, current_day - 1
    if direction == Command.NEXT7:
        return current_day + 1, current_day + span
    raise ValueError(f"Неизвестное направление: {direction}")


def _parse_int(raw: Optional[str], usage: str) -> int:
    if raw is None or not INT_RE.match(raw.strip()):
        raise ValidationError(usage)
    return int(raw.strip())


def parse_positive_int(raw: Optional[str], usage: str, maximum: int = MAX_DB_INT) -> int:
    value = _parse_int(raw, usage)
    if value <= 0 or value > maximum:
        raise ValidationError(usage)
    return value


def parse_non_negative_int(raw: Optional[str], usage: str, maximum: int = MAX_DB_INT) -> int:
    value = _parse_int(raw, usage)
    if value < 0 or value > maximum:
        raise ValidationError(usage)
    return value


# ============================================
# Операции над хранилищем
# ============================================

class ProgressionEngine:
    """
    Операции по командам пользователя.

    store: объект с функциями хранилища (по умолчанию модуль queries),
    clock: источник текущего времени (aware UTC).
    """

    def __init__(self, store=db, clock: Callable[[], datetime] = utcnow):
        self.store = store
        self.clock = clock

    async def _require_user(self, user_id: str) -> UserProgress:
        progress = await self.store.get_user_progress(user_id)
        if progress is None:
            raise UserNotFound(user_id)
        return progress

    async def start(self, user_id: str) -> Tuple[UserProgress, bool]:
        """Зарегистрировать пользователя. Возвращает (прогресс, создан ли)"""
        progress = await self.store.get_user_progress(user_id)
        if progress is not None:
            return progress, False

        progress = await self.store.upsert_user_progress(
            user_id,
            current_phase=config.START_PHASE,
            current_day=config.START_DAY
        )
        logger.info(f"Новый пользователь: {user_id} (фаза {progress.current_phase}, день {progress.current_day})")
        return progress, True

    async def remind_now(self, user_id: str) -> Optional[ReminderEntry]:
        """Напоминание на текущий день или None, если в каталоге нет записи"""
        progress = await self._require_user(user_id)
        return await self.store.get_reminder(progress.current_phase, progress.current_day)

    async def skip(self, user_id: str) -> int:
        progress = next_day(await self._require_user(user_id))
        await self.store.save_user_progress(progress)
        logger.info(f"Пропуск дня: {user_id} -> день {progress.current_day}")
        return progress.current_day

    async def pause_for(self, user_id: str, raw_days: Optional[str]) -> int:
        """Пауза на N дней. Проверка аргумента до обращения к хранилищу"""
        days = parse_positive_int(
            raw_days,
            f"Please give a positive number of days (at most {MAX_PAUSE_DAYS}), e.g. /pausefor 3",
            maximum=MAX_PAUSE_DAYS
        )
        progress = await self._require_user(user_id)
        progress = replace(progress, paused_until=pause_deadline(self.clock(), days))
        await self.store.save_user_progress(progress)
        logger.info(f"Пауза: {user_id} до {progress.paused_until.isoformat()}")
        return days

    async def resume(self, user_id: str):
        """Снять паузу (даже если её не было)"""
        progress = await self._require_user(user_id)
        await self.store.save_user_progress(replace(progress, paused_until=None))
        logger.info(f"Напоминания возобновлены: {user_id}")

    async def status(self, user_id: str) -> StatusReport:
        progress = await self._require_user(user_id)
        state = derive_state(progress, self.clock())
        return StatusReport(
            phase=progress.current_phase,
            day=progress.current_day,
            state=state,
            paused_until=progress.paused_until if state == UserState.PAUSED else None
        )

    async def list_range(
        self,
        user_id: str,
        direction: Command,
        span: int = RANGE_SPAN
    ) -> List[ReminderEntry]:
        """Напоминания текущей фазы за span дней до/после текущего дня"""
        progress = await self._require_user(user_id)
        day_from, day_to = day_window(progress.current_day, direction, span)
        return await self.store.get_reminders(progress.current_phase, day_from, day_to)

    async def full_phase(
        self,
        user_id: str,
        raw_phase: Optional[str]
    ) -> Tuple[int, List[ReminderEntry]]:
        """Все напоминания фазы. Возвращает (фаза, напоминания)"""
        phase = parse_non_negative_int(
            raw_phase,
            "Please give a phase number, e.g. /fullphase 1"
        )
        await self._require_user(user_id)
        return phase, await self.store.get_reminders(phase)

    async def set_time(self, user_id: str, raw: Optional[str]) -> str:
        """Сохранить время HH:MM, вернуть его в 12-часовом виде"""
        reminder_time = timefmt.validate(raw)
        if reminder_time is None:
            raise ValidationError(
                "Invalid time format. Use HH:MM in 24-hour format, e.g. /timeset 20:30"
            )

        fields = {"reminder_time": reminder_time.as_24h()}
        if await self.store.get_user_progress(user_id) is None:
            # Новая запись начинает с той же точки, что и /start
            fields.update(current_phase=config.START_PHASE, current_day=config.START_DAY)

        await self.store.upsert_user_progress(user_id, **fields)
        logger.info(f"Время напоминания: {user_id} -> {reminder_time.as_24h()}")
        return reminder_time.as_12h()

    async def get_time(self, user_id: str) -> str:
        """Время напоминания в 12-часовом виде (по умолчанию 10:00)"""
        progress = await self.store.get_user_progress(user_id)
        stored = progress.reminder_time if progress else None

        reminder_time = timefmt.validate(stored) or timefmt.validate(DEFAULT_REMINDER_TIME)
        return reminder_time.as_12h()
