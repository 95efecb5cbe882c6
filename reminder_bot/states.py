"""
Состояния пользователя и команды бота
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from reminder_bot.database.models import UserProgress


class UserState(str, Enum):
    """Состояния пользователя (вычисляются, в БД не хранятся)"""

    NO_USER = "NO_USER"    # Нет записи о прогрессе
    ACTIVE = "ACTIVE"      # Напоминания включены
    PAUSED = "PAUSED"      # paused_until в будущем


class Command(str, Enum):
    """Команды, которые понимает диспетчер"""

    START = "start"
    HELP = "help"
    REMIND_NOW = "remind_now"
    SKIP = "skip"
    PAUSE_FOR = "pause_for"
    RESUME = "resume"
    STATUS = "status"
    PREV7 = "prev7"
    NEXT7 = "next7"
    FULL_PHASE = "full_phase"
    SET_TIME = "set_time"
    REMIND_TIME = "remind_time"


def is_paused(paused_until: Optional[datetime], now: datetime) -> bool:
    """Пауза активна, только если paused_until строго позже now"""
    return paused_until is not None and paused_until > now


def derive_state(progress: Optional[UserProgress], now: datetime) -> UserState:
    """Вычислить состояние пользователя на момент now"""
    if progress is None:
        return UserState.NO_USER
    if is_paused(progress.paused_until, now):
        return UserState.PAUSED
    return UserState.ACTIVE
