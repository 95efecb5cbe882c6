"""
Модели данных (dataclasses)
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


DEFAULT_REMINDER_TIME = "10:00"


@dataclass
class UserProgress:
    """Прогресс пользователя по программе"""
    user_id: str
    current_phase: int
    current_day: int
    paused_until: Optional[datetime] = None
    reminder_time: Optional[str] = DEFAULT_REMINDER_TIME


@dataclass(frozen=True)
class ReminderEntry:
    """Напоминание из каталога (фаза + день)"""
    phase: int
    day: int
    focus: str
    resource: str
    practice: str
