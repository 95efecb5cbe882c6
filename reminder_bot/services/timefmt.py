"""
Время напоминания: проверка ввода и отображение в 12-часовом формате
"""

import re
from dataclasses import dataclass
from typing import Optional


TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


@dataclass(frozen=True)
class ReminderTime:
    """Проверенное время HH:MM (24 часа)"""
    hour: int
    minute: int

    def as_24h(self) -> str:
        """Каноническая форма для БД: 08:30"""
        return f"{self.hour:02d}:{self.minute:02d}"

    def as_12h(self) -> str:
        return to_12_hour(self.hour, self.minute)


def validate(raw: Optional[str]) -> Optional[ReminderTime]:
    """
    Разобрать строку вида H:MM или HH:MM.
    Возвращает None, если формат неверный или время вне 00:00–23:59.
    """
    if raw is None:
        return None

    match = TIME_RE.match(raw.strip())
    if not match:
        return None

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return None

    return ReminderTime(hour, minute)


def to_12_hour(hour: int, minute: int) -> str:
    """20, 30 → '8:30 PM'; 0, 5 → '12:05 AM'"""
    suffix = "AM" if hour < 12 else "PM"
    display_hour = hour % 12 or 12
    return f"{display_hour}:{minute:02d} {suffix}"
