"""
Сериализация команд пользователя

Для каждого user_id одновременно выполняется не больше одной команды.
acquire/release синхронные: между проверкой и записью маркера нет await,
поэтому в рамках одного event loop гонки невозможны.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterator, Optional

from reminder_bot.services.errors import UserBusy

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class PendingOperation:
    """Маркер выполняющейся команды"""
    user_id: str
    command: str = ""
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class CommandSerializer:
    """Таблица выполняющихся команд, живёт столько же, сколько процесс"""

    def __init__(self):
        self._pending: Dict[str, PendingOperation] = {}

    def acquire(self, user_id: str, command: str = "") -> Optional[PendingOperation]:
        """Занять пользователя. None, если уже занят (Busy)"""
        if user_id in self._pending:
            return None

        operation = PendingOperation(user_id=user_id, command=command)
        self._pending[user_id] = operation
        return operation

    def release(self, operation: PendingOperation):
        """
        Освободить пользователя.
        Повторный release и release чужого (устаревшего) маркера ничего не делают.
        """
        if self._pending.get(operation.user_id) is operation:
            del self._pending[operation.user_id]

    def is_busy(self, user_id: str) -> bool:
        return user_id in self._pending

    def pending_count(self) -> int:
        return len(self._pending)

    @contextmanager
    def hold(self, user_id: str, command: str = "") -> Iterator[PendingOperation]:
        """Занять пользователя на время блока with, иначе UserBusy"""
        operation = self.acquire(user_id, command)
        if operation is None:
            current = self._pending.get(user_id)
            logger.info(
                f"Команда {command} отклонена: {user_id} ещё выполняет "
                f"{current.command if current else '?'}"
            )
            raise UserBusy(user_id)

        try:
            yield operation
        finally:
            self.release(operation)
