"""
Диспетчер команд: сериализация → логика прогресса → текст ответа

Диспетчер только возвращает текст. Доставкой ответа занимается транспорт.
"""

import asyncio
import logging
from typing import List, Optional, Sequence

import asyncpg

from reminder_bot import texts
from reminder_bot.services.errors import UserBusy, UserNotFound, ValidationError, StoreUnavailable
from reminder_bot.services.progression import ProgressionEngine
from reminder_bot.services.serializer import CommandSerializer
from reminder_bot.states import Command

logger = logging.getLogger(__name__)

# Ошибки, означающие недоступность хранилища
STORE_ERRORS = (
    StoreUnavailable,
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)


def _first(args: Sequence[str]) -> Optional[str]:
    return args[0] if args else None


class Dispatcher:
    """Точка входа для транспорта: handle(user_id, command, args) -> текст"""

    def __init__(
        self,
        engine: Optional[ProgressionEngine] = None,
        serializer: Optional[CommandSerializer] = None
    ):
        self.engine = engine or ProgressionEngine()
        self.serializer = serializer or CommandSerializer()

    async def handle(self, user_id: str, command: str, args: Optional[List[str]] = None) -> str:
        args = list(args or [])

        try:
            command = Command(command)
        except ValueError:
            return texts.UNKNOWN_COMMAND

        if command == Command.HELP:
            return texts.HELP

        try:
            with self.serializer.hold(user_id, command.value):
                return await self._run(user_id, command, args)
        except UserBusy:
            return texts.BUSY
        except UserNotFound:
            if command == Command.FULL_PHASE:
                return texts.NO_USER_FOUND
            return texts.USER_NOT_FOUND
        except ValidationError as e:
            return str(e)
        except STORE_ERRORS as e:
            logger.error(f"Хранилище недоступно ({command.value}, {user_id}): {e!r}")
            return texts.STORE_UNAVAILABLE

    async def _run(self, user_id: str, command: Command, args: List[str]) -> str:
        engine = self.engine

        if command == Command.START:
            progress, created = await engine.start(user_id)
            return texts.welcome(progress, created)

        if command == Command.REMIND_NOW:
            entry = await engine.remind_now(user_id)
            return texts.reminder(entry) if entry else texts.NO_REMINDER_TODAY

        if command == Command.SKIP:
            day = await engine.skip(user_id)
            return texts.skipped(day)

        if command == Command.PAUSE_FOR:
            days = await engine.pause_for(user_id, _first(args))
            return texts.paused(days)

        if command == Command.RESUME:
            await engine.resume(user_id)
            return texts.RESUMED

        if command == Command.STATUS:
            return texts.status(await engine.status(user_id))

        if command in (Command.PREV7, Command.NEXT7):
            entries = await engine.list_range(user_id, command)
            return texts.reminder_range(command.value, entries)

        if command == Command.FULL_PHASE:
            phase, entries = await engine.full_phase(user_id, _first(args))
            return texts.full_phase(phase, entries)

        if command == Command.SET_TIME:
            return texts.time_set(await engine.set_time(user_id, _first(args)))

        if command == Command.REMIND_TIME:
            return texts.remind_time(await engine.get_time(user_id))

        raise ValueError(f"Команда без обработчика: {command}")
