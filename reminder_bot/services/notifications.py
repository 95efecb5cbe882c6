"""
Отправка ответов пользователям
"""

import logging
from typing import List

from telegram import Bot
from telegram.constants import MessageLimit
from telegram.error import TelegramError

logger = logging.getLogger(__name__)


def split_message(text: str, limit: int = MessageLimit.MAX_TEXT_LENGTH) -> List[str]:
    """Разбить длинный текст на части по границам строк (лимит Telegram — 4096)"""
    if len(text) <= limit:
        return [text]

    chunks = []
    current = ""
    for line in text.split("\n"):
        # Строка длиннее лимита — режем по символам
        while len(line) > limit:
            if current:
                chunks.append(current)
                current = ""
            chunks.append(line[:limit])
            line = line[limit:]

        candidate = f"{current}\n{line}" if current else line
        if len(candidate) > limit:
            chunks.append(current)
            current = line
        else:
            current = candidate

    if current:
        chunks.append(current)
    return chunks


async def send_reply(bot: Bot, chat_id: int, text: str) -> bool:
    """Отправить ответ. Ошибки доставки логируются и не пробрасываются"""
    try:
        for chunk in split_message(text):
            await bot.send_message(chat_id=chat_id, text=chunk)
        return True
    except TelegramError as e:
        logger.warning(f"Не удалось отправить ответ {chat_id}: {e}")
        return False
