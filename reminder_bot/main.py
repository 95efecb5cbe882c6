"""
Главная точка входа бота
"""

import logging

from telegram import Update
from telegram.ext import (
    Application,
    CommandHandler,
    ContextTypes,
)

from reminder_bot.config import config
from reminder_bot.database.connection import get_pool, close_pool
from reminder_bot.database.migrations import run_migrations
from reminder_bot.services.dispatcher import Dispatcher
from reminder_bot.services.notifications import send_reply
from reminder_bot.states import Command


# Настройка логирования
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO
)
logger = logging.getLogger(__name__)

# Команда Telegram → команда диспетчера
TELEGRAM_COMMANDS = {
    "start": Command.START,
    "help": Command.HELP,
    "remindnow": Command.REMIND_NOW,
    "skip": Command.SKIP,
    "pausefor": Command.PAUSE_FOR,
    "resume": Command.RESUME,
    "status": Command.STATUS,
    "prev7": Command.PREV7,
    "next7": Command.NEXT7,
    "fullphase": Command.FULL_PHASE,
    "timeset": Command.SET_TIME,
    "remindtime": Command.REMIND_TIME,
}


def make_command_handler(dispatcher: Dispatcher, command: Command):
    """Хендлер Telegram-команды: передаёт её диспетчеру и отправляет ответ"""
    async def handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
        user = update.effective_user
        chat = update.effective_chat
        if not user or not chat:
            return

        text = await dispatcher.handle(str(user.id), command.value, context.args)
        await send_reply(context.bot, chat.id, text)

    return handler


def register_handlers(app: Application, dispatcher: Dispatcher):
    """Регистрация всех хендлеров"""
    for name, command in TELEGRAM_COMMANDS.items():
        app.add_handler(CommandHandler(name, make_command_handler(dispatcher, command)))


async def post_init(app: Application):
    """Инициализация после запуска"""
    await get_pool()
    applied = await run_migrations()
    logger.info(f"База данных подключена, новых миграций: {len(applied)}")


async def post_shutdown(app: Application):
    """Очистка при завершении"""
    await close_pool()
    logger.info("Соединение с БД закрыто")


def main():
    """Запуск бота"""

    # Проверка конфигурации
    errors = config.validate()
    if errors:
        for error in errors:
            logger.error(f"Ошибка конфигурации: {error}")
        return

    # Создание приложения
    app = (
        Application.builder()
        .token(config.BOT_TOKEN)
        .concurrent_updates(True)
        .post_init(post_init)
        .post_shutdown(post_shutdown)
        .build()
    )

    # Один диспетчер (и одна таблица выполняющихся команд) на процесс
    register_handlers(app, Dispatcher())

    if config.WEBHOOK_URL:
        webhook_url = f"{config.WEBHOOK_URL.rstrip('/')}/{config.WEBHOOK_PATH}"
        logger.info(f"Бот запущен (webhook: {webhook_url})")
        app.run_webhook(
            listen=config.WEBHOOK_LISTEN,
            port=config.WEBHOOK_PORT,
            url_path=config.WEBHOOK_PATH,
            webhook_url=webhook_url,
            allowed_updates=["message"]
        )
    else:
        logger.info("Бот запущен (polling)")
        app.run_polling(allowed_updates=["message"])


if __name__ == "__main__":
    main()
