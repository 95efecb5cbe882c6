"""
Ошибки обработки команд
"""


class ReminderBotError(Exception):
    """Базовая ошибка бота"""


class UserNotFound(ReminderBotError):
    """Нет записи о прогрессе пользователя"""

    def __init__(self, user_id: str):
        super().__init__(f"Пользователь не найден: {user_id}")
        self.user_id = user_id


class ValidationError(ReminderBotError):
    """Некорректный аргумент команды. Текст ошибки показывается пользователю"""


class UserBusy(ReminderBotError):
    """Предыдущая команда пользователя ещё выполняется"""

    def __init__(self, user_id: str):
        super().__init__(f"Команда уже выполняется: {user_id}")
        self.user_id = user_id


class StoreUnavailable(ReminderBotError):
    """Хранилище недоступно. Повторов внутри команды нет"""
