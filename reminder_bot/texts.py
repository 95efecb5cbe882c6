"""
Тексты сообщений бота
"""

from datetime import datetime
from typing import List
from zoneinfo import ZoneInfo

from reminder_bot.config import config
from reminder_bot.database.models import ReminderEntry, UserProgress
from reminder_bot.services.progression import StatusReport
from reminder_bot.states import UserState


# ============================================
# Статичные тексты
# ============================================

HELP = (
    "🆘 Available Commands:\n\n"
    "/start - Register and start the curriculum\n"
    "/remindnow - Get today's reminder\n"
    "/skip - Skip today's reminder\n"
    "/pausefor [days] - Pause reminders\n"
    "/resume - Resume reminders\n"
    "/status - View your status\n"
    "/prev7 - Get past 7 days\n"
    "/next7 - Get next 7 days\n"
    "/fullphase [phase] - Get phase reminders\n"
    "/timeset [HH:MM] - Set reminder time\n"
    "/remindtime - Check reminder time"
)

UNKNOWN_COMMAND = "Unknown command. Send /help to see what I can do."
USER_NOT_FOUND = "User not found."
NO_USER_FOUND = "No user found."
NO_REMINDER_TODAY = "No reminder found for today."
RESUMED = "Reminders resumed."
BUSY = "⏳ Your previous command is still being processed. Please wait."
STORE_UNAVAILABLE = "⚠️ Service is temporarily unavailable. Please try again later."

RANGE_TITLES = {
    "prev7": "📅 Previous 7 days",
    "next7": "📅 Next 7 days",
}
RANGE_EMPTY = {
    "prev7": "No reminders found for the previous 7 days.",
    "next7": "No reminders found for the next 7 days.",
}


# ============================================
# Форматирование
# ============================================

def welcome(progress: UserProgress, created: bool) -> str:
    if created:
        return (
            f"👋 Welcome! You start at phase {progress.current_phase}, day {progress.current_day}.\n\n"
            f"Send /remindnow to get today's reminder or /help for all commands."
        )
    return (
        f"👋 Welcome back! You are at phase {progress.current_phase}, day {progress.current_day}.\n\n"
        f"Send /help for all commands."
    )


def reminder(entry: ReminderEntry) -> str:
    return (
        f"🔔 Today's Reminder:\n"
        f"✅ Focus: {entry.focus}\n"
        f"📘 Resource: {entry.resource}\n"
        f"📝 Practice: {entry.practice}"
    )


def skipped(day: int) -> str:
    return f"Today's reminder skipped. Resuming tomorrow (day {day})."


def paused(days: int) -> str:
    unit = "day" if days == 1 else "days"
    return f"Reminders paused for {days} {unit}."


def format_date(moment: datetime) -> str:
    """Дата в часовом поясе бота"""
    return moment.astimezone(ZoneInfo(config.TIMEZONE)).strftime("%Y-%m-%d")


def status(report: StatusReport) -> str:
    if report.state == UserState.PAUSED:
        reminders = f"Paused until {format_date(report.paused_until)}"
    else:
        reminders = "Active"
    return (
        f"📊 Status:\n"
        f"Phase: {report.phase}\n"
        f"Day: {report.day}\n"
        f"Reminders: {reminders}"
    )


def entry_line(entry: ReminderEntry) -> str:
    return (
        f"Day {entry.day}: {entry.focus}\n"
        f"   📘 {entry.resource}\n"
        f"   📝 {entry.practice}"
    )


def reminder_list(title: str, entries: List[ReminderEntry]) -> str:
    lines = [f"{title}:"]
    lines.extend(entry_line(entry) for entry in entries)
    return "\n\n".join(lines)


def reminder_range(direction: str, entries: List[ReminderEntry]) -> str:
    if not entries:
        return RANGE_EMPTY[direction]
    return reminder_list(RANGE_TITLES[direction], entries)


def full_phase(phase: int, entries: List[ReminderEntry]) -> str:
    if not entries:
        return f"No reminders found for phase {phase}."
    return reminder_list(f"📚 Phase {phase}", entries)


def time_set(display: str) -> str:
    return f"⏰ Reminder time set to {display}."


def remind_time(display: str) -> str:
    return f"⏰ Your reminder time is {display}."
