"""Telegram message formatting utilities."""

import telegramify_markdown

from .core.gamification import XPAward
from .core.reminders import Reminder

MAX_MESSAGE_LENGTH = 4000


def format_reminder(reminder: Reminder) -> str:
    return f"*StudyNext Reminders*\n\n**{reminder.title}**\n{reminder.body}"


def format_award(award: XPAward) -> str:
    """Celebration text after completing something."""
    lines = [f"Nice work! +{award.amount} XP"]
    if award.did_level_up:
        lines.append(f"Level up! You reached stage {award.new_level}.")
    if award.streak_extended:
        lines.append(f"Streak: {award.new_streak} days")
    return "\n".join(lines)


async def send_markdown(bot_or_msg, text: str, *, chat_id: int | None = None):
    """Send markdown text to Telegram, converting to MarkdownV2.

    bot_or_msg: a Bot instance (pass chat_id) or an Update.message (calls reply_text).
    """
    converted = telegramify_markdown.markdownify(text)
    chunks = [
        converted[i : i + MAX_MESSAGE_LENGTH]
        for i in range(0, len(converted), MAX_MESSAGE_LENGTH)
    ]
    for chunk in chunks:
        if chat_id is not None:
            await bot_or_msg.send_message(chat_id=chat_id, text=chunk, parse_mode="MarkdownV2")
        else:
            await bot_or_msg.reply_text(chunk, parse_mode="MarkdownV2")
