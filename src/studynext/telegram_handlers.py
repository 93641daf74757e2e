"""Telegram command handlers."""

import logging

from telegram import Update
from telegram.ext import ContextTypes

from .adapters.http_assignments import AuthenticationError, DataSourceError
from .config import load_config
from .core.dashboard import format_dashboard
from .telegram_format import format_award, send_markdown
from .workflows import AssignmentNotFoundError, load_dashboard, set_completed

logger = logging.getLogger(__name__)

COMMANDS_TEXT = (
    "/today - Dashboard with what's due\n"
    "/done <id> - Mark an assignment complete\n"
    "/help - Show all commands"
)


async def start_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /start command."""
    await update.message.reply_text(
        "Hey! I'm StudyNext. I'll keep an eye on your homework and remind you "
        "before things are due.\n\nCommands:\n" + COMMANDS_TEXT
    )


async def help_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /help command."""
    await update.message.reply_text("StudyNext Commands\n\n" + COMMANDS_TEXT)


async def today_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /today command - show the dashboard."""
    config = load_config()
    try:
        data = load_dashboard(config)
    except (AuthenticationError, DataSourceError) as e:
        logger.error(f"Failed to load dashboard: {e}")
        await update.message.reply_text(f"Couldn't load your assignments: {e}")
        return

    await send_markdown(update.message, format_dashboard(data))


async def done_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /done <id> command - complete an assignment."""
    if not context.args:
        await update.message.reply_text("Usage: /done <assignment id>")
        return

    config = load_config()
    assignment_id = context.args[0]
    try:
        award = set_completed(config, assignment_id, True)
    except AssignmentNotFoundError:
        await update.message.reply_text(f"No assignment with id {assignment_id}.")
        return
    except (AuthenticationError, DataSourceError) as e:
        logger.error(f"Failed to complete {assignment_id}: {e}")
        await update.message.reply_text(f"Couldn't update that assignment: {e}")
        return

    if award is None:
        await update.message.reply_text("That one is already done.")
        return
    await update.message.reply_text(format_award(award))
