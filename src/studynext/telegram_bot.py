"""StudyNext Telegram Bot - dashboard on demand and due-date reminders."""

import logging

from telegram import Bot, Update
from telegram.ext import Application, CommandHandler, MessageHandler, filters
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .config import Config, load_config
from .telegram_format import format_reminder, send_markdown
from .telegram_handlers import done_handler, help_handler, start_handler, today_handler
from .workflows import collect_reminders

logger = logging.getLogger(__name__)

REMINDER_JOB_ID = "due_reminders"


class AllowListFilter(filters.BaseFilter):
    """Pass updates only from configured Telegram user IDs (everyone if none)."""

    def __init__(self, allowed_users: list[int]):
        super().__init__()
        self.allowed_users = set(allowed_users)

    def check_update(self, update: Update) -> bool:
        if not self.allowed_users:
            return True
        user = update.effective_user
        return user is not None and user.id in self.allowed_users


async def reject_stranger(update: Update, context) -> None:
    user = update.effective_user
    logger.warning(f"Rejected message from Telegram user {user.id} ({user.username})")
    await update.message.reply_text(
        "Sorry, this StudyNext bot is private.\n"
        "Owners can allow their user ID with TELEGRAM_ALLOWED_USERS in studynext.conf"
    )


def create_application(config: Config | None = None) -> Application:
    """Build the bot with its command handlers."""
    config = config or load_config()
    if not config.telegram_bot_token:
        raise ValueError(
            "TELEGRAM_BOT_TOKEN not configured. "
            "Create a bot with @BotFather and put its token in studynext.conf"
        )

    app = Application.builder().token(config.telegram_bot_token).build()
    allowed = AllowListFilter(config.telegram_allowed_users)

    for name, handler in (
        ("start", start_handler),
        ("help", help_handler),
        ("today", today_handler),
        ("done", done_handler),
    ):
        app.add_handler(CommandHandler(name, handler, filters=allowed))

    if config.telegram_allowed_users:
        app.add_handler(MessageHandler(~allowed & filters.ALL, reject_stranger))

    return app


def setup_scheduler(app: Application, config: Config | None = None) -> AsyncIOScheduler:
    """Schedule the periodic reminder check (premium accounts only)."""
    config = config or load_config()
    scheduler = AsyncIOScheduler(timezone=config.timezone or "America/Toronto")

    if not config.telegram_allowed_users:
        logger.warning("No TELEGRAM_ALLOWED_USERS configured - reminders have nowhere to go")
    elif not config.is_premium:
        logger.info("Reminders are a premium feature - not scheduling reminder checks")
    else:
        scheduler.add_job(
            send_due_reminders,
            IntervalTrigger(minutes=config.reminder_interval_minutes),
            args=[app.bot, config.telegram_allowed_users, config],
            id=REMINDER_JOB_ID,
        )
        logger.info(f"Checking reminders every {config.reminder_interval_minutes} min")

    return scheduler


async def send_due_reminders(bot: Bot, user_ids: list[int], config: Config) -> None:
    """Push every reminder that has come due to each allowed user."""
    try:
        reminders = collect_reminders(config)
    except Exception as e:
        logger.error(f"Reminder check failed: {e}")
        return

    for reminder in reminders:
        text = format_reminder(reminder)
        for user_id in user_ids:
            try:
                await send_markdown(bot, text, chat_id=user_id)
            except Exception as e:
                logger.error(f"Could not deliver reminder to {user_id}: {e}")


def run_bot() -> None:
    """Run the bot until interrupted."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.INFO,
    )

    config = load_config()
    app = create_application(config)
    scheduler = setup_scheduler(app, config)

    async def post_init(application: Application) -> None:
        scheduler.start()
        if scheduler.get_job(REMINDER_JOB_ID):
            # First check now rather than one interval from now
            await send_due_reminders(application.bot, config.telegram_allowed_users, config)

    app.post_init = post_init

    if not config.telegram_allowed_users:
        logger.warning("No TELEGRAM_ALLOWED_USERS configured - bot is open to anyone!")

    logger.info("Starting StudyNext Telegram bot...")
    app.run_polling(allowed_updates=Update.ALL_TYPES)
