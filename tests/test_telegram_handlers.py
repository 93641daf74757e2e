"""Tests for Telegram command handlers."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from studynext.adapters.file_store import FileAssignmentRepository
from studynext.config import Config
from studynext.telegram_handlers import done_handler
from studynext.workflows import get_profile


@pytest.fixture
def config(tmp_path):
    return Config(user_id="u1", data_dir=str(tmp_path), timezone="UTC")


def run_done(config, *args):
    update = MagicMock()
    update.message.reply_text = AsyncMock()
    context = MagicMock()
    context.args = list(args)
    with patch("studynext.telegram_handlers.load_config", return_value=config):
        asyncio.run(done_handler(update, context))
    return update.message.reply_text.call_args.args[0]


class TestDoneHandler:
    def test_usage(self, config):
        assert run_done(config).startswith("Usage:")

    def test_unknown_id(self, config):
        assert run_done(config, "bogus") == "No assignment with id bogus."
        assert get_profile(config).xp == 0

    def test_awards_once(self, config, tmp_path):
        hw_id = FileAssignmentRepository(tmp_path).add(
            "u1", {"subject": "Math", "title": "Worksheet", "dueDate": "2026-02-05"}
        )
        assert "+100 XP" in run_done(config, hw_id)
        assert run_done(config, hw_id) == "That one is already done."
        assert get_profile(config).xp == 100
