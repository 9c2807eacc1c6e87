"""Global test configuration and fixtures.

Provides shared fixtures for all test levels: required environment variables,
configuration objects, fake gateways and Telegram update builders. Ensures
test isolation so no test ever reaches Telegram, Supabase or the
chat-completion API.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from school_bot.bot.dispatcher import MentionDispatcher
from school_bot.bot.handlers import CommandHandlers
from school_bot.config import GenerationConfig
from school_bot.models import Member
from school_bot.services.directory import MemberDirectory
from school_bot.services.explanation import ExplanationClient

# Test constants
TEST_ENV = {
    "BOT_TOKEN": "test_bot_token_placeholder",
    "SUPABASE_URL": "https://project.supabase.test",
    "SUPABASE_KEY": "test_supabase_key",
    "CHAT_API_KEY": "test_chat_api_key",
}
TEST_USER_ID = 111
TEST_CHAT_ID = -100123


@pytest.fixture(autouse=True)
def test_environment(monkeypatch):
    """Setup required credentials for every test."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)
    for key in ("PORT", "SCOPE_BY_CHAT", "LOG_LEVEL", "HEALTH_LISTEN_HOST"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def fake_directory():
    """MemberDirectory double with awaitable methods."""
    return AsyncMock(spec=MemberDirectory)


@pytest.fixture
def fake_explainer():
    """Real client sizing logic with the network call replaced."""
    client = ExplanationClient(GenerationConfig())
    client.generate = AsyncMock(return_value="")
    return client


@pytest.fixture
def handlers(fake_directory, fake_explainer):
    return CommandHandlers(
        directory=fake_directory,
        explainer=fake_explainer,
        dispatcher=MentionDispatcher(batch_size=50),
    )


@pytest.fixture
def make_update():
    """Build a Telegram update carrying a command text."""

    def _make_update(
        text: str,
        user_id: int = TEST_USER_ID,
        chat_id: int = TEST_CHAT_ID,
        chat_type: str = "group",
        first_name: str = "Asha",
    ) -> MagicMock:
        message = MagicMock()
        message.text = text
        message.chat_id = chat_id
        message.reply_text = AsyncMock()

        update = MagicMock()
        update.effective_message = message
        update.effective_user = MagicMock(id=user_id, first_name=first_name)
        update.effective_chat = MagicMock(id=chat_id, type=chat_type)
        return update

    return _make_update


@pytest.fixture
def make_context():
    """Build a callback context whose bot reports the given member status."""

    def _make_context(status: str = "member") -> MagicMock:
        context = MagicMock()
        context.bot.get_chat_member = AsyncMock(return_value=MagicMock(status=status))
        return context

    return _make_context


@pytest.fixture
def make_members():
    """Build ``count`` members of one class with distinct registrars."""

    def _make_members(count: int, class_name: str = "BTECH") -> list[Member]:
        return [
            Member(
                id=index + 1,
                first_name="Student" + "abcdefghijklmnopqrstuvwxyz"[index % 26],
                class_name=class_name,
                age=18,
                added_by=1000 + index,
            )
            for index in range(count)
        ]

    return _make_members


@pytest.fixture
def reply_texts():
    """Return the texts of every reply sent on an update's message, in order."""

    def _reply_texts(update: MagicMock) -> list[str]:
        return [call.args[0] for call in update.effective_message.reply_text.await_args_list]

    return _reply_texts
