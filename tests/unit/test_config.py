"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from school_bot.config import BotConfig, Config, GenerationConfig, StoreConfig


def test_bot_config_defaults() -> None:
    bot_config = BotConfig()

    assert bot_config.bot_token == "test_bot_token_placeholder"
    assert bot_config.port == 3000
    assert bot_config.listen_host == "0.0.0.0"
    assert bot_config.scope_by_chat is False


def test_bot_config_env_override(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("SCOPE_BY_CHAT", "true")

    bot_config = BotConfig()

    assert bot_config.port == 8080
    assert bot_config.scope_by_chat is True


@pytest.mark.parametrize(
    "variable, section",
    [
        ("BOT_TOKEN", BotConfig),
        ("SUPABASE_URL", StoreConfig),
        ("SUPABASE_KEY", StoreConfig),
        ("CHAT_API_KEY", GenerationConfig),
    ],
)
def test_missing_credential_is_fatal(monkeypatch, tmp_path, variable, section) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(variable)

    with pytest.raises(ValidationError):
        section()

    with pytest.raises(ValidationError):
        Config(config_dir=tmp_path)


def test_store_rest_url_strips_trailing_slash(monkeypatch) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://project.supabase.test/")

    assert StoreConfig().rest_url == "https://project.supabase.test/rest/v1"


def test_config_uses_defaults_without_settings_file(tmp_path) -> None:
    config = Config(config_dir=tmp_path)

    assert config.dispatch.batch_size == 50
    assert config.generation.model == "gpt-3.5-turbo"
    assert config.generation.token_factor == 1.33
    assert config.store.members_table == "members"
    assert config.store.roster_table == "group_members"


def test_config_reads_tunables_from_yaml(tmp_path) -> None:
    (tmp_path / "settings.yml").write_text(
        "dispatch:\n"
        "  batch_size: 25\n"
        "generation:\n"
        "  model: gpt-4o-mini\n"
        "  api_url: https://llm.example.test/v1/chat/completions\n"
        "store:\n"
        "  tables:\n"
        "    members: school_members\n"
    )

    config = Config(config_dir=tmp_path)

    assert config.dispatch.batch_size == 25
    assert config.generation.model == "gpt-4o-mini"
    assert config.generation.api_url == "https://llm.example.test/v1/chat/completions"
    assert config.generation.api_key == "test_chat_api_key"
    assert config.store.members_table == "school_members"
    assert config.store.explanations_table == "explanations"


def test_bundled_settings_file_matches_defaults() -> None:
    config = Config()

    assert config.dispatch.batch_size == 50
    assert config.store.url == "https://project.supabase.test"
