"""Configuration management for the school bot.

Handles all application configuration including environment variables, the
optional ``.env`` file, the YAML tunables file and default settings. Provides
structured configuration classes for the bot, the database gateway, the
text-generation gateway and mention delivery.

Nothing here is global: :class:`Config` is built once by ``main()`` and handed
to the dependency container.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"


class BotConfig(BaseSettings):
    """Main Telegram bot configuration.

    Attributes:
        bot_token: Telegram bot API token from environment.
        port: Port for the keep-alive HTTP server.
        listen_host: Interface the keep-alive server binds to.
        scope_by_chat: Store members per chat and only show members of the
            chat a command was issued in.
        log_level: Root logging level name.
    """

    model_config = SettingsConfigDict(env_file=ENV_FILE, extra="ignore")

    bot_token: str = Field(..., validation_alias="BOT_TOKEN")
    port: int = Field(default=3000, validation_alias="PORT")
    listen_host: str = Field(default="0.0.0.0", validation_alias="HEALTH_LISTEN_HOST")
    scope_by_chat: bool = Field(default=False, validation_alias="SCOPE_BY_CHAT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")


class StoreConfig(BaseSettings):
    """Supabase (PostgREST) connection settings.

    Attributes:
        url: Project URL, e.g. ``https://xyz.supabase.co``.
        key: Service or anon API key.
        timeout: Total HTTP timeout per request in seconds.
        members_table: Table holding registered members.
        explanations_table: Table holding generated explanations.
        roster_table: Externally maintained alert roster.
    """

    model_config = SettingsConfigDict(env_file=ENV_FILE, extra="ignore")

    url: str = Field(..., validation_alias="SUPABASE_URL")
    key: str = Field(..., validation_alias="SUPABASE_KEY")
    timeout: int = 30
    members_table: str = "members"
    explanations_table: str = "explanations"
    roster_table: str = "group_members"

    @property
    def rest_url(self) -> str:
        """Base URL of the PostgREST endpoint."""
        return f"{self.url.rstrip('/')}/rest/v1"


class GenerationConfig(BaseSettings):
    """Chat-completion API settings.

    Attributes:
        api_key: Bearer key for the completion endpoint.
        api_url: Full URL of the OpenAI-compatible ``chat/completions`` endpoint.
        model: Model name sent with every request.
        token_factor: Words-to-tokens inflation used to size ``max_tokens``.
        timeout: Total HTTP timeout per request in seconds.
    """

    model_config = SettingsConfigDict(env_file=ENV_FILE, extra="ignore")

    api_key: str = Field(..., validation_alias="CHAT_API_KEY")
    api_url: str = "https://api.chatanywhere.tech/v1/chat/completions"
    model: str = "gpt-3.5-turbo"
    token_factor: float = 1.33
    timeout: int = 60


class DispatchConfig(BaseSettings):
    """Mention delivery settings.

    Attributes:
        batch_size: Maximum number of mentions in one outbound message.
    """

    model_config = SettingsConfigDict(extra="ignore")

    batch_size: int = 50


class Config:
    """Application configuration manager.

    Centralizes loading of all configuration sources: required credentials
    come from the environment (or ``.env``), non-secret tunables from
    ``settings.yml`` in the configuration directory.

    Raises:
        pydantic.ValidationError: If a required credential is missing.
    """

    def __init__(self, config_dir: Path | None = None):
        """Initialize configuration manager.

        Args:
            config_dir: Path to configuration directory, defaults to school_bot/config.
        """
        if config_dir is None:
            config_dir = Path(__file__).parent / "config"

        self.config_dir = Path(config_dir)
        settings = self._load_settings_file()

        self.bot = BotConfig()

        store_data = settings.get("store", {})
        tables = store_data.get("tables", {})
        self.store = StoreConfig(
            timeout=store_data.get("timeout", 30),
            members_table=tables.get("members", "members"),
            explanations_table=tables.get("explanations", "explanations"),
            roster_table=tables.get("roster", "group_members"),
        )

        generation_data = settings.get("generation", {})
        self.generation = GenerationConfig(
            api_url=generation_data.get(
                "api_url", "https://api.chatanywhere.tech/v1/chat/completions"
            ),
            model=generation_data.get("model", "gpt-3.5-turbo"),
            token_factor=generation_data.get("token_factor", 1.33),
            timeout=generation_data.get("timeout", 60),
        )

        dispatch_data = settings.get("dispatch", {})
        self.dispatch = DispatchConfig(batch_size=dispatch_data.get("batch_size", 50))

    def _load_settings_file(self) -> dict[str, Any]:
        """Load non-secret tunables from YAML.

        Returns:
            Parsed mapping, empty when the file is absent or blank.
        """
        settings_path = self.config_dir / "settings.yml"
        if not settings_path.exists():
            return {}

        with open(settings_path) as f:
            data = yaml.safe_load(f)

        return data or {}
