"""Application entry point.

Main module that loads configuration, initializes logging, wires the
dependency container and runs the Telegram bot in long-polling mode. The
keep-alive HTTP server is started after the bot initializes and stopped,
together with the gateway HTTP sessions, on shutdown.
"""

import logging
import sys

from pydantic import ValidationError
from telegram import BotCommand
from telegram.error import TelegramError
from telegram.ext import Application

from .bot.handlers import register_handlers
from .bot.messages import BOT_COMMANDS
from .config import Config
from .core.container import Container

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
    )
    # Every polling request is logged by httpx at INFO otherwise
    logging.getLogger("httpx").setLevel(logging.WARNING)


def load_config() -> Config:
    """Build configuration, exiting the process if a credential is missing."""
    try:
        return Config()
    except ValidationError as e:
        missing = ", ".join(
            str(error["loc"][0]) if error["loc"] else error["msg"] for error in e.errors()
        )
        logging.basicConfig(format="%(asctime)s - %(levelname)s - %(message)s")
        logger.critical(
            f"Missing environment variables: {missing}. Please check your .env file."
        )
        sys.exit(1)


async def initialize_resources(container: Container, application: Application) -> None:
    """Start the keep-alive server and publish the command list."""
    await container.health_server().start()

    try:
        await application.bot.set_my_commands(
            [BotCommand(command, description) for command, description in BOT_COMMANDS.items()]
        )
    except TelegramError as e:
        logger.warning(f"Failed to register bot commands: {e}")

    logger.info("Telegram bot is running...")


async def cleanup_resources(container: Container) -> None:
    """Stop the keep-alive server and close gateway sessions."""
    await container.health_server().stop()
    await container.record_store().close()
    await container.explanation_client().close()
    logger.info("Resources released")


def build_application(container: Container) -> Application:
    """Create the Telegram application with handlers and lifecycle hooks."""
    config = container.config()

    async def post_init(application: Application) -> None:
        await initialize_resources(container, application)

    async def post_shutdown(application: Application) -> None:
        await cleanup_resources(container)

    app = (
        Application.builder()
        .token(config.bot.bot_token)
        .post_init(post_init)
        .post_shutdown(post_shutdown)
        .build()
    )
    register_handlers(app, container.command_handlers())
    return app


def main() -> None:
    """Main application entry point.

    Loads configuration, registers command handlers and starts long polling.
    SIGINT and SIGTERM stop the bot gracefully.
    """
    config = load_config()
    configure_logging(config.bot.log_level)

    container = Container(config=config)
    app = build_application(container)

    logger.info("Starting long polling")
    app.run_polling()


if __name__ == "__main__":
    main()
