"""Dependency-injection container.

This module defines a dependency-injection (DI) container that wires together
the application's components. The configuration object is supplied by the
caller, so nothing reads the environment at import time and tests can build
any component with their own settings or fakes.
"""

from dependency_injector import containers, providers

from school_bot.bot.dispatcher import MentionDispatcher
from school_bot.bot.handlers import CommandHandlers
from school_bot.config import Config
from school_bot.services.directory import MemberDirectory
from school_bot.services.explanation import ExplanationClient
from school_bot.services.health import HealthServer
from school_bot.services.record_store import RecordStore


class Container(containers.DeclarativeContainer):
    """DI container for the application.

    Usage::

        container = Container(config=Config())
        handlers = container.command_handlers()
    """

    config = providers.Dependency(instance_of=Config)

    # Services
    record_store = providers.Singleton(RecordStore, config=config.provided.store)
    member_directory = providers.Singleton(
        MemberDirectory,
        store=record_store,
        config=config.provided.store,
        scope_by_chat=config.provided.bot.scope_by_chat,
    )
    explanation_client = providers.Singleton(ExplanationClient, config=config.provided.generation)
    health_server = providers.Singleton(
        HealthServer,
        host=config.provided.bot.listen_host,
        port=config.provided.bot.port,
    )

    # Bot components
    mention_dispatcher = providers.Singleton(
        MentionDispatcher, batch_size=config.provided.dispatch.batch_size
    )
    command_handlers = providers.Singleton(
        CommandHandlers,
        directory=member_directory,
        explainer=explanation_client,
        dispatcher=mention_dispatcher,
    )
