"""Tests for dependency wiring."""

from school_bot.bot.handlers import CommandHandlers
from school_bot.config import Config
from school_bot.core.container import Container


def test_container_wires_handlers_from_config(tmp_path) -> None:
    (tmp_path / "settings.yml").write_text("dispatch:\n  batch_size: 20\n")
    container = Container(config=Config(config_dir=tmp_path))

    handlers = container.command_handlers()

    assert isinstance(handlers, CommandHandlers)
    assert handlers.dispatcher.batch_size == 20
    assert handlers.directory.store is container.record_store()
    assert handlers.explainer is container.explanation_client()
    assert container.health_server().port == 3000
