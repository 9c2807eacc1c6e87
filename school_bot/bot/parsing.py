"""Command argument parsing.

Splits raw command text into positional arguments. Two shapes are supported:
a fixed number of whitespace-separated tokens, and the ``/explain`` shape where
the last token is a number and everything before it is free text.
"""

from __future__ import annotations

from typing import NamedTuple

from ..errors import ArityError


class TopicAndLimit(NamedTuple):
    """Raw ``/explain`` arguments before validation."""

    topic: str
    word_limit: str


def command_args(text: str | None) -> list[str]:
    """Return the whitespace-separated tokens following the command itself."""
    if not text:
        return []
    return text.split()[1:]


def parse_fixed(text: str | None, arity: int, usage: str) -> tuple[str, ...]:
    """Parse a command that takes exactly ``arity`` tokens.

    Args:
        text: Full message text including the command.
        arity: Required number of arguments.
        usage: Usage hint shown when the count is wrong.

    Returns:
        The arguments in order.

    Raises:
        ArityError: If the argument count differs from ``arity``.
    """
    args = command_args(text)
    if len(args) != arity:
        raise ArityError(usage)
    return tuple(args)


def parse_topic_and_limit(text: str | None, usage: str) -> TopicAndLimit:
    """Parse ``<topic...> <word_limit>``.

    Raises:
        ArityError: If fewer than two tokens were given.
    """
    args = command_args(text)
    if len(args) < 2:
        raise ArityError(usage)
    return TopicAndLimit(topic=" ".join(args[:-1]).strip(), word_limit=args[-1])
