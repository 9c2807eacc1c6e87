"""Tests for command argument parsing."""

import pytest

from school_bot.bot.messages import ADD_USAGE, EXPLAIN_USAGE
from school_bot.bot.parsing import command_args, parse_fixed, parse_topic_and_limit
from school_bot.errors import ArityError


def test_command_args_drop_the_command_token() -> None:
    assert command_args("/add Swayam BTECH 18") == ["Swayam", "BTECH", "18"]


def test_command_args_handle_bot_username_and_extra_whitespace() -> None:
    assert command_args("/tag@SchoolBot   BTECH \n") == ["BTECH"]


@pytest.mark.parametrize("text", [None, "", "/list"])
def test_command_args_empty(text: str | None) -> None:
    assert command_args(text) == []


def test_parse_fixed_returns_arguments_in_order() -> None:
    assert parse_fixed("/add Swayam BTECH 18", 3, ADD_USAGE) == ("Swayam", "BTECH", "18")


@pytest.mark.parametrize("text", ["/add", "/add Swayam BTECH", "/add Swayam B TECH 18"])
def test_parse_fixed_rejects_wrong_arity(text: str) -> None:
    with pytest.raises(ArityError) as exc_info:
        parse_fixed(text, 3, ADD_USAGE)

    assert exc_info.value.user_message == ADD_USAGE


def test_parse_topic_and_limit_joins_multi_word_topic() -> None:
    parsed = parse_topic_and_limit("/explain The water   cycle 75", EXPLAIN_USAGE)

    assert parsed.topic == "The water cycle"
    assert parsed.word_limit == "75"


def test_parse_topic_and_limit_keeps_non_numeric_limit_for_validation() -> None:
    parsed = parse_topic_and_limit("/explain Gravity lots", EXPLAIN_USAGE)

    assert parsed == ("Gravity", "lots")


@pytest.mark.parametrize("text", ["/explain", "/explain Photosynthesis"])
def test_parse_topic_and_limit_requires_two_tokens(text: str) -> None:
    with pytest.raises(ArityError):
        parse_topic_and_limit(text, EXPLAIN_USAGE)
