"""Field validation for command arguments.

Each validator is a pure function that returns the normalised value or raises
an :class:`~school_bot.errors.InputError` subclass carrying the reply text.
Composite validators check fields left to right and stop at the first failure,
so the user always sees exactly one message.
"""

from __future__ import annotations

import re
from typing import Final, NamedTuple

from ..errors import EmptyError, PatternError, RangeError
from .messages import (
    AGE_INVALID,
    CLASS_EMPTY,
    FIRST_NAME_INVALID,
    TOPIC_EMPTY,
    WORD_LIMIT_INVALID,
)

NAME_PATTERN: Final[re.Pattern[str]] = re.compile(r"[A-Za-z]+")
INTEGER_PATTERN: Final[re.Pattern[str]] = re.compile(r"[+-]?[0-9]+")

MIN_AGE: Final = 5
MAX_AGE: Final = 120
MIN_WORD_LIMIT: Final = 10
MAX_WORD_LIMIT: Final = 1000


class MemberFields(NamedTuple):
    first_name: str
    class_name: str
    age: int


class ExplainRequest(NamedTuple):
    topic: str
    word_limit: int


def validate_first_name(value: str) -> str:
    if not NAME_PATTERN.fullmatch(value):
        raise PatternError(FIRST_NAME_INVALID)
    return value


def validate_class_name(value: str) -> str:
    class_name = value.strip()
    if not class_name:
        raise EmptyError(CLASS_EMPTY)
    return class_name


def validate_topic(value: str) -> str:
    topic = value.strip()
    if not topic:
        raise EmptyError(TOPIC_EMPTY)
    return topic


def parse_bounded_int(value: str, low: int, high: int, message: str) -> int:
    """Parse a base-10 integer and check ``low <= n <= high``.

    Args:
        value: Raw token.
        low: Smallest accepted value.
        high: Largest accepted value.
        message: Reply text used for both malformed and out-of-range input.

    Raises:
        RangeError: If the token is not an integer or is out of bounds.
    """
    token = value.strip()
    if not INTEGER_PATTERN.fullmatch(token):
        raise RangeError(message)

    number = int(token)
    if number < low or number > high:
        raise RangeError(message)
    return number


def validate_age(value: str) -> int:
    return parse_bounded_int(value, MIN_AGE, MAX_AGE, AGE_INVALID)


def validate_word_limit(value: str) -> int:
    return parse_bounded_int(value, MIN_WORD_LIMIT, MAX_WORD_LIMIT, WORD_LIMIT_INVALID)


def validate_member(first_name: str, class_name: str, age: str) -> MemberFields:
    """Validate ``/add`` arguments in declaration order."""
    return MemberFields(
        first_name=validate_first_name(first_name),
        class_name=validate_class_name(class_name),
        age=validate_age(age),
    )


def validate_explain_request(topic: str, word_limit: str) -> ExplainRequest:
    """Validate ``/explain`` arguments, topic first."""
    return ExplainRequest(
        topic=validate_topic(topic),
        word_limit=validate_word_limit(word_limit),
    )
