"""Reply formatting helpers.

Builds Telegram Markdown (v1) fragments: user mentions, the member table shown
by /list, and the /explain reply with its word-limited body.
"""

from collections.abc import Sequence

from telegram.helpers import escape_markdown, mention_markdown

from ..models import Member
from .messages import EXPLANATION_REPLY, LIST_HEADER


def truncate_words(text: str, limit: int) -> str:
    """Keep the first ``limit`` whitespace-delimited words of ``text``.

    Whitespace runs collapse to single spaces, so applying the function to
    its own output returns the same string.
    """
    return " ".join(text.split()[:limit])


def member_mention(member: Member) -> str:
    """Mention the user who registered ``member``, labelled with its name."""
    return mention_markdown(member.added_by, member.first_name, version=1)


def user_mention(user_id: int, label: str) -> str:
    return mention_markdown(user_id, label, version=1)


def escape(text: str) -> str:
    return escape_markdown(text, version=1)


MAX_CELL_WIDTH = 16


def clip(text: str, width: int = MAX_CELL_WIDTH) -> str:
    """Cut ``text`` to ``width`` characters, marking the cut with an ellipsis."""
    if len(text) <= width:
        return text
    return text[: width - 1] + "…"


class MemberTable:
    """Fixed-width ``name  class  age`` table for /list.

    Column widths are computed over every member so that all batches of a
    long table line up the same way. Long names and classes are clipped so a
    full batch stays within Telegram's message length limit.
    """

    def __init__(self, members: Sequence[Member]) -> None:
        self.cells = [
            (clip(m.first_name), clip(m.class_name.replace("`", "'")), str(m.age))
            for m in members
        ]
        self.name_width = max([len(LIST_HEADER[0])] + [len(c[0]) for c in self.cells])
        self.class_width = max([len(LIST_HEADER[1])] + [len(c[1]) for c in self.cells])

    def _line(self, name: str, class_name: str, age: str) -> str:
        return f"{name:<{self.name_width}}  {class_name:<{self.class_width}}  {age}"

    def rows(self) -> list[str]:
        return [self._line(*cell) for cell in self.cells]

    def header(self) -> str:
        return self._line(*LIST_HEADER)

    def render(self, caption: str, rows: Sequence[str]) -> str:
        """Batch layout: caption, then header and rows in a code block."""
        header = self.header()
        separator = "-" * max([len(header)] + [len(row) for row in rows])
        body = "\n".join([header, separator, *rows])
        return f"{caption}\n```\n{body}\n```"


def format_explanation(topic: str, word_limit: int, explanation: str) -> str:
    return EXPLANATION_REPLY.format(
        topic=topic,
        word_limit=word_limit,
        explanation=explanation,
    )
