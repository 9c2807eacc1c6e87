"""Batched delivery of long recipient lists.

Telegram limits how many mentions and characters fit into one message, so
broadcast-style commands split their recipients into fixed-size batches and
send one message per batch. Batches go out strictly one after another in the
original order. A batch that fails to send is logged and skipped; the
remaining batches are still sent and nothing is retried.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeVar

from telegram.error import TelegramError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_BATCH_SIZE = 50

SendFunc = Callable[[str], Awaitable[Any]]
BatchFormatter = Callable[[str, Sequence[str]], str]


def chunk(items: Sequence[T], size: int) -> list[list[T]]:
    """Split ``items`` into contiguous batches of at most ``size`` entries."""
    if size < 1:
        raise ValueError("batch size must be positive")
    return [list(items[start : start + size]) for start in range(0, len(items), size)]


def join_mentions(caption: str, batch: Sequence[str]) -> str:
    """Default batch layout: caption line followed by space-separated entries."""
    return f"{caption}\n{' '.join(batch)}"


@dataclass
class DispatchReport:
    """Outcome of one dispatch.

    Attributes:
        total_batches: Number of batches the recipients were split into.
        sent: Number of batches delivered.
        failed: Zero-based indices of batches that could not be sent.
    """

    total_batches: int = 0
    sent: int = 0
    failed: list[int] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.failed


class MentionDispatcher:
    """Sends recipient lists as a sequence of batched messages."""

    def __init__(
        self,
        batch_size: int = DEFAULT_BATCH_SIZE,
        formatter: BatchFormatter = join_mentions,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch size must be positive")
        self.batch_size = batch_size
        self.formatter = formatter

    async def dispatch(
        self,
        send: SendFunc,
        caption: str,
        entries: Sequence[str],
        formatter: BatchFormatter | None = None,
    ) -> DispatchReport:
        """Send ``entries`` in batches, each prefixed by ``caption``.

        Args:
            send: Coroutine function delivering one message text.
            caption: First line of every message.
            entries: Recipient mentions (or rows) in display order.
            formatter: Overrides the dispatcher's batch layout for this call.

        Returns:
            Report of delivered and failed batches.
        """
        render = formatter or self.formatter
        batches = chunk(entries, self.batch_size)
        report = DispatchReport(total_batches=len(batches))

        for index, batch in enumerate(batches):
            try:
                await send(render(caption, batch))
            except TelegramError as e:
                logger.warning(
                    "Failed to send batch %d/%d (%d entries): %s",
                    index + 1,
                    len(batches),
                    len(batch),
                    e,
                )
                report.failed.append(index)
                continue
            report.sent += 1

        if report.failed:
            logger.error(
                "Dispatch finished with %d of %d batches failed",
                len(report.failed),
                report.total_batches,
            )
        else:
            logger.debug("Dispatched %d batches", report.total_batches)

        return report
