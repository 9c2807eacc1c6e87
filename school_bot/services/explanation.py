"""Chat-completion API client for topic explanations.

Sends one user prompt to an OpenAI-compatible ``chat/completions`` endpoint
and returns the text of the first choice. The client neither retries nor
caches; any failure becomes a :class:`~school_bot.errors.GenerationError`.
"""

import asyncio
import logging
import math
from typing import Any

import aiohttp

from ..bot.messages import EXPLAIN_PROMPT, GENERATION_FAILED
from ..config import GenerationConfig
from ..errors import GenerationError

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_FACTOR = 1.33


def build_prompt(topic: str, word_limit: int) -> str:
    return EXPLAIN_PROMPT.format(topic=topic, word_limit=word_limit)


def max_output_tokens(word_limit: int, factor: float = DEFAULT_TOKEN_FACTOR) -> int:
    """Token budget for a reply of ``word_limit`` words.

    The factor is an empirical words-to-tokens ratio, not a bound: replies are
    still truncated to ``word_limit`` words afterwards.
    """
    return math.ceil(word_limit * factor)


class ExplanationClient:
    """Simple chat-completion client."""

    def __init__(self, config: GenerationConfig):
        """Initialize the client.

        Args:
            config: Endpoint, key, model and timeout.
        """
        self.config = config
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            headers = {
                "Authorization": f"Bearer {self.config.api_key}",
                "Content-Type": "application/json",
            }
            timeout = aiohttp.ClientTimeout(total=self.config.timeout)
            self._session = aiohttp.ClientSession(headers=headers, timeout=timeout)
        return self._session

    def max_output_tokens(self, word_limit: int) -> int:
        return max_output_tokens(word_limit, self.config.token_factor)

    async def generate(self, prompt: str, max_tokens: int) -> str:
        """Generate a completion for ``prompt``.

        Args:
            prompt: User message sent to the model.
            max_tokens: Upper bound on generated tokens.

        Returns:
            Content of the first choice, or an empty string if there is none.

        Raises:
            GenerationError: If the request fails or the API returns an error.
        """
        payload = {
            "model": self.config.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": max_tokens,
        }

        try:
            async with self.session.post(self.config.api_url, json=payload) as response:
                if response.status != 200:
                    error_text = await response.text()
                    logger.error(f"Chat completion failed: {response.status} - {error_text}")
                    raise GenerationError(GENERATION_FAILED)

                data: Any = await response.json()

        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"Chat completion request failed: {e!r}")
            raise GenerationError(GENERATION_FAILED) from e

        if not isinstance(data, dict):
            logger.error(f"Chat completion returned unexpected body: {data!r}")
            raise GenerationError(GENERATION_FAILED)

        choices = data.get("choices") or []
        if not choices:
            logger.warning("Chat completion returned no choices")
            return ""

        content = (choices[0].get("message") or {}).get("content") or ""
        usage = data.get("usage") or {}
        logger.info(
            f"Chat completion: {len(content.split())} words, "
            f"{usage.get('completion_tokens', '?')}/{max_tokens} tokens"
        )
        return content

    async def close(self) -> None:
        """Close the shared HTTP session."""
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None
