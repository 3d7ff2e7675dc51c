"""
Completion Service Client

The completion service is any OpenAI-compatible chat endpoint (Gemini's
OpenAI-compatible API by default), so we use the openai library.

The service gives no guarantee about the shape of its reply: callers get
raw text back and own all parsing.

Every call is bounded by a timeout. Transport errors, timeouts and empty
replies all surface as CompletionError so callers have one thing to catch.
"""
import asyncio
import logging
from typing import Optional

from openai import AsyncOpenAI, OpenAIError

from internmatch.core.config import get_settings

logger = logging.getLogger(__name__)


class CompletionError(Exception):
    """The completion service could not produce a usable reply."""


class CompletionClient:
    """
    Thin async wrapper around the chat completions endpoint.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        settings = get_settings()
        self.timeout = timeout if timeout is not None else settings.ai_timeout_seconds
        self.client = AsyncOpenAI(
            api_key=api_key if api_key is not None else settings.ai_api_key,
            base_url=base_url or settings.ai_base_url,
            # single attempt per call
            max_retries=0,
        )
        self.model = model or settings.ai_model

    async def complete(
        self,
        prompt: str,
        timeout: Optional[float] = None,
        max_tokens: int = 1500,
        temperature: float = 0.2,
    ) -> str:
        """
        Send a single-prompt completion and return the raw reply text.

        Raises:
            CompletionError: on transport failure, timeout or empty content
        """
        limit = timeout if timeout is not None else self.timeout
        try:
            response = await asyncio.wait_for(
                self.client.chat.completions.create(
                    model=self.model,
                    messages=[{"role": "user", "content": prompt}],
                    max_tokens=max_tokens,
                    temperature=temperature,
                ),
                timeout=limit,
            )
        except asyncio.TimeoutError as e:
            raise CompletionError(f"completion timed out after {limit}s") from e
        except OpenAIError as e:
            raise CompletionError(f"completion request failed: {e}") from e

        if not response.choices:
            raise CompletionError("completion returned no choices")
        content = response.choices[0].message.content
        if not content or not content.strip():
            raise CompletionError("completion returned empty content")
        return content

    async def test_connection(self) -> bool:
        """Test if the completion service is reachable"""
        try:
            reply = await self.complete("Reply with exactly: OK", max_tokens=10)
            return "OK" in reply.upper()
        except CompletionError as e:
            logger.warning("Completion service connection failed: %s", e)
            return False


# Singleton instance
_completion_client: CompletionClient = None


def get_completion_client() -> CompletionClient:
    """Get or create the completion client (singleton pattern)"""
    global _completion_client
    if _completion_client is None:
        _completion_client = CompletionClient()
    return _completion_client
