"""
Chat Service - Sends the assembled prompt to a chat-completion API.

A single user-role message carries the whole prompt; no history is kept.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from repo_ask.core.exceptions import ChatCompletionError
from repo_ask.models.results import ChatResult

logger = logging.getLogger(__name__)


@dataclass
class ChatConfig:
    """Configuration for chat service."""
    model: str = "o1-mini"
    timeout_seconds: float = 120.0


class ChatService:
    """
    Wraps an OpenAI-compatible async client.

    Usage:
        service = ChatService(AsyncOpenAI(), ChatConfig(model="o1-mini"))
        result = await service.complete(prompt)
    """

    def __init__(self, client, config: Optional[ChatConfig] = None):
        self._client = client
        self.config = config or ChatConfig()

    async def complete(self, prompt: str) -> ChatResult:
        """
        Request a completion for ``prompt``.

        Returns:
            ChatResult with the first choice's text, or the error.
        """
        try:
            text = await asyncio.wait_for(
                self._request(prompt),
                timeout=self.config.timeout_seconds,
            )
        except asyncio.TimeoutError:
            error = f"Chat request timed out after {self.config.timeout_seconds}s"
            logger.error(f"Error calling chat API: {error}")
            return ChatResult(success=False, error=error)
        except Exception as e:
            logger.error(f"Error calling chat API: {e}")
            return ChatResult(success=False, error=str(e))

        return ChatResult(success=True, text=text)

    async def _request(self, prompt: str) -> str:
        response = await self._client.chat.completions.create(
            model=self.config.model,
            messages=[{"role": "user", "content": prompt}],
        )
        if not response.choices:
            raise ChatCompletionError("Chat response contained no choices")
        content = response.choices[0].message.content
        if content is None:
            raise ChatCompletionError("Chat response contained no text")
        return content
