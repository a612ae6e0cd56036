"""
Single-shot and multi-turn chat completions
Plain completions without function calling, returning trimmed text or an empty string on failure
"""

import logging
from typing import Iterable, Optional, Tuple

from ..exceptions import TransportError
from ..models import Message
from ..transport.http_client import ChatTransport

logger = logging.getLogger(__name__)


class ChatCompletionClient:
    """Best-effort chat completions over the shared transport"""

    def __init__(self, transport: ChatTransport, default_temperature: float = 0.0):
        self.transport = transport
        self.default_temperature = default_temperature

    async def complete_single(self, message: str, temperature: Optional[float] = None) -> str:
        """
        Send a single user message

        Args:
            message: User message
            temperature: Sampling temperature (defaults to the configured one)

        Returns:
            Trimmed response text, or "" on failure
        """
        logger.info("Sending single chat completion request.")
        try:
            result = await self.transport.complete(
                [Message(role="user", content=message)],
                temperature=self._temperature(temperature)
            )
        except TransportError as e:
            logger.error(f"Error in single chat completion: {e}")
            return ""

        logger.info("Received single chat completion response.")
        return result.final_text()

    async def complete_multi(self, messages: Iterable[Tuple[str, str]], temperature: Optional[float] = None) -> str:
        """
        Send a multi-turn conversation

        Args:
            messages: (role, content) pairs in conversation order
            temperature: Sampling temperature (defaults to the configured one)

        Returns:
            Trimmed response text, or "" on failure
        """
        conversation = [Message(role=role, content=content) for role, content in messages]

        logger.info(f"Sending multi-turn chat completion request ({len(conversation)} messages).")
        try:
            result = await self.transport.complete(conversation, temperature=self._temperature(temperature))
        except TransportError as e:
            logger.error(f"Error in multi-turn chat completion: {e}")
            return ""

        logger.info("Received multi-turn chat completion response.")
        return result.final_text()

    def _temperature(self, temperature: Optional[float]) -> float:
        return self.default_temperature if temperature is None else temperature
