"""
HTTP transport for Azure OpenAI chat completions
Sends one conversation per call and normalises the response into a CompletionResult
"""

import logging
from typing import Dict, Any, List, Optional

import httpx

from ..exceptions import TransportError, TransportTimeoutError
from ..models import CompletionResult, Conversation, FunctionCallIntent

logger = logging.getLogger(__name__)


class ChatTransport:
    """HTTP client for the chat completions endpoint (one request per round, no retries)"""

    def __init__(
        self,
        url: str,
        api_key: str,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.url = url
        self.api_key = api_key
        self.timeout = timeout
        self.client = client  # Created lazily unless injected
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the pooled HTTP client"""
        if self.client is None:
            self.client = httpx.AsyncClient(
                timeout=self.timeout,
                limits=httpx.Limits(
                    max_connections=20,
                    max_keepalive_connections=10
                )
            )
            logger.info(f"Created HTTP client for chat endpoint {self.url}")
        return self.client

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }

    @staticmethod
    def build_request_body(
        messages: Conversation,
        functions: Optional[List[Dict[str, Any]]] = None,
        temperature: Optional[float] = None
    ) -> Dict[str, Any]:
        """
        Build the JSON body of a completion request

        Args:
            messages: Conversation to send
            functions: Function declarations offered to the model, if any
            temperature: Optional sampling temperature

        Returns:
            Request body dict
        """
        body: Dict[str, Any] = {"messages": [message.to_wire() for message in messages]}

        if functions:
            body["functions"] = functions
            body["function_call"] = "auto"

        if temperature is not None:
            body["temperature"] = temperature

        return body

    @staticmethod
    def parse_response(data: Any) -> CompletionResult:
        """
        Normalise a completion response body

        Args:
            data: Decoded JSON body

        Returns:
            CompletionResult carrying either text or a function call intent

        Raises:
            TransportError: If the body does not have the expected shape
        """
        try:
            message = data["choices"][0]["message"]
        except (KeyError, IndexError, TypeError) as e:
            raise TransportError(f"Unexpected response shape: missing choices[0].message ({e!r})") from e

        if not isinstance(message, dict):
            raise TransportError("Unexpected response shape: choices[0].message is not an object")

        content = message.get("content")
        if content is not None and not isinstance(content, str):
            raise TransportError("Unexpected response shape: message content is not a string")

        function_call = message.get("function_call")
        if function_call is None:
            return CompletionResult(text=content)

        if not isinstance(function_call, dict) or not isinstance(function_call.get("name"), str):
            raise TransportError("Unexpected response shape: function_call has no name")

        intent = FunctionCallIntent(
            name=function_call["name"],
            arguments=function_call.get("arguments", "{}")
        )
        return CompletionResult(text=content, function_call=intent)

    async def complete(
        self,
        messages: Conversation,
        functions: Optional[List[Dict[str, Any]]] = None,
        temperature: Optional[float] = None
    ) -> CompletionResult:
        """
        Send a conversation to the completion endpoint

        Args:
            messages: Non-empty conversation
            functions: Function declarations to attach (omitted when empty)
            temperature: Optional sampling temperature

        Returns:
            Parsed CompletionResult

        Raises:
            ValueError: If the conversation is empty
            TransportError: On bad status, network fault or malformed response
        """
        if not messages:
            raise ValueError("Cannot send an empty conversation")

        body = self.build_request_body(messages, functions, temperature)
        client = await self._get_client()

        try:
            logger.debug(f"Posting {len(messages)} messages to {self.url} (functions: {len(functions or [])})")
            response = await client.post(
                self.url,
                json=body,
                headers=self._headers(),
                timeout=self.timeout
            )
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise TransportTimeoutError(f"Chat completion request timed out after {self.timeout}s") from e
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"Chat completion request failed: {e.response.text[:500]}",
                status_code=e.response.status_code
            ) from e
        except httpx.RequestError as e:
            raise TransportError(f"Chat completion request failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError
            raise TransportError(f"Chat completion response is not JSON: {e}") from e

        return self.parse_response(data)

    async def close(self):
        """Close the HTTP client if this transport created it"""
        if self.client and self._owns_client:
            await self.client.aclose()
            self.client = None
            logger.info("Chat transport HTTP client closed")
