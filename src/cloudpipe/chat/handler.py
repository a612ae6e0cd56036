"""
Chat endpoint handler for Cloud Pipe
Maps HTTP chat requests onto the orchestrator and the plain completion client
"""

import logging
from typing import List, Optional
from datetime import datetime

from fastapi import HTTPException
from pydantic import BaseModel

from ..exceptions import TransportError, TransportTimeoutError
from ..models import MessageRole
from .completions import ChatCompletionClient
from .orchestrator import ChatOrchestrator

logger = logging.getLogger(__name__)


class ChatRequest(BaseModel):
    message: str
    session_id: Optional[str] = None


class ChatResponse(BaseModel):
    response: str
    function_called: Optional[str] = None
    rounds: int
    session_id: Optional[str] = None
    timestamp: str


class SingleCompletionRequest(BaseModel):
    message: str
    temperature: Optional[float] = None


class ConversationTurn(BaseModel):
    role: MessageRole
    content: str


class MultiCompletionRequest(BaseModel):
    messages: List[ConversationTurn]
    temperature: Optional[float] = None


class CompletionResponse(BaseModel):
    response: str


class ChatHandler:
    """
    Handles chat endpoint functionality
    """

    def __init__(self, orchestrator: ChatOrchestrator, completion_client: ChatCompletionClient):
        self.orchestrator = orchestrator
        self.completion_client = completion_client

    async def handle_chat_request(self, request: ChatRequest) -> ChatResponse:
        """
        Handle a chat request with function calling

        Transport failures are surfaced as gateway errors rather than empty answers.

        Args:
            request: Chat request data

        Returns:
            Chat response with the final answer and the function used, if any
        """
        try:
            result = await self.orchestrator.run(request.message)
        except TransportTimeoutError as e:
            logger.error(f"Chat completion round {e.round} timed out: {e}")
            raise HTTPException(status_code=504, detail=f"Upstream timeout in round {e.round}")
        except TransportError as e:
            logger.error(f"Chat completion round {e.round} failed: {e}")
            raise HTTPException(status_code=502, detail=f"Upstream error in round {e.round}: {e}")

        return ChatResponse(
            response=result.text,
            function_called=result.function_call.name if result.function_call else None,
            rounds=result.rounds,
            session_id=request.session_id,
            timestamp=datetime.now().isoformat()
        )

    async def handle_single_request(self, request: SingleCompletionRequest) -> CompletionResponse:
        text = await self.completion_client.complete_single(request.message, request.temperature)
        return CompletionResponse(response=text)

    async def handle_multi_request(self, request: MultiCompletionRequest) -> CompletionResponse:
        if not request.messages:
            raise HTTPException(status_code=422, detail="At least one message is required")

        try:
            text = await self.completion_client.complete_multi(
                [(turn.role.value, turn.content) for turn in request.messages],
                request.temperature
            )
        except ValueError as e:
            # function-role turns need a name, which this endpoint does not accept
            raise HTTPException(status_code=422, detail=str(e))
        return CompletionResponse(response=text)
