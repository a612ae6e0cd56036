"""
Chat orchestration with function calling
Drives the two-round protocol: ask with functions attached, run the requested function, ask again for the answer
"""

import logging
from typing import Optional

from ..exceptions import TransportError, TransportTimeoutError
from ..functions.catalog import FunctionCatalog
from ..functions.dispatcher import FunctionDispatcher
from ..models import (
    Message,
    MessageRole,
    OrchestrationResult,
    OrchestrationState,
)
from ..transport.http_client import ChatTransport

logger = logging.getLogger(__name__)


class ChatOrchestrator:
    """
    Runs one function calling exchange per call

    Round 1 sends the user message with the catalog attached. If the model
    answers with a function call intent, the dispatcher runs it and round 2
    sends [user message, function result] without functions to get the final
    answer. Instances hold no per-call state and can serve concurrent calls.
    """

    def __init__(
        self,
        transport: ChatTransport,
        catalog: FunctionCatalog,
        dispatcher: Optional[FunctionDispatcher] = None
    ):
        self.transport = transport
        self.catalog = catalog
        self.dispatcher = dispatcher or FunctionDispatcher(catalog)

    def _transition(self, state: OrchestrationState, message: str):
        logger.info(message, extra={"orchestration_state": state.value})

    async def run(self, user_message: str) -> OrchestrationResult:
        """
        Run the protocol and return a typed result

        Args:
            user_message: The caller's message

        Returns:
            OrchestrationResult with the trimmed final text

        Raises:
            TransportError: If either round fails; error.round says which
            asyncio.CancelledError: If the calling task is cancelled
        """
        user = Message(role=MessageRole.USER, content=user_message)

        self._transition(
            OrchestrationState.START,
            f"Sending chat completion with function calling ({len(self.catalog)} functions)"
        )
        self._transition(OrchestrationState.AWAITING_FIRST_RESPONSE, "Awaiting first completion round")
        try:
            first = await self.transport.complete([user], functions=self.catalog.to_wire())
        except TransportError as e:
            e.round = 1
            raise

        if not first.has_function_call:
            self._transition(OrchestrationState.DONE, "No function call; returning model response")
            return OrchestrationResult(text=first.final_text(), rounds=1)

        intent = first.function_call
        self._transition(
            OrchestrationState.AWAITING_FUNCTION_RESULT,
            f"Function call detected: {intent.name}"
        )
        function_result = await self.dispatcher.invoke(intent.name, intent.arguments)

        follow_up = [
            user,
            Message(role=MessageRole.FUNCTION, name=intent.name, content=function_result)
        ]
        self._transition(
            OrchestrationState.AWAITING_SECOND_RESPONSE,
            f"Sending follow-up completion with result of {intent.name}"
        )
        try:
            second = await self.transport.complete(follow_up)
        except TransportError as e:
            e.round = 2
            raise

        self._transition(OrchestrationState.DONE, "Follow-up function response processed")
        return OrchestrationResult(
            text=second.final_text(),
            function_call=intent,
            function_result=function_result,
            rounds=2
        )

    async def orchestrate(self, user_message: str) -> str:
        """
        Fail-soft entry point

        Returns the final answer, or an empty string when a round fails.
        Cancellation is not swallowed.
        """
        try:
            result = await self.run(user_message)
        except TransportTimeoutError as e:
            logger.error(f"Chat completion round {e.round} timed out: {e}")
            return ""
        except TransportError as e:
            logger.error(f"Chat completion round {e.round} failed: {e}")
            return ""

        return result.text
