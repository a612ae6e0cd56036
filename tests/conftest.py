"""Shared pytest fixtures for testing."""

import asyncio
import json
import os
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest
import pytest_asyncio
from pydantic import BaseModel

# Set test environment before importing the app
os.environ["AZURE_OPENAI_CHAT_URL"] = "https://chat.test/openai/deployments/gpt/chat/completions"
os.environ["AZURE_OPENAI_API_KEY"] = "test-key"
os.environ["AZURE_OPENAI_IMAGE_URL"] = "https://images.test/openai/images/generations"
os.environ["WEATHER_LATENCY"] = "0"

from cloudpipe.functions import FunctionCatalog, FunctionHandler, GetWeatherFunction
from cloudpipe.transport import ChatTransport

CHAT_URL = os.environ["AZURE_OPENAI_CHAT_URL"]


def completion_body(content: Optional[str] = None, function_call: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Build a chat completion response body"""
    message: Dict[str, Any] = {"role": "assistant", "content": content}
    if function_call is not None:
        message["function_call"] = function_call
    return {"choices": [{"index": 0, "message": message}]}


class FakeChatEndpoint:
    """
    Scripted chat endpoint for httpx.MockTransport

    Each queued item is either a response body dict, an httpx.Response,
    or an exception instance to raise.
    """

    def __init__(self, *replies):
        self.replies = list(replies)
        self.requests: List[Dict[str, Any]] = []
        self.headers: List[httpx.Headers] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(json.loads(request.content))
        self.headers.append(request.headers)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, httpx.Response):
            return reply
        return httpx.Response(200, json=reply)

    @property
    def call_count(self) -> int:
        return len(self.requests)


class StalledChatEndpoint(FakeChatEndpoint):
    """Scripted endpoint that never answers once its replies run out"""

    def __init__(self, *replies):
        super().__init__(*replies)
        self.stalled = asyncio.Event()

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        if self.replies:
            return super().__call__(request)

        self.requests.append(json.loads(request.content))
        self.headers.append(request.headers)
        self.stalled.set()
        await asyncio.Event().wait()


class NoArguments(BaseModel):
    pass


class BlockingFunction(FunctionHandler):
    """Function that blocks until its task is cancelled"""

    name = "Block"
    description = "Waits until cancelled"
    arguments_model = NoArguments

    def __init__(self):
        self.started = asyncio.Event()

    async def run(self, arguments):
        self.started.set()
        await asyncio.Event().wait()


@pytest_asyncio.fixture
async def make_transport():
    """Build ChatTransports backed by a scripted endpoint"""
    clients = []

    def _make(endpoint: Callable[[httpx.Request], httpx.Response], timeout: float = 5.0) -> ChatTransport:
        client = httpx.AsyncClient(transport=httpx.MockTransport(endpoint))
        clients.append(client)
        return ChatTransport(CHAT_URL, "test-key", timeout=timeout, client=client)

    yield _make

    for client in clients:
        await client.aclose()


@pytest.fixture
def catalog() -> FunctionCatalog:
    return FunctionCatalog([GetWeatherFunction(latency=0)])
