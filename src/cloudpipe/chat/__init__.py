"""
Chat module for Cloud Pipe

This module handles chat functionality including:
- Two-round function calling orchestration
- Single-shot and multi-turn completions
- Chat endpoint logic
"""

from .orchestrator import ChatOrchestrator
from .completions import ChatCompletionClient
from .handler import (
    ChatHandler,
    ChatRequest,
    ChatResponse,
    SingleCompletionRequest,
    MultiCompletionRequest,
    CompletionResponse,
)

__all__ = [
    "ChatOrchestrator",
    "ChatCompletionClient",
    "ChatHandler",
    "ChatRequest",
    "ChatResponse",
    "SingleCompletionRequest",
    "MultiCompletionRequest",
    "CompletionResponse",
]
