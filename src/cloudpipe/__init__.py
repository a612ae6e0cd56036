"""
Cloud Pipe

Thin asynchronous clients for Azure OpenAI chat completion and image generation,
with a two-round function calling orchestrator.
"""

__version__ = "1.0.0"

from .exceptions import (
    CloudPipeError,
    TransportError,
    TransportTimeoutError,
    DispatchError,
    DuplicateNameError,
    FunctionNotFoundError,
    ImageGenerationError,
)
from .models import (
    Message,
    MessageRole,
    FunctionSpec,
    FunctionCallIntent,
    CompletionResult,
    OrchestrationResult,
    OrchestrationState,
)

__all__ = [
    "__version__",
    "CloudPipeError",
    "TransportError",
    "TransportTimeoutError",
    "DispatchError",
    "DuplicateNameError",
    "FunctionNotFoundError",
    "ImageGenerationError",
    "Message",
    "MessageRole",
    "FunctionSpec",
    "FunctionCallIntent",
    "CompletionResult",
    "OrchestrationResult",
    "OrchestrationState",
]
