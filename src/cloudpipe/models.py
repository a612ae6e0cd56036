"""
Data models for Cloud Pipe
Conversation messages, function specs and completion results shared by every client
"""

import enum
from typing import Dict, Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MessageRole(str, enum.Enum):
    """Message role enum."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    FUNCTION = "function"


class OrchestrationState(str, enum.Enum):
    """States of the two-round function calling protocol."""
    START = "start"
    AWAITING_FIRST_RESPONSE = "awaiting_first_response"
    AWAITING_FUNCTION_RESULT = "awaiting_function_result"
    AWAITING_SECOND_RESPONSE = "awaiting_second_response"
    DONE = "done"


class Message(BaseModel):
    """A single role-tagged conversation message."""

    role: MessageRole
    content: str = ""
    name: Optional[str] = None

    @model_validator(mode="after")
    def _function_messages_are_named(self) -> "Message":
        if self.role == MessageRole.FUNCTION and not self.name:
            raise ValueError("function messages must carry the name of the function that produced them")
        return self

    def to_wire(self) -> Dict[str, Any]:
        """Serialise for a completion request body, dropping unset fields"""
        return self.model_dump(mode="json", exclude_none=True)


class FunctionSpec(BaseModel):
    """Declaration of a callable local function as offered to the model."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    parameters: Dict[str, Any] = Field(default_factory=lambda: {"type": "object", "properties": {}})

    def to_wire(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters
        }


class FunctionCallIntent(BaseModel):
    """A request from the model to run a named local function."""

    name: str
    # Left untyped: each function parses its own arguments
    arguments: Any = "{}"


class CompletionResult(BaseModel):
    """Normalised outcome of one completion round."""

    text: Optional[str] = None
    function_call: Optional[FunctionCallIntent] = None

    @property
    def has_function_call(self) -> bool:
        return self.function_call is not None

    def final_text(self) -> str:
        """Trimmed text, or an empty string when the model sent none"""
        return (self.text or "").strip()


class OrchestrationResult(BaseModel):
    """Typed outcome of a full function calling orchestration."""

    text: str = ""
    function_call: Optional[FunctionCallIntent] = None
    function_result: Optional[str] = None
    rounds: int = 1


Conversation = List[Message]
