"""Messages, requests and tool definitions exchanged with a completion model."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any


class CompletionMessageRole(str, enum.Enum):
    """Chat message role as understood by chat completion APIs."""

    USER = "user"
    SYSTEM = "system"
    ASSISTANT = "assistant"
    TOOL = "tool"


@dataclass
class Usage:
    """Token accounting for a completion."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def _as_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.prompt_tokens:
            result["promptTokens"] = self.prompt_tokens
        if self.completion_tokens:
            result["completionTokens"] = self.completion_tokens
        if self.total_tokens:
            result["totalTokens"] = self.total_tokens
        return result


@dataclass
class CompletionFunctionCall:
    """The name and JSON arguments of a function the model wants called."""

    name: str = ""
    arguments: str = ""

    def _as_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.name:
            result["name"] = self.name
        if self.arguments:
            result["arguments"] = self.arguments
        return result


@dataclass
class CompletionToolCall:
    """A tool call requested by the model."""

    index: int | None = None
    id: str = ""
    function: CompletionFunctionCall = field(default_factory=CompletionFunctionCall)

    def _as_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.index is not None:
            result["index"] = self.index
        if self.id:
            result["id"] = self.id
        result["function"] = self.function._as_dict()
        return result


@dataclass
class ContentPart:
    """One piece of a message: text, a tool call, or both."""

    text: str = ""
    tool_call: CompletionToolCall | None = None

    def _as_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.text:
            result["text"] = self.text
        if self.tool_call is not None:
            result["toolCall"] = self.tool_call._as_dict()
        return result


@dataclass
class CompletionMessage:
    """A chat message.

    ``tool_call`` is set only on messages of role ``tool``; the first content
    part then holds the result of that call.
    """

    role: CompletionMessageRole | None = None
    content: list[ContentPart] = field(default_factory=list)
    tool_call: CompletionToolCall | None = None
    usage: Usage = field(default_factory=Usage)

    def chat_text(self) -> str:
        """Join the non-empty text parts with single spaces."""
        return " ".join(part.text for part in self.content if part.text)

    def is_tool_call(self) -> bool:
        """Whether any content part carries a tool call."""
        return any(part.tool_call is not None for part in self.content)

    def __str__(self) -> str:
        pieces = []
        for part in self.content:
            piece = part.text
            if part.tool_call is not None:
                fn = part.tool_call.function
                piece += f"<tool call> {fn.name} -> {fn.arguments}"
            pieces.append(piece)
        return "\n".join(pieces)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready form, leaving out empty fields."""
        result: dict[str, Any] = {}
        if self.role:
            result["role"] = CompletionMessageRole(self.role).value
        if self.content:
            result["content"] = [part._as_dict() for part in self.content]
        if self.tool_call is not None:
            result["toolCall"] = self.tool_call._as_dict()
        result["usage"] = self.usage._as_dict()
        return result


@dataclass
class CompletionFunctionDefinition:
    """A function offered to the model."""

    name: str = ""
    tool_id: str = ""
    description: str = ""
    parameters: dict[str, Any] | None = None

    def _as_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.tool_id:
            result["toolID"] = self.tool_id
        result["name"] = self.name
        if self.description:
            result["description"] = self.description
        result["parameters"] = self.parameters
        return result


@dataclass
class CompletionTool:
    """A tool offered to the model."""

    function: CompletionFunctionDefinition = field(
        default_factory=CompletionFunctionDefinition
    )

    def _as_dict(self) -> dict[str, Any]:
        return {"function": self.function._as_dict()}


@dataclass
class CompletionRequest:
    """A request for a completion."""

    model: str = ""
    internal_system_prompt: bool | None = None
    tools: list[CompletionTool] = field(default_factory=list)
    messages: list[CompletionMessage] = field(default_factory=list)
    max_tokens: int = 0
    chat: bool = False
    temperature: float | None = None
    json_response: bool = False
    cache: bool | None = None

    def cache_enabled(self) -> bool:
        """Caching is on unless explicitly turned off."""
        return True if self.cache is None else self.cache

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready form, leaving out empty fields."""
        result: dict[str, Any] = {}
        if self.model:
            result["model"] = self.model
        if self.internal_system_prompt is not None:
            result["internalSystemPrompt"] = self.internal_system_prompt
        if self.tools:
            result["tools"] = [tool._as_dict() for tool in self.tools]
        if self.messages:
            result["messages"] = [message.to_dict() for message in self.messages]
        if self.max_tokens:
            result["maxTokens"] = self.max_tokens
        if self.chat:
            result["chat"] = True
        if self.temperature is not None:
            result["temperature"] = self.temperature
        if self.json_response:
            result["jsonResponse"] = True
        if self.cache is not None:
            result["cache"] = self.cache
        return result


@dataclass
class CompletionStatus:
    """Progress of an in-flight completion."""

    completion_id: str = ""
    request: Any = None
    response: Any = None
    usage: Usage = field(default_factory=Usage)
    cached: bool = False
    chunks: Any = None
    partial_response: CompletionMessage | None = None


def text(text: str) -> list[ContentPart]:
    """Content made of a single text part."""
    return [ContentPart(text=text)]