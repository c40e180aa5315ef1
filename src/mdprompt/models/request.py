"""Chat request payload models."""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class ChatMessage:
    """A single message in a chat conversation."""

    role: str
    content: str


@dataclass(frozen=True)
class ChatOptions:
    """Sampling options understood by the chat endpoint."""

    temperature: float
    num_ctx: int


@dataclass(frozen=True)
class ChatRequest:
    """Request body for a chat completion call."""

    model: str
    messages: list[ChatMessage]
    options: ChatOptions
    stream: bool = False

    def to_dict(self) -> dict:
        """Return the payload as plain JSON-ready data, keys in schema order."""
        return asdict(self)
