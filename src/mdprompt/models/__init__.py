"""Data models for mdprompt."""

from mdprompt.models.document import Record
from mdprompt.models.request import ChatMessage, ChatOptions, ChatRequest

__all__ = ["Record", "ChatMessage", "ChatOptions", "ChatRequest"]
