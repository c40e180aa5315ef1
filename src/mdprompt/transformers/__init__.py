"""Record to payload transformers."""

from mdprompt.transformers.chat_request import ChatRequestTransformer

__all__ = ["ChatRequestTransformer"]
